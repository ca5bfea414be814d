"""vue-scaffold configuration.

Centralised, typed configuration for a scaffolding run. All settings use
Pydantic v2 models so they can be validated at construction time and serialised
to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class DependencyGroup(BaseModel):
    """A batch of npm packages installed with a single ``npm install`` call."""

    label: str
    packages: list[str] = Field(..., min_length=1)
    dev: bool = Field(default=False, description="Install with -D (devDependencies)")

    def install_args(self) -> list[str]:
        """Return the ``npm`` argument list for this group."""
        args = ["npm", "install"]
        if self.dev:
            args.append("-D")
        return args + list(self.packages)


DEFAULT_DEPENDENCY_GROUPS: list[DependencyGroup] = [
    DependencyGroup(
        label="Tailwind CSS v4",
        packages=["tailwindcss", "@tailwindcss/vite"],
        dev=True,
    ),
    DependencyGroup(label="Vuetify 3", packages=["vuetify", "@mdi/font"]),
    DependencyGroup(label="Vuetify Vite plugin", packages=["vite-plugin-vuetify"], dev=True),
    DependencyGroup(label="HTTP client", packages=["axios"]),
    DependencyGroup(
        label="TypeScript tooling",
        packages=[
            "@types/node",
            "typescript",
            "@typescript-eslint/eslint-plugin",
            "@typescript-eslint/parser",
        ],
        dev=True,
    ),
    DependencyGroup(
        label="ESLint plugins",
        packages=["@eslint/js", "eslint-plugin-vue", "vue-eslint-parser"],
        dev=True,
    ),
    DependencyGroup(
        label="Unit testing",
        packages=[
            "@vue/test-utils@latest",
            "jsdom",
            "vitest",
            "@vitest/ui",
            "@vitest/coverage-v8",
        ],
        dev=True,
    ),
    DependencyGroup(
        label="E2E testing",
        packages=["@cypress/vite-dev-server", "start-server-and-test"],
        dev=True,
    ),
    DependencyGroup(label="HTTP mocking", packages=["axios-mock-adapter"], dev=True),
    DependencyGroup(label="Composition utilities", packages=["@vueuse/core"], dev=True),
    DependencyGroup(
        label="Git hooks",
        packages=[
            "husky",
            "lint-staged",
            "@commitlint/config-conventional",
            "@commitlint/cli",
        ],
        dev=True,
    ),
]

DEFAULT_CREATE_VUE_FLAGS: list[str] = [
    "--typescript",
    "--jsx",
    "--router",
    "--pinia",
    "--vitest",
    "--cypress",
    "--eslint",
    "--prettier",
]

# Files generated by create-vue that the scaffold replaces or does not use.
DEFAULT_BOILERPLATE_PATHS: list[str] = [
    "src/components/TheWelcome.vue",
    "src/components/WelcomeItem.vue",
    "src/components/icons",
]


class Config(BaseModel):
    """Global vue-scaffold configuration.

    Instances are typically created once by the CLI entry point and then
    passed through every pipeline step.
    """

    node_min_major: int = Field(default=18, ge=1)
    create_vue_package: str = Field(default="vue@latest")
    create_vue_flags: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CREATE_VUE_FLAGS)
    )
    dependency_groups: list[DependencyGroup] = Field(
        default_factory=lambda: [g.model_copy(deep=True) for g in DEFAULT_DEPENDENCY_GROUPS]
    )
    boilerplate_paths: list[str] = Field(
        default_factory=lambda: list(DEFAULT_BOILERPLATE_PATHS)
    )
    dev_port: int = Field(default=3000, ge=1, le=65535)
    preview_port: int = Field(default=4173, ge=1, le=65535)
    api_base_url: str = Field(default="http://localhost:8000/api")
    install_dependencies: bool = Field(default=True)
    setup_git: bool = Field(default=True)
    command_timeout: int = Field(
        default=600, ge=10, description="Per-command timeout in seconds"
    )

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            VUE_SCAFFOLD_NODE_MIN_MAJOR, VUE_SCAFFOLD_DEV_PORT,
            VUE_SCAFFOLD_API_BASE_URL, VUE_SCAFFOLD_SKIP_INSTALL,
            VUE_SCAFFOLD_NO_GIT, VUE_SCAFFOLD_COMMAND_TIMEOUT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("VUE_SCAFFOLD_NODE_MIN_MAJOR"):
            kwargs["node_min_major"] = int(os.environ["VUE_SCAFFOLD_NODE_MIN_MAJOR"])
        if os.environ.get("VUE_SCAFFOLD_DEV_PORT"):
            kwargs["dev_port"] = int(os.environ["VUE_SCAFFOLD_DEV_PORT"])
        if os.environ.get("VUE_SCAFFOLD_API_BASE_URL"):
            kwargs["api_base_url"] = os.environ["VUE_SCAFFOLD_API_BASE_URL"]
        if os.environ.get("VUE_SCAFFOLD_COMMAND_TIMEOUT"):
            kwargs["command_timeout"] = int(os.environ["VUE_SCAFFOLD_COMMAND_TIMEOUT"])
        if _env_flag("VUE_SCAFFOLD_SKIP_INSTALL"):
            kwargs["install_dependencies"] = False
        if _env_flag("VUE_SCAFFOLD_NO_GIT"):
            kwargs["setup_git"] = False
        return cls(**kwargs)


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")
