"""Template emission for the generated Vue project.

Each public coroutine on ``ProjectGenerator`` writes one template set into the
project root and returns the written paths.  The sets are independent: every
call overwrites its own files and depends on nothing but the project
directory existing.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from ..config import Config
from ..utils import print_status, print_step
from .templates import TemplateRenderer, slugify


# Template set name -> (step header, completion message)
TEMPLATE_SETS: dict[str, tuple[str, str]] = {
    "axios": ("Setting up Axios configuration...", "Axios configuration created"),
    "tailwind": (
        "Setting up Tailwind CSS v4 with Vite plugin...",
        "Tailwind CSS v4 configured with Vite plugin",
    ),
    "vuetify": ("Setting up Vuetify...", "Vuetify configured"),
    "vite": ("Updating Vite configuration...", "Vite configuration updated"),
    "typescript": (
        "Setting up strict TypeScript configuration...",
        "TypeScript configuration updated",
    ),
    "eslint": ("Setting up ESLint with modern flat config...", "ESLint flat config created"),
    "testing": ("Setting up testing configuration...", "Testing configuration updated"),
    "main": ("Updating main.ts...", "main.ts updated"),
    "app": ("Updating App.vue to use custom components...", "App.vue updated"),
    "views": ("Updating router views...", "Router views updated"),
    "components": ("Creating example components...", "Example components created"),
    "tests": ("Creating comprehensive tests...", "Tests created"),
    "git_hooks": ("Writing Git hook configuration...", "Git hook files written"),
    "docs": ("Creating development documentation...", "Documentation created"),
}


class ProjectGenerator:
    """Writes the scaffold's configuration, source, test, and doc files.

    Given a project name and a ``Config``, renders the Jinja2 template sets
    into ``project_path``:
    - Axios instance, API services, ``useApi`` composable, ``.env.example``
    - Tailwind CSS v4 entry stylesheet and Vuetify plugin
    - Vite, TypeScript, ESLint, Vitest and Cypress configuration
    - ``main.ts``, ``App.vue``, router views, example component and store
    - Example unit and integration specs
    - Husky hooks, lint-staged and commitlint config
    - README
    """

    def __init__(
        self,
        project_name: str,
        project_path: str | Path,
        config: Config | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.project_name = project_name
        self.project_path = Path(project_path)
        self.config = config or Config()
        self.renderer = renderer or TemplateRenderer()

    # -- Context building --------------------------------------------------

    def build_context(self) -> dict[str, Any]:
        """Build the Jinja2 template context from the project settings."""
        return {
            "project_name": self.project_name,
            "project_name_slug": slugify(self.project_name) or "app",
            "app_title": _title_case(self.project_name),
            "dev_port": self.config.dev_port,
            "preview_port": self.config.preview_port,
            "api_base_url": self.config.api_base_url,
            "node_min_major": self.config.node_min_major,
        }

    # -- Generic set rendering ---------------------------------------------

    async def render_set(self, template_set: str) -> list[Path]:
        """Render one template set into the project root."""
        header, done = TEMPLATE_SETS[template_set]
        print_step(header)
        written = await self.renderer.render_tree(
            template_set, self.project_path, self.build_context()
        )
        for path in written:
            print_status(f"  wrote {path.relative_to(self.project_path).as_posix()}")
        print_status(done)
        return written

    def planned_files(self, template_set: str) -> list[str]:
        """Project-relative paths a template set would write."""
        return self.renderer.output_paths(template_set)

    # -- Configuration -----------------------------------------------------

    async def setup_axios(self) -> list[Path]:
        """Axios instance, typed services, ``useApi`` composable, env example."""
        return await self.render_set("axios")

    async def setup_tailwind(self) -> list[Path]:
        """Tailwind v4 needs no config file; only the CSS entry point."""
        return await self.render_set("tailwind")

    async def setup_vuetify(self) -> list[Path]:
        return await self.render_set("vuetify")

    async def update_vite_config(self) -> list[Path]:
        return await self.render_set("vite")

    async def setup_typescript(self) -> list[Path]:
        return await self.render_set("typescript")

    async def setup_eslint(self) -> list[Path]:
        return await self.render_set("eslint")

    async def setup_testing(self) -> list[Path]:
        """Vitest config, jsdom browser-API shims, Cypress config."""
        return await self.render_set("testing")

    # -- Source files ------------------------------------------------------

    async def update_main_ts(self) -> list[Path]:
        return await self.render_set("main")

    async def update_app_vue(self) -> list[Path]:
        return await self.render_set("app")

    async def update_router_views(self) -> list[Path]:
        return await self.render_set("views")

    async def create_example_components(self) -> list[Path]:
        return await self.render_set("components")

    async def create_tests(self) -> list[Path]:
        return await self.render_set("tests")

    # -- Finalisation ------------------------------------------------------

    async def write_git_hook_files(self) -> list[Path]:
        """Husky hooks plus lint-staged/commitlint config (no git commands)."""
        return await self.render_set("git_hooks")

    async def create_documentation(self) -> list[Path]:
        return await self.render_set("docs")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _title_case(name: str) -> str:
    """Turn ``my-vue_app`` or ``MyVueApp`` into ``My Vue App``."""
    spaced = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", name)
    words = [w for w in re.split(r"[-_\s]+", spaced) if w]
    return " ".join(w[:1].upper() + w[1:] for w in words) or name
