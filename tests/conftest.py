"""Shared pytest fixtures for the vue-scaffold test suite.

Provides reusable fixtures for:
- A fake Node.js / npm / git toolchain that stands in for real processes
- A project directory that looks like ``npm create vue`` output
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from vue_scaffold.config import Config


# ---------------------------------------------------------------------------
# create-vue output
# ---------------------------------------------------------------------------

CREATE_VUE_PACKAGE_JSON: dict[str, Any] = {
    "name": "placeholder",
    "version": "0.0.0",
    "private": True,
    "type": "module",
    "scripts": {
        "dev": "vite",
        "build": 'run-p type-check "build-only {@}" --',
        "preview": "vite preview",
        "test:unit": "vitest",
        "test:e2e": "start-server-and-test preview http://localhost:4173 'cypress run --e2e'",
        "build-only": "vite build",
        "type-check": "vue-tsc --build",
        "lint": "eslint . --fix",
        "format": "prettier --write src/",
    },
    "dependencies": {"pinia": "^3.0.0", "vue": "^3.5.0", "vue-router": "^4.5.0"},
}


def write_create_vue_output(project_path: Path) -> Path:
    """Write a minimal tree resembling what ``npm create vue`` produces."""
    (project_path / "src" / "components" / "icons").mkdir(parents=True)
    (project_path / "src" / "router").mkdir(parents=True)
    (project_path / "src" / "views").mkdir(parents=True)

    package = {**CREATE_VUE_PACKAGE_JSON, "name": project_path.name.lower()}
    (project_path / "package.json").write_text(json.dumps(package, indent=2), encoding="utf-8")
    (project_path / "src" / "components" / "TheWelcome.vue").write_text("<template />\n")
    (project_path / "src" / "components" / "WelcomeItem.vue").write_text("<template />\n")
    (project_path / "src" / "components" / "icons" / "IconDocs.vue").write_text("<template />\n")
    (project_path / "src" / "router" / "index.ts").write_text("export default {}\n")
    (project_path / "src" / "main.ts").write_text("// create-vue main\n")
    (project_path / "vite.config.ts").write_text("// create-vue vite config\n")
    return project_path


@pytest.fixture
def create_vue_project_dir(tmp_path: Path) -> Path:
    """A project directory already populated by a (fake) ``npm create vue``."""
    return write_create_vue_output(tmp_path / "demo-app")


# ---------------------------------------------------------------------------
# Fake toolchain
# ---------------------------------------------------------------------------

class FakeToolchain:
    """Stand-in for ``vue_scaffold.utils.run_command`` and ``shutil.which``.

    Every invocation is recorded in ``calls`` as ``(argv, cwd)``.  Commands
    with a filesystem effect (``npm create``, ``git init``, ``npx husky
    init``) reproduce that effect so later steps see a realistic tree.
    """

    def __init__(self) -> None:
        self.node_version = "v20.11.1"
        self.npm_version = "10.2.4"
        self.git_version = "git version 2.43.0"
        self.missing: set[str] = set()
        self.failures: dict[str, tuple[int, str]] = {}
        self.calls: list[tuple[list[str], Path | None]] = []

    def which(self, name: str) -> str | None:
        return None if name in self.missing else f"/usr/bin/{name}"

    def fail(self, prefix: str, returncode: int = 1, stderr: str = "boom") -> None:
        """Make any command whose joined argv starts with *prefix* fail."""
        self.failures[prefix] = (returncode, stderr)

    def commands(self) -> list[str]:
        return [" ".join(argv) for argv, _ in self.calls]

    async def run_command(
        self,
        cmd: list[str],
        cwd: str | Path | None = None,
        timeout: int = 600,
        env: dict[str, str] | None = None,
    ) -> tuple[int, str, str]:
        cwd_path = Path(cwd) if cwd else None
        self.calls.append((list(cmd), cwd_path))
        joined = " ".join(cmd)

        for prefix, (returncode, stderr) in self.failures.items():
            if joined.startswith(prefix):
                return (returncode, "", stderr)

        if cmd[:2] == ["node", "--version"]:
            return (0, self.node_version, "")
        if cmd[:2] == ["npm", "--version"]:
            return (0, self.npm_version, "")
        if cmd[:2] == ["git", "--version"]:
            return (0, self.git_version, "")
        if cmd[:2] == ["npm", "create"]:
            assert cwd_path is not None
            write_create_vue_output(cwd_path / cmd[3])
            return (0, "Scaffolding project...", "")
        if cmd[:2] == ["git", "init"]:
            assert cwd_path is not None
            (cwd_path / ".git").mkdir(exist_ok=True)
            return (0, "Initialized empty Git repository", "")
        if cmd[:3] == ["npx", "husky", "init"]:
            assert cwd_path is not None
            (cwd_path / ".husky").mkdir(exist_ok=True)
            (cwd_path / ".husky" / "pre-commit").write_text("npm test\n")
            return (0, "", "")
        return (0, "", "")


@pytest.fixture
def fake_toolchain():
    """Patch process execution and executable lookup with a ``FakeToolchain``.

    Usage:
        async def test_run(fake_toolchain):
            fake_toolchain.node_version = "v16.20.0"
            ...
            assert "npm --version" not in fake_toolchain.commands()
    """
    fake = FakeToolchain()
    with patch("vue_scaffold.utils.run_command", side_effect=fake.run_command), patch(
        "vue_scaffold.prerequisites.shutil.which", side_effect=fake.which
    ):
        yield fake


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

@pytest.fixture
def config() -> Config:
    """Default configuration."""
    return Config()
