"""``package.json`` script injection."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

from ..config import Config
from ..utils import ScaffoldError, print_status, print_step


class PackageJsonError(ScaffoldError):
    """Raised when ``package.json`` is missing or not a JSON object."""

    def __init__(self, message: str) -> None:
        super().__init__(message, step="update_package_scripts")


def build_scripts(config: Config | None = None) -> dict[str, str]:
    """Return the npm script table merged into ``package.json``."""
    preview_port = (config or Config()).preview_port
    preview_url = f"http://localhost:{preview_port}"
    return {
        "dev": "vite",
        "build": 'run-p type-check "build-only {@}" --',
        "preview": "vite preview",
        "test:unit": "vitest",
        "test:unit:ui": "vitest --ui",
        "test:unit:watch": "vitest --watch",
        "test:e2e": f'start-server-and-test preview {preview_url} "cypress run --e2e"',
        "test:e2e:dev": (
            f'start-server-and-test "vite dev --port {preview_port}" '
            f'{preview_url} "cypress open --e2e"'
        ),
        "test:coverage": "vitest run --coverage",
        "build-only": "vite build",
        "type-check": "vue-tsc --build --force",
        "lint": "eslint . --fix",
        "format": "prettier --write src/",
    }


def merge_scripts(package: dict[str, Any], scripts: dict[str, str]) -> dict[str, Any]:
    """Return a copy of *package* with *scripts* laid over its ``scripts`` table.

    Existing script names not in *scripts* are kept; names in both take the
    new value.  Key order of the rest of the document is preserved.
    """
    existing = package.get("scripts") or {}
    if not isinstance(existing, dict):
        raise PackageJsonError("'scripts' in package.json is not an object")
    return {**package, "scripts": {**existing, **scripts}}


def _patch_file(path: Path, scripts: dict[str, str]) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise PackageJsonError(f"package.json not found: {path}") from exc

    try:
        package = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise PackageJsonError(f"package.json is not valid JSON: {exc}") from exc
    if not isinstance(package, dict):
        raise PackageJsonError("package.json must contain a JSON object")

    updated = merge_scripts(package, scripts)
    path.write_text(json.dumps(updated, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return updated


async def update_package_scripts(
    project_path: Path, config: Config | None = None
) -> dict[str, Any]:
    """Merge the standard script table into ``<project_path>/package.json``.

    Returns:
        The updated package document.
    """
    print_step("Updating package.json scripts...")
    updated = await asyncio.to_thread(
        _patch_file, Path(project_path) / "package.json", build_scripts(config)
    )
    print_status("Package.json scripts updated")
    return updated
