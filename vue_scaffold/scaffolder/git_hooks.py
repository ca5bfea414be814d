"""Git repository and Husky hook setup."""

from __future__ import annotations

import asyncio
from pathlib import Path

from ..config import Config
from ..utils import make_executable, print_status, print_step, run_checked
from .generator import ProjectGenerator

HOOK_FILES: tuple[str, ...] = (".husky/pre-commit", ".husky/commit-msg")


async def setup_git_hooks(generator: ProjectGenerator, config: Config) -> list[Path]:
    """Initialise git (if needed), install Husky, and write hook files.

    ``npx husky init`` creates its own ``.husky/pre-commit``; the template set
    is rendered afterwards so the scaffold's hooks replace it.

    Returns:
        The hook and config files written.
    """
    project_path = generator.project_path
    print_step("Setting up Git hooks...")

    if not (project_path / ".git").exists():
        await run_checked(["git", "init"], cwd=project_path, timeout=60)
        print_status("Initialised git repository")

    await run_checked(
        ["npx", "husky", "init"], cwd=project_path, timeout=config.command_timeout
    )

    written = await generator.write_git_hook_files()
    for rel in HOOK_FILES:
        hook = project_path / rel
        if hook.exists():
            await asyncio.to_thread(make_executable, hook)

    print_status("Git hooks configured with Husky")
    return written
