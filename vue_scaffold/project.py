"""Project location resolution and the initial ``npm create vue`` scaffold."""

from __future__ import annotations

import asyncio
import shutil
from dataclasses import dataclass
from pathlib import Path

from rich.prompt import Prompt

from .config import Config
from .utils import (
    ScaffoldError,
    console,
    expand_path,
    print_status,
    print_step,
    print_warning,
    run_checked,
)


class ProjectInfoError(ScaffoldError):
    """Raised when the project name or location is unusable."""

    def __init__(self, message: str) -> None:
        super().__init__(message, step="get_project_info")


@dataclass(frozen=True)
class ProjectInfo:
    """Name and location of the project being scaffolded."""

    name: str
    target_dir: Path

    @property
    def project_path(self) -> Path:
        return self.target_dir / self.name


def validate_project_name(name: str) -> str:
    """Return the stripped project name, or raise if it cannot be a directory."""
    cleaned = name.strip()
    if not cleaned:
        raise ProjectInfoError("Project name is required")
    if cleaned in (".", "..") or "/" in cleaned or "\\" in cleaned:
        raise ProjectInfoError(
            f"Invalid project name '{cleaned}': it must be a single directory name"
        )
    return cleaned


async def get_project_info(
    name: str | None = None,
    target: str | Path | None = None,
    *,
    interactive: bool = True,
) -> ProjectInfo:
    """Resolve the project name and target directory.

    Missing values are prompted for when *interactive* is set.  The target
    directory defaults to the current working directory, supports ``~``
    expansion, and is created if it does not exist.

    Raises:
        ProjectInfoError: If the name is empty or invalid, the target cannot
            be created, or ``target/name`` already exists.
    """
    if not name and interactive:
        name = Prompt.ask("Enter project name", default="", show_default=False)
    project_name = validate_project_name(name or "")

    target = str(target or "").strip()
    if not target:
        cwd = Path.cwd()
        if interactive:
            console.print()
            print_status("Where would you like to create the project?")
            console.print("  Enter full path (e.g., ~/Projects)")
            console.print(f"  Or press Enter for current directory: {cwd}")
            target = Prompt.ask("Target directory", default="", show_default=False)
        target = (target or "").strip() or str(cwd)

    target_dir = expand_path(target)

    if not target_dir.is_dir():
        print_status(f"Creating target directory: {target_dir}")
        try:
            await asyncio.to_thread(target_dir.mkdir, parents=True, exist_ok=True)
        except OSError as exc:
            raise ProjectInfoError(f"Failed to create directory: {target_dir}") from exc

    info = ProjectInfo(name=project_name, target_dir=target_dir)
    if info.project_path.exists():
        raise ProjectInfoError(f"Directory '{info.project_path}' already exists")

    print_status(f"Project will be created at: {info.project_path}")
    return info


async def create_vue_project(info: ProjectInfo, config: Config) -> list[Path]:
    """Run ``npm create vue`` in the target directory and prune boilerplate.

    Returns:
        The boilerplate paths that were removed.
    """
    print_step("Creating Vue project with Vite and TypeScript...")

    await run_checked(
        [
            "npm",
            "create",
            config.create_vue_package,
            info.name,
            "--",
            *config.create_vue_flags,
        ],
        cwd=info.target_dir,
        timeout=config.command_timeout,
    )

    if not info.project_path.is_dir():
        raise ScaffoldError(
            f"npm create finished but {info.project_path} was not created",
            step="create_vue_project",
        )

    print_status("Removing default boilerplate files...")
    removed = await asyncio.to_thread(
        remove_boilerplate, info.project_path, config.boilerplate_paths
    )
    if not removed and config.boilerplate_paths:
        print_warning("No default boilerplate files found to remove")

    print_status(f"Vue project created at: {info.project_path}")
    return removed


def remove_boilerplate(project_path: Path, relative_paths: list[str]) -> list[Path]:
    """Delete files or directories under *project_path*; missing ones are skipped."""
    removed: list[Path] = []
    for rel in relative_paths:
        path = project_path / rel
        if path.is_dir():
            shutil.rmtree(path)
        elif path.exists():
            path.unlink()
        else:
            continue
        removed.append(path)
    return removed
