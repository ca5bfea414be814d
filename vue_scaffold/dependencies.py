"""npm dependency installation."""

from __future__ import annotations

from pathlib import Path

from .config import Config, DependencyGroup
from .utils import print_status, print_step, run_checked


async def install_dependencies(project_path: Path, config: Config) -> list[DependencyGroup]:
    """Install every configured dependency group inside *project_path*.

    Groups are installed one ``npm install`` call at a time, in order.  The
    first failing install raises ``CommandError`` and later groups are not
    attempted.

    Returns:
        The groups that were installed.
    """
    print_step("Installing additional dependencies...")

    installed: list[DependencyGroup] = []
    for group in config.dependency_groups:
        flag = " (dev)" if group.dev else ""
        print_status(f"{group.label}{flag}: {' '.join(group.packages)}")
        await run_checked(
            group.install_args(),
            cwd=project_path,
            timeout=config.command_timeout,
        )
        installed.append(group)

    print_status(f"Dependencies installed ({len(installed)} group(s))")
    return installed
