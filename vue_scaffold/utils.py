"""Shared utility functions for vue-scaffold.

Provides async command execution, the scaffold exception hierarchy, file-system
helpers, and Rich-based progress reporting.
"""

from __future__ import annotations

import asyncio
import os
import stat
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ScaffoldError(Exception):
    """Raised when a scaffolding step fails irrecoverably."""

    def __init__(self, message: str, step: str = "") -> None:
        self.step = step
        self.message = message
        super().__init__(f"{step}: {message}" if step else message)


class CommandError(ScaffoldError):
    """Raised when an external command exits non-zero or times out."""

    def __init__(
        self,
        message: str,
        command: str = "",
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: int = 600,
    env: dict[str, str] | None = None,
) -> tuple[int, str, str]:
    """Run a command asynchronously and capture its output.

    Args:
        cmd: Argument list; the first element is the executable.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.
        env: Optional extra environment variables merged on top of ``os.environ``.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  A timeout is reported as
        returncode ``-1``.
    """
    merged_env: dict[str, str] | None = None
    if env:
        merged_env = {**os.environ, **env}

    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        stdin=asyncio.subprocess.DEVNULL,
        cwd=str(cwd) if cwd else None,
        env=merged_env,
    )

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return (-1, "", f"Command timed out after {timeout}s: {' '.join(cmd)}")

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return (process.returncode or 0, stdout_str, stderr_str)


async def run_checked(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: int = 600,
    env: dict[str, str] | None = None,
) -> str:
    """Run a command and return its stdout.

    Raises:
        CommandError: If the executable is missing, the command exits with a
            non-zero code, or it times out.
    """
    cmd_str = " ".join(cmd)
    try:
        returncode, stdout, stderr = await run_command(
            cmd, cwd=cwd, timeout=timeout, env=env
        )
    except FileNotFoundError as exc:
        raise CommandError(
            f"Executable not found: {cmd[0]}", command=cmd_str
        ) from exc

    if returncode == -1 and "timed out" in stderr:
        raise CommandError(stderr, command=cmd_str, returncode=returncode, stderr=stderr)
    if returncode != 0:
        detail = stderr or stdout
        raise CommandError(
            f"Command failed (exit {returncode}): {cmd_str}\n{detail}".rstrip(),
            command=cmd_str,
            returncode=returncode,
            stderr=stderr,
        )
    return stdout


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def expand_path(raw: str | Path) -> Path:
    """Expand a leading ``~`` and make the path absolute.

    Examples::

        expand_path("~/Projects") -> Path("/home/me/Projects")
        expand_path("apps")       -> Path("<cwd>/apps")
    """
    return Path(os.path.expanduser(str(raw))).absolute()


def write_text(path: Path, content: str) -> None:
    """Create parent dirs and write *content* to *path*."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def make_executable(path: Path) -> None:
    """Set the executable bit on a file."""
    current = path.stat().st_mode
    path.chmod(current | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a human-readable string.

    Examples::

        format_duration(3.7)    -> "3.7s"
        format_duration(65.2)   -> "1m 5s"
        format_duration(3661.0) -> "1h 1m 1s"
    """
    if seconds < 0:
        return "0.0s"

    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = seconds % 60

    parts: list[str] = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")

    if hours > 0 or minutes > 0:
        parts.append(f"{int(secs)}s")
    else:
        parts.append(f"{secs:.1f}s")

    return " ".join(parts)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_step(message: str) -> None:
    """Print a step header."""
    console.print()
    console.print(Rule(f"[bold cyan]{message}[/bold cyan]", style="cyan", align="left"))


def print_status(message: str) -> None:
    """Print a green status line."""
    console.print(f"[green]\\[INFO][/green] {message}")


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message. *message* is printed literally."""
    console.print(f"[bold red]\\[ERROR][/bold red] {escape(message)}")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]\\[WARNING][/bold yellow] {message}")


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()
