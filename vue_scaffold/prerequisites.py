"""Toolchain prerequisite checks.

Probes the Node.js, npm, and (optionally) git executables before anything is
written to disk, and returns the detected versions as a typed report.
"""

from __future__ import annotations

import re
import shutil

from pydantic import BaseModel

from .config import Config
from .utils import ScaffoldError, print_status, print_step, run_checked


class PrerequisiteError(ScaffoldError):
    """Raised when a required tool is missing or too old."""

    def __init__(self, message: str) -> None:
        super().__init__(message, step="check_prerequisites")


class PrerequisiteReport(BaseModel):
    """Versions of the external tools the scaffold depends on."""

    node_version: str
    node_major: int
    npm_version: str
    git_version: str | None = None


_NODE_VERSION_RE = re.compile(r"^\s*v?(\d+)(?:\.\d+)*")


def parse_node_major(version: str) -> int:
    """Extract the major version from ``node --version`` output.

    Examples::

        parse_node_major("v20.11.1") -> 20
        parse_node_major("18.0.0")   -> 18

    Raises:
        PrerequisiteError: If the string does not start with a version number.
    """
    match = _NODE_VERSION_RE.match(version)
    if not match:
        raise PrerequisiteError(f"Unable to parse Node.js version: {version!r}")
    return int(match.group(1))


async def check_prerequisites(config: Config) -> PrerequisiteReport:
    """Verify that Node.js (>= ``config.node_min_major``) and npm are installed.

    git is also required when ``config.setup_git`` is enabled, since the
    hook step runs ``git init``.

    Raises:
        PrerequisiteError: On the first missing or outdated tool.
    """
    print_step("Checking prerequisites...")

    if shutil.which("node") is None:
        raise PrerequisiteError(
            f"Node.js is required but not installed. "
            f"Please install Node.js {config.node_min_major}+ first."
        )
    if shutil.which("npm") is None:
        raise PrerequisiteError("npm is required but not installed.")

    node_version = await run_checked(["node", "--version"], timeout=30)
    node_major = parse_node_major(node_version)
    if node_major < config.node_min_major:
        raise PrerequisiteError(
            f"Node.js {config.node_min_major}+ is required. "
            f"Current version: {node_version}"
        )

    npm_version = await run_checked(["npm", "--version"], timeout=30)

    git_version: str | None = None
    if config.setup_git:
        if shutil.which("git") is None:
            raise PrerequisiteError(
                "git is required for hook setup but not installed "
                "(pass --no-git to skip it)."
            )
        git_version = await run_checked(["git", "--version"], timeout=30)

    print_status(f"Node.js {node_version}, npm {npm_version}")
    print_status("Prerequisites check passed")

    return PrerequisiteReport(
        node_version=node_version,
        node_major=node_major,
        npm_version=npm_version,
        git_version=git_version,
    )
