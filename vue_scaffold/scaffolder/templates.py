"""Jinja2 template rendering for project scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``vue_scaffold/scaffolder/templates/`` directory and renders them with
project-specific context data.

Each top-level directory under the template root is one *template set*
(``axios``, ``vite``, ``git_hooks``...).  Inside a set, paths mirror the
generated project tree.  A path component starting with ``dot_`` is written
with a leading ``.`` instead (``dot_husky/pre-commit.j2`` -> ``.husky/pre-commit``),
which keeps hidden files visible to packaging tools.
"""

from __future__ import annotations

import asyncio
import re
from pathlib import Path, PurePosixPath
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from ..utils import write_text


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

_TEMPLATE_SUFFIX = ".j2"
_DOT_PREFIX = "dot_"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for project scaffolding.

    Templates are rendered with a context dictionary that typically contains
    project metadata (name, ports, API base URL).  Undefined variables raise
    instead of rendering as empty strings.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["slugify"] = slugify

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"vite/vite.config.ts.j2"``).
            context: Dictionary of variables available inside the template.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    async def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render a template and write the result to *output_path*.

        Parent directories are created automatically and an existing file is
        overwritten.
        """
        content = self.render(template_path, context)
        out = Path(output_path)
        await asyncio.to_thread(write_text, out, content)
        return out

    # -- Template sets -----------------------------------------------------

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all ``.j2`` template paths under *prefix*.

        Paths are relative to the template root and use forward slashes.
        """
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob(f"*{_TEMPLATE_SUFFIX}")
        )

    def output_paths(self, template_set: str) -> list[str]:
        """Return the project-relative output path of every template in a set."""
        return [
            output_name(PurePosixPath(key).relative_to(template_set).as_posix())
            for key in self.list_templates(template_set)
        ]

    async def render_tree(
        self,
        template_set: str,
        output_dir: str | Path,
        context: dict[str, Any],
    ) -> list[Path]:
        """Render every template in *template_set* under *output_dir*.

        The directory structure is preserved: ``vite/vite.config.ts.j2``
        rendered into ``/tmp/app`` writes ``/tmp/app/vite.config.ts``.

        Returns:
            List of written file paths, in template order.

        Raises:
            ValueError: If the template set does not exist or is empty.
        """
        keys = self.list_templates(template_set)
        if not keys:
            raise ValueError(f"Unknown or empty template set: {template_set!r}")

        out_base = Path(output_dir)
        written: list[Path] = []
        for key in keys:
            rel = PurePosixPath(key).relative_to(template_set).as_posix()
            path = await self.render_to_file(key, out_base / output_name(rel), context)
            written.append(path)
        return written


def output_name(template_rel_path: str) -> str:
    """Map a template-relative path to the generated file's relative path.

    Examples::

        output_name("src/main.ts.j2")        -> "src/main.ts"
        output_name("dot_husky/pre-commit.j2") -> ".husky/pre-commit"
    """
    parts = []
    for part in PurePosixPath(template_rel_path).parts:
        if part.startswith(_DOT_PREFIX):
            part = "." + part[len(_DOT_PREFIX):]
        parts.append(part)
    result = "/".join(parts)
    if result.endswith(_TEMPLATE_SUFFIX):
        result = result[: -len(_TEMPLATE_SUFFIX)]
    return result


# ---------------------------------------------------------------------------
# Jinja2 filters
# ---------------------------------------------------------------------------

def slugify(value: str) -> str:
    """Lower-case *value* and join its alphanumeric runs with hyphens.

    ``"My Vue_App!"`` becomes ``"my-vue-app"``; the result is a valid npm
    package name or empty.
    """
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")
