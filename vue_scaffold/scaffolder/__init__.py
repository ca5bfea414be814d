"""vue-scaffold file emission -- renders the generated project's files.

This package holds the Jinja2 template sets for a Vue 3 + TypeScript + Vite
project (Tailwind CSS v4, Vuetify 3, Pinia, Vitest, Cypress) and the steps that
write them, patch ``package.json`` and install Git hooks.

Quick usage::

    from vue_scaffold.scaffolder import ProjectGenerator

    generator = ProjectGenerator("my-app", "/tmp/my-app")
    written = await generator.update_vite_config()
"""

from vue_scaffold.scaffolder.generator import TEMPLATE_SETS, ProjectGenerator
from vue_scaffold.scaffolder.git_hooks import setup_git_hooks
from vue_scaffold.scaffolder.package_scripts import (
    PackageJsonError,
    build_scripts,
    update_package_scripts,
)
from vue_scaffold.scaffolder.templates import TemplateRenderer

__all__ = [
    "PackageJsonError",
    "ProjectGenerator",
    "TEMPLATE_SETS",
    "TemplateRenderer",
    "build_scripts",
    "setup_git_hooks",
    "update_package_scripts",
]
