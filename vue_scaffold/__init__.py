"""vue-scaffold -- scaffolds a Vue 3 + TypeScript + Vite frontend project.

The scaffold runs ``npm create vue``, installs Tailwind CSS v4, Vuetify 3,
Axios and the test toolchain, then writes configuration, example source,
example specs, Git hooks and a README from Jinja2 template sets.

Quick usage::

    import asyncio
    from vue_scaffold import Config, Pipeline

    state = asyncio.run(Pipeline(Config(), "my-app", "~/Projects").run())
"""

from vue_scaffold.config import Config, DependencyGroup
from vue_scaffold.pipeline import Pipeline, Step
from vue_scaffold.utils import CommandError, ScaffoldError

__version__ = "0.1.0"

__all__ = [
    "CommandError",
    "Config",
    "DependencyGroup",
    "Pipeline",
    "ScaffoldError",
    "Step",
]
