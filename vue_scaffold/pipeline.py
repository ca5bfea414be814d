"""vue-scaffold pipeline orchestrator.

Runs the scaffold as an ordered list of steps, stopping at the first failure:

    check_prerequisites -> get_project_info -> create_vue_project ->
    install_dependencies -> configuration files -> test setup ->
    source files -> example tests -> package.json scripts ->
    git hooks -> documentation

Usage::

    vue-scaffold my-app ~/Projects
    python -m vue_scaffold my-app --skip-install --no-git
"""

from __future__ import annotations

import asyncio
import sys
import time
import traceback
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from rich.panel import Panel

from vue_scaffold.config import Config
from vue_scaffold.dependencies import install_dependencies
from vue_scaffold.prerequisites import PrerequisiteReport, check_prerequisites
from vue_scaffold.project import ProjectInfo, create_vue_project, get_project_info
from vue_scaffold.scaffolder import (
    ProjectGenerator,
    setup_git_hooks,
    update_package_scripts,
)
from vue_scaffold.utils import (
    ScaffoldError,
    console,
    format_duration,
    print_error,
    print_status,
    print_success,
    print_summary_table,
)


@dataclass(frozen=True)
class Step:
    """One named unit of the scaffold, executed in list order."""

    name: str
    description: str
    run: Callable[[], Awaitable[Any]]
    template_set: str | None = None


# Template-emitting steps in execution order: (step name, generator method, set)
_TEMPLATE_STEPS: list[tuple[str, str, str]] = [
    ("setup_axios", "setup_axios", "axios"),
    ("setup_tailwind", "setup_tailwind", "tailwind"),
    ("setup_vuetify", "setup_vuetify", "vuetify"),
    ("update_vite_config", "update_vite_config", "vite"),
    ("setup_typescript", "setup_typescript", "typescript"),
    ("setup_eslint", "setup_eslint", "eslint"),
    ("setup_testing", "setup_testing", "testing"),
    ("update_main_ts", "update_main_ts", "main"),
    ("update_app_vue", "update_app_vue", "app"),
    ("update_router_views", "update_router_views", "views"),
    ("create_example_components", "create_example_components", "components"),
    ("create_tests", "create_tests", "tests"),
]


class Pipeline:
    """vue-scaffold pipeline orchestrator.

    Attributes:
        config: Scaffold configuration.
        state: Accumulated run results (completed steps, written files,
            per-step durations, ``success``).
        info: Resolved project location, set by the ``get_project_info`` step.
    """

    def __init__(
        self,
        config: Config,
        project_name: str | None = None,
        target_dir: str | Path | None = None,
        *,
        interactive: bool = True,
    ) -> None:
        self.config = config
        self.project_name = project_name
        self.target_dir = target_dir
        self.interactive = interactive
        self.info: ProjectInfo | None = None
        self.prerequisites: PrerequisiteReport | None = None
        self._generator: ProjectGenerator | None = None
        self.state: dict[str, Any] = {
            "started_at": datetime.now(timezone.utc).isoformat(),
            "steps_completed": [],
            "steps_failed": [],
            "files_written": [],
            "durations": {},
            "success": False,
        }

    # ------------------------------------------------------------------
    # Step list
    # ------------------------------------------------------------------

    @property
    def generator(self) -> ProjectGenerator:
        if self._generator is None:
            if self.info is None:
                raise ScaffoldError("project location has not been resolved yet")
            self._generator = ProjectGenerator(
                self.info.name, self.info.project_path, self.config
            )
        return self._generator

    def build_steps(self) -> list[Step]:
        """Return the ordered steps for this run's configuration."""
        steps = [
            Step("check_prerequisites", "Check Node.js and npm", self._check_prerequisites),
            Step("get_project_info", "Resolve project name and location", self._get_project_info),
            Step("create_vue_project", "Run npm create vue", self._create_vue_project),
        ]
        if self.config.install_dependencies:
            steps.append(
                Step("install_dependencies", "Install npm dependencies", self._install_dependencies)
            )
        for step_name, method, template_set in _TEMPLATE_STEPS:
            steps.append(
                Step(
                    step_name,
                    f"Write {template_set} files",
                    self._template_step(method),
                    template_set=template_set,
                )
            )
        steps.append(
            Step("update_package_scripts", "Merge npm scripts", self._update_package_scripts)
        )
        if self.config.setup_git:
            steps.append(
                Step(
                    "setup_git_hooks",
                    "git init, Husky hooks, lint-staged",
                    self._setup_git_hooks,
                    template_set="git_hooks",
                )
            )
        steps.append(
            Step(
                "create_documentation",
                "Write README",
                self._template_step("create_documentation"),
                template_set="docs",
            )
        )
        return steps

    # ------------------------------------------------------------------
    # Step bodies
    # ------------------------------------------------------------------

    async def _check_prerequisites(self) -> PrerequisiteReport:
        self.prerequisites = await check_prerequisites(self.config)
        self.state["node_version"] = self.prerequisites.node_version
        return self.prerequisites

    async def _get_project_info(self) -> ProjectInfo:
        self.info = await get_project_info(
            self.project_name, self.target_dir, interactive=self.interactive
        )
        self.state["project_path"] = str(self.info.project_path)
        return self.info

    async def _create_vue_project(self) -> list[Path]:
        assert self.info is not None
        return await create_vue_project(self.info, self.config)

    async def _install_dependencies(self) -> list[Any]:
        assert self.info is not None
        return await install_dependencies(self.info.project_path, self.config)

    def _template_step(self, method: str) -> Callable[[], Awaitable[list[Path]]]:
        async def _run() -> list[Path]:
            written = await getattr(self.generator, method)()
            self._record_files(written)
            return written

        return _run

    async def _update_package_scripts(self) -> dict[str, Any]:
        assert self.info is not None
        updated = await update_package_scripts(self.info.project_path, self.config)
        self._record_files([self.info.project_path / "package.json"])
        return updated

    async def _setup_git_hooks(self) -> list[Path]:
        written = await setup_git_hooks(self.generator, self.config)
        self._record_files(written)
        return written

    def _record_files(self, paths: list[Path]) -> None:
        assert self.info is not None
        for path in paths:
            rel = Path(path).relative_to(self.info.project_path).as_posix()
            if rel not in self.state["files_written"]:
                self.state["files_written"].append(rel)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    async def run(self) -> dict[str, Any]:
        """Execute every step in order, stopping at the first failure.

        Returns:
            The final state dictionary, including a top-level ``success``
            boolean and, on failure, ``error`` and ``failed_step``.
        """
        run_start = time.monotonic()

        console.print(
            Panel(
                "[bold bright_cyan]Vue.js + TypeScript project scaffold[/bold bright_cyan]\n"
                f"Project : {self.project_name or '(prompt)'}\n"
                f"Target  : {self.target_dir or '(prompt)'}\n"
                f"Install : {'yes' if self.config.install_dependencies else 'skipped'}\n"
                f"Git     : {'yes' if self.config.setup_git else 'skipped'}",
                title="[bold]Scaffold Start[/bold]",
                border_style="bright_cyan",
            )
        )

        all_success = True
        for step in self.build_steps():
            step_start = time.monotonic()
            try:
                await step.run()
                self.state["steps_completed"].append(step.name)
            except ScaffoldError as exc:
                all_success = False
                self.state["steps_failed"].append(step.name)
                self.state["failed_step"] = step.name
                self.state["error"] = exc.message
                print_error(f"Step {step.name} failed: {exc.message}")
                break
            except Exception as exc:
                all_success = False
                self.state["steps_failed"].append(step.name)
                self.state["failed_step"] = step.name
                self.state["error"] = str(exc)
                print_error(f"Step {step.name} failed: {exc}")
                console.print(f"[dim]{traceback.format_exc()}[/dim]")
                break
            finally:
                self.state["durations"][step.name] = round(
                    time.monotonic() - step_start, 3
                )

        total_elapsed = time.monotonic() - run_start
        self.state["success"] = all_success
        self.state["total_duration"] = format_duration(total_elapsed)
        self.state["finished_at"] = datetime.now(timezone.utc).isoformat()

        if all_success:
            self._print_completion()
        return self.state

    def describe(self) -> list[dict[str, Any]]:
        """Return the step plan without running anything.

        Template steps list the project-relative files they would write.
        """
        planner = ProjectGenerator(self.project_name or "vue-app", ".", self.config)
        plan = []
        for step in self.build_steps():
            files = planner.planned_files(step.template_set) if step.template_set else []
            plan.append({"step": step.name, "description": step.description, "files": files})
        return plan

    def _print_completion(self) -> None:
        """Print the success summary and next steps."""
        assert self.info is not None
        path = self.info.project_path

        console.print()
        print_success("Setup completed successfully!")
        print_summary_table(
            {
                "Project": self.info.name,
                "Location": str(path),
                "Steps": str(len(self.state["steps_completed"])),
                "Files written": str(len(self.state["files_written"])),
                "Duration": self.state["total_duration"],
            },
            title="Scaffold Summary",
        )
        print_status("Next steps:")
        console.print(f"  cd {path}")
        if not self.config.install_dependencies:
            console.print("  npm install")
        console.print("  npm run dev")
        console.print()
        print_status(f"Dev server will listen on http://localhost:{self.config.dev_port}")


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``vue-scaffold`` / ``python -m vue_scaffold``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="vue-scaffold",
        description="Scaffold a Vue 3 + TypeScript + Vite project with Tailwind, Vuetify and tests",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  vue-scaffold\n"
            "  vue-scaffold MyApp\n"
            "  vue-scaffold MyApp ~/Projects\n"
            "  vue-scaffold MyApp /opt/web --skip-install --no-git\n"
        ),
    )
    parser.add_argument(
        "project_name",
        nargs="?",
        default=None,
        help="Project directory name (prompted for if omitted)",
    )
    parser.add_argument(
        "target_directory",
        nargs="?",
        default=None,
        help="Parent directory for the project (prompted for if omitted, default: cwd)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Load settings from a JSON file written by Config.save()",
    )
    parser.add_argument(
        "--skip-install",
        action="store_true",
        help="Do not run npm install for the extra dependency groups",
    )
    parser.add_argument(
        "--no-git",
        action="store_true",
        help="Do not initialise git or install Husky hooks",
    )
    parser.add_argument(
        "--no-input",
        action="store_true",
        help="Never prompt; fail if the project name is missing",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the steps and files that would be generated, then exit",
    )

    args = parser.parse_args(argv)

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print_error(f"Config file not found: {config_path}")
            sys.exit(1)
        try:
            config = Config.load(config_path)
        except ValueError as exc:
            print_error(f"Invalid config file {config_path}: {exc}")
            sys.exit(1)
    else:
        try:
            config = Config.from_env()
        except ValueError as exc:
            print_error(f"Invalid VUE_SCAFFOLD_* environment setting: {exc}")
            sys.exit(1)

    if args.skip_install:
        config.install_dependencies = False
    if args.no_git:
        config.setup_git = False

    pipeline = Pipeline(
        config,
        args.project_name,
        args.target_directory,
        interactive=not args.no_input,
    )

    if args.dry_run:
        for entry in pipeline.describe():
            console.print(f"[bold cyan]{entry['step']}[/bold cyan] -- {entry['description']}")
            for rel in entry["files"]:
                console.print(f"    {rel}")
        return

    try:
        result = asyncio.run(pipeline.run())
    except KeyboardInterrupt:
        print_error("Aborted.")
        sys.exit(130)

    if not result.get("success"):
        sys.exit(1)


if __name__ == "__main__":
    main()
