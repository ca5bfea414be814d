"""Unit tests for the pipeline orchestrator (vue_scaffold.pipeline).

Tests cover:
- Step list construction and ordering, including skip flags
- Successful runs (state, recorded files)
- Failure handling: scaffold errors and unexpected exceptions stop the run
- describe() planning output
- CLI entry point exit codes, flags, and dry-run
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from vue_scaffold.config import Config
from vue_scaffold.pipeline import Pipeline, Step, main
from vue_scaffold.scaffolder.generator import ProjectGenerator
from vue_scaffold.utils import ScaffoldError


FULL_STEP_ORDER = [
    "check_prerequisites",
    "get_project_info",
    "create_vue_project",
    "install_dependencies",
    "setup_axios",
    "setup_tailwind",
    "setup_vuetify",
    "update_vite_config",
    "setup_typescript",
    "setup_eslint",
    "setup_testing",
    "update_main_ts",
    "update_app_vue",
    "update_router_views",
    "create_example_components",
    "create_tests",
    "update_package_scripts",
    "setup_git_hooks",
    "create_documentation",
]


def _pipeline(tmp_path: Path, config: Config | None = None, name: str | None = "Foo") -> Pipeline:
    return Pipeline(config or Config(), name, tmp_path, interactive=False)


# ---------------------------------------------------------------------------
# Step list
# ---------------------------------------------------------------------------


class TestBuildSteps:
    @pytest.mark.unit
    def test_full_order(self, tmp_path: Path):
        steps = _pipeline(tmp_path).build_steps()
        assert [s.name for s in steps] == FULL_STEP_ORDER
        assert all(isinstance(s, Step) for s in steps)

    @pytest.mark.unit
    def test_skip_install(self, tmp_path: Path):
        names = [s.name for s in _pipeline(tmp_path, Config(install_dependencies=False)).build_steps()]
        assert "install_dependencies" not in names
        assert names.index("create_vue_project") + 1 == names.index("setup_axios")

    @pytest.mark.unit
    def test_no_git(self, tmp_path: Path):
        names = [s.name for s in _pipeline(tmp_path, Config(setup_git=False)).build_steps()]
        assert "setup_git_hooks" not in names
        assert names[-1] == "create_documentation"

    @pytest.mark.unit
    def test_generator_requires_project_info(self, tmp_path: Path):
        with pytest.raises(ScaffoldError, match="not been resolved"):
            _pipeline(tmp_path).generator


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------


class TestPipelineRun:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_success(self, fake_toolchain, tmp_path: Path):
        state = await _pipeline(tmp_path).run()

        assert state["success"] is True
        assert state["steps_completed"] == FULL_STEP_ORDER
        assert state["steps_failed"] == []
        assert state["project_path"] == str(tmp_path / "Foo")
        assert state["node_version"] == "v20.11.1"
        assert set(state["durations"]) == set(FULL_STEP_ORDER)
        assert "total_duration" in state
        assert "finished_at" in state

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_records_written_files(self, fake_toolchain, tmp_path: Path):
        state = await _pipeline(tmp_path).run()

        files = state["files_written"]
        for rel in ("package.json", "src/main.ts", "vite.config.ts", ".husky/pre-commit", "README.md"):
            assert rel in files
        assert len(files) == len(set(files))

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_command_order(self, fake_toolchain, tmp_path: Path):
        await _pipeline(tmp_path).run()

        commands = fake_toolchain.commands()
        assert commands[:3] == ["node --version", "npm --version", "git --version"]
        assert commands[3].startswith("npm create vue@latest Foo -- --typescript")
        assert commands[-2:] == ["git init", "npx husky init"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_skip_flags_run_no_install_or_git(self, fake_toolchain, tmp_path: Path):
        config = Config(install_dependencies=False, setup_git=False)
        state = await _pipeline(tmp_path, config).run()

        assert state["success"] is True
        commands = fake_toolchain.commands()
        assert not any(c.startswith("npm install") for c in commands)
        assert not any(c.startswith("git") for c in commands)
        assert not (tmp_path / "Foo" / ".husky" / "commit-msg").exists()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_scaffold_error_stops_run(self, fake_toolchain, tmp_path: Path):
        fake_toolchain.fail("npm install vuetify", stderr="ERESOLVE unable to resolve")

        state = await _pipeline(tmp_path).run()

        assert state["success"] is False
        assert state["failed_step"] == "install_dependencies"
        assert state["steps_failed"] == ["install_dependencies"]
        assert "ERESOLVE" in state["error"]
        assert "setup_axios" not in state["steps_completed"]
        assert not (tmp_path / "Foo" / "src" / "api").exists()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failure_message_names_step(self, fake_toolchain, tmp_path: Path, capsys):
        fake_toolchain.fail("npm install", stderr="ERESOLVE")

        await _pipeline(tmp_path).run()

        assert "Step install_dependencies failed:" in capsys.readouterr().out

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unexpected_exception_stops_run(self, fake_toolchain, tmp_path: Path):
        with patch.object(ProjectGenerator, "setup_tailwind", side_effect=RuntimeError("boom")):
            state = await _pipeline(tmp_path).run()

        assert state["success"] is False
        assert state["failed_step"] == "setup_tailwind"
        assert state["error"] == "boom"
        assert state["steps_completed"][-1] == "setup_axios"
        assert "setup_tailwind" in state["durations"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_outdated_node_writes_nothing(self, fake_toolchain, tmp_path: Path):
        fake_toolchain.node_version = "v16.20.2"

        state = await _pipeline(tmp_path).run()

        assert state["failed_step"] == "check_prerequisites"
        assert state["error"] == "Node.js 18+ is required. Current version: v16.20.2"
        assert list(tmp_path.iterdir()) == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_completion_message(self, fake_toolchain, tmp_path: Path, capsys):
        await _pipeline(tmp_path, Config(install_dependencies=False)).run()

        out = capsys.readouterr().out
        assert "Setup completed successfully!" in out
        assert "npm install" in out
        assert "npm run dev" in out
        assert "http://localhost:3000" in out


# ---------------------------------------------------------------------------
# describe
# ---------------------------------------------------------------------------


class TestDescribe:
    @pytest.mark.unit
    def test_plan_lists_files(self, tmp_path: Path):
        plan = {entry["step"]: entry for entry in _pipeline(tmp_path).describe()}

        assert list(plan) == FULL_STEP_ORDER
        assert plan["check_prerequisites"]["files"] == []
        assert "vite.config.ts" in plan["update_vite_config"]["files"]
        assert ".husky/pre-commit" in plan["setup_git_hooks"]["files"]
        assert plan["create_documentation"]["files"] == ["README.md"]

    @pytest.mark.unit
    def test_plan_writes_nothing(self, tmp_path: Path):
        _pipeline(tmp_path).describe()
        assert list(tmp_path.iterdir()) == []


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


class TestMain:
    @pytest.mark.unit
    def test_success_exits_normally(self, fake_toolchain, tmp_path: Path):
        main(["Foo", str(tmp_path), "--no-input"])
        assert (tmp_path / "Foo" / "package.json").exists()

    @pytest.mark.unit
    def test_failure_exits_one(self, fake_toolchain, tmp_path: Path):
        fake_toolchain.missing.add("node")
        with pytest.raises(SystemExit) as exc_info:
            main(["Foo", str(tmp_path), "--no-input"])
        assert exc_info.value.code == 1

    @pytest.mark.unit
    def test_flags_disable_steps(self, fake_toolchain, tmp_path: Path):
        main(["Foo", str(tmp_path), "--no-input", "--skip-install", "--no-git"])

        commands = fake_toolchain.commands()
        assert not any(c.startswith("npm install") for c in commands)
        assert "npx husky init" not in commands

    @pytest.mark.unit
    def test_missing_name_without_input(self, fake_toolchain, tmp_path: Path):
        with pytest.raises(SystemExit) as exc_info:
            main(["--no-input"])
        assert exc_info.value.code == 1

    @pytest.mark.unit
    def test_config_file(self, fake_toolchain, tmp_path: Path):
        cfg_path = Config(dev_port=8080, install_dependencies=False).save(tmp_path / "cfg.json")
        out_dir = tmp_path / "out"

        main(["Foo", str(out_dir), "--no-input", "--no-git", "--config", str(cfg_path)])

        assert "port: 8080" in (out_dir / "Foo" / "vite.config.ts").read_text()
        assert not any(c.startswith("npm install") for c in fake_toolchain.commands())

    @pytest.mark.unit
    def test_missing_config_file(self, tmp_path: Path):
        with pytest.raises(SystemExit) as exc_info:
            main(["Foo", "--config", str(tmp_path / "nope.json")])
        assert exc_info.value.code == 1

    @pytest.mark.unit
    def test_invalid_config_file(self, tmp_path: Path):
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"dev_port": -5}))
        with pytest.raises(SystemExit) as exc_info:
            main(["Foo", "--config", str(bad)])
        assert exc_info.value.code == 1

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "name, value",
        [
            ("VUE_SCAFFOLD_DEV_PORT", "abc"),
            ("VUE_SCAFFOLD_COMMAND_TIMEOUT", "5"),
        ],
    )
    def test_invalid_environment(self, fake_toolchain, tmp_path: Path, monkeypatch, capsys, name, value):
        monkeypatch.setenv(name, value)

        with pytest.raises(SystemExit) as exc_info:
            main(["Foo", str(tmp_path), "--no-input"])

        assert exc_info.value.code == 1
        assert "Invalid VUE_SCAFFOLD_*" in capsys.readouterr().out
        assert fake_toolchain.calls == []

    @pytest.mark.unit
    def test_dry_run(self, fake_toolchain, tmp_path: Path, capsys):
        main(["Foo", str(tmp_path), "--dry-run"])

        out = capsys.readouterr().out
        assert "setup_axios" in out
        assert "src/api/index.ts" in out
        assert fake_toolchain.calls == []
        assert list(tmp_path.iterdir()) == []
