from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from relman import __version__
from relman.cli.app import app
from relman.cli.context import CLIContext, build_context
from relman.core.config import Config
from relman.core.errors import ErrorCode
from relman.core.project import Project
from relman.core.result import Err, Ok, Result
from relman.output.console import MockConsole
from relman.platform.process import ProcessError

_ARM = "aarch64-apple-darwin"


def _ctx(root: Path, console: MockConsole, config: Config | None = None) -> CLIContext:
    return CLIContext(project=Project(root=root), config=config or Config(), console=console)


def _patch_context(
    monkeypatch: pytest.MonkeyPatch, root: Path, console: MockConsole
) -> None:
    import relman.cli.commands.release_cmd as release_cmd

    def fake_build_context(project_dir: Path | None = None) -> CLIContext:
        return _ctx(root, console)

    monkeypatch.setattr(release_cmd, "build_context", fake_build_context)


def test_collect_writes_manifest(
    tauri_project: Path,
    bundle_factory: Callable[..., Path],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    import relman.cli.commands.release_cmd as release_cmd

    console = MockConsole()
    _patch_context(monkeypatch, tauri_project, console)
    bundle_factory(tauri_project, _ARM)

    release_cmd.collect(
        target=None, repo="acme/sweeper", out=Path("out/latest.json"), project=None
    )

    written = json.loads((tauri_project / "out" / "latest.json").read_text(encoding="utf-8"))
    assert list(written["platforms"]) == ["darwin-aarch64"]
    assert console.find("skipped targets: x86_64-apple-darwin")


def test_collect_nothing_exits_build_error(
    tauri_project: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import relman.cli.commands.release_cmd as release_cmd

    console = MockConsole()
    _patch_context(monkeypatch, tauri_project, console)

    with pytest.raises(typer.Exit) as exc:
        release_cmd.collect(target=None, repo="acme/sweeper", out=None, project=None)

    assert exc.value.exit_code == int(ErrorCode.BUILD_ERROR)
    assert console.has_error()
    assert console.find("hint:")


def test_build_failure_exits_build_error(
    tauri_project: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import relman.cli.commands.release_cmd as release_cmd
    from relman.services.release import bundler

    def failing_run_silent(
        cmd: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
    ) -> Result[None, ProcessError]:
        return Err(ProcessError(command=tuple(cmd), returncode=1))

    monkeypatch.setattr(bundler, "run_silent", failing_run_silent)
    _patch_context(monkeypatch, tauri_project, MockConsole())

    with pytest.raises(typer.Exit) as exc:
        release_cmd.build(
            target=None,
            repo="acme/sweeper",
            out=None,
            skip_build=False,
            installer=None,
            project=None,
        )

    assert exc.value.exit_code == int(ErrorCode.BUILD_ERROR)
    assert not (tauri_project / "latest.json").exists()


def test_build_runs_bundler(
    tauri_project: Path,
    bundle_factory: Callable[..., Path],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    import relman.cli.commands.release_cmd as release_cmd
    from relman.services.release import bundler

    seen: list[list[str]] = []

    def fake_run_silent(
        cmd: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
    ) -> Result[None, ProcessError]:
        seen.append(cmd)
        bundle_factory(tauri_project, cmd[cmd.index("--target") + 1])
        return Ok(None)

    monkeypatch.setattr(bundler, "run_silent", fake_run_silent)
    _patch_context(monkeypatch, tauri_project, MockConsole())

    release_cmd.build(
        target=[_ARM],
        repo="acme/sweeper",
        out=None,
        skip_build=False,
        installer=False,
        project=None,
    )

    assert seen == [["npx", "tauri", "build", "--target", _ARM, "--bundles", "app"]]
    assert (tauri_project / "latest.json").exists()


def test_unknown_target_exits_user_error(
    tauri_project: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import relman.cli.commands.release_cmd as release_cmd

    _patch_context(monkeypatch, tauri_project, MockConsole())

    with pytest.raises(typer.Exit) as exc:
        release_cmd.collect(target=["armv7"], repo="acme/sweeper", out=None, project=None)

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)


def test_targets_lists_platform_keys(
    tauri_project: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import relman.cli.commands.release_cmd as release_cmd

    console = MockConsole()
    _patch_context(monkeypatch, tauri_project, console)

    release_cmd.targets(project=None)

    assert "aarch64-apple-darwin -> darwin-aarch64" in console.messages
    assert "x86_64-apple-darwin -> darwin-x86_64" in console.messages


class TestBuildContext:
    def test_explicit_project(self, tauri_project: Path) -> None:
        ctx = build_context(tauri_project)

        assert ctx.project.root == tauri_project.resolve()
        assert ctx.config == Config()

    def test_invalid_project_exits_env_error(self, tmp_path: Path) -> None:
        with pytest.raises(typer.Exit) as exc:
            build_context(tmp_path)

        assert exc.value.exit_code == int(ErrorCode.ENV_ERROR)

    def test_invalid_config_exits_user_error(self, tauri_project: Path) -> None:
        (tauri_project / "release.toml").write_text("[bundle]\ncommand = []\n", encoding="utf-8")

        with pytest.raises(typer.Exit) as exc:
            build_context(tauri_project)

        assert exc.value.exit_code == int(ErrorCode.USER_ERROR)


class TestApp:
    def test_version(self) -> None:
        result = CliRunner().invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_targets_command(self, tauri_project: Path) -> None:
        result = CliRunner().invoke(app, ["targets", "--project", str(tauri_project)])

        assert result.exit_code == 0
        assert "darwin-x86_64" in result.output

    def test_relative_out_lands_under_project_root(
        self,
        tauri_project: Path,
        bundle_factory: Callable[..., Path],
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        elsewhere = tmp_path / "elsewhere"
        elsewhere.mkdir()
        monkeypatch.chdir(elsewhere)
        bundle_factory(tauri_project, _ARM)

        result = CliRunner().invoke(
            app,
            [
                "collect",
                "--project",
                str(tauri_project),
                "--repo",
                "acme/sweeper",
                "--target",
                _ARM,
                "--out",
                "dist/latest.json",
            ],
        )

        assert result.exit_code == 0
        assert (tauri_project / "dist" / "latest.json").is_file()
        assert not (elsewhere / "dist").exists()
