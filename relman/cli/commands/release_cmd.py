"""Release commands - bundle targets and write the updater manifest."""

from __future__ import annotations

from pathlib import Path

import typer

from relman.cli.context import CLIContext, build_context
from relman.core.result import Err
from relman.output.console import Style
from relman.output.errors import print_release_error, release_error_exit_code
from relman.services.release.service import ReleaseService
from relman.services.release.targets import resolve_targets


def _run(
    ctx: CLIContext,
    *,
    repo: str | None,
    targets: list[str] | None,
    out: Path | None,
    skip_build: bool,
    installer: bool | None,
) -> None:
    service = ReleaseService(project=ctx.project, config=ctx.config, console=ctx.console)
    result = service.run(
        repo=repo,
        targets=targets,
        output=ctx.project.resolve(out) if out is not None else None,
        skip_build=skip_build,
        installer=installer,
    )
    if isinstance(result, Err):
        print_release_error(result.error, ctx.console)
        raise typer.Exit(code=release_error_exit_code(result.error))

    if result.value.skipped:
        ctx.console.warning(f"skipped targets: {', '.join(result.value.skipped)}")


def build(
    target: list[str] | None = typer.Option(
        None, "--target", "-t", help="Target triple to release (repeatable)", show_default=False
    ),
    repo: str | None = typer.Option(
        None, "--repo", help="GitHub repository (owner/name)", show_default=False
    ),
    out: Path | None = typer.Option(
        None,
        "--out",
        help="Manifest output path, relative to the project root (default: latest.json)",
        show_default=False,
    ),
    skip_build: bool = typer.Option(
        False, "--skip-build", help="Collect existing bundle outputs without building"
    ),
    installer: bool | None = typer.Option(
        None,
        "--installer/--no-installer",
        help="Also build the DMG installer (best-effort)",
        show_default=False,
    ),
    project: Path | None = typer.Option(
        None, "--project", help="Tauri project root (overrides auto detection)", show_default=False
    ),
) -> None:
    """Build every target and write the consolidated updater manifest."""
    ctx = build_context(project)
    _run(ctx, repo=repo, targets=target, out=out, skip_build=skip_build, installer=installer)


def collect(
    target: list[str] | None = typer.Option(
        None, "--target", "-t", help="Target triple to collect (repeatable)", show_default=False
    ),
    repo: str | None = typer.Option(
        None, "--repo", help="GitHub repository (owner/name)", show_default=False
    ),
    out: Path | None = typer.Option(
        None,
        "--out",
        help="Manifest output path, relative to the project root (default: latest.json)",
        show_default=False,
    ),
    project: Path | None = typer.Option(
        None, "--project", help="Tauri project root (overrides auto detection)", show_default=False
    ),
) -> None:
    """Write the updater manifest from existing bundle outputs."""
    ctx = build_context(project)
    _run(ctx, repo=repo, targets=target, out=out, skip_build=True, installer=False)


def targets(
    project: Path | None = typer.Option(
        None, "--project", help="Tauri project root (overrides auto detection)", show_default=False
    ),
) -> None:
    """List configured targets with their platform keys and bundle dirs."""
    ctx = build_context(project)
    specs = resolve_targets(project_root=ctx.project.root, config=ctx.config)
    if isinstance(specs, Err):
        print_release_error(specs.error, ctx.console)
        raise typer.Exit(code=release_error_exit_code(specs.error))

    for spec in specs.value:
        ctx.console.print(f"{spec.target} -> {spec.platform_key}")
        ctx.console.print(f"  {spec.bundle_dir}", Style.DIM)
