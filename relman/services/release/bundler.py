"""Invoke the Tauri bundler for one target.

The build is split in two phases. The ``app`` bundle carries the updater
archive and signature and is mandatory. The ``dmg`` installer is a separate,
best-effort phase: DMG packaging on CI runners fails intermittently and must
not cost us the updater artifacts already built.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from relman.core.result import Err, Ok, Result
from relman.platform.process import ProcessError, run_silent
from relman.services.release.errors import ReleaseError


def bundle_command(command: Sequence[str], *, target: str, bundles: str) -> list[str]:
    return [*command, "--target", target, "--bundles", bundles]


def build_app(
    *,
    project_root: Path,
    command: Sequence[str],
    target: str,
) -> Result[None, ReleaseError]:
    cmd = bundle_command(command, target=target, bundles="app")
    result = run_silent(cmd, cwd=project_root)
    if isinstance(result, Err):
        error = result.error
        hint = (
            f"Is {cmd[0]} installed and on PATH?"
            if error.spawn_failed
            else f"rustup target add {target}"
        )
        return Err(
            ReleaseError(
                kind="bundle_failed",
                message=f"build for {target} failed: {error}",
                hint=hint,
            )
        )
    return Ok(None)


def build_installer(
    *,
    project_root: Path,
    command: Sequence[str],
    target: str,
) -> Result[None, ProcessError]:
    return run_silent(bundle_command(command, target=target, bundles="dmg"), cwd=project_root)
