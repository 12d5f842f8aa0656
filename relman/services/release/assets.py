"""Release asset naming.

Archives are uploaded to a GitHub release under their on-disk name. GitHub
replaces spaces in asset names, so an archive like ``My App.app.tar.gz`` is
renamed to ``My_App.app.tar.gz`` before its URL is recorded.
"""

from __future__ import annotations

import os
from pathlib import Path

from relman.core.result import Err, Ok, Result
from relman.services.release.errors import ArtifactMissing

GITHUB_DOWNLOAD_URL = "https://github.com/{repo}/releases/download/{tag}/{filename}"


def safe_asset_name(name: str) -> str:
    return name.replace(" ", "_")


def download_url(*, repo: str, tag: str, filename: str) -> str:
    return GITHUB_DOWNLOAD_URL.format(repo=repo, tag=tag, filename=safe_asset_name(filename))


def normalize_archive(path: Path, *, target: str) -> Result[Path, ArtifactMissing]:
    """Rename an archive to its upload-safe name.

    Returns the (possibly unchanged) path. A stale file already holding the
    safe name is replaced.
    """
    safe = path.with_name(safe_asset_name(path.name))
    if safe == path:
        return Ok(path)

    try:
        os.replace(path, safe)
    except OSError as e:
        return Err(
            ArtifactMissing(
                kind="rename_failed",
                target=target,
                message=f"could not rename {path.name} to {safe.name}: {e}",
                path=path,
            )
        )
    return Ok(safe)
