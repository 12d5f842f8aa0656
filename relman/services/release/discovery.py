"""Locate updater artifacts in a target's bundle directory.

With ``createUpdaterArtifacts`` enabled, ``tauri build`` leaves the updater
payload (``<App>.app.tar.gz``) and its minisign signature
(``<App>.app.tar.gz.sig``) next to the ``.app`` bundle. Older Tauri releases
also wrote their own single-platform ``latest.json``; it is used as a
fallback when the pair cannot be found.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from relman.core.result import Err, Ok, Result
from relman.core.structured import as_str_dict, get_str, get_table
from relman.services.release.assets import safe_asset_name
from relman.services.release.errors import ArtifactMissing
from relman.services.release.model import PlatformArtifact


@dataclass(frozen=True, slots=True)
class BundleArtifacts:
    archive: Path
    signature: Path


def find_artifacts(
    bundle_dir: Path,
    *,
    target: str,
    archive_suffix: str,
    signature_suffix: str,
) -> Result[BundleArtifacts, ArtifactMissing]:
    """Find the single archive/signature pair in ``bundle_dir``.

    Archives that differ only by the spaces renamed away on an earlier run
    count as one; the freshly built original is preferred over the renamed
    copy. The signature named after the archive wins; otherwise exactly one
    file with the signature suffix must exist.
    """
    if not bundle_dir.is_dir():
        return Err(
            ArtifactMissing(
                kind="bundle_dir_missing",
                target=target,
                message=f"bundle directory not found: {bundle_dir}",
                path=bundle_dir,
            )
        )

    files = sorted(p for p in bundle_dir.iterdir() if p.is_file())
    archives = [
        p
        for p in files
        if p.name.endswith(archive_suffix) and not p.name.endswith(signature_suffix)
    ]
    signatures = [p for p in files if p.name.endswith(signature_suffix)]

    if not archives:
        return Err(
            ArtifactMissing(
                kind="archive_missing",
                target=target,
                message=f"no *{archive_suffix} archive in {bundle_dir}",
                path=bundle_dir,
            )
        )
    by_asset: dict[str, Path] = {}
    for p in archives:
        key = safe_asset_name(p.name)
        if key not in by_asset or p.name != key:
            by_asset[key] = p
    if len(by_asset) > 1:
        names = ", ".join(p.name for p in archives)
        return Err(
            ArtifactMissing(
                kind="archive_ambiguous",
                target=target,
                message=f"more than one *{archive_suffix} archive in {bundle_dir}: {names}",
                path=bundle_dir,
            )
        )

    (archive,) = by_asset.values()
    paired = archive.with_name(archive.name + signature_suffix.removeprefix(archive_suffix))
    if paired.is_file():
        return Ok(BundleArtifacts(archive=archive, signature=paired))

    if len(signatures) == 1:
        return Ok(BundleArtifacts(archive=archive, signature=signatures[0]))

    detail = "no" if not signatures else "more than one"
    return Err(
        ArtifactMissing(
            kind="signature_missing",
            target=target,
            message=f"{detail} *{signature_suffix} signature for {archive.name}",
            path=bundle_dir,
        )
    )


def read_signature(path: Path, *, target: str) -> Result[str, ArtifactMissing]:
    """Read a detached signature, trimmed of surrounding whitespace."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return Err(
            ArtifactMissing(
                kind="signature_unreadable",
                target=target,
                message=f"failed to read {path.name}: {e}",
                path=path,
            )
        )

    signature = text.strip()
    if not signature:
        return Err(
            ArtifactMissing(
                kind="signature_empty",
                target=target,
                message=f"signature file is empty: {path.name}",
                path=path,
            )
        )
    return Ok(signature)


def updater_json_candidates(bundle_dir: Path) -> list[Path]:
    return [
        bundle_dir.parent / "updater" / "latest.json",
        bundle_dir / "latest.json",
    ]


def read_updater_json(bundle_dir: Path, *, platform_key: str) -> tuple[Path, PlatformArtifact] | None:
    """Return the first Tauri-written ``latest.json`` entry for ``platform_key``.

    Unreadable or malformed files are passed over.
    """
    for path in updater_json_candidates(bundle_dir):
        if not path.is_file():
            continue
        try:
            obj: object = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError):
            continue

        data = as_str_dict(obj)
        if data is None:
            continue
        platforms = get_table(data, "platforms") or {}
        entry = get_table(platforms, platform_key)
        if entry is None:
            continue

        signature = get_str(entry, "signature")
        url = get_str(entry, "url")
        if signature and url:
            return path, PlatformArtifact(signature=signature, url=url)
    return None
