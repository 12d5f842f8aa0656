from __future__ import annotations

import json
import re
from pathlib import Path

from relman.core.result import Err, Ok, Result
from relman.core.structured import StrDict, as_str_dict, get_str, get_table
from relman.services.release.errors import ReleaseError

_GITHUB_REPO_RE = re.compile(
    r"^(?:git\+)?(?:https?://|ssh://git@|git@)github\.com[/:]"
    r"(?P<slug>[\w.-]+/[\w.-]+?)(?:\.git)?/?$"
)
_SLUG_RE = re.compile(r"^(?:github:)?(?P<slug>[\w.-]+/[\w.-]+)$")


def read_package_json(path: Path) -> Result[StrDict, ReleaseError]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        return Err(
            ReleaseError(
                kind="package_unreadable",
                message=f"failed to read {path.name}: {e}",
                hint=str(path),
            )
        )

    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(
            ReleaseError(
                kind="invalid_input",
                message=f"invalid JSON in {path.name}: {e}",
                hint=str(path),
            )
        )

    data = as_str_dict(obj)
    if data is None:
        return Err(
            ReleaseError(
                kind="invalid_input",
                message=f"invalid JSON root in {path.name}",
                hint=str(path),
            )
        )
    return Ok(data)


def version_from_package(data: StrDict, *, path: Path) -> Result[str, ReleaseError]:
    value = get_str(data, "version")
    if value is None:
        return Err(
            ReleaseError(
                kind="invalid_input",
                message=f"missing version in {path.name}",
                hint=str(path),
            )
        )
    return Ok(value)


def tag_for_version(version: str) -> str:
    """Release tag for a package version: ``1.2.3`` -> ``v1.2.3``."""
    if version.startswith("v"):
        return version
    return f"v{version}"


def repo_from_package(data: StrDict) -> str | None:
    """GitHub ``owner/name`` from package.json's ``repository`` field.

    Accepts the string shorthand (``owner/name``, ``github:owner/name``), a
    GitHub URL, or ``{"type": "git", "url": ...}``.
    """
    raw = get_str(data, "repository")
    if raw is None:
        table = get_table(data, "repository")
        raw = get_str(table, "url") if table is not None else None
    if raw is None:
        return None

    m = _SLUG_RE.match(raw) or _GITHUB_REPO_RE.match(raw)
    if m is None:
        return None
    return m.group("slug")
