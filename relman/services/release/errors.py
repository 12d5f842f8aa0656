from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """A failure that aborts the whole release run."""

    kind: Literal[
        "invalid_input",
        "unknown_target",
        "missing_repo",
        "package_unreadable",
        "bundle_failed",
        "no_platforms",
        "write_failed",
    ]
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class ArtifactMissing:
    """A target whose updater artifacts could not be collected.

    The run continues; the target just contributes no manifest entry.
    """

    kind: Literal[
        "bundle_dir_missing",
        "archive_missing",
        "archive_ambiguous",
        "signature_missing",
        "signature_unreadable",
        "signature_empty",
        "rename_failed",
    ]
    target: str
    message: str
    path: Path | None = None
