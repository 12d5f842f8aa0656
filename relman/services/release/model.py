"""Updater manifest model.

The manifest is the ``latest.json`` document polled by the Tauri updater:

    {
      "version": "v1.2.3",
      "notes": "Release v1.2.3",
      "pub_date": "2026-10-17T09:30:00.000Z",
      "platforms": {
        "darwin-aarch64": {"signature": "...", "url": "https://..."}
      }
    }
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from relman.core.config import DEFAULT_NOTES

__all__ = [
    "PlatformArtifact",
    "ReleaseManifest",
    "format_pub_date",
    "new_manifest",
    "render_notes",
]


@dataclass(frozen=True, slots=True)
class PlatformArtifact:
    signature: str
    url: str

    def to_dict(self) -> dict[str, str]:
        return {"signature": self.signature, "url": self.url}


def _empty_platforms() -> dict[str, PlatformArtifact]:
    return {}


@dataclass(slots=True)
class ReleaseManifest:
    """Manifest accumulated across targets, written once at the end."""

    version: str
    notes: str
    pub_date: str
    platforms: dict[str, PlatformArtifact] = field(default_factory=_empty_platforms)

    def record(self, platform_key: str, artifact: PlatformArtifact) -> None:
        """Add a platform entry.

        Raises:
            ValueError: if the platform key was already recorded.
        """
        if platform_key in self.platforms:
            raise ValueError(f"platform {platform_key} recorded twice")
        self.platforms[platform_key] = artifact

    @property
    def is_empty(self) -> bool:
        return not self.platforms

    def to_dict(self) -> dict[str, object]:
        return {
            "version": self.version,
            "notes": self.notes,
            "pub_date": self.pub_date,
            "platforms": {k: v.to_dict() for k, v in self.platforms.items()},
        }


def format_pub_date(when: datetime) -> str:
    """ISO-8601 UTC with milliseconds and a ``Z`` suffix."""
    if when.tzinfo is None:
        when = when.replace(tzinfo=UTC)
    utc = when.astimezone(UTC)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def render_notes(template: str, *, tag: str, version: str) -> str:
    """Fill ``{tag}`` and ``{version}`` in a notes template."""
    return template.format(tag=tag, version=version)


def new_manifest(
    *,
    tag: str,
    version: str,
    notes_template: str = DEFAULT_NOTES,
    now: datetime | None = None,
) -> ReleaseManifest:
    return ReleaseManifest(
        version=tag,
        notes=render_notes(notes_template, tag=tag, version=version),
        pub_date=format_pub_date(now or datetime.now(UTC)),
    )
