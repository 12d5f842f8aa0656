"""Release orchestration: bundle, collect, and write the updater manifest."""

from .errors import ArtifactMissing, ReleaseError
from .model import PlatformArtifact, ReleaseManifest
from .service import ReleaseOutcome, ReleaseService

__all__ = [
    "ArtifactMissing",
    "PlatformArtifact",
    "ReleaseError",
    "ReleaseManifest",
    "ReleaseOutcome",
    "ReleaseService",
]
