from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relman.core.config import Config
from relman.core.result import Err, Ok, Result
from relman.services.release.errors import ReleaseError


@dataclass(frozen=True, slots=True)
class TargetSpec:
    """A build target with its manifest key and bundle output directory."""

    target: str
    platform_key: str
    bundle_dir: Path


def bundle_dir_for(*, project_root: Path, template: str, target: str) -> Path:
    p = Path(template.format(target=target))
    if p.is_absolute():
        return p
    return project_root / p


def resolve_targets(
    *,
    project_root: Path,
    config: Config,
    selected: list[str] | None = None,
) -> Result[list[TargetSpec], ReleaseError]:
    """Resolve the targets to release, in configuration order.

    ``selected`` restricts the run to a subset; every selected target must be
    configured, since its platform key cannot be guessed.
    """
    if selected:
        unknown = [t for t in selected if t not in config.targets]
        if unknown:
            return Err(
                ReleaseError(
                    kind="unknown_target",
                    message=f"no platform key for target: {', '.join(unknown)}",
                    hint=f"Configured: {', '.join(config.targets)} (see [targets] in release.toml)",
                )
            )
        wanted = set(selected)
        names = [t for t in config.targets if t in wanted]
    else:
        names = list(config.targets)

    return Ok(
        [
            TargetSpec(
                target=name,
                platform_key=config.targets[name],
                bundle_dir=bundle_dir_for(
                    project_root=project_root, template=config.bundle.dir, target=name
                ),
            )
            for name in names
        ]
    )
