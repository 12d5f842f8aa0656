"""Project root detection.

The project is the Tauri app checkout being released. Its root holds
``package.json`` (frontend + version) next to the ``src-tauri/`` crate.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result

__all__ = [
    "PROJECT_ENV_VAR",
    "Project",
    "ProjectError",
    "detect_project",
    "find_project_upward",
    "is_project_root",
]

PROJECT_ENV_VAR = "RELMAN_PROJECT_ROOT"


@dataclass(frozen=True)
class ProjectError:
    """Error when the project root cannot be detected."""

    message: str
    searched_from: Path | None = None


@dataclass(frozen=True, slots=True)
class Project:
    """A detected Tauri project."""

    root: Path

    @property
    def package_json(self) -> Path:
        return self.root / "package.json"

    def resolve(self, relative: str | Path) -> Path:
        """Resolve a config path against the root, keeping absolute paths."""
        p = Path(relative).expanduser()
        if p.is_absolute():
            return p
        return self.root / p

    def __str__(self) -> str:
        return str(self.root)


def is_project_root(path: Path) -> bool:
    return (path / "package.json").is_file() and (path / "src-tauri").is_dir()


def find_project_upward(start: Path) -> Path | None:
    """Search upward from start for a project root."""
    for parent in (start, *start.parents):
        if is_project_root(parent):
            return parent
    return None


def detect_project(
    *,
    start_dir: Path | None = None,
    env_var: str = PROJECT_ENV_VAR,
) -> Result[Project, ProjectError]:
    """Detect the project root.

    Detection order:
    1. ``$RELMAN_PROJECT_ROOT`` (if set, it must be valid)
    2. Search upward from start_dir (or cwd)
    """
    env_value = os.environ.get(env_var)
    if env_value:
        env_path = Path(env_value).expanduser().resolve()
        if env_path.is_dir() and is_project_root(env_path):
            return Ok(Project(root=env_path))
        return Err(
            ProjectError(
                message=f"${env_var} is set to '{env_value}' but it is not a Tauri project",
                searched_from=env_path if env_path.is_dir() else None,
            )
        )

    search_start = (start_dir or Path.cwd()).resolve()
    found = find_project_upward(search_start)
    if found is None:
        return Err(
            ProjectError(
                message="Could not find a Tauri project (package.json + src-tauri/)",
                searched_from=search_start,
            )
        )
    return Ok(Project(root=found))
