"""Typed release configuration.

An optional ``release.toml`` at the project root tunes the release run.
Every field has a default matching a stock Tauri macOS project, so the file
is only needed to pin the GitHub repository or to change targets.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_str, get_str_list, get_table

__all__ = [
    "ARCHIVE_SUFFIX",
    "BundleConfig",
    "CONFIG_FILENAME",
    "Config",
    "ConfigError",
    "DEFAULT_BUNDLE_COMMAND",
    "DEFAULT_BUNDLE_DIR",
    "DEFAULT_NOTES",
    "DEFAULT_OUTPUT",
    "DEFAULT_TARGETS",
    "SIGNATURE_SUFFIX",
    "load_config",
    "load_project_config",
]

CONFIG_FILENAME = "release.toml"

# target triple -> updater platform key
DEFAULT_TARGETS: Mapping[str, str] = {
    "aarch64-apple-darwin": "darwin-aarch64",
    "x86_64-apple-darwin": "darwin-x86_64",
}

DEFAULT_BUNDLE_COMMAND: tuple[str, ...] = ("npx", "tauri", "build")
DEFAULT_BUNDLE_DIR = "src-tauri/target/{target}/release/bundle/macos"
ARCHIVE_SUFFIX = ".app.tar.gz"
SIGNATURE_SUFFIX = ".app.tar.gz.sig"
DEFAULT_NOTES = "Release {tag}"
DEFAULT_OUTPUT = "latest.json"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when release.toml cannot be loaded or parsed."""

    message: str
    path: Path | None = None


def _default_targets() -> dict[str, str]:
    return dict(DEFAULT_TARGETS)


@dataclass(frozen=True, slots=True)
class BundleConfig:
    """How the bundler is invoked and where its outputs land.

    ``dir`` is relative to the project root and must contain a ``{target}``
    placeholder.
    """

    command: tuple[str, ...] = DEFAULT_BUNDLE_COMMAND
    dir: str = DEFAULT_BUNDLE_DIR
    archive_suffix: str = ARCHIVE_SUFFIX
    signature_suffix: str = SIGNATURE_SUFFIX


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    repo: str | None = None
    notes: str = DEFAULT_NOTES
    output: str = DEFAULT_OUTPUT
    installer: bool = True
    bundle: BundleConfig = field(default_factory=BundleConfig)
    targets: dict[str, str] = field(default_factory=_default_targets)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from parsed TOML.

        Raises:
            ValueError: if a present value has the wrong shape.
        """
        release: StrDict = get_table(data, "release") or {}
        bundle: StrDict = get_table(data, "bundle") or {}

        command: tuple[str, ...] = DEFAULT_BUNDLE_COMMAND
        if "command" in bundle:
            items = get_str_list(bundle, "command")
            if not items:
                raise ValueError("bundle.command must be a non-empty list of strings")
            command = tuple(items)

        bundle_dir = get_str(bundle, "dir") or DEFAULT_BUNDLE_DIR
        if "{target}" not in bundle_dir:
            raise ValueError("bundle.dir must contain a {target} placeholder")
        try:
            bundle_dir.format(target="x")
        except (KeyError, IndexError, AttributeError) as e:
            raise ValueError(f"bundle.dir uses an unknown placeholder: {e}") from e

        notes = get_str(release, "notes") or DEFAULT_NOTES
        try:
            notes.format(tag="v0.0.0", version="0.0.0")
        except (KeyError, IndexError, AttributeError) as e:
            raise ValueError(f"release.notes uses an unknown placeholder: {e}") from e

        installer = get_bool(release, "installer")

        return cls(
            repo=get_str(release, "repo"),
            notes=notes,
            output=get_str(release, "output") or DEFAULT_OUTPUT,
            installer=True if installer is None else installer,
            bundle=BundleConfig(
                command=command,
                dir=bundle_dir,
                archive_suffix=get_str(bundle, "archive_suffix") or ARCHIVE_SUFFIX,
                signature_suffix=get_str(bundle, "signature_suffix") or SIGNATURE_SUFFIX,
            ),
            targets=_parse_targets(data),
        )


def _parse_targets(data: Mapping[str, object]) -> dict[str, str]:
    if "targets" not in data:
        return _default_targets()

    table = get_table(data, "targets")
    if not table:
        raise ValueError("[targets] must map target triples to platform keys")

    out: dict[str, str] = {}
    seen: set[str] = set()
    for target in table:
        key = get_str(table, target)
        if key is None:
            raise ValueError(f"platform key for {target} must be a non-empty string")
        if key in seen:
            raise ValueError(f"platform key {key} is used by more than one target")
        seen.add(key)
        out[target] = key
    return out


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and validate configuration from a TOML file."""
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except ValueError as e:
        return Err(ConfigError(f"Invalid config: {e}", path=path))


def load_project_config(root: Path) -> Result[Config, ConfigError]:
    """Load ``release.toml`` from a project root, defaulting when absent."""
    path = root / CONFIG_FILENAME
    if not path.exists():
        return Ok(Config())
    return load_config(path)
