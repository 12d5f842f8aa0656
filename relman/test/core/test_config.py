"""Tests for relman.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from relman.core.config import (
    ARCHIVE_SUFFIX,
    DEFAULT_BUNDLE_COMMAND,
    DEFAULT_BUNDLE_DIR,
    SIGNATURE_SUFFIX,
    BundleConfig,
    Config,
    load_config,
    load_project_config,
)
from relman.core.result import Err, Ok


class TestConfigDefaults:
    def test_defaults(self) -> None:
        config = Config()
        assert config.repo is None
        assert config.notes == "Release {tag}"
        assert config.output == "latest.json"
        assert config.installer is True
        assert config.targets == {
            "aarch64-apple-darwin": "darwin-aarch64",
            "x86_64-apple-darwin": "darwin-x86_64",
        }

    def test_bundle_defaults(self) -> None:
        bundle = BundleConfig()
        assert bundle.command == ("npx", "tauri", "build")
        assert bundle.dir == "src-tauri/target/{target}/release/bundle/macos"
        assert bundle.archive_suffix == ".app.tar.gz"
        assert bundle.signature_suffix == ".app.tar.gz.sig"

    def test_default_targets_not_shared(self) -> None:
        a = Config()
        a.targets["extra"] = "x"
        assert "extra" not in Config().targets

    def test_frozen(self) -> None:
        config = Config()
        with pytest.raises(AttributeError):
            config.repo = "x/y"  # type: ignore[misc]


class TestConfigFromDict:
    def test_empty(self) -> None:
        config = Config.from_dict({})
        assert config == Config()

    def test_full(self) -> None:
        config = Config.from_dict(
            {
                "release": {
                    "repo": "acme/sweeper",
                    "notes": "Sweeper {version}",
                    "output": "dist/latest.json",
                    "installer": False,
                },
                "bundle": {
                    "command": ["pnpm", "tauri", "build"],
                    "dir": "out/{target}/bundle",
                    "archive_suffix": ".tgz",
                    "signature_suffix": ".tgz.sig",
                },
                "targets": {"aarch64-apple-darwin": "darwin-aarch64"},
            }
        )
        assert config.repo == "acme/sweeper"
        assert config.notes == "Sweeper {version}"
        assert config.output == "dist/latest.json"
        assert config.installer is False
        assert config.bundle.command == ("pnpm", "tauri", "build")
        assert config.bundle.dir == "out/{target}/bundle"
        assert config.bundle.archive_suffix == ".tgz"
        assert config.bundle.signature_suffix == ".tgz.sig"
        assert config.targets == {"aarch64-apple-darwin": "darwin-aarch64"}

    def test_blank_strings_fall_back(self) -> None:
        config = Config.from_dict({"release": {"repo": "  ", "notes": ""}})
        assert config.repo is None
        assert config.notes == "Release {tag}"

    @pytest.mark.parametrize(
        "data",
        [
            {"bundle": {"command": []}},
            {"bundle": {"command": "npx tauri build"}},
            {"bundle": {"command": ["npx", 3]}},
            {"bundle": {"dir": "src-tauri/target/release"}},
            {"bundle": {"dir": "{target}/{profile}"}},
            {"bundle": {"dir": "{target.name}"}},
            {"release": {"notes": "Release {name}"}},
            {"release": {"notes": "Release {tag.major}"}},
            {"targets": {}},
            {"targets": {"aarch64-apple-darwin": 1}},
            {"targets": {"a": "darwin", "b": "darwin"}},
        ],
    )
    def test_invalid_values_raise(self, data: dict[str, object]) -> None:
        with pytest.raises(ValueError):
            Config.from_dict(data)


class TestLoadConfig:
    def test_valid_file(self, tmp_path: Path) -> None:
        path = tmp_path / "release.toml"
        path.write_text('[release]\nrepo = "acme/sweeper"\n', encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Ok)
        assert result.value.repo == "acme/sweeper"
        assert result.value.bundle.command == DEFAULT_BUNDLE_COMMAND

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / "release.toml")

        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "release.toml"
        path.write_text("[release\n", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message
        assert result.error.path == path

    def test_invalid_structure(self, tmp_path: Path) -> None:
        path = tmp_path / "release.toml"
        path.write_text('[bundle]\ndir = "nowhere"\n', encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "{target}" in result.error.message


class TestLoadProjectConfig:
    def test_absent_file_gives_defaults(self, tmp_path: Path) -> None:
        result = load_project_config(tmp_path)

        assert isinstance(result, Ok)
        assert result.value.bundle.dir == DEFAULT_BUNDLE_DIR
        assert result.value.bundle.archive_suffix == ARCHIVE_SUFFIX
        assert result.value.bundle.signature_suffix == SIGNATURE_SUFFIX

    def test_present_file_is_loaded(self, tmp_path: Path) -> None:
        (tmp_path / "release.toml").write_text("[release]\ninstaller = false\n", encoding="utf-8")

        result = load_project_config(tmp_path)

        assert isinstance(result, Ok)
        assert result.value.installer is False
