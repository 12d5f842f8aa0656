from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from relman.core.project import PROJECT_ENV_VAR


@pytest.fixture(autouse=True)
def _no_project_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(PROJECT_ENV_VAR, raising=False)


@pytest.fixture
def tauri_project(tmp_path: Path) -> Path:
    """Minimal Tauri project: package.json + src-tauri/."""
    root = tmp_path / "app"
    (root / "src-tauri").mkdir(parents=True)
    (root / "package.json").write_text(
        json.dumps({"name": "sweeper", "version": "1.2.3"}), encoding="utf-8"
    )
    return root


def make_bundle(
    root: Path,
    target: str,
    *,
    app_name: str = "Sweeper",
    signature: str = "c2lnbmF0dXJl\n",
) -> Path:
    """Create the updater archive + signature a Tauri build leaves behind."""
    bundle_dir = root / "src-tauri" / "target" / target / "release" / "bundle" / "macos"
    bundle_dir.mkdir(parents=True, exist_ok=True)
    (bundle_dir / f"{app_name}.app").mkdir(exist_ok=True)
    (bundle_dir / f"{app_name}.app.tar.gz").write_bytes(b"archive")
    (bundle_dir / f"{app_name}.app.tar.gz.sig").write_text(signature, encoding="utf-8")
    return bundle_dir


@pytest.fixture
def bundle_factory() -> Callable[..., Path]:
    return make_bundle
