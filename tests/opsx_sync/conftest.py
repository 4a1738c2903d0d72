from __future__ import annotations

from pathlib import Path

import pytest

from opsx_sync.core.global_config import GlobalConfig, clear_global_config_cache


@pytest.fixture(autouse=True)
def isolated_global_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point the global config and data dirs at a temp location."""
    monkeypatch.setenv("OPSX_SYNC_CONFIG_HOME", str(tmp_path / "global-config"))
    monkeypatch.setenv("OPSX_SYNC_DATA_HOME", str(tmp_path / "global-data"))
    clear_global_config_cache()
    yield
    clear_global_config_cache()


@pytest.fixture()
def project(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture()
def config(tmp_path: Path) -> GlobalConfig:
    return GlobalConfig(config_dir=tmp_path / "global-config", data_dir=tmp_path / "global-data")

