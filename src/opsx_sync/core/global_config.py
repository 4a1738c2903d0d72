"""User-global configuration for opsx-sync.

The configuration lives in ``config.yaml`` inside the global config
directory. It is loaded once per process by :func:`get_global_config` and
then passed explicitly to the functions that need it.

Directory resolution order (config dir; the data dir mirrors it):

1. ``OPSX_SYNC_CONFIG_HOME`` environment variable
2. ``$XDG_CONFIG_HOME/opsx-sync``
3. ``%APPDATA%`` equivalent on Windows (via platformdirs)
4. ``~/.config/opsx-sync`` elsewhere
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from opsx_sync.exceptions import GlobalConfigError

logger = logging.getLogger(__name__)

GLOBAL_CONFIG_DIR_NAME = "opsx-sync"
GLOBAL_CONFIG_FILE_NAME = "config.yaml"
GLOBAL_DATA_DIR_NAME = "opsx-sync"

DELIVERY_CHOICES = ("both", "skills", "commands")


def _is_windows() -> bool:
    return os.name == "nt"


@dataclass(frozen=True)
class GlobalConfig:
    """Process-wide configuration record.

    Attributes:
        config_dir: Directory holding ``config.yaml``.
        data_dir: Directory for generated data owned by opsx-sync.
        delivery: Which artifact kinds to generate (both, skills, commands).
        feature_flags: Opaque boolean switches, persisted as-is.
    """

    config_dir: Path
    data_dir: Path
    delivery: str = "both"
    feature_flags: Mapping[str, bool] = field(default_factory=dict)

    @property
    def config_path(self) -> Path:
        return self.config_dir / GLOBAL_CONFIG_FILE_NAME

    @property
    def generates_skills(self) -> bool:
        return self.delivery in ("both", "skills")

    @property
    def generates_commands(self) -> bool:
        return self.delivery in ("both", "commands")


_CONFIG_LOCK = threading.Lock()
_cached_config: GlobalConfig | None = None


def get_global_config_dir() -> Path:
    """Return the directory that holds the global config file."""
    if env_home := os.environ.get("OPSX_SYNC_CONFIG_HOME"):
        return Path(env_home)
    if xdg := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg) / GLOBAL_CONFIG_DIR_NAME
    if _is_windows():
        from platformdirs import user_config_dir

        return Path(user_config_dir(GLOBAL_CONFIG_DIR_NAME, appauthor=False))
    return Path.home() / ".config" / GLOBAL_CONFIG_DIR_NAME


def get_global_config_path() -> Path:
    """Return the path of the global ``config.yaml``."""
    return get_global_config_dir() / GLOBAL_CONFIG_FILE_NAME


def get_global_data_dir() -> Path:
    """Return the directory for opsx-sync's global data."""
    if env_home := os.environ.get("OPSX_SYNC_DATA_HOME"):
        return Path(env_home)
    if xdg := os.environ.get("XDG_DATA_HOME"):
        return Path(xdg) / GLOBAL_DATA_DIR_NAME
    if _is_windows():
        from platformdirs import user_data_dir

        return Path(user_data_dir(GLOBAL_DATA_DIR_NAME, appauthor=False))
    return Path.home() / ".local" / "share" / GLOBAL_DATA_DIR_NAME


def _read_payload(config_path: Path) -> dict:
    if not config_path.exists():
        return {}

    yaml = YAML()
    try:
        with config_path.open("r", encoding="utf-8") as handle:
            payload = yaml.load(handle) or {}
    except (OSError, YAMLError) as exc:
        raise GlobalConfigError(f"Failed to parse {config_path}: {exc}") from exc

    if not isinstance(payload, dict):
        raise GlobalConfigError(f"Invalid {config_path}: expected a mapping at top level")
    return payload


def load_global_config(
    config_dir: Path | None = None,
    data_dir: Path | None = None,
) -> GlobalConfig:
    """Read the global config from disk without touching the process cache."""
    config_dir = config_dir or get_global_config_dir()
    data_dir = data_dir or get_global_data_dir()
    config_path = config_dir / GLOBAL_CONFIG_FILE_NAME

    payload = _read_payload(config_path)

    delivery = payload.get("delivery", "both")
    if delivery not in DELIVERY_CHOICES:
        raise GlobalConfigError(
            f"Invalid delivery in {config_path}: {delivery!r}. "
            f"Valid values: {', '.join(DELIVERY_CHOICES)}"
        )

    flags = payload.get("feature_flags") or {}
    if not isinstance(flags, dict):
        raise GlobalConfigError(f"Invalid feature_flags in {config_path}: expected a mapping")
    for key, value in flags.items():
        if not isinstance(value, bool):
            raise GlobalConfigError(
                f"Invalid feature flag {key!r} in {config_path}: expected true or false, got {value!r}"
            )

    return GlobalConfig(
        config_dir=config_dir,
        data_dir=data_dir,
        delivery=str(delivery),
        feature_flags={str(key): value for key, value in flags.items()},
    )


def get_global_config() -> GlobalConfig:
    """Return the process-wide config, loading it on first use."""
    global _cached_config
    with _CONFIG_LOCK:
        if _cached_config is None:
            _cached_config = load_global_config()
        return _cached_config


def save_global_config(config: GlobalConfig) -> None:
    """Persist ``config`` to its config dir, preserving unrelated keys."""
    global _cached_config
    with _CONFIG_LOCK:
        config_path = config.config_path
        payload = _read_payload(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        payload["delivery"] = config.delivery
        payload["feature_flags"] = dict(config.feature_flags)

        yaml = YAML()
        yaml.preserve_quotes = True
        with config_path.open("w", encoding="utf-8") as handle:
            yaml.dump(payload, handle)

        logger.info("Saved global config to %s", config_path)
        if _cached_config is not None and _cached_config.config_dir == config.config_dir:
            _cached_config = config


def clear_global_config_cache() -> None:
    """Forget the cached config (for testing)."""
    global _cached_config
    with _CONFIG_LOCK:
        _cached_config = None


__all__ = [
    "GLOBAL_CONFIG_DIR_NAME",
    "GLOBAL_CONFIG_FILE_NAME",
    "GLOBAL_DATA_DIR_NAME",
    "DELIVERY_CHOICES",
    "GlobalConfig",
    "get_global_config_dir",
    "get_global_config_path",
    "get_global_data_dir",
    "load_global_config",
    "get_global_config",
    "save_global_config",
    "clear_global_config_cache",
]
