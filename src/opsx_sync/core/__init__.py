"""Core helpers shared by detection and generation."""

from opsx_sync.core.global_config import (
    GLOBAL_CONFIG_DIR_NAME,
    GLOBAL_CONFIG_FILE_NAME,
    GLOBAL_DATA_DIR_NAME,
    GlobalConfig,
    get_global_config,
    get_global_config_dir,
    get_global_config_path,
    get_global_data_dir,
    load_global_config,
    save_global_config,
)
from opsx_sync.core.markers import (
    embed_marker,
    extract_generated_by_version,
    parse_version,
    render_marker,
)

__all__ = [
    "GLOBAL_CONFIG_DIR_NAME",
    "GLOBAL_CONFIG_FILE_NAME",
    "GLOBAL_DATA_DIR_NAME",
    "GlobalConfig",
    "get_global_config",
    "get_global_config_dir",
    "get_global_config_path",
    "get_global_data_dir",
    "load_global_config",
    "save_global_config",
    "embed_marker",
    "extract_generated_by_version",
    "parse_version",
    "render_marker",
]
