"""opsx-sync: generate OPSX skills and slash commands for many AI tools.

Given a project directory, opsx-sync finds which AI tools are configured,
reads the generated-by marker from artifacts already on disk, and rewrites
the ones that fall behind the template catalog.
"""

from opsx_sync.adapters import CommandAdapterRegistry, CommandContent, ToolCommandAdapter, get_adapter
from opsx_sync.detection import (
    ToolSkillStatus,
    ToolVersionStatus,
    get_all_tool_version_status,
    get_configured_tools,
    get_tool_skill_status,
    get_tool_version_status,
)
from opsx_sync.generator import SyncReport, sync_tools

__version__ = "0.3.0"

__all__ = [
    "CommandAdapterRegistry",
    "CommandContent",
    "ToolCommandAdapter",
    "get_adapter",
    "ToolSkillStatus",
    "ToolVersionStatus",
    "get_all_tool_version_status",
    "get_configured_tools",
    "get_tool_skill_status",
    "get_tool_version_status",
    "SyncReport",
    "sync_tools",
]
