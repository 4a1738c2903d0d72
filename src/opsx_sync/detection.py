"""Tool detection and version comparison.

Detection answers two questions per (tool, artifact) pair:

1. Is the tool configured in this project? A tool counts as configured
   when its config directory (e.g. ``.crush/``) exists.
2. Which catalog version produced the artifact on disk, if any? This is
   read from the generated-by marker only; file contents are never diffed.

Detection never raises for per-file problems. Unreadable files, unparsable
structured data and malformed markers all degrade to ``not-generated`` so
that a status run always covers every tool.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable

from opsx_sync.adapters import CommandAdapterRegistry, ToolCommandAdapter
from opsx_sync.catalog import DEFAULT_CATALOG, TemplateCatalog
from opsx_sync.core.markers import extract_generated_by_version, parse_version
from opsx_sync.exceptions import MalformedArtifactError, MalformedVersionMarkerError

logger = logging.getLogger(__name__)


class ArtifactKind(str, Enum):
    SKILL = "skill"
    COMMAND = "command"


class ToolVersionStatus(str, Enum):
    """Classification of one generated artifact."""

    NOT_CONFIGURED = "not-configured"
    NOT_GENERATED = "not-generated"
    STALE = "stale"
    UP_TO_DATE = "up-to-date"
    AHEAD = "ahead"

    @property
    def needs_update(self) -> bool:
        return self in (ToolVersionStatus.NOT_GENERATED, ToolVersionStatus.STALE)


@dataclass(frozen=True)
class ToolSkillStatus:
    """What detection found for one (tool, artifact) pair.

    Attributes:
        tool_id: Adapter tool id.
        kind: Skill or command.
        artifact_id: Catalog identifier (e.g. "explore").
        path: Project-relative path of the artifact.
        configured: Whether the tool is configured in the project.
        generated_version: Marker version read from disk, or None.
        current_version: Catalog version for artifact_id.
        error: Why a present file was treated as not generated.
    """

    tool_id: str
    kind: ArtifactKind
    artifact_id: str
    path: Path
    configured: bool
    generated_version: str | None
    current_version: str
    error: str | None = None

    @property
    def status(self) -> ToolVersionStatus:
        return get_tool_version_status(self)


def get_tool_version_status(status: ToolSkillStatus) -> ToolVersionStatus:
    """Classify ``status``.

    Precedence: not-configured, then not-generated, then a version
    comparison. ``ahead`` means the file was produced by a newer catalog
    than this one; it is reported and left alone.
    """
    if not status.configured:
        return ToolVersionStatus.NOT_CONFIGURED
    if status.generated_version is None:
        return ToolVersionStatus.NOT_GENERATED

    generated = parse_version(status.generated_version)
    current = parse_version(status.current_version)
    if generated < current:
        return ToolVersionStatus.STALE
    if generated > current:
        return ToolVersionStatus.AHEAD
    return ToolVersionStatus.UP_TO_DATE


_SUMMARY_PRECEDENCE = (
    ToolVersionStatus.AHEAD,
    ToolVersionStatus.STALE,
    ToolVersionStatus.NOT_GENERATED,
    ToolVersionStatus.UP_TO_DATE,
)


def summarize_tool_status(statuses: Iterable[ToolSkillStatus]) -> ToolVersionStatus:
    """Collapse one tool's artifact statuses into a single tool-level status."""
    found = {status.status for status in statuses}
    if not found or found == {ToolVersionStatus.NOT_CONFIGURED}:
        return ToolVersionStatus.NOT_CONFIGURED
    for candidate in _SUMMARY_PRECEDENCE:
        if candidate in found:
            return candidate
    return ToolVersionStatus.NOT_CONFIGURED


def is_tool_configured(project_root: Path, adapter: ToolCommandAdapter) -> bool:
    """Return True when the tool's config directory exists.

    A directory that cannot be inspected counts as not configured.
    """
    config_dir = project_root / adapter.config_dir
    try:
        return config_dir.is_dir()
    except OSError as exc:
        logger.warning("Could not inspect %s: %s", config_dir, exc)
        return False


def get_tool_states(project_root: Path) -> dict[str, bool]:
    """Return ``{tool_id: configured}`` for every registered tool."""
    return {
        adapter.tool_id: is_tool_configured(project_root, adapter)
        for adapter in CommandAdapterRegistry.get_all()
    }


def get_configured_tools(project_root: Path) -> list[str]:
    """Return the ids of configured tools, sorted."""
    return [tool_id for tool_id, configured in get_tool_states(project_root).items() if configured]


def read_generated_version(
    file_path: Path,
    adapter: ToolCommandAdapter,
    kind: ArtifactKind,
) -> tuple[str | None, str | None]:
    """Return ``(version, error)`` for an artifact on disk.

    ``version`` is None when the file is missing or unusable; ``error``
    explains why a present file was unusable.
    """
    try:
        if not file_path.is_file():
            return None, None
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Could not read %s: %s", file_path, exc)
        return None, f"unreadable: {exc}"

    try:
        # SKILL.md files share one format across tools
        body = text if kind is ArtifactKind.SKILL else adapter.extract_body(text)
        version = extract_generated_by_version(body)
    except MalformedArtifactError as exc:
        logger.warning("Unparsable artifact %s: %s", file_path, exc)
        return None, str(exc)
    except MalformedVersionMarkerError as exc:
        logger.warning("%s in %s", exc, file_path)
        return None, str(exc)

    if version is None:
        return None, "no generated-by marker"
    return version, None


def _artifact_targets(
    adapter: ToolCommandAdapter,
    catalog: TemplateCatalog,
) -> list[tuple[ArtifactKind, str, Path, str]]:
    targets = [
        (ArtifactKind.SKILL, entry.id, adapter.get_skill_path(entry.dir_name), entry.version)
        for entry in catalog.skills
    ]
    targets.extend(
        (ArtifactKind.COMMAND, entry.id, adapter.get_file_path(entry.id), entry.version)
        for entry in catalog.commands
    )
    return targets


def get_tool_skill_status(
    project_root: Path,
    tool_id: str,
    catalog: TemplateCatalog | None = None,
) -> list[ToolSkillStatus]:
    """Return the status of every catalog artifact for one tool.

    Raises:
        UnknownToolError: If tool_id has no adapter. Raised before any
            filesystem access.
    """
    adapter = CommandAdapterRegistry.get(tool_id)
    catalog = catalog or DEFAULT_CATALOG
    configured = is_tool_configured(project_root, adapter)

    results: list[ToolSkillStatus] = []
    for kind, artifact_id, rel_path, current_version in _artifact_targets(adapter, catalog):
        generated_version: str | None = None
        error: str | None = None
        if configured:
            generated_version, error = read_generated_version(project_root / rel_path, adapter, kind)
        results.append(
            ToolSkillStatus(
                tool_id=adapter.tool_id,
                kind=kind,
                artifact_id=artifact_id,
                path=rel_path,
                configured=configured,
                generated_version=generated_version,
                current_version=current_version,
                error=error,
            )
        )
    return results


def get_all_tool_version_status(
    project_root: Path,
    catalog: TemplateCatalog | None = None,
    max_workers: int | None = None,
) -> list[ToolSkillStatus]:
    """Return artifact statuses for every registered tool.

    Tools are inspected concurrently when ``max_workers`` is greater than
    one. Results are ordered by tool id, then catalog order within a tool
    (skills first), regardless of completion order.
    """
    tool_ids = CommandAdapterRegistry.tool_ids()

    def inspect(tool_id: str) -> list[ToolSkillStatus]:
        return get_tool_skill_status(project_root, tool_id, catalog)

    if max_workers is not None and max_workers > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            per_tool = list(executor.map(inspect, tool_ids))
    else:
        per_tool = [inspect(tool_id) for tool_id in tool_ids]

    return [status for statuses in per_tool for status in statuses]


def group_by_tool(statuses: Iterable[ToolSkillStatus]) -> dict[str, list[ToolSkillStatus]]:
    """Group statuses by tool id, preserving order."""
    grouped: dict[str, list[ToolSkillStatus]] = {}
    for status in statuses:
        grouped.setdefault(status.tool_id, []).append(status)
    return grouped


__all__ = [
    "ArtifactKind",
    "ToolVersionStatus",
    "ToolSkillStatus",
    "get_tool_version_status",
    "summarize_tool_status",
    "is_tool_configured",
    "get_tool_states",
    "get_configured_tools",
    "read_generated_version",
    "get_tool_skill_status",
    "get_all_tool_version_status",
    "group_by_tool",
]
