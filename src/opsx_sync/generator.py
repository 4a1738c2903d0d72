"""Generate tool artifacts from the catalog.

The generator renders catalog entries through a tool's adapter and writes
the result. It only writes for tools the caller selected, only when the
tool is configured, and only for artifacts that detection classifies as
``stale`` or ``not-generated`` (``force`` adds ``up-to-date``). Artifacts
that are ``ahead`` of the catalog are never touched.

Files are rewritten whole. Rendering is deterministic, so regenerating an
up-to-date artifact produces byte-identical output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from opsx_sync.adapters import CommandAdapterRegistry, CommandContent, GeneratedCommand, ToolCommandAdapter
from opsx_sync.catalog import (
    DEFAULT_CATALOG,
    SkillTemplateEntry,
    TemplateCatalog,
    build_command_content,
    generate_skill_content,
)
from opsx_sync.core.global_config import GlobalConfig
from opsx_sync.detection import ArtifactKind, ToolSkillStatus, ToolVersionStatus, get_tool_skill_status
from opsx_sync.exceptions import UnknownToolError

logger = logging.getLogger(__name__)


@dataclass
class ToolSyncResult:
    """Outcome of syncing one tool.

    Attributes:
        tool_id: Tool that was processed.
        configured: False when the tool was skipped as not configured.
        written: Project-relative paths that were (re)written.
        skipped: ``(path, reason)`` pairs left untouched.
        errors: Failures for this tool; other tools are unaffected.
    """

    tool_id: str
    configured: bool = True
    written: list[Path] = field(default_factory=list)
    skipped: list[tuple[Path, str]] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


@dataclass
class SyncReport:
    """Per-tool results of a sync run, ordered by tool id."""

    results: list[ToolSyncResult] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return all(result.success for result in self.results)

    @property
    def written(self) -> list[Path]:
        return [path for result in self.results for path in result.written]

    def for_tool(self, tool_id: str) -> ToolSyncResult | None:
        for result in self.results:
            if result.tool_id == tool_id:
                return result
        return None


def generate_command(content: CommandContent, adapter: ToolCommandAdapter) -> GeneratedCommand:
    """Render one command for one tool."""
    return GeneratedCommand(
        path=adapter.get_file_path(content.id),
        file_content=adapter.format_file(content),
    )


def generate_commands(
    contents: Iterable[CommandContent],
    adapter: ToolCommandAdapter,
) -> list[GeneratedCommand]:
    """Render several commands for one tool."""
    return [generate_command(content, adapter) for content in contents]


def generate_skill_file(entry: SkillTemplateEntry, adapter: ToolCommandAdapter) -> GeneratedCommand:
    """Render one SKILL.md for one tool."""
    return GeneratedCommand(
        path=adapter.get_skill_path(entry.dir_name),
        file_content=generate_skill_content(entry),
    )


def write_generated(project_root: Path, generated: GeneratedCommand) -> Path:
    """Write ``generated`` under ``project_root``, creating parent dirs."""
    target = project_root / generated.path
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(generated.file_content, encoding="utf-8", newline="\n")
    return target


def _render(
    status: ToolSkillStatus,
    adapter: ToolCommandAdapter,
    catalog: TemplateCatalog,
) -> GeneratedCommand:
    if status.kind is ArtifactKind.SKILL:
        skill = next(entry for entry in catalog.skills if entry.id == status.artifact_id)
        return generate_skill_file(skill, adapter)
    command = next(entry for entry in catalog.commands if entry.id == status.artifact_id)
    return generate_command(build_command_content(command), adapter)


def _skip_reason(
    status: ToolSkillStatus,
    config: GlobalConfig,
    force: bool,
    selected: frozenset[str] | None = None,
) -> str | None:
    if selected is not None and status.artifact_id not in selected:
        return "not selected"
    if status.kind is ArtifactKind.SKILL and not config.generates_skills:
        return "skills disabled by delivery setting"
    if status.kind is ArtifactKind.COMMAND and not config.generates_commands:
        return "commands disabled by delivery setting"

    state = status.status
    if state is ToolVersionStatus.AHEAD:
        return (
            f"ahead of catalog (generated {status.generated_version}, "
            f"catalog {status.current_version})"
        )
    if state is ToolVersionStatus.UP_TO_DATE and not force:
        return "up to date"
    return None


def sync_tool(
    project_root: Path,
    tool_id: str,
    config: GlobalConfig,
    catalog: TemplateCatalog | None = None,
    force: bool = False,
    claimed_paths: set[Path] | None = None,
    artifact_ids: Iterable[str] | None = None,
) -> ToolSyncResult:
    """Bring one tool's artifacts up to date.

    Never raises for per-file failures; they are recorded on the result.
    ``artifact_ids`` limits the run to those catalog identifiers; None
    means every identifier.
    ``claimed_paths`` holds absolute paths already written in this run so a
    path is written at most once.
    """
    catalog = catalog or DEFAULT_CATALOG
    claimed = claimed_paths if claimed_paths is not None else set()
    selected = frozenset(artifact_ids) if artifact_ids is not None else None
    result = ToolSyncResult(tool_id=tool_id)

    try:
        statuses = get_tool_skill_status(project_root, tool_id, catalog)
    except UnknownToolError as exc:
        logger.error("%s", exc)
        result.configured = False
        result.errors.append(str(exc))
        return result
    except OSError as exc:
        logger.error("Failed to inspect %s: %s", tool_id, exc)
        result.errors.append(f"Failed to inspect {tool_id}: {exc}")
        return result

    adapter = CommandAdapterRegistry.get(tool_id)
    if not any(status.configured for status in statuses):
        logger.info("Skipping %s: not configured in %s", tool_id, project_root)
        result.configured = False
        return result

    for status in statuses:
        reason = _skip_reason(status, config, force, selected)
        if reason is not None:
            if status.status is ToolVersionStatus.AHEAD:
                logger.warning("Not overwriting %s: %s", status.path, reason)
            result.skipped.append((status.path, reason))
            continue

        generated = _render(status, adapter, catalog)
        target = (project_root / generated.path).resolve()
        if target in claimed:
            result.skipped.append((generated.path, "already written in this run"))
            continue
        claimed.add(target)

        try:
            write_generated(project_root, generated)
        except OSError as exc:
            logger.error("Failed to write %s: %s", generated.path, exc)
            result.errors.append(f"Failed to write {generated.path}: {exc}")
            continue

        logger.info("Wrote %s (%s %s)", generated.path, status.artifact_id, status.current_version)
        result.written.append(generated.path)

    return result


def sync_tools(
    project_root: Path,
    tool_ids: Iterable[str],
    config: GlobalConfig,
    catalog: TemplateCatalog | None = None,
    force: bool = False,
    artifact_ids: Iterable[str] | None = None,
) -> SyncReport:
    """Sync every selected (tool, identifier) pair.

    ``artifact_ids`` narrows the identifiers for every tool in ``tool_ids``.
    One tool's failure never aborts another.
    """
    selected = list(artifact_ids) if artifact_ids is not None else None
    claimed: set[Path] = set()
    report = SyncReport()
    for tool_id in sorted(set(tool_ids)):
        report.results.append(
            sync_tool(
                project_root,
                tool_id,
                config,
                catalog=catalog,
                force=force,
                claimed_paths=claimed,
                artifact_ids=selected,
            )
        )
    return report


__all__ = [
    "ToolSyncResult",
    "SyncReport",
    "generate_command",
    "generate_commands",
    "generate_skill_file",
    "write_generated",
    "sync_tool",
    "sync_tools",
]
