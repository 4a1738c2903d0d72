"""Template catalog: which skills and commands exist, and at which version.

Versions are per identifier and only ever move forward. They are compared
with :class:`packaging.version.Version`, so plain integers ("3") and dotted
versions ("1.2") both work.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from typing import Callable

from opsx_sync.adapters.base import CommandContent
from opsx_sync.catalog import templates as t
from opsx_sync.core.markers import embed_marker, parse_version


@dataclass(frozen=True)
class SkillTemplateEntry:
    """A skill in the catalog.

    Attributes:
        id: Workflow identifier shared with the matching command.
        dir_name: Directory name under ``<tool>/skills/``.
        version: Current canonical version.
        template: Zero-argument factory returning the skill content.
    """

    id: str
    dir_name: str
    version: str
    template: Callable[[], t.SkillTemplate]


@dataclass(frozen=True)
class CommandTemplateEntry:
    """A slash command in the catalog."""

    id: str
    version: str
    template: Callable[[], t.CommandTemplate]


@dataclass(frozen=True)
class TemplateCatalog:
    """Immutable set of skill and command entries."""

    skills: tuple[SkillTemplateEntry, ...] = field(default_factory=tuple)
    commands: tuple[CommandTemplateEntry, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        for kind, entries in (("skill", self.skills), ("command", self.commands)):
            seen: set[str] = set()
            for entry in entries:
                if entry.id in seen:
                    raise ValueError(f"Duplicate {kind} id in catalog: {entry.id}")
                seen.add(entry.id)
                parse_version(entry.version)

    def with_version(self, artifact_id: str, version: str) -> "TemplateCatalog":
        """Return a copy with ``artifact_id`` bumped to ``version`` in both sections."""
        return TemplateCatalog(
            skills=tuple(
                replace(entry, version=version) if entry.id == artifact_id else entry
                for entry in self.skills
            ),
            commands=tuple(
                replace(entry, version=version) if entry.id == artifact_id else entry
                for entry in self.commands
            ),
        )


DEFAULT_CATALOG = TemplateCatalog(
    skills=(
        SkillTemplateEntry("explore", "openspec-explore", "3", t.get_explore_skill_template),
        SkillTemplateEntry("new", "openspec-new-change", "2", t.get_new_change_skill_template),
        SkillTemplateEntry("continue", "openspec-continue-change", "2", t.get_continue_change_skill_template),
        SkillTemplateEntry("apply", "openspec-apply-change", "2", t.get_apply_change_skill_template),
        SkillTemplateEntry("ff", "openspec-ff-change", "1", t.get_ff_change_skill_template),
        SkillTemplateEntry("sync", "openspec-sync-specs", "1", t.get_sync_specs_skill_template),
        SkillTemplateEntry("archive", "openspec-archive-change", "2", t.get_archive_change_skill_template),
        SkillTemplateEntry(
            "bulk-archive", "openspec-bulk-archive-change", "1", t.get_bulk_archive_change_skill_template
        ),
        SkillTemplateEntry("verify", "openspec-verify-change", "1", t.get_verify_change_skill_template),
    ),
    commands=(
        CommandTemplateEntry("explore", "3", t.get_opsx_explore_command_template),
        CommandTemplateEntry("new", "2", t.get_opsx_new_command_template),
        CommandTemplateEntry("continue", "2", t.get_opsx_continue_command_template),
        CommandTemplateEntry("apply", "2", t.get_opsx_apply_command_template),
        CommandTemplateEntry("ff", "1", t.get_opsx_ff_command_template),
        CommandTemplateEntry("sync", "1", t.get_opsx_sync_command_template),
        CommandTemplateEntry("archive", "2", t.get_opsx_archive_command_template),
        CommandTemplateEntry("bulk-archive", "1", t.get_opsx_bulk_archive_command_template),
        CommandTemplateEntry("verify", "1", t.get_opsx_verify_command_template),
    ),
)


def get_skill_templates(catalog: TemplateCatalog | None = None) -> list[SkillTemplateEntry]:
    """Return skill entries in catalog order."""
    return list((catalog or DEFAULT_CATALOG).skills)


def get_command_templates(catalog: TemplateCatalog | None = None) -> list[CommandTemplateEntry]:
    """Return command entries in catalog order."""
    return list((catalog or DEFAULT_CATALOG).commands)


def build_command_content(entry: CommandTemplateEntry) -> CommandContent:
    """Render one command entry, with its version marker, into CommandContent."""
    template = entry.template()
    return CommandContent(
        id=entry.id,
        name=template.name,
        description=template.description,
        category=template.category,
        tags=tuple(template.tags),
        body=embed_marker(template.content, entry.version),
    )


def get_command_contents(catalog: TemplateCatalog | None = None) -> list[CommandContent]:
    """Return CommandContent for every command entry."""
    return [build_command_content(entry) for entry in get_command_templates(catalog)]


def generate_skill_content(entry: SkillTemplateEntry) -> str:
    """Return the full SKILL.md text for ``entry``.

    String values in the frontmatter are emitted as JSON strings, which are
    valid YAML double-quoted scalars.
    """
    template = entry.template()
    lines = [
        "---",
        f"name: {template.name}",
        f"description: {json.dumps(template.description)}",
        f"license: {template.license}",
        f"compatibility: {json.dumps(template.compatibility)}",
        "metadata:",
        f"  author: {t.DEFAULT_AUTHOR}",
        f"  version: {json.dumps(entry.version)}",
        "---",
        "",
        embed_marker(template.instructions, entry.version),
    ]
    return "\n".join(lines) + "\n"


__all__ = [
    "SkillTemplateEntry",
    "CommandTemplateEntry",
    "TemplateCatalog",
    "DEFAULT_CATALOG",
    "get_skill_templates",
    "get_command_templates",
    "build_command_content",
    "get_command_contents",
    "generate_skill_content",
]
