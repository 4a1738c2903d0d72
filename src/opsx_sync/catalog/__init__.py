"""Catalog of canonical skill and command templates."""

from opsx_sync.catalog.entries import (
    DEFAULT_CATALOG,
    CommandTemplateEntry,
    SkillTemplateEntry,
    TemplateCatalog,
    build_command_content,
    generate_skill_content,
    get_command_contents,
    get_command_templates,
    get_skill_templates,
)
from opsx_sync.catalog.templates import CommandTemplate, SkillTemplate

__all__ = [
    "DEFAULT_CATALOG",
    "CommandTemplate",
    "CommandTemplateEntry",
    "SkillTemplate",
    "SkillTemplateEntry",
    "TemplateCatalog",
    "build_command_content",
    "generate_skill_content",
    "get_command_contents",
    "get_command_templates",
    "get_skill_templates",
]
