"""Tests for the template catalog accessors."""

from __future__ import annotations

import pytest

from opsx_sync.catalog import (
    DEFAULT_CATALOG,
    CommandTemplateEntry,
    TemplateCatalog,
    generate_skill_content,
    get_command_contents,
    get_command_templates,
    get_skill_templates,
)
from opsx_sync.catalog import templates as t
from opsx_sync.core.markers import extract_generated_by_version
from opsx_sync.exceptions import MalformedVersionMarkerError

WORKFLOW_IDS = ["explore", "new", "continue", "apply", "ff", "sync", "archive", "bulk-archive", "verify"]


def test_skill_and_command_ids_match_workflows() -> None:
    assert [entry.id for entry in get_skill_templates()] == WORKFLOW_IDS
    assert [entry.id for entry in get_command_templates()] == WORKFLOW_IDS


def test_skill_dir_names_are_namespaced() -> None:
    assert all(entry.dir_name.startswith("openspec-") for entry in get_skill_templates())


def test_command_contents_embed_catalog_version() -> None:
    versions = {entry.id: entry.version for entry in get_command_templates()}
    for content in get_command_contents():
        assert extract_generated_by_version(content.body) == versions[content.id]


def test_explore_command_content() -> None:
    explore = next(content for content in get_command_contents() if content.id == "explore")
    assert explore.name == "OPSX: Explore"
    assert explore.category == "Workflow"
    assert explore.tags == ("workflow", "explore", "experimental", "thinking")


def test_generate_skill_content_has_frontmatter_and_marker() -> None:
    entry = get_skill_templates()[0]
    text = generate_skill_content(entry)
    assert text.startswith("---\nname: openspec-explore\n")
    assert f'  version: "{entry.version}"\n' in text
    assert extract_generated_by_version(text) == entry.version
    assert text.endswith("\n")


def test_generate_skill_content_is_deterministic() -> None:
    entry = get_skill_templates()[3]
    assert generate_skill_content(entry) == generate_skill_content(entry)


def test_with_version_bumps_both_sections() -> None:
    bumped = DEFAULT_CATALOG.with_version("explore", "4")
    assert next(e for e in bumped.skills if e.id == "explore").version == "4"
    assert next(e for e in bumped.commands if e.id == "explore").version == "4"
    assert next(e for e in DEFAULT_CATALOG.commands if e.id == "explore").version == "3"


def test_catalog_rejects_duplicate_ids() -> None:
    entry = CommandTemplateEntry("explore", "1", t.get_opsx_explore_command_template)
    with pytest.raises(ValueError, match="Duplicate"):
        TemplateCatalog(commands=(entry, entry))


def test_catalog_rejects_invalid_versions() -> None:
    entry = CommandTemplateEntry("explore", "three", t.get_opsx_explore_command_template)
    with pytest.raises(MalformedVersionMarkerError):
        TemplateCatalog(commands=(entry,))
