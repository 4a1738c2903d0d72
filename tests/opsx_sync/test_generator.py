"""Tests for artifact generation and sync."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest

from opsx_sync import generator
from opsx_sync.adapters import get_adapter
from opsx_sync.catalog import DEFAULT_CATALOG, get_command_contents
from opsx_sync.core.global_config import GlobalConfig
from opsx_sync.core.markers import render_marker
from opsx_sync.detection import ArtifactKind, ToolVersionStatus, get_all_tool_version_status, get_tool_skill_status
from opsx_sync.generator import generate_command, generate_commands, sync_tools

ALL_TOOLS = [
    "amazon-q", "antigravity", "codebuddy", "codefly", "codex", "continue", "costrict", "crush",
    "factory", "gemini", "github-copilot", "kilocode", "opencode", "qoder", "qwen", "roocode",
]


def _configure_all(project: Path) -> None:
    for tool_id in ALL_TOOLS:
        (project / get_adapter(tool_id).config_dir).mkdir(exist_ok=True)


def _snapshot(project: Path) -> dict[str, bytes]:
    return {
        str(path.relative_to(project)): path.read_bytes()
        for path in sorted(project.rglob("*"))
        if path.is_file()
    }


def test_generate_command_uses_adapter_path_and_format() -> None:
    content = get_command_contents()[0]
    adapter = get_adapter("crush")
    generated = generate_command(content, adapter)
    assert generated.path == Path(".crush/commands/opsx/explore.md")
    assert generated.file_content == adapter.format_file(content)


def test_generate_commands_renders_each_content() -> None:
    contents = get_command_contents()
    generated = generate_commands(contents, get_adapter("qwen"))
    assert [g.path.name for g in generated] == [f"opsx-{c.id}.toml" for c in contents]


class TestSyncScenarios:
    def test_explore_not_generated_then_up_to_date(self, project: Path, config: GlobalConfig) -> None:
        (project / ".crush").mkdir()
        explore_path = project / ".crush/commands/opsx/explore.md"

        before = get_tool_skill_status(project, "crush")
        explore = next(s for s in before if s.kind is ArtifactKind.COMMAND and s.artifact_id == "explore")
        assert explore.status is ToolVersionStatus.NOT_GENERATED

        report = sync_tools(project, ["crush"], config)
        assert report.success
        assert explore_path.exists()

        text = explore_path.read_text(encoding="utf-8")
        assert "category: Workflow" in text
        assert "tags: [workflow, explore, experimental, thinking]" in text
        assert render_marker("3") in text

        after = get_tool_skill_status(project, "crush")
        explore = next(s for s in after if s.kind is ArtifactKind.COMMAND and s.artifact_id == "explore")
        assert explore.status is ToolVersionStatus.UP_TO_DATE
        assert explore.generated_version == "3"

    def test_stale_marker_is_rewritten(self, project: Path, config: GlobalConfig) -> None:
        explore_path = project / ".crush/commands/opsx/explore.md"
        explore_path.parent.mkdir(parents=True)
        explore_path.write_text(f"{render_marker('2')}\n\nold\n", encoding="utf-8")

        report = sync_tools(project, ["crush"], config)

        assert Path(".crush/commands/opsx/explore.md") in report.for_tool("crush").written
        text = explore_path.read_text(encoding="utf-8")
        assert render_marker("3") in text
        assert render_marker("2") not in text

    def test_unparsable_gemini_file_is_regenerated(self, project: Path, config: GlobalConfig) -> None:
        path = project / ".gemini/commands/opsx/explore.toml"
        path.parent.mkdir(parents=True)
        path.write_text("description = \n", encoding="utf-8")

        sync_tools(project, ["gemini"], config)

        statuses = get_tool_skill_status(project, "gemini")
        assert {s.status for s in statuses} == {ToolVersionStatus.UP_TO_DATE}


class TestProperties:
    def test_generate_then_detect_is_up_to_date_for_every_tool(self, project: Path, config: GlobalConfig) -> None:
        _configure_all(project)
        report = sync_tools(project, ALL_TOOLS, config)
        assert report.success

        for status in get_all_tool_version_status(project):
            assert status.status is ToolVersionStatus.UP_TO_DATE, status
            assert status.generated_version == status.current_version

    def test_regeneration_is_byte_identical(self, project: Path, config: GlobalConfig) -> None:
        _configure_all(project)
        sync_tools(project, ALL_TOOLS, config)
        first = _snapshot(project)

        report = sync_tools(project, ALL_TOOLS, config, force=True)
        assert report.written
        assert _snapshot(project) == first

    def test_up_to_date_artifacts_are_skipped_without_force(self, project: Path, config: GlobalConfig) -> None:
        (project / ".qwen").mkdir()
        sync_tools(project, ["qwen"], config)

        second = sync_tools(project, ["qwen"], config)
        result = second.for_tool("qwen")
        assert result.written == []
        assert all(reason == "up to date" for _, reason in result.skipped)

    def test_catalog_bump_makes_artifacts_stale(self, project: Path, config: GlobalConfig) -> None:
        (project / ".crush").mkdir()
        sync_tools(project, ["crush"], config)

        bumped = DEFAULT_CATALOG.with_version("explore", "4")
        statuses = get_tool_skill_status(project, "crush", catalog=bumped)
        explore = [s for s in statuses if s.artifact_id == "explore"]
        assert {s.status for s in explore} == {ToolVersionStatus.STALE}

        report = sync_tools(project, ["crush"], config, catalog=bumped)
        written = report.for_tool("crush").written
        assert sorted(p.as_posix() for p in written) == [
            ".crush/commands/opsx/explore.md",
            ".crush/skills/openspec-explore/SKILL.md",
        ]

    def test_unconfigured_tools_are_never_written(self, project: Path, config: GlobalConfig) -> None:
        report = sync_tools(project, ["crush", "gemini"], config)

        assert report.success
        assert not (project / ".crush").exists()
        assert not (project / ".gemini").exists()
        assert all(not result.configured for result in report.results)
        assert list(project.iterdir()) == []


class TestFailureHandling:
    def test_ahead_artifacts_are_left_alone(
        self, project: Path, config: GlobalConfig, caplog: pytest.LogCaptureFixture
    ) -> None:
        path = project / ".crush/commands/opsx/explore.md"
        path.parent.mkdir(parents=True)
        original = f"{render_marker('9')}\n\nfrom the future\n"
        path.write_text(original, encoding="utf-8")

        report = sync_tools(project, ["crush"], config, force=True)

        assert path.read_text(encoding="utf-8") == original
        reasons = dict(report.for_tool("crush").skipped)
        assert reasons[Path(".crush/commands/opsx/explore.md")].startswith("ahead of catalog")
        assert "Not overwriting" in caplog.text

    def test_unknown_tool_does_not_abort_batch(self, project: Path, config: GlobalConfig) -> None:
        (project / ".crush").mkdir()
        report = sync_tools(project, ["notepad", "crush"], config)

        assert not report.success
        assert report.for_tool("notepad").errors
        assert report.for_tool("crush").success
        assert (project / ".crush/commands/opsx/explore.md").exists()

    def test_write_failure_is_reported_per_tool(self, project: Path, config: GlobalConfig) -> None:
        (project / ".qwen").mkdir()
        # A directory where the file should go makes the write fail
        (project / ".crush/commands/opsx/explore.md").mkdir(parents=True)

        report = sync_tools(project, ["crush", "qwen"], config)

        crush = report.for_tool("crush")
        assert len(crush.errors) == 1
        assert "explore.md" in crush.errors[0]
        assert (project / ".crush/commands/opsx/apply.md").exists()
        assert report.for_tool("qwen").success
        assert (project / ".qwen/commands/opsx-explore.toml").exists()
        assert not report.success

    def test_inaccessible_files_do_not_abort_batch(
        self, project: Path, config: GlobalConfig, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (project / ".crush").mkdir()
        (project / ".gemini").mkdir()
        real_is_file = Path.is_file

        def guarded(self: Path) -> bool:
            if ".crush/commands" in self.as_posix():
                raise PermissionError(13, "Permission denied", str(self))
            return real_is_file(self)

        monkeypatch.setattr(Path, "is_file", guarded)

        report = sync_tools(project, ["crush", "gemini"], config)

        assert [r.tool_id for r in report.results] == ["crush", "gemini"]
        assert report.for_tool("gemini").success
        assert (project / ".gemini/commands/opsx/explore.toml").exists()

    def test_inspection_error_is_recorded_per_tool(
        self, project: Path, config: GlobalConfig, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (project / ".crush").mkdir()
        (project / ".gemini").mkdir()
        real_status = generator.get_tool_skill_status

        def failing(project_root: Path, tool_id: str, catalog=None):
            if tool_id == "crush":
                raise PermissionError(13, "Permission denied", str(project_root / ".crush"))
            return real_status(project_root, tool_id, catalog)

        monkeypatch.setattr(generator, "get_tool_skill_status", failing)

        report = sync_tools(project, ["crush", "gemini"], config)

        crush = report.for_tool("crush")
        assert len(crush.errors) == 1
        assert "Permission denied" in crush.errors[0]
        assert not crush.written
        assert report.for_tool("gemini").success
        assert (project / ".gemini/commands/opsx/explore.toml").exists()
        assert not report.success

    def test_results_are_ordered_by_tool_id(self, project: Path, config: GlobalConfig) -> None:
        report = sync_tools(project, ["qwen", "crush", "gemini", "crush"], config)
        assert [r.tool_id for r in report.results] == ["crush", "gemini", "qwen"]


class TestDelivery:
    def test_commands_only(self, project: Path, config: GlobalConfig) -> None:
        (project / ".crush").mkdir()
        sync_tools(project, ["crush"], replace(config, delivery="commands"))

        assert (project / ".crush/commands/opsx/explore.md").exists()
        assert not (project / ".crush/skills").exists()

    def test_skills_only(self, project: Path, config: GlobalConfig) -> None:
        (project / ".crush").mkdir()
        report = sync_tools(project, ["crush"], replace(config, delivery="skills"))

        assert (project / ".crush/skills/openspec-explore/SKILL.md").exists()
        assert not (project / ".crush/commands").exists()
        assert "commands disabled by delivery setting" in dict(report.for_tool("crush").skipped).values()


class TestArtifactSelection:
    def test_only_selected_identifier_is_written(self, project: Path, config: GlobalConfig) -> None:
        (project / ".crush").mkdir()
        report = sync_tools(project, ["crush"], config, artifact_ids=["explore"])

        crush = report.for_tool("crush")
        assert sorted(crush.written) == [
            Path(".crush/commands/opsx/explore.md"),
            Path(".crush/skills/openspec-explore/SKILL.md"),
        ]
        assert not (project / ".crush/commands/opsx/apply.md").exists()
        assert dict(crush.skipped)[Path(".crush/commands/opsx/apply.md")] == "not selected"

    def test_unselected_stale_artifact_stays_stale(self, project: Path, config: GlobalConfig) -> None:
        (project / ".crush").mkdir()
        apply_path = project / ".crush/commands/opsx/apply.md"
        apply_path.parent.mkdir(parents=True)
        apply_path.write_text(f"{render_marker('1')}\n\nold\n", encoding="utf-8")

        sync_tools(project, ["crush"], config, artifact_ids=["explore"])

        assert apply_path.read_text(encoding="utf-8") == f"{render_marker('1')}\n\nold\n"
        statuses = get_tool_skill_status(project, "crush")
        apply_status = next(s for s in statuses if s.kind is ArtifactKind.COMMAND and s.artifact_id == "apply")
        assert apply_status.status is ToolVersionStatus.STALE
