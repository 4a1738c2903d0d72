"""Markdown command adapters.

Most tools read a markdown file with an optional ``---`` delimited
frontmatter block. Each adapter lists the header fields its tool expects;
tools without frontmatter return no fields and get the plain body.
"""

from __future__ import annotations

from opsx_sync.adapters.base import CommandContent, ToolCommandAdapter
from opsx_sync.adapters.registry import CommandAdapterRegistry


def _quoted(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _tag_list(tags: tuple[str, ...]) -> str:
    return f"[{', '.join(tags)}]"


class MarkdownCommandAdapter(ToolCommandAdapter):
    """Markdown file with a key-value frontmatter block."""

    def header_fields(self, content: CommandContent) -> list[tuple[str, str]]:
        return [("description", content.description)]

    def format_file(self, content: CommandContent) -> str:
        fields = self.header_fields(content)
        if not fields:
            return f"{content.body}\n"
        header = "\n".join(f"{key}: {value}" for key, value in fields)
        return f"---\n{header}\n---\n\n{content.body}\n"


@CommandAdapterRegistry.register
class CrushAdapter(MarkdownCommandAdapter):
    tool_id = "crush"
    display_name = "Crush"
    path_parts = (".crush", "commands", "opsx")
    file_pattern = "{id}.md"

    def header_fields(self, content: CommandContent) -> list[tuple[str, str]]:
        return [
            ("name", content.name),
            ("description", content.description),
            ("category", content.category),
            ("tags", _tag_list(content.tags)),
        ]


@CommandAdapterRegistry.register
class QoderAdapter(CrushAdapter):
    tool_id = "qoder"
    display_name = "Qoder"
    path_parts = (".qoder", "commands", "opsx")


@CommandAdapterRegistry.register
class CodeBuddyAdapter(MarkdownCommandAdapter):
    tool_id = "codebuddy"
    display_name = "CodeBuddy"
    path_parts = (".codebuddy", "commands", "opsx")
    file_pattern = "{id}.md"

    def header_fields(self, content: CommandContent) -> list[tuple[str, str]]:
        return [
            ("name", content.name),
            ("description", _quoted(content.description)),
            ("argument-hint", '"[command arguments]"'),
        ]


@CommandAdapterRegistry.register
class CodexAdapter(MarkdownCommandAdapter):
    tool_id = "codex"
    display_name = "Codex CLI"
    path_parts = (".codex", "prompts")

    def header_fields(self, content: CommandContent) -> list[tuple[str, str]]:
        return [
            ("description", content.description),
            ("argument-hint", "command arguments"),
        ]


@CommandAdapterRegistry.register
class FactoryAdapter(CodexAdapter):
    tool_id = "factory"
    display_name = "Factory Droid"
    path_parts = (".factory", "commands")


@CommandAdapterRegistry.register
class CoStrictAdapter(MarkdownCommandAdapter):
    tool_id = "costrict"
    display_name = "CoStrict"
    path_parts = (".cospec", "openspec", "commands")

    def header_fields(self, content: CommandContent) -> list[tuple[str, str]]:
        return [
            ("description", _quoted(content.description)),
            ("argument-hint", "command arguments"),
        ]


@CommandAdapterRegistry.register
class OpenCodeAdapter(MarkdownCommandAdapter):
    tool_id = "opencode"
    display_name = "OpenCode"
    path_parts = (".opencode", "command")


@CommandAdapterRegistry.register
class GitHubCopilotAdapter(MarkdownCommandAdapter):
    tool_id = "github-copilot"
    display_name = "GitHub Copilot"
    path_parts = (".github", "prompts")
    file_pattern = "opsx-{id}.prompt.md"


@CommandAdapterRegistry.register
class AmazonQAdapter(MarkdownCommandAdapter):
    tool_id = "amazon-q"
    display_name = "Amazon Q Developer"
    path_parts = (".amazonq", "prompts")


@CommandAdapterRegistry.register
class AntigravityAdapter(MarkdownCommandAdapter):
    tool_id = "antigravity"
    display_name = "Antigravity"
    path_parts = (".agent", "workflows")


@CommandAdapterRegistry.register
class ContinueAdapter(MarkdownCommandAdapter):
    tool_id = "continue"
    display_name = "Continue"
    path_parts = (".continue", "prompts")
    file_pattern = "opsx-{id}.prompt"

    def header_fields(self, content: CommandContent) -> list[tuple[str, str]]:
        return [
            ("name", f"opsx-{content.id}"),
            ("description", content.description),
            ("invokable", "true"),
        ]


@CommandAdapterRegistry.register
class KiloCodeAdapter(MarkdownCommandAdapter):
    """Kilo Code workflows are plain markdown without frontmatter."""

    tool_id = "kilocode"
    display_name = "Kilo Code"
    path_parts = (".kilocode", "workflows")

    def header_fields(self, content: CommandContent) -> list[tuple[str, str]]:
        return []


@CommandAdapterRegistry.register
class RooCodeAdapter(MarkdownCommandAdapter):
    """Roo Code commands use a heading and a description paragraph."""

    tool_id = "roocode"
    display_name = "Roo Code"
    path_parts = (".roo", "commands")

    def format_file(self, content: CommandContent) -> str:
        return f"# {content.name}\n\n{content.description}\n\n{content.body}\n"


__all__ = [
    "MarkdownCommandAdapter",
    "AmazonQAdapter",
    "AntigravityAdapter",
    "CodeBuddyAdapter",
    "CodexAdapter",
    "ContinueAdapter",
    "CoStrictAdapter",
    "CrushAdapter",
    "FactoryAdapter",
    "GitHubCopilotAdapter",
    "KiloCodeAdapter",
    "OpenCodeAdapter",
    "QoderAdapter",
    "RooCodeAdapter",
]
