"""Tool command adapters.

Each adapter knows, for one external AI tool:
    - where its command files live inside a project
    - the exact file grammar the tool reads
    - how to get the body back out of a file it produced

Supported tools (16 total):
    Markdown frontmatter: amazon-q, antigravity, codebuddy, codex, continue,
    costrict, crush, factory, github-copilot, opencode, qoder
    Plain markdown: kilocode, roocode
    TOML: codefly, gemini, qwen

Adding a tool means subclassing ToolCommandAdapter and registering it;
nothing else inspects tool-specific formats.
"""

from __future__ import annotations

from opsx_sync.adapters.base import (
    SKILL_FILE_NAME,
    CommandContent,
    GeneratedCommand,
    ToolCommandAdapter,
)
from opsx_sync.adapters.markdown import (
    AmazonQAdapter,
    AntigravityAdapter,
    CodeBuddyAdapter,
    CodexAdapter,
    ContinueAdapter,
    CoStrictAdapter,
    CrushAdapter,
    FactoryAdapter,
    GitHubCopilotAdapter,
    KiloCodeAdapter,
    MarkdownCommandAdapter,
    OpenCodeAdapter,
    QoderAdapter,
    RooCodeAdapter,
)
from opsx_sync.adapters.registry import CommandAdapterRegistry
from opsx_sync.adapters.toml_prompt import (
    CodeflyAdapter,
    GeminiAdapter,
    QwenAdapter,
    TomlPromptAdapter,
)


def get_adapter(tool_id: str) -> ToolCommandAdapter:
    """Return the adapter for ``tool_id``.

    Raises:
        UnknownToolError: If tool_id is not recognized.
    """
    return CommandAdapterRegistry.get(tool_id)


__all__ = [
    # Types
    "SKILL_FILE_NAME",
    "CommandContent",
    "GeneratedCommand",
    "ToolCommandAdapter",
    "MarkdownCommandAdapter",
    "TomlPromptAdapter",
    # Adapters
    "AmazonQAdapter",
    "AntigravityAdapter",
    "CodeBuddyAdapter",
    "CodeflyAdapter",
    "CodexAdapter",
    "ContinueAdapter",
    "CoStrictAdapter",
    "CrushAdapter",
    "FactoryAdapter",
    "GeminiAdapter",
    "GitHubCopilotAdapter",
    "KiloCodeAdapter",
    "OpenCodeAdapter",
    "QoderAdapter",
    "QwenAdapter",
    "RooCodeAdapter",
    # Registry
    "CommandAdapterRegistry",
    "get_adapter",
]
