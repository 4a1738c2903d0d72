"""TOML command adapters (Gemini CLI and derivatives).

File layout::

    description = "One line summary"

    prompt = \"\"\"
    <body>
    \"\"\"

The body sits in a multi-line basic string, so backslashes, embedded
triple quotes and control characters other than tab and newline are escaped
on write and decoded again by :mod:`tomllib` on read.
"""

from __future__ import annotations

import tomllib

from opsx_sync.adapters.base import CommandContent, ToolCommandAdapter
from opsx_sync.adapters.registry import CommandAdapterRegistry
from opsx_sync.exceptions import MalformedArtifactError

# Characters TOML basic strings cannot hold raw, apart from the `keep` exceptions.
_CONTROL_CHARS = frozenset(chr(code) for code in (*range(0x20), 0x7F))


def _escape_control(value: str, keep: str) -> str:
    return "".join(
        f"\\u{ord(char):04X}" if char in _CONTROL_CHARS and char not in keep else char
        for char in value
    )


def _escape_single_line(value: str) -> str:
    value = " ".join(value.splitlines())
    value = value.replace("\\", "\\\\").replace('"', '\\"')
    return _escape_control(value, keep="\t")


def _escape_multiline(value: str) -> str:
    value = value.replace("\\", "\\\\").replace('"""', '""\\"')
    return _escape_control(value, keep="\t\n")


class TomlPromptAdapter(ToolCommandAdapter):
    """TOML file carrying ``description`` and ``prompt`` fields."""

    file_pattern = "{id}.toml"

    def format_file(self, content: CommandContent) -> str:
        description = _escape_single_line(content.description)
        body = _escape_multiline(content.body)
        return f'description = "{description}"\n\nprompt = """\n{body}\n"""\n'

    def extract_body(self, text: str) -> str:
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise MalformedArtifactError(f"Invalid TOML for {self.tool_id}: {exc}") from exc

        prompt = data.get("prompt")
        if not isinstance(prompt, str):
            raise MalformedArtifactError(f"Missing prompt field for {self.tool_id}")
        return prompt


@CommandAdapterRegistry.register
class GeminiAdapter(TomlPromptAdapter):
    tool_id = "gemini"
    display_name = "Gemini CLI"
    path_parts = (".gemini", "commands", "opsx")


@CommandAdapterRegistry.register
class CodeflyAdapter(TomlPromptAdapter):
    tool_id = "codefly"
    display_name = "Codefly"
    path_parts = (".codefly", "commands", "opsx")


@CommandAdapterRegistry.register
class QwenAdapter(TomlPromptAdapter):
    tool_id = "qwen"
    display_name = "Qwen Code"
    path_parts = (".qwen", "commands")
    file_pattern = "opsx-{id}.toml"


__all__ = [
    "TomlPromptAdapter",
    "CodeflyAdapter",
    "GeminiAdapter",
    "QwenAdapter",
]
