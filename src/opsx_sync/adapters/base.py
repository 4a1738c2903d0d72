"""Base types for tool command adapters.

This module defines:
    - CommandContent: the tool-neutral description of one command
    - GeneratedCommand: a rendered file ready to be written
    - ToolCommandAdapter: the per-tool path and format contract
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

SKILL_FILE_NAME = "SKILL.md"


@dataclass(frozen=True)
class CommandContent:
    """Tool-neutral content of one command.

    Attributes:
        id: Command identifier (e.g. "explore"), used in file names.
        name: Human-readable command name (e.g. "OPSX: Explore").
        description: Single-line summary.
        category: Grouping label for tools that support one.
        tags: Ordered tags; order is preserved in output.
        body: Pre-rendered body text, including the version marker.
    """

    id: str
    name: str
    description: str
    category: str
    tags: tuple[str, ...]
    body: str


@dataclass(frozen=True)
class GeneratedCommand:
    """A rendered artifact: project-relative path plus exact file text."""

    path: Path
    file_content: str


class ToolCommandAdapter(ABC):
    """Path and format rules for one external tool.

    Subclasses set ``tool_id`` and ``path_parts``/``file_pattern`` and
    implement :meth:`format_file`. Whatever grammar ``format_file`` emits,
    the body must be recoverable by :meth:`extract_body` so that the
    generated-by marker survives the round trip.
    """

    tool_id: str = ""
    display_name: str = ""
    path_parts: tuple[str, ...] = ()
    file_pattern: str = "opsx-{id}.md"

    @property
    def config_dir(self) -> str:
        """Directory whose presence marks the tool as configured."""
        return self.path_parts[0]

    def get_file_path(self, command_id: str) -> Path:
        """Return the project-relative path for ``command_id``."""
        _validate_identifier(command_id)
        return Path(*self.path_parts, self.file_pattern.format(id=command_id))

    def get_skill_path(self, skill_dir_name: str) -> Path:
        """Return the project-relative path of a skill's SKILL.md."""
        _validate_identifier(skill_dir_name)
        return Path(self.config_dir, "skills", skill_dir_name, SKILL_FILE_NAME)

    @abstractmethod
    def format_file(self, content: CommandContent) -> str:
        """Return the exact file text the tool expects for ``content``."""

    def extract_body(self, text: str) -> str:
        """Return the body embedded in a previously formatted file."""
        return text

    def __repr__(self) -> str:
        return f"{type(self).__name__}(tool_id={self.tool_id!r})"


def _validate_identifier(identifier: str) -> None:
    if not identifier or "/" in identifier or "\\" in identifier or identifier in (".", ".."):
        raise ValueError(f"Invalid artifact identifier: {identifier!r}")


__all__ = [
    "SKILL_FILE_NAME",
    "CommandContent",
    "GeneratedCommand",
    "ToolCommandAdapter",
]
