"""Exception hierarchy for opsx-sync."""

from __future__ import annotations


class OpsxSyncError(Exception):
    """Base exception for opsx-sync errors."""
    pass


class UnknownToolError(OpsxSyncError, KeyError):
    """Adapter lookup for a tool id that has no registered adapter."""

    def __init__(self, tool_id: str, known: list[str] | None = None):
        self.tool_id = tool_id
        self.known = sorted(known or [])
        message = f"Unknown tool: {tool_id}"
        if self.known:
            message += f". Valid tools: {', '.join(self.known)}"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class MalformedVersionMarkerError(OpsxSyncError):
    """A generated-by marker is present but its version does not parse."""

    def __init__(self, raw_value: str):
        self.raw_value = raw_value
        super().__init__(f"Malformed version marker: {raw_value!r}")


class MalformedArtifactError(OpsxSyncError):
    """A generated artifact exists but its structured fields cannot be parsed."""
    pass


class GlobalConfigError(OpsxSyncError):
    """Raised when the global config file cannot be parsed or validated."""
    pass


__all__ = [
    "OpsxSyncError",
    "UnknownToolError",
    "MalformedVersionMarkerError",
    "MalformedArtifactError",
    "GlobalConfigError",
]
