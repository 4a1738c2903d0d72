"""Generated-by version markers.

Every generated artifact carries exactly one marker line in its body::

    <!-- opsx-sync: generated by version 3 -->

The marker is the only staleness signal. Adapters must keep the body
verbatim so that :func:`extract_generated_by_version` can recover it from
any tool's output format.
"""

from __future__ import annotations

import re

from packaging.version import InvalidVersion, Version

from opsx_sync.exceptions import MalformedVersionMarkerError

MARKER_PREFIX = "opsx-sync: generated by version"

_MARKER_RE = re.compile(
    r"<!--\s*opsx-sync:\s*generated by version\s+(?P<version>[^\s>]*)\s*-->"
)


def render_marker(version: str) -> str:
    """Return the marker line for ``version``."""
    return f"<!-- {MARKER_PREFIX} {version} -->"


def embed_marker(body: str, version: str) -> str:
    """Prefix ``body`` with the marker line for ``version``."""
    return f"{render_marker(version)}\n\n{body}"


def parse_version(value: str) -> Version:
    """Parse a marker or catalog version into a totally ordered value."""
    try:
        return Version(value.strip())
    except (InvalidVersion, AttributeError) as exc:
        raise MalformedVersionMarkerError(str(value)) from exc


def extract_generated_by_version(text: str) -> str | None:
    """Return the marker version found in ``text``.

    Returns None when no marker line is present. Raises
    MalformedVersionMarkerError when a marker line is present but its
    version is empty or not a valid version string.
    """
    match = _MARKER_RE.search(text)
    if match is None:
        return None
    raw = match.group("version")
    if not raw:
        raise MalformedVersionMarkerError(raw)
    parse_version(raw)
    return raw


__all__ = [
    "MARKER_PREFIX",
    "render_marker",
    "embed_marker",
    "parse_version",
    "extract_generated_by_version",
]
