"""Parse creation-location hints out of framework debug strings.

Hosts often expose where an element was constructed only as free text,
e.g. ``"Padding ← Column ← lib/screens/home.dart:42:7"``. The first
``path.ext:line[:column]`` found is taken as the hint.
"""

from __future__ import annotations

import re

from sourcepick.source.schemas import CreationLocation

_LOCATION_PATTERN = re.compile(
    r"(?P<path>[^\s:()\[\]'\"]+\.[A-Za-z0-9]+):(?P<line>\d+)(?::(?P<column>\d+))?"
)
_FILE_URI_PREFIX = "file://"


def parse_creation_location(raw: str | None) -> CreationLocation | None:
    """Extract ``path:line[:column]`` from ``raw``, or None."""
    if not raw:
        return None

    match = _LOCATION_PATTERN.search(raw.replace(_FILE_URI_PREFIX, ""))
    if match is None:
        return None

    line = int(match.group("line"))
    if line < 1:
        return None
    column = match.group("column")
    return CreationLocation(
        path=match.group("path"),
        line=line,
        column=int(column) if column else None,
    )
