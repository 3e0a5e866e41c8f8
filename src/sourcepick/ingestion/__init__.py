"""Filesystem ingestion: feed project sources into a cache."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from sourcepick.constants import BINARY_DETECTION_BUFFER

if TYPE_CHECKING:
    from sourcepick.config import Settings
    from sourcepick.source.cache import SourceCache

__all__ = [
    "collect_sources",
    "is_binary",
    "load_sources",
]


def is_binary(path: Path, sniff_bytes: int = BINARY_DETECTION_BUFFER) -> bool:
    """Sniff the head of ``path`` for a NUL byte.

    Files that cannot be opened count as binary so the loader skips them.
    """
    try:
        with path.open("rb") as fh:
            head = fh.read(sniff_bytes)
    except OSError:
        return True
    return b"\0" in head


def collect_sources(
    root: Path | str, settings: Settings | None = None
) -> dict[str, str]:
    """Read project sources under ``root`` keyed by relative path."""
    from sourcepick.ingestion.loader import collect_sources as _impl

    return _impl(root, settings)


def load_sources(
    cache: SourceCache,
    root: Path | str,
    settings: Settings | None = None,
) -> int:
    """Load project sources under ``root`` into ``cache``."""
    from sourcepick.ingestion.loader import load_sources as _impl

    return _impl(cache, root, settings)
