"""Load a project's source files into a ``SourceCache``.

Walks the tree in sorted order, pruning hidden and ``skip_directories``
entries and honouring the root ``.gitignore``. Symlinked directories are
not followed; symlinked files resolving outside the root are skipped.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pathspec

from sourcepick.config import Settings
from sourcepick.ingestion import is_binary
from sourcepick.source.cache import SourceCache

logger = logging.getLogger(__name__)


def collect_sources(
    root: Path | str, settings: Settings | None = None
) -> dict[str, str]:
    """Read matching files under ``root``, keyed by relative POSIX path."""
    cfg = settings or Settings()
    root = Path(root)
    extensions = set(cfg.source_extensions)
    ignored = _load_gitignore(root)

    sources: dict[str, str] = {}
    for file_path in _iter_source_files(
        root, set(cfg.skip_directories), ignored
    ):
        if file_path.suffix.lower() not in extensions:
            continue
        if is_binary(file_path):
            logger.debug("Skipping binary file %s", file_path)
            continue

        content = _read_file(file_path)
        if content is None:
            continue
        sources[file_path.relative_to(root).as_posix()] = content

    logger.debug("Collected %d source file(s) under %s", len(sources), root)
    return sources


def load_sources(
    cache: SourceCache,
    root: Path | str,
    settings: Settings | None = None,
) -> int:
    """Add every collected file to ``cache``; returns the file count."""
    sources = collect_sources(root, settings)
    cache.add_sources(sources)
    return len(sources)


def _read_file(path: Path) -> str | None:
    """Read a file as UTF-8 text, returning None on failure."""
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            return f.read()
    except OSError as exc:
        logger.warning("Failed to read %s: %s", path, exc)
        return None


def _iter_source_files(
    root: Path,
    skip_dirs: set[str],
    ignored: pathspec.GitIgnoreSpec,
) -> Iterator[Path]:
    """Yield candidate files top-down, each directory's files sorted.

    Symlinked directories are never entered, so aliases and link cycles
    cannot repeat a subtree. A symlinked file is kept only when it
    resolves inside ``root`` to a file not already yielded.
    """
    resolved_root = root.resolve()
    seen: set[Path] = set()

    for dirpath, dirnames, filenames in root.walk():
        rel_dir = dirpath.relative_to(root)
        dirnames[:] = sorted(
            name
            for name in dirnames
            if not name.startswith(".")
            and name not in skip_dirs
            and not ignored.match_file(f"{(rel_dir / name).as_posix()}/")
        )

        for name in sorted(filenames):
            path = dirpath / name
            if ignored.match_file((rel_dir / name).as_posix()):
                continue
            if path.is_symlink():
                if path.is_dir():
                    logger.debug("Not following directory symlink %s", path)
                    continue
                if not path.resolve().is_relative_to(resolved_root):
                    logger.debug("Skipping symlink outside root: %s", path)
                    continue
            if not path.is_file():
                continue

            resolved = path.resolve()
            if resolved in seen:
                logger.debug("Skipping duplicate of %s: %s", resolved, path)
                continue
            seen.add(resolved)
            yield path


def _load_gitignore(root: Path) -> pathspec.GitIgnoreSpec:
    """Patterns from the root ``.gitignore``; empty when absent or unreadable."""
    gitignore = root / ".gitignore"
    lines: list[str] = []
    if gitignore.is_file():
        try:
            lines = gitignore.read_text(encoding="utf-8").splitlines()
        except OSError as exc:
            logger.warning("Ignoring unreadable %s: %s", gitignore, exc)
    return pathspec.GitIgnoreSpec.from_lines(lines)
