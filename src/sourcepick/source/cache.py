"""Source cache: path-keyed raw texts plus cross-file lookups.

One instance per inspection session. Access is single-threaded; the
caller serializes mutations against lookups.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping, Sequence

from sourcepick.config import Settings
from sourcepick.constants import (
    AREA_KEYWORDS,
    LOCATION_KEYWORDS,
    Boost,
    Confidence,
    MatchBasis,
    MatchKind,
)
from sourcepick.source.correlator import (
    disambiguate,
    find_occurrences,
    line_and_column,
)
from sourcepick.source.schemas import (
    CreationLocation,
    Occurrence,
    SourceMatch,
)

logger = logging.getLogger(__name__)

_LIB_PREFIX = "lib/"


class SourceCache:
    """Raw source texts keyed by normalized path, in insertion order."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or Settings()
        self._sources: dict[str, str] = {}

    # ── Storage ──────────────────────────────────────────

    @staticmethod
    def _normalize_path(path: str) -> str:
        return path[1:] if path.startswith("/") else path

    def add_source(self, path: str, content: str) -> None:
        """Insert or replace the text stored under ``path``."""
        self._sources[self._normalize_path(path)] = content

    def add_sources(self, sources: Mapping[str, str]) -> None:
        for path, content in sources.items():
            self.add_source(path, content)

    def remove_source(self, path: str) -> bool:
        """Drop ``path``; returns False when it was not cached."""
        return self._sources.pop(self._normalize_path(path), None) is not None

    def clear(self) -> None:
        self._sources.clear()

    def has_source(self, path: str) -> bool:
        return self._normalize_path(path) in self._sources

    @property
    def file_count(self) -> int:
        return len(self._sources)

    @property
    def cached_paths(self) -> list[str]:
        return list(self._sources)

    def all_sources(self) -> dict[str, str]:
        """Shallow copy of the path → text map."""
        return dict(self._sources)

    def resolve_path(self, path: str) -> str | None:
        """Map a requested path onto a cached key.

        Tries the exact normalized path, then a ``lib/``-prefixed retry,
        then suffix containment either way. The containment fallback takes
        the first hit in insertion order.
        """
        normalized = self._normalize_path(path)
        if not normalized:
            return None
        if normalized in self._sources:
            return normalized

        if not normalized.startswith(_LIB_PREFIX):
            with_lib = _LIB_PREFIX + normalized
            if with_lib in self._sources:
                logger.debug("Resolved %s via lib/ prefix", path)
                return with_lib

        for cached in self._sources:
            if cached.endswith(normalized) or normalized.endswith(cached):
                logger.debug("Resolved %s by containment → %s", path, cached)
                return cached

        logger.debug("No cached source for %s", path)
        return None

    def get_source(self, path: str) -> str | None:
        resolved = self.resolve_path(path)
        if resolved is None:
            return None
        return self._sources[resolved]

    # ── Lookups ──────────────────────────────────────────

    def find(
        self,
        type_name: str,
        ancestor_chain: Sequence[str] | None = None,
    ) -> SourceMatch | None:
        """First file (in cache order) containing ``type_name`` answers.

        One occurrence → 1.0; several with a chain → disambiguated at
        0.8; several without a chain → the first at 0.5.
        """
        for path in self._sources:
            match = self._find_in(path, type_name, ancestor_chain)
            if match is not None:
                return match
        return None

    def find_in_file(
        self,
        path: str,
        type_name: str,
        ancestor_chain: Sequence[str] | None = None,
    ) -> SourceMatch | None:
        """``find`` restricted to one (fuzzily resolved) file."""
        resolved = self.resolve_path(path)
        if resolved is None:
            return None
        return self._find_in(resolved, type_name, ancestor_chain)

    def _find_in(
        self,
        path: str,
        type_name: str,
        ancestor_chain: Sequence[str] | None,
    ) -> SourceMatch | None:
        content = self._sources[path]
        occurrences = find_occurrences(content, type_name)
        if not occurrences:
            return None

        if len(occurrences) == 1:
            return _to_match(
                path, occurrences[0], Confidence.UNAMBIGUOUS, MatchBasis.UNIQUE
            )

        if ancestor_chain:
            best = disambiguate(
                occurrences,
                ancestor_chain,
                content,
                self._settings.ancestor_chain_cap,
            )
            if best is not None:
                return _to_match(
                    path, best, Confidence.CHAIN_DISAMBIGUATED, MatchBasis.CHAIN
                )

        return _to_match(
            path,
            occurrences[0],
            Confidence.FALLBACK_FIRST,
            MatchBasis.AMBIGUOUS,
        )

    def find_all_occurrences(self, type_name: str) -> list[SourceMatch]:
        """Every occurrence in every cached file, at the cross-file base."""
        found = [
            (path, occurrence)
            for path, content in self._sources.items()
            for occurrence in find_occurrences(content, type_name)
        ]
        basis = MatchBasis.UNIQUE if len(found) == 1 else MatchBasis.AMBIGUOUS
        logger.debug(
            "%s: %d occurrence(s) across %d file(s)",
            type_name,
            len(found),
            len(self._sources),
        )
        return [
            _to_match(path, occurrence, Confidence.CROSS_FILE_BASE, basis)
            for path, occurrence in found
        ]

    def find_best_match(
        self,
        type_name: str,
        ancestor_chain: Sequence[str] | None = None,
        location_hint: str | None = None,
    ) -> SourceMatch | None:
        """Rank every occurrence of ``type_name`` by path/location context.

        A lone occurrence is returned untouched. Otherwise the winner is
        returned with its boosted score as ``confidence``; ties keep the
        first-seen match and mark it ``AMBIGUOUS``.
        """
        candidates = self.find_all_occurrences(type_name)
        if not candidates:
            return None
        if len(candidates) == 1:
            return candidates[0]

        scores: list[float] = []
        for candidate in candidates:
            score = context_score(
                candidate,
                ancestor_chain,
                location_hint,
                self._settings.conventional_dirs,
            )
            logger.debug(
                "%s score=%.2f", candidate.location_string, score
            )
            scores.append(score)

        best_score = max(scores)
        best = candidates[scores.index(best_score)]
        tied = sum(1 for score in scores if math.isclose(score, best_score))
        basis = MatchBasis.CONTEXT if tied == 1 else MatchBasis.AMBIGUOUS
        return best.model_copy(
            update={"confidence": best_score, "basis": basis}
        )

    def find_class_definitions(self, name: str) -> list[SourceMatch]:
        """``class <name> extends`` sites, with a one-line snippet."""
        pattern = re.compile(rf"\bclass\s+{re.escape(name)}\s+extends\b")
        cap = self._settings.snippet_max_chars
        results: list[SourceMatch] = []

        for path, content in self._sources.items():
            for found in pattern.finditer(content):
                line, column = line_and_column(content, found.start())
                line_start = found.start() - column + 1
                line_end = content.find("\n", found.start())
                if line_end == -1:
                    line_end = len(content)
                snippet = content[line_start:line_end].strip()[:cap]
                results.append(
                    SourceMatch(
                        path=path,
                        line=line,
                        column=column,
                        code=snippet,
                        confidence=Confidence.UNAMBIGUOUS,
                        kind=MatchKind.DEFINITION,
                    )
                )

        if len(results) == 1:
            results[0] = results[0].model_copy(
                update={"basis": MatchBasis.UNIQUE}
            )
        return results

    def find_at_creation_location(
        self, type_name: str, location: CreationLocation
    ) -> SourceMatch | None:
        """Occurrence of ``type_name`` on the hinted line of the hinted file.

        With a column hint the nearest column wins.
        """
        path = self.resolve_path(location.path)
        if path is None:
            return None

        on_line = [
            occurrence
            for occurrence in find_occurrences(self._sources[path], type_name)
            if occurrence.line == location.line
        ]
        if not on_line:
            logger.debug(
                "No %s on %s:%d", type_name, path, location.line
            )
            return None

        chosen = on_line[0]
        if location.column is not None:
            column = location.column
            chosen = min(on_line, key=lambda o: abs(o.column - column))
        return _to_match(
            path, chosen, Confidence.UNAMBIGUOUS, MatchBasis.CREATION_HINT
        )


def context_score(
    match: SourceMatch,
    ancestor_chain: Sequence[str] | None,
    location_hint: str | None,
    conventional_dirs: Sequence[str],
) -> float:
    """Base confidence plus additive path/location boosts (unbounded)."""
    score = match.confidence
    path_lower = match.path.lower()

    if ancestor_chain:
        chain_text = " ".join(ancestor_chain).lower()
        for keyword, fragment in AREA_KEYWORDS.items():
            if keyword in chain_text and fragment in path_lower:
                score += Boost.AREA_KEYWORD

    if location_hint:
        hint_lower = location_hint.lower()
        for keyword in LOCATION_KEYWORDS:
            if keyword in hint_lower and keyword in path_lower:
                score += Boost.LOCATION_KEYWORD

    if match.kind == MatchKind.DEFINITION:
        score += Boost.DEFINITION

    if any(d in match.path for d in conventional_dirs):
        score += Boost.CONVENTIONAL_DIR

    return score


def _to_match(
    path: str,
    occurrence: Occurrence,
    confidence: float,
    basis: MatchBasis,
) -> SourceMatch:
    return SourceMatch(
        path=path,
        line=occurrence.line,
        column=occurrence.column,
        code=occurrence.boundary.code,
        confidence=confidence,
        kind=(
            MatchKind.CONST_INSTANTIATION
            if occurrence.is_const
            else MatchKind.INSTANTIATION
        ),
        basis=basis,
        truncated=occurrence.boundary.truncated,
    )
