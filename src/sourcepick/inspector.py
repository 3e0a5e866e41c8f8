"""Inspector facade: click → selected element → exact source span.

Runs the full inspection flow over caller-supplied hit-test data:

1. The specificity resolver picks a candidate (or its corner-redirected
   runner-up) from the hit path.
2. The instance tracker assigns its sibling index and unique id.
3. The source cache maps the type name and ancestor chain to a source
   match, trying a creation-location hint first when one parses.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from sourcepick.config import Settings
from sourcepick.constants import MatchQuality
from sourcepick.source.cache import SourceCache
from sourcepick.source.correlator import properties_of_code
from sourcepick.source.locations import parse_creation_location
from sourcepick.source.quality import classify_match
from sourcepick.source.schemas import SourceMatch
from sourcepick.spatial.resolver import resolve_candidate
from sourcepick.spatial.schemas import Candidate, HitEntry, TrackedElement
from sourcepick.spatial.tracker import InstanceTracker
from sourcepick.value_objects import Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InspectionResult:
    """Everything known about one inspected click."""

    candidate: Candidate
    sibling_index: int
    unique_id: str
    source: SourceMatch | None = None
    properties: dict[str, str] = field(default_factory=dict)
    quality: MatchQuality | None = None

    @property
    def has_source(self) -> bool:
        return self.source is not None


class Inspector:
    """Owns one cache and one tracker for the caller's session."""

    def __init__(
        self,
        cache: SourceCache | None = None,
        tracker: InstanceTracker | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.cache = cache or SourceCache(self.settings)
        self.tracker = tracker or InstanceTracker(self.settings)

    def begin_session(self, walker: Iterable[TrackedElement]) -> int:
        """Rebuild instance tracking from the host's current element tree."""
        return self.tracker.register_session(walker)

    def inspect(
        self,
        hit_path: Sequence[HitEntry],
        click: Point,
        ancestor_chain: Sequence[str] | None = None,
        location_hint: str | None = None,
    ) -> InspectionResult | None:
        """Resolve a click to a candidate and its source, or None."""
        candidate = resolve_candidate(hit_path, click, self.settings)
        if candidate is None:
            logger.debug(
                "No selectable candidate in %d hit entries", len(hit_path)
            )
            return None

        if candidate.identity is not None:
            sibling_index = self.tracker.sibling_index_of(
                candidate.type_name, candidate.identity
            )
            unique_id = self.tracker.unique_id(
                candidate.type_name, identity=candidate.identity
            )
        else:
            sibling_index = self.tracker.sibling_index_by_bounds(
                candidate.type_name, candidate.bounds
            )
            unique_id = self.tracker.unique_id(
                candidate.type_name, bounds=candidate.bounds
            )

        chain = (
            list(ancestor_chain)
            if ancestor_chain is not None
            else list(candidate.ancestor_chain)
        )
        source = self._find_source(candidate.type_name, chain, location_hint)

        logger.info(
            "Selected %s #%d%s → %s",
            candidate.type_name,
            sibling_index,
            " (corner redirect)" if candidate.corner_redirected else "",
            source.location_string if source else "no source",
        )
        return InspectionResult(
            candidate=candidate,
            sibling_index=sibling_index,
            unique_id=unique_id,
            source=source,
            properties=properties_of_code(source.code) if source else {},
            quality=classify_match(source) if source else None,
        )

    def _find_source(
        self,
        type_name: str,
        chain: Sequence[str],
        location_hint: str | None,
    ) -> SourceMatch | None:
        location = parse_creation_location(location_hint)
        if location is not None:
            match = self.cache.find_at_creation_location(type_name, location)
            if match is not None:
                return match
            logger.debug(
                "Creation hint %s did not match %s, falling back",
                location,
                type_name,
            )

        best = self.cache.find_best_match(type_name, chain, location_hint)
        if best is None or not chain:
            return best

        # The cross-file pass picks a file; the chain picks the site in it.
        refined = self.cache.find_in_file(best.path, type_name, chain)
        if refined is None or refined.location_string == best.location_string:
            return best
        return best.model_copy(
            update={
                "line": refined.line,
                "column": refined.column,
                "code": refined.code,
                "kind": refined.kind,
                "truncated": refined.truncated,
            }
        )
