"""Per-session instance tracker: stable sibling indices for duplicate types.

Two ``Container`` elements in one column are told apart by the order in
which the session walk registered them. Call ``clear()`` (or
``register_session``) at the start of every inspection sweep; bounds go
stale as soon as the host re-lays-out.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from sourcepick.config import Settings
from sourcepick.constants import UNIQUE_ID_HASH_CHARS
from sourcepick.spatial.schemas import InstanceInfo, TrackedElement
from sourcepick.value_objects import Rect

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackedInstance:
    identity: Any
    bounds: Rect
    registration_order: int


class InstanceTracker:
    """Type name → instances in registration order, for one session."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or Settings()
        self._instances: defaultdict[str, list[TrackedInstance]] = (
            defaultdict(list)
        )
        self._counter = 0

    def register(self, type_name: str, identity: Any, bounds: Rect) -> int:
        """Track one instance; returns its sibling index."""
        siblings = self._instances[type_name]
        siblings.append(TrackedInstance(identity, bounds, self._counter))
        self._counter += 1
        return len(siblings) - 1

    def register_session(self, walker: Iterable[TrackedElement]) -> int:
        """Reset, then register every element with known bounds.

        Returns the number of elements registered.
        """
        self.clear()
        for element in walker:
            if element.bounds is None:
                continue
            self.register(element.type_name, element.identity, element.bounds)
        logger.debug(
            "Session registered %d instance(s) of %d type(s)",
            self.total_tracked,
            len(self._instances),
        )
        return self.total_tracked

    def clear(self) -> None:
        self._instances.clear()
        self._counter = 0

    # ── Lookups ──────────────────────────────────────────

    def sibling_index_of(self, type_name: str, identity: Any) -> int:
        """Index of ``identity`` among its type, or 0 when unknown."""
        for i, instance in enumerate(self._instances.get(type_name, [])):
            if instance.identity == identity:
                return i
        logger.debug("%s identity not tracked, defaulting to 0", type_name)
        return 0

    def sibling_index_by_bounds(
        self,
        type_name: str,
        bounds: Rect,
        tolerance: float | None = None,
    ) -> int:
        """Index of the first instance whose edges all match ``bounds``."""
        if tolerance is None:
            tolerance = self._settings.bounds_tolerance
        for i, instance in enumerate(self._instances.get(type_name, [])):
            if instance.bounds.edges_match(bounds, tolerance):
                return i
        logger.debug("%s bounds not tracked, defaulting to 0", type_name)
        return 0

    def sibling_index(
        self,
        type_name: str,
        identity: Any = None,
        bounds: Rect | None = None,
    ) -> int:
        """Identity lookup when given, else bounds lookup, else 0."""
        if identity is not None:
            return self.sibling_index_of(type_name, identity)
        if bounds is not None:
            return self.sibling_index_by_bounds(type_name, bounds)
        return 0

    def unique_id(
        self,
        type_name: str,
        identity: Any = None,
        bounds: Rect | None = None,
    ) -> str:
        """``{type}_{hash}_{sibling index}``, hashing identity or bounds.

        The hash part is only stable within one process.
        """
        index = self.sibling_index(type_name, identity, bounds)
        key = identity if identity is not None else bounds
        return f"{type_name}_{_short_hash(key)}_{index}"

    def instance_count(self, type_name: str) -> int:
        return len(self._instances.get(type_name, []))

    def instances(self, type_name: str) -> list[InstanceInfo]:
        return [
            InstanceInfo(
                type_name=type_name,
                sibling_index=i,
                bounds=instance.bounds,
                identity=instance.identity,
            )
            for i, instance in enumerate(self._instances.get(type_name, []))
        ]

    @property
    def total_tracked(self) -> int:
        return sum(len(v) for v in self._instances.values())

    @property
    def tracked_types(self) -> set[str]:
        return set(self._instances)


def _short_hash(value: Any) -> str:
    try:
        h = hash(value)
    except TypeError:
        h = id(value)
    bits = UNIQUE_ID_HASH_CHARS * 4
    return f"{h & ((1 << bits) - 1):0{UNIQUE_ID_HASH_CHARS}x}"
