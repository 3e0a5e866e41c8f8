"""Spatial inputs and outputs: hit-path entries, candidates, tracked elements."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from sourcepick.constants import CornerZone
from sourcepick.value_objects import Rect


@dataclass(frozen=True)
class HitEntry:
    """One hit-test path entry supplied by the host, innermost first.

    ``identity`` is an opaque host handle (element, render object, ...);
    it is compared by equality only.
    """

    id: str
    bounds: Rect
    type_name: str
    identity: Any = None


@dataclass(frozen=True)
class Candidate:
    """A scored hit-path entry. Produced fresh per resolution."""

    id: str
    bounds: Rect
    type_name: str
    score: float
    identity: Any = None
    ancestor_chain: tuple[str, ...] = ()
    corner_zone: CornerZone = CornerZone.CENTER
    corner_redirected: bool = False


@dataclass(frozen=True)
class TrackedElement:
    """An element yielded by a host tree walker at session start."""

    type_name: str
    identity: Any
    bounds: Rect | None = None


@dataclass(frozen=True)
class InstanceInfo:
    """Read-only view of one tracked instance."""

    type_name: str
    sibling_index: int
    bounds: Rect
    identity: Any = field(default=None, compare=False)
