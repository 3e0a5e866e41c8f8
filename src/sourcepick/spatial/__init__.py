"""Spatial specificity resolution and per-session instance tracking."""

from sourcepick.spatial.resolver import (
    detect_corner_zone,
    most_specific,
    rank_candidates,
    resolve_candidate,
)
from sourcepick.spatial.schemas import (
    Candidate,
    HitEntry,
    InstanceInfo,
    TrackedElement,
)
from sourcepick.spatial.tracker import InstanceTracker

__all__ = [
    "Candidate",
    "HitEntry",
    "InstanceInfo",
    "InstanceTracker",
    "TrackedElement",
    "detect_corner_zone",
    "most_specific",
    "rank_candidates",
    "resolve_candidate",
]
