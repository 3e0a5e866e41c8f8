"""Specificity resolver: pick the element a click most plausibly meant.

Scores each hit-path entry by size, click proximity to its centre, and
whether its type is one users typically mean. Clicks near a corner of the
winner select the next-ranked candidate instead, so users can reach a
container whose children fill it.

Scores are relative within one call and never compared across calls.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace

from sourcepick.config import Settings
from sourcepick.constants import (
    AREA_SCORE_NUMERATOR,
    AREA_WEIGHT,
    CENTER_WEIGHT,
    INTERNAL_TYPE_NAMES,
    PRIVATE_TYPE_PREFIX,
    SEMANTIC_BONUS,
    USER_FACING_TYPE_NAMES,
    CornerZone,
)
from sourcepick.spatial.schemas import Candidate, HitEntry
from sourcepick.value_objects import Point, Rect

logger = logging.getLogger(__name__)


def is_internal_type(type_name: str) -> bool:
    """Plumbing types that are never user-selectable."""
    return (
        type_name in INTERNAL_TYPE_NAMES
        or type_name.startswith(PRIVATE_TYPE_PREFIX)
    )


def specificity_score(bounds: Rect, click: Point, type_name: str) -> float:
    area = bounds.area
    area_score = AREA_SCORE_NUMERATOR / (area + 1) if area > 0 else 0.0

    local_click = bounds.to_local(click)
    local_center = Point(bounds.width / 2, bounds.height / 2)
    max_distance = Point(0.0, 0.0).distance_to(local_center)
    if max_distance > 0:
        ratio = local_click.distance_to(local_center) / max_distance
        center_score = 1.0 - min(max(ratio, 0.0), 1.0)
    else:
        center_score = 1.0

    bonus = SEMANTIC_BONUS if type_name in USER_FACING_TYPE_NAMES else 0.0
    return area_score * AREA_WEIGHT + center_score * CENTER_WEIGHT + bonus


def rank_candidates(
    hit_path: Sequence[HitEntry],
    click: Point,
    settings: Settings,
) -> list[Candidate]:
    """Score non-internal entries and sort them best first.

    The sort is stable, so equal scores keep hit-path (innermost-first)
    order.
    """
    selectable = [
        entry for entry in hit_path if not is_internal_type(entry.type_name)
    ]

    candidates: list[Candidate] = []
    for i, entry in enumerate(selectable):
        outer = [e.type_name for e in selectable[i + 1 :]]
        candidates.append(
            Candidate(
                id=entry.id,
                bounds=entry.bounds,
                type_name=entry.type_name,
                score=specificity_score(entry.bounds, click, entry.type_name),
                identity=entry.identity,
                ancestor_chain=tuple(outer[: settings.ancestor_chain_cap]),
            )
        )

    candidates.sort(key=lambda c: c.score, reverse=True)
    logger.debug(
        "Ranked %d of %d hit entries: %s",
        len(candidates),
        len(hit_path),
        [f"{c.type_name}={c.score:.3f}" for c in candidates],
    )
    return candidates


def most_specific(
    hit_path: Sequence[HitEntry],
    click: Point,
    settings: Settings,
) -> Candidate | None:
    """Top-ranked candidate, ignoring corner zones."""
    ranked = rank_candidates(hit_path, click, settings)
    return ranked[0] if ranked else None


def corner_zone_size(bounds: Rect, settings: Settings) -> float:
    proportional = min(bounds.width, bounds.height) * settings.corner_zone_ratio
    return min(
        max(proportional, settings.corner_zone_min), settings.corner_zone_max
    )


def detect_corner_zone(
    bounds: Rect, click: Point, settings: Settings
) -> CornerZone:
    """Which corner zone of ``bounds`` (if any) contains ``click``."""
    zone = corner_zone_size(bounds, settings)
    local = bounds.to_local(click)

    near_left = local.x < zone
    near_right = local.x > bounds.width - zone
    near_top = local.y < zone
    near_bottom = local.y > bounds.height - zone

    if near_top and near_left:
        return CornerZone.TOP_LEFT
    if near_top and near_right:
        return CornerZone.TOP_RIGHT
    if near_bottom and near_left:
        return CornerZone.BOTTOM_LEFT
    if near_bottom and near_right:
        return CornerZone.BOTTOM_RIGHT
    return CornerZone.CENTER


def resolve_candidate(
    hit_path: Sequence[HitEntry],
    click: Point,
    settings: Settings,
) -> Candidate | None:
    """Best candidate, redirected to the runner-up on a corner click.

    A sole candidate is returned even when the click is in a corner.
    """
    ranked = rank_candidates(hit_path, click, settings)
    if not ranked:
        return None

    best = ranked[0]
    zone = detect_corner_zone(best.bounds, click, settings)
    if zone != CornerZone.CENTER and len(ranked) > 1:
        logger.debug(
            "Corner %s on %s, redirecting to %s",
            zone,
            best.type_name,
            ranked[1].type_name,
        )
        return replace(ranked[1], corner_zone=zone, corner_redirected=True)

    return replace(best, corner_zone=zone)
