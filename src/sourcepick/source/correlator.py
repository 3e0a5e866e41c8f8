"""Correlate a type name with the construction sites that create it.

Locates ``TypeName(`` sites in raw source text, extracts each balanced
call span with the lexical scanner, derives a textual ancestor chain by
scanning backwards, and picks among duplicates using an observed chain.

The ancestor chain is a textual approximation of nesting: any call that
precedes the target can appear in it, including unrelated siblings.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sourcepick.constants import (
    ANCESTOR_CHAIN_CAP,
    CONST_KEYWORD,
    PROPERTY_EXCLUDED_KEYS,
    Confidence,
)
from sourcepick.source.scanner import (
    is_identifier_char,
    iter_call_sites,
    match_group,
    skip_whitespace,
    value_end,
)
from sourcepick.source.schemas import Boundary, Occurrence, SourceLocation

logger = logging.getLogger(__name__)


def find_occurrences(text: str, type_name: str) -> list[Occurrence]:
    """Every ``type_name`` in code followed by optional whitespace and ``(``.

    Names inside string literals or comments and names that merely end an
    identifier (``RichText`` for ``Text``) are not occurrences. Nested
    occurrences are reported independently; an outer boundary contains
    the full text of any inner one.
    """
    if not type_name:
        return []

    occurrences: list[Occurrence] = []
    for site in iter_call_sites(text, name=type_name):
        boundary = extract_boundary(
            text, site.start, site.open_paren, type_name
        )
        line, column = line_and_column(text, site.start)
        if boundary.truncated:
            logger.warning(
                "Unbalanced %s( at %d:%d runs to end-of-text",
                type_name,
                line,
                column,
            )
        occurrences.append(
            Occurrence(
                type_name=type_name,
                line=line,
                column=column,
                boundary=boundary,
                is_const=_preceded_by_const(text, site.start),
            )
        )

    logger.debug(
        "Found %d occurrence(s) of %s", len(occurrences), type_name
    )
    return occurrences


def extract_boundary(
    text: str, start: int, open_pos: int, name: str
) -> Boundary:
    """Build the boundary for a call whose name starts at ``start``."""
    span = match_group(text, open_pos)
    return Boundary(
        name=name,
        start_offset=start,
        end_offset=span.end,
        code=text[start : span.end],
        truncated=not span.balanced,
    )


def line_and_column(text: str, offset: int) -> tuple[int, int]:
    """1-based line and column of ``offset``."""
    line = text.count("\n", 0, offset) + 1
    column = offset - text.rfind("\n", 0, offset)
    return line, column


def ancestor_chain(
    text: str,
    boundary: Boundary,
    cap: int = ANCESTOR_CHAIN_CAP,
) -> list[str]:
    """Names of the calls preceding ``boundary``, nearest first."""
    sites = list(iter_call_sites(text, end=boundary.start_offset))
    return [site.name for site in reversed(sites[-cap:])]


def chain_match_score(
    observed: Sequence[str], derived: Sequence[str]
) -> float:
    """Fraction of position-wise equal names over the shorter chain."""
    if not observed or not derived:
        return 0.0
    shortest = min(len(observed), len(derived))
    matches = sum(1 for a, b in zip(observed, derived) if a == b)
    return matches / shortest


def disambiguate(
    occurrences: Sequence[Occurrence],
    observed_chain: Sequence[str],
    text: str,
    cap: int = ANCESTOR_CHAIN_CAP,
) -> Occurrence | None:
    """Pick the occurrence whose derived chain best matches ``observed_chain``.

    Ties keep the earliest occurrence in text order.
    """
    if not occurrences:
        return None
    if len(occurrences) == 1:
        return occurrences[0]

    best = occurrences[0]
    best_score = -1.0
    for occurrence in occurrences:
        derived = ancestor_chain(text, occurrence.boundary, cap)
        score = chain_match_score(observed_chain, derived)
        logger.debug(
            "%s at %d:%d chain=%s score=%.3f",
            occurrence.type_name,
            occurrence.line,
            occurrence.column,
            derived,
            score,
        )
        if score > best_score:
            best_score = score
            best = occurrence
    return best


def properties_of(boundary: Boundary) -> dict[str, str]:
    """Top-level ``name: value`` arguments of the call in ``boundary``."""
    return properties_of_code(boundary.code)


def properties_of_code(code: str) -> dict[str, str]:
    """Top-level ``name: value`` arguments of the first call in ``code``.

    ``child`` and ``children`` are skipped; they hold nested elements.
    Positional arguments are ignored. Later duplicates win.
    """
    open_pos = code.find("(")
    if open_pos == -1:
        return {}

    n = len(code)
    properties: dict[str, str] = {}
    i = open_pos + 1
    while i < n:
        i = skip_whitespace(code, i)
        if i >= n:
            break

        key_end = i
        while key_end < n and is_identifier_char(code[key_end]):
            key_end += 1
        colon = skip_whitespace(code, key_end)

        if key_end > i and colon < n and code[colon] == ":":
            end = value_end(code, colon + 1)
            key = code[i:key_end]
            if key not in PROPERTY_EXCLUDED_KEYS:
                properties[key] = code[colon + 1 : end].strip()
        else:
            end = value_end(code, i)

        # ``end`` sits on a top-level ``,``, the group closer, or end-of-text.
        if end >= n or code[end] != ",":
            break
        i = end + 1

    return properties


def find_source_location(
    text: str,
    type_name: str,
    ancestor_chain_hint: Sequence[str] | None = None,
    cap: int = ANCESTOR_CHAIN_CAP,
) -> SourceLocation | None:
    """Locate ``type_name`` in one text, disambiguating with a chain."""
    occurrences = find_occurrences(text, type_name)
    if not occurrences:
        return None

    best = disambiguate(occurrences, ancestor_chain_hint or [], text, cap)
    if best is None:
        return None

    confidence = (
        Confidence.UNAMBIGUOUS
        if len(occurrences) == 1
        else Confidence.CHAIN_DISAMBIGUATED
    )
    return SourceLocation(
        line=best.line,
        column=best.column,
        code=best.boundary.code,
        confidence=confidence,
    )


def _preceded_by_const(text: str, pos: int) -> bool:
    """True when the keyword ``const`` directly precedes ``pos``."""
    end = pos
    while end > 0 and text[end - 1].isspace():
        end -= 1
    if end == pos:
        return False
    start = end - len(CONST_KEYWORD)
    if start < 0 or text[start:end] != CONST_KEYWORD:
        return False
    return start == 0 or not is_identifier_char(text[start - 1])
