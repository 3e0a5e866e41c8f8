"""Classify source matches by how far callers should trust them.

Confidence values are relative ranking signals that context boosts can
push past 1.0, so trust labels come from how the site was chosen
(``SourceMatch.basis``) rather than from the score. A truncated boundary
(unbalanced brackets, unterminated string or comment) is always
DEGRADED regardless of how it was chosen.
"""

from __future__ import annotations

from sourcepick.constants import MatchBasis, MatchQuality
from sourcepick.source.schemas import SourceMatch

_QUALITY_BY_BASIS: dict[MatchBasis, MatchQuality] = {
    MatchBasis.UNIQUE: MatchQuality.EXACT,
    MatchBasis.CREATION_HINT: MatchQuality.EXACT,
    MatchBasis.CHAIN: MatchQuality.APPROXIMATE,
    MatchBasis.CONTEXT: MatchQuality.APPROXIMATE,
    MatchBasis.AMBIGUOUS: MatchQuality.GUESS,
}


def classify_match(match: SourceMatch) -> MatchQuality:
    """Band a match by its truncation flag and selection basis."""
    if match.truncated:
        return MatchQuality.DEGRADED
    return _QUALITY_BY_BASIS[match.basis]


_TRUSTWORTHY = frozenset({
    MatchQuality.EXACT,
    MatchQuality.APPROXIMATE,
})


def is_trustworthy(match: SourceMatch) -> bool:
    """Return True if the match can be shown without a warning."""
    return classify_match(match) in _TRUSTWORTHY
