"""Tests for match quality classification."""

from __future__ import annotations

import pytest

from sourcepick.constants import MatchBasis, MatchQuality
from sourcepick.source.cache import SourceCache
from sourcepick.source.quality import classify_match, is_trustworthy
from sourcepick.source.schemas import SourceMatch


def _match(
    basis: MatchBasis,
    confidence: float = 1.0,
    truncated: bool = False,
) -> SourceMatch:
    return SourceMatch(
        path="lib/a.dart",
        line=1,
        column=1,
        code="A()",
        confidence=confidence,
        basis=basis,
        truncated=truncated,
    )


@pytest.mark.parametrize(
    ("basis", "expected"),
    [
        (MatchBasis.UNIQUE, MatchQuality.EXACT),
        (MatchBasis.CREATION_HINT, MatchQuality.EXACT),
        (MatchBasis.CHAIN, MatchQuality.APPROXIMATE),
        (MatchBasis.CONTEXT, MatchQuality.APPROXIMATE),
        (MatchBasis.AMBIGUOUS, MatchQuality.GUESS),
    ],
)
def test_basis_bands(basis: MatchBasis, expected: MatchQuality) -> None:
    assert classify_match(_match(basis)) == expected


def test_boosted_confidence_does_not_raise_quality() -> None:
    match = _match(MatchBasis.AMBIGUOUS, confidence=1.6)
    assert classify_match(match) == MatchQuality.GUESS


def test_truncated_is_degraded_regardless_of_basis() -> None:
    """A boundary that ran to end-of-text is never trusted."""
    match = _match(MatchBasis.UNIQUE, truncated=True)
    assert classify_match(match) == MatchQuality.DEGRADED
    assert is_trustworthy(match) is False


def test_trustworthy() -> None:
    assert is_trustworthy(_match(MatchBasis.CHAIN)) is True
    assert is_trustworthy(_match(MatchBasis.AMBIGUOUS)) is False


class TestCrossFileQuality:
    def test_tied_cross_file_pick_is_a_guess(self) -> None:
        """Equal boosts under a conventional dir never read as EXACT."""
        cache = SourceCache()
        cache.add_source("lib/widgets/a.dart", "Foo(x: 1)\nFoo(x: 2)")
        cache.add_source("lib/widgets/b.dart", "Foo(x: 3)")
        match = cache.find_best_match("Foo")
        assert match is not None
        assert match.confidence == pytest.approx(1.1)
        assert classify_match(match) == MatchQuality.GUESS
        assert is_trustworthy(match) is False

    def test_lone_occurrence_is_exact(self) -> None:
        cache = SourceCache()
        cache.add_source("lib/misc/a.dart", "Foo(x: 1)")
        match = cache.find_best_match("Foo")
        assert match is not None
        assert match.confidence == 0.9
        assert classify_match(match) == MatchQuality.EXACT

    def test_strict_context_winner_is_approximate(self) -> None:
        cache = SourceCache()
        cache.add_source("lib/misc/a.dart", "Foo(x: 1)")
        cache.add_source("lib/widgets/b.dart", "Foo(x: 2)")
        match = cache.find_best_match("Foo")
        assert match is not None
        assert match.path == "lib/widgets/b.dart"
        assert classify_match(match) == MatchQuality.APPROXIMATE


def test_match_helpers() -> None:
    match = SourceMatch(
        path="lib/widgets/editor/panel.dart",
        line=4,
        column=12,
        code="",
        confidence=0.9,
    )
    assert match.location_string == "lib/widgets/editor/panel.dart:4:12"
    assert match.short_path == "editor/panel.dart"
    assert match.is_high_confidence is True
    assert match.basis == MatchBasis.AMBIGUOUS
