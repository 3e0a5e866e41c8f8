"""Pydantic models for source correlation output."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from sourcepick.constants import Confidence, MatchBasis, MatchKind


class Boundary(BaseModel):
    """Half-open span ``[start_offset, end_offset)`` of one construction call.

    ``code`` is exactly ``content[start_offset:end_offset]``. ``truncated``
    is set when the bracket group never closed and the span runs to
    end-of-text.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    start_offset: int
    end_offset: int
    code: str
    truncated: bool = False


class Occurrence(BaseModel):
    """One located construction site; line and column are 1-based."""

    model_config = ConfigDict(frozen=True)

    type_name: str
    line: int
    column: int
    boundary: Boundary
    is_const: bool = False

    @property
    def start_offset(self) -> int:
        return self.boundary.start_offset

    @property
    def end_offset(self) -> int:
        return self.boundary.end_offset


class SourceLocation(BaseModel):
    """Single-text lookup result; ``path`` is filled in by the caller."""

    path: str = ""
    line: int
    column: int
    code: str
    confidence: float

    @property
    def is_exact(self) -> bool:
        return self.confidence > Confidence.EXACT_THRESHOLD

    @property
    def is_approximate(self) -> bool:
        return (
            Confidence.GUESS_THRESHOLD
            < self.confidence
            <= Confidence.EXACT_THRESHOLD
        )


class SourceMatch(BaseModel):
    """A cached-file match for a type name.

    ``confidence`` starts from a base value and may be boosted past 1.0 by
    context heuristics; compare matches only within one query. ``basis``
    records how the site was chosen and is what trust labels derive from.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    line: int
    column: int
    code: str
    confidence: float
    kind: MatchKind = MatchKind.INSTANTIATION
    basis: MatchBasis = MatchBasis.AMBIGUOUS
    truncated: bool = False

    @property
    def location_string(self) -> str:
        return f"{self.path}:{self.line}:{self.column}"

    @property
    def short_path(self) -> str:
        """Last two path segments."""
        parts = self.path.split("/")
        if len(parts) > 2:
            return "/".join(parts[-2:])
        return self.path

    @property
    def is_high_confidence(self) -> bool:
        return self.confidence > Confidence.HIGH_THRESHOLD


class CreationLocation(BaseModel):
    """``path:line[:column]`` parsed from a framework debug string."""

    model_config = ConfigDict(frozen=True)

    path: str
    line: int
    column: int | None = None

    def __str__(self) -> str:
        if self.column is not None:
            return f"{self.path}:{self.line}:{self.column}"
        return f"{self.path}:{self.line}"
