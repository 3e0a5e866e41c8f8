"""Lexical source correlation: scanner, correlator, cache, hints."""

from sourcepick.source.cache import SourceCache
from sourcepick.source.correlator import (
    ancestor_chain,
    disambiguate,
    find_occurrences,
    find_source_location,
    properties_of,
)
from sourcepick.source.locations import parse_creation_location
from sourcepick.source.quality import classify_match, is_trustworthy
from sourcepick.source.schemas import (
    Boundary,
    CreationLocation,
    Occurrence,
    SourceLocation,
    SourceMatch,
)

__all__ = [
    "Boundary",
    "CreationLocation",
    "Occurrence",
    "SourceCache",
    "SourceLocation",
    "SourceMatch",
    "ancestor_chain",
    "classify_match",
    "disambiguate",
    "find_occurrences",
    "find_source_location",
    "is_trustworthy",
    "parse_creation_location",
    "properties_of",
]
