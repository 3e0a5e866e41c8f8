"""Tests for creation-location hint parsing."""

from __future__ import annotations

import pytest

from sourcepick.source.locations import parse_creation_location
from sourcepick.source.schemas import CreationLocation


def test_path_line_and_column() -> None:
    loc = parse_creation_location("Padding ← Column ← lib/screens/home.dart:42:7")
    assert loc == CreationLocation(path="lib/screens/home.dart", line=42, column=7)


def test_file_uri_without_column() -> None:
    loc = parse_creation_location("file:///Users/dev/app/lib/main.dart:10")
    assert loc is not None
    assert loc.path == "/Users/dev/app/lib/main.dart"
    assert loc.line == 10
    assert loc.column is None


def test_package_uri_scheme_is_not_part_of_path() -> None:
    loc = parse_creation_location("(package:app/main.dart:3:4)")
    assert loc == CreationLocation(path="app/main.dart", line=3, column=4)


def test_any_extension_accepted() -> None:
    loc = parse_creation_location("at src/view.tsx:5")
    assert loc is not None
    assert loc.path == "src/view.tsx"


@pytest.mark.parametrize("raw", [None, "", "no location here", "a.dart:0"])
def test_unparseable(raw: str | None) -> None:
    assert parse_creation_location(raw) is None


def test_str_round_trips_hint_format() -> None:
    assert str(CreationLocation(path="a.dart", line=3)) == "a.dart:3"
    assert str(CreationLocation(path="a.dart", line=3, column=9)) == "a.dart:3:9"
