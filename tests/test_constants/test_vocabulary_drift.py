"""Drift guard: fixed vocabularies and Settings defaults stay consistent."""

from sourcepick.config import Settings
from sourcepick.constants import (
    AREA_KEYWORDS,
    CONVENTIONAL_DIRS,
    INTERNAL_TYPE_NAMES,
    LOCATION_KEYWORDS,
    USER_FACING_TYPE_NAMES,
)


class TestVocabularyDrift:
    def test_internal_and_user_facing_disjoint(self) -> None:
        """A type cannot be both filtered out and boosted."""
        overlap = INTERNAL_TYPE_NAMES & USER_FACING_TYPE_NAMES
        assert not overlap, f"Types in both vocabularies: {overlap}"

    def test_keywords_are_lowercase(self) -> None:
        """Matching lowercases chain, hint, and path before comparing."""
        for keyword, fragment in AREA_KEYWORDS.items():
            assert keyword == keyword.lower()
            assert fragment == fragment.lower()
        assert all(k == k.lower() for k in LOCATION_KEYWORDS)

    def test_settings_default_dirs_match_constants(self) -> None:
        assert Settings().conventional_dirs == list(CONVENTIONAL_DIRS)
