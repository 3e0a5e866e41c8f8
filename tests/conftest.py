"""Shared test fixtures: settings, sample project, loaded cache."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from sourcepick.config import Settings
from sourcepick.ingestion.loader import load_sources
from sourcepick.source.cache import SourceCache

SAMPLE_APP = Path(__file__).resolve().parent / "fixtures" / "sample_app"


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer SOURCEPICK_* variables out of Settings()."""
    for key in list(os.environ):
        if key.startswith("SOURCEPICK_"):
            monkeypatch.delenv(key)


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def sample_root() -> Path:
    return SAMPLE_APP


@pytest.fixture
def sample_cache(settings: Settings) -> SourceCache:
    """Cache holding the four Dart files of the sample app."""
    cache = SourceCache(settings)
    load_sources(cache, SAMPLE_APP, settings)
    return cache
