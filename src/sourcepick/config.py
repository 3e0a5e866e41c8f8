"""Environment-based configuration."""

from __future__ import annotations

import logging
from typing import Annotated, Any, Self

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode

from sourcepick.constants import (
    ANCESTOR_CHAIN_CAP,
    BOUNDS_TOLERANCE,
    CONVENTIONAL_DIRS,
    CORNER_ZONE_MAX,
    CORNER_ZONE_MIN,
    CORNER_ZONE_RATIO,
    DEFAULT_SKIP_DIRECTORIES,
    DEFAULT_SOURCE_EXTENSIONS,
    SNIPPET_MAX_CHARS,
)

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Reads from .env file and ``SOURCEPICK_*`` environment variables."""

    # Logging
    log_level: str = "INFO"

    # Source correlation
    ancestor_chain_cap: int = ANCESTOR_CHAIN_CAP
    snippet_max_chars: int = SNIPPET_MAX_CHARS
    conventional_dirs: Annotated[list[str], NoDecode] = list(
        CONVENTIONAL_DIRS
    )

    # Specificity / corner zone (absolute units)
    corner_zone_ratio: float = CORNER_ZONE_RATIO
    corner_zone_min: float = CORNER_ZONE_MIN
    corner_zone_max: float = CORNER_ZONE_MAX

    # Instance tracking
    bounds_tolerance: float = BOUNDS_TOLERANCE

    # Ingestion
    source_extensions: Annotated[list[str], NoDecode] = list(
        DEFAULT_SOURCE_EXTENSIONS
    )
    skip_directories: Annotated[list[str], NoDecode] = list(
        DEFAULT_SKIP_DIRECTORIES
    )

    @field_validator(
        "conventional_dirs",
        "source_extensions",
        "skip_directories",
        mode="before",
    )
    @classmethod
    def _parse_list(cls, v: Any) -> Any:
        """Accept comma-separated string or JSON array."""
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("source_extensions")
    @classmethod
    def _normalize_extensions(cls, v: list[str]) -> list[str]:
        normalized: list[str] = []
        for ext in v:
            ext = ext.lower()
            if not ext.startswith("."):
                ext = "." + ext
            if ext in normalized:
                logger.warning(
                    "Duplicate extension in SOURCEPICK_SOURCE_EXTENSIONS: %s",
                    ext,
                )
                continue
            normalized.append(ext)
        return normalized

    @field_validator("ancestor_chain_cap", "snippet_max_chars")
    @classmethod
    def _validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("value must be at least 1")
        return v

    @field_validator("bounds_tolerance", "corner_zone_ratio")
    @classmethod
    def _validate_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("value must not be negative")
        return v

    @model_validator(mode="after")
    def _validate_corner_zone(self) -> Self:
        if self.corner_zone_min > self.corner_zone_max:
            raise ValueError(
                "corner_zone_min must not exceed corner_zone_max"
            )
        return self

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "SOURCEPICK_",
        "extra": "ignore",
    }
