# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileWeave — Application Configuration
Matching strictness and runtime settings loaded from environment variables
(prefix TILEWEAVE_) or a local .env file. tile_size is per run and is
passed explicitly, never read from the environment.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TILEWEAVE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ─── Edge Matching ───────────────────────────────────────────────────────
    # Max Euclidean RGBA distance for a border pixel pair to count as equal
    tolerance: float = Field(2.0, ge=0.0)
    # Fraction of border pixels that must match for two edges to be compatible
    match_ratio_threshold: float = Field(0.98, gt=0.0, le=1.0)

    # ─── Concurrency ─────────────────────────────────────────────────────────
    # 1 = sequential; >1 partitions edge extraction and the outer match loop
    max_workers: int = Field(1, ge=1)

    # ─── Logging ─────────────────────────────────────────────────────────────
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached singleton Settings instance."""
    return Settings()
