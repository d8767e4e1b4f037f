"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): one Settings per process
    - Analysis limits (clause length, clause count, cache size) live here, not in routes

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Env vars are prefixed RULIAD_ so they cannot collide with host variables
    - Defaults provided for every setting: works out-of-the-box with no .env
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from ruliad.core.scoring_constants import MULTIWAY_MAX_DEPTH_LIMIT


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="RULIAD_", case_sensitive=False,
    )

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    # Analysis
    cache_max_size: int = 100
    multiway_max_depth: int = 2
    equivalence_threshold: float = 0.8
    max_clause_length: int = 10_000
    max_clauses: int = 200

    @field_validator("cache_max_size", "max_clause_length", "max_clauses")
    @classmethod
    def check_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be a positive integer")
        return v

    @field_validator("multiway_max_depth")
    @classmethod
    def check_depth(cls, v: int) -> int:
        # 20 rules: depth 3 is at most 8,421 states, depth 4 up to 168,421
        if not 0 <= v <= MULTIWAY_MAX_DEPTH_LIMIT:
            raise ValueError(f"multiway_max_depth must be between 0 and {MULTIWAY_MAX_DEPTH_LIMIT}")
        return v

    @field_validator("equivalence_threshold")
    @classmethod
    def check_threshold(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError("equivalence_threshold must be in [0, 1]")
        return v

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
