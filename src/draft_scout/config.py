"""Scouting engine configuration via pydantic-settings."""

from functools import lru_cache
from typing import Optional

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Policy constants for estimation, confidence, reveal and ranking.

    Every value can be overridden with a ``SCOUTING_``-prefixed environment
    variable (dicts are read as JSON), e.g. ``SCOUTING_NEAR_HIT_TOLERANCE=8``.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCOUTING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Scales
    skill_min: int = 1
    skill_max: int = 100
    round_min: int = 1
    round_max: int = 7

    # Estimation
    auto_skill_range_width: int = 25
    focus_skill_range_width: int = 10
    auto_round_range_width: int = 2
    focus_round_range_width: int = 1
    auto_noise_fraction: float = 0.4
    focus_noise_fraction: float = 0.2
    auto_trait_reveal_fraction: float = 0.3
    default_visibility: float = 0.5
    min_range_width: int = 2

    # Confidence
    high_confidence_threshold: int = 70
    medium_confidence_threshold: int = 40
    max_range_narrowing: float = 0.5
    max_range_widening: float = 0.25
    region_bonus: float = 0.10
    position_specialty_bonus: float = 0.15
    max_tendency_penalty: float = 0.2
    auto_expected_hours: float = 5.0
    auto_max_hours: float = 10.0
    focus_expected_hours: float = 45.0
    focus_max_hours: float = 60.0
    auto_scouting_hours: float = 3.0
    focus_hours_per_week: float = 15.0

    # Track record and reveal
    min_evaluations_for_reliability: int = 20
    min_years_for_tendencies: int = 5
    min_position_evaluations: int = 5
    min_tendency_sample: int = 5
    min_position_tendency_sample: int = 3
    tendency_delta_threshold: float = 5.0
    near_hit_tolerance: int = 10
    strength_hit_rate: float = 0.7
    weakness_hit_rate: float = 0.3

    # Disagreement
    minor_skill_diff: float = 8.0
    moderate_skill_diff: float = 15.0
    major_skill_diff: float = 25.0
    minor_round_diff: float = 1.0
    major_round_diff: float = 2.0
    character_mismatch_levels: int = 2
    disagreement_penalties: dict[str, float] = {
        "minor": 10.0,
        "moderate": 25.0,
        "major": 60.0,
    }

    # Big board
    need_multipliers: dict[str, float] = {
        "critical": 1.25,
        "important": 1.15,
        "moderate": 1.05,
        "low": 1.0,
        "none": 0.9,
    }
    focus_report_bonus: float = 5.0
    elite_skill_threshold: float = 85.0
    riser_skill_threshold: float = 60.0
    riser_min_round: int = 3
    faller_max_round: int = 2
    faller_confidence_threshold: float = 50.0

    # Per-pick recommendation
    recommendation_focus_bonus: float = 15.0
    role_bias_bonus: float = 10.0

    # Seed for the fallback generator when callers inject none
    rng_seed: Optional[int] = None

    @computed_field
    @property
    def skill_scale(self) -> tuple[int, int]:
        """Inclusive attribute scale as (min, max)."""
        return (self.skill_min, self.skill_max)

    @computed_field
    @property
    def round_scale(self) -> tuple[int, int]:
        """Inclusive draft round scale as (min, max)."""
        return (self.round_min, self.round_max)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
