"""Tests for settings loading."""

from draft_scout.config import Settings, get_settings


def test_defaults():
    settings = Settings()
    assert settings.skill_scale == (1, 100)
    assert settings.round_scale == (1, 7)
    assert settings.min_evaluations_for_reliability == 20
    assert settings.min_years_for_tendencies == 5
    assert settings.disagreement_penalties["major"] > 50
    assert settings.rng_seed is None


def test_environment_override(monkeypatch):
    monkeypatch.setenv("SCOUTING_NEAR_HIT_TOLERANCE", "8")
    monkeypatch.setenv("SCOUTING_NEED_MULTIPLIERS", '{"critical": 1.5}')
    settings = Settings()
    assert settings.near_hit_tolerance == 8
    assert settings.need_multipliers == {"critical": 1.5}


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
