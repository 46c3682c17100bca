"""Tests for attribute estimation."""

import random

import pytest

from draft_scout.models.prospect import PlayerStatus, VeteranPlayer, VisibilityLevel
from draft_scout.models.skill_range import ConfidenceLevel
from draft_scout.services.scorers.attribute_estimator import AttributeEstimator


@pytest.fixture
def estimator(settings):
    return AttributeEstimator(settings)


def test_range_is_never_a_point(estimator):
    """Even a perfect scout on a fully visible subject gets a range."""
    result = estimator.estimate_range(70, 100, 1.0, random.Random(1), base_width=1)
    assert result.width >= 2


def test_range_stays_on_scale_at_extremes(estimator):
    for true_value in (1, 2, 99, 100):
        for seed in range(20):
            result = estimator.estimate_range(true_value, 10, 0.0, random.Random(seed))
            assert 1 <= result.min <= result.max <= 100


def test_width_non_increasing_in_skill(estimator):
    widths = [
        estimator.estimate_range(60, evaluation, 0.5, random.Random(7)).width
        for evaluation in range(0, 101, 5)
    ]
    assert all(a >= b for a, b in zip(widths, widths[1:]))


def test_width_non_increasing_in_visibility(estimator):
    widths = [
        estimator.estimate_range(60, 50, visibility / 10, random.Random(7)).width
        for visibility in range(0, 11)
    ]
    assert all(a >= b for a, b in zip(widths, widths[1:]))


def test_clamping_preserves_width(estimator):
    """A range near the top of the scale is shifted down, not truncated."""
    near_top = estimator.estimate_range(100, 50, 0.5, random.Random(3))
    mid_scale = estimator.estimate_range(50, 50, 0.5, random.Random(3))
    assert near_top.max == 100
    assert near_top.width == mid_scale.width


def test_noise_keeps_true_value_inside_auto_range(estimator):
    for seed in range(50):
        result = estimator.estimate_range(55, 40, 0.5, random.Random(seed))
        assert result.contains(55)


def test_same_seed_same_result(estimator):
    first = estimator.estimate_range(64, 55, 0.4, random.Random(99))
    second = estimator.estimate_range(64, 55, 0.4, random.Random(99))
    assert first == second


def test_confidence_tag_steps_with_width(estimator):
    assert estimator.confidence_for_width(6) == ConfidenceLevel.HIGH
    assert estimator.confidence_for_width(8) == ConfidenceLevel.HIGH
    assert estimator.confidence_for_width(12) == ConfidenceLevel.MEDIUM
    assert estimator.confidence_for_width(30) == ConfidenceLevel.LOW


def test_round_range_within_draft_rounds(estimator):
    for true_round in range(1, 8):
        result = estimator.estimate_round_range(true_round, 20, 0.2, random.Random(true_round))
        assert 1 <= result.min <= result.max <= 7
        assert result.width >= 1


def test_reveal_traits_accounts_for_every_trait(estimator):
    traits = ("fast", "strong", "leader", "film junkie", "route technician", "tall")
    visible, hidden = estimator.reveal_traits(traits, 60, 0.5, random.Random(5))
    assert len(visible) + hidden == len(traits)
    assert len(visible) >= 1
    assert set(visible) <= set(traits)


def test_reveal_traits_prefers_observable(estimator):
    traits = ("leader", "film junkie", "fast", "quiet")
    visible, _ = estimator.reveal_traits(traits, 50, 0.5, random.Random(0))
    assert visible == ("fast",)


def test_reveal_traits_empty(estimator):
    assert estimator.reveal_traits((), 90, 1.0, random.Random(0)) == ((), 0)


def test_focus_estimate_reveals_all_traits(estimator, make_prospect, rng):
    prospect = make_prospect()
    estimate = estimator.estimate_focus(prospect, 60, rng)
    assert estimate.visible_traits == prospect.all_traits
    assert estimate.hidden_trait_count == 0


def test_focus_estimate_narrower_than_auto(estimator, make_prospect):
    prospect = make_prospect(visibility=1.0)
    for evaluation in (10, 50, 95):
        auto = estimator.estimate_auto(prospect, evaluation, random.Random(4))
        focus = estimator.estimate_focus(prospect, evaluation, random.Random(4))
        assert focus.overall.width <= auto.overall.width
        assert focus.round_range.width <= auto.round_range.width


@pytest.mark.parametrize(
    "status,years,expected",
    [
        (PlayerStatus.STARTER, 4, VisibilityLevel.HIGH),
        (PlayerStatus.STARTER, 1, VisibilityLevel.MEDIUM),
        (PlayerStatus.ROTATIONAL, 6, VisibilityLevel.MEDIUM),
        (PlayerStatus.BACKUP, 2, VisibilityLevel.LOW),
        (PlayerStatus.BACKUP, 0, VisibilityLevel.MINIMAL),
        (PlayerStatus.PRACTICE_SQUAD, 3, VisibilityLevel.MINIMAL),
    ],
)
def test_veteran_visibility(estimator, status, years, expected):
    player = VeteranPlayer(
        id="v1",
        name="Vet",
        position="CB",
        team_id="t2",
        age=27,
        years_in_league=years,
        status=status,
        true_overall=75,
        true_physical=70,
        true_technical=78,
    )
    level, factor = estimator.veteran_visibility(player)
    assert level == expected
    assert 0.0 < factor < 1.0
