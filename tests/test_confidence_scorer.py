"""Tests for confidence scoring and range adjustment."""

import pytest

from draft_scout.models.report import ReportConfidence, ReportKind
from draft_scout.models.skill_range import ConfidenceLevel, SkillRange
from draft_scout.models.track_record import ScoutTendencyProfile, TendencyDirection
from draft_scout.services.scorers.confidence_scorer import ConfidenceScorer


@pytest.fixture
def scorer(settings):
    return ConfidenceScorer(settings)


def test_base_confidence_is_evaluation(scorer):
    assert scorer.base_confidence(73) == 73
    assert scorer.base_confidence(140) == 100


def test_time_confidence_diminishing(scorer):
    half = scorer.time_confidence(2.5, ReportKind.AUTO)
    expected = scorer.time_confidence(5, ReportKind.AUTO)
    beyond = scorer.time_confidence(10, ReportKind.AUTO)
    assert half == pytest.approx(35.0)
    assert expected == pytest.approx(70.0)
    assert beyond == pytest.approx(100.0)
    assert scorer.time_confidence(50, ReportKind.AUTO) == pytest.approx(100.0)


def test_ample_auto_time_is_scant_for_focus(scorer):
    assert scorer.time_confidence(10, ReportKind.AUTO) > scorer.time_confidence(10, ReportKind.FOCUS)


def test_region_bonus(scorer, settings):
    assert scorer.region_bonus("northeast", "northeast") == settings.region_bonus
    assert scorer.region_bonus(None, "northeast") == settings.region_bonus / 2
    assert scorer.region_bonus("midwest", "northeast") == 0.0


def test_specialty_bonus(scorer, settings):
    assert scorer.specialty_bonus("WR", "WR") == settings.position_specialty_bonus
    assert scorer.specialty_bonus(None, "WR") == settings.position_specialty_bonus / 2
    assert scorer.specialty_bonus("QB", "WR") == 0.0


def test_tendency_penalty_proportional_and_never_bonus(scorer):
    weak = ScoutTendencyProfile(direction=TendencyDirection.OPTIMISTIC, strength=25)
    strong = ScoutTendencyProfile(direction=TendencyDirection.PESSIMISTIC, strength=100)
    neutral = ScoutTendencyProfile(strength=80)

    assert scorer.tendency_penalty(None) == 0.0
    assert scorer.tendency_penalty(neutral) == 0.0
    assert 0 < scorer.tendency_penalty(weak) < scorer.tendency_penalty(strong)
    assert scorer.tendency_penalty(strong) == pytest.approx(0.2)


def test_focus_more_confident_than_auto(scorer, make_scout):
    scout = make_scout(evaluation=65, region="northeast")
    auto = scorer.score_confidence(scout, ReportKind.AUTO, 3, "northeast", "WR")
    focus = scorer.score_confidence(scout, ReportKind.FOCUS, 45, "northeast", "WR")
    assert focus.score > auto.score


def test_regional_match_raises_confidence(scorer, make_scout):
    local = make_scout(region="northeast")
    remote = make_scout(region="southwest")
    assert (
        scorer.score_confidence(local, ReportKind.AUTO, 3, "northeast", "WR").score
        > scorer.score_confidence(remote, ReportKind.AUTO, 3, "northeast", "WR").score
    )


def test_tendency_lowers_confidence(scorer, make_scout):
    scout = make_scout(evaluation=80)
    biased = ScoutTendencyProfile(direction=TendencyDirection.OPTIMISTIC, strength=60)
    plain = scorer.score_confidence(scout, ReportKind.FOCUS, 45, None, "WR")
    penalized = scorer.score_confidence(scout, ReportKind.FOCUS, 45, None, "WR", biased)
    assert penalized.score < plain.score
    assert any(f.name == "Scout Tendency" and f.impact == "negative" for f in penalized.factors)


def test_score_bounded_and_levels(scorer, make_scout):
    elite = make_scout(evaluation=100, region="northeast", specialty="WR")
    poor = make_scout(evaluation=1, region="midwest", specialty="QB")
    high = scorer.score_confidence(elite, ReportKind.FOCUS, 60, "northeast", "WR")
    low = scorer.score_confidence(poor, ReportKind.AUTO, 0, "northeast", "WR")

    assert 0 <= low.score <= high.score <= 100
    assert high.level == ConfidenceLevel.HIGH
    assert low.level == ConfidenceLevel.LOW


def test_factors_itemized(scorer, make_scout):
    scout = make_scout(evaluation=85, region="northeast", specialty="WR")
    confidence = scorer.score_confidence(scout, ReportKind.FOCUS, 45, "northeast", "WR")
    names = [f.name for f in confidence.factors]
    assert names == [
        "Scout Quality",
        "Time Invested",
        "Scouting Depth",
        "Regional Knowledge",
        "Position Expertise",
    ]


def test_adjust_range_keeps_center_and_bounds_narrowing(scorer, settings):
    original = SkillRange(40, 60)
    confident = ReportConfidence(score=100, level=ConfidenceLevel.HIGH)
    adjusted = scorer.adjust_range(original, confident)

    assert adjusted.midpoint == pytest.approx(original.midpoint, abs=0.5)
    assert adjusted.width < original.width
    assert adjusted.width >= original.width * (1 - settings.max_range_narrowing)


def test_adjust_range_low_confidence_widens(scorer):
    original = SkillRange(40, 60)
    shaky = ReportConfidence(score=10, level=ConfidenceLevel.LOW)
    assert scorer.adjust_range(original, shaky).width > original.width


def test_adjust_range_respects_scale(scorer):
    shaky = ReportConfidence(score=0, level=ConfidenceLevel.LOW)
    adjusted = scorer.adjust_range(SkillRange(85, 100), shaky)
    assert adjusted.max <= 100
    assert adjusted.min >= 1


def test_narrowing_factor_non_increasing(scorer):
    factors = [
        scorer.narrowing_factor(ReportConfidence(score=s, level=ConfidenceLevel.LOW))
        for s in range(0, 101, 5)
    ]
    assert all(a >= b for a, b in zip(factors, factors[1:]))


def test_aggregate_confidence(scorer, make_report):
    reports = [
        make_report(scout_id="s1", confidence=60),
        make_report(scout_id="s2", confidence=70),
        make_report(scout_id="s3", confidence=50),
    ]
    aggregated = scorer.aggregate_confidence(reports)
    assert aggregated.combined_score == pytest.approx(70.0)
    assert aggregated.divergence == 20
    assert aggregated.consensus_strength == "moderate"
    assert aggregated.report_count == 3


def test_aggregate_confidence_empty(scorer):
    aggregated = scorer.aggregate_confidence([])
    assert aggregated.combined_score == 0
    assert aggregated.level == ConfidenceLevel.LOW


def test_confidence_improvement(scorer):
    current = ReportConfidence(score=50, level=ConfidenceLevel.MEDIUM)
    small = scorer.confidence_improvement(current, 6)
    upgrade = scorer.confidence_improvement(current, 6, upgrading_to_focus=True)
    assert small.gain == 2
    assert not small.is_worthwhile
    assert upgrade.projected_score == 72
    assert upgrade.is_worthwhile
