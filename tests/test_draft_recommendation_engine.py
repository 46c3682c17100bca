"""Tests for per-pick scout recommendations."""

import random

import pytest

from draft_scout.models.rankings import NeedLevel, PositionalNeeds
from draft_scout.models.scout import ScoutRole, add_focus_prospect
from draft_scout.models.skill_range import ConfidenceLevel
from draft_scout.services.draft_recommendation_engine import DraftRecommendationEngine


@pytest.fixture
def engine(settings):
    return DraftRecommendationEngine(settings)


@pytest.fixture
def pool(make_prospect):
    return [
        make_prospect(prospect_id="p1", position="QB", overall=95, projected_round=1),
        make_prospect(prospect_id="p2", position="CB", overall=50, projected_round=5),
        make_prospect(prospect_id="p3", position="WR", overall=40, projected_round=7),
    ]


def test_no_available_prospects(engine, make_scout, rng):
    assert engine.recommend(make_scout(), [], PositionalNeeds(), rng) is None


def test_focus_prospect_is_argued_first(engine, make_scout, pool, rng):
    scout = add_focus_prospect(make_scout(), "p2")
    recommendation = engine.recommend(scout, pool, PositionalNeeds(), rng)

    assert recommendation.prospect_id == "p2"
    assert recommendation.is_focus_prospect
    assert recommendation.confidence == ConfidenceLevel.HIGH
    assert recommendation.components["focus_bonus"] == 15
    assert recommendation.reasoning.startswith("I've spent weeks evaluating Prospect p2")


def test_best_available_without_focus(engine, make_scout, pool, rng):
    recommendation = engine.recommend(make_scout(), pool, PositionalNeeds(), rng)
    assert recommendation.prospect_id == "p1"
    assert not recommendation.is_focus_prospect
    assert recommendation.confidence == ConfidenceLevel.LOW
    assert "best player available" in recommendation.reasoning


def test_medium_confidence_when_focus_list_exhausted(engine, make_scout, pool, rng):
    scout = add_focus_prospect(make_scout(), "gone")
    recommendation = engine.recommend(scout, pool, PositionalNeeds(), rng)
    assert recommendation.confidence == ConfidenceLevel.MEDIUM


def test_role_bias_favours_scout_side(engine, make_scout, make_prospect):
    pool = [
        make_prospect(prospect_id="a", position="WR", overall=70, visibility=1.0),
        make_prospect(prospect_id="b", position="CB", overall=70, visibility=1.0),
    ]
    defensive = make_scout(role=ScoutRole.DEFENSIVE_SCOUT, evaluation=100)
    offensive = make_scout(role=ScoutRole.OFFENSIVE_SCOUT, evaluation=100)

    assert engine.recommend(defensive, pool, PositionalNeeds(), random.Random(2)).prospect_id == "b"
    assert engine.recommend(offensive, pool, PositionalNeeds(), random.Random(2)).prospect_id == "a"


def test_score_components(engine, make_scout, make_prospect):
    prospect = make_prospect(position="CB")
    scout = make_scout(role=ScoutRole.DEFENSIVE_SCOUT)
    estimate = engine._estimate(prospect, scout, False, random.Random(1))
    needs = PositionalNeeds({"CB": NeedLevel.CRITICAL})

    components = engine.score_prospect(prospect, scout, estimate, needs, focus=False)
    assert components["role_bias"] == 10
    assert components["need_multiplier"] == 1.25
    assert components["total"] == pytest.approx(estimate.midpoint * 1.25 + 10, abs=0.01)


def test_unanimous_when_every_scout_agrees(engine, make_scout, pool, rng):
    scouts = [
        add_focus_prospect(make_scout(scout_id="s1"), "p3"),
        add_focus_prospect(make_scout(scout_id="s2", role=ScoutRole.OFFENSIVE_SCOUT), "p3"),
    ]
    result = engine.generate_pick_recommendations(scouts, pool, PositionalNeeds(), 12, 1, rng)

    assert result.unanimous
    assert result.consensus_prospect_id == "p3"
    assert [r.scout_id for r in result.recommendations] == ["s1", "s2"]
    assert result.to_dict()["pick_number"] == 12


def test_single_scout_is_not_unanimous(engine, make_scout, pool, rng):
    result = engine.generate_pick_recommendations([make_scout()], pool, PositionalNeeds(), 1, 1, rng)
    assert len(result.recommendations) == 1
    assert not result.unanimous
    assert result.consensus_prospect_id is None


def test_split_recommendations(engine, make_scout, pool, rng):
    scouts = [
        add_focus_prospect(make_scout(scout_id="s1"), "p2"),
        add_focus_prospect(make_scout(scout_id="s2"), "p3"),
    ]
    result = engine.generate_pick_recommendations(scouts, pool, PositionalNeeds(), 1, 1, rng)
    assert not result.unanimous
    assert {r.prospect_id for r in result.recommendations} == {"p2", "p3"}


def test_auto_pick_prefers_focus_prospects(engine, make_scout, pool, rng):
    head = make_scout(scout_id="head")
    area = add_focus_prospect(make_scout(scout_id="area", role=ScoutRole.DEFENSIVE_SCOUT), "p2")
    assert engine.auto_pick([head, area], pool, PositionalNeeds(), rng).id == "p2"


def test_auto_pick_fallback_uses_projection_and_need(engine, make_scout, make_prospect, rng):
    pool = [
        make_prospect(prospect_id="p1", position="QB", projected_round=2),
        make_prospect(prospect_id="p2", position="DT", projected_round=3),
    ]
    assert engine.auto_pick([make_scout()], pool, PositionalNeeds(), rng).id == "p1"

    needs = PositionalNeeds({"DT": NeedLevel.CRITICAL})
    assert engine.auto_pick([make_scout()], pool, needs, rng).id == "p2"
    assert engine.auto_pick([make_scout()], [], needs, rng) is None


def test_need_keyed_by_alias(engine, make_scout, make_prospect):
    prospect = make_prospect(position="DE")
    scout = make_scout()
    estimate = engine._estimate(prospect, scout, False, random.Random(1))

    components = engine.score_prospect(prospect, scout, estimate, PositionalNeeds({"edge": NeedLevel.CRITICAL}), False)
    assert components["need_multiplier"] == 1.25


def test_to_dict_returns_plain_containers(engine, make_scout, pool, rng):
    result = engine.generate_pick_recommendations([make_scout()], pool, PositionalNeeds(), 3, 1, rng)
    data = result.to_dict()

    recommendation = data["recommendations"][0]
    assert isinstance(recommendation["components"], dict)
    assert recommendation["estimated_overall"]["min"] <= recommendation["estimated_overall"]["max"]
