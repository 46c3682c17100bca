"""Tests for veteran (pro) scouting."""

import random
from dataclasses import replace

import pytest

from draft_scout.models.prospect import PlayerStatus, SeasonLine, VeteranContract, VeteranPlayer, VisibilityLevel
from draft_scout.models.skill_range import SkillRange
from draft_scout.services.pro_scouting_service import ProScoutingService


@pytest.fixture
def service(settings):
    return ProScoutingService(settings)


def _veteran(status=PlayerStatus.STARTER, years=5, recent=(70, 72, 71), season=70.0, career=70.0, age=27):
    return VeteranPlayer(
        id="v1",
        name="Casey Veteran",
        position="CB",
        team_id="team-2",
        age=age,
        years_in_league=years,
        status=status,
        true_overall=78,
        true_physical=74,
        true_technical=80,
        all_traits=("fast", "coverage instincts", "aggressive", "film study", "team captain"),
        recent_games=tuple(recent),
        current_season=SeasonLine(games_played=10, games_started=10, performance_rating=season),
        career=SeasonLine(games_played=80, games_started=70, performance_rating=career),
    )


def test_report_on_starter(service, make_scout):
    player = _veteran()
    report = service.generate_report(player, make_scout(), 202510, random.Random(3))

    assert report.player_id == "v1"
    assert report.team_id == "team-2"
    assert report.visibility == VisibilityLevel.HIGH
    assert report.id == "report-v1-scout-1-202510"
    assert len(report.visible_traits) + report.hidden_trait_count == len(player.all_traits)
    for skill_range in (report.overall_range, report.physical_range, report.technical_range):
        assert 1 <= skill_range.min <= skill_range.max <= 100


def test_less_tape_means_wider_ranges(service, make_scout):
    scout = make_scout(evaluation=60)
    starter = service.generate_report(_veteran(), scout, 1, random.Random(3))
    bench = service.generate_report(_veteran(status=PlayerStatus.PRACTICE_SQUAD), scout, 1, random.Random(3))
    assert bench.visibility == VisibilityLevel.MINIMAL
    assert bench.overall_range.width > starter.overall_range.width


def test_improving_trend(service):
    trend = service.analyze_performance_trend(_veteran(recent=(80, 82, 81), season=76.0, career=70.0, age=24))
    assert trend.direction == "improving"
    assert trend.recent_games == "strong"
    assert trend.consistency == "consistent"
    assert "Still developing and improving" in trend.notes


def test_declining_inconsistent_trend(service):
    trend = service.analyze_performance_trend(_veteran(recent=(50, 68, 55), season=64.0, career=72.0, age=32))
    assert trend.direction == "declining"
    assert trend.consistency == "inconsistent"
    assert "Age may be catching up" in trend.notes


def test_trend_ignores_hidden_values(service):
    trend = service.analyze_performance_trend(_veteran())
    assert trend.direction == "stable"
    assert trend.recent_games == "average"


def test_recent_performance_falls_back_to_season(service):
    assert service.recent_performance(_veteran(recent=(), season=66.0)) == 66.0


def test_report_carries_age_and_trade_value(service, make_scout):
    report = service.generate_report(_veteran(age=29), make_scout(), 1, random.Random(3))
    assert report.age == 29
    assert report.trade_value == service.calculate_trade_value(_veteran(age=29), report.overall_range)
    assert service.validate_report(report)


def test_premium_starter_in_prime_is_untouchable(service):
    player = replace(_veteran(age=27), contract=VeteranContract(years_remaining=3, cap_hit=10_000_000))
    value = service.calculate_trade_value(player, SkillRange(84, 90))

    assert value.overall_value == "premium"
    assert value.draft_pick_equivalent == "Multiple 1sts"
    assert value.age_consideration == "prime"
    assert value.contract_impact == "positive"
    assert value.trade_likelihood == "untouchable"
    assert "Team-friendly contract" in value.notes


def test_older_player_is_never_premium(service):
    value = service.calculate_trade_value(_veteran(age=31), SkillRange(84, 90))

    assert value.age_consideration == "declining"
    assert value.overall_value == "high"
    assert value.draft_pick_equivalent == "Mid 1st"
    assert value.trade_likelihood == "likely"
    assert "Age limits trade value" in value.notes


@pytest.mark.parametrize(
    "contract,impact,likelihood",
    [
        (VeteranContract(years_remaining=3, cap_hit=30_000_000), "negative", "possible"),
        (VeteranContract(years_remaining=3, cap_hit=20_000_000, has_no_trade_clause=True), "neutral", "unlikely"),
        (VeteranContract(years_remaining=1, cap_hit=20_000_000), "neutral", "likely"),
    ],
)
def test_contract_shapes_trade_outlook(service, contract, impact, likelihood):
    player = replace(_veteran(age=26, status=PlayerStatus.BACKUP), contract=contract)
    value = service.calculate_trade_value(player, SkillRange(60, 70))
    assert value.overall_value == "medium"
    assert value.contract_impact == impact
    assert value.trade_likelihood == likelihood


def _pro_report(service, make_scout, overall, age=27):
    report = service.generate_report(_veteran(age=age), make_scout(), 1, random.Random(3))
    skill = SkillRange(*overall)
    return replace(
        report,
        overall_range=skill,
        age=age,
        trade_value=replace(report.trade_value, contract_impact="neutral"),
    )


def test_compare_reports(service, make_scout):
    strong = _pro_report(service, make_scout, (80, 90))
    weaker = _pro_report(service, make_scout, (70, 80))
    close = _pro_report(service, make_scout, (78, 88))

    assert service.compare_reports(strong, weaker).outcome == "first_better"
    assert service.compare_reports(weaker, strong).outcome == "second_better"
    assert service.compare_reports(strong, close).outcome == "even"


def test_compare_reports_penalizes_age(service, make_scout):
    aging = _pro_report(service, make_scout, (80, 90), age=32)
    younger = _pro_report(service, make_scout, (76, 84), age=27)

    comparison = service.compare_reports(aging, younger)
    assert comparison.first_score == 75
    assert comparison.second_score == 80
    assert comparison.outcome == "second_better"
    assert "Casey Veteran appears to be the more valuable asset" == comparison.summary


def test_identify_scouting_targets(service):
    starter = replace(_veteran(age=26, career=70.0), id="a")
    backup = replace(
        _veteran(age=24, status=PlayerStatus.BACKUP, career=72.0),
        id="b",
        position="corner",
    )
    practice = replace(_veteran(status=PlayerStatus.PRACTICE_SQUAD), id="c")
    old = replace(_veteran(age=33), id="d")
    receiver = replace(_veteran(), id="e", position="WR")

    targets = service.identify_scouting_targets([practice, backup, receiver, old, starter], ["cb"])

    assert [p.id for p in targets] == ["a", "b"]
    assert service.target_value(starter) == 85
    assert service.target_value(backup) == 82


def test_validate_report(service, make_scout):
    report = service.generate_report(_veteran(), make_scout(), 1, random.Random(3))
    assert service.validate_report(report)
    assert not service.validate_report(replace(report, age=50))
    assert not service.validate_report(replace(report, player_id=""))
    assert not service.validate_report(replace(report, overall_range=SkillRange(0, 40)))
