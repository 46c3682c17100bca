"""Tests for the scout roster and the yearly and weekly cycles."""

import random

import pytest

from draft_scout.models.scout import ScoutRole, create_scout_contract
from draft_scout.services.scouting_department import ScoutRoster, advance_year, run_weekly_cycle


@pytest.fixture
def roster(make_scout):
    return ScoutRoster(
        [
            make_scout(scout_id="s2", role=ScoutRole.OFFENSIVE_SCOUT, region="northeast"),
            make_scout(scout_id="s1", contract=create_scout_contract(100_000, 1)),
            make_scout(scout_id="s3", role=ScoutRole.DEFENSIVE_SCOUT, contract=create_scout_contract(90_000, 3)),
        ]
    )


def test_roster_is_ordered_and_read_only(roster):
    assert list(roster) == ["s1", "s2", "s3"]
    assert len(roster) == 3
    with pytest.raises(TypeError):
        roster["s9"] = roster["s1"]


def test_with_and_without_scout_return_new_rosters(roster, make_scout):
    bigger = roster.with_scout(make_scout(scout_id="s4"))
    smaller = roster.without_scout("s2")

    assert "s4" in bigger
    assert "s4" not in roster
    assert "s2" not in smaller
    assert "s2" in roster


def test_roles(roster):
    assert roster.head_scout().id == "s1"
    assert [s.id for s in roster.by_role(ScoutRole.DEFENSIVE_SCOUT)] == ["s3"]
    assert ScoutRoster().head_scout() is None


def test_reliability_map_starts_unknown(roster):
    reliability = roster.reliability_map()
    assert set(reliability) == {"s1", "s2", "s3"}
    assert not any(info.is_known for info in reliability.values())


def test_advance_year(roster, caplog):
    with caplog.at_level("INFO"):
        result = advance_year(roster)

    assert result.expired_contracts == ("s1",)
    assert result.roster["s1"].contract is None
    assert result.roster["s3"].contract.years_remaining == 2
    assert all(s.track_record.years_of_data == 1 for s in result.roster.scouts())
    assert roster["s1"].track_record.years_of_data == 0
    assert "Scout contracts expired: s1" in caplog.text


def test_weekly_cycle(roster, make_prospect):
    prospects = [make_prospect(prospect_id=f"p{i}", region="northeast" if i % 2 else "midwest") for i in range(12)]
    reports = run_weekly_cycle(roster, prospects, 4, 2026, random.Random(11))

    by_scout = {}
    for report in reports:
        by_scout.setdefault(report.scout_id, []).append(report)
    assert len(by_scout["s1"]) == 5
    assert all(r.region == "northeast" for r in by_scout["s2"])
    assert all(r.generated_at == 202604 for r in reports)


def test_weekly_cycle_deterministic(roster, make_prospect):
    prospects = [make_prospect(prospect_id=f"p{i}") for i in range(6)]
    first = run_weekly_cycle(roster, prospects, 1, 2026, random.Random(5))
    second = run_weekly_cycle(roster, prospects, 1, 2026, random.Random(5))
    assert first == second
