"""Tests for scout disagreement detection."""

import pytest

from draft_scout.models.disagreement import DisagreementSeverity, SplitOpinion
from draft_scout.models.report import LeadershipGrade, MedicalGrade, WorkEthicGrade
from draft_scout.services.disagreement_analyzer import (
    DisagreementAnalyzer,
    split_opinion_label,
    validate_split_opinion,
)


@pytest.fixture
def analyzer(settings):
    return DisagreementAnalyzer(settings)


def test_wide_overall_gap_is_major_split(analyzer, make_report):
    reports = [
        make_report(scout_id="a", overall=(80, 90)),
        make_report(scout_id="b", overall=(40, 55)),
    ]
    flag = analyzer.analyze_split_opinion("p1", "Prospect p1", "WR", reports)

    assert flag.has_split_opinion
    assert flag.worst_severity == DisagreementSeverity.MAJOR
    assert flag.consensus_score < 50
    assert flag.disagreements[0].aspect == "overall"
    assert flag.disagreements[0].difference == pytest.approx(37.5)
    assert flag.summary.startswith("SPLIT OPINION")


def test_close_ranges_agree(analyzer, make_report):
    reports = [
        make_report(scout_id="a", overall=(70, 80)),
        make_report(scout_id="b", overall=(72, 82)),
    ]
    flag = analyzer.analyze_split_opinion("p1", "Prospect p1", "WR", reports)

    assert not flag.has_split_opinion
    assert flag.disagreements == ()
    assert flag.consensus_score == 100
    assert flag.worst_severity is None


def test_single_report_has_full_consensus(analyzer, make_report):
    flag = analyzer.analyze_split_opinion("p1", "Prospect p1", "WR", [make_report()])
    assert flag.consensus_score == 100
    assert not flag.has_split_opinion
    assert flag.report_count == 1


@pytest.mark.parametrize(
    "difference,expected",
    [
        (5, None),
        (8, DisagreementSeverity.MINOR),
        (15, DisagreementSeverity.MODERATE),
        (25, DisagreementSeverity.MAJOR),
    ],
)
def test_skill_severity(analyzer, difference, expected):
    assert analyzer.skill_severity(difference) == expected


def test_round_disagreement(analyzer, make_report):
    found = analyzer.find_disagreements(
        make_report(scout_id="a", rounds=(1, 2)),
        make_report(scout_id="b", rounds=(4, 5)),
    )
    assert [d.aspect for d in found] == ["draft_projection"]
    assert found[0].severity == DisagreementSeverity.MAJOR


def test_minor_only_is_not_a_split(analyzer, make_report):
    reports = [
        make_report(scout_id="a", overall=(60, 70)),
        make_report(scout_id="b", overall=(70, 80)),
    ]
    flag = analyzer.analyze_split_opinion("p1", "Prospect p1", "WR", reports)
    assert flag.worst_severity == DisagreementSeverity.MINOR
    assert not flag.has_split_opinion
    assert flag.consensus_score == 90


def test_character_mismatch_only_between_focus_reports(analyzer, make_report):
    focus_a = make_report(scout_id="a", focus=True, work_ethic=WorkEthicGrade.ELITE)
    focus_b = make_report(scout_id="b", focus=True, work_ethic=WorkEthicGrade.AVERAGE)
    auto_b = make_report(scout_id="b")

    found = analyzer.find_disagreements(focus_a, focus_b)
    assert [d.aspect for d in found] == ["character"]
    assert found[0].severity == DisagreementSeverity.MAJOR

    assert analyzer.find_disagreements(focus_a, auto_b) == []


def test_one_level_character_gap_ignored(analyzer, make_report):
    found = analyzer.find_disagreements(
        make_report(scout_id="a", focus=True, leadership=LeadershipGrade.CAPTAIN),
        make_report(scout_id="b", focus=True, leadership=LeadershipGrade.LEADER),
    )
    assert found == []


def test_medical_mismatch(analyzer, make_report):
    found = analyzer.find_disagreements(
        make_report(scout_id="a", focus=True, medical=MedicalGrade.CLEAN),
        make_report(scout_id="b", focus=True, medical=MedicalGrade.MAJOR_CONCERNS),
    )
    assert [d.aspect for d in found] == ["medical"]
    assert found[0].difference == 3


def test_analyze_all_split_opinions_skips_single_reports(analyzer, make_report):
    reports = [
        make_report(prospect_id="p1", scout_id="a", overall=(80, 90)),
        make_report(prospect_id="p1", scout_id="b", overall=(40, 55)),
        make_report(prospect_id="p2", scout_id="a"),
    ]
    results = analyzer.analyze_all_split_opinions(reports)
    assert list(results) == ["p1"]


def test_most_contentious(analyzer, make_report):
    split = analyzer.analyze_split_opinion(
        "p1",
        "Prospect p1",
        "WR",
        [make_report(scout_id="a", overall=(80, 90)), make_report(scout_id="b", overall=(40, 55))],
    )
    calm = analyzer.analyze_split_opinion("p2", "Prospect p2", "WR", [make_report()])
    assert analyzer.most_contentious([calm, split]) == [split]


def test_labels_and_validation():
    assert split_opinion_label(DisagreementSeverity.MAJOR) == "Split Opinion"
    bad = SplitOpinion("p1", "P", "WR", 2, (), 100.0, True, DisagreementSeverity.MAJOR, "")
    assert not validate_split_opinion(bad)
