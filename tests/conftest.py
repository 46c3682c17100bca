"""Shared fixtures: factories for scouts, prospects and reports."""

import random

import pytest

from draft_scout.config import Settings
from draft_scout.models.prospect import Prospect, ProspectProfile
from draft_scout.models.report import (
    AutoFindings,
    CharacterAssessment,
    DraftProjection,
    DurabilityGrade,
    FocusFindings,
    InterviewAssessment,
    LeadershipGrade,
    MedicalAssessment,
    MedicalGrade,
    ReportConfidence,
    SchemeFitAssessment,
    ScoutReport,
    WorkEthicGrade,
)
from draft_scout.models.scout import ScoutAttributes, ScoutRole, create_scout
from draft_scout.models.skill_range import ConfidenceLevel, SkillRange


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def make_scout():
    def _make(
        scout_id="scout-1",
        evaluation=70,
        speed=50,
        experience=3,
        role=ScoutRole.HEAD_SCOUT,
        region=None,
        specialty=None,
        **kwargs,
    ):
        return create_scout(
            scout_id,
            "Pat",
            "Morgan",
            role,
            ScoutAttributes(
                evaluation=evaluation,
                speed=speed,
                experience=experience,
                age=45,
                position_specialty=specialty,
            ),
            region=region,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_prospect():
    def _make(
        prospect_id="p1",
        position="WR",
        overall=70,
        physical=68,
        technical=72,
        projected_round=2,
        region="northeast",
        visibility=0.5,
        traits=("fast", "route runner", "leader", "high football iq", "soft hands", "strong"),
        profile=None,
    ):
        return Prospect(
            id=prospect_id,
            name=f"Prospect {prospect_id}",
            position=position,
            true_overall=overall,
            true_physical=physical,
            true_technical=technical,
            projected_round=projected_round,
            region=region,
            college="State",
            height=73,
            weight=200,
            all_traits=tuple(traits),
            visibility=visibility,
            profile=profile or ProspectProfile(),
        )

    return _make


@pytest.fixture
def make_report():
    """Build a report directly from ranges, bypassing estimation."""

    def _make(
        prospect_id="p1",
        scout_id="scout-1",
        overall=(65, 75),
        physical=(60, 70),
        technical=(60, 70),
        rounds=(2, 3),
        confidence=60,
        position="WR",
        focus=False,
        work_ethic=WorkEthicGrade.GOOD,
        leadership=LeadershipGrade.LEADER,
        medical=MedicalGrade.CLEAN,
    ):
        if focus:
            findings = FocusFindings(
                character=CharacterAssessment(work_ethic, leadership, "good", "mature", "competitive"),
                medical=MedicalAssessment(medical, DurabilityGrade.DURABLE),
                scheme_fit=SchemeFitAssessment(),
                interview=InterviewAssessment("high", "good", "Highly driven to be the best"),
            )
        else:
            findings = AutoFindings()
        return ScoutReport(
            id=f"report-{prospect_id}-{scout_id}-1",
            prospect_id=prospect_id,
            prospect_name=f"Prospect {prospect_id}",
            position=position,
            scout_id=scout_id,
            scout_name=f"Scout {scout_id}",
            generated_at=1,
            overall_range=SkillRange(*overall, ConfidenceLevel.MEDIUM),
            physical_range=SkillRange(*physical, ConfidenceLevel.MEDIUM),
            technical_range=SkillRange(*technical, ConfidenceLevel.MEDIUM),
            round_range=SkillRange(*rounds, ConfidenceLevel.MEDIUM),
            confidence=ReportConfidence(score=confidence, level=ConfidenceLevel.MEDIUM),
            draft_projection=DraftProjection(rounds[0], rounds[1], "Day 2 (Rounds 2-3)", "Day 2 pick"),
            findings=findings,
        )

    return _make
