"""In-depth sub-assessments produced only by focus evaluations.

Each assessment reads a hidden profile value, perturbs it with noise that
shrinks as the scout's evaluation skill rises, and grades the result.
"""

import random

from draft_scout.models.prospect import ProspectProfile
from draft_scout.models.report import (
    CharacterAssessment,
    DurabilityGrade,
    InterviewAssessment,
    LeadershipGrade,
    MedicalAssessment,
    MedicalGrade,
    SchemeFitAssessment,
    WorkEthicGrade,
)
from draft_scout.utils.numeric import clamp, mean

CHARACTER_NOISE = 30
SCHEME_FIT_NOISE = 20
FOOTBALL_IQ_NOISE = 25


def _perceive(true_value: float, evaluation: float, spread: float, rng: random.Random) -> float:
    accuracy = clamp(evaluation, 0, 100) / 100
    return clamp(true_value + (rng.random() - 0.5) * (1 - accuracy) * spread, 1, 100)


def _grade(value: float, cutoffs: tuple[tuple[float, object], ...], fallback):
    for cutoff, grade in cutoffs:
        if value >= cutoff:
            return grade
    return fallback


WORK_ETHIC_CUTOFFS = ((85, WorkEthicGrade.ELITE), (65, WorkEthicGrade.GOOD), (45, WorkEthicGrade.AVERAGE))
LEADERSHIP_CUTOFFS = ((85, LeadershipGrade.CAPTAIN), (65, LeadershipGrade.LEADER), (45, LeadershipGrade.FOLLOWER))
COACHABILITY_CUTOFFS = ((80, "excellent"), (60, "good"), (40, "average"))
MATURITY_CUTOFFS = ((70, "mature"), (40, "developing"))
COMPETITIVENESS_CUTOFFS = ((80, "fierce"), (50, "competitive"))
SCHEME_FIT_CUTOFFS = ((80, "excellent"), (60, "good"), (40, "average"))
DURABILITY_CUTOFFS = ((90, DurabilityGrade.IRONMAN), (70, DurabilityGrade.DURABLE), (50, DurabilityGrade.AVERAGE))


def assess_character(profile: ProspectProfile, evaluation: float, rng: random.Random) -> CharacterAssessment:
    work_ethic = _perceive(profile.work_ethic, evaluation, CHARACTER_NOISE, rng)
    leadership = _perceive(profile.leadership, evaluation, CHARACTER_NOISE, rng)
    coachability = _perceive(profile.coachability, evaluation, CHARACTER_NOISE, rng)
    maturity = _perceive(profile.maturity, evaluation, CHARACTER_NOISE, rng)
    competitiveness = _perceive(profile.competitiveness, evaluation, CHARACTER_NOISE, rng)

    notes = []
    if work_ethic >= 85:
        notes.append("First one in, last one out")
    if leadership >= 85:
        notes.append("Natural leader in the locker room")
    if coachability >= 85:
        notes.append("Extremely receptive to coaching")
    if work_ethic < 40:
        notes.append("Questions about dedication")
    if maturity < 40:
        notes.append("Some maturity concerns reported")

    return CharacterAssessment(
        work_ethic=_grade(work_ethic, WORK_ETHIC_CUTOFFS, WorkEthicGrade.CONCERNS),
        leadership=_grade(leadership, LEADERSHIP_CUTOFFS, LeadershipGrade.LONER),
        coachability=_grade(coachability, COACHABILITY_CUTOFFS, "difficult"),
        maturity=_grade(maturity, MATURITY_CUTOFFS, "immature"),
        competitiveness=_grade(competitiveness, COMPETITIVENESS_CUTOFFS, "passive"),
        notes=tuple(notes),
    )


def assess_medical(profile: ProspectProfile) -> MedicalAssessment:
    """Medical grade from durability and injury history.

    Medical records are read directly, so scout skill adds no noise here.
    """
    durability = profile.durability
    injuries = profile.injuries
    notes = []

    if durability >= 85 and not injuries:
        grade = MedicalGrade.CLEAN
        notes.append("No significant injury history")
    elif durability >= 65 and len(injuries) <= 1:
        grade = MedicalGrade.MINOR_CONCERNS
        notes.extend(f"History: {injury}" for injury in injuries[:1])
    elif durability >= 45:
        grade = MedicalGrade.MODERATE_CONCERNS
        notes.extend(f"History: {injury}" for injury in injuries[:2])
    else:
        grade = MedicalGrade.MAJOR_CONCERNS
        notes.extend(f"History: {injury}" for injury in injuries)
        notes.append("Long-term durability questions")

    durability_grade = _grade(durability, DURABILITY_CUTOFFS, DurabilityGrade.FRAGILE)
    if durability_grade == DurabilityGrade.IRONMAN:
        notes.append("Excellent physical durability")
    elif durability_grade == DurabilityGrade.FRAGILE:
        notes.append("Injury-prone concerns")

    return MedicalAssessment(
        overall_grade=grade,
        durability=durability_grade,
        injury_history=tuple(injuries),
        notes=tuple(notes),
    )


def _scheme_name(key: str) -> str:
    return key.removeprefix("offense_").removeprefix("defense_")


def assess_scheme_fit(profile: ProspectProfile, evaluation: float, rng: random.Random) -> SchemeFitAssessment:
    if not profile.scheme_fits:
        return SchemeFitAssessment()

    perceived = {
        scheme: _perceive(rating, evaluation, SCHEME_FIT_NOISE, rng)
        for scheme, rating in sorted(profile.scheme_fits.items())
    }
    fits = {scheme: _grade(value, SCHEME_FIT_CUTOFFS, "poor") for scheme, value in perceived.items()}
    best = max(perceived, key=lambda scheme: perceived[scheme])
    worst = min(perceived, key=lambda scheme: perceived[scheme])

    ratings = list(profile.scheme_fits.values())
    average = mean(ratings)
    variance = mean((r - average) ** 2 for r in ratings)
    if variance < 100:
        versatility = "high"
    elif variance < 300:
        versatility = "medium"
    else:
        versatility = "low"

    return SchemeFitAssessment(
        fits=fits,
        best_fit=_scheme_name(best),
        worst_fit=_scheme_name(worst),
        versatility=versatility,
    )


def assess_interview(profile: ProspectProfile, evaluation: float, rng: random.Random) -> InterviewAssessment:
    notes = []

    iq = _perceive(profile.football_iq, evaluation, FOOTBALL_IQ_NOISE, rng)
    if iq >= 90:
        football_iq = "elite"
        notes.append("Exceptional football mind")
    elif iq >= 70:
        football_iq = "high"
        notes.append("Strong understanding of the game")
    elif iq >= 50:
        football_iq = "average"
    else:
        football_iq = "low"
        notes.append("May take time to learn playbook")

    communication_score = (profile.leadership + profile.maturity) / 2
    if communication_score >= 80:
        communication = "excellent"
        notes.append("Articulate and confident")
    elif communication_score >= 60:
        communication = "good"
    elif communication_score >= 40:
        communication = "average"
    else:
        communication = "poor"
        notes.append("Struggled to express thoughts clearly")

    if profile.work_ethic >= 80 and profile.competitiveness >= 80:
        motivation = "Highly driven to be the best"
    elif profile.work_ethic >= 60:
        motivation = "Eager to prove they belong at the next level"
    else:
        motivation = "Focused on reaching the league"

    if profile.coachability < 50:
        notes.append("May resist coaching adjustments")
    if profile.maturity < 50:
        notes.append("Still maturing as a person and player")

    return InterviewAssessment(
        football_iq=football_iq,
        communication=communication,
        motivation=motivation,
        notes=tuple(notes),
    )
