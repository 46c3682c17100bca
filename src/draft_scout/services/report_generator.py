"""Assembles scout reports from estimation and confidence scoring."""

import logging
import random
from dataclasses import replace
from typing import Iterable, Optional

from draft_scout.config import Settings, get_settings
from draft_scout.models.prospect import Prospect
from draft_scout.models.report import (
    AutoFindings,
    DraftProjection,
    FocusFindings,
    ReportConfidence,
    ReportKind,
    ScoutReport,
    TraitCategory,
    TraitInfo,
)
from draft_scout.models.scout import Scout, prospects_per_week
from draft_scout.models.skill_range import ConfidenceLevel, SkillRange
from draft_scout.models.track_record import ScoutTendencyProfile
from draft_scout.services.focus_assessments import (
    assess_character,
    assess_interview,
    assess_medical,
    assess_scheme_fit,
)
from draft_scout.services.scorers.attribute_estimator import AttributeEstimator, EstimatedAttributes
from draft_scout.services.scorers.confidence_scorer import ConfidenceScorer
from draft_scout.utils.numeric import mean, round_half_up

logger = logging.getLogger(__name__)

# Keyword -> category, checked in order; anything unmatched is a skill trait
TRAIT_CATEGORY_KEYWORDS: tuple[tuple[TraitCategory, tuple[str, ...]], ...] = (
    (TraitCategory.PHYSICAL, ("speed", "athletic", "strong", "fast", "agile", "size")),
    (TraitCategory.CHARACTER, ("leader", "work", "competitive", "character")),
    (TraitCategory.MENTAL, ("iq", "smart", "decision", "instinct")),
)


def generate_report_id(prospect_id: str, scout_id: str, timestamp: int) -> str:
    return f"report-{prospect_id}-{scout_id}-{timestamp}"


def trait_category(trait: str) -> TraitCategory:
    lowered = trait.lower()
    for category, keywords in TRAIT_CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return TraitCategory.SKILL


def calculate_draft_projection(round_range: SkillRange, confidence: ReportConfidence) -> DraftProjection:
    """Describe a round range as a pick window and a headline grade."""
    low, high = round_range.min, round_range.max
    average_round = round_range.midpoint

    if low == 1 and high == 1:
        description = "Round 1" if confidence.level == ConfidenceLevel.HIGH else "Round 1-2"
    elif high <= 2:
        description = f"Round {low}-{high}"
    elif high <= 3:
        description = "Day 2 (Rounds 2-3)"
    elif high <= 5:
        description = f"Round {low}-{high}"
    else:
        description = "Day 3 (Rounds 4-7)"

    if average_round <= 1.5:
        grade = "First-round talent"
    elif average_round <= 2.5:
        grade = "Day 1-2 pick"
    elif average_round <= 3.5:
        grade = "Day 2 pick"
    elif average_round <= 5:
        grade = "Mid-round prospect"
    elif average_round <= 6:
        grade = "Late-round flier"
    else:
        grade = "Priority free agent"

    return DraftProjection(
        round_min=low,
        round_max=high,
        pick_range_description=description,
        overall_grade=grade,
    )


def validate_report(report: ScoutReport, settings: Optional[Settings] = None) -> bool:
    """Check a report is safe to persist and rank.

    Callers must not store a report that fails validation.
    """
    settings = settings or get_settings()
    if not report.id or not report.prospect_id or not report.scout_id:
        return False

    for skill_range in (report.overall_range, report.physical_range, report.technical_range):
        if not skill_range.is_within(settings.skill_min, settings.skill_max):
            return False

    if not report.round_range.is_within(settings.round_min, settings.round_max):
        return False
    projection = report.draft_projection
    if not settings.round_min <= projection.round_min <= projection.round_max <= settings.round_max:
        return False

    if not 0 <= report.confidence.score <= 100:
        return False

    if report.hidden_trait_count < 0:
        return False
    if report.kind == ReportKind.FOCUS and report.hidden_trait_count != 0:
        return False

    return True


def report_quality(report: ScoutReport) -> str:
    overall_width = report.overall_range.width
    round_width = report.round_range.width

    if report.is_focus:
        if overall_width <= 8 and round_width <= 1:
            return "Comprehensive evaluation"
        return "Detailed analysis"
    if overall_width <= 15 and round_width <= 1:
        return "Strong preliminary report"
    if overall_width <= 25 and round_width <= 2:
        return "Standard scouting report"
    return "Initial impression"


class ScoutReportGenerator:
    """Builds auto and focus reports for a scout, and combines several
    reports on one prospect into a consensus view."""

    DEFAULT_FOCUS_WEEKS = 3
    NEEDS_MORE_SCOUTING_SKILL = 65
    NEEDS_MORE_SCOUTING_ROUND = 3
    AUTO_MERGE_NARROWING = 0.8
    FOCUS_MERGE_NARROWING = 0.6
    HIGH_CONFIDENCE_REPORT_COUNT = 3
    CONSENSUS_SCOUT_ID = "consensus"
    CONSENSUS_SCOUT_NAME = "Scouting department"

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.estimator = AttributeEstimator(self.settings)
        self.confidence_scorer = ConfidenceScorer(self.settings)

    def _assemble(
        self,
        prospect: Prospect,
        scout: Scout,
        timestamp: int,
        estimate: EstimatedAttributes,
        confidence: ReportConfidence,
        findings,
        hours: float,
    ) -> ScoutReport:
        adjust = self.confidence_scorer.adjust_range
        return ScoutReport(
            id=generate_report_id(prospect.id, scout.id, timestamp),
            prospect_id=prospect.id,
            prospect_name=prospect.name,
            position=prospect.position,
            scout_id=scout.id,
            scout_name=scout.full_name,
            generated_at=timestamp,
            overall_range=adjust(estimate.overall, confidence),
            physical_range=adjust(estimate.physical, confidence),
            technical_range=adjust(estimate.technical, confidence),
            round_range=estimate.round_range,
            confidence=confidence,
            draft_projection=calculate_draft_projection(estimate.round_range, confidence),
            findings=findings,
            visible_traits=tuple(TraitInfo(t, trait_category(t)) for t in estimate.visible_traits),
            hidden_trait_count=estimate.hidden_trait_count,
            scouting_hours=hours,
            college=prospect.college,
            height=prospect.height,
            weight=prospect.weight,
            region=prospect.region,
        )

    def generate_auto_report(
        self,
        prospect: Prospect,
        scout: Scout,
        timestamp: int,
        rng: random.Random,
        tendency: Optional[ScoutTendencyProfile] = None,
        hours: Optional[float] = None,
    ) -> ScoutReport:
        """Quick-look report: partial traits, no in-depth findings.

        Args:
            prospect: Subject being scouted
            scout: Reporting scout
            timestamp: Caller-supplied time of the report
            rng: Injected generator, the only source of noise
            tendency: The scout's tendency as of the start of the cycle
            hours: Time invested (default: ``auto_scouting_hours``)
        """
        if hours is None:
            hours = self.settings.auto_scouting_hours

        estimate = self.estimator.estimate_auto(prospect, scout.attributes.evaluation, rng)
        confidence = self.confidence_scorer.score_confidence(
            scout, ReportKind.AUTO, hours, prospect.region, prospect.position, tendency
        )
        needs_more = (
            estimate.overall.midpoint >= self.NEEDS_MORE_SCOUTING_SKILL
            or estimate.round_range.max <= self.NEEDS_MORE_SCOUTING_ROUND
        )
        return self._assemble(
            prospect, scout, timestamp, estimate, confidence, AutoFindings(needs_more_scouting=needs_more), hours
        )

    def generate_focus_report(
        self,
        prospect: Prospect,
        scout: Scout,
        timestamp: int,
        rng: random.Random,
        tendency: Optional[ScoutTendencyProfile] = None,
        weeks_spent: Optional[int] = None,
    ) -> ScoutReport:
        """In-depth report: every trait visible plus character, medical,
        scheme fit and interview findings."""
        if weeks_spent is None:
            weeks_spent = self.DEFAULT_FOCUS_WEEKS
        hours = weeks_spent * self.settings.focus_hours_per_week
        evaluation = scout.attributes.evaluation

        estimate = self.estimator.estimate_focus(prospect, evaluation, rng)
        confidence = self.confidence_scorer.score_confidence(
            scout, ReportKind.FOCUS, hours, prospect.region, prospect.position, tendency
        )
        profile = prospect.profile
        findings = FocusFindings(
            character=assess_character(profile, evaluation, rng),
            medical=assess_medical(profile),
            scheme_fit=assess_scheme_fit(profile, evaluation, rng),
            interview=assess_interview(profile, evaluation, rng),
            player_comparison=profile.player_comparison,
            ceiling=profile.ceiling,
            floor=profile.floor,
        )
        return self._assemble(prospect, scout, timestamp, estimate, confidence, findings, hours)

    def process_weekly_auto_scouting(
        self,
        scout: Scout,
        prospects: Iterable[Prospect],
        week: int,
        year: int,
        rng: random.Random,
        tendency: Optional[ScoutTendencyProfile] = None,
    ) -> list[ScoutReport]:
        """Run one week of regional auto scouting for a scout.

        Regional scouts only cover prospects from their region; national
        scouts cover everyone. Selection order comes from ``rng``.
        """
        if not scout.auto_scouting_active:
            return []

        eligible = [p for p in prospects if scout.region is None or p.region == scout.region]
        eligible.sort(key=lambda p: p.id)
        rng.shuffle(eligible)
        selected = eligible[: prospects_per_week(scout.attributes.speed)]

        timestamp = year * 100 + week
        reports = [self.generate_auto_report(p, scout, timestamp, rng, tendency) for p in selected]
        logger.debug(f"Scout {scout.id} week {week}: {len(reports)} auto reports")
        return reports

    # ------------------------------------------------------------------
    # Combining reports on one prospect
    # ------------------------------------------------------------------

    def _merge_inputs(self, reports: Iterable[ScoutReport], kind: ReportKind) -> list[ScoutReport]:
        """Reports of ``kind`` on the newest report's prospect, newest first."""
        of_kind = sorted(
            (r for r in reports if r.kind == kind),
            key=lambda r: (r.generated_at, r.id),
            reverse=True,
        )
        if not of_kind:
            return []
        prospect_id = of_kind[0].prospect_id
        matching = [r for r in of_kind if r.prospect_id == prospect_id]
        if len(matching) < len(of_kind):
            logger.warning(f"Ignoring {len(of_kind) - len(matching)} reports not on prospect {prospect_id!r}")
        return matching

    def _merge_skill_range(
        self,
        ranges: list[SkillRange],
        narrowing: float,
        confidence: ConfidenceLevel,
    ) -> SkillRange:
        s = self.settings
        low = mean(r.min for r in ranges)
        high = mean(r.max for r in ranges)
        center = (low + high) / 2
        half_width = max((high - low) / 2 * narrowing, s.min_range_width / 2)
        return SkillRange(
            max(s.skill_min, round_half_up(center - half_width)),
            min(s.skill_max, round_half_up(center + half_width)),
            confidence,
        )

    def _combined_confidence(self, reports: list[ScoutReport]) -> ReportConfidence:
        aggregated = self.confidence_scorer.aggregate_confidence(reports)
        return ReportConfidence(score=round_half_up(aggregated.combined_score), level=aggregated.level)

    def _merged_report(
        self,
        base: ScoutReport,
        reports: list[ScoutReport],
        narrowing: float,
        range_confidence: ConfidenceLevel,
        round_range: SkillRange,
        **changes,
    ) -> ScoutReport:
        confidence = self._combined_confidence(reports)
        return replace(
            base,
            id=generate_report_id(base.prospect_id, self.CONSENSUS_SCOUT_ID, base.generated_at),
            scout_id=self.CONSENSUS_SCOUT_ID,
            scout_name=self.CONSENSUS_SCOUT_NAME,
            overall_range=self._merge_skill_range([r.overall_range for r in reports], narrowing, range_confidence),
            physical_range=self._merge_skill_range([r.physical_range for r in reports], narrowing, range_confidence),
            technical_range=self._merge_skill_range(
                [r.technical_range for r in reports], narrowing, range_confidence
            ),
            round_range=round_range,
            confidence=confidence,
            draft_projection=calculate_draft_projection(round_range, confidence),
            scouting_hours=sum(r.scouting_hours for r in reports),
            **changes,
        )

    def aggregate_auto_reports(self, reports: Iterable[ScoutReport]) -> Optional[ScoutReport]:
        """Combine several auto reports on one prospect into a consensus report.

        Averaged ranges narrow slightly; three or more reports earn high
        range confidence. Visible traits are pooled and the hidden count is
        the smallest any scout left.

        Returns:
            None when no auto reports are given, the report itself when
            only one is
        """
        matching = self._merge_inputs(reports, ReportKind.AUTO)
        if len(matching) <= 1:
            return matching[0] if matching else None

        base = matching[0]
        range_confidence = (
            ConfidenceLevel.HIGH if len(matching) >= self.HIGH_CONFIDENCE_REPORT_COUNT else ConfidenceLevel.MEDIUM
        )

        s = self.settings
        low = mean(r.round_range.min for r in matching)
        high = mean(r.round_range.max for r in matching)
        center = (low + high) / 2
        half_width = max(1.0, (high - low) / 2 * self.AUTO_MERGE_NARROWING)
        round_range = SkillRange(
            max(s.round_min, round_half_up(center - half_width)),
            min(s.round_max, round_half_up(center + half_width)),
            range_confidence,
        )

        traits: dict[str, TraitInfo] = {}
        for report in matching:
            for trait in report.visible_traits:
                traits.setdefault(trait.name, trait)

        return self._merged_report(
            base,
            matching,
            self.AUTO_MERGE_NARROWING,
            range_confidence,
            round_range,
            visible_traits=tuple(traits.values()),
            hidden_trait_count=min(r.hidden_trait_count for r in matching),
        )

    def cross_reference_focus_reports(self, reports: Iterable[ScoutReport]) -> Optional[ScoutReport]:
        """Combine several focus reports on one prospect.

        Ranges narrow more than auto aggregation and the round locks to a
        one-round window. The newest report's grades are kept, with
        character notes, injury history and medical notes pooled from all.
        """
        matching = self._merge_inputs(reports, ReportKind.FOCUS)
        if len(matching) <= 1:
            return matching[0] if matching else None

        base = matching[0]
        s = self.settings
        center = mean(r.round_range.midpoint for r in matching)
        round_min = max(s.round_min, min(s.round_max, round_half_up(center)))
        round_range = SkillRange(round_min, min(s.round_max, round_min + 1), ConfidenceLevel.HIGH)

        findings = base.findings
        character_notes = _pooled(r.findings.character.notes for r in matching)
        injuries = _pooled(r.findings.medical.injury_history for r in matching)
        medical_notes = _pooled(r.findings.medical.notes for r in matching)
        findings = replace(
            findings,
            character=replace(findings.character, notes=character_notes),
            medical=replace(findings.medical, injury_history=injuries, notes=medical_notes),
        )

        return self._merged_report(
            base,
            matching,
            self.FOCUS_MERGE_NARROWING,
            ConfidenceLevel.HIGH,
            round_range,
            findings=findings,
        )


def _pooled(groups: Iterable[Iterable[str]]) -> tuple[str, ...]:
    """Union of string groups, first occurrence order."""
    return tuple(dict.fromkeys(item for group in groups for item in group))
