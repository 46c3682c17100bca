"""Report confidence scoring and confidence-driven range adjustment."""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from draft_scout.config import Settings, get_settings
from draft_scout.models.report import ConfidenceFactor, ReportConfidence, ReportKind, ScoutReport
from draft_scout.models.scout import Scout
from draft_scout.models.skill_range import ConfidenceLevel, SkillRange
from draft_scout.models.track_record import ScoutTendencyProfile
from draft_scout.services.scorers.attribute_estimator import AttributeEstimator
from draft_scout.utils.numeric import clamp, mean, round_half_up
from draft_scout.utils.position_normalizer import normalize_position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregatedConfidence:
    """Combined confidence across several reports on one prospect."""

    combined_score: float
    level: ConfidenceLevel
    report_count: int
    divergence: float  # Max minus min individual score
    consensus_strength: str  # "strong", "moderate", "weak"


@dataclass(frozen=True)
class ConfidenceImprovement:
    current_score: int
    projected_score: int
    gain: float
    is_worthwhile: bool


class ConfidenceScorer:
    """Scores how much a report's ranges can be trusted.

    The score starts from the scout's evaluation skill, moves with time
    invested and scouting depth, and is scaled by region fit, position fit
    and any revealed tendency.
    """

    DEPTH_ADJUSTMENT = {ReportKind.AUTO: -10.0, ReportKind.FOCUS: 10.0}
    TIME_WEIGHT = 0.3
    MULTIPLIER_BOUNDS = (0.5, 1.5)
    LEVEL_NARROW_FACTOR = {
        ConfidenceLevel.HIGH: 0.7,
        ConfidenceLevel.MEDIUM: 0.85,
        ConfidenceLevel.LOW: 1.0,
    }
    MULTI_SCOUT_BONUS_PER_REPORT = 5.0
    MULTI_SCOUT_BONUS_CAP = 20.0
    CONSENSUS_THRESHOLDS = {"strong": 15.0, "moderate": 30.0}
    WORTHWHILE_GAIN = 10.0

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._estimator = AttributeEstimator(self.settings)

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    @staticmethod
    def base_confidence(evaluation: float) -> float:
        return clamp(evaluation, 0, 100)

    def time_confidence(self, hours: float, kind: ReportKind) -> float:
        """Diminishing-returns curve of hours invested, scaled to 0-100.

        Reaching the expected hours for the report kind earns 70; hours past
        that add up to 30 more until the kind's max hours.
        """
        if kind == ReportKind.FOCUS:
            expected, maximum = self.settings.focus_expected_hours, self.settings.focus_max_hours
        else:
            expected, maximum = self.settings.auto_expected_hours, self.settings.auto_max_hours

        hours = max(0.0, hours)
        score = min(hours / expected, 1.0) * 70
        if hours > expected and maximum > expected:
            score += min((hours - expected) / (maximum - expected), 1.0) * 30
        return score

    def region_bonus(self, scout_region: Optional[str], prospect_region: Optional[str]) -> float:
        if scout_region is None:
            return self.settings.region_bonus / 2
        if prospect_region is not None and scout_region == prospect_region:
            return self.settings.region_bonus
        return 0.0

    def specialty_bonus(self, specialty: Optional[str], prospect_position: Optional[str]) -> float:
        if specialty is None:
            return self.settings.position_specialty_bonus / 2
        if normalize_position(specialty) == normalize_position(prospect_position):
            return self.settings.position_specialty_bonus
        return 0.0

    def tendency_penalty(self, tendency: Optional[ScoutTendencyProfile]) -> float:
        """Multiplier lost to a known bias; proportional to strength, never a bonus."""
        if tendency is None or tendency.is_neutral:
            return 0.0
        return self.settings.max_tendency_penalty * clamp(tendency.strength, 0, 100) / 100

    def level_for_score(self, score: float) -> ConfidenceLevel:
        if score >= self.settings.high_confidence_threshold:
            return ConfidenceLevel.HIGH
        if score >= self.settings.medium_confidence_threshold:
            return ConfidenceLevel.MEDIUM
        return ConfidenceLevel.LOW

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def score_confidence(
        self,
        scout: Scout,
        kind: ReportKind,
        hours: float,
        prospect_region: Optional[str] = None,
        prospect_position: Optional[str] = None,
        tendency: Optional[ScoutTendencyProfile] = None,
    ) -> ReportConfidence:
        """Score a report's confidence with itemized factors.

        Args:
            scout: The reporting scout
            kind: Auto or focus report
            hours: Time invested in the prospect
            prospect_region: Region the prospect plays in
            prospect_position: Canonical position of the prospect
            tendency: Revealed tendency profile, or None if not yet known

        Returns:
            ReportConfidence with a 0-100 score, its level, and factors
        """
        evaluation = scout.attributes.evaluation
        base = self.base_confidence(evaluation)
        time_score = self.time_confidence(hours, kind)
        adjusted = base + self.TIME_WEIGHT * (time_score - 50) + self.DEPTH_ADJUSTMENT[kind]

        region = self.region_bonus(scout.region, prospect_region)
        specialty = self.specialty_bonus(scout.attributes.position_specialty, prospect_position)
        penalty = self.tendency_penalty(tendency)
        multiplier = clamp(1 + region + specialty - penalty, *self.MULTIPLIER_BOUNDS)

        score = int(clamp(round_half_up(adjusted * multiplier), 0, 100))
        level = self.level_for_score(score)

        factors = [
            self._scout_quality_factor(evaluation),
            self._time_factor(hours),
            self._depth_factor(kind),
        ]
        if region > 0:
            if scout.region is None:
                factors.append(ConfidenceFactor("Regional Knowledge", "neutral", "National scout, general familiarity"))
            else:
                factors.append(ConfidenceFactor("Regional Knowledge", "positive", "Scout knows this region well"))
        if specialty > 0:
            if scout.attributes.position_specialty is None:
                factors.append(ConfidenceFactor("Position Expertise", "neutral", "Generalist evaluator"))
            else:
                factors.append(ConfidenceFactor("Position Expertise", "positive", "Position specialist"))
        if penalty > 0:
            factors.append(
                ConfidenceFactor(
                    "Scout Tendency",
                    "negative",
                    f"Known {tendency.direction.value} bias on evaluations",
                )
            )

        logger.debug(
            f"Confidence for {scout.id} ({kind.value}): base {base:.0f}, time {time_score:.1f}, "
            f"multiplier {multiplier:.2f} -> {score}"
        )
        return ReportConfidence(score=score, level=level, factors=tuple(factors))

    @staticmethod
    def _scout_quality_factor(evaluation: float) -> ConfidenceFactor:
        if evaluation >= 80:
            return ConfidenceFactor("Scout Quality", "positive", "Highly skilled evaluator")
        if evaluation >= 60:
            return ConfidenceFactor("Scout Quality", "neutral", "Competent evaluator")
        return ConfidenceFactor("Scout Quality", "negative", "Developing evaluator")

    @staticmethod
    def _time_factor(hours: float) -> ConfidenceFactor:
        if hours >= 30:
            return ConfidenceFactor("Time Invested", "positive", f"Extensive scouting ({hours:.0f} hours)")
        if hours >= 10:
            return ConfidenceFactor("Time Invested", "neutral", f"Moderate scouting ({hours:.0f} hours)")
        return ConfidenceFactor("Time Invested", "negative", f"Limited scouting ({hours:.0f} hours)")

    @staticmethod
    def _depth_factor(kind: ReportKind) -> ConfidenceFactor:
        if kind == ReportKind.FOCUS:
            return ConfidenceFactor("Scouting Depth", "positive", "In-depth focus evaluation")
        return ConfidenceFactor("Scouting Depth", "negative", "Basic auto-scouting only")

    # ------------------------------------------------------------------
    # Range adjustment
    # ------------------------------------------------------------------

    def narrowing_factor(self, confidence: ReportConfidence) -> float:
        """Width multiplier for a confidence; non-increasing in score."""
        level = self.level_for_score(confidence.score)
        factor = self.LEVEL_NARROW_FACTOR[level] * (1 - (confidence.score - 50) / 200)
        return clamp(
            factor,
            1 - self.settings.max_range_narrowing,
            1 + self.settings.max_range_widening,
        )

    def adjust_range(self, skill_range: SkillRange, confidence: ReportConfidence) -> SkillRange:
        """Rescale a range's width around its own center.

        Invariants:
            - The center is preserved (up to integer placement)
            - Narrowing never removes more than ``max_range_narrowing`` of width
            - Width never drops below ``min_range_width``
        """
        low, high = self.settings.skill_min, self.settings.skill_max
        factor = self.narrowing_factor(confidence)
        width = max(self.settings.min_range_width, round_half_up(skill_range.width * factor))
        width = min(width, high - low)

        center = round_half_up(skill_range.midpoint)
        start, end = self._estimator.place_window(center, width, low, high)
        return SkillRange(min=start, max=end, confidence=self._estimator.confidence_for_width(end - start))

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------

    def aggregate_confidence(self, reports: Sequence[ScoutReport]) -> AggregatedConfidence:
        """Combine confidence from several reports on the same prospect."""
        if not reports:
            return AggregatedConfidence(0.0, ConfidenceLevel.LOW, 0, 0.0, "weak")

        scores = [r.confidence.score for r in reports]
        bonus = min((len(scores) - 1) * self.MULTI_SCOUT_BONUS_PER_REPORT, self.MULTI_SCOUT_BONUS_CAP)
        combined = clamp(mean(scores) + bonus, 0, 100)
        divergence = float(max(scores) - min(scores))

        if divergence <= self.CONSENSUS_THRESHOLDS["strong"]:
            consensus = "strong"
        elif divergence <= self.CONSENSUS_THRESHOLDS["moderate"]:
            consensus = "moderate"
        else:
            consensus = "weak"

        return AggregatedConfidence(
            combined_score=round(combined, 1),
            level=self.level_for_score(combined),
            report_count=len(scores),
            divergence=divergence,
            consensus_strength=consensus,
        )

    def confidence_improvement(
        self,
        current: ReportConfidence,
        additional_hours: float,
        upgrading_to_focus: bool = False,
    ) -> ConfidenceImprovement:
        """Estimate the gain from more scouting time on a prospect."""
        gain = min(additional_hours / 3, 15.0)
        if upgrading_to_focus:
            gain += 20.0
        projected = int(clamp(round_half_up(current.score + gain), 0, 100))
        return ConfidenceImprovement(
            current_score=current.score,
            projected_score=projected,
            gain=projected - current.score,
            is_worthwhile=(projected - current.score) >= self.WORTHWHILE_GAIN,
        )
