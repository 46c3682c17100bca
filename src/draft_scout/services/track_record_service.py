"""Track record accumulation, reveal progression and accuracy views.

Reveal happens in two independent steps. Reliability (hit rate, position
accuracy, rounded evaluation rating) unlocks at a minimum number of completed
evaluations. Strengths, weaknesses and tendencies unlock at a minimum tenure
in years. Neither step is ever undone.
"""

import logging
import math
from collections import defaultdict
from dataclasses import dataclass, field, replace
from typing import Iterable, Optional

from draft_scout.config import Settings, get_settings
from draft_scout.models.report import ScoutReport
from draft_scout.models.scout import Scout
from draft_scout.models.track_record import (
    Evaluation,
    PositionTendency,
    ScoutTendencyProfile,
    TendencyDirection,
    TrackRecord,
)
from draft_scout.utils.numeric import mean, round_half_up
from draft_scout.utils.position_normalizer import normalize_position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccuracyBreakdown:
    total_evaluations: int
    completed_evaluations: int
    hits: int
    near_misses: int
    misses: int
    pending: int
    hit_rate: Optional[float]  # None below the reliability threshold
    by_position: dict[str, Optional[float]] = field(default_factory=dict)


@dataclass(frozen=True)
class ScoutAccuracyViewModel:
    """Qualitative accuracy summary safe to show the player."""

    scout_id: str
    scout_name: str
    overall_accuracy: Optional[str]  # "Reliable", "Mixed", "Questionable"
    hit_rate: Optional[str]  # e.g. "75%"
    known_strengths: list[str]
    known_weaknesses: list[str]
    evaluation_count: int
    years_of_data: int
    reliability_known: bool
    description: str


@dataclass(frozen=True)
class AccuracyComparison:
    better_scout_id: Optional[str]
    comparison: str


class TrackRecordService:
    """Pure operations on scout track records."""

    EVALUATIONS_PER_YEAR = 7
    SIMILAR_HIT_RATE_DELTA = 0.05
    ACCURACY_LABELS = ((0.7, "Reliable"), (0.5, "Mixed"), (0.0, "Questionable"))

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    # ------------------------------------------------------------------
    # Single evaluations
    # ------------------------------------------------------------------

    def calculate_was_hit(self, evaluation: Evaluation) -> Optional[bool]:
        """Hit if the actual skill landed in the projected range or near it.

        Returns:
            None while the actual value is unknown
        """
        if evaluation.actual_skill is None:
            return None
        tolerance = self.settings.near_hit_tolerance
        actual = evaluation.actual_skill
        return evaluation.projected_skill_min - tolerance <= actual <= evaluation.projected_skill_max + tolerance

    def classify_evaluation(self, evaluation: Evaluation) -> str:
        """Finer outcome: "hit", "near_miss", "miss" or "pending"."""
        if evaluation.actual_skill is None:
            return "pending"
        actual = evaluation.actual_skill
        if evaluation.projected_skill_min <= actual <= evaluation.projected_skill_max:
            return "hit"
        if self.calculate_was_hit(evaluation):
            return "near_miss"
        return "miss"

    def validate_evaluation(self, evaluation: Evaluation) -> bool:
        s = self.settings
        if not evaluation.prospect_id:
            return False
        if not s.round_min <= evaluation.projected_round <= s.round_max:
            return False
        if not 0 <= evaluation.projected_skill_min <= evaluation.projected_skill_max <= 100:
            return False
        if evaluation.actual_round is not None and not s.round_min <= evaluation.actual_round <= s.round_max:
            return False
        if evaluation.actual_skill is not None and not 0 <= evaluation.actual_skill <= 100:
            return False
        return True

    def evaluation_from_report(self, report: ScoutReport, year: int) -> Evaluation:
        """Record the projection a report made, to be graded later."""
        return Evaluation(
            prospect_id=report.prospect_id,
            prospect_name=report.prospect_name,
            position=report.position,
            projected_round=round_half_up(report.round_range.midpoint),
            projected_skill_min=report.overall_range.min,
            projected_skill_max=report.overall_range.max,
            year=year,
        )

    # ------------------------------------------------------------------
    # Record updates
    # ------------------------------------------------------------------

    def add_evaluation(self, record: TrackRecord, evaluation: Evaluation) -> TrackRecord:
        graded = replace(evaluation, was_hit=self.calculate_was_hit(evaluation))
        return replace(record, evaluations=record.evaluations + (graded,))

    def record_actual_results(
        self,
        record: TrackRecord,
        prospect_id: str,
        actual_round: Optional[int],
        actual_skill: Optional[int],
    ) -> TrackRecord:
        """Fill in actual outcomes for a prospect and recompute derived fields.

        The year does not advance.
        """
        evaluations = []
        for evaluation in record.evaluations:
            if evaluation.prospect_id == prospect_id:
                evaluation = replace(evaluation, actual_round=actual_round, actual_skill=actual_skill)
                evaluation = replace(evaluation, was_hit=self.calculate_was_hit(evaluation))
            evaluations.append(evaluation)
        return self.recompute(replace(record, evaluations=tuple(evaluations)))

    def advance_year(self, record: TrackRecord) -> TrackRecord:
        """Advance one year of tenure and recompute everything derived."""
        return self.recompute(replace(record, years_of_data=record.years_of_data + 1))

    def recompute(self, record: TrackRecord) -> TrackRecord:
        """Recompute hit rates, reveal flags, strengths and tendency.

        Invariants:
            - Reveal flags never go from True back to False
            - The tendency is neutral until both flags are set
        """
        s = self.settings
        completed = record.completed_evaluations

        reliability_revealed = record.reliability_revealed or len(completed) >= s.min_evaluations_for_reliability
        tendencies_revealed = record.tendencies_revealed or record.years_of_data >= s.min_years_for_tendencies

        if reliability_revealed and not record.reliability_revealed:
            logger.info(f"Reliability revealed for scout {record.scout_id} ({len(completed)} evaluations)")
        if tendencies_revealed and not record.tendencies_revealed:
            logger.info(f"Tendencies revealed for scout {record.scout_id} ({record.years_of_data} years)")

        position_accuracy = self.position_accuracy(record.evaluations)
        strengths: tuple[str, ...] = ()
        weaknesses: tuple[str, ...] = ()
        if tendencies_revealed:
            strengths = self.determine_strengths(position_accuracy)
            weaknesses = self.determine_weaknesses(position_accuracy)

        tendency = ScoutTendencyProfile()
        if reliability_revealed and tendencies_revealed:
            tendency = self.build_tendency_profile(completed)

        return replace(
            record,
            overall_hit_rate=self.overall_hit_rate(record.evaluations),
            position_accuracy=position_accuracy,
            known_strengths=strengths,
            known_weaknesses=weaknesses,
            reliability_revealed=reliability_revealed,
            tendencies_revealed=tendencies_revealed,
            tendency=tendency,
        )

    # ------------------------------------------------------------------
    # Derived statistics
    # ------------------------------------------------------------------

    def overall_hit_rate(self, evaluations: Iterable[Evaluation]) -> Optional[float]:
        completed = [e for e in evaluations if e.is_complete]
        if len(completed) < self.settings.min_evaluations_for_reliability:
            return None
        return sum(1 for e in completed if e.was_hit) / len(completed)

    def position_accuracy(self, evaluations: Iterable[Evaluation]) -> dict[str, Optional[float]]:
        """Hit rate per position; None where the sample is too small."""
        by_position: dict[str, list[Evaluation]] = defaultdict(list)
        for evaluation in evaluations:
            if evaluation.is_complete:
                by_position[normalize_position(evaluation.position) or evaluation.position].append(evaluation)

        accuracy: dict[str, Optional[float]] = {}
        for position, completed in by_position.items():
            if len(completed) < self.settings.min_position_evaluations:
                accuracy[position] = None
            else:
                accuracy[position] = sum(1 for e in completed if e.was_hit) / len(completed)
        return accuracy

    def determine_strengths(self, position_accuracy: dict[str, Optional[float]]) -> tuple[str, ...]:
        return tuple(
            f"Excellent at evaluating {position}s"
            for position, rate in sorted(position_accuracy.items())
            if rate is not None and rate >= self.settings.strength_hit_rate
        )

    def determine_weaknesses(self, position_accuracy: dict[str, Optional[float]]) -> tuple[str, ...]:
        return tuple(
            f"Often misses on {position}s"
            for position, rate in sorted(position_accuracy.items())
            if rate is not None and rate <= self.settings.weakness_hit_rate
        )

    def _direction(self, average_delta: float) -> TendencyDirection:
        threshold = self.settings.tendency_delta_threshold
        if average_delta > threshold:
            return TendencyDirection.OPTIMISTIC
        if average_delta < -threshold:
            return TendencyDirection.PESSIMISTIC
        return TendencyDirection.NEUTRAL

    def build_tendency_profile(self, completed: Iterable[Evaluation]) -> ScoutTendencyProfile:
        """Measure systematic over- or under-projection.

        The delta is the projected range midpoint minus the actual skill, so
        positive averages mean the scout overrates prospects.
        """
        samples = [e for e in completed if e.actual_skill is not None]
        if len(samples) < self.settings.min_tendency_sample:
            return ScoutTendencyProfile(
                sample_size=len(samples),
                notes=("Insufficient historical data for tendency analysis",),
            )

        deltas = [e.projected_midpoint - e.actual_skill for e in samples]
        average_delta = mean(deltas)
        direction = self._direction(average_delta)
        strength = min(abs(average_delta) * 5, 100.0)

        by_position: dict[str, list[float]] = defaultdict(list)
        for evaluation, delta in zip(samples, deltas):
            by_position[normalize_position(evaluation.position) or evaluation.position].append(delta)

        position_tendencies = []
        for position in sorted(by_position):
            position_deltas = by_position[position]
            if len(position_deltas) < self.settings.min_position_tendency_sample:
                continue
            position_average = mean(position_deltas)
            position_tendencies.append(
                PositionTendency(
                    position=position,
                    direction=self._direction(position_average),
                    average_delta=round(position_average, 2),
                    sample_size=len(position_deltas),
                )
            )

        notes = []
        if direction == TendencyDirection.OPTIMISTIC:
            notes.append("Scout tends to rate prospects higher than they perform")
            notes.append("Consider adjusting projections slightly downward")
        elif direction == TendencyDirection.PESSIMISTIC:
            notes.append("Scout tends to be conservative with grades")
            notes.append("May undervalue some prospects")
        for pt in position_tendencies:
            if pt.direction == TendencyDirection.OPTIMISTIC:
                notes.append(f"Overrates {pt.position} prospects")
            elif pt.direction == TendencyDirection.PESSIMISTIC:
                notes.append(f"Underrates {pt.position} prospects")

        return ScoutTendencyProfile(
            direction=direction,
            strength=round(strength, 2),
            average_delta=round(average_delta, 2),
            sample_size=len(samples),
            position_tendencies=tuple(position_tendencies),
            notes=tuple(notes),
        )

    # ------------------------------------------------------------------
    # Accuracy views
    # ------------------------------------------------------------------

    def accuracy_breakdown(self, record: TrackRecord) -> AccuracyBreakdown:
        outcomes = defaultdict(int)
        for evaluation in record.evaluations:
            outcomes[self.classify_evaluation(evaluation)] += 1

        return AccuracyBreakdown(
            total_evaluations=len(record.evaluations),
            completed_evaluations=len(record.completed_evaluations),
            hits=outcomes["hit"],
            near_misses=outcomes["near_miss"],
            misses=outcomes["miss"],
            pending=outcomes["pending"],
            hit_rate=self.overall_hit_rate(record.evaluations),
            by_position=self.position_accuracy(record.evaluations),
        )

    def years_until_reveal(self, record: TrackRecord) -> int:
        """Rough years until reliability reveals, at a typical evaluation pace."""
        if record.reliability_revealed:
            return 0
        remaining = self.settings.min_evaluations_for_reliability - len(record.completed_evaluations)
        if remaining <= 0:
            return 0
        return math.ceil(remaining / self.EVALUATIONS_PER_YEAR)

    def accuracy_label(self, hit_rate: float) -> str:
        for cutoff, label in self.ACCURACY_LABELS:
            if hit_rate >= cutoff:
                return label
        return self.ACCURACY_LABELS[-1][1]

    def accuracy_view_model(self, scout: Scout) -> ScoutAccuracyViewModel:
        record = scout.track_record
        breakdown = self.accuracy_breakdown(record)
        revealed = record.reliability_revealed
        threshold = self.settings.min_evaluations_for_reliability

        overall_accuracy = None
        hit_rate = None
        if revealed and breakdown.hit_rate is not None:
            overall_accuracy = self.accuracy_label(breakdown.hit_rate)
            hit_rate = f"{round_half_up(breakdown.hit_rate * 100)}%"

        if not revealed:
            if breakdown.total_evaluations == 0:
                description = "No evaluation history yet"
            elif breakdown.completed_evaluations < threshold:
                description = (
                    f"Building track record ({breakdown.completed_evaluations}/{threshold} evaluations completed)"
                )
            else:
                description = "Track record being established"
        elif overall_accuracy == "Reliable":
            description = "Proven evaluator with strong track record"
        elif overall_accuracy == "Mixed":
            description = "Average evaluator with room for improvement"
        else:
            description = "Inconsistent evaluation history"

        return ScoutAccuracyViewModel(
            scout_id=scout.id,
            scout_name=scout.full_name,
            overall_accuracy=overall_accuracy,
            hit_rate=hit_rate,
            known_strengths=list(record.known_strengths),
            known_weaknesses=list(record.known_weaknesses),
            evaluation_count=breakdown.total_evaluations,
            years_of_data=record.years_of_data,
            reliability_known=revealed,
            description=description,
        )

    def compare_scout_accuracy(self, first: Scout, second: Scout) -> AccuracyComparison:
        """Compare two scouts on revealed hit rate only."""
        if not first.track_record.reliability_revealed or not second.track_record.reliability_revealed:
            return AccuracyComparison(None, "Cannot compare - insufficient data on one or both scouts")

        rate_a = first.track_record.overall_hit_rate
        rate_b = second.track_record.overall_hit_rate
        if rate_a is None or rate_b is None:
            return AccuracyComparison(None, "Cannot compare - insufficient completed evaluations")

        if abs(rate_a - rate_b) < self.SIMILAR_HIT_RATE_DELTA:
            return AccuracyComparison(None, "Both scouts have similar track records")

        better = first if rate_a > rate_b else second
        return AccuracyComparison(better.id, f"{better.full_name} has a stronger track record")

    @staticmethod
    def rank_scouts_by_accuracy(scouts: Iterable[Scout]) -> tuple[list[Scout], list[Scout]]:
        """Split scouts into (revealed sorted by hit rate, unrevealed)."""
        revealed = []
        unrevealed = []
        for scout in scouts:
            if scout.track_record.reliability_revealed:
                revealed.append(scout)
            else:
                unrevealed.append(scout)
        revealed.sort(key=lambda s: (-(s.track_record.overall_hit_rate or 0.0), s.id))
        return revealed, unrevealed
