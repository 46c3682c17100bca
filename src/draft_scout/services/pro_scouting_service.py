"""Scouting veterans already in the league.

Veterans use the same estimation composition as prospects; how much game
tape exists (status and tenure) stands in for draft observability.
"""

import logging
import random
from dataclasses import dataclass
from typing import Iterable, Optional

from draft_scout.config import Settings, get_settings
from draft_scout.models.prospect import PlayerStatus, VeteranPlayer, VisibilityLevel
from draft_scout.models.report import TraitInfo
from draft_scout.models.scout import Scout
from draft_scout.models.skill_range import ConfidenceLevel, SkillRange
from draft_scout.services.report_generator import generate_report_id, trait_category
from draft_scout.services.scorers.attribute_estimator import VETERAN_TRAIT_PATTERNS, AttributeEstimator
from draft_scout.utils.numeric import mean
from draft_scout.utils.position_normalizer import normalize_position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PerformanceTrend:
    direction: str  # "improving", "declining", "stable"
    recent_games: str  # "strong", "average", "weak"
    consistency: str  # "consistent", "inconsistent"
    notes: tuple[str, ...] = ()


@dataclass(frozen=True)
class TradeValueAssessment:
    overall_value: str  # "premium", "high", "medium", "low", "negligible"
    draft_pick_equivalent: str
    contract_impact: str  # "positive", "neutral", "negative"
    age_consideration: str  # "entering_prime", "prime", "peak", "declining"
    trade_likelihood: str  # "untouchable", "unlikely", "possible", "likely"
    notes: tuple[str, ...] = ()


@dataclass(frozen=True)
class ProReportComparison:
    outcome: str  # "first_better", "second_better", "even"
    first_score: float
    second_score: float
    summary: str


@dataclass(frozen=True)
class ProScoutReport:
    id: str
    player_id: str
    player_name: str
    position: str
    team_id: str
    scout_id: str
    generated_at: int
    age: int
    overall_range: SkillRange
    physical_range: SkillRange
    technical_range: SkillRange
    visibility: VisibilityLevel
    confidence: ConfidenceLevel
    trend: PerformanceTrend
    trade_value: TradeValueAssessment
    visible_traits: tuple[TraitInfo, ...] = ()
    hidden_trait_count: int = 0


class ProScoutingService:
    """Generates reports on veteran players."""

    BASE_TRAIT_FRACTION = 0.7

    # Trade value
    AGE_BANDS = ((24, "entering_prime"), (27, "prime"), (30, "peak"))
    PREMIUM_SKILL = 85
    VALUE_TIERS = ((75, "high"), (65, "medium"), (50, "low"))
    PICK_EQUIVALENTS = {
        "premium": "Multiple 1sts",
        "high": "Mid 1st",
        "medium": "2nd round pick",
        "low": "4th-5th round pick",
        "negligible": "Conditional late pick",
    }
    TEAM_FRIENDLY_CAP_HIT = 15_000_000
    BURDENSOME_CAP_HIT = 25_000_000
    DEAD_CAP_RATIO = 0.5

    # Report comparison
    PRIME_AGE = 27
    AGE_PENALTY_PER_YEAR = 2
    CONTRACT_ADJUSTMENT = {"positive": 5, "neutral": 0, "negative": -5}
    EVEN_MARGIN = 5

    # Scouting targets
    MAX_TARGET_AGE = 32
    UNAVAILABLE_STATUSES = (PlayerStatus.PRACTICE_SQUAD, PlayerStatus.INJURED)

    # Validation
    MIN_PLAYER_AGE = 21
    MAX_PLAYER_AGE = 45

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.estimator = AttributeEstimator(self.settings)

    @staticmethod
    def recent_performance(player: VeteranPlayer) -> float:
        if player.recent_games:
            return mean(player.recent_games)
        return player.current_season.performance_rating

    def analyze_performance_trend(self, player: VeteranPlayer) -> PerformanceTrend:
        """Compare recent form and this season against the career baseline.

        Uses only observable production, never the hidden true values.
        """
        notes = []
        recent = self.recent_performance(player)
        season = player.current_season.performance_rating
        career = player.career.performance_rating

        recent_vs_career = recent - career
        season_vs_career = season - career
        if recent_vs_career > 5 and season_vs_career > 3:
            direction = "improving"
            notes.append("Playing best football of career")
        elif recent_vs_career < -5 and season_vs_career < -3:
            direction = "declining"
            notes.append("Performance has dropped off")
        else:
            direction = "stable"

        if recent >= season + 5:
            recent_games = "strong"
            notes.append("Hot streak in recent games")
        elif recent <= season - 5:
            recent_games = "weak"
            notes.append("Struggling in recent games")
        else:
            recent_games = "average"

        spread = (max(player.recent_games) - min(player.recent_games)) if player.recent_games else 0.0
        if spread <= 6:
            consistency = "consistent"
        else:
            consistency = "inconsistent"
            notes.append("Performance varies week-to-week")

        if player.age >= 30 and direction == "declining":
            notes.append("Age may be catching up")
        if player.age <= 25 and direction == "improving":
            notes.append("Still developing and improving")

        return PerformanceTrend(direction, recent_games, consistency, tuple(notes))

    def generate_report(
        self,
        player: VeteranPlayer,
        scout: Scout,
        timestamp: int,
        rng: random.Random,
    ) -> ProScoutReport:
        evaluation = scout.attributes.evaluation
        level, visibility = self.estimator.veteran_visibility(player)

        overall = self.estimator.estimate_range(player.true_overall, evaluation, visibility, rng)
        physical = self.estimator.estimate_range(player.true_physical, evaluation, visibility, rng)
        technical = self.estimator.estimate_range(player.true_technical, evaluation, visibility, rng)
        visible, hidden = self.estimator.reveal_traits(
            player.all_traits,
            evaluation,
            visibility,
            rng,
            patterns=VETERAN_TRAIT_PATTERNS,
            base_fraction=self.BASE_TRAIT_FRACTION,
        )

        logger.debug(f"Pro report on {player.id} by {scout.id}: {level.value} visibility, overall {overall}")
        return ProScoutReport(
            id=generate_report_id(player.id, scout.id, timestamp),
            player_id=player.id,
            player_name=player.name,
            position=player.position,
            team_id=player.team_id,
            scout_id=scout.id,
            generated_at=timestamp,
            overall_range=overall,
            physical_range=physical,
            technical_range=technical,
            visibility=level,
            confidence=overall.confidence,
            age=player.age,
            trend=self.analyze_performance_trend(player),
            trade_value=self.calculate_trade_value(player, overall),
            visible_traits=tuple(TraitInfo(t, trait_category(t)) for t in visible),
            hidden_trait_count=hidden,
        )

    # ------------------------------------------------------------------
    # Trade evaluation
    # ------------------------------------------------------------------

    def calculate_trade_value(self, player: VeteranPlayer, overall: SkillRange) -> TradeValueAssessment:
        """Grade a veteran as a trade asset from the scout's overall estimate.

        Only the estimate and public facts (age, contract, status) are used.
        """
        notes = []

        age_consideration = "declining"
        for max_age, label in self.AGE_BANDS:
            if player.age <= max_age:
                age_consideration = label
                break
        if age_consideration == "declining":
            notes.append("Age limits trade value")

        estimated_skill = overall.midpoint
        if estimated_skill >= self.PREMIUM_SKILL and age_consideration != "declining":
            overall_value = "premium"
        else:
            overall_value = next(
                (label for minimum, label in self.VALUE_TIERS if estimated_skill >= minimum),
                "negligible",
            )

        contract = player.contract
        if contract.years_remaining >= 2 and contract.cap_hit < self.TEAM_FRIENDLY_CAP_HIT:
            contract_impact = "positive"
            notes.append("Team-friendly contract")
        elif contract.cap_hit > self.BURDENSOME_CAP_HIT or contract.dead_cap > contract.cap_hit * self.DEAD_CAP_RATIO:
            contract_impact = "negative"
            notes.append("Significant cap implications")
        else:
            contract_impact = "neutral"

        if contract.has_no_trade_clause:
            trade_likelihood = "unlikely"
            notes.append("Has no-trade clause")
        elif overall_value == "premium" and player.status == PlayerStatus.STARTER:
            trade_likelihood = "untouchable"
            notes.append("Franchise cornerstone, unlikely to be available")
        elif contract.is_expiring:
            trade_likelihood = "likely"
            notes.append("Expiring contract, team may look to trade")
        elif contract_impact == "negative":
            trade_likelihood = "possible"
            notes.append("Team might look to shed salary")
        else:
            trade_likelihood = "possible"

        return TradeValueAssessment(
            overall_value=overall_value,
            draft_pick_equivalent=self.PICK_EQUIVALENTS[overall_value],
            contract_impact=contract_impact,
            age_consideration=age_consideration,
            trade_likelihood=trade_likelihood,
            notes=tuple(notes),
        )

    def trade_score(self, report: ProScoutReport) -> float:
        """Overall midpoint, less an age penalty past prime, plus contract impact."""
        age_penalty = max(0, report.age - self.PRIME_AGE) * self.AGE_PENALTY_PER_YEAR
        contract = self.CONTRACT_ADJUSTMENT.get(report.trade_value.contract_impact, 0)
        return report.overall_range.midpoint - age_penalty + contract

    def compare_reports(self, first: ProScoutReport, second: ProScoutReport) -> ProReportComparison:
        first_score = self.trade_score(first)
        second_score = self.trade_score(second)

        if abs(first_score - second_score) < self.EVEN_MARGIN:
            outcome = "even"
            summary = f"{first.player_name} and {second.player_name} have similar trade value"
        elif first_score > second_score:
            outcome = "first_better"
            summary = f"{first.player_name} appears to be the more valuable asset"
        else:
            outcome = "second_better"
            summary = f"{second.player_name} appears to be the more valuable asset"
        return ProReportComparison(outcome, round(first_score, 2), round(second_score, 2), summary)

    @staticmethod
    def target_value(player: VeteranPlayer) -> float:
        """Observable worth of pursuing a player: career production adjusted
        for age, contract and role."""
        value = player.career.performance_rating
        if player.age <= 25:
            value += 10
        elif player.age <= 28:
            value += 5
        elif player.age >= 31:
            value -= 10

        if player.contract.is_expiring:
            value += 5
        if player.contract.has_no_trade_clause:
            value -= 15

        if player.status == PlayerStatus.STARTER:
            value += 5
        elif player.status == PlayerStatus.BACKUP:
            value -= 5
        return value

    def identify_scouting_targets(
        self,
        players: Iterable[VeteranPlayer],
        target_positions: Iterable[str],
    ) -> list[VeteranPlayer]:
        """Veterans worth a pro scout's time at the positions we want.

        Practice-squad, injured and older players are skipped. The rest are
        ordered by ``target_value``, ties by player id.
        """
        wanted = {normalize_position(p) or p for p in target_positions}
        targets = [
            player for player in players
            if (normalize_position(player.position) or player.position) in wanted
            and player.status not in self.UNAVAILABLE_STATUSES
            and player.age <= self.MAX_TARGET_AGE
        ]
        targets.sort(key=lambda p: (-self.target_value(p), p.id))
        return targets

    def validate_report(self, report: ProScoutReport) -> bool:
        if not report.player_id or not report.player_name or not report.scout_id:
            return False
        s = self.settings
        for skill_range in (report.overall_range, report.physical_range, report.technical_range):
            if not skill_range.is_within(s.skill_min, s.skill_max):
                return False
        if report.hidden_trait_count < 0:
            return False
        return self.MIN_PLAYER_AGE <= report.age <= self.MAX_PLAYER_AGE
