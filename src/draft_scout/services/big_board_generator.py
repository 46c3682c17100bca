"""Ranks prospects into a big board from every scout's reports."""

import logging
from collections import defaultdict
from dataclasses import replace
from typing import Iterable, Mapping, Optional, Sequence

from draft_scout.config import Settings, get_settings
from draft_scout.models.rankings import (
    BigBoard,
    BoardEntry,
    BoardSummary,
    DraftTier,
    PositionalNeeds,
    ProspectComparison,
    ProspectRanking,
    ScoutReliability,
)
from draft_scout.models.report import ScoutReport
from draft_scout.services.report_generator import validate_report
from draft_scout.services.scorers.confidence_scorer import ConfidenceScorer
from draft_scout.utils.numeric import mean, round_half_up
from draft_scout.utils.position_normalizer import POSITION_GROUPS, normalize_position, position_group

logger = logging.getLogger(__name__)


class BigBoardGenerator:
    """Aggregates reports into a deterministic, gapless ranking.

    Scores per prospect:
        skill_score: unweighted mean of overall-range midpoints
        weighted_skill_score: mean weighted by each scout's revealed reliability
        need_adjusted_score: weighted score times the team need multiplier,
            plus a flat bonus when any report is a focus report

    Ties on the need-adjusted score break on prospect id, so the same inputs
    always produce the same board.
    """

    DEFAULT_RELIABILITY = 0.5
    NO_REPORT_ROUND = 7
    ROUND_TIERS = (
        (1, DraftTier.FIRST_ROUND),
        (2, DraftTier.SECOND_ROUND),
        (3, DraftTier.DAY_TWO),
        (5, DraftTier.DAY_THREE),
        (6, DraftTier.DRAFTABLE),
    )

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.confidence_scorer = ConfidenceScorer(self.settings)

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def build_board_entries(self, reports: Iterable[ScoutReport]) -> list[BoardEntry]:
        """Group reports by prospect, dropping any that fail validation."""
        grouped: dict[str, list[ScoutReport]] = defaultdict(list)
        for report in reports:
            if not validate_report(report, self.settings):
                logger.warning(f"Skipping invalid report {report.id!r} for prospect {report.prospect_id!r}")
                continue
            grouped[report.prospect_id].append(report)

        entries = []
        for prospect_id in sorted(grouped):
            prospect_reports = grouped[prospect_id]
            first = prospect_reports[0]
            entries.append(
                BoardEntry(
                    prospect_id=prospect_id,
                    prospect_name=first.prospect_name,
                    position=normalize_position(first.position) or first.position,
                    reports=tuple(prospect_reports),
                )
            )
        return entries

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def reliability_weight(
        self,
        scout_id: str,
        position: str,
        reliability: Mapping[str, ScoutReliability],
    ) -> float:
        """Weight for a scout's report.

        Unknown or unrevealed scouts get the neutral default, never more.
        Position aliases resolve to the same accuracy entry.
        """
        info = reliability.get(scout_id)
        if info is None or not info.is_known:
            return self.DEFAULT_RELIABILITY
        position_rate = info.accuracy_for(position)
        if position_rate is not None:
            return position_rate
        if info.overall_hit_rate is not None:
            return info.overall_hit_rate
        return self.DEFAULT_RELIABILITY

    def need_multiplier(self, position: str, needs: PositionalNeeds) -> float:
        return self.settings.need_multipliers.get(needs.level_for(position).value, 1.0)

    def consensus_round(self, reports: Sequence[ScoutReport]) -> int:
        if not reports:
            return self.NO_REPORT_ROUND
        average = mean(r.round_range.midpoint for r in reports)
        return int(max(self.settings.round_min, min(self.settings.round_max, round_half_up(average))))

    def determine_tier(self, projected_round: int, weighted_skill: float) -> DraftTier:
        if projected_round <= 1 and weighted_skill >= self.settings.elite_skill_threshold:
            return DraftTier.ELITE
        for max_round, tier in self.ROUND_TIERS:
            if projected_round <= max_round:
                return tier
        return DraftTier.PRIORITY_FA

    def score_entry(
        self,
        entry: BoardEntry,
        needs: PositionalNeeds,
        reliability: Mapping[str, ScoutReliability],
    ) -> ProspectRanking:
        """Score one prospect. final_rank is 0 until the board is sorted."""
        reports = entry.reports
        midpoints = [r.overall_range.midpoint for r in reports]
        weights = [self.reliability_weight(r.scout_id, entry.position, reliability) for r in reports]

        skill_score = mean(midpoints)
        total_weight = sum(weights)
        if total_weight > 0:
            weighted = sum(m * w for m, w in zip(midpoints, weights)) / total_weight
        else:
            weighted = skill_score

        has_focus = any(r.is_focus for r in reports)
        multiplier = self.need_multiplier(entry.position, needs)
        need_adjusted = weighted * multiplier
        if has_focus:
            need_adjusted += self.settings.focus_report_bonus

        projected_round = self.consensus_round(reports)
        confidence = self.confidence_scorer.aggregate_confidence(reports)

        return ProspectRanking(
            prospect_id=entry.prospect_id,
            prospect_name=entry.prospect_name,
            position=entry.position,
            final_rank=0,
            skill_score=round(skill_score, 2),
            weighted_skill_score=round(weighted, 2),
            confidence_score=confidence.combined_score,
            need_multiplier=multiplier,
            need_adjusted_score=round(need_adjusted, 2),
            projected_round=projected_round,
            tier=entry.user_tier or self.determine_tier(projected_round, weighted),
            report_count=len(reports),
            scout_ids=tuple(sorted({r.scout_id for r in reports})),
            has_focus_report=has_focus,
            tier_overridden=entry.user_tier is not None,
        )

    def generate_prospect_rankings(
        self,
        entries: Iterable[BoardEntry],
        needs: PositionalNeeds,
        reliability: Mapping[str, ScoutReliability],
    ) -> list[ProspectRanking]:
        """Rank every entry; ranks are 1-based and gapless."""
        scored = [self.score_entry(entry, needs, reliability) for entry in entries]
        scored.sort(key=lambda r: (-r.need_adjusted_score, r.prospect_id))
        return [replace(ranking, final_rank=index) for index, ranking in enumerate(scored, start=1)]

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    @staticmethod
    def position_rankings(rankings: Sequence[ProspectRanking]) -> dict[str, tuple[ProspectRanking, ...]]:
        """Board order filtered per position; index + 1 is the positional rank."""
        grouped: dict[str, list[ProspectRanking]] = defaultdict(list)
        for ranking in rankings:
            grouped[ranking.position].append(ranking)
        return {position: tuple(items) for position, items in grouped.items()}

    @staticmethod
    def position_group_rankings(rankings: Sequence[ProspectRanking]) -> dict[str, tuple[ProspectRanking, ...]]:
        grouped: dict[str, list[ProspectRanking]] = {group: [] for group in POSITION_GROUPS}
        for ranking in rankings:
            group = position_group(ranking.position)
            if group is not None:
                grouped[group].append(ranking)
        return {group: tuple(items) for group, items in grouped.items() if items}

    @staticmethod
    def tier_rankings(rankings: Sequence[ProspectRanking]) -> dict[DraftTier, tuple[ProspectRanking, ...]]:
        grouped: dict[DraftTier, list[ProspectRanking]] = defaultdict(list)
        for ranking in rankings:
            grouped[ranking.tier].append(ranking)
        return {tier: tuple(grouped[tier]) for tier in DraftTier if grouped[tier]}

    @staticmethod
    def top_prospects(rankings: Sequence[ProspectRanking], limit: int = 10) -> list[ProspectRanking]:
        return list(rankings[:limit])

    @staticmethod
    def value_score(ranking: ProspectRanking) -> float:
        return ranking.skill_score / (ranking.projected_round * 10)

    def identify_best_value(self, rankings: Sequence[ProspectRanking], limit: int = 10) -> list[ProspectRanking]:
        ordered = sorted(rankings, key=lambda r: (-self.value_score(r), r.prospect_id))
        return ordered[:limit]

    def identify_risers(
        self,
        rankings: Sequence[ProspectRanking],
        limit: int = 5,
        previous_rankings: Optional[Sequence[ProspectRanking]] = None,
    ) -> list[ProspectRanking]:
        """Prospects moving up.

        With previous rankings, a riser improved its rank. Without them, a
        riser is a skilled prospect still projected in a later round.
        """
        if previous_rankings:
            previous = {r.prospect_id: r.final_rank for r in previous_rankings}
            moved = [
                (previous[r.prospect_id] - r.final_rank, r)
                for r in rankings
                if r.prospect_id in previous and previous[r.prospect_id] > r.final_rank
            ]
            moved.sort(key=lambda item: (-item[0], item[1].prospect_id))
            return [r for _, r in moved[:limit]]

        s = self.settings
        risers = [
            r for r in rankings
            if r.skill_score > s.riser_skill_threshold and r.projected_round >= s.riser_min_round
        ]
        risers.sort(key=lambda r: (-r.skill_score, r.prospect_id))
        return risers[:limit]

    def identify_fallers(
        self,
        rankings: Sequence[ProspectRanking],
        limit: int = 5,
        previous_rankings: Optional[Sequence[ProspectRanking]] = None,
    ) -> list[ProspectRanking]:
        """Prospects moving down.

        With previous rankings, a faller dropped in rank. Without them, a
        faller is projected early but backed by little confidence.
        """
        if previous_rankings:
            previous = {r.prospect_id: r.final_rank for r in previous_rankings}
            moved = [
                (r.final_rank - previous[r.prospect_id], r)
                for r in rankings
                if r.prospect_id in previous and previous[r.prospect_id] < r.final_rank
            ]
            moved.sort(key=lambda item: (-item[0], item[1].prospect_id))
            return [r for _, r in moved[:limit]]

        s = self.settings
        fallers = [
            r for r in rankings
            if r.projected_round <= s.faller_max_round and r.confidence_score < s.faller_confidence_threshold
        ]
        fallers.sort(key=lambda r: (r.confidence_score, r.prospect_id))
        return fallers[:limit]

    # ------------------------------------------------------------------
    # Board
    # ------------------------------------------------------------------

    def generate_big_board(
        self,
        team_id: str,
        draft_year: int,
        entries: Iterable[BoardEntry],
        needs: Optional[PositionalNeeds] = None,
        reliability: Optional[Mapping[str, ScoutReliability]] = None,
        previous_rankings: Optional[Sequence[ProspectRanking]] = None,
        value_limit: int = 10,
        trend_limit: int = 5,
        top_limit: int = 10,
    ) -> BigBoard:
        needs = needs or PositionalNeeds()
        reliability = reliability or {}

        base = self.generate_prospect_rankings(entries, needs, reliability)
        value_ids = {r.prospect_id for r in self.identify_best_value(base, value_limit)}
        riser_ids = {r.prospect_id for r in self.identify_risers(base, trend_limit, previous_rankings)}
        faller_ids = {r.prospect_id for r in self.identify_fallers(base, trend_limit, previous_rankings)}

        rankings = [
            replace(
                r,
                is_best_value=r.prospect_id in value_ids,
                is_riser=r.prospect_id in riser_ids,
                is_faller=r.prospect_id in faller_ids,
            )
            for r in base
        ]

        board = BigBoard(
            team_id=team_id,
            draft_year=draft_year,
            rankings=tuple(rankings),
            position_rankings=self.position_rankings(rankings),
            tier_rankings=self.tier_rankings(rankings),
            top_prospects=tuple(self.top_prospects(rankings, top_limit)),
            best_values=tuple(self.identify_best_value(rankings, value_limit)),
            risers=tuple(self.identify_risers(rankings, trend_limit, previous_rankings)),
            fallers=tuple(self.identify_fallers(rankings, trend_limit, previous_rankings)),
            needs=needs,
        )
        logger.debug(f"Big board for {team_id} ({draft_year}): {len(rankings)} prospects ranked")
        return board

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @staticmethod
    def validate_big_board(board: BigBoard) -> bool:
        if not board.team_id:
            return False
        ids = [r.prospect_id for r in board.rankings]
        if len(ids) != len(set(ids)):
            return False
        return [r.final_rank for r in board.rankings] == list(range(1, len(board.rankings) + 1))

    @staticmethod
    def board_summary(board: BigBoard) -> BoardSummary:
        by_tier: dict[str, int] = defaultdict(int)
        by_position: dict[str, int] = defaultdict(int)
        for ranking in board.rankings:
            by_tier[ranking.tier.value] += 1
            by_position[ranking.position] += 1

        total = len(board.rankings)
        focused = sum(1 for r in board.rankings if r.has_focus_report)
        return BoardSummary(
            total_prospects=total,
            by_tier=dict(by_tier),
            by_position=dict(by_position),
            average_confidence=round(mean(r.confidence_score for r in board.rankings), 1),
            focused_percentage=round(focused / total * 100, 1) if total else 0.0,
        )

    @staticmethod
    def compare_prospects(first: ProspectRanking, second: ProspectRanking) -> ProspectComparison:
        notes = []
        skill_difference = round(first.weighted_skill_score - second.weighted_skill_score, 2)
        confidence_difference = round(first.confidence_score - second.confidence_score, 2)
        round_difference = first.projected_round - second.projected_round

        if abs(skill_difference) >= 5:
            stronger = first if skill_difference > 0 else second
            notes.append(f"{stronger.prospect_name} grades out higher")
        if abs(confidence_difference) >= 15:
            surer = first if confidence_difference > 0 else second
            notes.append(f"More certainty on {surer.prospect_name}")
        if round_difference != 0:
            earlier = first if round_difference < 0 else second
            notes.append(f"{earlier.prospect_name} projects earlier")

        better = None
        if first.final_rank != second.final_rank:
            better = first.prospect_id if first.final_rank < second.final_rank else second.prospect_id
        return ProspectComparison(
            better_prospect_id=better,
            skill_difference=skill_difference,
            confidence_difference=confidence_difference,
            round_difference=round_difference,
            notes=tuple(notes),
        )
