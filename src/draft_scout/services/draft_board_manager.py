"""Maintains a team's draft board: pooled reports plus the user's and the
scouting director's own rankings, notes and tier calls.

Every operation returns a new ``DraftBoardState``. Changes to a finalized
board are ignored, as are rank and tier changes to a locked prospect.
"""

import logging
from dataclasses import replace
from typing import Callable, Iterable, Optional, Sequence

from draft_scout.config import Settings, get_settings
from draft_scout.models.draft_board import (
    BoardSortOption,
    DirectorInput,
    DraftBoardProspect,
    DraftBoardProspectView,
    DraftBoardState,
    DraftBoardView,
)
from draft_scout.models.rankings import BoardEntry, DraftTier
from draft_scout.models.report import AutoFindings, ScoutReport
from draft_scout.models.skill_range import SkillRange
from draft_scout.services.big_board_generator import BigBoardGenerator
from draft_scout.services.report_generator import validate_report
from draft_scout.utils.numeric import mean, round_half_up
from draft_scout.utils.position_normalizer import normalize_position

logger = logging.getLogger(__name__)


def _insert_ranked(
    order: Sequence[str],
    prospect_id: str,
    rank: int,
    rank_of: Callable[[str], Optional[int]],
) -> tuple[str, ...]:
    """Move prospect_id ahead of the first entry ranked below ``rank``."""
    ids = [pid for pid in order if pid != prospect_id]
    for index, other_id in enumerate(ids):
        other_rank = rank_of(other_id)
        if other_rank is not None and other_rank > rank:
            ids.insert(index, prospect_id)
            return tuple(ids)
    ids.append(prospect_id)
    return tuple(ids)


class DraftBoardManager:
    """Builds and edits draft board state."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.board_generator = BigBoardGenerator(self.settings)

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    @staticmethod
    def create_state(team_id: str, draft_year: int, timestamp: int = 0) -> DraftBoardState:
        return DraftBoardState(team_id=team_id, draft_year=draft_year, last_modified=timestamp)

    def build_prospect(self, reports: Sequence[ScoutReport], timestamp: int) -> Optional[DraftBoardProspect]:
        """Pool every report on one prospect. None when there are none."""
        if not reports:
            return None

        ordered = tuple(sorted(reports, key=lambda r: (r.generated_at, r.id), reverse=True))
        latest = ordered[0]
        confidence = self.board_generator.confidence_scorer.aggregate_confidence(ordered)
        has_focus = any(r.is_focus for r in ordered)
        needs_more = (
            isinstance(latest.findings, AutoFindings)
            and latest.findings.needs_more_scouting
            and not has_focus
        )

        return DraftBoardProspect(
            prospect_id=latest.prospect_id,
            prospect_name=latest.prospect_name,
            position=normalize_position(latest.position) or latest.position,
            reports=ordered,
            average_overall=SkillRange(
                round_half_up(mean(r.overall_range.min for r in ordered)),
                round_half_up(mean(r.overall_range.max for r in ordered)),
                confidence.level,
            ),
            consensus_round=self.board_generator.consensus_round(ordered),
            confidence_score=confidence.combined_score,
            confidence_level=confidence.level,
            has_focus_report=has_focus,
            needs_more_scouting=needs_more,
            last_updated=timestamp,
        )

    def add_report(self, state: DraftBoardState, report: ScoutReport, timestamp: int) -> DraftBoardState:
        """Add a report, keeping any user and director input on the prospect."""
        if state.is_finalized:
            logger.debug(f"Board for {state.team_id} is finalized; ignoring report {report.id!r}")
            return state
        if not validate_report(report, self.settings):
            logger.warning(f"Skipping invalid report {report.id!r} for prospect {report.prospect_id!r}")
            return state

        existing = state.get(report.prospect_id)
        previous_reports = existing.reports if existing else ()
        prospect = self.build_prospect((*previous_reports, report), timestamp)
        if existing is not None:
            prospect = replace(
                prospect,
                user_rank=existing.user_rank,
                user_notes=existing.user_notes,
                user_tier=existing.user_tier,
                is_locked=existing.is_locked,
                director_rank=existing.director_rank,
                director_notes=existing.director_notes,
            )

        prospects = dict(state.prospects)
        prospects[report.prospect_id] = prospect
        return replace(state, prospects=prospects, last_modified=timestamp)

    def add_reports(self, state: DraftBoardState, reports: Iterable[ScoutReport], timestamp: int) -> DraftBoardState:
        for report in reports:
            state = self.add_report(state, report, timestamp)
        return state

    # ------------------------------------------------------------------
    # User and director input
    # ------------------------------------------------------------------

    @staticmethod
    def _update_prospect(
        state: DraftBoardState,
        prospect: DraftBoardProspect,
        timestamp: int,
        **changes,
    ) -> DraftBoardState:
        prospects = dict(state.prospects)
        prospects[prospect.prospect_id] = replace(prospect, **changes)
        return replace(state, prospects=prospects, last_modified=timestamp)

    def set_user_ranking(self, state: DraftBoardState, prospect_id: str, rank: int, timestamp: int) -> DraftBoardState:
        prospect = state.get(prospect_id)
        if state.is_finalized or prospect is None or prospect.is_locked:
            return state

        updated = self._update_prospect(state, prospect, timestamp, user_rank=rank, last_updated=timestamp)
        order = _insert_ranked(
            updated.user_rankings,
            prospect_id,
            rank,
            lambda pid: updated.prospects[pid].user_rank,
        )
        return replace(updated, user_rankings=order)

    def remove_user_ranking(self, state: DraftBoardState, prospect_id: str, timestamp: int) -> DraftBoardState:
        prospect = state.get(prospect_id)
        if state.is_finalized or prospect is None or prospect.is_locked:
            return state

        updated = self._update_prospect(state, prospect, timestamp, user_rank=None, last_updated=timestamp)
        return replace(updated, user_rankings=tuple(pid for pid in state.user_rankings if pid != prospect_id))

    def set_user_notes(self, state: DraftBoardState, prospect_id: str, notes: str, timestamp: int) -> DraftBoardState:
        prospect = state.get(prospect_id)
        if state.is_finalized or prospect is None:
            return state
        return self._update_prospect(state, prospect, timestamp, user_notes=notes, last_updated=timestamp)

    def set_user_tier(
        self,
        state: DraftBoardState,
        prospect_id: str,
        tier: Optional[DraftTier],
        timestamp: int,
    ) -> DraftBoardState:
        """Override the computed tier; ``None`` clears the override."""
        prospect = state.get(prospect_id)
        if state.is_finalized or prospect is None or prospect.is_locked:
            return state
        return self._update_prospect(state, prospect, timestamp, user_tier=tier, last_updated=timestamp)

    def lock_prospect(self, state: DraftBoardState, prospect_id: str, timestamp: int) -> DraftBoardState:
        prospect = state.get(prospect_id)
        if prospect is None:
            return state
        return self._update_prospect(state, prospect, timestamp, is_locked=True)

    def unlock_prospect(self, state: DraftBoardState, prospect_id: str, timestamp: int) -> DraftBoardState:
        prospect = state.get(prospect_id)
        if prospect is None:
            return state
        return self._update_prospect(state, prospect, timestamp, is_locked=False)

    def add_director_input(self, state: DraftBoardState, director_input: DirectorInput, timestamp: int) -> DraftBoardState:
        """Record the director's rank and notes.

        Recommending focus flags the prospect as needing more scouting.
        """
        prospect = state.get(director_input.prospect_id)
        if state.is_finalized or prospect is None:
            return state

        updated = self._update_prospect(
            state,
            prospect,
            timestamp,
            director_rank=director_input.rank,
            director_notes=director_input.notes,
            needs_more_scouting=prospect.needs_more_scouting or director_input.recommend_focus,
            last_updated=timestamp,
        )
        order = _insert_ranked(
            updated.director_recommendations,
            director_input.prospect_id,
            director_input.rank,
            lambda pid: updated.prospects[pid].director_rank,
        )
        return replace(updated, director_recommendations=order)

    def remove_prospect(self, state: DraftBoardState, prospect_id: str, timestamp: int) -> DraftBoardState:
        if state.is_finalized or prospect_id not in state.prospects:
            return state
        prospects = {pid: p for pid, p in state.prospects.items() if pid != prospect_id}
        return replace(
            state,
            prospects=prospects,
            user_rankings=tuple(pid for pid in state.user_rankings if pid != prospect_id),
            director_recommendations=tuple(pid for pid in state.director_recommendations if pid != prospect_id),
            last_modified=timestamp,
        )

    @staticmethod
    def finalize(state: DraftBoardState, timestamp: int) -> DraftBoardState:
        logger.info(f"Draft board for {state.team_id} ({state.draft_year}) finalized with {len(state.prospects)} prospects")
        return replace(state, is_finalized=True, last_modified=timestamp)

    @staticmethod
    def validate_state(state: DraftBoardState) -> bool:
        if not state.team_id or not state.draft_year:
            return False
        listed = (*state.user_rankings, *state.director_recommendations)
        return all(pid in state.prospects for pid in listed)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def effective_tier(self, prospect: DraftBoardProspect) -> DraftTier:
        """The user's tier call when there is one, else the computed tier."""
        if prospect.user_tier is not None:
            return prospect.user_tier
        return self.board_generator.determine_tier(prospect.consensus_round, prospect.average_overall.midpoint)

    def sorted_prospects(
        self,
        state: DraftBoardState,
        sort_by: BoardSortOption = BoardSortOption.CONSENSUS_ROUND,
        positions: Iterable[str] = (),
        tier: Optional[DraftTier] = None,
        focused_only: bool = False,
    ) -> list[DraftBoardProspect]:
        """Filter then sort the board. Ties always break on prospect id."""
        prospects = list(state.prospects.values())

        wanted = {normalize_position(p) or p for p in positions}
        if wanted:
            prospects = [p for p in prospects if p.position in wanted]
        if tier is not None:
            prospects = [p for p in prospects if self.effective_tier(p) == tier]
        if focused_only:
            prospects = [p for p in prospects if p.has_focus_report]

        unranked = float("inf")
        sort_keys = {
            BoardSortOption.USER_RANK: lambda p: (p.user_rank if p.user_rank is not None else unranked, p.prospect_id),
            BoardSortOption.DIRECTOR_RANK: lambda p: (
                p.director_rank if p.director_rank is not None else unranked,
                p.prospect_id,
            ),
            BoardSortOption.CONSENSUS_ROUND: lambda p: (p.consensus_round, p.prospect_id),
            BoardSortOption.CONFIDENCE: lambda p: (-p.confidence_score, p.prospect_id),
            BoardSortOption.POSITION: lambda p: (p.position, p.prospect_id),
            BoardSortOption.LAST_UPDATED: lambda p: (-p.last_updated, p.prospect_id),
        }
        prospects.sort(key=sort_keys[BoardSortOption(sort_by)])
        return prospects

    @staticmethod
    def prospects_needing_scouting(state: DraftBoardState) -> list[DraftBoardProspect]:
        return sorted(
            (p for p in state.prospects.values() if p.needs_more_scouting and not p.has_focus_report),
            key=lambda p: p.prospect_id,
        )

    @staticmethod
    def prospects_by_position(state: DraftBoardState, position: str) -> list[DraftBoardProspect]:
        wanted = normalize_position(position) or position
        return sorted(
            (p for p in state.prospects.values() if p.position == wanted),
            key=lambda p: (p.consensus_round, p.prospect_id),
        )

    def top_prospects_by_tier(self, state: DraftBoardState, tier: DraftTier, limit: int = 10) -> list[DraftBoardProspect]:
        return self.sorted_prospects(state, tier=tier)[:limit]

    def board_entries(self, state: DraftBoardState) -> list[BoardEntry]:
        """Board input for ``BigBoardGenerator``, carrying user tier calls."""
        return [
            BoardEntry(
                prospect_id=p.prospect_id,
                prospect_name=p.prospect_name,
                position=p.position,
                reports=p.reports,
                user_tier=p.user_tier,
            )
            for p in sorted(state.prospects.values(), key=lambda p: p.prospect_id)
        ]

    def board_view(
        self,
        state: DraftBoardState,
        sort_by: BoardSortOption = BoardSortOption.CONSENSUS_ROUND,
        positions: Iterable[str] = (),
        tier: Optional[DraftTier] = None,
        focused_only: bool = False,
    ) -> DraftBoardView:
        everyone = list(state.prospects.values())
        tier_counts = {t: 0 for t in DraftTier}
        position_counts: dict[str, int] = {}
        for prospect in everyone:
            tier_counts[self.effective_tier(prospect)] += 1
            position_counts[prospect.position] = position_counts.get(prospect.position, 0) + 1

        rows = tuple(
            DraftBoardProspectView(
                prospect_id=p.prospect_id,
                prospect_name=p.prospect_name,
                position=p.position,
                user_rank=p.user_rank,
                director_rank=p.director_rank,
                consensus_rank=index,
                overall_range=str(p.average_overall),
                projected_round=f"Round {p.consensus_round}",
                tier=self.effective_tier(p),
                confidence=p.confidence_level,
                confidence_score=p.confidence_score,
                report_count=len(p.reports),
                has_focus_report=p.has_focus_report,
                needs_more_scouting=p.needs_more_scouting,
                is_locked=p.is_locked,
                user_notes=p.user_notes,
            )
            for index, p in enumerate(self.sorted_prospects(state, sort_by, positions, tier, focused_only), start=1)
        )

        ranked = sum(1 for p in everyone if p.user_rank is not None)
        return DraftBoardView(
            team_id=state.team_id,
            draft_year=state.draft_year,
            total_prospects=len(everyone),
            ranked_prospects=ranked,
            unranked_prospects=len(everyone) - ranked,
            prospects=rows,
            tier_counts=tier_counts,
            position_counts=position_counts,
            average_confidence=round_half_up(mean(p.confidence_score for p in everyone)),
            focused_count=sum(1 for p in everyone if p.has_focus_report),
            needs_scouting_count=sum(1 for p in everyone if p.needs_more_scouting),
        )
