"""Team draft board state with user and director input.

The board is a value: every change goes through
``services.draft_board_manager`` and produces a new state.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional

from draft_scout.models.rankings import DraftTier
from draft_scout.models.report import ScoutReport
from draft_scout.models.skill_range import ConfidenceLevel, SkillRange
from draft_scout.utils.frozen import freeze_field


class BoardSortOption(str, Enum):
    USER_RANK = "user_rank"
    DIRECTOR_RANK = "director_rank"
    CONSENSUS_ROUND = "consensus_round"
    CONFIDENCE = "confidence"
    POSITION = "position"
    LAST_UPDATED = "last_updated"


@dataclass(frozen=True)
class DraftBoardProspect:
    """One prospect on the board: pooled reports plus user input."""

    prospect_id: str
    prospect_name: str
    position: str
    reports: tuple[ScoutReport, ...]  # Newest first
    average_overall: SkillRange
    consensus_round: int
    confidence_score: float
    confidence_level: ConfidenceLevel
    has_focus_report: bool
    needs_more_scouting: bool
    last_updated: int

    # User input
    user_rank: Optional[int] = None
    user_notes: str = ""
    user_tier: Optional[DraftTier] = None
    is_locked: bool = False

    # Director input
    director_rank: Optional[int] = None
    director_notes: str = ""

    @property
    def latest_report(self) -> ScoutReport:
        return self.reports[0]


@dataclass(frozen=True)
class DirectorInput:
    prospect_id: str
    rank: int
    notes: str = ""
    recommend_focus: bool = False


@dataclass(frozen=True)
class DraftBoardState:
    team_id: str
    draft_year: int
    prospects: Mapping[str, DraftBoardProspect] = field(default_factory=dict)
    user_rankings: tuple[str, ...] = ()  # Prospect ids in user rank order
    director_recommendations: tuple[str, ...] = ()  # Prospect ids in director rank order
    is_finalized: bool = False
    last_modified: int = 0

    def __post_init__(self):
        freeze_field(self, "prospects")

    def get(self, prospect_id: str) -> Optional[DraftBoardProspect]:
        return self.prospects.get(prospect_id)


@dataclass(frozen=True)
class DraftBoardProspectView:
    """Display row for one prospect; carries no hidden values."""

    prospect_id: str
    prospect_name: str
    position: str
    user_rank: Optional[int]
    director_rank: Optional[int]
    consensus_rank: int  # Position in the sorted, filtered view
    overall_range: str  # e.g. "62-74"
    projected_round: str  # e.g. "Round 3"
    tier: DraftTier
    confidence: ConfidenceLevel
    confidence_score: float
    report_count: int
    has_focus_report: bool
    needs_more_scouting: bool
    is_locked: bool
    user_notes: str


@dataclass(frozen=True)
class DraftBoardView:
    team_id: str
    draft_year: int
    total_prospects: int
    ranked_prospects: int
    unranked_prospects: int
    prospects: tuple[DraftBoardProspectView, ...]
    tier_counts: Mapping[DraftTier, int]
    position_counts: Mapping[str, int]
    average_confidence: int
    focused_count: int
    needs_scouting_count: int

    def __post_init__(self):
        freeze_field(self, "tier_counts")
        freeze_field(self, "position_counts")
