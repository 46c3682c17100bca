"""Big board models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional

from draft_scout.models.report import ScoutReport
from draft_scout.models.track_record import TrackRecord
from draft_scout.utils.frozen import freeze_field, freeze_mapping
from draft_scout.utils.position_normalizer import normalize_position


class NeedLevel(str, Enum):
    CRITICAL = "critical"
    IMPORTANT = "important"
    MODERATE = "moderate"
    LOW = "low"
    NONE = "none"


class DraftTier(str, Enum):
    ELITE = "elite"
    FIRST_ROUND = "first_round"
    SECOND_ROUND = "second_round"
    DAY_TWO = "day_two"
    DAY_THREE = "day_three"
    DRAFTABLE = "draftable"
    PRIORITY_FA = "priority_fa"


@dataclass(frozen=True)
class PositionalNeeds:
    """Team need per position. Unlisted positions count as moderate.

    Keys are normalized on construction, so ``{"edge": ...}`` and a report
    filed as ``"DE"`` refer to the same need.
    """

    needs: Mapping[str, NeedLevel] = field(default_factory=dict)

    def __post_init__(self):
        normalized = {
            normalize_position(position) or position: NeedLevel(level)
            for position, level in self.needs.items()
        }
        object.__setattr__(self, "needs", freeze_mapping(normalized))

    def level_for(self, position: str) -> NeedLevel:
        return self.needs.get(normalize_position(position) or position, NeedLevel.MODERATE)


@dataclass(frozen=True)
class ScoutReliability:
    """Revealed accuracy of a scout, as used to weight their reports."""

    scout_id: str
    is_known: bool
    overall_hit_rate: Optional[float] = None  # 0.0-1.0
    position_accuracy: Mapping[str, Optional[float]] = field(default_factory=dict)

    def __post_init__(self):
        normalized = {
            normalize_position(position) or position: rate
            for position, rate in self.position_accuracy.items()
        }
        object.__setattr__(self, "position_accuracy", freeze_mapping(normalized))

    def accuracy_for(self, position: str) -> Optional[float]:
        return self.position_accuracy.get(normalize_position(position) or position)

    @classmethod
    def from_track_record(cls, record: TrackRecord) -> "ScoutReliability":
        return cls(
            scout_id=record.scout_id,
            is_known=record.reliability_revealed,
            overall_hit_rate=record.overall_hit_rate,
            position_accuracy=dict(record.position_accuracy),
        )


@dataclass(frozen=True)
class BoardEntry:
    """A prospect and every report filed on them."""

    prospect_id: str
    prospect_name: str
    position: str
    reports: tuple[ScoutReport, ...] = ()
    user_tier: Optional[DraftTier] = None  # Overrides the computed tier when set


@dataclass(frozen=True)
class ProspectRanking:
    prospect_id: str
    prospect_name: str
    position: str
    final_rank: int  # 1-based, gapless
    skill_score: float  # Unweighted mean of overall midpoints
    weighted_skill_score: float  # Reliability-weighted mean
    confidence_score: float
    need_multiplier: float
    need_adjusted_score: float
    projected_round: int
    tier: DraftTier
    report_count: int
    scout_ids: tuple[str, ...] = ()
    has_focus_report: bool = False
    is_riser: bool = False
    is_faller: bool = False
    is_best_value: bool = False
    tier_overridden: bool = False


@dataclass(frozen=True)
class BigBoard:
    team_id: str
    draft_year: int
    rankings: tuple[ProspectRanking, ...] = ()
    position_rankings: Mapping[str, tuple[ProspectRanking, ...]] = field(default_factory=dict)
    tier_rankings: Mapping[DraftTier, tuple[ProspectRanking, ...]] = field(default_factory=dict)
    top_prospects: tuple[ProspectRanking, ...] = ()
    best_values: tuple[ProspectRanking, ...] = ()
    risers: tuple[ProspectRanking, ...] = ()
    fallers: tuple[ProspectRanking, ...] = ()
    needs: PositionalNeeds = field(default_factory=PositionalNeeds)

    def __post_init__(self):
        freeze_field(self, "position_rankings")
        freeze_field(self, "tier_rankings")

    def get_ranking(self, prospect_id: str) -> Optional[ProspectRanking]:
        return next((r for r in self.rankings if r.prospect_id == prospect_id), None)


@dataclass(frozen=True)
class BoardSummary:
    total_prospects: int
    by_tier: Mapping[str, int]
    by_position: Mapping[str, int]
    average_confidence: float
    focused_percentage: float  # 0-100

    def __post_init__(self):
        freeze_field(self, "by_tier")
        freeze_field(self, "by_position")


@dataclass(frozen=True)
class ProspectComparison:
    better_prospect_id: Optional[str]  # None when the rankings are effectively equal
    skill_difference: float
    confidence_difference: float
    round_difference: int
    notes: tuple[str, ...] = ()
