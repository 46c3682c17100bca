"""Scout track record models.

A track record accumulates a scout's evaluations and gradually reveals how
good the scout is. Values are immutable; see
``services.track_record_service`` for the operations that derive new records.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional

from draft_scout.utils.frozen import freeze_field


class TendencyDirection(str, Enum):
    OPTIMISTIC = "optimistic"
    PESSIMISTIC = "pessimistic"
    NEUTRAL = "neutral"


class RevealState(str, Enum):
    """Reveal progression of a track record. It only moves forward."""

    UNREVEALED = "unrevealed"
    RELIABILITY_REVEALED = "reliability_revealed"
    FULLY_REVEALED = "reliability_and_tendencies_revealed"


@dataclass(frozen=True)
class Evaluation:
    """A single projection a scout made, later matched against reality."""

    prospect_id: str
    prospect_name: str
    position: str
    projected_round: int  # 1-7
    projected_skill_min: int  # 0-100
    projected_skill_max: int  # 0-100
    year: int
    actual_round: Optional[int] = None  # None until drafted
    actual_skill: Optional[int] = None  # None until revealed
    was_hit: Optional[bool] = None  # None while actuals are unknown

    @property
    def is_complete(self) -> bool:
        return self.was_hit is not None

    @property
    def projected_midpoint(self) -> float:
        return (self.projected_skill_min + self.projected_skill_max) / 2


@dataclass(frozen=True)
class PositionTendency:
    position: str
    direction: TendencyDirection
    average_delta: float
    sample_size: int


@dataclass(frozen=True)
class ScoutTendencyProfile:
    """Systematic bias of a scout's projections against actual outcomes."""

    direction: TendencyDirection = TendencyDirection.NEUTRAL
    strength: float = 0.0  # 0-100
    average_delta: float = 0.0  # Projected midpoint minus actual skill
    sample_size: int = 0
    position_tendencies: tuple[PositionTendency, ...] = ()
    notes: tuple[str, ...] = ()

    @property
    def is_neutral(self) -> bool:
        return self.direction == TendencyDirection.NEUTRAL


@dataclass(frozen=True)
class TrackRecord:
    """Accumulated evaluation history of one scout."""

    scout_id: str
    evaluations: tuple[Evaluation, ...] = ()
    years_of_data: int = 0
    overall_hit_rate: Optional[float] = None  # 0.0-1.0, None until reliable
    position_accuracy: Mapping[str, Optional[float]] = field(default_factory=dict)
    known_strengths: tuple[str, ...] = ()
    known_weaknesses: tuple[str, ...] = ()
    reliability_revealed: bool = False
    tendencies_revealed: bool = False
    tendency: ScoutTendencyProfile = field(default_factory=ScoutTendencyProfile)

    def __post_init__(self):
        freeze_field(self, "position_accuracy")

    @property
    def completed_evaluations(self) -> tuple[Evaluation, ...]:
        return tuple(e for e in self.evaluations if e.is_complete)

    @property
    def reveal_state(self) -> RevealState:
        if self.reliability_revealed and self.tendencies_revealed:
            return RevealState.FULLY_REVEALED
        if self.reliability_revealed:
            return RevealState.RELIABILITY_REVEALED
        return RevealState.UNREVEALED


def create_track_record(scout_id: str) -> TrackRecord:
    """Create an empty track record for a newly hired scout."""
    return TrackRecord(scout_id=scout_id)
