"""Scouting subjects: draft prospects and veteran players.

These carry the hidden truth. Nothing here may reach a presentation layer;
scouts only ever see it through the estimation functions.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional

from draft_scout.utils.frozen import freeze_field


@dataclass(frozen=True)
class ProspectProfile:
    """Hidden character, medical and fit values of a prospect."""

    work_ethic: int = 50
    leadership: int = 50
    coachability: int = 50
    maturity: int = 50
    competitiveness: int = 50
    durability: int = 70
    injuries: tuple[str, ...] = ()
    football_iq: int = 50
    scheme_fits: Mapping[str, int] = field(default_factory=dict)  # "offense_west_coast" -> 0-100
    player_comparison: str = ""
    ceiling: str = ""
    floor: str = ""

    def __post_init__(self):
        freeze_field(self, "scheme_fits")


@dataclass(frozen=True)
class Prospect:
    """A draft-eligible subject."""

    id: str
    name: str
    position: str  # Canonical position, see utils.position_normalizer
    true_overall: int  # 1-100, hidden
    true_physical: int  # 1-100, hidden
    true_technical: int  # 1-100, hidden
    projected_round: int  # True draft round 1-7, hidden
    region: Optional[str] = None
    college: str = ""
    height: int = 0  # Inches
    weight: int = 0  # Pounds
    all_traits: tuple[str, ...] = ()
    visibility: float = 0.5  # Draft-eligible observability, 0.0-1.0
    profile: ProspectProfile = field(default_factory=ProspectProfile)


class PlayerStatus(str, Enum):
    """Roster status of a veteran player."""

    STARTER = "starter"
    ROTATIONAL = "rotational"
    BACKUP = "backup"
    PRACTICE_SQUAD = "practice_squad"
    INJURED = "injured"


class VisibilityLevel(str, Enum):
    """How much game tape exists on a veteran."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    MINIMAL = "minimal"


@dataclass(frozen=True)
class SeasonLine:
    """Observable production for one stretch of games."""

    games_played: int = 0
    games_started: int = 0
    performance_rating: float = 0.0  # 0-100


@dataclass(frozen=True)
class VeteranContract:
    """Public contract terms of a veteran player."""

    years_remaining: int = 1
    cap_hit: int = 0  # Dollars
    dead_cap: int = 0  # Dollars
    has_no_trade_clause: bool = False

    @property
    def is_expiring(self) -> bool:
        return self.years_remaining <= 1


@dataclass(frozen=True)
class VeteranPlayer:
    """A player already in the league, scouted for trades or free agency."""

    id: str
    name: str
    position: str
    team_id: str
    age: int
    years_in_league: int
    status: PlayerStatus
    true_overall: int  # Hidden
    true_physical: int  # Hidden
    true_technical: int  # Hidden
    all_traits: tuple[str, ...] = ()
    recent_games: tuple[float, ...] = ()  # Last few game ratings, oldest first
    current_season: SeasonLine = field(default_factory=SeasonLine)
    career: SeasonLine = field(default_factory=SeasonLine)
    contract: VeteranContract = field(default_factory=VeteranContract)
