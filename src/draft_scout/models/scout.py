"""Scout models, focus list and contract operations, and the scout view model."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from draft_scout.models.track_record import TrackRecord, create_track_record
from draft_scout.utils.numeric import round_half_up
from draft_scout.utils.position_normalizer import normalize_position

MIN_FOCUS_PROSPECTS = 3
MAX_FOCUS_PROSPECTS = 5
MAX_CONTRACT_YEARS = 5


class ScoutRole(str, Enum):
    """Department role. Head scouts are generalists."""

    HEAD_SCOUT = "head_scout"
    OFFENSIVE_SCOUT = "offensive_scout"
    DEFENSIVE_SCOUT = "defensive_scout"


class ScoutRegion(str, Enum):
    NORTHEAST = "northeast"
    SOUTHEAST = "southeast"
    MIDWEST = "midwest"
    SOUTHWEST = "southwest"
    WEST_COAST = "west_coast"


def region_display_name(region: Optional[str]) -> Optional[str]:
    """'west_coast' -> 'West Coast'."""
    if not region:
        return None
    return region.replace("_", " ").title()


@dataclass(frozen=True)
class ScoutAttributes:
    evaluation: int  # 1-100, hidden from the player
    speed: int  # 1-100, hidden from the player
    experience: int = 0  # Years, public
    age: int = 40  # Public
    position_specialty: Optional[str] = None  # Public, canonical position


@dataclass(frozen=True)
class ScoutContract:
    salary: int
    years_total: int
    years_remaining: int


@dataclass(frozen=True)
class Scout:
    """A scout. Updates always return a new instance."""

    id: str
    first_name: str
    last_name: str
    role: ScoutRole
    attributes: ScoutAttributes
    track_record: TrackRecord
    region: Optional[str] = None  # None = national coverage
    contract: Optional[ScoutContract] = None
    focus_prospects: tuple[str, ...] = ()
    auto_scouting_active: bool = True
    team_id: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


def create_scout(
    scout_id: str,
    first_name: str,
    last_name: str,
    role: ScoutRole,
    attributes: ScoutAttributes,
    region: Optional[str] = None,
    contract: Optional[ScoutContract] = None,
    team_id: Optional[str] = None,
) -> Scout:
    """Create a scout with an empty track record."""
    return Scout(
        id=scout_id,
        first_name=first_name,
        last_name=last_name,
        role=role,
        attributes=attributes,
        track_record=create_track_record(scout_id),
        region=region,
        contract=contract,
        team_id=team_id,
    )


def validate_scout(scout: Scout) -> bool:
    """Check identity, attribute bounds, track record ownership and focus cap."""
    if not scout.id or not scout.first_name or not scout.last_name:
        return False

    attrs = scout.attributes
    if not (1 <= attrs.evaluation <= 100 and 1 <= attrs.speed <= 100):
        return False
    if attrs.experience < 0 or attrs.age <= 0:
        return False
    if attrs.position_specialty is not None and normalize_position(attrs.position_specialty) is None:
        return False

    if scout.track_record.scout_id != scout.id:
        return False

    if len(scout.focus_prospects) > get_max_focus_prospects(attrs.experience):
        return False
    if len(set(scout.focus_prospects)) != len(scout.focus_prospects):
        return False

    if scout.contract is not None and not validate_contract(scout.contract):
        return False

    return True


def prospects_per_week(speed: int) -> int:
    """Number of prospects a scout covers per auto-scouting week (3-8)."""
    return 3 + max(0, min(100, speed)) // 20


# =============================================================================
# Focus list
# =============================================================================


def get_max_focus_prospects(experience: int) -> int:
    """Focus capacity grows with experience, from 3 up to 5."""
    if experience >= 10:
        return MAX_FOCUS_PROSPECTS
    if experience >= 5:
        return 4
    return MIN_FOCUS_PROSPECTS


def add_focus_prospect(scout: Scout, prospect_id: str) -> Optional[Scout]:
    """Add a prospect to the focus list.

    Returns:
        The updated scout, the same scout if the prospect is already on the
        list, or None when the list is full.
    """
    if prospect_id in scout.focus_prospects:
        return scout
    if len(scout.focus_prospects) >= get_max_focus_prospects(scout.attributes.experience):
        return None
    return replace(scout, focus_prospects=scout.focus_prospects + (prospect_id,))


def remove_focus_prospect(scout: Scout, prospect_id: str) -> Scout:
    return replace(
        scout,
        focus_prospects=tuple(p for p in scout.focus_prospects if p != prospect_id),
    )


def clear_focus_prospects(scout: Scout) -> Scout:
    return replace(scout, focus_prospects=())


# =============================================================================
# Contract
# =============================================================================


def create_scout_contract(salary: int, years: int) -> ScoutContract:
    return ScoutContract(salary=salary, years_total=years, years_remaining=years)


def validate_contract(contract: ScoutContract) -> bool:
    if contract.salary < 0:
        return False
    if not 1 <= contract.years_total <= MAX_CONTRACT_YEARS:
        return False
    return 0 <= contract.years_remaining <= contract.years_total


def advance_contract_year(contract: ScoutContract) -> Optional[ScoutContract]:
    """Consume one contract year. Returns None when the contract expires."""
    if contract.years_remaining <= 1:
        return None
    return replace(contract, years_remaining=contract.years_remaining - 1)


# =============================================================================
# View model
# =============================================================================


@dataclass(frozen=True)
class ScoutViewModel:
    """What the player may see about a scout.

    Hidden skills and raw track record data are structurally absent.
    """

    id: str
    full_name: str
    role: ScoutRole
    region: Optional[str]
    region_display_name: Optional[str]
    years_experience: int
    age: int
    position_specialty: Optional[str]
    evaluation_rating: Optional[int]  # Nearest 10, only once reliability is revealed
    hit_rate: Optional[float]  # Only once reliability is revealed
    known_strengths: list[str] = field(default_factory=list)
    known_weaknesses: list[str] = field(default_factory=list)
    reliability_known: bool = False
    salary: Optional[int] = None  # Own team only
    years_remaining: Optional[int] = None  # Own team only


def create_scout_view_model(scout: Scout, is_own_team: bool) -> ScoutViewModel:
    """Project a scout into the view model a presentation layer receives.

    Args:
        scout: The full scout, including hidden attributes
        is_own_team: Whether the viewer employs this scout (shows contract)
    """
    record = scout.track_record
    revealed = record.reliability_revealed

    evaluation_rating = None
    hit_rate = None
    if revealed:
        evaluation_rating = round_half_up(scout.attributes.evaluation / 10) * 10
        hit_rate = record.overall_hit_rate

    salary = None
    years_remaining = None
    if is_own_team and scout.contract is not None:
        salary = scout.contract.salary
        years_remaining = scout.contract.years_remaining

    return ScoutViewModel(
        id=scout.id,
        full_name=scout.full_name,
        role=scout.role,
        region=scout.region,
        region_display_name=region_display_name(scout.region),
        years_experience=scout.attributes.experience,
        age=scout.attributes.age,
        position_specialty=scout.attributes.position_specialty,
        evaluation_rating=evaluation_rating,
        hit_rate=hit_rate,
        known_strengths=list(record.known_strengths),
        known_weaknesses=list(record.known_weaknesses),
        reliability_known=revealed,
        salary=salary,
        years_remaining=years_remaining,
    )
