"""Scout report models.

A report is a tagged variant: its ``findings`` is either ``AutoFindings`` or
``FocusFindings``, so auto reports cannot carry focus-only assessments.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Union

from draft_scout.models.skill_range import ConfidenceLevel, SkillRange
from draft_scout.utils.frozen import freeze_field


class ReportKind(str, Enum):
    AUTO = "auto"
    FOCUS = "focus"


class TraitCategory(str, Enum):
    PHYSICAL = "physical"
    CHARACTER = "character"
    MENTAL = "mental"
    SKILL = "skill"


@dataclass(frozen=True)
class TraitInfo:
    name: str
    category: TraitCategory


@dataclass(frozen=True)
class ConfidenceFactor:
    """One itemized contribution to a report's confidence."""

    name: str
    impact: str  # "positive", "neutral", "negative"
    description: str


@dataclass(frozen=True)
class ReportConfidence:
    score: int  # 0-100
    level: ConfidenceLevel
    factors: tuple[ConfidenceFactor, ...] = ()


@dataclass(frozen=True)
class DraftProjection:
    round_min: int
    round_max: int
    pick_range_description: str  # e.g. "Day 2 (Rounds 2-3)"
    overall_grade: str  # e.g. "Day 2 pick"


# Grade enums are declared best to worst; list(Enum).index gives the level.


class WorkEthicGrade(str, Enum):
    ELITE = "elite"
    GOOD = "good"
    AVERAGE = "average"
    CONCERNS = "concerns"


class LeadershipGrade(str, Enum):
    CAPTAIN = "captain"
    LEADER = "leader"
    FOLLOWER = "follower"
    LONER = "loner"


class MedicalGrade(str, Enum):
    CLEAN = "clean"
    MINOR_CONCERNS = "minor_concerns"
    MODERATE_CONCERNS = "moderate_concerns"
    MAJOR_CONCERNS = "major_concerns"


class DurabilityGrade(str, Enum):
    IRONMAN = "ironman"
    DURABLE = "durable"
    AVERAGE = "average"
    FRAGILE = "fragile"


@dataclass(frozen=True)
class CharacterAssessment:
    work_ethic: WorkEthicGrade
    leadership: LeadershipGrade
    coachability: str  # "excellent", "good", "average", "difficult"
    maturity: str  # "mature", "developing", "immature"
    competitiveness: str  # "fierce", "competitive", "passive"
    notes: tuple[str, ...] = ()


@dataclass(frozen=True)
class MedicalAssessment:
    overall_grade: MedicalGrade
    durability: DurabilityGrade
    injury_history: tuple[str, ...] = ()
    notes: tuple[str, ...] = ()


@dataclass(frozen=True)
class SchemeFitAssessment:
    fits: Mapping[str, str] = field(default_factory=dict)  # scheme -> "excellent"/"good"/"average"/"poor"
    best_fit: Optional[str] = None
    worst_fit: Optional[str] = None
    versatility: str = "medium"  # "high", "medium", "low"

    def __post_init__(self):
        freeze_field(self, "fits")


@dataclass(frozen=True)
class InterviewAssessment:
    football_iq: str  # "elite", "high", "average", "low"
    communication: str  # "excellent", "good", "average", "poor"
    motivation: str
    notes: tuple[str, ...] = ()


@dataclass(frozen=True)
class AutoFindings:
    """Findings available from a quick regional look."""

    needs_more_scouting: bool = False


@dataclass(frozen=True)
class FocusFindings:
    """In-depth findings only a focus evaluation produces."""

    character: CharacterAssessment
    medical: MedicalAssessment
    scheme_fit: SchemeFitAssessment
    interview: InterviewAssessment
    player_comparison: str = ""
    ceiling: str = ""
    floor: str = ""


Findings = Union[AutoFindings, FocusFindings]


@dataclass(frozen=True)
class ScoutReport:
    """A scout's assessment of one prospect at one point in time."""

    id: str
    prospect_id: str
    prospect_name: str
    position: str
    scout_id: str
    scout_name: str
    generated_at: int  # Caller-supplied timestamp
    overall_range: SkillRange
    physical_range: SkillRange
    technical_range: SkillRange
    round_range: SkillRange  # 1-7 scale
    confidence: ReportConfidence
    draft_projection: DraftProjection
    findings: Findings
    visible_traits: tuple[TraitInfo, ...] = ()
    hidden_trait_count: int = 0
    scouting_hours: float = 0.0
    college: str = ""
    height: int = 0
    weight: int = 0
    region: Optional[str] = None

    @property
    def kind(self) -> ReportKind:
        if isinstance(self.findings, FocusFindings):
            return ReportKind.FOCUS
        return ReportKind.AUTO

    @property
    def is_focus(self) -> bool:
        return self.kind == ReportKind.FOCUS
