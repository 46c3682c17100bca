"""Scout disagreement models."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class DisagreementSeverity(str, Enum):
    MINOR = "minor"
    MODERATE = "moderate"
    MAJOR = "major"


SEVERITY_ORDER = {
    DisagreementSeverity.MINOR: 1,
    DisagreementSeverity.MODERATE: 2,
    DisagreementSeverity.MAJOR: 3,
}


@dataclass(frozen=True)
class ScoutDisagreement:
    """A disagreement between two reports on one aspect of a prospect."""

    aspect: str  # "overall", "physical", "technical", "draft_projection", "character", "medical"
    scout_a_id: str
    scout_b_id: str
    scout_a_view: str
    scout_b_view: str
    difference: float
    severity: DisagreementSeverity
    summary: str = ""


@dataclass(frozen=True)
class SplitOpinion:
    prospect_id: str
    prospect_name: str
    position: str
    report_count: int
    disagreements: tuple[ScoutDisagreement, ...]
    consensus_score: float  # 0-100, 100 = full agreement
    has_split_opinion: bool
    worst_severity: Optional[DisagreementSeverity]
    summary: str
