"""Per-pick draft recommendation models."""

from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, Mapping, Optional

from draft_scout.models.skill_range import ConfidenceLevel, SkillRange
from draft_scout.utils.frozen import freeze_field


def _plain(value: Any) -> Any:
    """Convert nested dataclasses and read-only mappings to builtins."""
    if is_dataclass(value):
        return {f.name: _plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Mapping):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


@dataclass(frozen=True)
class ScoutDraftRecommendation:
    """One scout's pick for the current selection."""

    scout_id: str
    scout_name: str
    prospect_id: str
    prospect_name: str
    position: str
    estimated_overall: SkillRange
    score: float
    confidence: ConfidenceLevel
    is_focus_prospect: bool
    reasoning: str
    components: Mapping[str, float] = field(default_factory=dict)  # Individual score components

    def __post_init__(self):
        freeze_field(self, "components")


@dataclass(frozen=True)
class DraftPickRecommendations:
    pick_number: int
    round: int
    recommendations: tuple[ScoutDraftRecommendation, ...] = ()
    unanimous: bool = False
    consensus_prospect_id: Optional[str] = None

    def to_dict(self) -> dict:
        """Plain dicts and lists, for callers that store or log the result."""
        return _plain(self)
