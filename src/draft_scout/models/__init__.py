"""Data models for the scouting engine."""

from draft_scout.models.skill_range import ConfidenceLevel, SkillRange
from draft_scout.models.prospect import (
    PlayerStatus,
    Prospect,
    ProspectProfile,
    SeasonLine,
    VeteranContract,
    VeteranPlayer,
    VisibilityLevel,
)
from draft_scout.models.track_record import (
    Evaluation,
    PositionTendency,
    RevealState,
    ScoutTendencyProfile,
    TendencyDirection,
    TrackRecord,
    create_track_record,
)
from draft_scout.models.scout import (
    Scout,
    ScoutAttributes,
    ScoutContract,
    ScoutRegion,
    ScoutRole,
    ScoutViewModel,
    create_scout,
    create_scout_view_model,
)
from draft_scout.models.report import (
    AutoFindings,
    ConfidenceFactor,
    DraftProjection,
    FocusFindings,
    ReportConfidence,
    ReportKind,
    ScoutReport,
    TraitCategory,
    TraitInfo,
)
from draft_scout.models.rankings import (
    BigBoard,
    BoardEntry,
    DraftTier,
    NeedLevel,
    PositionalNeeds,
    ProspectRanking,
    ScoutReliability,
)
from draft_scout.models.draft_board import (
    BoardSortOption,
    DirectorInput,
    DraftBoardProspect,
    DraftBoardState,
    DraftBoardView,
)
from draft_scout.models.disagreement import (
    DisagreementSeverity,
    ScoutDisagreement,
    SplitOpinion,
)
from draft_scout.models.recommendations import (
    DraftPickRecommendations,
    ScoutDraftRecommendation,
)

__all__ = [
    "ConfidenceLevel",
    "SkillRange",
    "PlayerStatus",
    "Prospect",
    "ProspectProfile",
    "SeasonLine",
    "VeteranContract",
    "VeteranPlayer",
    "VisibilityLevel",
    "Evaluation",
    "PositionTendency",
    "RevealState",
    "ScoutTendencyProfile",
    "TendencyDirection",
    "TrackRecord",
    "create_track_record",
    "Scout",
    "ScoutAttributes",
    "ScoutContract",
    "ScoutRegion",
    "ScoutRole",
    "ScoutViewModel",
    "create_scout",
    "create_scout_view_model",
    "AutoFindings",
    "ConfidenceFactor",
    "DraftProjection",
    "FocusFindings",
    "ReportConfidence",
    "ReportKind",
    "ScoutReport",
    "TraitCategory",
    "TraitInfo",
    "BigBoard",
    "BoardEntry",
    "DraftTier",
    "NeedLevel",
    "PositionalNeeds",
    "ProspectRanking",
    "ScoutReliability",
    "BoardSortOption",
    "DirectorInput",
    "DraftBoardProspect",
    "DraftBoardState",
    "DraftBoardView",
    "DisagreementSeverity",
    "ScoutDisagreement",
    "SplitOpinion",
    "DraftPickRecommendations",
    "ScoutDraftRecommendation",
]
