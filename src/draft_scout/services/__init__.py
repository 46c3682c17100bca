"""Business logic services."""

from draft_scout.services.big_board_generator import BigBoardGenerator
from draft_scout.services.disagreement_analyzer import DisagreementAnalyzer
from draft_scout.services.draft_board_manager import DraftBoardManager
from draft_scout.services.draft_recommendation_engine import DraftRecommendationEngine
from draft_scout.services.pro_scouting_service import ProScoutingService
from draft_scout.services.report_generator import ScoutReportGenerator, validate_report
from draft_scout.services.scouting_department import ScoutRoster, advance_year, run_weekly_cycle
from draft_scout.services.track_record_service import TrackRecordService

__all__ = [
    "BigBoardGenerator",
    "DisagreementAnalyzer",
    "DraftBoardManager",
    "DraftRecommendationEngine",
    "ProScoutingService",
    "ScoutReportGenerator",
    "validate_report",
    "ScoutRoster",
    "advance_year",
    "run_weekly_cycle",
    "TrackRecordService",
]
