"""Detects where scouts disagree about the same prospect."""

import logging
from collections import defaultdict
from itertools import combinations
from typing import Iterable, Optional, Sequence

from draft_scout.config import Settings, get_settings
from draft_scout.models.disagreement import (
    SEVERITY_ORDER,
    DisagreementSeverity,
    ScoutDisagreement,
    SplitOpinion,
)
from draft_scout.models.report import (
    FocusFindings,
    LeadershipGrade,
    MedicalGrade,
    ScoutReport,
    WorkEthicGrade,
)
from draft_scout.models.skill_range import SkillRange

logger = logging.getLogger(__name__)

SPLIT_OPINION_LABELS = {
    DisagreementSeverity.MAJOR: "Split Opinion",
    DisagreementSeverity.MODERATE: "Mixed Reviews",
    DisagreementSeverity.MINOR: "Minor Differences",
}


def _level(grade, enum_cls) -> int:
    return list(enum_cls).index(grade)


def split_opinion_label(severity: DisagreementSeverity) -> str:
    return SPLIT_OPINION_LABELS[severity]


def validate_split_opinion(flag: SplitOpinion) -> bool:
    if not flag.prospect_id:
        return False
    if not 0 <= flag.consensus_score <= 100:
        return False
    if flag.has_split_opinion and not flag.disagreements:
        return False
    return True


class DisagreementAnalyzer:
    """Compares reports pairwise and scores how much scouts agree."""

    SKILL_ASPECTS = ("overall", "physical", "technical")

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def skill_severity(self, difference: float) -> Optional[DisagreementSeverity]:
        s = self.settings
        if difference >= s.major_skill_diff:
            return DisagreementSeverity.MAJOR
        if difference >= s.moderate_skill_diff:
            return DisagreementSeverity.MODERATE
        if difference >= s.minor_skill_diff:
            return DisagreementSeverity.MINOR
        return None

    def round_severity(self, difference: float) -> Optional[DisagreementSeverity]:
        if difference >= self.settings.major_round_diff:
            return DisagreementSeverity.MAJOR
        if difference >= self.settings.minor_round_diff:
            return DisagreementSeverity.MODERATE
        return None

    @staticmethod
    def _range_text(skill_range: SkillRange) -> str:
        return f"{skill_range.min}-{skill_range.max}"

    def find_disagreements(self, a: ScoutReport, b: ScoutReport) -> list[ScoutDisagreement]:
        """All disagreements between two reports on the same prospect.

        Character and medical are only compared when both reports are focus
        reports. A categorical gap of ``character_mismatch_levels`` or more
        grades is a mismatch, and a mismatch is always major.
        """
        found: list[ScoutDisagreement] = []

        for aspect in self.SKILL_ASPECTS:
            range_a: SkillRange = getattr(a, f"{aspect}_range")
            range_b: SkillRange = getattr(b, f"{aspect}_range")
            difference = abs(range_a.midpoint - range_b.midpoint)
            severity = self.skill_severity(difference)
            if severity is None:
                continue
            higher = a if range_a.midpoint > range_b.midpoint else b
            found.append(
                ScoutDisagreement(
                    aspect=aspect,
                    scout_a_id=a.scout_id,
                    scout_b_id=b.scout_id,
                    scout_a_view=self._range_text(range_a),
                    scout_b_view=self._range_text(range_b),
                    difference=difference,
                    severity=severity,
                    summary=f"{higher.scout_name} rates {a.prospect_name} higher on {aspect}",
                )
            )

        round_difference = abs(a.round_range.midpoint - b.round_range.midpoint)
        severity = self.round_severity(round_difference)
        if severity is not None:
            found.append(
                ScoutDisagreement(
                    aspect="draft_projection",
                    scout_a_id=a.scout_id,
                    scout_b_id=b.scout_id,
                    scout_a_view=a.draft_projection.overall_grade,
                    scout_b_view=b.draft_projection.overall_grade,
                    difference=round_difference,
                    severity=severity,
                    summary=(
                        f'{a.scout_name} says "{a.draft_projection.overall_grade}" vs '
                        f'{b.scout_name} says "{b.draft_projection.overall_grade}"'
                    ),
                )
            )

        if isinstance(a.findings, FocusFindings) and isinstance(b.findings, FocusFindings):
            found.extend(self._categorical_disagreements(a, b, a.findings, b.findings))

        return found

    def _categorical_disagreements(
        self,
        a: ScoutReport,
        b: ScoutReport,
        focus_a: FocusFindings,
        focus_b: FocusFindings,
    ) -> list[ScoutDisagreement]:
        gap_needed = self.settings.character_mismatch_levels
        found = []

        character_gap = max(
            abs(_level(focus_a.character.work_ethic, WorkEthicGrade) - _level(focus_b.character.work_ethic, WorkEthicGrade)),
            abs(_level(focus_a.character.leadership, LeadershipGrade) - _level(focus_b.character.leadership, LeadershipGrade)),
        )
        if character_gap >= gap_needed:
            found.append(
                ScoutDisagreement(
                    aspect="character",
                    scout_a_id=a.scout_id,
                    scout_b_id=b.scout_id,
                    scout_a_view=f"{focus_a.character.work_ethic.value} / {focus_a.character.leadership.value}",
                    scout_b_view=f"{focus_b.character.work_ethic.value} / {focus_b.character.leadership.value}",
                    difference=float(character_gap),
                    severity=DisagreementSeverity.MAJOR,
                    summary="Character assessment split, scouts see very different players off the field",
                )
            )

        medical_gap = abs(
            _level(focus_a.medical.overall_grade, MedicalGrade) - _level(focus_b.medical.overall_grade, MedicalGrade)
        )
        if medical_gap >= gap_needed:
            found.append(
                ScoutDisagreement(
                    aspect="medical",
                    scout_a_id=a.scout_id,
                    scout_b_id=b.scout_id,
                    scout_a_view=focus_a.medical.overall_grade.value,
                    scout_b_view=focus_b.medical.overall_grade.value,
                    difference=float(medical_gap),
                    severity=DisagreementSeverity.MAJOR,
                    summary="Medical evaluation disagreement, one scout sees red flags the other doesn't",
                )
            )

        return found

    def consensus_score(self, disagreements: Iterable[ScoutDisagreement]) -> float:
        penalties = self.settings.disagreement_penalties
        total = sum(penalties.get(d.severity.value, 0.0) for d in disagreements)
        return max(0.0, 100.0 - total)

    def analyze_split_opinion(
        self,
        prospect_id: str,
        prospect_name: str,
        position: str,
        reports: Sequence[ScoutReport],
    ) -> SplitOpinion:
        """Compare every pair of reports on one prospect.

        A single report (or none) has nothing to disagree with and scores 100.
        """
        disagreements: list[ScoutDisagreement] = []
        for a, b in combinations(reports, 2):
            disagreements.extend(self.find_disagreements(a, b))

        worst = None
        if disagreements:
            worst = max((d.severity for d in disagreements), key=lambda s: SEVERITY_ORDER[s])

        if not disagreements:
            summary = "Scouts are in agreement on this prospect"
        elif worst == DisagreementSeverity.MAJOR:
            major_aspects = sorted({d.aspect.replace("_", " ") for d in disagreements if d.severity == worst})
            summary = f"SPLIT OPINION: Major disagreements in {', '.join(major_aspects)}"
        elif worst == DisagreementSeverity.MODERATE:
            summary = "Mixed reviews, scouts have different takes on this prospect"
        else:
            summary = "Minor differences between scout evaluations"

        return SplitOpinion(
            prospect_id=prospect_id,
            prospect_name=prospect_name,
            position=position,
            report_count=len(reports),
            disagreements=tuple(disagreements),
            consensus_score=self.consensus_score(disagreements),
            has_split_opinion=worst in (DisagreementSeverity.MODERATE, DisagreementSeverity.MAJOR),
            worst_severity=worst,
            summary=summary,
        )

    def analyze_all_split_opinions(self, reports: Iterable[ScoutReport]) -> dict[str, SplitOpinion]:
        """Group reports by prospect and analyze every prospect with 2+ reports."""
        grouped: dict[str, list[ScoutReport]] = defaultdict(list)
        for report in reports:
            grouped[report.prospect_id].append(report)

        results = {}
        for prospect_id in sorted(grouped):
            prospect_reports = grouped[prospect_id]
            if len(prospect_reports) < 2:
                continue
            first = prospect_reports[0]
            results[prospect_id] = self.analyze_split_opinion(
                prospect_id, first.prospect_name, first.position, prospect_reports
            )
        return results

    @staticmethod
    def most_contentious(flags: Iterable[SplitOpinion], limit: int = 10) -> list[SplitOpinion]:
        split = [f for f in flags if f.has_split_opinion]
        split.sort(key=lambda f: (f.consensus_score, f.prospect_id))
        return split[:limit]
