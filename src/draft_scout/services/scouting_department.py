"""Immutable scout roster and the weekly scouting cycle."""

import logging
import random
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional

from draft_scout.config import Settings, get_settings
from draft_scout.models.prospect import Prospect
from draft_scout.models.rankings import ScoutReliability
from draft_scout.models.report import ScoutReport
from draft_scout.models.scout import Scout, ScoutRole, advance_contract_year
from draft_scout.models.track_record import ScoutTendencyProfile
from draft_scout.services.report_generator import ScoutReportGenerator
from draft_scout.services.track_record_service import TrackRecordService
from draft_scout.utils.numeric import resolve_rng

logger = logging.getLogger(__name__)


class ScoutRoster(Mapping[str, Scout]):
    """Read-only mapping of scout id to scout.

    Every change returns a new roster; the original is never touched.
    """

    def __init__(self, scouts: Iterable[Scout] = ()):
        self._scouts = MappingProxyType({scout.id: scout for scout in scouts})

    def __getitem__(self, scout_id: str) -> Scout:
        return self._scouts[scout_id]

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._scouts))

    def __len__(self) -> int:
        return len(self._scouts)

    def __repr__(self) -> str:
        return f"ScoutRoster({sorted(self._scouts)})"

    def with_scout(self, scout: Scout) -> "ScoutRoster":
        """Add or replace a scout."""
        scouts = dict(self._scouts)
        scouts[scout.id] = scout
        return ScoutRoster(scouts.values())

    def without_scout(self, scout_id: str) -> "ScoutRoster":
        return ScoutRoster(s for sid, s in self._scouts.items() if sid != scout_id)

    def scouts(self) -> list[Scout]:
        """Scouts in id order."""
        return [self._scouts[sid] for sid in self]

    def by_role(self, role: ScoutRole) -> list[Scout]:
        return [s for s in self.scouts() if s.role == role]

    def head_scout(self) -> Optional[Scout]:
        heads = self.by_role(ScoutRole.HEAD_SCOUT)
        return heads[0] if heads else None

    def reliability_map(self) -> dict[str, ScoutReliability]:
        return {s.id: ScoutReliability.from_track_record(s.track_record) for s in self.scouts()}

    def tendency_snapshot(self) -> dict[str, ScoutTendencyProfile]:
        """Tendency profiles as they stand now, for use by a whole cycle."""
        return {s.id: s.track_record.tendency for s in self.scouts()}


@dataclass(frozen=True)
class YearAdvanceResult:
    roster: ScoutRoster
    expired_contracts: tuple[str, ...] = field(default_factory=tuple)


def advance_year(roster: ScoutRoster, settings: Optional[Settings] = None) -> YearAdvanceResult:
    """Advance every scout one year: track records and contracts.

    Scouts whose contract expires stay on the returned roster without a
    contract; their ids are listed so the caller can decide what to do.
    """
    service = TrackRecordService(settings or get_settings())
    expired = []
    updated = []
    for scout in roster.scouts():
        contract = scout.contract
        if contract is not None:
            contract = advance_contract_year(contract)
            if contract is None:
                expired.append(scout.id)
        updated.append(replace(scout, track_record=service.advance_year(scout.track_record), contract=contract))

    if expired:
        logger.info(f"Scout contracts expired: {', '.join(expired)}")
    return YearAdvanceResult(roster=ScoutRoster(updated), expired_contracts=tuple(expired))


def run_weekly_cycle(
    roster: ScoutRoster,
    prospects: Iterable[Prospect],
    week: int,
    year: int,
    rng: Optional[random.Random] = None,
    settings: Optional[Settings] = None,
) -> list[ScoutReport]:
    """Generate every scout's auto reports for one week.

    Tendencies are snapshotted before any report is produced, so the whole
    batch is scored against the same track records.
    """
    generator = ScoutReportGenerator(settings or get_settings())
    rng = resolve_rng(rng)
    tendencies = roster.tendency_snapshot()
    prospects = list(prospects)

    reports: list[ScoutReport] = []
    for scout in roster.scouts():
        reports.extend(
            generator.process_weekly_auto_scouting(scout, prospects, week, year, rng, tendencies[scout.id])
        )
    logger.debug(f"Week {week} of {year}: {len(reports)} reports from {len(roster)} scouts")
    return reports
