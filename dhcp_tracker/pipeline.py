import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from dhcp_tracker.collectors.base import ReservationSource
from dhcp_tracker.collectors.reservation_collector import collect_reservations
from dhcp_tracker.config import TrackerConfig
from dhcp_tracker.liveness.resolver import LivenessResolver
from dhcp_tracker.models.reservation import ReservationRecord
from dhcp_tracker.storage.file import WriteReport, write_records
from dhcp_tracker.storage.history import reconcile_history

logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    records: List[ReservationRecord] = field(default_factory=list)
    deleted: List[Path] = field(default_factory=list)
    report: WriteReport = field(default_factory=WriteReport)

    @property
    def online_count(self) -> int:
        return sum(1 for r in self.records if r.online)


def run_once(source: ReservationSource, resolver: LivenessResolver, config: TrackerConfig) -> RunSummary:
    """
    Один прогон: сбор -> online -> сверка истории -> запись.
    Файлы не блокируются: два прогона одновременно запускать нельзя.
    """
    records = collect_reservations(source)
    resolver.resolve(records)

    deleted = reconcile_history(
        config.results_dir,
        [r.address for r in records],
        config.ledger_name,
    )

    report = write_records(
        records,
        config.results_dir,
        config.ledger_name,
        carry_forward=config.carry_forward_last_online,
    )

    return RunSummary(records=records, deleted=deleted, report=report)
