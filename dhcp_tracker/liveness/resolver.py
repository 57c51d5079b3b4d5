"""
Определение online для резерваций.

Два режима, выбираются конфигом (mode):

- lease_state: online только если AddressState == ActiveReservation.
  Дёшево, но это данные самого DHCP-сервера: клиент со статическим адресом
  остаётся ActiveReservation, пока резервацию не удалят или клиент не
  перезапросит аренду. Это ограничение источника, а не ошибка.
- ping: каждый адрес пингуется один раз, дата/время ставятся всем.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from dhcp_tracker.liveness.probe import LivenessProbe, PingProbe
from dhcp_tracker.models.reservation import ReservationRecord

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M:%S"


class LivenessResolver:
    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self.clock = clock

    def stamp(self):
        now = self.clock()
        return now.strftime(DATE_FORMAT), now.strftime(TIME_FORMAT)

    def resolve(self, records: List[ReservationRecord]) -> List[ReservationRecord]:
        raise NotImplementedError("Реализуйте resolve в наследнике")


class LeaseStateResolver(LivenessResolver):
    def __init__(self, active_state: str = "ActiveReservation", clock: Callable[[], datetime] = datetime.now):
        super().__init__(clock)
        self.active_state = active_state

    def resolve(self, records: List[ReservationRecord]) -> List[ReservationRecord]:
        date, time = self.stamp()
        for record in records:
            if record.address_state == self.active_state:
                record.mark_evaluated(True, date, time)

        online = sum(1 for r in records if r.online)
        logger.info("[LEASE] Online по AddressState: %d из %d", online, len(records))
        return records


class ProbeResolver(LivenessResolver):
    def __init__(self, probe: LivenessProbe, timeout: float = 1.0, clock: Callable[[], datetime] = datetime.now):
        super().__init__(clock)
        self.probe = probe
        self.timeout = timeout

    def resolve(self, records: List[ReservationRecord]) -> List[ReservationRecord]:
        date, time = self.stamp()
        for record in records:
            try:
                online = bool(self.probe.probe(record.address, self.timeout))
            except Exception as e:
                logger.warning("[PING] Ошибка проверки %s: %s — считаем offline", record.address, e)
                online = False
            logger.debug("[PING] %s -> %s", record.address, "online" if online else "offline")
            record.mark_evaluated(online, date, time)

        online = sum(1 for r in records if r.online)
        logger.info("[PING] Online: %d из %d", online, len(records))
        return records


def build_resolver(config, probe: Optional[LivenessProbe] = None) -> LivenessResolver:
    if config.mode == "ping":
        return ProbeResolver(probe or PingProbe(), timeout=config.probe_timeout)
    return LeaseStateResolver(config.active_state)
