import logging
from typing import List

from dhcp_tracker.collectors.base import ReservationSource
from dhcp_tracker.exceptions import AddressStateLookupError
from dhcp_tracker.models.reservation import ReservationRecord

logger = logging.getLogger(__name__)


def collect_reservations(source: ReservationSource) -> List[ReservationRecord]:
    """
    Все резервации активных scope с текущим AddressState.
    DataSourceUnavailable пробрасывается наверх — прогон прерывается.
    Ошибка lookup одного адреса не фатальна: address_state остаётся None.
    """
    records: List[ReservationRecord] = []

    for scope in source.list_active_scopes():
        if scope.state.lower() != "active":
            logger.debug("[DHCP] Scope %s в состоянии %s — пропуск", scope.scope_id, scope.state)
            continue

        reservations = source.list_reservations(scope.scope_id)
        logger.info("[DHCP] Scope %s: резерваций %d", scope.scope_id, len(reservations))

        for record in reservations:
            try:
                record.address_state = source.get_address_state(record.address)
            except AddressStateLookupError as e:
                logger.warning("[DHCP] Не удалось получить AddressState %s: %s", record.address, e)
                record.address_state = None
            records.append(record)

    logger.info("[DHCP] Всего резерваций: %d", len(records))
    return records
