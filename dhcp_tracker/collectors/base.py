from typing import List

from dhcp_tracker.models.reservation import ReservationRecord, Scope


class ReservationSource:
    """
    Источник резерваций DHCP. Реализации: WinDhcpSource (WinRM + PowerShell),
    в тестах — фейки.
    """

    def list_active_scopes(self) -> List[Scope]:
        raise NotImplementedError("Реализуйте list_active_scopes в наследнике")

    def list_reservations(self, scope_id: str) -> List[ReservationRecord]:
        raise NotImplementedError("Реализуйте list_reservations в наследнике")

    def get_address_state(self, address: str) -> str:
        raise NotImplementedError("Реализуйте get_address_state в наследнике")
