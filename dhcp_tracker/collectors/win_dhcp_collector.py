import ipaddress
import logging
from typing import List, Optional

import winrm
from pydantic import ValidationError

from dhcp_tracker.collectors.base import ReservationSource
from dhcp_tracker.exceptions import AddressStateLookupError, DataSourceUnavailable
from dhcp_tracker.models.reservation import ReservationRecord, Scope
from dhcp_tracker.parsers import run_parser

logger = logging.getLogger(__name__)

PS_PREAMBLE = "[Console]::OutputEncoding = [System.Text.Encoding]::UTF8\n"

SCOPES_CMD = r"""
Get-DhcpServerv4Scope |
    Select-Object ScopeId, Name, State | Format-List
"""

RESERVATIONS_CMD = r"""
Get-DhcpServerv4Reservation -ScopeId {scope_id} |
    Select-Object IPAddress, ScopeId, Name, Description | Format-List
"""

LEASE_STATE_CMD = r"""
Get-DhcpServerv4Lease -IPAddress {address} |
    Select-Object IPAddress, AddressState | Format-List
"""


class PowerShellError(Exception):
    pass


class WinDhcpSource(ReservationSource):
    """
    Резервации с Windows DHCP через WinRM (PowerShell-модуль DhcpServer).
    Сессия создаётся сразу, но подключение происходит только на первом run_ps.
    """

    def __init__(self, server: str, username: Optional[str], password: Optional[str],
                 port: int = 5985, transport: str = "ntlm"):
        self.server = server
        try:
            self.session = winrm.Session(
                f"http://{server}:{port}/wsman",
                auth=(username, password),
                transport=transport,
                server_cert_validation="ignore",
            )
        except Exception as e:
            raise DataSourceUnavailable(f"Не удалось создать WinRM-сессию к {server} (проверьте transport и учётку): {e}") from e
        logger.debug("[DHCP] WinRM-сессия создана для %s", server)

    @classmethod
    def from_config(cls, config) -> "WinDhcpSource":
        return cls(
            config.dhcp_server,
            config.winrm_username,
            config.winrm_password,
            port=config.winrm_port,
            transport=config.winrm_transport,
        )

    def _run(self, script: str) -> str:
        try:
            result = self.session.run_ps(PS_PREAMBLE + script)
        except Exception as e:
            raise PowerShellError(f"WinRM {self.server}: {e}") from e

        if result.status_code != 0:
            err = result.std_err.decode("utf-8", errors="replace").strip()
            raise PowerShellError(f"PowerShell exit {result.status_code}: {err[:300]}")

        return result.std_out.decode("utf-8", errors="replace")

    def list_active_scopes(self) -> List[Scope]:
        try:
            text = self._run(SCOPES_CMD)
        except PowerShellError as e:
            raise DataSourceUnavailable(f"Не удалось получить scopes с {self.server}: {e}") from e

        parsed = run_parser("dhcp", "dhcp_scopes", text)
        scopes = [Scope(**entry) for entry in parsed.get("dhcp_scopes", [])]
        active = [s for s in scopes if s.state.lower() == "active"]
        logger.info("[DHCP] Scopes: всего %d, активных %d", len(scopes), len(active))
        return active

    def list_reservations(self, scope_id: str) -> List[ReservationRecord]:
        try:
            # scope_id подставляется в PowerShell — пропускаем только IPv4
            scope_id = str(ipaddress.IPv4Address(scope_id))
            text = self._run(RESERVATIONS_CMD.format(scope_id=scope_id))
        except (ValueError, PowerShellError) as e:
            raise DataSourceUnavailable(f"Не удалось получить резервации scope {scope_id}: {e}") from e

        parsed = run_parser("dhcp", "dhcp_reservations", text)
        records = []
        for entry in parsed.get("dhcp_reservations", []):
            try:
                records.append(ReservationRecord(
                    address=entry["ip"],
                    scope_id=entry.get("scope_id") or scope_id,
                    name=entry.get("name"),
                    description=entry.get("description"),
                ))
            except ValidationError as e:
                logger.warning("[DHCP] Пропуск резервации %s: %s", entry.get("ip"), e)
        return records

    def get_address_state(self, address: str) -> str:
        try:
            address = str(ipaddress.IPv4Address(address))
            text = self._run(LEASE_STATE_CMD.format(address=address))
        except (ValueError, PowerShellError) as e:
            raise AddressStateLookupError(f"{address}: {e}") from e

        parsed = run_parser("dhcp", "dhcp_lease_state", text)
        entries = parsed.get("dhcp_lease_state", [])
        if not entries or not entries[0].get("address_state"):
            raise AddressStateLookupError(f"{address}: AddressState не найден в ответе")
        return entries[0]["address_state"]
