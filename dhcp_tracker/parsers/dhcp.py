import logging
from typing import Dict, Any, List
from dhcp_tracker.parsers.base_parser import BaseParser
from dhcp_tracker.parsers.registry import register_parser

logger = logging.getLogger(__name__)


class DhcpScopesParser(BaseParser):
    @classmethod
    def parse(cls, command: str, raw_text: str) -> Dict[str, Any]:
        if "dhcp_scopes" not in command.lower():
            return {}

        entries: List[Dict] = []
        for block in cls.iter_blocks(raw_text):
            scope_id = block.get("ScopeId")
            if not scope_id:
                continue
            entries.append({
                "scope_id": scope_id,
                "name": block.get("Name") or None,
                "state": block.get("State", ""),
            })

        logger.debug("[DHCP PARSER] Спарсено scopes: %d", len(entries))
        return {"dhcp_scopes": entries}


class DhcpReservationsParser(BaseParser):
    @classmethod
    def parse(cls, command: str, raw_text: str) -> Dict[str, Any]:
        if "dhcp_reservations" not in command.lower():
            return {}

        entries: List[Dict] = []
        for block in cls.iter_blocks(raw_text):
            ip = block.get("IPAddress")
            if not ip:
                continue
            entries.append({
                "ip": ip,
                "scope_id": block.get("ScopeId"),
                "name": block.get("Name") or None,
                "description": block.get("Description") or None,
            })

        logger.debug("[DHCP PARSER] Спарсено reservations: %d", len(entries))
        return {"dhcp_reservations": entries}


class DhcpLeaseStateParser(BaseParser):
    @classmethod
    def parse(cls, command: str, raw_text: str) -> Dict[str, Any]:
        if "dhcp_lease_state" not in command.lower():
            return {}

        entries: List[Dict] = []
        for block in cls.iter_blocks(raw_text):
            if not block.get("IPAddress"):
                continue
            entries.append({
                "ip": block["IPAddress"],
                "address_state": block.get("AddressState") or None,
            })

        return {"dhcp_lease_state": entries}


register_parser("dhcp", "dhcp_scopes", DhcpScopesParser.parse)
register_parser("dhcp", "dhcp_reservations", DhcpReservationsParser.parse)
register_parser("dhcp", "dhcp_lease_state", DhcpLeaseStateParser.parse)
