from datetime import datetime

import pytest

from dhcp_tracker.collectors.base import ReservationSource
from dhcp_tracker.config import TrackerConfig
from dhcp_tracker.exceptions import AddressStateLookupError, DataSourceUnavailable
from dhcp_tracker.liveness.probe import LivenessProbe
from dhcp_tracker.models.reservation import ReservationRecord, Scope


class FakeSource(ReservationSource):
    """
    scopes: {scope_id: [(ip, name, address_state), ...]}
    address_state=None имитирует сбой lookup для адреса.
    """

    def __init__(self, scopes, inactive=(), unreachable=False):
        self.scopes = scopes
        self.inactive = set(inactive)
        self.unreachable = unreachable
        self.state_calls = []

    def list_active_scopes(self):
        if self.unreachable:
            raise DataSourceUnavailable("server down")
        return [
            Scope(scope_id=sid, state="Inactive" if sid in self.inactive else "Active")
            for sid in self.scopes
        ]

    def list_reservations(self, scope_id):
        return [
            ReservationRecord(address=ip, scope_id=scope_id, name=name, description=f"{name} desc")
            for ip, name, _ in self.scopes[scope_id]
        ]

    def get_address_state(self, address):
        self.state_calls.append(address)
        for entries in self.scopes.values():
            for ip, _, state in entries:
                if ip == address:
                    if state is None:
                        raise AddressStateLookupError(f"{address}: no lease")
                    return state
        raise AddressStateLookupError(address)


class FakeProbe(LivenessProbe):
    def __init__(self, online=(), raising=()):
        self.online = set(online)
        self.raising = set(raising)
        self.calls = []

    def probe(self, address, timeout):
        self.calls.append((address, timeout))
        if address in self.raising:
            raise OSError("ping not found")
        return address in self.online


FIXED_NOW = datetime(2026, 10, 16, 9, 30, 0)


def fixed_clock():
    return FIXED_NOW


@pytest.fixture
def fake_source():
    return FakeSource


@pytest.fixture
def fake_probe():
    return FakeProbe


@pytest.fixture
def clock():
    return fixed_clock


@pytest.fixture
def config(tmp_path):
    return TrackerConfig(dhcp_server="10.0.0.2", results_dir=tmp_path / "results")


@pytest.fixture(autouse=True)
def winrm_credentials(monkeypatch):
    monkeypatch.setenv("WINRM_USERNAME", "svc_dhcp")
    monkeypatch.setenv("WINRM_PASSWORD", "secret")
