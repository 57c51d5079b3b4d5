from types import SimpleNamespace

import pytest

from dhcp_tracker.collectors import win_dhcp_collector
from dhcp_tracker.collectors.win_dhcp_collector import WinDhcpSource
from dhcp_tracker.exceptions import AddressStateLookupError, DataSourceUnavailable


def ps_result(text="", status_code=0, err=""):
    return SimpleNamespace(status_code=status_code, std_out=text.encode("utf-8"), std_err=err.encode("utf-8"))


class FakeSession:
    responses = {}
    fail = None

    def __init__(self, endpoint, auth, transport, server_cert_validation):
        self.endpoint = endpoint
        self.auth = auth
        self.transport = transport
        self.scripts = []

    def run_ps(self, script):
        self.scripts.append(script)
        if self.fail:
            raise self.fail
        for marker, result in self.responses.items():
            if marker in script:
                return result
        return ps_result("")


@pytest.fixture
def session(monkeypatch):
    FakeSession.responses = {}
    FakeSession.fail = None
    monkeypatch.setattr(win_dhcp_collector.winrm, "Session", FakeSession)
    return FakeSession


def test_session_endpoint_and_auth(session):
    source = WinDhcpSource("10.0.0.2", "svc", "secret", port=5986, transport="kerberos")
    assert source.session.endpoint == "http://10.0.0.2:5986/wsman"
    assert source.session.auth == ("svc", "secret")
    assert source.session.transport == "kerberos"


def test_only_active_scopes_returned(session):
    session.responses["Get-DhcpServerv4Scope"] = ps_result(
        "ScopeId : 10.0.0.0\nName : Office\nState : Active\n\n"
        "ScopeId : 10.0.1.0\nName : Lab\nState : Inactive\n"
    )
    source = WinDhcpSource("10.0.0.2", "svc", "secret")

    scopes = source.list_active_scopes()

    assert [s.scope_id for s in scopes] == ["10.0.0.0"]


def test_unreachable_server_is_fatal(session):
    session.fail = ConnectionError("connection refused")
    source = WinDhcpSource("10.0.0.2", "svc", "secret")

    with pytest.raises(DataSourceUnavailable):
        source.list_active_scopes()


def test_powershell_error_on_reservations_is_fatal(session):
    session.responses["Get-DhcpServerv4Reservation"] = ps_result(status_code=1, err="access denied")
    source = WinDhcpSource("10.0.0.2", "svc", "secret")

    with pytest.raises(DataSourceUnavailable):
        source.list_reservations("10.0.0.0")


def test_reservations_built_from_output(session):
    session.responses["Get-DhcpServerv4Reservation"] = ps_result(
        "IPAddress : 10.0.0.5\nScopeId : 10.0.0.0\nName : printer1\nDescription : hall\n\n"
        "IPAddress : not-an-ip\nScopeId : 10.0.0.0\nName : broken\n"
    )
    source = WinDhcpSource("10.0.0.2", "svc", "secret")

    records = source.list_reservations("10.0.0.0")

    assert len(records) == 1
    assert records[0].address == "10.0.0.5"
    assert records[0].scope_id == "10.0.0.0"
    assert records[0].name == "printer1"
    assert records[0].online is None
    assert "-ScopeId 10.0.0.0" in source.session.scripts[0]


def test_scope_id_is_validated_before_powershell(session):
    source = WinDhcpSource("10.0.0.2", "svc", "secret")

    with pytest.raises(DataSourceUnavailable):
        source.list_reservations("10.0.0.0; Remove-Item C:\\")
    assert source.session.scripts == []


def test_address_state_lookup(session):
    session.responses["Get-DhcpServerv4Lease"] = ps_result("IPAddress : 10.0.0.5\nAddressState : ActiveReservation\n")
    source = WinDhcpSource("10.0.0.2", "svc", "secret")

    assert source.get_address_state("10.0.0.5") == "ActiveReservation"


def test_address_state_missing_is_soft_error(session):
    session.responses["Get-DhcpServerv4Lease"] = ps_result(status_code=1, err="lease not found")
    source = WinDhcpSource("10.0.0.2", "svc", "secret")

    with pytest.raises(AddressStateLookupError):
        source.get_address_state("10.0.0.5")

    session.responses["Get-DhcpServerv4Lease"] = ps_result("")
    with pytest.raises(AddressStateLookupError):
        source.get_address_state("10.0.0.5")
