import asyncio

import pytest

from apigen.app_state import AppState
from apigen.connection import Connection, ConnectionEstablisher
from apigen.http_method import HttpMethod
from apigen.models import Registration, ServerRegistration
from apigen.server import RegistrationIdentifier, Server


class FakeEstablisher(ConnectionEstablisher):
    async def connect(self, port, app):
        return Connection(asyncio.get_running_loop().create_future())


def _server(port, response="Hello World!"):
    future = asyncio.get_running_loop().create_future()
    return Server(
        connection=Connection(future),
        port=port,
        data={RegistrationIdentifier("/hello", HttpMethod.GET): response},
    )


def _poison(state):
    with pytest.raises(RuntimeError):
        with state._servers.write():
            raise RuntimeError("poisoned explicitly")


def test_keeps_connection_establisher():
    establisher = FakeEstablisher()
    assert AppState(establisher).connection_establisher is establisher


@pytest.mark.asyncio
async def test_add_and_list_registrations():
    state = AppState(FakeEstablisher())
    state.add_server("3000", _server("3000"))
    state.add_server("3001", _server("3001", "other"))
    assert state.get_registrations() == [
        ServerRegistration("3000", [Registration(HttpMethod.GET, "/hello", "Hello World!")]),
        ServerRegistration("3001", [Registration(HttpMethod.GET, "/hello", "other")]),
    ]


@pytest.mark.asyncio
async def test_add_replaces_server_on_same_port():
    state = AppState(FakeEstablisher())
    state.add_server("3000", _server("3000"))
    state.add_server("3000", _server("3000", "replaced"))
    registrations = state.get_registrations()
    assert len(registrations) == 1
    assert registrations[0].registrations[0].response == "replaced"


@pytest.mark.asyncio
async def test_remove_server_stops_and_returns_it():
    state = AppState(FakeEstablisher())
    server = _server("3000")
    state.add_server("3000", server)
    removed = state.remove_server("3000")
    assert removed is server
    assert server.connection.task.cancelled()
    assert state.get_registrations() == []
    assert state.remove_server("3000") is None


def test_empty_state_has_no_registrations():
    assert AppState(FakeEstablisher()).get_registrations() == []


@pytest.mark.asyncio
async def test_poisoned_lock_degrades_gracefully():
    state = AppState(FakeEstablisher())
    server = _server("3000")
    state.add_server("3000", server)
    _poison(state)
    assert state.get_registrations() == []
    assert state.remove_server("3000") is None
    assert not server.connection.task.cancelled()
    state.add_server("3001", _server("3001"))
    assert state.get_registrations() == []