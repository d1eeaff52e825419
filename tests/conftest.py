"""Shared test fixtures."""

import asyncio
from typing import Any

import pytest

from snmp_inventory.adapters.snmp.poller import (
    OID_BOOTLOADER_VERSION,
    OID_LATEST_VERSION,
    OID_ROUTEROS_VERSION,
    OID_SYS_DESCR,
    OID_SYS_NAME,
)
from snmp_inventory.adapters.snmp.session import SessionParams


class FakeSession:
    """Stands in for SNMPSession without touching the network."""

    def __init__(
        self,
        params: SessionParams,
        var_binds: list[tuple[str, Any]] | None = None,
        connect_error: Exception | None = None,
        get_error: Exception | None = None,
        close_error: Exception | None = None,
    ) -> None:
        self.params = params
        self.var_binds = var_binds or []
        self.connect_error = connect_error
        self.get_error = get_error
        self.close_error = close_error
        self.requested: list[str] = []
        self.connected = False
        self.closed = False

    async def connect(self) -> None:
        await asyncio.sleep(0)
        if self.connect_error:
            raise self.connect_error
        self.connected = True

    async def get(self, oids: list[str]) -> list[tuple[str, Any]]:
        self.requested = oids
        await asyncio.sleep(0)
        if self.get_error:
            raise self.get_error
        return self.var_binds

    def close(self) -> None:
        self.closed = True
        if self.close_error:
            raise self.close_error


class FakeSessionFactory:
    """Hands out FakeSessions configured per target host."""

    def __init__(self, behaviours: dict[str, dict[str, Any]] | None = None) -> None:
        self.behaviours = behaviours or {}
        self.sessions: list[FakeSession] = []

    def __call__(self, params: SessionParams) -> FakeSession:
        session = FakeSession(params, **self.behaviours.get(params.target, {}))
        self.sessions.append(session)
        return session


@pytest.fixture
def routeros_var_binds():
    """A complete answer from a MikroTik router, as pysnmp reports OIDs."""
    return [
        (OID_ROUTEROS_VERSION.lstrip("."), b"7.14.2"),
        (OID_BOOTLOADER_VERSION.lstrip("."), b"7.12"),
        (OID_LATEST_VERSION.lstrip("."), b"7.15"),
        (OID_SYS_DESCR.lstrip("."), b"RouterOS RB1100"),
        (OID_SYS_NAME.lstrip("."), b"core-rtr-01"),
    ]
