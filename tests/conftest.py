"""
Pytest fixtures shared by the snmp-checks tests.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import Any, Union

import pytest

from snmp_checks.core.config import reset_settings
from snmp_checks.models.values import RawValue
from snmp_checks.snmp.registry import DEFAULT_REGISTRY

Snapshot = Union[Mapping[str, RawValue], Exception]


class FakeClient:
    """
    In-memory stand-in for SNMPClient.

    Holds a list of device snapshots (OID -> RawValue). Every GET answers
    from the current snapshot and then moves to the next one, so a rate
    check sees the first snapshot on its first sample and the second on
    its second. WALK answers from the current snapshot without advancing.
    A snapshot that is an exception is raised instead.
    """

    def __init__(
        self,
        *snapshots: Snapshot,
        target: str = "192.0.2.1",
        latency: float = 0.01,
        walk_errors: Mapping[str, Exception] | None = None,
    ):
        self.target = target
        self.latency = latency
        self.snapshots: list[Snapshot] = list(snapshots) or [{}]
        self.walk_errors = dict(walk_errors or {})
        self.position = 0
        self.get_calls: list[list[str]] = []
        self.walk_calls: list[str] = []

    def _current(self) -> Mapping[str, RawValue]:
        snapshot = self.snapshots[min(self.position, len(self.snapshots) - 1)]
        if isinstance(snapshot, Exception):
            raise snapshot
        return snapshot

    def get(self, oids: Sequence[str]) -> tuple[dict[str, RawValue], float]:
        self.get_calls.append(list(oids))
        try:
            current = self._current()
        finally:
            self.position += 1
        return {oid: current.get(oid, RawValue.null()) for oid in oids}, self.latency

    def walk(self, base_oid: str) -> tuple[dict[str, RawValue], float]:
        self.walk_calls.append(base_oid)
        if base_oid in self.walk_errors:
            raise self.walk_errors[base_oid]
        prefix = base_oid + "."
        current = self._current()
        return {oid: v for oid, v in current.items() if oid.startswith(prefix)}, self.latency


def instance(name: str, index: int | str) -> str:
    """Instance OID of a registered column."""
    return DEFAULT_REGISTRY.instance_oid(name, index)


@pytest.fixture
def fake_client() -> type[FakeClient]:
    """Factory for in-memory transports."""
    return FakeClient


@pytest.fixture
def oid() -> Any:
    """Helper building instance OIDs from registry field names."""
    return instance


@pytest.fixture
def interface_walk() -> dict[str, RawValue]:
    """ifEntry and ifXTable values for two interfaces, listed out of index order."""
    return {
        instance("ifDescr", 3): RawValue.octets(b"eth1"),
        instance("ifName", 3): RawValue.octets(b"eth1"),
        instance("ifSpeed", 3): RawValue.unsigned(1_000_000_000),
        instance("ifHCInOctets", 3): RawValue.counter64(500),
        instance("ifOperStatus", 3): RawValue.integer(2),
        instance("ifDescr", 1): RawValue.octets(b"lo"),
        instance("ifName", 1): RawValue.octets(b"lo"),
        instance("ifAlias", 1): RawValue.octets(b"loopback"),
        instance("ifPhysAddress", 1): RawValue.octets(bytes([0, 0x11, 0x22, 0x33, 0x44, 0x55])),
        instance("ifSpeed", 1): RawValue.unsigned(10_000_000),
        instance("ifOperStatus", 1): RawValue.integer(1),
        instance("ifAdminStatus", 1): RawValue.integer(1),
    }


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate tests from SNMPCHECK_* environment variables and cached settings."""
    for key in (
        "SNMPCHECK_COMMUNITY",
        "SNMPCHECK_PORT",
        "SNMPCHECK_TIMEOUT",
        "SNMPCHECK_RETRIES",
        "SNMPCHECK_DELAY",
        "SNMPCHECK_DEBUG",
        "SNMPCHECK_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    reset_settings()
    yield
    reset_settings()
