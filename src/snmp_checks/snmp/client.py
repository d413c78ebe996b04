"""
SNMP transport for network devices.

Provides SNMPv2c GET and WALK over pysnmp's asyncio API, wrapped in a
synchronous interface. Every call opens and closes its own engine, and
every library value is converted to a RawValue before it leaves this
module.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence
from typing import Any

from pyasn1.type import univ
from pysnmp.hlapi.v3arch.asyncio import (
    CommunityData,
    ContextData,
    ObjectIdentity,
    ObjectType,
    SnmpEngine,
    UdpTransportTarget,
    bulk_walk_cmd,
    get_cmd,
)
from pysnmp.proto import rfc1902, rfc1905

from snmp_checks.constants import SNMPDefaults
from snmp_checks.core.config import SNMPv2cCredentials
from snmp_checks.core.exceptions import SNMPTimeoutError, SNMPTransportError
from snmp_checks.models.values import RawValue
from snmp_checks.snmp.registry import normalize_oid

logger = logging.getLogger(__name__)

# Result of a GET or WALK: instance OID -> value, and round-trip time in seconds
SNMPResult = tuple[dict[str, RawValue], float]

_NULL_TYPES = (univ.Null, rfc1905.NoSuchObject, rfc1905.NoSuchInstance, rfc1905.EndOfMibView)
_UNSIGNED_TYPES = (rfc1902.Counter32, rfc1902.Gauge32, rfc1902.Unsigned32, rfc1902.TimeTicks)


def to_raw_value(value: Any) -> RawValue:
    """
    Convert a pysnmp value into a RawValue.

    Counter64 and the unsigned application types are checked before the
    generic Integer because they all derive from it.

    Raises:
        TypeError: If the value has no wire type mapping
    """
    if value is None or isinstance(value, _NULL_TYPES):
        return RawValue.null()
    if isinstance(value, rfc1902.Counter64):
        return RawValue.counter64(int(value))
    if isinstance(value, _UNSIGNED_TYPES):
        return RawValue.unsigned(int(value))
    if isinstance(value, univ.Integer):
        return RawValue.integer(int(value))
    if isinstance(value, univ.OctetString):
        # IpAddress, Opaque and Bits are OctetString subtypes
        return RawValue.octets(value.asOctets())
    if isinstance(value, univ.ObjectIdentifier):
        return RawValue.object_id(str(value))
    raise TypeError(f"Unsupported SNMP value type: {type(value).__name__}")


def _oid_string(name: Any) -> str:
    if hasattr(name, "getOid"):
        name = name.getOid()
    return normalize_oid(str(name))


class SNMPClient:
    """
    SNMPv2c client for one target.

    Each request builds its own engine and transport, so a client holds
    no session state between calls.

    Attributes:
        target: Device hostname or IP
        credentials: Community, port, timeout and retries

    Usage:
        client = SNMPClient("192.0.2.1", SNMPv2cCredentials(community="public"))
        values, latency = client.get(["1.3.6.1.2.1.1.1.0"])
    """

    def __init__(
        self,
        target: str,
        credentials: SNMPv2cCredentials | None = None,
        max_repetitions: int = SNMPDefaults.MAX_REPETITIONS,
    ):
        self.target = target
        self.credentials = credentials or SNMPv2cCredentials()
        self.max_repetitions = max_repetitions

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(target={self.target!r}, port={self.credentials.port})"

    # =========================================================================
    # Public API
    # =========================================================================

    def get(self, oids: Sequence[str]) -> SNMPResult:
        """
        Fetch instance OIDs with a single GET.

        Missing objects come back as NULL values rather than errors.

        Args:
            oids: Instance OIDs to fetch

        Returns:
            Tuple of (OID -> RawValue, latency in seconds)

        Raises:
            SNMPTimeoutError: If the request times out
            SNMPTransportError: If the request fails
        """
        oid_list = [normalize_oid(oid) for oid in oids]
        if not oid_list:
            return {}, 0.0
        return asyncio.run(self._get(oid_list))

    def walk(self, base_oid: str) -> SNMPResult:
        """
        Fetch every instance below base_oid with GETBULK.

        Args:
            base_oid: Table or column OID to walk

        Returns:
            Tuple of (OID -> RawValue, latency in seconds)

        Raises:
            SNMPTimeoutError: If the request times out
            SNMPTransportError: If the request fails
        """
        return asyncio.run(self._walk(normalize_oid(base_oid)))

    # =========================================================================
    # pysnmp plumbing
    # =========================================================================

    def _auth(self) -> CommunityData:
        return CommunityData(self.credentials.community.get_secret_value(), mpModel=1)

    async def _transport(self, oids: Sequence[str]) -> UdpTransportTarget:
        try:
            return await UdpTransportTarget.create(
                (self.target, self.credentials.port),
                timeout=self.credentials.timeout,
                retries=self.credentials.retries,
            )
        except Exception as e:
            raise SNMPTransportError(self.target, oids, f"cannot open transport: {e}") from e

    def _check_errors(
        self,
        oids: Sequence[str],
        error_indication: Any,
        error_status: Any,
        error_index: Any,
        var_binds: Sequence[Any],
    ) -> None:
        if error_indication:
            if "timeout" in str(error_indication).lower():
                raise SNMPTimeoutError(self.target, oids, self.credentials.timeout)
            raise SNMPTransportError(self.target, oids, str(error_indication))

        if error_status:
            at = "?"
            if error_index and int(error_index) <= len(var_binds):
                at = _oid_string(var_binds[int(error_index) - 1][0])
            raise SNMPTransportError(
                self.target, oids, f"{error_status.prettyPrint()} at {at}"
            )

    def _convert(self, oids: Sequence[str], var_binds: Sequence[Any]) -> dict[str, RawValue]:
        values: dict[str, RawValue] = {}
        for name, value in var_binds:
            oid = _oid_string(name)
            try:
                values[oid] = to_raw_value(value)
            except TypeError as e:
                raise SNMPTransportError(self.target, oids, f"{oid}: {e}") from e
        return values

    async def _get(self, oids: list[str]) -> SNMPResult:
        engine = SnmpEngine()
        try:
            transport = await self._transport(oids)
            started = time.perf_counter()
            error_indication, error_status, error_index, var_binds = await get_cmd(
                engine,
                self._auth(),
                transport,
                ContextData(),
                *[ObjectType(ObjectIdentity(oid)) for oid in oids],
                lookupMib=False,
            )
            latency = time.perf_counter() - started

            self._check_errors(oids, error_indication, error_status, error_index, var_binds)
            values = self._convert(oids, var_binds)
        finally:
            engine.close_dispatcher()

        logger.debug(f"GET {self.target}: {len(values)} values in {latency:.3f}s")
        return values, latency

    async def _walk(self, base_oid: str) -> SNMPResult:
        oids = [base_oid]
        values: dict[str, RawValue] = {}
        engine = SnmpEngine()
        try:
            transport = await self._transport(oids)
            started = time.perf_counter()
            async for error_indication, error_status, error_index, var_binds in bulk_walk_cmd(
                engine,
                self._auth(),
                transport,
                ContextData(),
                0,  # nonRepeaters
                self.max_repetitions,
                ObjectType(ObjectIdentity(base_oid)),
                lexicographicMode=False,
                lookupMib=False,
            ):
                self._check_errors(oids, error_indication, error_status, error_index, var_binds)
                for oid, raw in self._convert(oids, var_binds).items():
                    # endOfMibView marks the end of the walk, not a value
                    if raw.is_null:
                        continue
                    values[oid] = raw
            latency = time.perf_counter() - started
        finally:
            engine.close_dispatcher()

        logger.debug(f"WALK {self.target} {base_oid}: {len(values)} values in {latency:.3f}s")
        return values, latency
