"""
OID registry.

Static mapping from dotted-decimal OIDs to a semantic field name, the
wire type the device is expected to send, and how the value is rendered.
Column OIDs are registered without an instance index; scalar OIDs are
registered with their .0 instance.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from snmp_checks.constants import Bgp4MIB, EntityMIB, IfMIB, IpMIB, SystemMIB, UcdMIB
from snmp_checks.core.exceptions import UnknownOIDError
from snmp_checks.models.values import WireType


class ValueFormat(str, Enum):
    """How a decoded value is rendered."""

    NUMBER = "number"
    TEXT = "text"
    MAC = "mac"
    IPV4 = "ipv4"
    OBJECT_ID = "object_id"
    TIMETICKS = "timeticks"


_ZERO_VALUES: dict[ValueFormat, Any] = {
    ValueFormat.NUMBER: 0,
    ValueFormat.TEXT: "",
    ValueFormat.MAC: "",
    ValueFormat.IPV4: "",
    ValueFormat.OBJECT_ID: "",
    ValueFormat.TIMETICKS: 0.0,
}


def normalize_oid(oid: str) -> str:
    """Strip whitespace and a leading dot so '.1.3.6' and '1.3.6' compare equal."""
    return oid.strip().lstrip(".")


class OIDSpec(BaseModel):
    """
    One known MIB leaf.

    Attributes:
        oid: Dotted OID (column OID for tables, instance OID for scalars)
        name: Semantic field name (the MIB object name)
        wire_type: Wire type the device is expected to send
        value_format: Rendering applied after the type check
        counter_bits: 32 or 64 for monotonic counters, None otherwise
    """

    model_config = ConfigDict(frozen=True)

    oid: str = Field(min_length=1)
    name: str = Field(min_length=1)
    wire_type: WireType
    value_format: ValueFormat = ValueFormat.NUMBER
    counter_bits: Literal[32, 64] | None = None

    @field_validator("oid")
    @classmethod
    def validate_oid(cls, v: str) -> str:
        v = normalize_oid(v)
        if not all(part.isdecimal() for part in v.split(".")):
            raise ValueError(f"OID must be dotted decimal: {v!r}")
        return v

    @property
    def zero_value(self) -> Any:
        """Value used for this field when it was never decoded."""
        return _ZERO_VALUES[self.value_format]

    @property
    def is_counter(self) -> bool:
        return self.counter_bits is not None


class OIDRegistry:
    """
    Lookup table of OIDSpecs keyed by OID and by name.

    Usage:
        registry = OIDRegistry([OIDSpec(oid="1.3.6.1.2.1.1.5.0", name="sysName", ...)])
        spec = registry.lookup(".1.3.6.1.2.1.1.5.0")
    """

    def __init__(self, specs: Iterable[OIDSpec] = ()):
        self._by_oid: dict[str, OIDSpec] = {}
        self._by_name: dict[str, OIDSpec] = {}
        for spec in specs:
            self.register(spec)

    def register(self, spec: OIDSpec) -> None:
        """
        Add a spec.

        Raises:
            ValueError: If the OID or name is already registered
        """
        if spec.oid in self._by_oid:
            raise ValueError(f"OID already registered: {spec.oid}")
        if spec.name in self._by_name:
            raise ValueError(f"Name already registered: {spec.name}")
        self._by_oid[spec.oid] = spec
        self._by_name[spec.name] = spec

    def lookup(self, oid: str) -> OIDSpec:
        """
        Find the spec for an OID.

        Raises:
            UnknownOIDError: If the OID is not registered
        """
        spec = self._by_oid.get(normalize_oid(oid))
        if spec is None:
            raise UnknownOIDError(oid)
        return spec

    def by_name(self, name: str) -> OIDSpec:
        """
        Find the spec for a field name.

        Raises:
            KeyError: If the name is not registered
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise KeyError(f"Unknown field name: {name}") from None

    def subset(self, names: Iterable[str]) -> OIDRegistry:
        """Return a registry restricted to the given field names."""
        return OIDRegistry(self.by_name(name) for name in names)

    def instance_oid(self, name: str, index: int | str) -> str:
        """Build the instance OID of a column for one table index."""
        return f"{self.by_name(name).oid}.{index}"

    def __contains__(self, oid: object) -> bool:
        return isinstance(oid, str) and normalize_oid(oid) in self._by_oid

    def __iter__(self) -> Iterator[OIDSpec]:
        return iter(self._by_oid.values())

    def __len__(self) -> int:
        return len(self._by_oid)


def _spec(
    oid: str,
    name: str,
    wire_type: WireType,
    value_format: ValueFormat = ValueFormat.NUMBER,
    counter_bits: Literal[32, 64] | None = None,
) -> OIDSpec:
    return OIDSpec(
        oid=oid,
        name=name,
        wire_type=wire_type,
        value_format=value_format,
        counter_bits=counter_bits,
    )


_INT = WireType.INTEGER
_UINT = WireType.UNSIGNED
_C64 = WireType.COUNTER64
_OCT = WireType.OCTETS
_OID = WireType.OBJECT_ID

_TEXT = ValueFormat.TEXT
_IPV4 = ValueFormat.IPV4


SYSTEM_SPECS: tuple[OIDSpec, ...] = (
    _spec(SystemMIB.SYS_DESCR, "sysDescr", _OCT, _TEXT),
    _spec(SystemMIB.SYS_OBJECT_ID, "sysObjectID", _OID, ValueFormat.OBJECT_ID),
    _spec(SystemMIB.SYS_UPTIME, "sysUpTime", _UINT, ValueFormat.TIMETICKS),
    _spec(SystemMIB.SYS_CONTACT, "sysContact", _OCT, _TEXT),
    _spec(SystemMIB.SYS_NAME, "sysName", _OCT, _TEXT),
    _spec(SystemMIB.SYS_LOCATION, "sysLocation", _OCT, _TEXT),
)

IF_ENTRY_SPECS: tuple[OIDSpec, ...] = (
    _spec(IfMIB.IF_INDEX, "ifIndex", _INT),
    _spec(IfMIB.IF_DESCR, "ifDescr", _OCT, _TEXT),
    _spec(IfMIB.IF_TYPE, "ifType", _INT),
    _spec(IfMIB.IF_MTU, "ifMtu", _INT),
    _spec(IfMIB.IF_SPEED, "ifSpeed", _UINT),
    _spec(IfMIB.IF_PHYS_ADDRESS, "ifPhysAddress", _OCT, ValueFormat.MAC),
    _spec(IfMIB.IF_ADMIN_STATUS, "ifAdminStatus", _INT),
    _spec(IfMIB.IF_OPER_STATUS, "ifOperStatus", _INT),
    _spec(IfMIB.IF_LAST_CHANGE, "ifLastChange", _UINT),
    _spec(IfMIB.IF_IN_OCTETS, "ifInOctets", _UINT, counter_bits=32),
    _spec(IfMIB.IF_IN_UCAST_PKTS, "ifInUcastPkts", _UINT, counter_bits=32),
    _spec(IfMIB.IF_IN_NUCAST_PKTS, "ifInNUcastPkts", _UINT, counter_bits=32),
    _spec(IfMIB.IF_IN_DISCARDS, "ifInDiscards", _UINT, counter_bits=32),
    _spec(IfMIB.IF_IN_ERRORS, "ifInErrors", _UINT, counter_bits=32),
    _spec(IfMIB.IF_OUT_NUCAST_PKTS, "ifOutNUcastPkts", _UINT, counter_bits=32),
    _spec(IfMIB.IF_OUT_OCTETS, "ifOutOctets", _UINT, counter_bits=32),
    _spec(IfMIB.IF_OUT_UCAST_PKTS, "ifOutUcastPkts", _UINT, counter_bits=32),
    _spec(IfMIB.IF_OUT_DISCARDS, "ifOutDiscards", _UINT, counter_bits=32),
    _spec(IfMIB.IF_OUT_ERRORS, "ifOutErrors", _UINT, counter_bits=32),
)

IF_X_SPECS: tuple[OIDSpec, ...] = (
    _spec(IfMIB.IF_NAME, "ifName", _OCT, _TEXT),
    _spec(IfMIB.IF_IN_MULTICAST_PKTS, "ifInMulticastPkts", _UINT, counter_bits=32),
    _spec(IfMIB.IF_IN_BROADCAST_PKTS, "ifInBroadcastPkts", _UINT, counter_bits=32),
    _spec(IfMIB.IF_OUT_MULTICAST_PKTS, "ifOutMulticastPkts", _UINT, counter_bits=32),
    _spec(IfMIB.IF_OUT_BROADCAST_PKTS, "ifOutBroadcastPkts", _UINT, counter_bits=32),
    _spec(IfMIB.IF_HC_IN_OCTETS, "ifHCInOctets", _C64, counter_bits=64),
    _spec(IfMIB.IF_HC_IN_UCAST_PKTS, "ifHCInUcastPkts", _C64, counter_bits=64),
    _spec(IfMIB.IF_HC_IN_MULTICAST_PKTS, "ifHCInMulticastPkts", _C64, counter_bits=64),
    _spec(IfMIB.IF_HC_IN_BROADCAST_PKTS, "ifHCInBroadcastPkts", _C64, counter_bits=64),
    _spec(IfMIB.IF_HC_OUT_OCTETS, "ifHCOutOctets", _C64, counter_bits=64),
    _spec(IfMIB.IF_HC_OUT_UCAST_PKTS, "ifHCOutUcastPkts", _C64, counter_bits=64),
    _spec(IfMIB.IF_HC_OUT_MULTICAST_PKTS, "ifHCOutMulticastPkts", _C64, counter_bits=64),
    _spec(IfMIB.IF_HC_OUT_BROADCAST_PKTS, "ifHCOutBroadcastPkts", _C64, counter_bits=64),
    _spec(IfMIB.IF_LINK_UP_DOWN_TRAP_ENABLE, "ifLinkUpDownTrapEnable", _INT),
    _spec(IfMIB.IF_HIGH_SPEED, "ifHighSpeed", _UINT),
    _spec(IfMIB.IF_PROMISCUOUS_MODE, "ifPromiscuousMode", _INT),
    _spec(IfMIB.IF_CONNECTOR_PRESENT, "ifConnectorPresent", _INT),
    _spec(IfMIB.IF_ALIAS, "ifAlias", _OCT, _TEXT),
    _spec(IfMIB.IF_COUNTER_DISCONTINUITY_TIME, "ifCounterDiscontinuityTime", _UINT),
)

IP_ADDR_SPECS: tuple[OIDSpec, ...] = (
    _spec(IpMIB.IP_AD_ENT_ADDR, "ipAdEntAddr", _OCT, _IPV4),
    _spec(IpMIB.IP_AD_ENT_IF_INDEX, "ipAdEntIfIndex", _INT),
    _spec(IpMIB.IP_AD_ENT_NET_MASK, "ipAdEntNetMask", _OCT, _IPV4),
)

ENT_PHYSICAL_SPECS: tuple[OIDSpec, ...] = (
    _spec(EntityMIB.ENT_PHYSICAL_DESCR, "entPhysicalDescr", _OCT, _TEXT),
    _spec(EntityMIB.ENT_PHYSICAL_VENDOR_TYPE, "entPhysicalVendorType", _OID, ValueFormat.OBJECT_ID),
    _spec(EntityMIB.ENT_PHYSICAL_CONTAINED_IN, "entPhysicalContainedIn", _INT),
    _spec(EntityMIB.ENT_PHYSICAL_CLASS, "entPhysicalClass", _INT),
    _spec(EntityMIB.ENT_PHYSICAL_NAME, "entPhysicalName", _OCT, _TEXT),
    _spec(EntityMIB.ENT_PHYSICAL_HARDWARE_REV, "entPhysicalHardwareRev", _OCT, _TEXT),
    _spec(EntityMIB.ENT_PHYSICAL_FIRMWARE_REV, "entPhysicalFirmwareRev", _OCT, _TEXT),
    _spec(EntityMIB.ENT_PHYSICAL_SOFTWARE_REV, "entPhysicalSoftwareRev", _OCT, _TEXT),
    _spec(EntityMIB.ENT_PHYSICAL_SERIAL_NUM, "entPhysicalSerialNum", _OCT, _TEXT),
    _spec(EntityMIB.ENT_PHYSICAL_MFG_NAME, "entPhysicalMfgName", _OCT, _TEXT),
    _spec(EntityMIB.ENT_PHYSICAL_MODEL_NAME, "entPhysicalModelName", _OCT, _TEXT),
)

BGP_PEER_SPECS: tuple[OIDSpec, ...] = (
    _spec(Bgp4MIB.BGP_PEER_IDENTIFIER, "bgpPeerIdentifier", _OCT, _IPV4),
    _spec(Bgp4MIB.BGP_PEER_STATE, "bgpPeerState", _INT),
    _spec(Bgp4MIB.BGP_PEER_ADMIN_STATUS, "bgpPeerAdminStatus", _INT),
    _spec(Bgp4MIB.BGP_PEER_LOCAL_ADDR, "bgpPeerLocalAddr", _OCT, _IPV4),
    _spec(Bgp4MIB.BGP_PEER_REMOTE_ADDR, "bgpPeerRemoteAddr", _OCT, _IPV4),
    _spec(Bgp4MIB.BGP_PEER_REMOTE_AS, "bgpPeerRemoteAs", _INT),
    _spec(Bgp4MIB.BGP_PEER_IN_UPDATES, "bgpPeerInUpdates", _UINT, counter_bits=32),
    _spec(Bgp4MIB.BGP_PEER_OUT_UPDATES, "bgpPeerOutUpdates", _UINT, counter_bits=32),
    _spec(Bgp4MIB.BGP_PEER_FSM_ESTABLISHED_TIME, "bgpPeerFsmEstablishedTime", _UINT),
)

UCD_SPECS: tuple[OIDSpec, ...] = (
    _spec(UcdMIB.SS_CPU_RAW_USER, "ssCpuRawUser", _UINT, counter_bits=32),
    _spec(UcdMIB.SS_CPU_RAW_SYSTEM, "ssCpuRawSystem", _UINT, counter_bits=32),
    _spec(UcdMIB.SS_CPU_RAW_IDLE, "ssCpuRawIdle", _UINT, counter_bits=32),
    _spec(UcdMIB.MEM_TOTAL_SWAP, "memTotalSwap", _INT),
    _spec(UcdMIB.MEM_AVAIL_SWAP, "memAvailSwap", _INT),
    _spec(UcdMIB.MEM_TOTAL_REAL, "memTotalReal", _INT),
    _spec(UcdMIB.MEM_AVAIL_REAL, "memAvailReal", _INT),
)

DEFAULT_REGISTRY = OIDRegistry(
    SYSTEM_SPECS
    + IF_ENTRY_SPECS
    + IF_X_SPECS
    + IP_ADDR_SPECS
    + ENT_PHYSICAL_SPECS
    + BGP_PEER_SPECS
    + UCD_SPECS
)
