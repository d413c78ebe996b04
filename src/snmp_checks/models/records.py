"""
Entity record models.

EntityRecord is the generic output of table assembly: one polled object
keyed by its table index, holding only the fields that decoded cleanly.
The typed views (InterfaceDetail, IPBinding, PhysicalEntity, BgpPeer,
SystemInfo) are built from records; fields that were never decoded take
their zero value.
"""

from __future__ import annotations

import ipaddress
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from snmp_checks.constants import Bgp4MIB, StatusMaps

ViewT = TypeVar("ViewT", bound="_RecordView")


class EntityRecord(BaseModel):
    """
    One polled entity (interface, physical component, IP binding, BGP peer).

    Attributes:
        index: Table index shared by every OID that contributed to the record
        fields: Registry field name -> decoded value
    """

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0, description="Table index")
    fields: dict[str, Any] = Field(default_factory=dict, description="Decoded fields")

    def get(self, name: str, default: Any = None) -> Any:
        """Return a decoded field value or default."""
        return self.fields.get(name, default)

    def __contains__(self, name: object) -> bool:
        return name in self.fields


class _RecordView(BaseModel):
    """
    Base for typed views over EntityRecord fields.

    Validation aliases are MIB column names; serialization aliases are the
    inventory JSON keys.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    index: int = 0

    @classmethod
    def from_record(cls: type[ViewT], record: EntityRecord) -> ViewT:
        return cls.model_validate({**record.fields, "index": record.index})


# =============================================================================
# IF-MIB
# =============================================================================


class InterfaceDetail(_RecordView):
    """
    Interface assembled from ifEntry and ifXTable columns.

    Counter fields hold raw counter values; rates are computed separately
    by the rate sampler.
    """

    # Basic info
    description: str = Field(default="", validation_alias="ifDescr")
    name: str = Field(default="", validation_alias="ifName")
    alias: str = Field(default="", validation_alias="ifAlias")
    phys_address: str = Field(
        default="", validation_alias="ifPhysAddress", serialization_alias="mac_address"
    )

    # Identification and types
    type: int = Field(default=0, validation_alias="ifType")
    mtu: int = Field(default=0, validation_alias="ifMtu")

    # Speeds
    speed: int = Field(default=0, validation_alias="ifSpeed", serialization_alias="speed_bps")
    high_speed: int = Field(default=0, validation_alias="ifHighSpeed")

    # Status
    oper_status: int = Field(default=0, validation_alias="ifOperStatus")
    admin_status: int = Field(default=0, validation_alias="ifAdminStatus")

    # Octets
    in_octets: int = Field(default=0, validation_alias="ifInOctets")
    out_octets: int = Field(default=0, validation_alias="ifOutOctets")
    hc_in_octets: int = Field(default=0, validation_alias="ifHCInOctets")
    hc_out_octets: int = Field(default=0, validation_alias="ifHCOutOctets")

    # Packets
    in_ucast_pkts: int = Field(default=0, validation_alias="ifInUcastPkts")
    out_ucast_pkts: int = Field(default=0, validation_alias="ifOutUcastPkts")
    hc_in_ucast_pkts: int = Field(default=0, validation_alias="ifHCInUcastPkts")
    hc_out_ucast_pkts: int = Field(default=0, validation_alias="ifHCOutUcastPkts")
    in_multicast_pkts: int = Field(default=0, validation_alias="ifInMulticastPkts")
    out_multicast_pkts: int = Field(default=0, validation_alias="ifOutMulticastPkts")
    hc_in_multicast_pkts: int = Field(default=0, validation_alias="ifHCInMulticastPkts")
    hc_out_multicast_pkts: int = Field(default=0, validation_alias="ifHCOutMulticastPkts")
    in_broadcast_pkts: int = Field(default=0, validation_alias="ifInBroadcastPkts")
    out_broadcast_pkts: int = Field(default=0, validation_alias="ifOutBroadcastPkts")
    hc_in_broadcast_pkts: int = Field(default=0, validation_alias="ifHCInBroadcastPkts")
    hc_out_broadcast_pkts: int = Field(default=0, validation_alias="ifHCOutBroadcastPkts")
    in_nucast_pkts: int = Field(default=0, validation_alias="ifInNUcastPkts")
    out_nucast_pkts: int = Field(default=0, validation_alias="ifOutNUcastPkts")

    # Errors and discards
    in_errors: int = Field(default=0, validation_alias="ifInErrors")
    out_errors: int = Field(default=0, validation_alias="ifOutErrors")
    in_discards: int = Field(default=0, validation_alias="ifInDiscards")
    out_discards: int = Field(default=0, validation_alias="ifOutDiscards")

    # Miscellaneous
    last_change: int = Field(default=0, validation_alias="ifLastChange")
    link_up_down_trap_enable: int = Field(default=0, validation_alias="ifLinkUpDownTrapEnable")
    promiscuous_mode: int = Field(default=0, validation_alias="ifPromiscuousMode")
    connector_present: int = Field(default=0, validation_alias="ifConnectorPresent")
    counter_discontinuity_time: int = Field(
        default=0, validation_alias="ifCounterDiscontinuityTime"
    )

    # Filled by attach_addresses()
    ip_addresses: list[str] = Field(default_factory=list)

    @property
    def oper_status_name(self) -> str:
        return StatusMaps.lookup(StatusMaps.IF_STATUS, self.oper_status)

    def to_text(self) -> str:
        """Render the interface as a text block for plugin output."""
        lines = [
            f"Interface index: {self.index}",
            f"Description: {self.description}",
            f"Alias: {self.alias}",
            f"Name: {self.name}",
            f"Type: {self.type}",
            f"Speed: {self.speed}",
            f"HighSpeed: {self.high_speed}",
            f"OperStatus: {self.oper_status}",
            f"AdminStatus: {self.admin_status}",
            f"InOctets: {self.in_octets}",
            f"OutOctets: {self.out_octets}",
            f"HCInOctets: {self.hc_in_octets}",
            f"HCOutOctets: {self.hc_out_octets}",
            f"HCInUcastPkts: {self.hc_in_ucast_pkts}",
            f"HCOutUcastPkts: {self.hc_out_ucast_pkts}",
            f"InErrors: {self.in_errors}",
            f"OutErrors: {self.out_errors}",
            f"InUcastPkts: {self.in_ucast_pkts}",
            f"OutUcastPkts: {self.out_ucast_pkts}",
            f"InNUcastPkts: {self.in_nucast_pkts}",
            f"OutNUcastPkts: {self.out_nucast_pkts}",
            f"PromiscuousMode: {self.promiscuous_mode}",
            f"LastChange: {self.last_change}",
            f"PhysAddress: {self.phys_address}",
        ]
        return "\n".join(lines) + "\n\n"


# =============================================================================
# IP-MIB
# =============================================================================


class IPBinding(_RecordView):
    """IPv4 address bound to an interface (ipAddrTable row)."""

    address: str = Field(
        default="", validation_alias="ipAdEntAddr", serialization_alias="ip_address"
    )
    if_index: int = Field(
        default=0, validation_alias="ipAdEntIfIndex", serialization_alias="interface_index"
    )
    netmask: str = Field(default="", validation_alias="ipAdEntNetMask")

    @property
    def ip(self) -> str:
        """Address column, or the address encoded in the table index."""
        return self.address or str(ipaddress.IPv4Address(self.index))

    @field_serializer("address")
    def _serialize_address(self, address: str) -> str:
        return self.ip


# =============================================================================
# ENTITY-MIB
# =============================================================================


class PhysicalEntity(_RecordView):
    """Physical component (entPhysicalTable row)."""

    model_config = ConfigDict(protected_namespaces=())

    description: str = Field(default="", validation_alias="entPhysicalDescr")
    vendor_type: str = Field(default="", validation_alias="entPhysicalVendorType")
    contained_in: int = Field(default=0, validation_alias="entPhysicalContainedIn")
    physical_class: int = Field(default=0, validation_alias="entPhysicalClass")
    name: str = Field(default="", validation_alias="entPhysicalName")
    hardware_rev: str = Field(default="", validation_alias="entPhysicalHardwareRev")
    firmware_rev: str = Field(default="", validation_alias="entPhysicalFirmwareRev")
    software_rev: str = Field(default="", validation_alias="entPhysicalSoftwareRev")
    serial_number: str = Field(default="", validation_alias="entPhysicalSerialNum")
    vendor: str = Field(default="", validation_alias="entPhysicalMfgName")
    model_name: str = Field(default="", validation_alias="entPhysicalModelName")


# =============================================================================
# BGP4-MIB
# =============================================================================


class BgpPeer(_RecordView):
    """BGP peer (bgpPeerTable row), indexed by the remote address."""

    identifier: str = Field(default="", validation_alias="bgpPeerIdentifier")
    state: int = Field(default=0, validation_alias="bgpPeerState")
    admin_status: int = Field(default=0, validation_alias="bgpPeerAdminStatus")
    local_address: str = Field(default="", validation_alias="bgpPeerLocalAddr")
    remote_address: str = Field(default="", validation_alias="bgpPeerRemoteAddr")
    remote_as: int = Field(default=0, validation_alias="bgpPeerRemoteAs")
    in_updates: int = Field(default=0, validation_alias="bgpPeerInUpdates")
    out_updates: int = Field(default=0, validation_alias="bgpPeerOutUpdates")
    established_time: int = Field(default=0, validation_alias="bgpPeerFsmEstablishedTime")

    @property
    def address(self) -> str:
        return self.remote_address or str(ipaddress.IPv4Address(self.index))

    @property
    def state_name(self) -> str:
        return StatusMaps.lookup(StatusMaps.BGP_PEER_STATE, self.state)

    @property
    def mismatched(self) -> bool:
        """True when the peer is administratively started but not established."""
        return (
            self.admin_status == Bgp4MIB.ADMIN_START
            and self.state != Bgp4MIB.STATE_ESTABLISHED
        )


# =============================================================================
# Device Inventory
# =============================================================================


class SystemInfo(BaseModel):
    """System group scalars."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    description: str = Field(default="", validation_alias="sysDescr")
    object_id: str = Field(default="", validation_alias="sysObjectID")
    uptime_seconds: float = Field(default=0.0, validation_alias="sysUpTime")
    contact: str = Field(default="", validation_alias="sysContact")
    name: str = Field(default="", validation_alias="sysName")
    location: str = Field(default="", validation_alias="sysLocation")


class CPUMetrics(BaseModel):
    """CPU time split derived from UCD raw tick counters."""

    user_percent: float = 0.0
    system_percent: float = 0.0
    idle_percent: float = 0.0


class MemoryMetrics(BaseModel):
    """UCD memory scalars, in kB."""

    total_swap_kb: int = 0
    avail_swap_kb: int = 0
    total_real_kb: int = 0
    avail_real_kb: int = 0


class InventoryResult(BaseModel):
    """
    Device inventory assembled from several collections.

    Optional sections are None or empty when the device does not
    support them or their collection failed.
    """

    system_info: SystemInfo = Field(default_factory=SystemInfo)
    interfaces: list[InterfaceDetail] = Field(default_factory=list)
    ip_addresses: list[IPBinding] = Field(default_factory=list)
    physical_entities: list[PhysicalEntity] = Field(default_factory=list)
    cpu: CPUMetrics | None = None
    memory: MemoryMetrics | None = None
