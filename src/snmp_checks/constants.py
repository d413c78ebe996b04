"""
Constants, OID families, default values and output constants for snmp-checks.

This module provides centralized definitions for:
- SNMP transport defaults
- Well-known OIDs grouped by MIB (system, IF-MIB, IP-MIB, ENTITY-MIB,
  BGP4-MIB, UCD-SNMP-MIB)
- Rate scale units
- Plugin output formatting
- Status string maps used when rendering results
"""

from __future__ import annotations

from typing import Final

# =============================================================================
# SNMP Transport Defaults
# =============================================================================


class SNMPDefaults:
    """Default values for SNMP sessions."""

    PORT: Final[int] = 161
    COMMUNITY: Final[str] = "public"
    TIMEOUT: Final[int] = 15
    RETRIES: Final[int] = 0
    MAX_REPETITIONS: Final[int] = 25

    # Delay between the two counter samples of a rate check
    SAMPLE_DELAY: Final[int] = 10


# =============================================================================
# SNMPv2-MIB system group
# =============================================================================


class SystemMIB:
    """Scalar leaves of the system group (instance .0 included)."""

    SYS_DESCR: Final[str] = "1.3.6.1.2.1.1.1.0"
    SYS_OBJECT_ID: Final[str] = "1.3.6.1.2.1.1.2.0"
    SYS_UPTIME: Final[str] = "1.3.6.1.2.1.1.3.0"
    SYS_CONTACT: Final[str] = "1.3.6.1.2.1.1.4.0"
    SYS_NAME: Final[str] = "1.3.6.1.2.1.1.5.0"
    SYS_LOCATION: Final[str] = "1.3.6.1.2.1.1.6.0"


# =============================================================================
# IF-MIB
# =============================================================================


class IfMIB:
    """IF-MIB ifEntry and ifXEntry columns (without instance index)."""

    # Table roots used for walks
    IF_ENTRY: Final[str] = "1.3.6.1.2.1.2.2.1"
    IF_X_TABLE: Final[str] = "1.3.6.1.2.1.31.1.1.1"

    # ifEntry
    IF_INDEX: Final[str] = "1.3.6.1.2.1.2.2.1.1"
    IF_DESCR: Final[str] = "1.3.6.1.2.1.2.2.1.2"
    IF_TYPE: Final[str] = "1.3.6.1.2.1.2.2.1.3"
    IF_MTU: Final[str] = "1.3.6.1.2.1.2.2.1.4"
    IF_SPEED: Final[str] = "1.3.6.1.2.1.2.2.1.5"
    IF_PHYS_ADDRESS: Final[str] = "1.3.6.1.2.1.2.2.1.6"
    IF_ADMIN_STATUS: Final[str] = "1.3.6.1.2.1.2.2.1.7"
    IF_OPER_STATUS: Final[str] = "1.3.6.1.2.1.2.2.1.8"
    IF_LAST_CHANGE: Final[str] = "1.3.6.1.2.1.2.2.1.9"
    IF_IN_OCTETS: Final[str] = "1.3.6.1.2.1.2.2.1.10"
    IF_IN_UCAST_PKTS: Final[str] = "1.3.6.1.2.1.2.2.1.11"
    IF_IN_NUCAST_PKTS: Final[str] = "1.3.6.1.2.1.2.2.1.12"
    IF_IN_DISCARDS: Final[str] = "1.3.6.1.2.1.2.2.1.13"
    IF_IN_ERRORS: Final[str] = "1.3.6.1.2.1.2.2.1.14"
    IF_OUT_NUCAST_PKTS: Final[str] = "1.3.6.1.2.1.2.2.1.15"
    IF_OUT_OCTETS: Final[str] = "1.3.6.1.2.1.2.2.1.16"
    IF_OUT_UCAST_PKTS: Final[str] = "1.3.6.1.2.1.2.2.1.17"
    IF_OUT_DISCARDS: Final[str] = "1.3.6.1.2.1.2.2.1.19"
    IF_OUT_ERRORS: Final[str] = "1.3.6.1.2.1.2.2.1.20"

    # ifXEntry
    IF_NAME: Final[str] = "1.3.6.1.2.1.31.1.1.1.1"
    IF_IN_MULTICAST_PKTS: Final[str] = "1.3.6.1.2.1.31.1.1.1.2"
    IF_IN_BROADCAST_PKTS: Final[str] = "1.3.6.1.2.1.31.1.1.1.3"
    IF_OUT_MULTICAST_PKTS: Final[str] = "1.3.6.1.2.1.31.1.1.1.4"
    IF_OUT_BROADCAST_PKTS: Final[str] = "1.3.6.1.2.1.31.1.1.1.5"
    IF_HC_IN_OCTETS: Final[str] = "1.3.6.1.2.1.31.1.1.1.6"
    IF_HC_IN_UCAST_PKTS: Final[str] = "1.3.6.1.2.1.31.1.1.1.7"
    IF_HC_IN_MULTICAST_PKTS: Final[str] = "1.3.6.1.2.1.31.1.1.1.8"
    IF_HC_IN_BROADCAST_PKTS: Final[str] = "1.3.6.1.2.1.31.1.1.1.9"
    IF_HC_OUT_OCTETS: Final[str] = "1.3.6.1.2.1.31.1.1.1.10"
    IF_HC_OUT_UCAST_PKTS: Final[str] = "1.3.6.1.2.1.31.1.1.1.11"
    IF_HC_OUT_MULTICAST_PKTS: Final[str] = "1.3.6.1.2.1.31.1.1.1.12"
    IF_HC_OUT_BROADCAST_PKTS: Final[str] = "1.3.6.1.2.1.31.1.1.1.13"
    IF_LINK_UP_DOWN_TRAP_ENABLE: Final[str] = "1.3.6.1.2.1.31.1.1.1.14"
    IF_HIGH_SPEED: Final[str] = "1.3.6.1.2.1.31.1.1.1.15"
    IF_PROMISCUOUS_MODE: Final[str] = "1.3.6.1.2.1.31.1.1.1.16"
    IF_CONNECTOR_PRESENT: Final[str] = "1.3.6.1.2.1.31.1.1.1.17"
    IF_ALIAS: Final[str] = "1.3.6.1.2.1.31.1.1.1.18"
    IF_COUNTER_DISCONTINUITY_TIME: Final[str] = "1.3.6.1.2.1.31.1.1.1.19"


# =============================================================================
# IP-MIB ipAddrTable (indexed by the IPv4 address itself)
# =============================================================================


class IpMIB:
    """IP-MIB ipAddrEntry columns."""

    IP_ADDR_TABLE: Final[str] = "1.3.6.1.2.1.4.20.1"

    IP_AD_ENT_ADDR: Final[str] = "1.3.6.1.2.1.4.20.1.1"
    IP_AD_ENT_IF_INDEX: Final[str] = "1.3.6.1.2.1.4.20.1.2"
    IP_AD_ENT_NET_MASK: Final[str] = "1.3.6.1.2.1.4.20.1.3"


# =============================================================================
# ENTITY-MIB entPhysicalTable
# =============================================================================


class EntityMIB:
    """ENTITY-MIB entPhysicalEntry columns."""

    ENT_PHYSICAL_TABLE: Final[str] = "1.3.6.1.2.1.47.1.1.1.1"

    ENT_PHYSICAL_DESCR: Final[str] = "1.3.6.1.2.1.47.1.1.1.1.2"
    ENT_PHYSICAL_VENDOR_TYPE: Final[str] = "1.3.6.1.2.1.47.1.1.1.1.3"
    ENT_PHYSICAL_CONTAINED_IN: Final[str] = "1.3.6.1.2.1.47.1.1.1.1.4"
    ENT_PHYSICAL_CLASS: Final[str] = "1.3.6.1.2.1.47.1.1.1.1.5"
    ENT_PHYSICAL_NAME: Final[str] = "1.3.6.1.2.1.47.1.1.1.1.7"
    ENT_PHYSICAL_HARDWARE_REV: Final[str] = "1.3.6.1.2.1.47.1.1.1.1.8"
    ENT_PHYSICAL_FIRMWARE_REV: Final[str] = "1.3.6.1.2.1.47.1.1.1.1.9"
    ENT_PHYSICAL_SOFTWARE_REV: Final[str] = "1.3.6.1.2.1.47.1.1.1.1.10"
    ENT_PHYSICAL_SERIAL_NUM: Final[str] = "1.3.6.1.2.1.47.1.1.1.1.11"
    ENT_PHYSICAL_MFG_NAME: Final[str] = "1.3.6.1.2.1.47.1.1.1.1.12"
    ENT_PHYSICAL_MODEL_NAME: Final[str] = "1.3.6.1.2.1.47.1.1.1.1.13"


# =============================================================================
# BGP4-MIB bgpPeerTable (indexed by bgpPeerRemoteAddr)
# =============================================================================


class Bgp4MIB:
    """BGP4-MIB bgpPeerEntry columns."""

    BGP_PEER_TABLE: Final[str] = "1.3.6.1.2.1.15.3.1"

    BGP_PEER_IDENTIFIER: Final[str] = "1.3.6.1.2.1.15.3.1.1"
    BGP_PEER_STATE: Final[str] = "1.3.6.1.2.1.15.3.1.2"
    BGP_PEER_ADMIN_STATUS: Final[str] = "1.3.6.1.2.1.15.3.1.3"
    BGP_PEER_LOCAL_ADDR: Final[str] = "1.3.6.1.2.1.15.3.1.5"
    BGP_PEER_REMOTE_ADDR: Final[str] = "1.3.6.1.2.1.15.3.1.7"
    BGP_PEER_REMOTE_AS: Final[str] = "1.3.6.1.2.1.15.3.1.9"
    BGP_PEER_IN_UPDATES: Final[str] = "1.3.6.1.2.1.15.3.1.10"
    BGP_PEER_OUT_UPDATES: Final[str] = "1.3.6.1.2.1.15.3.1.11"
    BGP_PEER_FSM_ESTABLISHED_TIME: Final[str] = "1.3.6.1.2.1.15.3.1.16"

    # bgpPeerAdminStatus values
    ADMIN_STOP: Final[int] = 1
    ADMIN_START: Final[int] = 2

    # bgpPeerState value for an established session
    STATE_ESTABLISHED: Final[int] = 6


# =============================================================================
# UCD-SNMP-MIB (net-snmp) CPU and memory scalars
# =============================================================================


class UcdMIB:
    """UCD-SNMP-MIB systemStats and memory leaves (instance .0 included)."""

    SS_CPU_RAW_USER: Final[str] = "1.3.6.1.4.1.2021.11.50.0"
    SS_CPU_RAW_SYSTEM: Final[str] = "1.3.6.1.4.1.2021.11.52.0"
    SS_CPU_RAW_IDLE: Final[str] = "1.3.6.1.4.1.2021.11.53.0"

    MEM_TOTAL_SWAP: Final[str] = "1.3.6.1.4.1.2021.4.3.0"
    MEM_AVAIL_SWAP: Final[str] = "1.3.6.1.4.1.2021.4.4.0"
    MEM_TOTAL_REAL: Final[str] = "1.3.6.1.4.1.2021.4.5.0"
    MEM_AVAIL_REAL: Final[str] = "1.3.6.1.4.1.2021.4.6.0"


# =============================================================================
# Rates
# =============================================================================


class RateUnits:
    """Bit rate display units, smallest first. Each step is a factor of 1000."""

    UNITS: Final[tuple[str, ...]] = ("bps", "Kbps", "Mbps", "Gbps")
    STEP: Final[int] = 1000

    MAX_COUNTER32: Final[int] = 2**32 - 1
    MAX_COUNTER64: Final[int] = 2**64 - 1


# Display labels for interface usage metrics, in message order
METRIC_LABELS: Final[dict[str, str]] = {
    "in": "In",
    "out": "Out",
    "hc_in": "HCIn",
    "hc_out": "HCOut",
}


# =============================================================================
# Plugin Output
# =============================================================================


class PluginOutput:
    """Nagios plugin output format constants."""

    PERFDATA_SEPARATOR: Final[str] = " | "
    STATE_SEPARATOR: Final[str] = " - "
    PERF_FIELD_SEPARATOR: Final[str] = ";"


# =============================================================================
# Status String Maps (numeric SNMP enums -> display strings)
# =============================================================================


class StatusMaps:
    """
    Numeric-to-string maps for enumerated SNMP columns.

    Used when rendering records so operators see names rather than
    raw integers.
    """

    IF_STATUS: Final[dict[int, str]] = {
        1: "up",
        2: "down",
        3: "testing",
        4: "unknown",
        5: "dormant",
        6: "notPresent",
        7: "lowerLayerDown",
    }

    BGP_PEER_STATE: Final[dict[int, str]] = {
        1: "idle",
        2: "connect",
        3: "active",
        4: "opensent",
        5: "openconfirm",
        6: "established",
    }

    BGP_ADMIN_STATUS: Final[dict[int, str]] = {
        1: "stop",
        2: "start",
    }

    @classmethod
    def lookup(cls, mapping: dict[int, str], value: int) -> str:
        """Return the display name for value, or the number itself."""
        return mapping.get(value, str(value))
