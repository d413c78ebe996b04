"""
Device inventory collection.

System information is required; every other section is optional and is
left out with a warning when the device cannot provide it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from snmp_checks.checks.base import SNMPTransport
from snmp_checks.checks.interfaces import walk_interfaces
from snmp_checks.constants import EntityMIB, IpMIB, SystemMIB, UcdMIB
from snmp_checks.core.exceptions import (
    IncompleteSampleError,
    PartialCollectionError,
    SNMPChecksError,
)
from snmp_checks.models.records import (
    CPUMetrics,
    InventoryResult,
    IPBinding,
    MemoryMetrics,
    PhysicalEntity,
    SystemInfo,
)
from snmp_checks.snmp.assembler import IPV4_INDEX, assemble_table, attach_addresses, build_views
from snmp_checks.snmp.decoder import decode_scalars
from snmp_checks.snmp.registry import DEFAULT_REGISTRY, OIDRegistry
from snmp_checks.utils.conversion import ratio_to_percent

logger = logging.getLogger(__name__)

SYSTEM_OIDS: tuple[str, ...] = (
    SystemMIB.SYS_DESCR,
    SystemMIB.SYS_OBJECT_ID,
    SystemMIB.SYS_UPTIME,
    SystemMIB.SYS_CONTACT,
    SystemMIB.SYS_NAME,
    SystemMIB.SYS_LOCATION,
)

CPU_OIDS: tuple[str, ...] = (
    UcdMIB.SS_CPU_RAW_USER,
    UcdMIB.SS_CPU_RAW_SYSTEM,
    UcdMIB.SS_CPU_RAW_IDLE,
)

MEMORY_OIDS: tuple[str, ...] = (
    UcdMIB.MEM_TOTAL_SWAP,
    UcdMIB.MEM_AVAIL_SWAP,
    UcdMIB.MEM_TOTAL_REAL,
    UcdMIB.MEM_AVAIL_REAL,
)


# =============================================================================
# Sections
# =============================================================================


def collect_system_info(
    client: SNMPTransport, registry: OIDRegistry = DEFAULT_REGISTRY
) -> SystemInfo:
    """
    Fetch the system group.

    Raises:
        SNMPError: If the request fails
        IncompleteSampleError: If the device returned none of the leaves
    """
    values, _ = client.get(list(SYSTEM_OIDS))
    decoded = decode_scalars(values, registry)
    if not decoded:
        raise IncompleteSampleError(0, [registry.lookup(oid).name for oid in SYSTEM_OIDS])
    return SystemInfo.model_validate(decoded)


def collect_ip_addresses(
    client: SNMPTransport, registry: OIDRegistry = DEFAULT_REGISTRY
) -> list[IPBinding]:
    values, _ = client.walk(IpMIB.IP_ADDR_TABLE)
    records = assemble_table(values, registry, index_length=IPV4_INDEX)
    return build_views(records, IPBinding)


def collect_physical_entities(
    client: SNMPTransport, registry: OIDRegistry = DEFAULT_REGISTRY
) -> list[PhysicalEntity]:
    values, _ = client.walk(EntityMIB.ENT_PHYSICAL_TABLE)
    return build_views(assemble_table(values, registry), PhysicalEntity)


def collect_cpu(
    client: SNMPTransport, registry: OIDRegistry = DEFAULT_REGISTRY
) -> CPUMetrics | None:
    """
    Split of CPU time since boot from the UCD raw tick counters.

    Returns:
        CPUMetrics, or None when the device reports no ticks
    """
    values, _ = client.get(list(CPU_OIDS))
    decoded = decode_scalars(values, registry)

    user = decoded.get("ssCpuRawUser", 0)
    system = decoded.get("ssCpuRawSystem", 0)
    idle = decoded.get("ssCpuRawIdle", 0)
    total = user + system + idle
    if not total:
        return None

    return CPUMetrics(
        user_percent=ratio_to_percent(user, total),
        system_percent=ratio_to_percent(system, total),
        idle_percent=ratio_to_percent(idle, total),
    )


def collect_memory(
    client: SNMPTransport, registry: OIDRegistry = DEFAULT_REGISTRY
) -> MemoryMetrics | None:
    """
    UCD memory scalars.

    Returns:
        MemoryMetrics, or None when the device reports none of them
    """
    values, _ = client.get(list(MEMORY_OIDS))
    decoded = decode_scalars(values, registry)
    if not decoded:
        return None

    return MemoryMetrics(
        total_swap_kb=decoded.get("memTotalSwap", 0),
        avail_swap_kb=decoded.get("memAvailSwap", 0),
        total_real_kb=decoded.get("memTotalReal", 0),
        avail_real_kb=decoded.get("memAvailReal", 0),
    )


# =============================================================================
# Inventory
# =============================================================================

Collector = Callable[[SNMPTransport, OIDRegistry], Any]

OPTIONAL_SECTIONS: tuple[tuple[str, Collector], ...] = (
    ("interfaces", walk_interfaces),
    ("ip_addresses", collect_ip_addresses),
    ("physical_entities", collect_physical_entities),
    ("cpu", collect_cpu),
    ("memory", collect_memory),
)


def collect_section(
    section: str,
    collector: Collector,
    client: SNMPTransport,
    registry: OIDRegistry = DEFAULT_REGISTRY,
) -> Any:
    """
    Run one optional section collector.

    Raises:
        PartialCollectionError: If the collector fails for any reason
    """
    try:
        return collector(client, registry)
    except SNMPChecksError as e:
        raise PartialCollectionError(section, str(e)) from e
    except Exception as e:
        logger.exception(f"Unexpected error collecting {section}")
        raise PartialCollectionError(section, str(e)) from e


def collect_inventory(
    client: SNMPTransport,
    registry: OIDRegistry = DEFAULT_REGISTRY,
) -> InventoryResult:
    """
    Collect a full device inventory.

    IP bindings are also folded onto their interfaces.

    Args:
        client: Transport bound to the target
        registry: Registry providing every inventory column

    Returns:
        InventoryResult with every section that could be collected

    Raises:
        SNMPChecksError: If system information cannot be collected
    """
    sections: dict[str, Any] = {"system_info": collect_system_info(client, registry)}

    for section, collector in OPTIONAL_SECTIONS:
        try:
            value = collect_section(section, collector, client, registry)
        except PartialCollectionError as e:
            logger.warning(str(e))
            continue
        if value:
            sections[section] = value
        else:
            logger.info(f"Section {section} not available on {client.target}")

    if "interfaces" in sections and "ip_addresses" in sections:
        sections["interfaces"] = attach_addresses(
            sections["interfaces"], sections["ip_addresses"]
        )

    return InventoryResult(**sections)
