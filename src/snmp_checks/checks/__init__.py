"""
Checks for snmp-checks.

Each check drives SNMP requests against one target and returns a
Verdict. Device inventory is a plain collection returning an
InventoryResult.
"""

from __future__ import annotations

from snmp_checks.checks.base import BaseCheck, SNMPTransport
from snmp_checks.checks.bgp_peers import BgpPeersCheck, walk_bgp_peers
from snmp_checks.checks.interface_usage import InterfaceUsageCheck, link_speed
from snmp_checks.checks.interfaces import InterfacesCheck, walk_interfaces
from snmp_checks.checks.inventory import collect_inventory
from snmp_checks.checks.sysdescr import SysDescrCheck

__all__ = [
    "BaseCheck",
    "SNMPTransport",
    "InterfaceUsageCheck",
    "InterfacesCheck",
    "SysDescrCheck",
    "BgpPeersCheck",
    "collect_inventory",
    "link_speed",
    "walk_bgp_peers",
    "walk_interfaces",
]
