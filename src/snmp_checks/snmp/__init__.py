"""
SNMP data collection for snmp-checks.

Contains:
- registry: OID -> field name, wire type and rendering
- decoder: RawValue -> semantic value
- assembler: walk results -> per-index records
- client: pysnmp-based GET/WALK transport
"""

from __future__ import annotations

from snmp_checks.snmp.assembler import (
    assemble_table,
    attach_addresses,
    build_views,
    sorted_records,
    split_index,
)
from snmp_checks.snmp.client import SNMPClient, to_raw_value
from snmp_checks.snmp.decoder import decode, decode_scalars, decode_value
from snmp_checks.snmp.registry import (
    DEFAULT_REGISTRY,
    OIDRegistry,
    OIDSpec,
    ValueFormat,
    normalize_oid,
)

__all__ = [
    # Registry
    "DEFAULT_REGISTRY",
    "OIDRegistry",
    "OIDSpec",
    "ValueFormat",
    "normalize_oid",
    # Decoder
    "decode",
    "decode_value",
    "decode_scalars",
    # Assembler
    "assemble_table",
    "attach_addresses",
    "build_views",
    "sorted_records",
    "split_index",
    # Transport
    "SNMPClient",
    "to_raw_value",
]
