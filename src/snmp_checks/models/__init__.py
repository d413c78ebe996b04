"""
Pydantic models for snmp-checks.

Contains data models for:
- Values: tagged wire values produced by the transport
- Records: assembled table rows and their typed views
- Rates: counter samples, derived rates and thresholds
- Verdict: check outcomes and performance data
"""

from __future__ import annotations

from snmp_checks.models.rates import (
    CounterReading,
    Direction,
    RateResult,
    Sample,
    Threshold,
)
from snmp_checks.models.records import (
    BgpPeer,
    CPUMetrics,
    EntityRecord,
    InterfaceDetail,
    InventoryResult,
    IPBinding,
    MemoryMetrics,
    PhysicalEntity,
    SystemInfo,
)
from snmp_checks.models.values import RawValue, WireType
from snmp_checks.models.verdict import PerfSample, State, Verdict

__all__ = [
    "RawValue",
    "WireType",
    "EntityRecord",
    "InterfaceDetail",
    "IPBinding",
    "PhysicalEntity",
    "BgpPeer",
    "SystemInfo",
    "CPUMetrics",
    "MemoryMetrics",
    "InventoryResult",
    "CounterReading",
    "Direction",
    "Sample",
    "RateResult",
    "Threshold",
    "State",
    "PerfSample",
    "Verdict",
]
