"""
Utility functions for snmp-checks.

Provides conversion and rendering helpers.
"""

from __future__ import annotations

from snmp_checks.utils.conversion import (
    decode_text,
    format_ipv4,
    format_mac,
    ratio_to_percent,
    scale_bps,
    timeticks_to_seconds,
)

__all__ = [
    "format_mac",
    "format_ipv4",
    "decode_text",
    "timeticks_to_seconds",
    "scale_bps",
    "ratio_to_percent",
]
