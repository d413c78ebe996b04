"""
Value conversion utilities for SNMP data.

Provides functions for rendering octet strings as hardware and IPv4
addresses, converting TimeTicks, and scaling bit rates to display units.
"""

from __future__ import annotations

from snmp_checks.constants import RateUnits


def format_mac(raw: bytes) -> str:
    """
    Render octets as a lower-case colon-separated hardware address.

    Example:
        >>> format_mac(bytes([0, 17, 34, 51, 68, 85]))
        '00:11:22:33:44:55'
        >>> format_mac(b"")
        ''
    """
    return ":".join(f"{b:02x}" for b in raw)


def format_ipv4(raw: bytes) -> str:
    """
    Render exactly four octets as a dotted-decimal IPv4 address.

    Raises:
        ValueError: If raw is not four bytes long

    Example:
        >>> format_ipv4(bytes([10, 0, 0, 1]))
        '10.0.0.1'
    """
    if len(raw) != 4:
        raise ValueError(f"expected 4 octets, got {len(raw)}")
    return ".".join(str(b) for b in raw)


def decode_text(raw: bytes) -> str:
    """Decode a DisplayString, replacing invalid UTF-8 and dropping trailing NULs."""
    return raw.decode("utf-8", errors="replace").rstrip("\x00")


def timeticks_to_seconds(ticks: int) -> float:
    """Convert TimeTicks (hundredths of a second) to seconds."""
    return ticks / 100


def scale_bps(bps: int | float) -> tuple[int, str]:
    """
    Express a bit rate in the largest unit that keeps it below 1000.

    Each unit step divides by exactly 1000 with integer flooring;
    Gbps is the ceiling and values are never promoted beyond it.

    Args:
        bps: Bits per second (negative values are treated as zero)

    Returns:
        Tuple of (scaled value, unit)

    Example:
        >>> scale_bps(999)
        (999, 'bps')
        >>> scale_bps(1000)
        (1, 'Kbps')
        >>> scale_bps(2_500_000_000_000)
        (2500, 'Gbps')
    """
    value = max(int(bps), 0)
    units = RateUnits.UNITS

    for unit in units[:-1]:
        if value < RateUnits.STEP:
            return value, unit
        value //= RateUnits.STEP

    return value, units[-1]


def ratio_to_percent(part: float, total: float) -> float:
    """
    Express part as a percentage of total (0 when total is zero).

    Example:
        >>> ratio_to_percent(25, 200)
        12.5
    """
    if not total:
        return 0.0
    return part / total * 100.0
