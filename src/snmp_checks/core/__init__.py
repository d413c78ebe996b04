"""
Core module for snmp-checks.

Contains configuration management and the exception hierarchy.
"""

from __future__ import annotations

from snmp_checks.core.config import (
    ProbeSettings,
    SNMPv2cCredentials,
    get_settings,
    load_settings_file,
    reset_settings,
)
from snmp_checks.core.exceptions import (
    ConfigurationError,
    DecodeError,
    DecodeMismatchError,
    MalformedIndexError,
    RateError,
    SNMPChecksError,
    SNMPError,
    SNMPTransportError,
    UnknownOIDError,
    ZeroPeriodError,
)

__all__ = [
    # Settings
    "get_settings",
    "reset_settings",
    "load_settings_file",
    "ProbeSettings",
    "SNMPv2cCredentials",
    # Exceptions
    "SNMPChecksError",
    "ConfigurationError",
    "SNMPError",
    "SNMPTransportError",
    "DecodeError",
    "DecodeMismatchError",
    "UnknownOIDError",
    "MalformedIndexError",
    "RateError",
    "ZeroPeriodError",
]
