"""
snmp-checks: SNMP health probes for network devices.

This package provides Nagios/Icinga-style checks built on a small
OID-driven collection engine:
- OID registry and wire value decoding
- Table assembly of walked MIB tables into per-entity records
- Counter rate sampling with wraparound handling
- Threshold evaluation into tri-state verdicts
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
