"""
CLI module for snmp-checks.

Provides the `snmpcheck` command-line interface.
"""

from __future__ import annotations

from snmp_checks.cli.main import app, cli

__all__ = ["app", "cli"]
