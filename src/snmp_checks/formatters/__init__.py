"""
Output formatters for snmp-checks.

Provides plugin line rendering, exit code mapping and JSON rendering.
"""

from __future__ import annotations

from snmp_checks.formatters.output import (
    PluginFormatter,
    exit_code,
    format_perf_sample,
    render_interfaces_json,
    render_inventory_json,
    render_plugin_output,
)

__all__ = [
    "PluginFormatter",
    "exit_code",
    "format_perf_sample",
    "render_interfaces_json",
    "render_inventory_json",
    "render_plugin_output",
]
