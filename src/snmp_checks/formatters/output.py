"""
Output formatter for monitoring plugins.

Renders a Verdict as a Nagios/Icinga plugin line with performance data,
maps states to exit codes, and renders inventory results as JSON.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Iterable
from typing import Any, TextIO

from snmp_checks.constants import PluginOutput
from snmp_checks.models.records import InterfaceDetail, InventoryResult
from snmp_checks.models.verdict import PerfSample, State, Verdict


def _format_number(value: float | None) -> str:
    if value is None:
        return ""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def format_perf_sample(sample: PerfSample) -> str:
    """
    Render one performance sample.

    Format: 'label'=value[unit];warn;crit;min;max with empty fields kept
    positional and trailing empty fields dropped.

    Example:
        >>> format_perf_sample(PerfSample(name="in", value=8000, unit="bps", min=0))
        "'in'=8000bps;;;0"
    """
    sep = PluginOutput.PERF_FIELD_SEPARATOR
    fields = [
        f"'{sample.name}'={_format_number(sample.value)}{sample.unit}",
        _format_number(sample.warn),
        _format_number(sample.crit),
        _format_number(sample.min),
        _format_number(sample.max),
    ]
    while len(fields) > 1 and fields[-1] == "":
        fields.pop()
    return sep.join(fields)


def render_plugin_output(verdict: Verdict) -> str:
    """
    Render a Verdict as a plugin output line.

    Example:
        >>> render_plugin_output(Verdict.ok("eth0 - In: 8 Kbps"))
        'OK - eth0 - In: 8 Kbps'
    """
    line = f"{verdict.state.name}{PluginOutput.STATE_SEPARATOR}{verdict.message}"
    if verdict.perfdata:
        perf = " ".join(format_perf_sample(s) for s in verdict.perfdata)
        line += f"{PluginOutput.PERFDATA_SEPARATOR}{perf}"
    return line


def exit_code(verdict: Verdict) -> int:
    """Process exit code for a verdict: OK 0, WARNING 1, CRITICAL 2, UNKNOWN 3."""
    return int(State(verdict.state))


def _prune(data: Any) -> Any:
    # Drop None, zeros and empty strings, lists and dicts, recursively
    if isinstance(data, dict):
        pruned = {k: _prune(v) for k, v in data.items()}
        return {k: v for k, v in pruned.items() if v not in ("", None, 0, [], {})}
    if isinstance(data, list):
        return [_prune(v) for v in data]
    return data


def render_inventory_json(result: InventoryResult) -> str:
    """Pretty-print an inventory result, omitting empty and zero values."""
    return json.dumps(_prune(result.model_dump(mode="json", by_alias=True)), indent=2)


def render_interfaces_json(interfaces: Iterable[InterfaceDetail]) -> str:
    """Render interfaces as a JSON list ordered as given, every field included."""
    return json.dumps([iface.model_dump(mode="json") for iface in interfaces], indent=2)


class PluginFormatter:
    """
    Writer for plugin results.

    Attributes:
        output: Output stream (defaults to stdout)
    """

    def __init__(self, output: TextIO | None = None):
        self.output = output or sys.stdout

    def _write(self, text: str) -> None:
        """Write text to output stream."""
        self.output.write(text)
        if text and not text.endswith("\n"):
            self.output.write("\n")
        self.output.flush()

    def write_verdict(self, verdict: Verdict) -> int:
        """
        Write the plugin line for a verdict.

        Returns:
            Exit code for the verdict
        """
        self._write(render_plugin_output(verdict))
        return exit_code(verdict)

    def write_inventory(self, result: InventoryResult) -> None:
        """Write an inventory result as JSON."""
        self._write(render_inventory_json(result))
