"""
sysDescr check.

Fetches sysDescr.0 and optionally requires it to match a regular
expression.
"""

from __future__ import annotations

import re

from snmp_checks.checks.base import BaseCheck, SNMPTransport
from snmp_checks.constants import SystemMIB
from snmp_checks.core.exceptions import SNMPChecksError
from snmp_checks.models.verdict import Verdict
from snmp_checks.snmp.decoder import decode_scalars
from snmp_checks.snmp.registry import DEFAULT_REGISTRY, OIDRegistry


class SysDescrCheck(BaseCheck):
    """
    Compare a device's sysDescr with an expected pattern.

    The pattern is searched anywhere in sysDescr (re.search). An empty
    pattern accepts any value.
    """

    name = "sysdescr"

    def __init__(
        self,
        client: SNMPTransport,
        pattern: str = "",
        enable_perf: bool = False,
        registry: OIDRegistry = DEFAULT_REGISTRY,
    ):
        super().__init__(client)
        self.pattern = pattern
        self.enable_perf = enable_perf
        self.registry = registry.subset(["sysDescr"])

    def execute(self) -> Verdict:
        values, latency = self.client.get([SystemMIB.SYS_DESCR])
        decoded = decode_scalars(values, self.registry)
        if "sysDescr" not in decoded:
            return Verdict.critical(
                f"SNMP target {self.target} failed to return data for requested OID."
            )

        sys_descr = decoded["sysDescr"]

        if self.pattern:
            try:
                matched = re.search(self.pattern, sys_descr) is not None
            except re.error as e:
                return Verdict.critical(f"Invalid sysDescr pattern '{self.pattern}': {e}")
            if not matched:
                return Verdict.critical(
                    f"sysDescr does not match expected pattern '{self.pattern}'. "
                    f"Got: {sys_descr}"
                )

        verdict = Verdict.ok(sys_descr)
        if self.enable_perf:
            verdict.add_perf("latency", latency, unit="s")
        return verdict

    def handle_error(self, error: SNMPChecksError) -> Verdict:
        return Verdict.critical(
            f"SNMP target {self.target} failed to return data for requested OID. {error}"
        )
