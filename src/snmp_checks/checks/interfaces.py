"""
Interface inventory check.

Walks ifEntry and ifXTable, merges both into one record per ifIndex and
reports every interface, ordered by index.
"""

from __future__ import annotations

import logging

from snmp_checks.checks.base import BaseCheck, SNMPTransport
from snmp_checks.constants import IfMIB
from snmp_checks.core.exceptions import MalformedIndexError, SNMPChecksError
from snmp_checks.formatters.output import render_interfaces_json
from snmp_checks.models.records import InterfaceDetail
from snmp_checks.models.values import RawValue
from snmp_checks.models.verdict import Verdict
from snmp_checks.snmp.assembler import assemble_table, build_views
from snmp_checks.snmp.registry import DEFAULT_REGISTRY, OIDRegistry

logger = logging.getLogger(__name__)

# Tables merged into each interface record
INTERFACE_TABLES: tuple[str, ...] = (IfMIB.IF_ENTRY, IfMIB.IF_X_TABLE)


def walk_interfaces(
    client: SNMPTransport,
    registry: OIDRegistry = DEFAULT_REGISTRY,
) -> list[InterfaceDetail]:
    """
    Walk both interface tables and build one InterfaceDetail per ifIndex.

    Raises:
        SNMPError: If either walk fails
        MalformedIndexError: If an instance OID has a non-integer index
    """
    values: dict[str, RawValue] = {}
    for table in INTERFACE_TABLES:
        walked, latency = client.walk(table)
        logger.debug(f"Walked {table}: {len(walked)} values in {latency:.3f}s")
        values.update(walked)

    return build_views(assemble_table(values, registry), InterfaceDetail)


class InterfacesCheck(BaseCheck):
    """
    Report every interface of a device.

    Attributes:
        as_json: Render the interfaces as JSON instead of text blocks
    """

    name = "interfaces"

    def __init__(
        self,
        client: SNMPTransport,
        as_json: bool = False,
        registry: OIDRegistry = DEFAULT_REGISTRY,
    ):
        super().__init__(client)
        self.as_json = as_json
        self.registry = registry

    def execute(self) -> Verdict:
        interfaces = walk_interfaces(self.client, self.registry)
        if self.as_json:
            return Verdict.ok(render_interfaces_json(interfaces))
        return Verdict.ok("".join(iface.to_text() for iface in interfaces))

    def handle_error(self, error: SNMPChecksError) -> Verdict:
        if isinstance(error, MalformedIndexError):
            return Verdict.critical(str(error))
        return Verdict.critical(
            f"SNMP target {self.target} failed to return data for requested OID: {error}"
        )
