"""
BGP peers check.

Walks the BGP4-MIB bgpPeerTable and reports peers that are
administratively started but not established.
"""

from __future__ import annotations

import logging

from snmp_checks.checks.base import BaseCheck, SNMPTransport
from snmp_checks.constants import Bgp4MIB
from snmp_checks.core.exceptions import SNMPChecksError
from snmp_checks.models.records import BgpPeer
from snmp_checks.models.verdict import Verdict
from snmp_checks.snmp.assembler import IPV4_INDEX, assemble_table, build_views
from snmp_checks.snmp.registry import DEFAULT_REGISTRY, OIDRegistry

logger = logging.getLogger(__name__)


def walk_bgp_peers(
    client: SNMPTransport,
    registry: OIDRegistry = DEFAULT_REGISTRY,
) -> list[BgpPeer]:
    """
    Walk bgpPeerTable and build one BgpPeer per remote address.

    Raises:
        SNMPError: If the walk fails
        MalformedIndexError: If an instance OID has an invalid address index
    """
    values, latency = client.walk(Bgp4MIB.BGP_PEER_TABLE)
    logger.debug(f"Walked bgpPeerTable: {len(values)} values in {latency:.3f}s")
    records = assemble_table(values, registry, index_length=IPV4_INDEX)
    return build_views(records, BgpPeer)


class BgpPeersCheck(BaseCheck):
    """CRITICAL when any started peer is not established, OK otherwise."""

    name = "bgp peers"

    def __init__(self, client: SNMPTransport, registry: OIDRegistry = DEFAULT_REGISTRY):
        super().__init__(client)
        self.registry = registry

    def execute(self) -> Verdict:
        peers = walk_bgp_peers(self.client, self.registry)
        mismatched = [peer for peer in peers if peer.mismatched]

        if mismatched:
            details = ", ".join(f"{peer.address} ({peer.state_name})" for peer in mismatched)
            verdict = Verdict.critical(
                f"Found {len(mismatched)} BGP peer(s) with admin status mismatch: {details}"
            )
        else:
            verdict = Verdict.ok(
                f"All {len(peers)} BGP peers have matching admin and operational status"
            )

        verdict.add_perf("mismatched_peers", len(mismatched), min=0)
        verdict.add_perf("total_peers", len(peers), min=0)
        return verdict

    def handle_error(self, error: SNMPChecksError) -> Verdict:
        return Verdict.critical(
            f"SNMP target {self.target} failed to return BGP peer data: {error}"
        )
