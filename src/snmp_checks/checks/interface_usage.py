"""
Interface usage check.

Samples the octet counters of one interface twice, separated by a fixed
delay, and evaluates the resulting bit rates against inbound and
outbound thresholds.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from typing import NamedTuple

from snmp_checks.checks.base import BaseCheck, SNMPTransport
from snmp_checks.constants import RateUnits, SNMPDefaults
from snmp_checks.core.exceptions import (
    DecodeError,
    IncompleteSampleError,
    RateError,
    SNMPChecksError,
)
from snmp_checks.metrics.rates import average_latency, compute_rates
from snmp_checks.metrics.thresholds import evaluate
from snmp_checks.models.rates import CounterReading, Direction, Sample, Threshold
from snmp_checks.models.verdict import Verdict
from snmp_checks.snmp.assembler import assemble_table
from snmp_checks.snmp.registry import DEFAULT_REGISTRY, OIDRegistry

logger = logging.getLogger(__name__)


class UsageCounter(NamedTuple):
    """Metric name, source column, counter width and direction."""

    metric: str
    column: str
    bits: int
    direction: Direction


# Message and perfdata order
USAGE_COUNTERS: tuple[UsageCounter, ...] = (
    UsageCounter("in", "ifInOctets", 32, Direction.IN),
    UsageCounter("out", "ifOutOctets", 32, Direction.OUT),
    UsageCounter("hc_in", "ifHCInOctets", 64, Direction.IN),
    UsageCounter("hc_out", "ifHCOutOctets", 64, Direction.OUT),
)

USAGE_FIELDS: tuple[str, ...] = (
    "ifName",
    "ifInOctets",
    "ifOutOctets",
    "ifHCInOctets",
    "ifHCOutOctets",
    "ifSpeed",
    "ifHighSpeed",
)


def link_speed(speed: int, high_speed: int) -> int:
    """
    Interface speed in bits per second.

    ifSpeed saturates at 2^32-1 on links faster than ~4.3 Gbps; ifHighSpeed
    (in Mbps) is used instead in that case.

    Example:
        >>> link_speed(4294967295, 10000)
        10000000000
    """
    if speed >= RateUnits.MAX_COUNTER32 and high_speed:
        return high_speed * 1_000_000
    return speed


class InterfaceUsageCheck(BaseCheck):
    """
    Two-sample bandwidth check for one interface.

    Attributes:
        index: ifIndex of the interface
        delay: Seconds between the two samples
        thresholds: Boundaries per direction (Direction.IN, Direction.OUT)
        enable_perf: Attach performance data to the verdict
    """

    name = "interface usage"

    def __init__(
        self,
        client: SNMPTransport,
        index: int,
        delay: float = SNMPDefaults.SAMPLE_DELAY,
        thresholds: Mapping[Direction, Threshold] | None = None,
        enable_perf: bool = False,
        registry: OIDRegistry = DEFAULT_REGISTRY,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the check.

        Args:
            client: Transport bound to the target
            index: ifIndex of the interface
            delay: Seconds between the two samples
            thresholds: Boundaries per direction; missing directions are unchecked
            enable_perf: Attach performance data to the verdict
            registry: Registry providing the IF-MIB columns
            sleep: Blocking sleep used between samples
            clock: Monotonic clock used to timestamp samples
        """
        super().__init__(client)
        self.index = index
        self.delay = delay
        self.thresholds = dict(thresholds or {})
        self.enable_perf = enable_perf
        self.registry = registry.subset(USAGE_FIELDS)
        self.sleep = sleep
        self.clock = clock

    def sample(self) -> tuple[Sample, int]:
        """
        Take one timed sample of the interface counters.

        Returns:
            Tuple of (sample, link speed in bits per second)

        Raises:
            SNMPError: If the request fails
            DecodeError: If the interface does not exist or counters are missing
        """
        oids = [self.registry.instance_oid(field, self.index) for field in USAGE_FIELDS]
        values, latency = self.client.get(oids)
        timestamp = self.clock()

        record = assemble_table(values, self.registry).get(self.index)
        if record is None or "ifName" not in record:
            raise DecodeError(
                f"Interface index {self.index} does not exist",
                context={"index": self.index},
            )

        missing = [c.column for c in USAGE_COUNTERS if c.column not in record]
        if missing:
            raise IncompleteSampleError(self.index, missing)

        counters = {
            c.metric: CounterReading(
                value=record.get(c.column), bits=c.bits, direction=c.direction
            )
            for c in USAGE_COUNTERS
        }
        sample = Sample(
            index=self.index,
            name=record.get("ifName"),
            counters=counters,
            timestamp=timestamp,
            latency=latency,
        )
        speed = link_speed(record.get("ifSpeed", 0), record.get("ifHighSpeed", 0))
        return sample, speed

    def execute(self) -> Verdict:
        first, speed = self.sample()
        logger.debug(f"Waiting {self.delay}s before second sample of index {self.index}")
        self.sleep(self.delay)
        second, _ = self.sample()

        rates = compute_rates(first, second)
        maxima = {metric: float(speed) for metric in rates} if speed else None

        return evaluate(
            first.name,
            rates,
            self.thresholds,
            maxima=maxima,
            latency=average_latency(first, second),
            enable_perf=self.enable_perf,
        )

    def handle_error(self, error: SNMPChecksError) -> Verdict:
        if isinstance(error, RateError):
            return Verdict.unknown(
                f"SNMP target {self.target} returned unusable samples. {error}"
            )
        return Verdict.critical(
            f"SNMP target {self.target} failed to return data when measuring metrics. {error}"
        )
