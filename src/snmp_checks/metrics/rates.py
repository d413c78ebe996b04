"""
Rate sampler.

Turns two timed samples of the same entity into per-second rates.
32-bit counters that decrease are treated as a single wraparound;
64-bit counters that decrease are flagged as a counter reset and
reported with a zero rate.
"""

from __future__ import annotations

import logging

from snmp_checks.constants import RateUnits
from snmp_checks.core.exceptions import (
    SampleMismatchError,
    UnexpectedCounterResetError,
    ZeroPeriodError,
)
from snmp_checks.models.rates import RateResult, Sample
from snmp_checks.utils.conversion import scale_bps

logger = logging.getLogger(__name__)


def sample_period(first: Sample, second: Sample) -> float:
    """
    Seconds elapsed between two samples.

    Raises:
        ZeroPeriodError: If second is not strictly later than first
    """
    period = second.timestamp - first.timestamp
    if period <= 0:
        raise ZeroPeriodError(period)
    return period


def _check_same_entity(first: Sample, second: Sample) -> None:
    if first.index != second.index:
        raise SampleMismatchError(
            f"Samples belong to different entities: {first.index} != {second.index}",
            context={"first": first.index, "second": second.index},
        )


def compute_rate(
    first: Sample,
    second: Sample,
    name: str,
    strict: bool = False,
) -> RateResult:
    """
    Compute the rate of one counter between two samples.

    Args:
        first: Earlier sample
        second: Later sample of the same entity
        name: Counter to compute
        strict: Raise instead of flagging when a 64-bit counter decreases

    Returns:
        RateResult for the counter

    Raises:
        SampleMismatchError: If the samples differ in entity, counter or width
        ZeroPeriodError: If the period is not positive
        UnexpectedCounterResetError: If strict and a 64-bit counter decreased

    Example:
        >>> compute_rate(first, second, "ifInOctets").display
        '8 Kbps'
    """
    _check_same_entity(first, second)
    if name not in first.counters or name not in second.counters:
        raise SampleMismatchError(
            f"Counter '{name}' is missing from one of the samples", context={"name": name}
        )

    before = first.counters[name]
    after = second.counters[name]
    if before.bits != after.bits:
        raise SampleMismatchError(
            f"Counter '{name}' changed width between samples", context={"name": name}
        )

    period = sample_period(first, second)
    wrapped = False

    if after.value >= before.value:
        delta = after.value - before.value
    elif before.bits == 32:
        delta = (RateUnits.MAX_COUNTER32 - before.value) + after.value + 1
        wrapped = True
        logger.debug(f"Counter {name} wrapped ({before.value} -> {after.value})")
    else:
        if strict:
            raise UnexpectedCounterResetError(name, before.value, after.value)
        logger.warning(
            f"Counter {name} on index {first.index} decreased "
            f"({before.value} -> {after.value}), reporting no rate"
        )
        return RateResult(
            name=name,
            direction=before.direction,
            period=period,
            counter_reset=True,
        )

    per_second = delta / period
    bits_per_second = per_second * 8 if before.octets else per_second
    scaled, unit = scale_bps(bits_per_second)

    return RateResult(
        name=name,
        direction=before.direction,
        delta=delta,
        period=period,
        per_second=per_second,
        bits_per_second=bits_per_second,
        scaled=scaled,
        unit=unit,
        wrapped=wrapped,
    )


def compute_rates(
    first: Sample,
    second: Sample,
    strict: bool = False,
) -> dict[str, RateResult]:
    """
    Compute rates for every counter of two samples.

    Returns:
        Counter name -> RateResult, in the first sample's counter order

    Raises:
        SampleMismatchError: If the samples differ in entity or counter set
        ZeroPeriodError: If the period is not positive
    """
    _check_same_entity(first, second)
    if set(first.counters) != set(second.counters):
        raise SampleMismatchError(
            "Samples carry different counters",
            context={
                "first": sorted(first.counters),
                "second": sorted(second.counters),
            },
        )
    sample_period(first, second)

    return {name: compute_rate(first, second, name, strict) for name in first.counters}


def average_latency(first: Sample, second: Sample) -> float:
    """Mean round-trip time of the requests behind two samples."""
    return (first.latency + second.latency) / 2
