"""
Threshold evaluator.

Compares derived rates with operator thresholds and produces a Verdict.
The evaluation order is fixed: inbound critical, inbound warning,
outbound critical, outbound warning, else OK. The first boundary that
fires decides the verdict.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from snmp_checks.constants import METRIC_LABELS, PluginOutput
from snmp_checks.models.rates import Direction, RateResult, Threshold
from snmp_checks.models.verdict import State, Verdict

logger = logging.getLogger(__name__)

# (direction, threshold level, resulting state, message prefix), in evaluation order
EVALUATION_ORDER: tuple[tuple[Direction, str, State, str], ...] = (
    (Direction.IN, "critical", State.CRITICAL, "Inbound exceeds threshold "),
    (Direction.IN, "warning", State.WARNING, "Inbound exceeds threshold "),
    (Direction.OUT, "critical", State.CRITICAL, "Outbound exceeds threshold "),
    (Direction.OUT, "warning", State.WARNING, "Outbound exceeds threshold "),
)


def threshold_for(
    metric: str,
    rate: RateResult,
    thresholds: Mapping[str | Direction, Threshold],
) -> Threshold:
    """
    Find the threshold applying to a metric.

    An entry keyed by the metric name wins over one keyed by its direction.
    Metrics without an entry get an unconfigured Threshold.
    """
    if metric in thresholds:
        return thresholds[metric]
    if rate.direction in thresholds:
        return thresholds[rate.direction]
    return Threshold()


def format_rates(rates: Mapping[str, RateResult]) -> str:
    """
    Render every rate as 'Label: value unit'.

    Example:
        >>> format_rates({"in": rate_8k, "out": rate_0})
        'In: 8 Kbps Out: 0 bps'
    """
    return " ".join(
        f"{METRIC_LABELS.get(metric, metric)}: {rate.display}" for metric, rate in rates.items()
    )


def _exceeds(rate: RateResult, boundary: float) -> bool:
    # Zero disables the boundary; reset counters carry no usable rate
    if not boundary or rate.counter_reset:
        return False
    return rate.bits_per_second > boundary


def evaluate(
    name: str,
    rates: Mapping[str, RateResult],
    thresholds: Mapping[str | Direction, Threshold],
    maxima: Mapping[str, float] | None = None,
    latency: float | None = None,
    enable_perf: bool = False,
) -> Verdict:
    """
    Evaluate rates against thresholds.

    Every metric of a direction is compared against that direction's
    boundary, using the unscaled bits per second.

    Args:
        name: Entity display name used in the message
        rates: Metric name -> RateResult, in display order
        thresholds: Boundaries keyed by metric name or Direction
        maxima: Optional capability bound per metric (perf max only)
        latency: Average request latency in seconds (perf only)
        enable_perf: Attach performance samples to the verdict

    Returns:
        Verdict whose message always carries every rate

    Example:
        >>> verdict = evaluate("eth0", rates, {Direction.IN: Threshold(critical=1e6)})
        >>> verdict.state
        <State.CRITICAL: 2>
    """
    message = f"{name}{PluginOutput.STATE_SEPARATOR}{format_rates(rates)}"
    verdict = Verdict.ok(message)

    for direction, level, state, prefix in EVALUATION_ORDER:
        fired = [
            metric
            for metric, rate in rates.items()
            if rate.direction is direction
            and _exceeds(rate, getattr(threshold_for(metric, rate, thresholds), level))
        ]
        if fired:
            logger.debug(f"{name}: {level} {direction.value} threshold exceeded by {fired}")
            verdict.escalate(state, prefix + message)
            break

    if enable_perf:
        if latency is not None:
            verdict.add_perf("snmp_latency", latency, unit="s")
        for metric, rate in rates.items():
            threshold = threshold_for(metric, rate, thresholds)
            verdict.add_perf(
                metric,
                rate.bits_per_second,
                unit="bps",
                warn=threshold.warning or None,
                crit=threshold.critical or None,
                min=0,
                max=(maxima or {}).get(metric),
            )

    return verdict
