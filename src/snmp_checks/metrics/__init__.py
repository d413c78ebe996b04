"""
Derived metrics for snmp-checks.

Contains the rate sampler (counter deltas, wraparound, scaling) and the
threshold evaluator (rates -> Verdict).
"""

from __future__ import annotations

from snmp_checks.metrics.rates import (
    average_latency,
    compute_rate,
    compute_rates,
    sample_period,
)
from snmp_checks.metrics.thresholds import (
    EVALUATION_ORDER,
    evaluate,
    format_rates,
    threshold_for,
)

__all__ = [
    # Rates
    "compute_rate",
    "compute_rates",
    "average_latency",
    "sample_period",
    # Thresholds
    "EVALUATION_ORDER",
    "evaluate",
    "format_rates",
    "threshold_for",
]
