"""
Sampling and rate models.

A Sample is one timed snapshot of an entity's counters. Two samples of
the same entity are turned into RateResults by the rate sampler, and
RateResults are compared against Thresholds by the evaluator.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Direction(Enum):
    """
    Traffic direction of a counter.

    Not a str subclass, so a Direction key never collides with a metric
    name key in a thresholds mapping.
    """

    IN = "in"
    OUT = "out"
    NONE = "none"


class CounterReading(BaseModel):
    """
    One monotonic counter value.

    Attributes:
        value: Raw counter value
        bits: Counter width (32 wraps, 64 is assumed not to)
        direction: Traffic direction used by threshold evaluation
        octets: True when the counter counts octets (rates are reported in bits)
    """

    model_config = ConfigDict(frozen=True)

    value: int = Field(ge=0)
    bits: Literal[32, 64] = 32
    direction: Direction = Direction.NONE
    octets: bool = True


class Sample(BaseModel):
    """
    One timed snapshot of an entity's counters.

    Attributes:
        index: Entity index the counters belong to
        name: Entity display name
        counters: Counter name -> reading, in sampling order
        timestamp: Sample time in seconds
        latency: Round-trip time of the request that produced the sample
    """

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0)
    name: str = ""
    counters: dict[str, CounterReading] = Field(default_factory=dict)
    timestamp: float
    latency: float = Field(default=0.0, ge=0)


class RateResult(BaseModel):
    """
    Derived throughput for one counter pair.

    Attributes:
        name: Counter name
        direction: Traffic direction
        delta: Counter increase between samples (after wrap handling)
        period: Seconds between samples
        per_second: Raw counter increase per second
        bits_per_second: Rate in bits per second (per_second * 8 for octet counters)
        scaled: bits_per_second expressed in unit, floored
        unit: bps, Kbps, Mbps or Gbps
        wrapped: A 32-bit counter wrapped between samples
        counter_reset: A 64-bit counter decreased; the rate is reported as zero
    """

    model_config = ConfigDict(frozen=True)

    name: str
    direction: Direction = Direction.NONE
    delta: int = 0
    period: float
    per_second: float = 0.0
    bits_per_second: float = 0.0
    scaled: int = 0
    unit: str = "bps"
    wrapped: bool = False
    counter_reset: bool = False

    @property
    def display(self) -> str:
        """Scaled value with unit, e.g. '8 Kbps'."""
        if self.counter_reset:
            return "counter reset"
        return f"{self.scaled} {self.unit}"


class Threshold(BaseModel):
    """
    Operator-supplied boundaries in bits per second.

    A boundary of zero means no threshold is configured.
    """

    model_config = ConfigDict(frozen=True)

    warning: float = Field(default=0, ge=0)
    critical: float = Field(default=0, ge=0)

    @property
    def configured(self) -> bool:
        return bool(self.warning or self.critical)
