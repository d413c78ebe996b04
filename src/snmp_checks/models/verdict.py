"""
Check result models.

A Verdict is the terminal outcome of one check invocation: a tri-state
(plus UNKNOWN) state, a message, and an ordered list of performance
samples for the result-reporting layer.
"""

from __future__ import annotations

from enum import IntEnum

from pydantic import BaseModel, Field


class State(IntEnum):
    """Plugin states. The integer value is the plugin exit code."""

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3

    @property
    def severity(self) -> int:
        """Rank used for escalation: OK < WARNING < UNKNOWN < CRITICAL."""
        return _SEVERITY[self]


_SEVERITY = {
    State.OK: 0,
    State.WARNING: 1,
    State.UNKNOWN: 2,
    State.CRITICAL: 3,
}


class PerfSample(BaseModel):
    """
    One performance data item.

    Attributes:
        name: Label
        value: Measured value
        warn: Warning boundary (None when not applicable)
        crit: Critical boundary (None when not applicable)
        min: Lower bound
        max: Upper bound
        unit: Unit of measure
    """

    name: str = Field(min_length=1)
    value: float
    warn: float | None = None
    crit: float | None = None
    min: float | None = None
    max: float | None = None
    unit: str = ""


class Verdict(BaseModel):
    """
    Final check outcome.

    State only ever moves towards higher severity through escalate(),
    so once CRITICAL is selected it cannot be downgraded.
    """

    state: State = State.OK
    message: str = ""
    perfdata: list[PerfSample] = Field(default_factory=list)

    @classmethod
    def ok(cls, message: str) -> Verdict:
        return cls(state=State.OK, message=message)

    @classmethod
    def critical(cls, message: str) -> Verdict:
        return cls(state=State.CRITICAL, message=message)

    @classmethod
    def unknown(cls, message: str) -> Verdict:
        return cls(state=State.UNKNOWN, message=message)

    def escalate(self, state: State, message: str) -> bool:
        """
        Raise the state if the new one is more severe.

        Args:
            state: Candidate state
            message: Message that goes with the candidate state

        Returns:
            True if the verdict changed
        """
        if state.severity <= self.state.severity:
            return False
        self.state = state
        self.message = message
        return True

    def add_perf(
        self,
        name: str,
        value: float,
        unit: str = "",
        warn: float | None = None,
        crit: float | None = None,
        min: float | None = None,
        max: float | None = None,
    ) -> PerfSample:
        """Create and append a performance sample."""
        sample = PerfSample(
            name=name, value=value, unit=unit, warn=warn, crit=crit, min=min, max=max
        )
        self.perfdata.append(sample)
        return sample
