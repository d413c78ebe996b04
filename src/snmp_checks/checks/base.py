"""
Abstract base class for SNMP checks.

A check drives one or more SNMP requests against a single target and
turns the outcome into a Verdict. run() never raises: transport and
decode failures become CRITICAL, indeterminate rate failures UNKNOWN.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Protocol

from snmp_checks.core.exceptions import RateError, SNMPChecksError
from snmp_checks.models.values import RawValue
from snmp_checks.models.verdict import Verdict

logger = logging.getLogger(__name__)


class SNMPTransport(Protocol):
    """Interface checks need from a transport (see SNMPClient)."""

    target: str

    def get(self, oids: Sequence[str]) -> tuple[dict[str, RawValue], float]: ...

    def walk(self, base_oid: str) -> tuple[dict[str, RawValue], float]: ...


class BaseCheck(ABC):
    """
    Abstract base class for checks.

    Subclasses implement execute() and may override handle_error() to
    phrase failures the way their plugin reports them.

    Attributes:
        client: Transport bound to the target device
    """

    name: str = "check"

    def __init__(self, client: SNMPTransport):
        self.client = client

    @property
    def target(self) -> str:
        """Target device of the underlying transport."""
        return self.client.target

    @abstractmethod
    def execute(self) -> Verdict:
        """
        Run the check.

        Raises:
            SNMPChecksError: On any transport, decode or rate failure
        """
        pass

    def handle_error(self, error: SNMPChecksError) -> Verdict:
        """Map a failure raised by execute() to a Verdict."""
        if isinstance(error, RateError):
            return Verdict.unknown(f"Unable to compute rates for {self.target}: {error}")
        return Verdict.critical(f"SNMP target {self.target} failed: {error}")

    def run(self) -> Verdict:
        """Execute the check and always return a Verdict."""
        logger.debug(f"Running {self.name} against {self.target}")
        try:
            verdict = self.execute()
        except SNMPChecksError as e:
            logger.debug(f"{self.name} on {self.target} failed: {e}")
            verdict = self.handle_error(e)
        except Exception as e:
            logger.exception(f"Unexpected error in {self.name} on {self.target}")
            verdict = Verdict.unknown(f"Unexpected error checking {self.target}: {e}")

        logger.info(f"{self.name} on {self.target}: {verdict.state.name}")
        return verdict
