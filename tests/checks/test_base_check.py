"""
Tests for BaseCheck error handling.
"""

from __future__ import annotations

import logging

from snmp_checks.checks.base import BaseCheck
from snmp_checks.core.exceptions import SNMPTimeoutError, ZeroPeriodError
from snmp_checks.models.verdict import State, Verdict


class RaisingCheck(BaseCheck):
    """Check whose execute() raises a preset error or returns a preset verdict."""

    name = "raising"

    def __init__(self, client, error: Exception | None = None, verdict: Verdict | None = None):
        super().__init__(client)
        self.error = error
        self.verdict = verdict

    def execute(self) -> Verdict:
        if self.error is not None:
            raise self.error
        return self.verdict


class TestBaseCheck:
    """Tests for BaseCheck.run."""

    def test_target_comes_from_client(self, fake_client):
        check = RaisingCheck(fake_client(target="router1"), verdict=Verdict.ok("fine"))
        assert check.target == "router1"

    def test_returns_execute_verdict(self, fake_client):
        verdict = RaisingCheck(fake_client(), verdict=Verdict.ok("fine")).run()
        assert verdict.state is State.OK
        assert verdict.message == "fine"

    def test_transport_error_is_critical(self, fake_client):
        error = SNMPTimeoutError("192.0.2.1", ["1.3.6.1.2.1.1.1.0"], 5)
        verdict = RaisingCheck(fake_client(), error=error).run()
        assert verdict.state is State.CRITICAL
        assert verdict.message.startswith("SNMP target 192.0.2.1 failed: ")
        assert "timed out after 5s" in verdict.message

    def test_rate_error_is_unknown(self, fake_client):
        verdict = RaisingCheck(fake_client(), error=ZeroPeriodError(0.0)).run()
        assert verdict.state is State.UNKNOWN
        assert verdict.message.startswith("Unable to compute rates for 192.0.2.1: ")

    def test_unexpected_error_is_unknown(self, fake_client, caplog):
        with caplog.at_level(logging.ERROR, logger="snmp_checks.checks.base"):
            verdict = RaisingCheck(fake_client(), error=RuntimeError("boom")).run()
        assert verdict.state is State.UNKNOWN
        assert verdict.message == "Unexpected error checking 192.0.2.1: boom"
        assert any(r.exc_info for r in caplog.records)
