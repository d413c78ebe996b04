"""
Tests for the interface usage check.
"""

from __future__ import annotations

import pytest

from snmp_checks.checks.interface_usage import InterfaceUsageCheck, link_speed
from snmp_checks.core.exceptions import SNMPTimeoutError
from snmp_checks.models.rates import Direction, Threshold
from snmp_checks.models.values import RawValue
from snmp_checks.models.verdict import State
from snmp_checks.snmp.registry import DEFAULT_REGISTRY

instance = DEFAULT_REGISTRY.instance_oid


def snapshot(
    index: int = 2,
    in_octets: int = 0,
    out_octets: int = 0,
    hc_in: int = 0,
    hc_out: int = 0,
    speed: int = 1_000_000_000,
    high_speed: int | None = 1000,
    name: str = "eth0",
) -> dict[str, RawValue]:
    values = {
        instance("ifName", index): RawValue.octets(name.encode()),
        instance("ifInOctets", index): RawValue.unsigned(in_octets),
        instance("ifOutOctets", index): RawValue.unsigned(out_octets),
        instance("ifHCInOctets", index): RawValue.counter64(hc_in),
        instance("ifHCOutOctets", index): RawValue.counter64(hc_out),
        instance("ifSpeed", index): RawValue.unsigned(speed),
    }
    if high_speed is not None:
        values[instance("ifHighSpeed", index)] = RawValue.unsigned(high_speed)
    return values


class Recorder:
    """Sleep replacement that records requested delays."""

    def __init__(self):
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def make_check(client, **kwargs) -> tuple[InterfaceUsageCheck, Recorder]:
    sleep = Recorder()
    clock = iter([100.0, 110.0]).__next__
    kwargs.setdefault("index", 2)
    return InterfaceUsageCheck(client, sleep=sleep, clock=clock, **kwargs), sleep


class TestLinkSpeed:
    """Tests for link_speed."""

    def test_uses_if_speed(self):
        assert link_speed(1_000_000_000, 1000) == 1_000_000_000

    def test_saturated_if_speed_uses_high_speed(self):
        assert link_speed(4_294_967_295, 10_000) == 10_000_000_000

    def test_saturated_without_high_speed(self):
        assert link_speed(4_294_967_295, 0) == 4_294_967_295


class TestInterfaceUsageCheck:
    """Tests for InterfaceUsageCheck."""

    def test_ok_reports_every_rate(self, fake_client):
        client = fake_client(snapshot(), snapshot(in_octets=10_000, hc_in=10_000))
        check, sleep = make_check(client, delay=10)

        verdict = check.run()

        assert verdict.state is State.OK
        assert verdict.message == "eth0 - In: 8 Kbps Out: 0 bps HCIn: 8 Kbps HCOut: 0 bps"
        assert sleep.calls == [10]
        assert len(client.get_calls) == 2

    def test_requests_instance_oids(self, fake_client):
        client = fake_client(snapshot(), snapshot())
        check, _ = make_check(client)
        check.run()
        assert instance("ifHCInOctets", 2) in client.get_calls[0]
        assert client.get_calls[0] == client.get_calls[1]

    def test_inbound_critical(self, fake_client):
        client = fake_client(snapshot(), snapshot(in_octets=10_000, hc_in=10_000))
        check, _ = make_check(
            client,
            thresholds={
                Direction.IN: Threshold(warning=1000, critical=5000),
                Direction.OUT: Threshold(warning=1),
            },
        )

        verdict = check.run()

        assert verdict.state is State.CRITICAL
        assert verdict.message.startswith("Inbound exceeds threshold eth0 - In: 8 Kbps")

    def test_outbound_warning(self, fake_client):
        client = fake_client(snapshot(), snapshot(out_octets=1_250_000, hc_out=1_250_000))
        check, _ = make_check(client, thresholds={Direction.OUT: Threshold(warning=500_000)})

        verdict = check.run()

        assert verdict.state is State.WARNING
        assert "Out: 1 Mbps" in verdict.message

    def test_counter32_wrap(self, fake_client):
        client = fake_client(
            snapshot(in_octets=4_294_967_000),
            snapshot(in_octets=100),
        )
        check, _ = make_check(client)

        verdict = check.run()

        # 396 octets over 10 seconds
        assert verdict.state is State.OK
        assert "In: 316 bps" in verdict.message

    def test_perfdata(self, fake_client):
        client = fake_client(snapshot(), snapshot(in_octets=10_000))
        check, _ = make_check(
            client, thresholds={Direction.IN: Threshold(warning=100_000)}, enable_perf=True
        )

        verdict = check.run()

        names = [sample.name for sample in verdict.perfdata]
        assert names == ["snmp_latency", "in", "out", "hc_in", "hc_out"]
        inbound = verdict.perfdata[1]
        assert inbound.value == 8000
        assert inbound.warn == 100_000
        assert inbound.max == 1_000_000_000

    def test_unknown_interface_is_critical(self, fake_client):
        client = fake_client(snapshot(index=2))
        check, sleep = make_check(client, index=7)

        verdict = check.run()

        assert verdict.state is State.CRITICAL
        assert verdict.message == (
            "SNMP target 192.0.2.1 failed to return data when measuring metrics. "
            "Interface index 7 does not exist (index=7)"
        )
        assert sleep.calls == []

    def test_missing_counter_is_critical(self, fake_client):
        values = snapshot()
        del values[instance("ifHCOutOctets", 2)]
        client = fake_client(values)
        check, _ = make_check(client)

        verdict = check.run()

        assert verdict.state is State.CRITICAL
        assert "ifHCOutOctets" in verdict.message

    def test_timeout_on_second_sample(self, fake_client):
        client = fake_client(snapshot(), SNMPTimeoutError("192.0.2.1", ["x"], 15))
        check, _ = make_check(client)

        verdict = check.run()

        assert verdict.state is State.CRITICAL
        assert "failed to return data when measuring metrics" in verdict.message

    def test_non_increasing_clock_is_unknown(self, fake_client):
        client = fake_client(snapshot(), snapshot(in_octets=10))
        check = InterfaceUsageCheck(
            client, index=2, sleep=Recorder(), clock=iter([50.0, 50.0]).__next__
        )

        verdict = check.run()

        assert verdict.state is State.UNKNOWN
        assert verdict.message.startswith("SNMP target 192.0.2.1 returned unusable samples.")

    @pytest.mark.parametrize("hc_in", [10, 0])
    def test_counter64_reset_is_not_an_alarm(self, fake_client, hc_in):
        client = fake_client(snapshot(hc_in=1_000_000), snapshot(hc_in=hc_in))
        check, _ = make_check(client, thresholds={Direction.IN: Threshold(critical=1)})

        verdict = check.run()

        assert verdict.state is State.OK
        assert "HCIn: counter reset" in verdict.message
