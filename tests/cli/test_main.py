"""
Tests for the snmpcheck CLI.

The SNMP transport is replaced with an in-memory client; the tests
exercise option parsing, plugin output and exit codes.
"""

from __future__ import annotations

import json
from typing import Any

import pytest
from typer.testing import CliRunner

from snmp_checks import __version__
from snmp_checks.checks.interface_usage import InterfaceUsageCheck
from snmp_checks.cli.main import app
from snmp_checks.constants import Bgp4MIB, SystemMIB
from snmp_checks.core.exceptions import SNMPTimeoutError
from snmp_checks.models.rates import Direction
from snmp_checks.models.values import RawValue
from snmp_checks.snmp.registry import DEFAULT_REGISTRY

runner = CliRunner()

instance = DEFAULT_REGISTRY.instance_oid


def usage_snapshot(in_octets: int) -> dict[str, RawValue]:
    return {
        instance("ifName", 1): RawValue.octets(b"eth0"),
        instance("ifInOctets", 1): RawValue.unsigned(in_octets),
        instance("ifOutOctets", 1): RawValue.unsigned(0),
        instance("ifHCInOctets", 1): RawValue.counter64(in_octets),
        instance("ifHCOutOctets", 1): RawValue.counter64(0),
        instance("ifSpeed", 1): RawValue.unsigned(1_000_000_000),
    }


@pytest.fixture
def use_client(monkeypatch):
    """Install a client for the next invocation; records make_client calls."""
    calls: list[tuple[str, Any]] = []

    def install(client):
        def make_client(target, settings):
            calls.append((target, settings))
            client.target = target
            return client

        monkeypatch.setattr("snmp_checks.cli.main.make_client", make_client)
        return calls

    return install


@pytest.fixture
def usage_checks(monkeypatch):
    """Build usage checks with a no-op sleep and a fixed clock."""
    created: list[InterfaceUsageCheck] = []

    def factory(*args, **kwargs):
        check = InterfaceUsageCheck(
            *args, sleep=lambda seconds: None, clock=iter([0.0, 10.0]).__next__, **kwargs
        )
        created.append(check)
        return check

    monkeypatch.setattr("snmp_checks.cli.main.InterfaceUsageCheck", factory)
    return created


class TestVersion:
    """Tests for version reporting."""

    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_version_command(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert f"snmpcheck version {__version__}" in result.stdout


class TestSysDescrCommand:
    """Tests for `snmpcheck sysdescr`."""

    def test_ok(self, fake_client, use_client):
        use_client(fake_client({SystemMIB.SYS_DESCR: RawValue.octets(b"Linux core1")}))

        result = runner.invoke(app, ["sysdescr", "-t", "core1"])

        assert result.exit_code == 0
        assert result.stdout.strip() == "OK - Linux core1"

    def test_pattern_mismatch(self, fake_client, use_client):
        use_client(fake_client({SystemMIB.SYS_DESCR: RawValue.octets(b"Linux core1")}))

        result = runner.invoke(app, ["sysdescr", "-t", "core1", "--pattern", "^Cisco"])

        assert result.exit_code == 2
        assert result.stdout.startswith("CRITICAL - sysDescr does not match expected pattern")

    def test_timeout(self, fake_client, use_client):
        use_client(fake_client(SNMPTimeoutError("core1", [SystemMIB.SYS_DESCR], 15)))

        result = runner.invoke(app, ["sysdescr", "-t", "core1"])

        assert result.exit_code == 2
        assert result.stdout.startswith(
            "CRITICAL - SNMP target core1 failed to return data for requested OID."
        )

    def test_perf(self, fake_client, use_client):
        use_client(
            fake_client({SystemMIB.SYS_DESCR: RawValue.octets(b"Linux")}, latency=0.5)
        )

        result = runner.invoke(app, ["sysdescr", "--perf"])

        assert result.stdout.strip() == "OK - Linux | 'latency'=0.5s"


class TestUsageCommand:
    """Tests for `snmpcheck usage`."""

    def test_ok(self, fake_client, use_client, usage_checks):
        use_client(fake_client(usage_snapshot(0), usage_snapshot(10_000)))

        result = runner.invoke(app, ["usage", "-t", "r1", "--index", "1", "--delay", "5"])

        assert result.exit_code == 0
        assert result.stdout.strip() == (
            "OK - eth0 - In: 8 Kbps Out: 0 bps HCIn: 8 Kbps HCOut: 0 bps"
        )
        assert usage_checks[0].delay == 5

    def test_thresholds(self, fake_client, use_client, usage_checks):
        use_client(fake_client(usage_snapshot(0), usage_snapshot(10_000)))

        result = runner.invoke(
            app, ["usage", "--warn-in", "1000", "--crit-in", "5000", "--warn-out", "100"]
        )

        assert result.exit_code == 2
        assert result.stdout.startswith("CRITICAL - Inbound exceeds threshold eth0")
        thresholds = usage_checks[0].thresholds
        assert thresholds[Direction.IN].warning == 1000
        assert thresholds[Direction.IN].critical == 5000
        assert thresholds[Direction.OUT].warning == 100
        assert thresholds[Direction.OUT].critical == 0

    def test_perfdata(self, fake_client, use_client, usage_checks):
        use_client(fake_client(usage_snapshot(0), usage_snapshot(10_000)))

        result = runner.invoke(app, ["usage", "--perf", "--warn-in", "100000"])

        assert result.exit_code == 0
        perf = result.stdout.split(" | ", 1)[1].split()
        assert perf[1] == "'in'=8000bps;100000;;0;1000000000"

    def test_negative_threshold_rejected(self):
        result = runner.invoke(app, ["usage", "--warn-in", "-5"])
        assert result.exit_code != 0

    def test_missing_interface(self, fake_client, use_client, usage_checks):
        use_client(fake_client({}))

        result = runner.invoke(app, ["usage", "-t", "r1", "-i", "9"])

        assert result.exit_code == 2
        assert "Interface index 9 does not exist" in result.stdout


class TestInterfacesCommand:
    """Tests for `snmpcheck interfaces`."""

    def test_text(self, fake_client, use_client, interface_walk):
        use_client(fake_client(interface_walk))

        result = runner.invoke(app, ["interfaces"])

        assert result.exit_code == 0
        assert result.stdout.startswith("OK - Interface index: 1\nDescription: lo")

    def test_json(self, fake_client, use_client, interface_walk):
        use_client(fake_client(interface_walk))

        result = runner.invoke(app, ["interfaces", "--json"])

        assert result.exit_code == 0
        payload = result.stdout[len("OK - "):]
        assert [entry["index"] for entry in json.loads(payload)] == [1, 3]


class TestBgpPeersCommand:
    """Tests for `snmpcheck bgp-peers`."""

    def test_mismatch(self, fake_client, use_client):
        use_client(
            fake_client(
                {
                    f"{Bgp4MIB.BGP_PEER_STATE}.192.0.2.2": RawValue.integer(3),
                    f"{Bgp4MIB.BGP_PEER_ADMIN_STATUS}.192.0.2.2": RawValue.integer(2),
                }
            )
        )

        result = runner.invoke(app, ["bgp-peers"])

        assert result.exit_code == 2
        assert result.stdout.strip() == (
            "CRITICAL - Found 1 BGP peer(s) with admin status mismatch: 192.0.2.2 (active)"
            " | 'mismatched_peers'=1;;;0 'total_peers'=1;;;0"
        )


class TestInventoryCommand:
    """Tests for `snmpcheck inventory`."""

    def test_prints_json(self, fake_client, use_client):
        use_client(fake_client({SystemMIB.SYS_NAME: RawValue.octets(b"core1")}))

        result = runner.invoke(app, ["inventory", "-t", "core1"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["system_info"]["name"] == "core1"

    def test_failure(self, fake_client, use_client):
        use_client(fake_client(SNMPTimeoutError("core1", [SystemMIB.SYS_DESCR], 15)))

        result = runner.invoke(app, ["inventory", "-t", "core1"])

        assert result.exit_code == 2
        assert result.stdout.startswith("CRITICAL - Error collecting inventory from core1: ")

    def test_unexpected_error_is_unknown(self, fake_client, use_client, monkeypatch):
        use_client(fake_client({}))

        def broken(client):
            raise RuntimeError("boom")

        monkeypatch.setattr("snmp_checks.cli.main.collect_inventory", broken)

        result = runner.invoke(app, ["inventory", "-t", "core1"])

        assert result.exit_code == 3
        assert "UNKNOWN - Unexpected error collecting inventory from core1: boom" in result.stdout


class TestSettingsResolution:
    """Tests for option, environment and config file precedence."""

    def test_community_from_environment(self, fake_client, use_client, monkeypatch):
        monkeypatch.setenv("SNMPCHECK_COMMUNITY", "envcomm")
        calls = use_client(fake_client({SystemMIB.SYS_DESCR: RawValue.octets(b"x")}))

        runner.invoke(app, ["sysdescr"])

        _, settings = calls[0]
        assert settings.community.get_secret_value() == "envcomm"

    def test_flags_override_config_file(self, fake_client, use_client, tmp_path):
        config = tmp_path / "snmpcheck.yaml"
        config.write_text("community: filecomm\nport: 1161\ntimeout: 3\n")
        calls = use_client(fake_client({SystemMIB.SYS_DESCR: RawValue.octets(b"x")}))

        runner.invoke(app, ["sysdescr", "-c", str(config), "--timeout", "7"])

        _, settings = calls[0]
        assert settings.community.get_secret_value() == "filecomm"
        assert settings.port == 1161
        assert settings.timeout == 7

    def test_invalid_config_is_unknown(self, tmp_path):
        config = tmp_path / "bad.yaml"
        config.write_text("port: 99999\n")

        result = runner.invoke(app, ["sysdescr", "-c", str(config)])

        assert result.exit_code == 3
        assert result.stdout.startswith("UNKNOWN - Invalid configuration: ")

    def test_out_of_range_flag_is_unknown(self):
        result = runner.invoke(app, ["sysdescr", "--timeout", "500"])

        assert result.exit_code == 3
        assert result.stdout.startswith("UNKNOWN - Invalid configuration: ")
