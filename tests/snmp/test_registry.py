"""
Tests for the OID registry.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from snmp_checks.constants import IfMIB, SystemMIB, UcdMIB
from snmp_checks.core.exceptions import UnknownOIDError
from snmp_checks.models.values import WireType
from snmp_checks.snmp.registry import (
    DEFAULT_REGISTRY,
    OIDRegistry,
    OIDSpec,
    ValueFormat,
    normalize_oid,
)


class TestNormalizeOid:
    """Tests for OID normalization."""

    def test_strips_leading_dot(self):
        assert normalize_oid(".1.3.6.1.2.1.1.1.0") == "1.3.6.1.2.1.1.1.0"

    def test_strips_whitespace(self):
        assert normalize_oid("  1.3.6.1 ") == "1.3.6.1"

    def test_plain_oid_unchanged(self):
        assert normalize_oid("1.3.6.1") == "1.3.6.1"


class TestOIDSpec:
    """Tests for OIDSpec."""

    def test_oid_is_normalized(self):
        spec = OIDSpec(oid=".1.3.6.1.2.1.1.5.0", name="sysName", wire_type=WireType.OCTETS)
        assert spec.oid == "1.3.6.1.2.1.1.5.0"

    def test_rejects_non_numeric_oid(self):
        with pytest.raises(ValidationError):
            OIDSpec(oid="1.3.six.1", name="bad", wire_type=WireType.INTEGER)

    def test_is_frozen(self):
        spec = OIDSpec(oid="1.3.6.1", name="x", wire_type=WireType.INTEGER)
        with pytest.raises(ValidationError):
            spec.name = "y"

    @pytest.mark.parametrize(
        "value_format,expected",
        [
            (ValueFormat.NUMBER, 0),
            (ValueFormat.TEXT, ""),
            (ValueFormat.MAC, ""),
            (ValueFormat.IPV4, ""),
            (ValueFormat.TIMETICKS, 0.0),
        ],
    )
    def test_zero_value(self, value_format, expected):
        spec = OIDSpec(
            oid="1.3.6.1", name="x", wire_type=WireType.INTEGER, value_format=value_format
        )
        assert spec.zero_value == expected

    def test_is_counter(self):
        counter = DEFAULT_REGISTRY.by_name("ifInOctets")
        gauge = DEFAULT_REGISTRY.by_name("ifSpeed")
        assert counter.is_counter
        assert not gauge.is_counter


class TestOIDRegistry:
    """Tests for OIDRegistry lookups."""

    @pytest.fixture
    def registry(self) -> OIDRegistry:
        return OIDRegistry(
            [
                OIDSpec(oid="1.3.6.1.2.1.1.5.0", name="sysName", wire_type=WireType.OCTETS),
                OIDSpec(oid="1.3.6.1.2.1.2.2.1.2", name="ifDescr", wire_type=WireType.OCTETS),
            ]
        )

    def test_lookup_by_oid(self, registry):
        assert registry.lookup("1.3.6.1.2.1.1.5.0").name == "sysName"

    def test_lookup_with_leading_dot(self, registry):
        assert registry.lookup(".1.3.6.1.2.1.1.5.0").name == "sysName"

    def test_lookup_unknown_raises(self, registry):
        with pytest.raises(UnknownOIDError) as exc_info:
            registry.lookup("1.3.6.1.4.1.9.9.9")
        assert exc_info.value.oid == "1.3.6.1.4.1.9.9.9"

    def test_by_name(self, registry):
        assert registry.by_name("ifDescr").oid == "1.3.6.1.2.1.2.2.1.2"

    def test_by_name_unknown_raises(self, registry):
        with pytest.raises(KeyError):
            registry.by_name("ifMtu")

    def test_register_duplicate_oid(self, registry):
        with pytest.raises(ValueError, match="OID already registered"):
            registry.register(
                OIDSpec(oid="1.3.6.1.2.1.1.5.0", name="other", wire_type=WireType.OCTETS)
            )

    def test_register_duplicate_name(self, registry):
        with pytest.raises(ValueError, match="Name already registered"):
            registry.register(OIDSpec(oid="1.3.6.1.9", name="sysName", wire_type=WireType.OCTETS))

    def test_contains(self, registry):
        assert "1.3.6.1.2.1.1.5.0" in registry
        assert ".1.3.6.1.2.1.1.5.0" in registry
        assert "1.3.6.1.2.1.1.6.0" not in registry
        assert 42 not in registry

    def test_iteration_and_len(self, registry):
        assert len(registry) == 2
        assert [spec.name for spec in registry] == ["sysName", "ifDescr"]

    def test_subset(self):
        subset = DEFAULT_REGISTRY.subset(["ifName", "ifInOctets"])
        assert len(subset) == 2
        assert IfMIB.IF_NAME in subset
        assert IfMIB.IF_DESCR not in subset

    def test_instance_oid(self):
        assert DEFAULT_REGISTRY.instance_oid("ifDescr", 3) == "1.3.6.1.2.1.2.2.1.2.3"


class TestDefaultRegistry:
    """Tests for the built-in OID families."""

    def test_system_scalars_include_instance(self):
        assert DEFAULT_REGISTRY.lookup(SystemMIB.SYS_DESCR).name == "sysDescr"
        assert DEFAULT_REGISTRY.lookup(SystemMIB.SYS_UPTIME).value_format is ValueFormat.TIMETICKS

    def test_interface_columns(self):
        assert DEFAULT_REGISTRY.lookup(IfMIB.IF_HC_IN_OCTETS).wire_type is WireType.COUNTER64
        assert DEFAULT_REGISTRY.lookup(IfMIB.IF_HC_IN_OCTETS).counter_bits == 64
        assert DEFAULT_REGISTRY.lookup(IfMIB.IF_IN_OCTETS).wire_type is WireType.UNSIGNED
        assert DEFAULT_REGISTRY.lookup(IfMIB.IF_IN_OCTETS).counter_bits == 32
        assert DEFAULT_REGISTRY.lookup(IfMIB.IF_PHYS_ADDRESS).value_format is ValueFormat.MAC

    def test_ip_address_columns(self):
        assert DEFAULT_REGISTRY.by_name("ipAdEntAddr").value_format is ValueFormat.IPV4
        assert DEFAULT_REGISTRY.by_name("ipAdEntIfIndex").wire_type is WireType.INTEGER

    def test_ucd_cpu_columns(self):
        assert DEFAULT_REGISTRY.lookup(UcdMIB.SS_CPU_RAW_USER).name == "ssCpuRawUser"
        assert DEFAULT_REGISTRY.lookup(UcdMIB.SS_CPU_RAW_SYSTEM).name == "ssCpuRawSystem"
        assert DEFAULT_REGISTRY.lookup(UcdMIB.SS_CPU_RAW_IDLE).name == "ssCpuRawIdle"

    def test_names_are_unique(self):
        names = [spec.name for spec in DEFAULT_REGISTRY]
        assert len(names) == len(set(names))
