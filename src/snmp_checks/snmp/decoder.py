"""
Value decoder.

Turns a RawValue into the semantic value of its registered field:
integers for numeric columns, strings for textual, hardware and IPv4
address columns, seconds for TimeTicks. A wire type that does not match
the registered one is rejected rather than coerced.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, cast

from snmp_checks.core.exceptions import DecodeMismatchError, UnknownOIDError
from snmp_checks.models.values import RawValue, WireType
from snmp_checks.snmp.registry import DEFAULT_REGISTRY, OIDRegistry, OIDSpec, ValueFormat
from snmp_checks.utils.conversion import (
    decode_text,
    format_ipv4,
    format_mac,
    timeticks_to_seconds,
)

logger = logging.getLogger(__name__)


def decode_value(spec: OIDSpec, raw: RawValue, oid: str | None = None) -> Any:
    """
    Decode one value against its registry entry.

    Args:
        spec: Registry entry of the OID
        raw: Wire value
        oid: Instance OID, used in error messages (defaults to spec.oid)

    Returns:
        int, float or str depending on the spec's value format

    Raises:
        DecodeMismatchError: If the wire type differs from the spec, the
            value is NULL, or an IPv4 value is not exactly four octets
    """
    oid = oid or spec.oid
    if raw.wire_type is not spec.wire_type:
        raise DecodeMismatchError(oid, spec.wire_type.value, raw.wire_type.value)

    value = raw.value
    fmt = spec.value_format

    if spec.wire_type is WireType.OCTETS:
        octets = cast(bytes, value)
        if fmt is ValueFormat.MAC:
            return format_mac(octets)
        if fmt is ValueFormat.IPV4:
            try:
                return format_ipv4(octets)
            except ValueError as e:
                raise DecodeMismatchError(
                    oid, spec.wire_type.value, raw.wire_type.value, reason=str(e)
                ) from e
        return decode_text(octets)

    if spec.wire_type is WireType.OBJECT_ID:
        return str(value)

    if fmt is ValueFormat.TIMETICKS:
        return timeticks_to_seconds(cast(int, value))

    return value


def decode(
    oid: str,
    raw: RawValue,
    registry: OIDRegistry = DEFAULT_REGISTRY,
) -> tuple[OIDSpec, Any]:
    """
    Look up an OID and decode its value.

    Returns:
        Tuple of (spec, decoded value)

    Raises:
        UnknownOIDError: If the OID is not registered
        DecodeMismatchError: If the value does not match the spec
    """
    spec = registry.lookup(oid)
    return spec, decode_value(spec, raw, oid)


def decode_scalars(
    values: Mapping[str, RawValue],
    registry: OIDRegistry = DEFAULT_REGISTRY,
) -> dict[str, Any]:
    """
    Decode a set of scalar OIDs into a name -> value mapping.

    Unknown OIDs are skipped. Values that do not match their spec,
    including NULL placeholders for missing objects, are left out of the
    result so the caller sees only cleanly decoded fields.

    Example:
        >>> decode_scalars({"1.3.6.1.2.1.1.5.0": RawValue.octets(b"core1")})
        {'sysName': 'core1'}
    """
    decoded: dict[str, Any] = {}
    for oid, raw in values.items():
        try:
            spec, value = decode(oid, raw, registry)
        except UnknownOIDError:
            logger.debug(f"Ignoring unregistered OID {oid}")
            continue
        except DecodeMismatchError as e:
            if raw.is_null:
                logger.debug(f"No value for {oid}")
            else:
                logger.warning(str(e))
            continue
        decoded[spec.name] = value
    return decoded
