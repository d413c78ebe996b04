"""
Table assembler.

Groups the flat OID -> RawValue mapping of one or more table walks into
one EntityRecord per table index. Columns from different base tables
(ifEntry and ifXTable, for instance) that share an index are merged into
the same record.
"""

from __future__ import annotations

import ipaddress
import logging
from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from snmp_checks.core.exceptions import DecodeMismatchError, MalformedIndexError, UnknownOIDError
from snmp_checks.models.records import EntityRecord, InterfaceDetail, IPBinding, _RecordView
from snmp_checks.models.values import RawValue
from snmp_checks.snmp.decoder import decode_value
from snmp_checks.snmp.registry import DEFAULT_REGISTRY, OIDRegistry, normalize_oid

logger = logging.getLogger(__name__)

ViewT = TypeVar("ViewT", bound=_RecordView)

# Index widths understood by the assembler
SCALAR_INDEX = 1
IPV4_INDEX = 4


def split_index(oid: str, index_length: int = SCALAR_INDEX) -> tuple[str, int]:
    """
    Split an instance OID into its column OID and integer table index.

    Single-component indices are returned as-is. Four-component indices
    (tables keyed by an IPv4 address) are folded into the integer value
    of the address.

    Args:
        oid: Instance OID, e.g. "1.3.6.1.2.1.2.2.1.2.3"
        index_length: Number of trailing components forming the index

    Returns:
        Tuple of (column OID, index)

    Raises:
        MalformedIndexError: If the suffix is not a valid index
        ValueError: If index_length is not supported

    Example:
        >>> split_index("1.3.6.1.2.1.2.2.1.2.3")
        ('1.3.6.1.2.1.2.2.1.2', 3)
        >>> split_index("1.3.6.1.2.1.4.20.1.1.10.0.0.1", index_length=4)
        ('1.3.6.1.2.1.4.20.1.1', 167772161)
    """
    if index_length not in (SCALAR_INDEX, IPV4_INDEX):
        raise ValueError(f"Unsupported index length: {index_length}")

    parts = normalize_oid(oid).split(".")
    if len(parts) <= index_length:
        raise MalformedIndexError(oid, ".".join(parts))

    column = ".".join(parts[:-index_length])
    suffix = parts[-index_length:]
    suffix_str = ".".join(suffix)

    if not all(part.isdecimal() for part in suffix):
        raise MalformedIndexError(oid, suffix_str)

    if index_length == SCALAR_INDEX:
        return column, int(suffix[0])

    try:
        return column, int(ipaddress.IPv4Address(suffix_str))
    except ipaddress.AddressValueError as e:
        raise MalformedIndexError(oid, suffix_str) from e


def assemble_table(
    values: Mapping[str, RawValue],
    registry: OIDRegistry = DEFAULT_REGISTRY,
    index_length: int = SCALAR_INDEX,
) -> dict[int, EntityRecord]:
    """
    Assemble walk results into one record per table index.

    Every instance OID is split into column and index before anything
    else, so a single malformed suffix fails the whole assembly. Columns
    missing from the registry are ignored. Values whose wire type does
    not match their column are skipped; the rest of the record is kept.

    Args:
        values: Union of OID -> RawValue pairs from one or more walks
        registry: Registry of the columns to decode
        index_length: Number of trailing OID components forming the index

    Returns:
        Mapping of index -> EntityRecord (iteration order is not meaningful;
        use sorted_records() for rendering)

    Raises:
        MalformedIndexError: If any OID carries an invalid index suffix
    """
    fields_by_index: dict[int, dict[str, Any]] = {}

    for oid, raw in values.items():
        column, index = split_index(oid, index_length)

        try:
            spec = registry.lookup(column)
        except UnknownOIDError:
            logger.debug(f"Ignoring unregistered column {column} (index {index})")
            continue

        fields = fields_by_index.setdefault(index, {})

        try:
            fields[spec.name] = decode_value(spec, raw, oid)
        except DecodeMismatchError as e:
            if raw.is_null:
                logger.debug(f"No value for {oid}")
            else:
                logger.warning(str(e))

    logger.debug(f"Assembled {len(fields_by_index)} records from {len(values)} values")
    return {
        index: EntityRecord(index=index, fields=fields)
        for index, fields in fields_by_index.items()
    }


def sorted_records(records: Mapping[int, EntityRecord]) -> list[EntityRecord]:
    """Return records ordered by table index."""
    return [records[index] for index in sorted(records)]


def build_views(records: Mapping[int, EntityRecord], view: type[ViewT]) -> list[ViewT]:
    """
    Build typed views of records, ordered by table index.

    Example:
        >>> build_views(assemble_table(walked), InterfaceDetail)
    """
    return [view.from_record(record) for record in sorted_records(records)]


def attach_addresses(
    interfaces: Iterable[InterfaceDetail],
    bindings: Iterable[IPBinding],
) -> list[InterfaceDetail]:
    """
    Fold IP address bindings onto the interfaces they belong to.

    Bindings are grouped by ipAdEntIfIndex; each interface gets the
    addresses bound to its index in address order. Bindings pointing at
    an unknown interface are dropped.

    Returns:
        New InterfaceDetail objects with ip_addresses filled
    """
    by_if_index: dict[int, list[IPBinding]] = {}
    for binding in bindings:
        by_if_index.setdefault(binding.if_index, []).append(binding)

    known = set()
    result: list[InterfaceDetail] = []
    for interface in interfaces:
        known.add(interface.index)
        bound = sorted(by_if_index.get(interface.index, []), key=lambda b: b.index)
        result.append(
            interface.model_copy(update={"ip_addresses": [b.ip for b in bound]})
        )

    for if_index in sorted(set(by_if_index) - known):
        logger.debug(f"IP binding for unknown interface index {if_index}")

    return result
