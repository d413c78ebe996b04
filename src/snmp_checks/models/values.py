"""
Wire value models.

A RawValue is the tagged, transport-independent form of one SNMP
variable binding value. The transport converts every library value into
a RawValue exactly once; all downstream code dispatches on the tag.
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from snmp_checks.constants import RateUnits


class WireType(str, Enum):
    """Closed set of wire value kinds."""

    INTEGER = "integer"
    UNSIGNED = "unsigned"
    COUNTER64 = "counter64"
    OCTETS = "octets"
    OBJECT_ID = "object_id"
    NULL = "null"


class RawValue(BaseModel):
    """
    One wire-level SNMP value.

    Attributes:
        wire_type: The value kind
        value: Payload: int for numeric kinds, bytes for OCTETS,
               dotted string for OBJECT_ID, None for NULL
    """

    model_config = ConfigDict(frozen=True)

    wire_type: WireType
    value: Union[int, bytes, str, None] = Field(default=None)

    @model_validator(mode="after")
    def _check_payload(self) -> RawValue:
        kind = self.wire_type
        value = self.value
        if kind is WireType.NULL:
            if value is not None:
                raise ValueError("null value must not carry a payload")
        elif kind is WireType.OCTETS:
            if not isinstance(value, bytes):
                raise ValueError("octets value must be bytes")
        elif kind is WireType.OBJECT_ID:
            if not isinstance(value, str):
                raise ValueError("object_id value must be a dotted string")
        else:
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"{kind.value} value must be an integer")
            if kind is WireType.UNSIGNED and not 0 <= value <= RateUnits.MAX_COUNTER32:
                raise ValueError("unsigned value out of 32-bit range")
            if kind is WireType.COUNTER64 and not 0 <= value <= RateUnits.MAX_COUNTER64:
                raise ValueError("counter64 value out of 64-bit range")
        return self

    @classmethod
    def integer(cls, value: int) -> RawValue:
        return cls(wire_type=WireType.INTEGER, value=value)

    @classmethod
    def unsigned(cls, value: int) -> RawValue:
        return cls(wire_type=WireType.UNSIGNED, value=value)

    @classmethod
    def counter64(cls, value: int) -> RawValue:
        return cls(wire_type=WireType.COUNTER64, value=value)

    @classmethod
    def octets(cls, value: bytes | str) -> RawValue:
        if isinstance(value, str):
            value = value.encode("utf-8")
        return cls(wire_type=WireType.OCTETS, value=value)

    @classmethod
    def object_id(cls, value: str) -> RawValue:
        return cls(wire_type=WireType.OBJECT_ID, value=value.lstrip("."))

    @classmethod
    def null(cls) -> RawValue:
        return cls(wire_type=WireType.NULL)

    @property
    def is_null(self) -> bool:
        return self.wire_type is WireType.NULL
