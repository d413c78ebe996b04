"""
Exception hierarchy for snmp-checks.

All exceptions inherit from SNMPChecksError for unified error handling.
Specific exceptions provide detailed context for debugging.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any


class SNMPChecksError(Exception):
    """
    Base exception for all snmp-checks errors.

    All custom exceptions inherit from this class, allowing callers
    to catch all snmp-checks errors with a single except clause.

    Attributes:
        message: Human-readable error description
        context: Optional dictionary with additional error context
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(SNMPChecksError):
    """
    Error in configuration parsing or validation.

    Raised when:
    - YAML config file is malformed
    - Field values fail validation
    """

    pass


class ConfigFileNotFoundError(ConfigurationError):
    """Configuration file does not exist."""

    def __init__(self, path: str):
        super().__init__(f"Configuration file not found: {path}", context={"path": path})


class ConfigValidationError(ConfigurationError):
    """
    Configuration validation failed.

    Attributes:
        field: The field that failed validation
        value: The invalid value
        reason: Why validation failed
    """

    def __init__(self, field: str, value: Any, reason: str):
        super().__init__(
            f"Validation failed for '{field}': {reason}",
            context={"field": field, "value": value, "reason": reason},
        )
        self.field = field
        self.value = value
        self.reason = reason


# =============================================================================
# SNMP Transport Errors
# =============================================================================


class SNMPError(SNMPChecksError):
    """Base class for SNMP-related errors."""

    pass


class SNMPTransportError(SNMPError):
    """
    SNMP request failed (connect, request or protocol error).

    Attributes:
        target: Device hostname or IP
        oids: The OID set of the failing request
        reason: Error reported by the SNMP engine
    """

    def __init__(self, target: str, oids: Iterable[str], reason: str):
        oid_list = list(oids)
        super().__init__(
            f"SNMP request to {target} failed: {reason}",
            context={"target": target, "oids": oid_list},
        )
        self.target = target
        self.oids = oid_list
        self.reason = reason


class SNMPTimeoutError(SNMPTransportError):
    """SNMP request timed out."""

    def __init__(self, target: str, oids: Iterable[str], timeout: float | None = None):
        reason = "request timed out"
        if timeout is not None:
            reason += f" after {timeout}s"
        super().__init__(target, oids, reason)
        self.timeout = timeout


# =============================================================================
# Decoding Errors
# =============================================================================


class DecodeError(SNMPChecksError):
    """Base class for OID and value decoding errors."""

    pass


class UnknownOIDError(DecodeError):
    """OID is not present in the registry. Callers normally ignore this."""

    def __init__(self, oid: str):
        super().__init__(f"Unknown OID: {oid}", context={"oid": oid})
        self.oid = oid


class DecodeMismatchError(DecodeError):
    """
    Wire type of a value does not match the type expected for its OID.

    Attributes:
        oid: The OID being decoded
        expected: Expected wire type name
        actual: Observed wire type name
    """

    def __init__(self, oid: str, expected: str, actual: str, reason: str | None = None):
        message = f"Value for OID {oid} is not of type {expected}: got {actual}"
        if reason:
            message += f" ({reason})"
        super().__init__(message, context={"oid": oid, "expected": expected, "actual": actual})
        self.oid = oid
        self.expected = expected
        self.actual = actual


class MalformedIndexError(DecodeError):
    """Trailing OID suffix is not a valid table index."""

    def __init__(self, oid: str, suffix: str):
        super().__init__(
            f"Failed to convert table index to int: {suffix!r}",
            context={"oid": oid},
        )
        self.oid = oid
        self.suffix = suffix


class IncompleteSampleError(DecodeError):
    """Required fields are missing from a polled record."""

    def __init__(self, index: int, missing: Iterable[str]):
        missing_list = list(missing)
        super().__init__(
            f"Missing required fields for index {index}: {', '.join(missing_list)}",
            context={"index": index, "missing": missing_list},
        )
        self.index = index
        self.missing = missing_list


# =============================================================================
# Rate Errors
# =============================================================================


class RateError(SNMPChecksError):
    """Base class for rate computation errors."""

    pass


class ZeroPeriodError(RateError):
    """Second sample is not strictly later than the first."""

    def __init__(self, period: float):
        super().__init__(
            f"Sample period must be positive, got {period:.3f}s",
            context={"period": period},
        )
        self.period = period


class SampleMismatchError(RateError):
    """Two samples do not describe the same entity or counter set."""

    pass


class UnexpectedCounterResetError(RateError):
    """High-capacity counter decreased between samples."""

    def __init__(self, name: str, first: int, second: int):
        super().__init__(
            f"Counter '{name}' decreased from {first} to {second}",
            context={"name": name, "first": first, "second": second},
        )
        self.name = name
        self.first = first
        self.second = second


# =============================================================================
# Collection Errors
# =============================================================================


class PartialCollectionError(SNMPChecksError):
    """An optional inventory section could not be collected."""

    def __init__(self, section: str, reason: str):
        super().__init__(
            f"Failed to collect {section}: {reason}",
            context={"section": section},
        )
        self.section = section
        self.reason = reason
