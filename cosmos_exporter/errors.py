"""
Exception hierarchy for the exporter.

Fetch, parse and correlation failures are all recoverable: callers catch them
at the narrowest scope (one capability, one series, one validator) and keep
going. Nothing here is meant to reach the HTTP response.
"""

from __future__ import annotations


class ExporterError(Exception):
    """Base class for exporter errors."""


class QueryError(ExporterError):
    """An upstream query failed (transport, status code or payload shape)."""

    def __init__(self, capability: str, reason: str) -> None:
        super().__init__(f"{capability}: {reason}")
        self.capability = capability
        self.reason = reason


class DecimalConversionError(ExporterError, ValueError):
    """Decimal text could not be turned into a finite float."""

    def __init__(self, value: object, reason: str = "malformed decimal") -> None:
        super().__init__(f"{reason}: {value!r}")
        self.value = value


class ConsensusAddressError(ExporterError, ValueError):
    """A validator's consensus address could not be derived."""


__all__ = [
    "ExporterError",
    "QueryError",
    "DecimalConversionError",
    "ConsensusAddressError",
]
