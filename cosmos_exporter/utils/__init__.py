"""
Utilities package for the Cosmos validators exporter.

Exports shared helpers for logging, timing and decimal conversion.
Keep this package lightweight and free of exporter-specific wiring.
"""

from cosmos_exporter.utils.decimals import parse_decimal, to_float
from cosmos_exporter.utils.logging import bind_request, configure_logging, get_logger
from cosmos_exporter.utils.profiler import ProfileStats, profile_block

__all__ = [
    "bind_request",
    "configure_logging",
    "get_logger",
    "parse_decimal",
    "to_float",
    "ProfileStats",
    "profile_block",
]
