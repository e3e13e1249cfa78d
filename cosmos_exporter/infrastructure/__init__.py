"""
Infrastructure package for the Cosmos validators exporter.

Centralizes upstream connectivity: the shared httpx client factory and the
typed REST query client. Keep this layer focused on I/O, decoupled from
derivation and assembly logic.
"""

from cosmos_exporter.infrastructure.lcd_client import LcdClient, create_http_client

__all__ = [
    "LcdClient",
    "create_http_client",
]
