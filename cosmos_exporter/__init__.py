"""
Cosmos validators exporter - Prometheus snapshot of a Cosmos SDK validator set.

On every scrape the exporter queries the node's REST API concurrently for:

- The validator set and staking parameters
- Validator signing infos (missed blocks)
- IBC channels, connections and light clients

and derives per-validator series (commission, stake, status, jailing, missed
blocks, rank, active-set membership) plus IBC presence series.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from cosmos_exporter.config import Settings, get_settings
from cosmos_exporter.orchestrator import FetchResults, collect_snapshot, fetch_all
from cosmos_exporter.snapshot import Snapshot
from cosmos_exporter.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Pipeline
    "FetchResults",
    "Snapshot",
    "collect_snapshot",
    "fetch_all",
    # Logging
    "configure_logging",
    "get_logger",
]
