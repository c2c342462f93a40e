"""
Market Snapshot Service

CONTRACT:
    Input:  MarketDataRequest
    Output: MarketSnapshot
"""

from app.services.snapshot.assembler import assemble_snapshot
from app.services.snapshot.service import (
    MarketSnapshotService,
    get_market_snapshot_service,
)

__all__ = [
    "assemble_snapshot",
    "MarketSnapshotService",
    "get_market_snapshot_service",
]
