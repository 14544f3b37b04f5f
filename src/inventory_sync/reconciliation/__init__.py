"""
Reconciliation module for the inventory sync system.

This module matches variants across both catalogs, detects divergence
and applies corrections to the target catalog.
"""

from .change_detector import build_update_batch, detect_change, detect_changes
from .matcher import match_variants
from .product_updater import ProductUpdater, merge_updates
from .sync_manager import SyncManager

__all__ = [
    "ProductUpdater",
    "SyncManager",
    "build_update_batch",
    "detect_change",
    "detect_changes",
    "match_variants",
    "merge_updates",
]
