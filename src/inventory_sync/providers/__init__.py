"""
Providers module for the inventory sync system.

This module provides the catalog providers for the source and target systems.
"""

from .base_provider import BaseProvider
from .source_provider import SourceCatalogProvider
from .target_provider import TargetCatalogProvider

__all__ = [
    "BaseProvider",
    "SourceCatalogProvider",
    "TargetCatalogProvider",
]
