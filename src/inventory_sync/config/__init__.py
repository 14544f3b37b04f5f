"""
Configuration module for the inventory sync system.
"""

from .loader import ConfigLoader
from .models import (
    FetchResult,
    FieldPolicy,
    InventorySyncConfig,
    LoggingConfig,
    ProductUpdateResult,
    RoundSummary,
)

__all__ = [
    "ConfigLoader",
    "FetchResult",
    "FieldPolicy",
    "InventorySyncConfig",
    "LoggingConfig",
    "ProductUpdateResult",
    "RoundSummary",
]
