"""
Exception types for the inventory sync system.

Catalog errors are raised by the providers and converted into result
objects at the fetch and update boundaries. Only configuration errors
are allowed to stop the process.
"""


class InventorySyncError(Exception):
    """Base exception for all inventory sync errors."""


class ConfigurationError(InventorySyncError):
    """Raised when configuration is missing or invalid."""


class CatalogError(InventorySyncError):
    """Base exception for failures talking to a catalog."""


class TransportError(CatalogError):
    """Raised on network failures and non-2xx HTTP responses."""

    def __init__(self, message: str, status_code: int = None, detail=None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class DataShapeError(CatalogError):
    """Raised when a catalog payload is missing expected fields or has the wrong type."""
