"""
Configuration models for the inventory sync system using Pydantic.

This module defines the configuration models that validate and parse
the YAML configuration file, plus the result models exchanged between
the catalog providers, the product updater and the sync manager.
"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class FieldPolicy(str, Enum):
    """Which variant fields are compared and written."""

    FULL = "full"
    QUANTITY_ONLY = "quantity_only"


class SecretConfig(BaseModel):
    """Configuration for a secret given inline or through an environment variable."""

    value: Optional[str] = None
    env_var: Optional[str] = None

    @model_validator(mode="after")
    def validate_secret_config(self):
        """Validate that the secret has a source."""
        if not self.value and not self.env_var:
            raise ValueError("A secret needs either 'value' or 'env_var'")
        return self


class SourceCatalogConfig(BaseModel):
    """Configuration for the source (ERP) catalog."""

    url: str

    @field_validator("url")
    @classmethod
    def validate_url(cls, v):
        """Validate source URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid source url: {v}")
        return v


class TargetCatalogConfig(BaseModel):
    """Configuration for the target (storefront) catalog."""

    base_url: str
    api_key: SecretConfig
    page_size: int = Field(default=20, ge=1, le=500)
    join: str = Field(default="Variations.Props,Variants.VariationProps")
    max_pages: Optional[int] = Field(default=None, ge=1)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v):
        """Validate target base URL and drop any trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid target base_url: {v}")
        return v.rstrip("/")


class SyncConfig(BaseModel):
    """Configuration for the sync loop."""

    interval_seconds: float = Field(default=20, ge=0)
    field_policy: FieldPolicy = FieldPolicy.FULL
    dry_run: bool = False


class HttpConfig(BaseModel):
    """Configuration for HTTP calls."""

    timeout_seconds: float = Field(default=30, gt=0)


class LoggingConfig(BaseModel):
    """Configuration for logging settings."""

    level: str = Field(default="INFO")
    format: str = Field(default="text")  # "text" or "json"
    log_to_file: bool = Field(default=False)
    log_file_path: Optional[str] = None

    @field_validator("level")
    @classmethod
    def validate_level(cls, v):
        """Validate logging level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(
                f"Invalid logging level: {v}. Must be one of {valid_levels}"
            )
        return v.upper()

    @field_validator("format")
    @classmethod
    def validate_format(cls, v):
        """Validate logging format."""
        valid_formats = ["text", "json"]
        if v.lower() not in valid_formats:
            raise ValueError(
                f"Invalid logging format: {v}. Must be one of {valid_formats}"
            )
        return v.lower()

    @model_validator(mode="after")
    def validate_log_file(self):
        """Require a file path when logging to a file."""
        if self.log_to_file and not self.log_file_path:
            raise ValueError("log_file_path is required when log_to_file is enabled")
        return self


class InventorySyncConfig(BaseModel):
    """Root configuration model for the inventory sync system."""

    version: str = "1.0"
    source: SourceCatalogConfig
    target: TargetCatalogConfig
    sync: SyncConfig = Field(default_factory=SyncConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("version")
    @classmethod
    def validate_version(cls, v):
        """Validate configuration version."""
        if v != "1.0":
            raise ValueError(f"Unsupported configuration version: {v}")
        return v


class FetchResult(BaseModel):
    """Model for the outcome of a catalog fetch."""

    catalog: str  # source, target
    status: str  # success, failed
    products: List[Any] = Field(default_factory=list)
    pages_fetched: int = 0
    error_message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"


class ProductUpdateResult(BaseModel):
    """Model for the outcome of one product's fetch-modify-write cycle."""

    product_id: str
    status: str  # success, failed, skipped, dry_run
    requested_variants: int = 0
    modified_variants: List[str] = Field(default_factory=list)
    error_message: Optional[str] = None


class RoundSummary(BaseModel):
    """Model for sync round summary logging."""

    run_id: str
    start_time: str
    end_time: Optional[str] = None
    duration: Optional[float] = None
    status: str  # started, skipped, completed, completed_with_failures, failed
    source_products: int = 0
    target_products: int = 0
    matched_pairs: int = 0
    products_to_update: int = 0
    successful_updates: int = 0
    failed_updates: int = 0
    skipped_updates: int = 0
    summary: Optional[str] = None
