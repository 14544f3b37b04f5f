"""
Catalog record models for the inventory sync system.

Only the fields used for matching and change detection are modelled;
unknown fields are ignored. Numeric fields keep their raw payload value
and are coerced by the change detector.
"""

from typing import Any, List, Optional, Union

from pydantic import BaseModel, Field, field_validator

RecordId = Union[int, str]


def _normalize_code(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    code = str(value).strip()
    return code or None


def _none_to_list(value: Any) -> Any:
    return [] if value is None else value


class SourceVariant(BaseModel):
    """Variant record from the source (ERP) catalog."""

    slug: Optional[str] = None
    quantity: Any = None
    price: Any = None
    expense: Any = None

    @field_validator("slug", mode="before")
    @classmethod
    def normalize_slug(cls, v):
        """Strip the matching code; blank codes become None."""
        return _normalize_code(v)


class SourceProduct(BaseModel):
    """Product record from the source (ERP) catalog."""

    variants: List[SourceVariant] = Field(default_factory=list)

    @field_validator("variants", mode="before")
    @classmethod
    def normalize_variants(cls, v):
        """Treat a null variant list as empty."""
        return _none_to_list(v)


class TargetVariant(BaseModel):
    """Variant record from the target (storefront) catalog."""

    id: RecordId
    taager_code: Optional[str] = None
    quantity: Any = None
    price: Any = None
    expense: Any = None

    @field_validator("taager_code", mode="before")
    @classmethod
    def normalize_taager_code(cls, v):
        """Strip the matching code; blank codes become None."""
        return _normalize_code(v)


class TargetProduct(BaseModel):
    """Product record from the target (storefront) catalog."""

    id: RecordId
    variants: List[TargetVariant] = Field(default_factory=list)

    @field_validator("variants", mode="before")
    @classmethod
    def normalize_variants(cls, v):
        """Treat a null variant list as empty and drop variants that cannot be addressed."""
        v = _none_to_list(v)
        if not isinstance(v, list):
            return v
        return [
            variant
            for variant in v
            if not isinstance(variant, dict) or variant.get("id") is not None
        ]


class MatchedPair(BaseModel):
    """A source variant linked to a target variant by their shared external code."""

    product_id: RecordId
    source: SourceVariant
    target: TargetVariant


class PendingUpdate(BaseModel):
    """Corrected values for one target variant.

    Fields left as None are not written to the target.
    """

    variant_id: RecordId
    quantity: Optional[Union[int, float]] = None
    price: Optional[Union[int, float]] = None
    expense: Optional[Union[int, float]] = None

    def changed_fields(self) -> dict:
        return {
            name: getattr(self, name)
            for name in ("quantity", "price", "expense")
            if getattr(self, name) is not None
        }
