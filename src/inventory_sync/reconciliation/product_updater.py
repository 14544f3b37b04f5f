"""
Product updater for the target catalog.

The target API only accepts whole-document writes, so each product goes
through one fetch-modify-write cycle per sync round.
"""

from typing import Any, Dict, List, Sequence

from ..audit.logger import SyncLogger
from ..config.models import ProductUpdateResult
from ..exceptions import CatalogError
from ..models import PendingUpdate, RecordId
from ..providers.target_provider import TargetCatalogProvider


def merge_updates(document: Dict[str, Any], updates: Sequence[PendingUpdate]) -> List[str]:
    """
    Apply pending updates to a product document in place.

    Only the fields carried by each update are overwritten. Variant ids
    are compared as strings.

    Args:
        document: Full product document as returned by the target API
        updates: Pending updates for variants of this product

    Returns:
        Ids of the variants that were modified
    """
    variants = document.get("variants")
    if not isinstance(variants, list):
        return []

    by_id = {}
    for variant in variants:
        if isinstance(variant, dict) and "id" in variant:
            by_id.setdefault(str(variant["id"]), variant)

    modified = []
    for update in updates:
        variant = by_id.get(str(update.variant_id))
        if variant is None:
            continue
        variant.update(update.changed_fields())
        modified.append(str(update.variant_id))
    return modified


class ProductUpdater:
    """Applies pending updates to target products one product at a time."""

    def __init__(
        self,
        provider: TargetCatalogProvider,
        logger: SyncLogger,
        dry_run: bool = False,
    ):
        """
        Initialize the product updater.

        Args:
            provider: Target catalog provider used for reads and writes
            logger: Logger instance
            dry_run: Fetch and merge but skip the write
        """
        self.provider = provider
        self.logger = logger
        self.dry_run = dry_run

    def apply(self, product_id: RecordId, updates: Sequence[PendingUpdate]) -> ProductUpdateResult:
        """
        Run the fetch-modify-write cycle for one product.

        Failures are logged and returned as a failed result; nothing is
        retried within the round.
        """
        result = ProductUpdateResult(
            product_id=str(product_id),
            status="skipped",
            requested_variants=len(updates),
        )
        if not updates:
            return result

        try:
            document = self.provider.get_product(product_id)
        except CatalogError as e:
            return self._failed(result, f"Failed to fetch product {product_id}: {e}")

        result.modified_variants = merge_updates(document, updates)
        if not result.modified_variants:
            self.logger.warning(
                f"Product {product_id}: none of {len(updates)} variant(s) found, skipping write",
                extra={"product_id": str(product_id)},
            )
            return result

        if self.dry_run:
            self.logger.info(
                f"Dry run: would update product {product_id} "
                f"(variants {', '.join(result.modified_variants)})",
                extra={"product_id": str(product_id)},
            )
            result.status = "dry_run"
            return result

        try:
            self.provider.replace_product(product_id, document)
        except CatalogError as e:
            return self._failed(result, f"Failed to update product {product_id}: {e}")

        self.logger.info(
            f"Updated product {product_id} ({len(result.modified_variants)} variant(s))",
            extra={"product_id": str(product_id)},
        )
        result.status = "success"
        return result

    def _failed(self, result: ProductUpdateResult, error_msg: str) -> ProductUpdateResult:
        self.logger.error(error_msg, extra={"product_id": result.product_id})
        result.status = "failed"
        result.error_message = error_msg
        return result
