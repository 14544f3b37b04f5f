"""
Change detection and update batching.

Compares matched variant pairs field by field under exact numeric
equality and groups the resulting corrections by target product.
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..config.models import FieldPolicy
from ..models import MatchedPair, PendingUpdate, RecordId
from ..utils import to_decimal, to_json_number, truncate

ZERO = Decimal(0)

UpdateBatch = Dict[RecordId, List[PendingUpdate]]


def _corrected_quantity(value: Any, policy: FieldPolicy) -> Optional[Decimal]:
    quantity = to_decimal(value)
    if quantity is None:
        return None
    if policy == FieldPolicy.QUANTITY_ONLY:
        quantity = truncate(quantity)
    # Negative stock adjustments in the source are never written downstream
    return max(ZERO, quantity)


def _differs(corrected: Optional[Decimal], current: Any) -> bool:
    if corrected is None:
        return False
    return corrected != to_decimal(current)


def detect_change(
    pair: MatchedPair, policy: FieldPolicy = FieldPolicy.FULL
) -> Optional[PendingUpdate]:
    """
    Decide whether a matched pair needs an update.

    Args:
        pair: Matched source/target variants
        policy: Which fields are compared and written

    Returns:
        PendingUpdate with the corrected values, or None when the target
        already agrees with the source
    """
    corrected = {"quantity": _corrected_quantity(pair.source.quantity, policy)}
    if policy == FieldPolicy.FULL:
        corrected["price"] = to_decimal(pair.source.price)
        corrected["expense"] = to_decimal(pair.source.expense)

    # Compare the value as it will be written, so the next round sees it as equal
    corrected = {
        field: None if value is None else to_decimal(to_json_number(value))
        for field, value in corrected.items()
    }

    if not any(
        _differs(value, getattr(pair.target, field)) for field, value in corrected.items()
    ):
        return None

    return PendingUpdate(
        variant_id=pair.target.id,
        **{
            field: to_json_number(value)
            for field, value in corrected.items()
            if value is not None
        },
    )


def detect_changes(
    pairs: Sequence[MatchedPair], policy: FieldPolicy = FieldPolicy.FULL
) -> List[Tuple[RecordId, PendingUpdate]]:
    """
    Run change detection over all matched pairs.

    Returns:
        (target product id, PendingUpdate) for every pair that needs an update
    """
    changes = []
    for pair in pairs:
        update = detect_change(pair, policy)
        if update is not None:
            changes.append((pair.product_id, update))
    return changes


def build_update_batch(changes: Sequence[Tuple[RecordId, PendingUpdate]]) -> UpdateBatch:
    """Group pending updates by target product id, keeping detection order."""
    batch: UpdateBatch = {}
    for product_id, update in changes:
        batch.setdefault(product_id, []).append(update)
    return batch
