"""
Variant matching between the source and target catalogs.

Variants are linked through the external code both systems share
(source ``slug``, target ``taager_code``); internal ids of either
system play no part in matching.
"""

from typing import Dict, List, Sequence, Set, Tuple

from ..models import MatchedPair, SourceProduct, TargetProduct, TargetVariant


def _index_target_variants(
    target_products: Sequence[TargetProduct],
) -> Dict[str, List[Tuple[TargetProduct, TargetVariant]]]:
    """Map each code to the first variant carrying it in every target product."""
    index: Dict[str, List[Tuple[TargetProduct, TargetVariant]]] = {}
    for product in target_products:
        seen: Set[str] = set()
        for variant in product.variants:
            code = variant.taager_code
            if not code or code in seen:
                continue
            seen.add(code)
            index.setdefault(code, []).append((product, variant))
    return index


def match_variants(
    source_products: Sequence[SourceProduct],
    target_products: Sequence[TargetProduct],
) -> List[MatchedPair]:
    """
    Match source variants to target variants by external code.

    Every source variant with a code is compared against each target
    product; within a product the first variant with an equal code is
    used. A target variant is matched at most once: when several source
    variants share a code, the first one in source order wins.
    Unmatched variants on either side are ignored.

    Args:
        source_products: Products from the source catalog
        target_products: Products from the target catalog

    Returns:
        Matched pairs in source iteration order
    """
    index = _index_target_variants(target_products)
    matched: Set[Tuple[str, str]] = set()
    pairs: List[MatchedPair] = []

    for source_product in source_products:
        for source_variant in source_product.variants:
            code = source_variant.slug
            if not code:
                continue

            for target_product, target_variant in index.get(code, []):
                key = (str(target_product.id), str(target_variant.id))
                if key in matched:
                    continue
                matched.add(key)
                pairs.append(
                    MatchedPair(
                        product_id=target_product.id,
                        source=source_variant,
                        target=target_variant,
                    )
                )

    return pairs
