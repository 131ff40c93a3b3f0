# src/filters/deduplicator.py

"""Within-brand duplicate clustering by URL and fuzzy name matching."""

import logging
from dataclasses import dataclass

from src.config.settings import Settings
from src.filters.normalizer import normalize_url
from src.filters.similarity import similarity
from src.models.duplicate_group import DuplicateGroup
from src.models.product import Product

logger = logging.getLogger("catalog_dedupe.filters")


@dataclass
class SimilarPair:
    """Two same-brand products whose names score above the threshold."""

    brand_id: str
    first: Product
    second: Product
    similarity: float


class ProductDeduplicator:
    """Group near-duplicate products using URL equality and name similarity.

    Clustering is anchor-based: every candidate is compared with the
    first unprocessed product of a group only, never with members that
    joined later. A product similar to a member but not to the anchor
    stays out of that group, so weak chains of drifting names are
    never merged through an intermediate match.
    """

    def __init__(self, threshold: float | None = None) -> None:
        self.threshold: float = (
            Settings.NAME_SIMILARITY_THRESHOLD
            if threshold is None
            else threshold
        )

    def is_duplicate(self, anchor: Product, candidate: Product) -> bool:
        """Return True when *candidate* matches *anchor*."""
        if normalize_url(anchor.url) == normalize_url(candidate.url):
            return True
        score = similarity(
            anchor.comparable_name, candidate.comparable_name
        )
        return score >= self.threshold

    @staticmethod
    def partition_by_brand(
        products: list[Product],
    ) -> dict[str, list[Product]]:
        """Split products by ``brand_id``, preserving input order."""
        partitions: dict[str, list[Product]] = {}
        for product in products:
            partitions.setdefault(product.brand_id, []).append(product)
        return partitions

    def group_duplicates(
        self, products: list[Product],
    ) -> list[DuplicateGroup]:
        """Cluster one brand partition into duplicate groups.

        *products* must already be ordered by ``created_at`` ascending.
        Each emitted group is sorted oldest first; singletons are
        dropped.
        """
        groups: list[DuplicateGroup] = []
        processed: set[int] = set()

        for i, anchor in enumerate(products):
            if anchor.id in processed:
                continue

            members = [anchor]
            processed.add(anchor.id)

            for candidate in products[i + 1:]:
                if candidate.id in processed:
                    continue
                if self.is_duplicate(anchor, candidate):
                    members.append(candidate)
                    processed.add(candidate.id)

            if len(members) > 1:
                members.sort(key=lambda p: p.created_at)
                groups.append(
                    DuplicateGroup(
                        brand_id=anchor.brand_id, products=members,
                    )
                )

        return groups

    def find_duplicate_groups(
        self, products: list[Product],
    ) -> dict[str, list[DuplicateGroup]]:
        """Cluster every brand partition; brands without groups are omitted."""
        result: dict[str, list[DuplicateGroup]] = {}
        for brand_id, brand_products in self.partition_by_brand(
            products
        ).items():
            if len(brand_products) < 2:
                continue
            groups = self.group_duplicates(brand_products)
            if groups:
                result[brand_id] = groups
                logger.info(
                    "Brand %s: %d duplicate group(s) among %d products",
                    brand_id,
                    len(groups),
                    len(brand_products),
                )
        return result

    def find_similar_pairs(
        self, products: list[Product],
    ) -> list[SimilarPair]:
        """List every same-brand pair whose names meet the threshold.

        Read-only audit view: pairs overlap freely and URLs are not
        considered.
        """
        pairs: list[SimilarPair] = []
        for brand_id, brand_products in self.partition_by_brand(
            products
        ).items():
            for i, first in enumerate(brand_products):
                for second in brand_products[i + 1:]:
                    score = similarity(
                        first.comparable_name, second.comparable_name
                    )
                    if score >= self.threshold:
                        pairs.append(
                            SimilarPair(
                                brand_id=brand_id,
                                first=first,
                                second=second,
                                similarity=score,
                            )
                        )
        if pairs:
            logger.info("Found %d similar name pairs", len(pairs))
        return pairs
