# src/services/merge_executor.py

"""Two-phase consolidation of a duplicate group into one record."""

import logging

from src.models.duplicate_group import DuplicateGroup
from src.models.merge_report import GroupOutcome, GroupStatus
from src.models.product import Product
from src.storage.catalog_store import BaseCatalogStore, StoreWriteError

logger = logging.getLogger("catalog_dedupe.merge")


class MergeExecutor:
    """Repoint references to the kept product, then delete the rest.

    Phase 1 (repoint) is idempotent and must succeed for every
    duplicate before phase 2 (batch delete) is attempted. Phase 1 runs
    inside one store transaction, so a failed repoint rolls back the
    whole group on stores that support it. A failed delete
    leaves references already moved, which is harmless and picked up
    again by the next run.
    """

    def __init__(self, store: BaseCatalogStore) -> None:
        self._store = store

    def merge(
        self,
        keep: Product,
        duplicates: list[Product],
        brand_id: str = "",
    ) -> GroupOutcome:
        """Fold *duplicates* into *keep* and report the outcome."""
        delete_ids = [p.id for p in duplicates]
        outcome = GroupOutcome(
            brand_id=brand_id or keep.brand_id,
            keep_id=keep.id,
            delete_ids=delete_ids,
            status=GroupStatus.FAILED,
        )

        # ── Phase 1: repoint references ──────────────────
        repointed: dict[int, int] = {}
        try:
            with self._store.transaction():
                for dup in duplicates:
                    repointed[dup.id] = self._store.repoint_references(
                        dup.id, keep.id
                    )
        except StoreWriteError as exc:
            logger.error(
                "Repointing group keeping %s failed: %s",
                keep.id,
                exc,
            )
            outcome.error = str(exc)
            outcome.phase = "repoint"
            return outcome

        outcome.references_repointed = repointed
        for dup_id, count in repointed.items():
            logger.info(
                "Updated %d reference(s) from product %s",
                count,
                dup_id,
            )

        # ── Phase 2: delete superseded products ──────────
        try:
            self._store.delete_products(delete_ids)
        except StoreWriteError as exc:
            logger.error(
                "Delete of %s failed after repointing to %s: %s",
                delete_ids,
                keep.id,
                exc,
            )
            outcome.error = str(exc)
            outcome.phase = "delete"
            return outcome

        outcome.status = GroupStatus.MERGED
        logger.info(
            "Merged %d duplicate(s) into product %s (%d references moved)",
            len(delete_ids),
            keep.id,
            outcome.total_repointed,
        )
        return outcome

    def merge_group(self, group: DuplicateGroup) -> GroupOutcome:
        return self.merge(group.keep, group.to_delete, group.brand_id)

    def merge_pair(self, keep_id: int, delete_id: int) -> GroupOutcome:
        """Merge one operator-chosen duplicate into one chosen survivor.

        Raises ``ValueError`` when the ids are equal or either product
        does not exist.
        """
        if keep_id == delete_id:
            msg = "Product IDs must be different"
            raise ValueError(msg)

        found = {
            p.id: p
            for p in self._store.get_products([keep_id, delete_id])
        }
        missing = [i for i in (keep_id, delete_id) if i not in found]
        if missing:
            msg = f"Could not find product(s): {missing}"
            raise ValueError(msg)

        return self.merge(found[keep_id], [found[delete_id]])
