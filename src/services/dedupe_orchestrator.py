# src/services/dedupe_orchestrator.py

"""Runs detection and merging across the whole catalog, one group at a time."""

import logging
from collections.abc import Callable

from src.filters.deduplicator import ProductDeduplicator
from src.models.duplicate_group import DuplicateGroup
from src.models.merge_report import (
    Decision,
    GroupOutcome,
    GroupStatus,
    RunReport,
)
from src.models.product import Product
from src.services.confirmation import Confirmer, PromptConfirmer, auto_confirm
from src.services.merge_executor import MergeExecutor
from src.storage.catalog_store import BaseCatalogStore

logger = logging.getLogger("catalog_dedupe.orchestrator")

_DECISION_STATUS: dict[Decision, GroupStatus] = {
    Decision.SKIP: GroupStatus.SKIPPED,
    Decision.CANCEL: GroupStatus.CANCELLED,
}


class DedupeOrchestrator:
    """Coordinates loading, clustering, confirmation and merging.

    Strictly sequential: brands are processed one after another and
    each group's decision and writes complete before the next group
    is looked at. Only a failure to list products aborts the run;
    everything else is recorded against its group.
    """

    def __init__(
        self,
        store: BaseCatalogStore,
        confirmer: Confirmer | None = None,
        auto_confirm_all: bool = False,
        deduplicator: ProductDeduplicator | None = None,
        on_outcome: Callable[[DuplicateGroup, GroupOutcome], None] | None = None,
    ) -> None:
        self._store = store
        self._confirmer: Confirmer = (
            auto_confirm
            if auto_confirm_all
            else confirmer or PromptConfirmer()
        )
        self._deduplicator = deduplicator or ProductDeduplicator()
        self._executor = MergeExecutor(store)
        self._on_outcome = on_outcome

    def scan(
        self,
    ) -> tuple[list[Product], dict[str, list[DuplicateGroup]]]:
        """Load the catalog once and cluster it by brand.

        Raises ``StoreReadError`` when the listing fails.
        """
        products = self._store.list_products()
        groups = self._deduplicator.find_duplicate_groups(products)
        return products, groups

    def _process_group(self, group: DuplicateGroup) -> GroupOutcome:
        decision = self._confirmer(group)
        if decision is not Decision.CONFIRM:
            logger.info(
                "Group keeping %s %s by operator",
                group.keep.id,
                decision.value,
            )
            return GroupOutcome(
                brand_id=group.brand_id,
                keep_id=group.keep.id,
                delete_ids=group.delete_ids,
                status=_DECISION_STATUS[decision],
            )

        try:
            return self._executor.merge_group(group)
        except Exception as exc:
            logger.error(
                "Unexpected error merging group keeping %s: %s",
                group.keep.id,
                exc,
                exc_info=True,
            )
            return GroupOutcome(
                brand_id=group.brand_id,
                keep_id=group.keep.id,
                delete_ids=group.delete_ids,
                status=GroupStatus.FAILED,
                error=str(exc),
            )

    def run(self) -> RunReport:
        """Detect and merge duplicates across every brand."""
        products, groups_by_brand = self.scan()
        report = RunReport(
            products_scanned=len(products),
            brands_scanned=len(
                {p.brand_id for p in products}
            ),
        )

        for brand_id, groups in groups_by_brand.items():
            logger.info(
                "Processing brand %s: %d group(s)", brand_id, len(groups)
            )
            for group in groups:
                outcome = self._process_group(group)
                report.record(outcome)
                if self._on_outcome is not None:
                    self._on_outcome(group, outcome)

        logger.info(
            "Run complete: %d group(s), %d merged, %d skipped, "
            "%d cancelled, %d failed",
            report.total_groups,
            report.merged_count,
            report.skipped_count,
            report.cancelled_count,
            report.failed_count,
        )
        return report
