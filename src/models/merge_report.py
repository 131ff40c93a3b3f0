# src/models/merge_report.py

"""Per-group outcomes and the run-level report of a dedupe run."""

from dataclasses import dataclass, field
from enum import Enum


class Decision(Enum):
    """Operator decision for one duplicate group."""

    CONFIRM = "confirm"
    CANCEL = "cancel"
    SKIP = "skip"


class GroupStatus(Enum):
    """Terminal state of one duplicate group after a run."""

    MERGED = "merged"
    SKIPPED = "skipped"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass
class GroupOutcome:
    """What happened to a single duplicate group."""

    brand_id: str
    keep_id: int
    delete_ids: list[int]
    status: GroupStatus
    references_repointed: dict[int, int] = field(
        default_factory=lambda: dict[int, int]()
    )
    error: str = ""
    phase: str = ""  # "repoint" or "delete" when status is FAILED

    @property
    def total_repointed(self) -> int:
        return sum(self.references_repointed.values())

    def to_dict(self) -> dict[str, object]:
        """Serialise to plain JSON-compatible types."""
        return {
            "brand_id": self.brand_id,
            "status": self.status.value,
            "kept": self.keep_id,
            "deleted": (
                list(self.delete_ids)
                if self.status is GroupStatus.MERGED
                else []
            ),
            "candidates": list(self.delete_ids),
            "references_repointed": {
                str(k): v for k, v in self.references_repointed.items()
            },
            "total_repointed": self.total_repointed,
            "error": self.error,
            "phase": self.phase,
        }


@dataclass
class RunReport:
    """Counters and per-group detail accumulated over a whole run."""

    products_scanned: int = 0
    brands_scanned: int = 0
    outcomes: list[GroupOutcome] = field(
        default_factory=lambda: list[GroupOutcome]()
    )

    def record(self, outcome: GroupOutcome) -> None:
        self.outcomes.append(outcome)

    def _count(self, status: GroupStatus) -> int:
        return sum(1 for o in self.outcomes if o.status is status)

    @property
    def total_groups(self) -> int:
        return len(self.outcomes)

    @property
    def merged_count(self) -> int:
        return self._count(GroupStatus.MERGED)

    @property
    def skipped_count(self) -> int:
        return self._count(GroupStatus.SKIPPED)

    @property
    def cancelled_count(self) -> int:
        return self._count(GroupStatus.CANCELLED)

    @property
    def failed_count(self) -> int:
        return self._count(GroupStatus.FAILED)

    @property
    def not_merged_count(self) -> int:
        """Groups left untouched or incomplete for any reason."""
        return self.total_groups - self.merged_count

    @property
    def products_deleted(self) -> int:
        return sum(
            len(o.delete_ids)
            for o in self.outcomes
            if o.status is GroupStatus.MERGED
        )

    def to_dict(self) -> dict[str, object]:
        """Serialise the full report for logging or saving to disk."""
        return {
            "products_scanned": self.products_scanned,
            "brands_scanned": self.brands_scanned,
            "total_groups": self.total_groups,
            "merged": self.merged_count,
            "skipped": self.skipped_count,
            "cancelled": self.cancelled_count,
            "failed": self.failed_count,
            "products_deleted": self.products_deleted,
            "groups": [o.to_dict() for o in self.outcomes],
        }
