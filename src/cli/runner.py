# src/cli/runner.py

"""Headless and interactive CLI runners for the dedupe engine."""

import logging
from pathlib import Path

from rich.console import Console
from rich.prompt import Confirm
from rich.table import Table

from src.filters.deduplicator import ProductDeduplicator
from src.models.duplicate_group import DuplicateGroup
from src.models.merge_report import GroupOutcome, GroupStatus, RunReport
from src.services.confirmation import PromptConfirmer, build_group_table
from src.services.dedupe_orchestrator import DedupeOrchestrator
from src.services.merge_executor import MergeExecutor
from src.storage.catalog_store import SqliteCatalogStore, StoreReadError
from src.storage.file_manager import FileManager

logger = logging.getLogger("catalog_dedupe.cli")

# Stderr console for status messages
_err = Console(stderr=True)

_STATUS_STYLE: dict[GroupStatus, str] = {
    GroupStatus.MERGED: "[green]✓ Merged[/green]",
    GroupStatus.SKIPPED: "[yellow]⏭ Skipped[/yellow]",
    GroupStatus.CANCELLED: "[yellow]✗ Cancelled[/yellow]",
    GroupStatus.FAILED: "[red]✗ Failed[/red]",
}


def _print_outcome(group: DuplicateGroup, outcome: GroupOutcome) -> None:
    """Report one group's outcome as soon as it is known."""
    _err.print(
        f"[bold]Brand {group.brand_id}[/bold]: keep {group.keep.id},"
        f" delete {', '.join(str(i) for i in group.delete_ids)}"
        f"  {_STATUS_STYLE[outcome.status]}"
    )
    if outcome.status is GroupStatus.MERGED:
        for dup_id, count in outcome.references_repointed.items():
            _err.print(
                f"[dim]  Updated {count} reference(s) from product {dup_id}[/dim]"
            )
        _err.print(
            f"[dim]  Deleted {len(outcome.delete_ids)} duplicate(s),"
            f" kept product {outcome.keep_id}[/dim]"
        )
    elif outcome.status is GroupStatus.FAILED:
        phase = f" during {outcome.phase}" if outcome.phase else ""
        _err.print(f"[red]  Error{phase}: {outcome.error}[/red]")


def _print_summary(report: RunReport) -> None:
    """Render the end-of-run summary table."""
    table = Table(
        title="Dedupe Summary",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Metric", style="bold")
    table.add_column("Count", justify="right")

    table.add_row("Products scanned", str(report.products_scanned))
    table.add_row("Brands scanned", str(report.brands_scanned))
    table.add_row("Duplicate groups found", str(report.total_groups))
    table.add_row("Groups merged", f"[green]{report.merged_count}[/green]")
    table.add_row("Groups skipped", str(report.skipped_count))
    table.add_row("Groups cancelled", str(report.cancelled_count))
    table.add_row("Groups failed", f"[red]{report.failed_count}[/red]")
    table.add_row("Groups not merged", str(report.not_merged_count))
    table.add_row("Products deleted", str(report.products_deleted))

    _err.print(table)

    if report.merged_count:
        _err.print("[green]✓ Deduplication complete![/green]")
        _err.print("[bold]Next steps:[/bold]")
        _err.print("  1. Run with --find again to verify no duplicates remain")
        _err.print(
            "  2. If none remain, add the unique constraint on products"
        )
    else:
        _err.print("[dim]No changes made[/dim]")


def run_dedupe(
    db_path: Path | None = None,
    auto_confirm: bool = False,
    save_report: bool = False,
) -> int:
    """Find and merge duplicates; return an exit code (0=ok, 1=fail).

    Per-group skips and failures do not affect the exit code; only a
    failure to read the catalog does.
    """
    store = SqliteCatalogStore(db_path=db_path)
    orchestrator = DedupeOrchestrator(
        store,
        confirmer=PromptConfirmer(_err),
        auto_confirm_all=auto_confirm,
        on_outcome=_print_outcome,
    )

    mode = "auto-confirm" if auto_confirm else "interactive"
    _err.print(
        f"[bold]Duplicate product finder & merger[/bold] [dim]({mode})[/dim]"
    )

    try:
        report = orchestrator.run()
    except StoreReadError as exc:
        logger.critical("Aborting run: %s", exc, exc_info=True)
        _err.print(f"[red]Error fetching products: {exc}[/red]")
        return 1
    finally:
        store.close()

    _print_summary(report)

    if save_report:
        try:
            path = FileManager().save_report(report)
            _err.print(f"[dim]Saved report → {path}[/dim]")
        except OSError as exc:
            logger.error("Report save failed: %s", exc, exc_info=True)
            _err.print(f"[red]Report save failed: {exc}[/red]")

    return 0


def run_find_duplicates(db_path: Path | None = None) -> int:
    """Print every same-brand name pair above the threshold (read-only)."""
    store = SqliteCatalogStore(db_path=db_path)
    try:
        products = store.list_products()
    except StoreReadError as exc:
        logger.critical("Aborting scan: %s", exc, exc_info=True)
        _err.print(f"[red]Error fetching products: {exc}[/red]")
        return 1
    finally:
        store.close()

    _err.print(f"[bold]Total products:[/bold] {len(products)}")
    pairs = ProductDeduplicator().find_similar_pairs(products)
    if not pairs:
        _err.print("[green]✓ No duplicate products found![/green]")
        return 0

    table = Table(
        title=f"Potential duplicate pairs ({len(pairs)})",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Brand", style="magenta")
    table.add_column("Similarity", justify="right", style="green")
    table.add_column("ID", style="dim")
    table.add_column("Name", max_width=40)
    table.add_column("Normalized", style="dim", max_width=40)
    table.add_column("Created")

    for pair in pairs:
        for idx, product in enumerate((pair.first, pair.second)):
            table.add_row(
                pair.brand_id if idx == 0 else "",
                f"{pair.similarity * 100:.1f}%" if idx == 0 else "",
                str(product.id),
                product.name,
                product.comparable_name,
                product.created_at.strftime("%Y-%m-%d"),
            )

    Console().print(table)
    return 0


def run_merge_pair(
    keep_id: int,
    delete_id: int,
    db_path: Path | None = None,
    auto_confirm: bool = False,
) -> int:
    """Manually merge one product into an operator-chosen survivor."""
    store = SqliteCatalogStore(db_path=db_path)
    try:
        found = {p.id: p for p in store.get_products([keep_id, delete_id])}
        if keep_id != delete_id and len(found) == 2:
            preview = DuplicateGroup(
                brand_id=found[keep_id].brand_id,
                products=[found[keep_id], found[delete_id]],
            )
            _err.print(build_group_table(preview))
            if not auto_confirm and not Confirm.ask(
                "Are you sure you want to proceed?", console=_err,
            ):
                _err.print("[yellow]✗ Merge cancelled[/yellow]")
                return 0

        outcome = MergeExecutor(store).merge_pair(keep_id, delete_id)
    except (ValueError, StoreReadError) as exc:
        logger.error("Manual merge rejected: %s", exc)
        _err.print(f"[red]{exc}[/red]")
        return 1
    finally:
        store.close()

    if outcome.status is not GroupStatus.MERGED:
        _err.print(
            f"[red]✗ Merge failed during {outcome.phase}: {outcome.error}[/red]"
        )
        return 1
    _err.print(
        f"[green]✓ Products merged: kept {keep_id},"
        f" moved {outcome.total_repointed} reference(s)[/green]"
    )
    return 0
