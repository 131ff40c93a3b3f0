# src/services/confirmation.py

"""Operator confirmation for each duplicate group before it is merged."""

import logging
from collections.abc import Callable

from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from src.models.duplicate_group import DuplicateGroup
from src.models.merge_report import Decision

logger = logging.getLogger("catalog_dedupe.confirm")

Confirmer = Callable[[DuplicateGroup], Decision]


def auto_confirm(group: DuplicateGroup) -> Decision:
    """Always confirm; used for headless runs."""
    return Decision.CONFIRM


def parse_decision(answer: str) -> Decision:
    """Map a typed answer to a decision; unknown input cancels."""
    cleaned = answer.strip().lower()
    if cleaned in ("yes", "y"):
        return Decision.CONFIRM
    if cleaned in ("skip", "s"):
        return Decision.SKIP
    return Decision.CANCEL


def build_group_table(group: DuplicateGroup) -> Table:
    """Render a duplicate group: the kept record first, then the rest."""
    table = Table(
        title=f"Duplicate group ({group.size} products)",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Action", justify="center")
    table.add_column("ID", style="dim")
    table.add_column("Name", max_width=50)
    table.add_column("URL", overflow="fold", style="dim")
    table.add_column("Created")

    for idx, product in enumerate(group.products):
        action = (
            "[green]KEEP[/green]" if idx == 0 else "[red]DELETE[/red]"
        )
        table.add_row(
            action,
            str(product.id),
            product.name,
            product.url,
            product.created_at.strftime("%Y-%m-%d %H:%M"),
        )
    return table


class PromptConfirmer:
    """Ask the operator about each group on the terminal."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(stderr=True)

    def __call__(self, group: DuplicateGroup) -> Decision:
        self.console.print(build_group_table(group))
        try:
            answer = Prompt.ask(
                "Merge this group? (yes/no/skip)",
                console=self.console,
                default="no",
                show_default=False,
            )
        except EOFError:
            # Closed stdin (piped or exhausted input) cancels the group
            logger.warning(
                "No input available for group keeping %s, cancelling",
                group.keep.id,
            )
            self.console.print("[yellow]No input, cancelling group[/yellow]")
            return Decision.CANCEL
        decision = parse_decision(answer)
        logger.info(
            "Operator answered %r for group keeping %s -> %s",
            answer,
            group.keep.id,
            decision.value,
        )
        return decision
