# src/config/settings.py

"""Central configuration for the catalog_dedupe engine."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean flag from the environment."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    """Central configuration for the catalog_dedupe engine."""

    # --- Matching policy ---
    NAME_SIMILARITY_THRESHOLD: float = 0.85  # Min name score to group

    # --- Confirmation ---
    AUTO_CONFIRM: bool = _env_flag("DEDUPE_AUTO_CONFIRM")

    # --- Dependent tables (table, foreign key column) ---
    REFERENCE_TABLES: list[tuple[str, str]] = [
        ("user_recommendations", "product_id"),
    ]

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    DB_PATH: Path = Path(
        os.getenv("CATALOG_DB_PATH", str(BASE_DIR / "data" / "catalog.db"))
    )
    REPORTS_DIR: Path = BASE_DIR / "reports"
    LOGS_DIR: Path = BASE_DIR / "logs"
