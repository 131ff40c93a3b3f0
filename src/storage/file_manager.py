# src/storage/file_manager.py

"""Handles saving dedupe run reports to disk."""

import json
import logging
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings
from src.models.merge_report import RunReport

logger = logging.getLogger("catalog_dedupe.storage")


class FileManager:
    """Handles saving dedupe run reports to disk."""

    def __init__(self, reports_dir: Path | None = None) -> None:
        self.reports_dir: Path = reports_dir or Settings.REPORTS_DIR
        self.reports_dir.mkdir(parents=True, exist_ok=True)
        logger.debug("FileManager initialised, reports_dir=%s", self.reports_dir)

    def save_report(self, report: RunReport) -> Path:
        """Save a run report to a timestamped JSON file."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = self.reports_dir / f"dedupe_{timestamp}.json"

        data = {
            "generated_at": datetime.now().isoformat(timespec="seconds"),
            **report.to_dict(),
        }

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

        logger.info(
            "Saved report for %d group(s) to %s",
            report.total_groups,
            filepath,
        )
        return filepath
