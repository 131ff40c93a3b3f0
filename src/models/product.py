# src/models/product.py

"""Product data model for inter-module data flow."""

from dataclasses import dataclass
from datetime import datetime

from src.filters.normalizer import normalize_name


@dataclass
class Product:
    """A catalog entry under review for deduplication."""

    id: int
    name: str
    brand_id: str
    url: str
    created_at: datetime
    normalized_name: str | None = None

    @property
    def comparable_name(self) -> str:
        """Stored normalised name, or one computed from ``name``."""
        if self.normalized_name:
            return self.normalized_name
        return normalize_name(self.name)
