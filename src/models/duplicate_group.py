# src/models/duplicate_group.py

"""Transient clustering result: products believed to be one item."""

from dataclasses import dataclass

from src.models.product import Product


@dataclass
class DuplicateGroup:
    """An ordered cluster of duplicates, oldest first.

    The first product is the record that survives a merge; the rest
    are superseded and get deleted once their references move over.
    """

    brand_id: str
    products: list[Product]

    def __post_init__(self) -> None:
        if len(self.products) < 2:
            msg = (
                "A duplicate group needs at least 2 products, "
                f"got {len(self.products)}"
            )
            raise ValueError(msg)

    @property
    def keep(self) -> Product:
        """The canonical record (earliest ``created_at``)."""
        return self.products[0]

    @property
    def to_delete(self) -> list[Product]:
        return self.products[1:]

    @property
    def delete_ids(self) -> list[int]:
        return [p.id for p in self.to_delete]

    @property
    def size(self) -> int:
        return len(self.products)
