# src/storage/catalog_store.py

"""Product and reference store consumed by the dedupe engine."""

import logging
import sqlite3
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path

from src.config.settings import Settings
from src.models.product import Product

logger = logging.getLogger("catalog_dedupe.store")

_SCHEMA = """\
CREATE TABLE IF NOT EXISTS products (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    name            TEXT    NOT NULL,
    normalized_name TEXT,
    brand_id        TEXT    NOT NULL,
    url             TEXT    NOT NULL,
    created_at      TEXT    NOT NULL
);

CREATE TABLE IF NOT EXISTS user_recommendations (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id    TEXT    NOT NULL DEFAULT '',
    product_id INTEGER NOT NULL REFERENCES products(id),
    created_at TEXT    NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_products_brand_created
    ON products(brand_id, created_at);

CREATE INDEX IF NOT EXISTS idx_recommendations_product
    ON user_recommendations(product_id);
"""

_PRODUCT_COLUMNS = "id, name, normalized_name, brand_id, url, created_at"


class StoreError(Exception):
    """Base class for backing store failures."""


class StoreReadError(StoreError):
    """The product listing could not be retrieved. Fatal to a run."""


class StoreWriteError(StoreError):
    """A repoint or delete failed. Contained to one group."""


def parse_timestamp(value: str | datetime) -> datetime:
    """Parse a stored timestamp; naive values are taken as UTC."""
    parsed = (
        value if isinstance(value, datetime)
        else datetime.fromisoformat(value)
    )
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class BaseCatalogStore(ABC):
    """Operations the dedupe engine needs from a backing store."""

    @abstractmethod
    def list_products(self) -> list[Product]:
        """All products ordered by ``brand_id`` then ``created_at``."""

    @abstractmethod
    def get_products(self, ids: list[int]) -> list[Product]:
        """Fetch specific products; missing ids are simply absent."""

    @abstractmethod
    def repoint_references(self, old_id: int, new_id: int) -> int:
        """Move every reference from *old_id* to *new_id*.

        Returns the number of rows updated. Re-running with the same
        arguments is a no-op.
        """

    @abstractmethod
    def delete_products(self, ids: list[int]) -> bool:
        """Delete the given products in one batch."""

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Group several writes so they commit or roll back together.

        Stores without transactions keep committing per call.
        """
        yield

    def close(self) -> None:
        """Release any held resources."""


class SqliteCatalogStore(BaseCatalogStore):
    """SQLite-backed catalog with product references.

    Write calls commit individually unless they run inside
    ``transaction()``, which commits or rolls back the whole block.
    A merge moves every reference in one such block, then deletes the
    superseded rows, so a crash between the two leaves a resumable
    state.
    Foreign keys are enforced, so a product that still has references
    cannot be deleted.
    """

    def __init__(
        self,
        db_path: Path | None = None,
        reference_tables: list[tuple[str, str]] | None = None,
    ) -> None:
        path = db_path or Settings.DB_PATH
        path.parent.mkdir(parents=True, exist_ok=True)
        self._reference_tables: list[tuple[str, str]] = (
            reference_tables
            if reference_tables is not None
            else Settings.REFERENCE_TABLES
        )
        self._conn = sqlite3.connect(str(path))
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.execute("PRAGMA foreign_keys=ON")
        self._conn.executescript(_SCHEMA)
        self._in_transaction = False
        logger.debug("SqliteCatalogStore opened at %s", path)

    @contextmanager
    def transaction(self) -> Iterator[None]:
        self._in_transaction = True
        try:
            with self._conn:
                yield
        except sqlite3.Error as exc:
            raise StoreWriteError(f"Transaction failed: {exc}") from exc
        finally:
            self._in_transaction = False

    def _commit(self) -> None:
        if not self._in_transaction:
            self._conn.commit()

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()

    @staticmethod
    def _row_to_product(row: tuple[object, ...]) -> Product:
        return Product(
            id=int(str(row[0])),
            name=str(row[1] or ""),
            normalized_name=(
                str(row[2]) if row[2] is not None else None
            ),
            brand_id=str(row[3]),
            url=str(row[4] or ""),
            created_at=parse_timestamp(str(row[5])),
        )

    # ── Reading ──────────────────────────────────────────

    def list_products(self) -> list[Product]:
        try:
            rows = self._conn.execute(
                f"SELECT {_PRODUCT_COLUMNS} FROM products "
                "ORDER BY brand_id ASC, created_at ASC, id ASC"
            ).fetchall()
            products = [self._row_to_product(r) for r in rows]
        except (sqlite3.Error, ValueError) as exc:
            raise StoreReadError(f"Failed to list products: {exc}") from exc
        logger.info("Loaded %d products", len(products))
        return products

    def get_products(self, ids: list[int]) -> list[Product]:
        if not ids:
            return []
        placeholders = ", ".join("?" for _ in ids)
        try:
            rows = self._conn.execute(
                f"SELECT {_PRODUCT_COLUMNS} FROM products "
                f"WHERE id IN ({placeholders}) ORDER BY id",
                list(ids),
            ).fetchall()
            return [self._row_to_product(r) for r in rows]
        except (sqlite3.Error, ValueError) as exc:
            raise StoreReadError(
                f"Failed to fetch products {ids}: {exc}"
            ) from exc

    def count_references(self, product_id: int) -> int:
        """Total reference rows pointing at *product_id*."""
        total = 0
        for table, column in self._reference_tables:
            row = self._conn.execute(
                f"SELECT COUNT(*) FROM {table} WHERE {column} = ?",
                (product_id,),
            ).fetchone()
            total += int(row[0])
        return total

    # ── Writing ──────────────────────────────────────────

    def repoint_references(self, old_id: int, new_id: int) -> int:
        updated = 0
        try:
            for table, column in self._reference_tables:
                cur = self._conn.execute(
                    f"UPDATE {table} SET {column} = ? WHERE {column} = ?",
                    (new_id, old_id),
                )
                updated += cur.rowcount
            self._commit()
        except sqlite3.Error as exc:
            self._conn.rollback()
            raise StoreWriteError(
                f"Failed to repoint references {old_id} -> {new_id}: {exc}"
            ) from exc
        logger.debug(
            "Repointed %d reference(s) from %s to %s",
            updated,
            old_id,
            new_id,
        )
        return updated

    def delete_products(self, ids: list[int]) -> bool:
        if not ids:
            return True
        placeholders = ", ".join("?" for _ in ids)
        try:
            self._conn.execute(
                f"DELETE FROM products WHERE id IN ({placeholders})",
                list(ids),
            )
            self._commit()
        except sqlite3.Error as exc:
            self._conn.rollback()
            raise StoreWriteError(
                f"Failed to delete products {ids}: {exc}"
            ) from exc
        logger.debug("Deleted products %s", ids)
        return True

    # ── Seeding ──────────────────────────────────────────

    def insert_product(
        self,
        name: str,
        brand_id: str,
        url: str,
        created_at: str | datetime,
        normalized_name: str | None = None,
    ) -> int:
        """Insert a product row and return its new id."""
        stamp = parse_timestamp(created_at).astimezone(timezone.utc)
        cur = self._conn.execute(
            "INSERT INTO products "
            "(name, normalized_name, brand_id, url, created_at) "
            "VALUES (?, ?, ?, ?, ?)",
            (name, normalized_name, brand_id, url, stamp.isoformat()),
        )
        self._conn.commit()
        return int(cur.lastrowid or 0)

    def insert_reference(
        self, product_id: int, user_id: str = "",
    ) -> int:
        """Insert a ``user_recommendations`` row for *product_id*."""
        now = datetime.now(timezone.utc).isoformat()
        cur = self._conn.execute(
            "INSERT INTO user_recommendations "
            "(user_id, product_id, created_at) VALUES (?, ?, ?)",
            (user_id, product_id, now),
        )
        self._conn.commit()
        return int(cur.lastrowid or 0)
