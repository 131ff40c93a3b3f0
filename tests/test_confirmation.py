# tests/test_confirmation.py

"""Tests for the confirmation gateway."""

import io
import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

from rich.console import Console

from src.models.duplicate_group import DuplicateGroup
from src.models.merge_report import Decision
from src.models.product import Product
from src.services.confirmation import (
    PromptConfirmer,
    auto_confirm,
    build_group_table,
    parse_decision,
)

PROMPT_PATH = "src.services.confirmation.Prompt.ask"


def _group(size: int = 3) -> DuplicateGroup:
    products = [
        Product(
            id=i,
            name=f"Classic Tee {i}",
            brand_id="brand-a",
            url=f"https://shop.example/tee?v={i}",
            created_at=datetime(2024, i, 1, tzinfo=timezone.utc),
        )
        for i in range(1, size + 1)
    ]
    return DuplicateGroup(brand_id="brand-a", products=products)


class TestParseDecision(unittest.TestCase):
    """Mapping typed answers to decisions."""

    def test_yes_confirms(self) -> None:
        """'yes' and 'y' in any case confirm."""
        for answer in ("yes", "YES", " y "):
            with self.subTest(answer=answer):
                self.assertEqual(parse_decision(answer), Decision.CONFIRM)

    def test_skip(self) -> None:
        """'skip' and 's' skip."""
        for answer in ("skip", "Skip", "s"):
            with self.subTest(answer=answer):
                self.assertEqual(parse_decision(answer), Decision.SKIP)

    def test_anything_else_cancels(self) -> None:
        """No, empty, or garbage input cancels."""
        for answer in ("no", "", "maybe", "yess"):
            with self.subTest(answer=answer):
                self.assertEqual(parse_decision(answer), Decision.CANCEL)


class TestAutoConfirm(unittest.TestCase):
    """Headless mode."""

    def test_always_confirms(self) -> None:
        """auto_confirm confirms every group."""
        self.assertEqual(auto_confirm(_group()), Decision.CONFIRM)


class TestBuildGroupTable(unittest.TestCase):
    """Group rendering."""

    def test_one_row_per_product(self) -> None:
        """Every member is listed."""
        table = build_group_table(_group(4))
        self.assertEqual(table.row_count, 4)

    def test_keep_marked_first(self) -> None:
        """The first row is the kept product."""
        buf = io.StringIO()
        Console(file=buf, width=200).print(build_group_table(_group(2)))
        text = buf.getvalue()
        self.assertLess(text.index("KEEP"), text.index("DELETE"))


class TestPromptConfirmer(unittest.TestCase):
    """Interactive prompt wrapper."""

    def setUp(self) -> None:
        self.buf = io.StringIO()
        self.confirmer = PromptConfirmer(Console(file=self.buf, width=200))

    @patch(PROMPT_PATH, return_value="skip")
    def test_skip_answer(self, mock_ask: MagicMock) -> None:
        """A 'skip' answer yields Decision.SKIP."""
        self.assertEqual(self.confirmer(_group()), Decision.SKIP)
        mock_ask.assert_called_once()

    @patch(PROMPT_PATH, return_value="yes")
    def test_yes_answer(self, _mock_ask: MagicMock) -> None:
        """A 'yes' answer yields Decision.CONFIRM."""
        self.assertEqual(self.confirmer(_group()), Decision.CONFIRM)

    @patch(PROMPT_PATH, return_value="no")
    def test_group_rendered_before_asking(self, _mock_ask: MagicMock) -> None:
        """The group table is shown on the confirmer's console."""
        self.assertEqual(self.confirmer(_group()), Decision.CANCEL)
        self.assertIn("Classic Tee 1", self.buf.getvalue())

    @patch(PROMPT_PATH, side_effect=EOFError)
    def test_closed_input_cancels(self, _mock_ask: MagicMock) -> None:
        """End of input cancels the group instead of raising."""
        self.assertEqual(self.confirmer(_group()), Decision.CANCEL)
        self.assertIn("No input", self.buf.getvalue())


if __name__ == "__main__":
    unittest.main()
