# tests/test_normalizer.py

"""Tests for product name and URL normalisation."""

import unittest

from src.filters.normalizer import normalize_name, normalize_url


class TestNormalizeName(unittest.TestCase):
    """normalize_name behaviour."""

    def test_lowercases_and_strips_punctuation(self) -> None:
        """Case and punctuation do not affect the key."""
        self.assertEqual(normalize_name("Classic Tee"), "classic tee")
        self.assertEqual(normalize_name("classic tee!!"), "classic tee")

    def test_hyphen_is_removed_not_spaced(self) -> None:
        """Hyphens vanish, joining the words they separated."""
        self.assertEqual(
            normalize_name("Wide-Leg Jeans"), "wideleg jeans"
        )

    def test_collapses_whitespace(self) -> None:
        """Tabs, newlines and runs of spaces become one space."""
        self.assertEqual(
            normalize_name("  Silk \t Scarf\n  Blue  "),
            "silk scarf blue",
        )

    def test_non_ascii_letters_dropped(self) -> None:
        """Accented letters are outside a-z and are stripped."""
        self.assertEqual(normalize_name("Café Crème"), "caf crme")

    def test_empty_and_punctuation_only(self) -> None:
        """Empty or punctuation-only input yields an empty key."""
        self.assertEqual(normalize_name(""), "")
        self.assertEqual(normalize_name("!!! --- ???"), "")

    def test_non_string_is_total(self) -> None:
        """Missing names normalise to an empty key instead of raising."""
        self.assertEqual(normalize_name(None), "")  # type: ignore[arg-type]

    def test_idempotent(self) -> None:
        """Normalising twice gives the same result as once."""
        samples = [
            "Classic Tee",
            "  Wide-Leg   Jeans ",
            "100% Cotton (Size M)",
            "",
            "!!!",
            "Ünïcödé Näme",
        ]
        for raw in samples:
            with self.subTest(raw=raw):
                once = normalize_name(raw)
                self.assertEqual(normalize_name(once), once)


class TestNormalizeUrl(unittest.TestCase):
    """normalize_url behaviour."""

    def test_drops_query_string(self) -> None:
        """Tracking query params do not change the key."""
        self.assertEqual(
            normalize_url("https://shop.example/tee?ref=ig"),
            "shop.example/tee",
        )

    def test_drops_fragment_and_scheme(self) -> None:
        """http and https URLs with fragments compare equal."""
        self.assertEqual(
            normalize_url("http://shop.example/tee#reviews"),
            normalize_url("https://shop.example/tee"),
        )

    def test_strips_www_and_trailing_slash(self) -> None:
        """Leading www. and a trailing slash are removed."""
        self.assertEqual(
            normalize_url("https://www.Shop.example/tee/"),
            "shop.example/tee",
        )

    def test_root_path(self) -> None:
        """A bare domain reduces to the hostname."""
        self.assertEqual(normalize_url("https://shop.example/"), "shop.example")

    def test_port_is_dropped(self) -> None:
        """Only the hostname is kept, not the port."""
        self.assertEqual(
            normalize_url("https://shop.example:8080/tee"),
            "shop.example/tee",
        )

    def test_path_case_preserved(self) -> None:
        """Paths keep their case when the URL parses."""
        self.assertEqual(
            normalize_url("https://shop.example/Tee"),
            "shop.example/Tee",
        )

    def test_fallback_without_scheme(self) -> None:
        """Scheme-less input goes through the string fallback."""
        self.assertEqual(
            normalize_url("WWW.Shop.example/Tee/"), "shop.example/tee"
        )

    def test_fallback_on_unparseable_url(self) -> None:
        """A malformed URL never raises."""
        self.assertEqual(normalize_url("http://[::1"), "[::1")

    def test_fallback_trims_whitespace(self) -> None:
        """Padded input matches its parsed, absolute counterpart."""
        self.assertEqual(
            normalize_url("  Shop.example/tee/  "),
            normalize_url("https://shop.example/tee"),
        )

    def test_empty_url(self) -> None:
        """Empty string normalises cleanly."""
        self.assertEqual(normalize_url(""), "")


if __name__ == "__main__":
    unittest.main()
