# tests/test_similarity.py

"""Tests for Levenshtein distance and the similarity score."""

import unittest

from src.filters.similarity import edit_distance, similarity

_SAMPLES: list[tuple[str, str]] = [
    ("", ""),
    ("abc", ""),
    ("kitten", "sitting"),
    ("classic tee", "classic tees"),
    ("silk scarf", "wool scarf"),
    ("wide leg jean", "wideleg jeans"),
    ("a", "zzzzzzzz"),
]


class TestEditDistance(unittest.TestCase):
    """edit_distance behaviour."""

    def test_known_distances(self) -> None:
        """Textbook examples."""
        self.assertEqual(edit_distance("kitten", "sitting"), 3)
        self.assertEqual(edit_distance("flaw", "lawn"), 2)
        self.assertEqual(edit_distance("abc", "abc"), 0)

    def test_against_empty(self) -> None:
        """Distance to the empty string is the other length."""
        self.assertEqual(edit_distance("", "abc"), 3)
        self.assertEqual(edit_distance("abc", ""), 3)
        self.assertEqual(edit_distance("", ""), 0)

    def test_symmetric(self) -> None:
        """Argument order does not matter."""
        for a, b in _SAMPLES:
            with self.subTest(a=a, b=b):
                self.assertEqual(edit_distance(a, b), edit_distance(b, a))


class TestSimilarity(unittest.TestCase):
    """similarity behaviour."""

    def test_reflexive(self) -> None:
        """Any string is fully similar to itself."""
        for text in ("", "a", "classic tee"):
            with self.subTest(text=text):
                self.assertEqual(similarity(text, text), 1.0)

    def test_both_empty(self) -> None:
        """Two empty strings count as identical."""
        self.assertEqual(similarity("", ""), 1.0)

    def test_one_empty(self) -> None:
        """Nothing in common scores zero."""
        self.assertEqual(similarity("abc", ""), 0.0)

    def test_symmetric_and_bounded(self) -> None:
        """Score is symmetric and stays within [0, 1]."""
        for a, b in _SAMPLES:
            with self.subTest(a=a, b=b):
                score = similarity(a, b)
                self.assertEqual(score, similarity(b, a))
                self.assertGreaterEqual(score, 0.0)
                self.assertLessEqual(score, 1.0)

    def test_different_materials_score_low(self) -> None:
        """'silk scarf' vs 'wool scarf' differ by 4 of 10 chars."""
        self.assertAlmostEqual(
            similarity("silk scarf", "wool scarf"), 0.6
        )

    def test_hyphenated_plural(self) -> None:
        """Joined words plus a plural cost 2 edits over 13 chars."""
        self.assertAlmostEqual(
            similarity("wide leg jean", "wideleg jeans"), 11 / 13
        )

    def test_decreases_with_distance(self) -> None:
        """More edits at the same length means a lower score."""
        base = "abcdefghij"
        scores = [
            similarity(base, "x" * n + base[n:]) for n in range(5)
        ]
        self.assertEqual(scores, sorted(scores, reverse=True))
        self.assertEqual(scores[0], 1.0)


if __name__ == "__main__":
    unittest.main()
