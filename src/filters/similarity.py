# src/filters/similarity.py

"""Lexical similarity scoring based on Levenshtein edit distance."""

from rapidfuzz.distance import Levenshtein


def edit_distance(a: str, b: str) -> int:
    """Return the Levenshtein distance between *a* and *b*.

    Unit cost for insertion, deletion and substitution.
    """
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """Score two strings in ``[0, 1]``; ``1.0`` means identical.

    ``(len(longer) - distance) / len(longer)``, with two empty
    strings counting as identical.
    """
    longer, shorter = (a, b) if len(a) >= len(b) else (b, a)
    if not longer:
        return 1.0
    distance = edit_distance(longer, shorter)
    return (len(longer) - distance) / len(longer)
