# src/filters/normalizer.py

"""Canonical comparison forms for product names and URLs."""

import logging
import re
from urllib.parse import urlsplit

logger = logging.getLogger("catalog_dedupe.filters")

_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")
_SCHEME_WWW_RE = re.compile(r"^(https?://)?(www\.)?")


def normalize_name(name: str) -> str:
    """Normalise a product name to a comparable key.

    Lowercases, strips everything except ``a-z``, digits and
    whitespace, then collapses whitespace runs to single spaces.
    Idempotent, and returns ``""`` for anything that is not a string.
    """
    if not isinstance(name, str):
        return ""
    alpha_only = _NON_ALNUM_RE.sub("", name.lower())
    return " ".join(alpha_only.split())


def _fallback_url(lowered: str) -> str:
    cleaned = _SCHEME_WWW_RE.sub("", lowered, count=1)
    return cleaned.removesuffix("/")


def normalize_url(url: str) -> str:
    """Normalise a product URL to ``host + path``.

    Scheme, query string and fragment are discarded, a leading
    ``www.`` and a single trailing slash are stripped. Input that
    does not parse as an absolute URL goes through a string-level
    fallback instead.
    """
    if not isinstance(url, str):
        return ""
    try:
        parts = urlsplit(url.strip())
        host = parts.hostname
        if parts.scheme and host:
            return host.removeprefix("www.") + parts.path.removesuffix("/")
    except ValueError:
        logger.debug("Unparseable URL, using fallback: %r", url)

    return _fallback_url(url.strip().lower())
