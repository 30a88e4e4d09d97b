"""
Tag name normalization and slug generation.

All functions here are pure (no I/O, no database) and idempotent:
``normalize_name(normalize_name(x)) == normalize_name(x)`` and
``slugify(slugify(x)) == slugify(x)``.

The normalized name is the machine key used for case-insensitive
uniqueness; the slug is the URL-safe form derived from the display name.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from collections.abc import Iterable

logger = logging.getLogger(__name__)

# Zero-width characters stripped before comparison
_ZERO_WIDTH_CHARS: frozenset[str] = frozenset(
    {
        "\u200B",  # ZERO WIDTH SPACE
        "\u200C",  # ZERO WIDTH NON-JOINER
        "\u200D",  # ZERO WIDTH JOINER
        "\uFEFF",  # ZERO WIDTH NO-BREAK SPACE / BOM
    }
)

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def clean_name(raw_name: str) -> str:
    """
    Trim a display name and collapse inner whitespace runs to one space.

    Case is preserved; this is the form stored in ``Tag.name``.

    Examples
    --------
    >>> clean_name("  Machine\\tLearning ")
    'Machine Learning'
    """
    text = "".join(ch for ch in raw_name if ch not in _ZERO_WIDTH_CHARS)
    text = text.replace("\u00A0", " ")
    return " ".join(text.split())


def normalize_name(raw_name: str) -> str | None:
    """
    Produce the case-insensitive comparison key for a tag name.

    Parameters
    ----------
    raw_name : str
        The tag name as submitted.

    Returns
    -------
    str | None
        The NFC-recomposed, casefolded, whitespace-collapsed name, or
        ``None`` if nothing is left.

    Examples
    --------
    >>> normalize_name("  Foo  Bar ")
    'foo bar'

    >>> normalize_name("   ")
    None
    """
    text = unicodedata.normalize("NFC", clean_name(raw_name)).casefold()
    return text if text else None


def slugify(name: str) -> str:
    """
    Derive a URL-safe slug from a tag name.

    Decomposes to NFKD, drops combining marks, lowercases, and replaces each
    run of characters outside ``[a-z0-9]`` with a single hyphen. Names with
    no ASCII-representable characters fall back to their casefolded form
    with spaces hyphenated, so the slug is never empty for a non-empty name.

    Examples
    --------
    >>> slugify("Café Society")
    'cafe-society'

    >>> slugify("C# .NET")
    'c-net'
    """
    decomposed = unicodedata.normalize("NFKD", name)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    slug = _NON_SLUG_CHARS.sub("-", stripped.lower()).strip("-")
    if slug:
        return slug

    fallback = normalize_name(name)
    return "-".join(fallback.split()) if fallback else ""


def unique_names(names: Iterable[str]) -> list[str]:
    """
    Clean, drop blanks and deduplicate names case-insensitively.

    First-seen order and first-seen spelling win.

    Examples
    --------
    >>> unique_names(["a", "A", " b ", "b", "", "  "])
    ['a', 'b']
    """
    seen: set[str] = set()
    result: list[str] = []
    for raw in names:
        key = normalize_name(raw)
        if key is None or key in seen:
            continue
        seen.add(key)
        result.append(clean_name(raw))

    logger.debug("Normalized %d unique tag names", len(result))
    return result
