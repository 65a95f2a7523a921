"""Default slug function injected as ``utils.slugify``."""

from __future__ import annotations

import re
import unicodedata

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """Convert ``value`` into a lowercase, hyphen-separated ASCII slug.

    Accented characters are transliterated to their closest ASCII form and
    anything else collapses into single hyphens. Duplicate slugs are not
    resolved.

    Examples
    --------
    >>> slugify("Hello World")
    'hello-world'
    >>> slugify("Crème brûlée & Co.")
    'creme-brulee-co'
    """
    normalized = unicodedata.normalize("NFKD", value)
    ascii_text = normalized.encode("ascii", "ignore").decode("ascii")
    return _NON_ALNUM.sub("-", ascii_text.lower()).strip("-")


__all__ = ["slugify"]
