"""Title → slug normalization.

Non-ASCII letters are dropped rather than transliterated, so text that
was not translated into a Latin-script language can normalize to an
empty string. Callers treat an empty result as "no slug".
"""

from __future__ import annotations

import re

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_SEPARATORS = re.compile(r"[\s-]+")


def normalize(text: str) -> str:
    """Normalize arbitrary text into the slug alphabet ``[a-z0-9-]``.

    Examples:
        >>> normalize("Hello World")
        'hello-world'
        >>> normalize("  A---B  C!!")
        'a-b-c'
        >>> normalize("こんにちは")
        ''
    """
    if not text:
        return ""
    slug = _DISALLOWED.sub("", text.lower())
    slug = _SEPARATORS.sub("-", slug.strip())
    return slug.strip("-")
