"""Slug generation: translation, normalization, and the save-time policy.

``titleslug.slug.policy`` and ``titleslug.slug.hooks`` are imported
explicitly; they depend on the options layer.
"""

from titleslug.slug.config import SlugPattern, SlugSettings
from titleslug.slug.normalize import normalize
from titleslug.slug.translator import translate

__all__ = [
    "SlugPattern",
    "SlugSettings",
    "normalize",
    "translate",
]
