"""titleslug - translated, URL-safe slugs for content titles."""

__version__ = "0.3.0"
