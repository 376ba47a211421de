"""Configuration models for slug generation."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from titleslug.integrations.google_translate import TranslationConfig


class SlugPattern(StrEnum):
    """Available slug layouts."""

    TITLE = "title"
    DATE_TITLE = "date_title"

    @classmethod
    def parse(cls, value: str) -> SlugPattern | None:
        """Return the pattern for a stored option value, or None if unknown."""
        try:
            return cls(value.strip())
        except ValueError:
            return None


DATE_PREFIX_FORMAT = "%Y%m%d"
DATE_SEPARATOR = "_"


class SlugSettings(BaseModel):
    """Everything one slug decision reads from configuration."""

    translation: TranslationConfig = Field(default_factory=TranslationConfig)
    pattern: SlugPattern | None = SlugPattern.TITLE
