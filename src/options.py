"""Key-value options read by the slug pipeline.

The host owns the options store; the pipeline only reads it. Settings
are rebuilt from the store on every decision so edits take effect on the
next save without any invalidation step.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from titleslug.integrations.google_translate import (
    DEFAULT_ENDPOINT,
    DEFAULT_TIMEOUT,
    TranslationConfig,
)
from titleslug.slug.config import SlugPattern, SlugSettings

logger = logging.getLogger(__name__)

OPTION_CONVERT_PATTERN = "convert_pattern"
OPTION_GOOGLE_API_KEY = "google_api_key"
OPTION_TARGET_LANGUAGE = "target_language"
OPTION_TRANSLATION_ENDPOINT = "translation_endpoint"
OPTION_TRANSLATION_TIMEOUT = "translation_timeout"


class OptionsStore(Protocol):
    """Read-only view of the host's option storage."""

    def get_option(self, key: str, default: str = "") -> str: ...


class DictOptionsStore:
    """Options backed by an in-memory mapping."""

    def __init__(self, options: Mapping[str, str] | None = None) -> None:
        self._options = dict(options or {})

    def get_option(self, key: str, default: str = "") -> str:
        return self._options.get(key, default)


class ConfigOptionsStore:
    """Options backed by the TOML config file and environment.

    Single reads reload the config. ``load_slug_settings`` reads through
    ``snapshot()`` instead, so one decision parses the file once and never
    mixes values from before and after an edit.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self._path = path

    def snapshot(self) -> DictOptionsStore:
        """Load the config once and freeze its option values."""
        from titleslug.config import load_config

        return DictOptionsStore(load_config(self._path).as_options())

    def get_option(self, key: str, default: str = "") -> str:
        return self.snapshot().get_option(key, default)


def load_translation_config(options: OptionsStore) -> TranslationConfig:
    """Build a TranslationConfig from the current option values."""
    raw_timeout = options.get_option(OPTION_TRANSLATION_TIMEOUT, "")
    timeout = DEFAULT_TIMEOUT
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            logger.warning("Invalid translation timeout %r, using %s", raw_timeout, DEFAULT_TIMEOUT)

    return TranslationConfig(
        api_key=options.get_option(OPTION_GOOGLE_API_KEY, ""),
        target_language=options.get_option(OPTION_TARGET_LANGUAGE, "") or "en",
        endpoint=options.get_option(OPTION_TRANSLATION_ENDPOINT, "") or DEFAULT_ENDPOINT,
        timeout=timeout,
    )


def load_slug_settings(options: OptionsStore) -> SlugSettings:
    """Read pattern and translation settings for one slug decision.

    An unrecognised ``convert_pattern`` yields ``pattern=None``.
    """
    snapshot = getattr(options, "snapshot", None)
    if snapshot is not None:
        options = snapshot()

    raw_pattern = options.get_option(OPTION_CONVERT_PATTERN, SlugPattern.TITLE.value)
    pattern = SlugPattern.parse(raw_pattern)
    if pattern is None:
        logger.warning("Unknown slug pattern %r in options", raw_pattern)

    return SlugSettings(
        translation=load_translation_config(options),
        pattern=pattern,
    )
