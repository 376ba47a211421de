"""Unified configuration loaded from .titleslug.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

from titleslug.integrations.google_translate import (
    DEFAULT_ENDPOINT,
    DEFAULT_TIMEOUT,
    TranslationConfig,
)
from titleslug.options import (
    OPTION_CONVERT_PATTERN,
    OPTION_GOOGLE_API_KEY,
    OPTION_TARGET_LANGUAGE,
    OPTION_TRANSLATION_ENDPOINT,
    OPTION_TRANSLATION_TIMEOUT,
)
from titleslug.slug.config import SlugPattern

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".titleslug.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG_PATH = Path.home() / ".config" / "titleslug" / "config.toml"


class TranslationSectionConfig(BaseModel):
    """[translation] section."""

    api_key: str = Field(default="", repr=False)
    target_language: str = "en"
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = DEFAULT_TIMEOUT


class SlugSectionConfig(BaseModel):
    """[slug] section."""

    pattern: SlugPattern = SlugPattern.TITLE
    timezone: str = ""


class StoreSectionConfig(BaseModel):
    """[store] section."""

    directory: str = "."


class TitleSlugConfig(BaseModel):
    """Top-level configuration model."""

    translation: TranslationSectionConfig = Field(default_factory=TranslationSectionConfig)
    slug: SlugSectionConfig = Field(default_factory=SlugSectionConfig)
    store: StoreSectionConfig = Field(default_factory=StoreSectionConfig)

    def to_translation_config(self) -> TranslationConfig:
        """Convert to TranslationConfig for the translation client."""
        return TranslationConfig(
            api_key=self.translation.api_key,
            target_language=self.translation.target_language,
            endpoint=self.translation.endpoint,
            timeout=self.translation.timeout,
        )

    def as_options(self) -> dict[str, str]:
        """Flatten into the key-value options the slug pipeline reads."""
        return {
            OPTION_CONVERT_PATTERN: self.slug.pattern.value,
            OPTION_GOOGLE_API_KEY: self.translation.api_key,
            OPTION_TARGET_LANGUAGE: self.translation.target_language,
            OPTION_TRANSLATION_ENDPOINT: self.translation.endpoint,
            OPTION_TRANSLATION_TIMEOUT: str(self.translation.timeout),
        }


def load_config(path: str | Path | None = None) -> TitleSlugConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .titleslug.toml in CWD
    3. ~/.config/titleslug/config.toml

    Then overlay environment variables.

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged TitleSlugConfig.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.debug("Loaded config from %s", candidate)
                break
        if not data and GLOBAL_CONFIG_PATH.exists():
            data = _load_toml(GLOBAL_CONFIG_PATH)
            logger.debug("Loaded config from %s", GLOBAL_CONFIG_PATH)

    config = TitleSlugConfig.model_validate(data) if data else TitleSlugConfig()

    return _apply_env_vars(config)


def merge_cli_overrides(config: TitleSlugConfig, **cli_kwargs: object) -> TitleSlugConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "api_key": ("translation", "api_key"),
        "target_language": ("translation", "target_language"),
        "timeout": ("translation", "timeout"),
        "pattern": ("slug", "pattern"),
        "timezone": ("slug", "timezone"),
        "store_directory": ("store", "directory"),
    }

    for key, value in cli_kwargs.items():
        if value is None:
            continue
        if key in mapping:
            section, field = mapping[key]
            data[section][field] = value

    return TitleSlugConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: TitleSlugConfig) -> TitleSlugConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "GOOGLE_TRANSLATE_API_KEY": ("translation", "api_key"),
        "TITLESLUG_TARGET_LANGUAGE": ("translation", "target_language"),
        "TITLESLUG_CONVERT_PATTERN": ("slug", "pattern"),
        "TITLESLUG_TIMEZONE": ("slug", "timezone"),
        "TITLESLUG_STORE_DIR": ("store", "directory"),
    }

    changed = False
    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value:
            data[section][field] = value
            changed = True

    if changed:
        return TitleSlugConfig.model_validate(data)
    return config
