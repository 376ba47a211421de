"""Title translation with graceful fallback to the source text."""

from __future__ import annotations

import logging

from titleslug.integrations.google_translate import (
    GoogleTranslateClient,
    TranslationConfig,
    TranslationError,
)

logger = logging.getLogger(__name__)


def translate(text: str, target_language: str, config: TranslationConfig) -> str:
    """Translate ``text`` into ``target_language``, or return it unchanged.

    No API key means no network call. Transport failures and malformed
    responses are logged and absorbed; the caller always gets a string.
    Each call issues a fresh request.
    """
    if not config.is_configured:
        logger.debug("No translation API key configured, using title as-is")
        return text
    if not text:
        return text

    client = GoogleTranslateClient(config)
    try:
        translated = client.translate(text, target_language)
    except TranslationError:
        logger.warning(
            "Translation to '%s' failed, using original title", target_language, exc_info=True
        )
        return text

    logger.debug("Translated %r -> %r", text, translated)
    return translated
