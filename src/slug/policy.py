"""Decide whether and how a content record gets a generated slug.

The decision is a short chain of gates run just before a record is
saved:

1. A persisted record that already has a slug keeps it.
2. Only ``post`` records are handled.
3. The title is translated (when an API key is configured) and
   normalized.
4. The configured pattern optionally prefixes the publish date.

Every collaborator (options, persisted-slug lookup, clock, translator)
is injected so the policy runs without a real host.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Protocol
from zoneinfo import ZoneInfo

from titleslug.content.models import MANAGED_CONTENT_TYPE, ContentRecord
from titleslug.integrations.google_translate import TranslationConfig
from titleslug.options import OptionsStore, load_slug_settings
from titleslug.slug.config import DATE_PREFIX_FORMAT, DATE_SEPARATOR, SlugPattern, SlugSettings
from titleslug.slug.normalize import normalize
from titleslug.slug.translator import translate

logger = logging.getLogger(__name__)

Translator = Callable[[str, str, TranslationConfig], str]


class PersistedSlugLookup(Protocol):
    """Host lookup for the slug currently stored for a content id."""

    def get_persisted_slug(self, content_id: int) -> str: ...


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock, optionally pinned to an IANA timezone."""

    def __init__(self, timezone: str = "") -> None:
        self._tz = ZoneInfo(timezone) if timezone else None

    def now(self) -> datetime:
        return datetime.now(tz=self._tz)


class NoPersistedSlugs:
    """Lookup for hosts without persisted content; every id has no slug."""

    def get_persisted_slug(self, content_id: int) -> str:
        return ""


class SlugDecisionPolicy:
    """Generates slugs for records about to be saved."""

    def __init__(
        self,
        options: OptionsStore,
        content_store: PersistedSlugLookup | None = None,
        clock: Clock | None = None,
        translator: Translator = translate,
    ) -> None:
        self.options = options
        self.content_store = content_store or NoPersistedSlugs()
        self.clock = clock or SystemClock()
        self.translator = translator

    def decide(self, record: ContentRecord) -> ContentRecord:
        """Return ``record``, with a generated slug where policy allows.

        Settings are read from the options store on every call.
        """
        return self.apply(record, load_slug_settings(self.options))

    def apply(self, record: ContentRecord, settings: SlugSettings) -> ContentRecord:
        """Run the decision against explicit settings."""
        if record.id is not None and self.content_store.get_persisted_slug(record.id):
            logger.debug("Record %s already has a slug, leaving it", record.id)
            return record

        if record.content_type != MANAGED_CONTENT_TYPE:
            logger.debug("Skipping slug for content type %r", record.content_type)
            return record

        if settings.pattern is None:
            return record

        slug = self.build_slug(record, settings)
        if not slug:
            logger.debug("Title %r produced no slug", record.title)
            return record

        return record.model_copy(update={"slug": slug})

    def build_slug(self, record: ContentRecord, settings: SlugSettings) -> str:
        """Compute the slug for ``record`` under ``settings.pattern``.

        The title is translated into ``settings.translation.target_language``.
        That comes from the ``target_language`` option and defaults to
        ``"en"``, so slugs are English unless a site configures otherwise.

        Returns an empty string when the title normalizes to nothing,
        including for the date-prefixed pattern.
        """
        translation = settings.translation
        text = self.translator(record.title, translation.target_language, translation)
        base = normalize(text)
        if not base:
            return ""

        if settings.pattern == SlugPattern.DATE_TITLE:
            return f"{self.date_prefix(record)}{DATE_SEPARATOR}{base}"
        return base

    def date_prefix(self, record: ContentRecord) -> str:
        """``YYYYMMDD`` of the publish date, or of today when unset."""
        when = record.publish_date or self.clock.now()
        return when.strftime(DATE_PREFIX_FORMAT)
