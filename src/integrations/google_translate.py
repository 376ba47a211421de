"""Google Cloud Translation integration: config and API client.

Talks to the v2 REST endpoint (``/language/translate/v2``) with an API
key passed as the ``key`` query parameter.
"""

from __future__ import annotations

import http.client
import json
import logging
import urllib.error
import urllib.parse
import urllib.request

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://translation.googleapis.com/language/translate/v2"
DEFAULT_TIMEOUT = 10.0


class TranslationError(Exception):
    """A translation request failed or returned an unexpected body."""


class TranslationConfig(BaseModel):
    """Configuration for the translation service."""

    api_key: str = Field(default="", repr=False)
    target_language: str = "en"
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = DEFAULT_TIMEOUT

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


class GoogleTranslateClient:
    """Client for the Google Cloud Translation v2 API.

    Sends one POST per call via urllib. Every failure mode surfaces as
    ``TranslationError``.
    """

    def __init__(self, config: TranslationConfig) -> None:
        self.config = config

    def _url(self) -> str:
        query = urllib.parse.urlencode({"key": self.config.api_key})
        return f"{self.config.endpoint}?{query}"

    def _request(self, data: dict) -> dict:
        """POST a JSON body and return the decoded JSON response."""
        try:
            req = urllib.request.Request(
                self._url(),
                data=json.dumps(data).encode("utf-8"),
                method="POST",
                headers={"Content-Type": "application/json"},
            )
            with urllib.request.urlopen(req, timeout=self.config.timeout) as resp:
                raw = resp.read()
        except urllib.error.HTTPError as exc:
            raise TranslationError(f"translation API returned HTTP {exc.code}") from exc
        except (urllib.error.URLError, OSError) as exc:
            raise TranslationError(f"translation request failed: {exc}") from exc
        # Malformed endpoint URLs raise ValueError (InvalidURL is a subclass);
        # a body cut short raises IncompleteRead.
        except (ValueError, http.client.HTTPException) as exc:
            raise TranslationError(f"translation request failed: {exc!r}") from exc

        try:
            return json.loads(raw.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise TranslationError("translation API returned invalid JSON") from exc

    @staticmethod
    def _extract_text(payload: object) -> str:
        """Pull ``data.translations[0].translatedText`` out of a response."""
        try:
            text = payload["data"]["translations"][0]["translatedText"]  # type: ignore[index]
        except (KeyError, IndexError, TypeError) as exc:
            raise TranslationError("unexpected translation response shape") from exc
        if not isinstance(text, str):
            raise TranslationError("translatedText is not a string")
        return text

    def translate(self, text: str, target_language: str) -> str:
        """Translate ``text`` into ``target_language``.

        Args:
            text: Source text, any language.
            target_language: ISO-639 code of the target language (e.g. "en").

        Returns:
            The translated text.

        Raises:
            TranslationError: On transport errors, timeouts, non-2xx
                responses, or a body without a translated string.
        """
        body = {"q": text, "target": target_language, "format": "text"}
        payload = self._request(body)
        return self._extract_text(payload)
