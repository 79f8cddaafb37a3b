"""Fallback translation via the free Google Translate web endpoint.

No API key is needed. Used only when the primary LLM backend fails, so any
failure here is final and propagates as TranslationUnavailable.
"""

import logging
from typing import Any, Optional

import httpx

from chapter_translator.config import settings
from chapter_translator.utils.text import chunk_text

from ...errors import TranslationUnavailable

logger = logging.getLogger(__name__)

USER_AGENT = "Mozilla/5.0"


class FallbackTranslator:
    """Google Translate (free web endpoint) client.

    Long text is split at sentence boundaries and each chunk is translated
    in order; chunk results are concatenated without a separator.
    """

    name = "google translate"

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        endpoint: Optional[str] = None,
        source_language: Optional[str] = None,
        target_language: Optional[str] = None,
        chunk_size: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        self._client = client
        self.endpoint = endpoint or settings.fallback_endpoint
        self.source_language = source_language or settings.fallback_source_language
        self.target_language = target_language or settings.fallback_target_language
        self.chunk_size = chunk_size or settings.fallback_chunk_size
        self.timeout = timeout or settings.fallback_timeout

    async def translate(self, text: str) -> str:
        """Translate arbitrary-length text, chunking as needed.

        Raises:
            TranslationUnavailable: If the endpoint fails for any chunk
        """
        chunks = chunk_text(text, self.chunk_size)
        if len(chunks) > 1:
            logger.debug(f"[Fallback] Translating {len(chunks)} chunks")

        parts = []
        for chunk in chunks:
            parts.append(await self.translate_segment(chunk))
        return "".join(parts)

    async def translate_segment(self, text: str) -> str:
        """Translate one segment with a single request, no chunking.

        Raises:
            TranslationUnavailable: On transport errors, HTTP errors or an
                unexpected response shape
        """
        if not text or not text.strip():
            return ""

        params = {
            "client": "gtx",
            "sl": self.source_language,
            "tl": self.target_language,
            "dt": "t",
            "q": text,
        }

        try:
            if self._client is not None:
                response = await self._client.get(
                    self.endpoint,
                    params=params,
                    headers={"User-Agent": USER_AGENT},
                    timeout=self.timeout,
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(
                        self.endpoint,
                        params=params,
                        headers={"User-Agent": USER_AGENT},
                    )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"[Fallback] Google Translate request failed: {e}")
            raise TranslationUnavailable(f"Google Translate request failed: {e}") from e
        except ValueError as e:
            raise TranslationUnavailable(f"Google Translate returned invalid JSON: {e}") from e

        return self._parse_response(data)

    @staticmethod
    def _parse_response(data: Any) -> str:
        """Join the translated part of each segment pair in ``data[0]``."""
        try:
            segments = data[0]
            return "".join(segment[0] for segment in segments if segment[0])
        except (IndexError, KeyError, TypeError) as e:
            raise TranslationUnavailable(
                f"Unexpected Google Translate response shape: {e}"
            ) from e
