"""Batch title translation.

All titles of a batch go to the LLM in a single newline-joined request and
the answer is split back into lines by position. If the LLM fails, each
title is sent to Google Translate on its own, a few at a time.
"""

import asyncio
import logging
from typing import List, Optional, Sequence

from chapter_translator.config import settings

from ...errors import PrimaryBackendFailure, TranslationUnavailable
from ..models.prompt import PromptBundle
from ..prompts import TITLE_SYSTEM_INSTRUCTION
from .fallback import FallbackTranslator
from .llm_gateway import LLMGateway

logger = logging.getLogger(__name__)


class TitleTranslator:
    """Translates the titles of a batch with one LLM call."""

    def __init__(
        self,
        gateway: LLMGateway,
        fallback: FallbackTranslator,
        concurrency: Optional[int] = None,
        tolerate_failures: bool = False,
    ):
        """Initialize the title translator.

        Args:
            gateway: LLM gateway configured with the title model
            fallback: Google Translate client used when the LLM fails
            concurrency: Max simultaneous fallback requests
            tolerate_failures: Leave a title untranslated (None) instead of
                raising when its fallback request fails
        """
        self.gateway = gateway
        self.fallback = fallback
        self.concurrency = max(1, concurrency or settings.title_fallback_concurrency)
        self.tolerate_failures = tolerate_failures

    async def translate_titles(self, titles: Sequence[str]) -> List[Optional[str]]:
        """Translate titles, positionally aligned with the input.

        The returned list may be shorter or longer than ``titles`` if the LLM
        did not keep one title per line; callers look up by index and use
        the original title where the entry is missing or empty.

        Raises:
            TranslationUnavailable: If the LLM and a fallback request both fail
        """
        if not titles:
            return []

        bundle = PromptBundle.from_instruction(
            TITLE_SYSTEM_INSTRUCTION, "\n".join(titles), purpose="titles"
        )

        try:
            response = await self.gateway.call(bundle)
        except Exception as e:
            reason = e.reason if isinstance(e, PrimaryBackendFailure) else str(e)
            logger.warning(f"Batch title failed ({reason}) → falling back to Google")
            return await self._translate_individually(titles)

        logger.info(
            f"[Titles] {response.model}: {len(titles)} titles, "
            f"{response.usage.total_tokens} tokens in {response.latency_ms} ms"
        )
        translated: List[Optional[str]] = response.content.split("\n")
        if len(translated) != len(titles):
            logger.warning(
                f"[Titles] Title count mismatch: sent {len(titles)}, received "
                f"{len(translated)} lines; unmatched chapters keep their original title"
            )
        return translated

    async def _translate_individually(self, titles: Sequence[str]) -> List[Optional[str]]:
        semaphore = asyncio.Semaphore(self.concurrency)

        async def translate_one(title: str) -> Optional[str]:
            async with semaphore:
                try:
                    return await self.fallback.translate_segment(title)
                except TranslationUnavailable as e:
                    if not self.tolerate_failures:
                        raise
                    logger.error(f"[Titles] Keeping original title {title!r}: {e}")
                    return None

        return list(await asyncio.gather(*(translate_one(t) for t in titles)))
