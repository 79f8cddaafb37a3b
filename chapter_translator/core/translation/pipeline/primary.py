"""Primary chapter translation with automatic fallback.

A chapter body is sent to the LLM once. If that fails for any reason the
whole original content is handed to the Google Translate fallback, so the
caller always receives a TranslationOutcome unless both tiers are down.
"""

import logging

from ...errors import PrimaryBackendFailure
from ..models.prompt import PromptBundle
from ..models.result import FALLBACK_MODEL_NAME, TranslationOutcome
from ..prompts import CHAPTER_SYSTEM_INSTRUCTION
from .fallback import FallbackTranslator
from .llm_gateway import LLMGateway

logger = logging.getLogger(__name__)


class PrimaryTranslator:
    """Translates one unit of text: LLM first, then Google Translate."""

    def __init__(
        self,
        gateway: LLMGateway,
        fallback: FallbackTranslator,
        system_instruction: str = CHAPTER_SYSTEM_INSTRUCTION,
    ):
        self.gateway = gateway
        self.fallback = fallback
        self.system_instruction = system_instruction

    async def translate(self, content: str) -> TranslationOutcome:
        """Translate content, downgrading to the fallback on primary failure.

        Raises:
            TranslationUnavailable: Only if the fallback fails as well
        """
        return await self.translate_one_unit(content)

    async def translate_one_unit(self, content: str) -> TranslationOutcome:
        bundle = PromptBundle.from_instruction(self.system_instruction, content)

        try:
            response = await self.gateway.call(bundle)
            logger.info(
                f"[Primary] {response.model}: {response.usage.total_tokens} tokens "
                f"in {response.latency_ms} ms"
            )
            return TranslationOutcome(ok=True, text=response.content, model_used=self.gateway.model)
        except Exception as e:
            reason = e.reason if isinstance(e, PrimaryBackendFailure) else str(e)
            logger.warning(
                f"{self.gateway.model} failed ({reason}). Falling back to Google Translate…"
            )

        text = await self.fallback.translate(content)
        return TranslationOutcome(ok=True, text=text, model_used=FALLBACK_MODEL_NAME)
