"""Translation pipeline components.

This module provides the backends used by the batch orchestrator:
- LLMGateway: Unified interface for LLM providers (LiteLLM)
- FallbackTranslator: Google Translate free endpoint, chunked
- PrimaryTranslator: Chapter body translation, LLM then fallback
- TitleTranslator: Batched title translation, LLM then per-title fallback
"""

from .llm_gateway import LLMGateway, LiteLLMGateway, GatewayFactory
from .fallback import FallbackTranslator
from .primary import PrimaryTranslator
from .titles import TitleTranslator

__all__ = [
    "LLMGateway",
    "LiteLLMGateway",
    "GatewayFactory",
    "FallbackTranslator",
    "PrimaryTranslator",
    "TitleTranslator",
]
