"""LLM Gateway for unified provider access.

This module provides an abstract gateway interface for LLM providers,
along with a unified implementation using LiteLLM.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from litellm import acompletion

from ...errors import PrimaryBackendFailure
from ..models.prompt import PromptBundle
from ..models.response import LLMResponse, TokenUsage
from ..prompts import safety_settings_payload

logger = logging.getLogger(__name__)


class LLMGateway(ABC):
    """Abstract gateway for LLM providers.

    Provides a unified interface for making LLM calls, regardless of
    the underlying provider. Implementations raise PrimaryBackendFailure
    for every kind of failure.
    """

    @property
    @abstractmethod
    def provider(self) -> str:
        """Get provider name."""
        pass

    @property
    @abstractmethod
    def model(self) -> str:
        """Get model identifier."""
        pass

    @abstractmethod
    async def call(self, bundle: PromptBundle) -> LLMResponse:
        """Make an LLM call.

        Args:
            bundle: Prompt bundle with messages and configuration

        Returns:
            LLMResponse with content and metadata

        Raises:
            PrimaryBackendFailure: On transport, API or malformed response errors
        """
        pass


def litellm_model_name(provider: str, model: str) -> str:
    """LiteLLM routing name: ``<provider>/<model>`` unless already prefixed.

    OpenAI models are routed bare. Model ids that contain a slash of their
    own (``google/gemini-2.5-flash`` on OpenRouter) still get the prefix.
    """
    if provider == "openai" or model.startswith(f"{provider}/"):
        return model
    return f"{provider}/{model}"


class LiteLLMGateway(LLMGateway):
    """Unified Gateway for all providers using LiteLLM."""

    # Providers that understand Gemini-style safety settings
    SAFETY_AWARE_PROVIDERS = {"gemini", "vertex_ai"}

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        provider_name: str = "gemini",
        safety_settings: Optional[List[Dict[str, str]]] = None,
    ):
        """Initialize LiteLLM gateway.

        Args:
            api_key: API key for authentication
            model: Model identifier, e.g. "gemini-2.5-flash"
            provider_name: Provider name used for the LiteLLM model prefix
            safety_settings: Safety configuration; defaults to blocking nothing
        """
        self._api_key = api_key
        self._model = model
        self._provider = provider_name
        self._safety_settings = (
            safety_settings if safety_settings is not None else safety_settings_payload()
        )
        self._litellm_model = litellm_model_name(provider_name, model)

        logger.info(
            f"[LLM Gateway] Initialized: provider={provider_name}, model={model}, "
            f"litellm_model={self._litellm_model}"
        )

    @property
    def provider(self) -> str:
        return self._provider

    @property
    def model(self) -> str:
        return self._model

    @property
    def litellm_model(self) -> str:
        return self._litellm_model

    @property
    def safety_settings(self) -> List[Dict[str, str]]:
        return list(self._safety_settings)

    def _build_kwargs(self, bundle: PromptBundle) -> dict:
        kwargs = {
            "model": self._litellm_model,
            "messages": bundle.to_openai_format(),
            "api_key": self._api_key,
        }
        if self._provider in self.SAFETY_AWARE_PROVIDERS:
            kwargs["safety_settings"] = self._safety_settings
        return kwargs

    async def call(self, bundle: PromptBundle) -> LLMResponse:
        """Make LLM API call using LiteLLM.

        Args:
            bundle: Prompt bundle

        Returns:
            LLMResponse with translated content
        """
        start_time = time.time()
        kwargs = self._build_kwargs(bundle)

        logger.debug(
            f"[LLM Gateway] Calling LiteLLM: model={self._litellm_model}, "
            f"purpose={bundle.purpose}, chars={len(bundle.user_prompt or '')}"
        )

        try:
            response = await acompletion(**kwargs)
        except Exception as e:
            raise PrimaryBackendFailure(self._model, str(e)) from e

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            raise PrimaryBackendFailure(self._model, f"malformed response: {e}") from e

        if not content:
            raise PrimaryBackendFailure(self._model, "empty response")

        usage = getattr(response, "usage", None)
        return LLMResponse(
            content=content,
            provider=self._provider,
            model=self._model,
            usage=TokenUsage(
                prompt_tokens=getattr(usage, "prompt_tokens", 0) or 0,
                completion_tokens=getattr(usage, "completion_tokens", 0) or 0,
                total_tokens=getattr(usage, "total_tokens", 0) or 0,
            ),
            latency_ms=int((time.time() - start_time) * 1000),
        )


class GatewayFactory:
    """Factory for creating LLM gateways."""

    SUPPORTED_PROVIDERS = ("gemini", "vertex_ai", "openai", "openrouter")

    @classmethod
    def create(cls, provider: str, api_key: Optional[str], model: str) -> LLMGateway:
        """Create an LLM gateway for the specified provider.

        Args:
            provider: Provider name (gemini, vertex_ai, openai, openrouter)
            api_key: API key for authentication
            model: Model identifier

        Returns:
            Configured LLMGateway instance

        Raises:
            ValueError: If provider is not supported
        """
        provider = provider.lower()
        if provider not in cls.SUPPORTED_PROVIDERS:
            raise ValueError(
                f"Unsupported provider: {provider}. "
                f"Supported: {', '.join(cls.SUPPORTED_PROVIDERS)}"
            )
        return LiteLLMGateway(api_key=api_key, model=model, provider_name=provider)
