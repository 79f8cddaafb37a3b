"""LLM response models."""

from pydantic import BaseModel, Field


class TokenUsage(BaseModel):
    """Token consumption reported by the provider."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class LLMResponse(BaseModel):
    """Text returned by one gateway call, with its cost."""

    content: str = Field(..., description="Response content from LLM")
    provider: str = Field(..., description="LLM provider name")
    model: str = Field(..., description="Model identifier used")

    usage: TokenUsage = Field(default_factory=TokenUsage)
    latency_ms: int = Field(default=0, description="Round trip in milliseconds")
