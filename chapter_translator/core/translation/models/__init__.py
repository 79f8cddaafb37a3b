"""Translation pipeline data models.

This module provides structured data models for the translation pipeline,
ensuring type safety and clear contracts between components.
"""

from .chapter import (
    InputItem,
    ChapterRange,
    ResultItem,
    OutputDocument,
    BatchProgress,
)
from .prompt import Message, PromptBundle
from .response import TokenUsage, LLMResponse
from .result import FALLBACK_MODEL_NAME, TranslationOutcome

__all__ = [
    # Chapter models
    "InputItem",
    "ChapterRange",
    "ResultItem",
    "OutputDocument",
    "BatchProgress",
    # Prompt models
    "Message",
    "PromptBundle",
    # Response models
    "TokenUsage",
    "LLMResponse",
    # Result models
    "FALLBACK_MODEL_NAME",
    "TranslationOutcome",
]
