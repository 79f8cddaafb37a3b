"""Translation package.

This package provides the translation pipeline and batch orchestration.

Architecture:
- models/: Data models (InputItem, ResultItem, TranslationOutcome, etc.)
- pipeline/: Backends (LLMGateway, FallbackTranslator, PrimaryTranslator, TitleTranslator)
- range_selector.py: Chapter range parsing
- orchestrator.py: BatchOrchestrator state machine
- registry.py: In-process registry of running batches
"""

# Re-export models for convenience
from .models import (
    InputItem,
    ChapterRange,
    ResultItem,
    OutputDocument,
    BatchProgress,
    Message,
    PromptBundle,
    TokenUsage,
    LLMResponse,
    FALLBACK_MODEL_NAME,
    TranslationOutcome,
)
from .range_selector import select_range

__all__ = [
    # Models
    "InputItem",
    "ChapterRange",
    "ResultItem",
    "OutputDocument",
    "BatchProgress",
    "Message",
    "PromptBundle",
    "TokenUsage",
    "LLMResponse",
    "FALLBACK_MODEL_NAME",
    "TranslationOutcome",
    # Range selection
    "select_range",
]
