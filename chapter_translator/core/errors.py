"""Error taxonomy for the translation batch.

- InputFormatError: the input document could not be fetched or is not a
  list of chapters. Fatal to the batch.
- PrimaryBackendFailure: the LLM call failed. Always recovered by falling
  back to Google Translate.
- TranslationUnavailable: the fallback endpoint failed too. There is no
  further tier, so it propagates.
"""


class ChapterTranslatorError(Exception):
    """Base class for all chapter translator errors."""


class InputFormatError(ChapterTranslatorError, ValueError):
    """Input fetch failed or did not yield a sequence of chapters."""


class PrimaryBackendFailure(ChapterTranslatorError):
    """Any failure of the primary (LLM) translation backend."""

    def __init__(self, model: str, reason: str):
        self.model = model
        self.reason = reason
        super().__init__(f"{model} failed: {reason}")


class TranslationUnavailable(ChapterTranslatorError):
    """The fallback translation endpoint is unreachable or returned garbage."""
