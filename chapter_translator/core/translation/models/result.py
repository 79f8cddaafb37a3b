"""Translation outcome model.

This module defines the result of translating one unit of text, tagged with
the backend that actually produced it.
"""

from pydantic import BaseModel, ConfigDict, Field

FALLBACK_MODEL_NAME = "google translate"


class TranslationOutcome(BaseModel):
    """Result of one translation attempt chain (primary, then fallback)."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    ok: bool = Field(default=True, description="Whether text was produced")
    text: str = Field(..., description="The translated text")
    model_used: str = Field(..., description="Primary model id or fallback name")

    @property
    def used_fallback(self) -> bool:
        return self.model_used == FALLBACK_MODEL_NAME
