"""Batch request and response schemas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class StartBatchRequest(BaseModel):
    """Request to start a translation batch."""

    input_url: str = Field(..., min_length=1, description="URL or path of the chapter JSON")
    range: Optional[str] = Field(default=None, description='Chapter range, e.g. "3-7"')
    api_key: Optional[str] = None  # Falls back to GEMINI_API_KEY
    model: Optional[str] = None
    title_model: Optional[str] = None
    delay_ms: Optional[int] = None
    isolate_item_failures: bool = False


class BatchStatus(BaseModel):
    """Batch status response."""

    model_config = ConfigDict(protected_namespaces=())

    batch_id: str
    status: str
    completed: int
    total: int
    progress: float
    start: Optional[int] = None
    end: Optional[int] = None
    error_message: Optional[str] = None
    filename: Optional[str] = None
