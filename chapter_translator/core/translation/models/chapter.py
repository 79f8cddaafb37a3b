"""Chapter input and output models.

This module defines the records that flow through a translation batch:
the source chapters, the selected range, and the translated output.
"""

import json
from typing import List, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field


class InputItem(BaseModel):
    """One source chapter as supplied in the input document."""

    model_config = ConfigDict(frozen=True, extra="ignore", strict=True)

    title: str = Field(..., description="Original chapter title")
    content: str = Field(..., description="Original chapter body")


class ChapterRange(BaseModel):
    """1-based inclusive window over the input chapters.

    An empty input yields the window {1, 0}, whose slice is empty.
    """

    model_config = ConfigDict(frozen=True)

    start: int = Field(..., ge=1, description="First chapter (1-based, inclusive)")
    end: int = Field(..., ge=0, description="Last chapter (1-based, inclusive)")

    def __len__(self) -> int:
        return max(0, self.end - self.start + 1)

    def as_tuple(self) -> Tuple[int, int]:
        return self.start, self.end

    def slice(self, items: Sequence[InputItem]) -> List[InputItem]:
        """Return the chapters covered by this range."""
        return list(items[self.start - 1:self.end])


class ResultItem(BaseModel):
    """One translated chapter. Field order is the serialization order."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Translated title, or the original")
    content: str = Field(..., description="Translated body")
    model: str = Field(..., description="Backend that produced the body")


class OutputDocument(BaseModel):
    """The whole translated batch."""

    model_config = ConfigDict(frozen=True)

    range: ChapterRange
    items: Tuple[ResultItem, ...] = ()

    @property
    def filename(self) -> str:
        """Suggested filename derived from the resolved range bounds."""
        return f"translated_{self.range.start}_{self.range.end}.json"

    def to_json(self) -> str:
        """Serialize items as an indented JSON array of {title, content, model}."""
        return json.dumps(
            [item.model_dump() for item in self.items],
            ensure_ascii=False,
            indent=2,
        )


class BatchProgress(BaseModel):
    """Progress counter emitted after each completed chapter."""

    model_config = ConfigDict(frozen=True)

    completed: int = 0
    total: int = 0

    @property
    def ratio(self) -> float:
        if not self.total:
            return 0.0
        return self.completed / self.total
