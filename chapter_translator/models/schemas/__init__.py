"""Shared Pydantic schemas for API requests and responses."""

from .batch import StartBatchRequest, BatchStatus

__all__ = [
    "StartBatchRequest",
    "BatchStatus",
]
