"""API dependencies for batch lookup."""

from typing import Annotated

from fastapi import Depends, HTTPException, Path

from chapter_translator.core.translation.registry import (
    BatchRecord,
    BatchRegistry,
    batch_registry,
)


def get_registry() -> BatchRegistry:
    """Registry dependency; overridden in tests."""
    return batch_registry


async def validate_batch_exists(
    batch_id: Annotated[str, Path()],
    registry: Annotated[BatchRegistry, Depends(get_registry)],
) -> BatchRecord:
    """Look up a batch or raise 404."""
    record = registry.get(batch_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Batch not found")
    return record


ValidatedBatch = Annotated[BatchRecord, Depends(validate_batch_exists)]
Registry = Annotated[BatchRegistry, Depends(get_registry)]
