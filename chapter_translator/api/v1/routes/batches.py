"""Batch translation API routes."""

import logging

from fastapi import APIRouter, BackgroundTasks, HTTPException
from fastapi.responses import FileResponse

from chapter_translator.api.dependencies import Registry, ValidatedBatch
from chapter_translator.config import settings
from chapter_translator.core.translation.orchestrator import BatchConfig, BatchStage
from chapter_translator.core.translation.registry import BatchRecord
from chapter_translator.models.schemas import BatchStatus, StartBatchRequest

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_status(record: BatchRecord) -> BatchStatus:
    state = record.state
    progress = state.progress
    return BatchStatus(
        batch_id=record.batch_id,
        status=state.stage.value,
        completed=progress.completed,
        total=progress.total,
        progress=progress.ratio,
        start=state.chapter_range.start if state.chapter_range else None,
        end=state.chapter_range.end if state.chapter_range else None,
        error_message=state.error_message,
        filename=state.document.filename if state.document else None,
    )


@router.post("/batches")
async def start_batch(
    request: StartBatchRequest,
    background_tasks: BackgroundTasks,
    registry: Registry,
):
    """Start a new translation batch in the background."""
    config = BatchConfig(
        input_source=request.input_url.strip(),
        range_spec=request.range,
        api_key=request.api_key or settings.gemini_api_key,
        model=request.model or settings.default_model,
        title_model=request.title_model or settings.default_title_model,
        delay_ms=request.delay_ms,
        isolate_item_failures=request.isolate_item_failures,
    )

    try:
        record = registry.create(config)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(
        f"[Batch API] Starting batch: batch_id={record.batch_id}, model={config.model}, "
        f"title_model={config.title_model}, range={config.range_spec!r}"
    )
    background_tasks.add_task(record.run)

    return {"batch_id": record.batch_id, "status": "started"}


@router.get("/batches/{batch_id}", response_model=BatchStatus)
async def get_batch_status(record: ValidatedBatch) -> BatchStatus:
    """Get batch progress and outcome."""
    return _to_status(record)


@router.post("/batches/{batch_id}/cancel")
async def cancel_batch(record: ValidatedBatch):
    """Request cancellation; takes effect before the next chapter."""
    if record.state.stage.is_terminal:
        raise HTTPException(
            status_code=409, detail=f"Batch already {record.state.stage.value}"
        )
    record.orchestrator.cancel()
    return {"batch_id": record.batch_id, "status": "cancelling"}


@router.get("/batches/{batch_id}/download")
async def download_batch(record: ValidatedBatch):
    """Download the translated JSON document."""
    state = record.state
    if state.stage is not BatchStage.DONE or state.output_path is None:
        raise HTTPException(
            status_code=409, detail=f"Batch is {state.stage.value}, no output yet"
        )

    return FileResponse(
        path=state.output_path,
        filename=state.document.filename,
        media_type="application/json",
    )
