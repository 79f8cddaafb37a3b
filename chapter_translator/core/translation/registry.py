"""In-process registry of translation batches.

Batches live only as long as the process; nothing is persisted. Each batch
writes its output under its own subdirectory, so batches over the same range
never share a file.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional

from chapter_translator.config import settings
from chapter_translator.core.io import OutputWriter

from .orchestrator import BatchConfig, BatchOrchestrator, BatchState

logger = logging.getLogger(__name__)


@dataclass
class BatchRecord:
    """A submitted batch and its orchestrator."""

    batch_id: str
    orchestrator: BatchOrchestrator
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def state(self) -> BatchState:
        return self.orchestrator.state

    async def run(self):
        """Run the batch; fatal errors are recorded in the state, not raised."""
        try:
            await self.orchestrator.run()
        except Exception as e:
            logger.error(f"[Registry] Batch {self.batch_id} failed: {e}")


class BatchRegistry:
    """Keeps track of batches started through the API.

    Only the newest ``max_finished`` finished batches are kept; older ones
    are dropped from memory (their output files stay on disk).
    """

    def __init__(self, output_dir: Optional[Path] = None, max_finished: Optional[int] = None):
        self.output_dir = Path(output_dir or settings.output_dir)
        self.max_finished = (
            max_finished if max_finished is not None else settings.max_finished_batches
        )
        self._batches: Dict[str, BatchRecord] = {}

    @staticmethod
    def new_batch_id() -> str:
        return uuid.uuid4().hex

    def writer_for(self, batch_id: str) -> OutputWriter:
        """Output writer confined to the batch's own directory."""
        return OutputWriter(self.output_dir / batch_id)

    def create(self, config: BatchConfig) -> BatchRecord:
        """Register a new batch with LiteLLM and Google Translate backends."""
        batch_id = self.new_batch_id()
        orchestrator = BatchOrchestrator.from_config(config, writer=self.writer_for(batch_id))
        record = self.add(BatchRecord(batch_id=batch_id, orchestrator=orchestrator))
        logger.info(f"[Registry] Created batch {batch_id}")
        return record

    def add(self, record: BatchRecord) -> BatchRecord:
        self._batches[record.batch_id] = record
        self._evict_finished()
        return record

    def get(self, batch_id: str) -> Optional[BatchRecord]:
        return self._batches.get(batch_id)

    def _evict_finished(self):
        finished = [
            batch_id
            for batch_id, record in self._batches.items()
            if record.state.stage.is_terminal
        ]
        # Dicts keep insertion order, so the oldest finished batches come first
        for batch_id in finished[: max(0, len(finished) - self.max_finished)]:
            del self._batches[batch_id]
            logger.info(f"[Registry] Evicted finished batch {batch_id}")

    def __len__(self) -> int:
        return len(self._batches)


batch_registry = BatchRegistry()
