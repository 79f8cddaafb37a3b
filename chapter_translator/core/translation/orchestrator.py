"""Batch Orchestrator - Drives one translation batch end to end.

Stages: FETCHING -> TITLE_TRANSLATING -> BODY_TRANSLATING (once per chapter)
-> ASSEMBLING -> DONE. A fatal error moves the batch to FAILED; a cancel
request moves it to CANCELLED before the next step.
"""

import asyncio
import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Awaitable, Callable, Optional, Tuple

import httpx

from chapter_translator.config import settings
from chapter_translator.core.errors import TranslationUnavailable
from chapter_translator.core.io import InputLoader, OutputWriter
from chapter_translator.utils.text import safe_truncate

from .models import (
    BatchProgress,
    ChapterRange,
    InputItem,
    OutputDocument,
    ResultItem,
)
from .pipeline import (
    FallbackTranslator,
    GatewayFactory,
    PrimaryTranslator,
    TitleTranslator,
)
from .range_selector import select_range

logger = logging.getLogger(__name__)

UNAVAILABLE_MODEL_NAME = "unavailable"

ProgressCallback = Callable[[int, int], None]
SleepFunc = Callable[[float], Awaitable[None]]


class BatchStage(str, Enum):
    """Lifecycle stage of a batch."""

    FETCHING = "fetching"
    TITLE_TRANSLATING = "title_translating"
    BODY_TRANSLATING = "body_translating"
    ASSEMBLING = "assembling"
    DONE = "done"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (BatchStage.DONE, BatchStage.FAILED, BatchStage.CANCELLED)


def parse_delay_ms(value: object) -> int:
    """Delay between chapters in ms; missing, non-numeric or <= 0 means the default."""
    try:
        delay = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return settings.default_delay_ms
    return delay if delay > 0 else settings.default_delay_ms


@dataclass
class BatchConfig:
    """Caller-supplied configuration for one batch."""

    input_source: str
    range_spec: Optional[str] = None
    api_key: Optional[str] = None
    model: str = field(default_factory=lambda: settings.default_model)
    title_model: str = field(default_factory=lambda: settings.default_title_model)
    delay_ms: int = field(default_factory=lambda: settings.default_delay_ms)
    provider: str = field(default_factory=lambda: settings.primary_provider)
    isolate_item_failures: bool = False

    def __post_init__(self):
        self.delay_ms = parse_delay_ms(self.delay_ms)
        if self.api_key is None:
            self.api_key = settings.gemini_api_key

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000


@dataclass(frozen=True)
class BatchState:
    """Immutable snapshot of a batch; each step produces a new one."""

    stage: BatchStage = BatchStage.FETCHING
    total_items: int = 0
    chapter_range: Optional[ChapterRange] = None
    chapters: Tuple[InputItem, ...] = ()
    titles: Tuple[Optional[str], ...] = ()
    results: Tuple[ResultItem, ...] = ()
    document: Optional[OutputDocument] = None
    output_path: Optional[Path] = None
    error_message: Optional[str] = None

    @property
    def cursor(self) -> int:
        """Index of the next chapter to translate."""
        return len(self.results)

    @property
    def progress(self) -> BatchProgress:
        return BatchProgress(completed=len(self.results), total=len(self.chapters))

    def title_for(self, index: int) -> str:
        """Translated title at ``index``, or the original if missing or empty."""
        translated = self.titles[index] if index < len(self.titles) else None
        return translated or self.chapters[index].title


class BatchOrchestrator:
    """Orchestrates one translation batch.

    Chapter bodies are translated strictly one after another, with a fixed
    pause after each chapter to stay under the backends' rate limits.
    """

    def __init__(
        self,
        config: BatchConfig,
        primary: PrimaryTranslator,
        titles: TitleTranslator,
        loader: InputLoader,
        writer: Optional[OutputWriter] = None,
        sleep: SleepFunc = asyncio.sleep,
        on_progress: Optional[ProgressCallback] = None,
        owned_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the orchestrator.

        Args:
            config: Batch configuration
            primary: Chapter body translator (LLM with fallback)
            titles: Batch title translator
            loader: Input document loader
            writer: Output writer; when None the document is only kept in state
            sleep: Awaitable sleep used for pacing (injectable for tests)
            on_progress: Called with (completed, total) after each chapter
            owned_client: HTTP client shared by the backends, closed when run() ends
        """
        self.config = config
        self.primary = primary
        self.titles = titles
        self.loader = loader
        self.writer = writer
        self._sleep = sleep
        self._on_progress = on_progress
        self._owned_client = owned_client
        self._cancel_requested = False
        self._state = BatchState()

    @classmethod
    def from_config(
        cls,
        config: BatchConfig,
        writer: Optional[OutputWriter] = None,
        on_progress: Optional[ProgressCallback] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> "BatchOrchestrator":
        """Build an orchestrator with LiteLLM and Google Translate backends.

        Without a ``client`` one is opened for the batch and shared by the
        input loader and the fallback; the orchestrator closes it after run().
        """
        chapter_gateway = GatewayFactory.create(
            provider=config.provider, api_key=config.api_key, model=config.model
        )
        title_gateway = GatewayFactory.create(
            provider=config.provider, api_key=config.api_key, model=config.title_model
        )

        owned_client = None
        if client is None:
            client = owned_client = httpx.AsyncClient(follow_redirects=True)
        fallback = FallbackTranslator(client=client)

        logger.info(
            f"[Orchestrator] Initialized: input={config.input_source}, range={config.range_spec!r}, "
            f"model={config.model}, title_model={config.title_model}, delay_ms={config.delay_ms}"
        )

        return cls(
            config=config,
            primary=PrimaryTranslator(chapter_gateway, fallback),
            titles=TitleTranslator(
                title_gateway, fallback, tolerate_failures=config.isolate_item_failures
            ),
            loader=InputLoader(client=client),
            writer=writer,
            on_progress=on_progress,
            owned_client=owned_client,
        )

    @property
    def state(self) -> BatchState:
        return self._state

    def cancel(self):
        """Request cancellation; observed before the next step."""
        self._cancel_requested = True

    async def run(self) -> BatchState:
        """Run the batch to completion.

        Returns:
            Final state (DONE or CANCELLED)

        Raises:
            InputFormatError: If the input cannot be fetched or parsed
            TranslationUnavailable: If both backends fail for a chapter
        """
        try:
            return await self._run_steps()
        finally:
            if self._owned_client is not None:
                await self._owned_client.aclose()

    async def _run_steps(self) -> BatchState:
        state = self._state

        while not state.stage.is_terminal:
            if self._cancel_requested:
                state = replace(state, stage=BatchStage.CANCELLED)
                logger.info(
                    f"[Orchestrator] Cancelled after {state.cursor}/{len(state.chapters)} chapters"
                )
                break

            previous_stage = state.stage
            try:
                state = await self.process_next(state)
            except Exception as e:
                self._state = replace(state, stage=BatchStage.FAILED, error_message=str(e))
                logger.error(f"Error: {e}")
                raise
            self._state = state

            if previous_stage is BatchStage.BODY_TRANSLATING:
                self._report_progress(state.progress)
                await self._sleep(self.config.delay_seconds)

        self._state = state
        return state

    async def process_next(self, state: BatchState) -> BatchState:
        """Perform exactly one step of the batch and return the new state."""
        if state.stage is BatchStage.FETCHING:
            return await self._fetch(state)
        if state.stage is BatchStage.TITLE_TRANSLATING:
            return await self._translate_titles(state)
        if state.stage is BatchStage.BODY_TRANSLATING:
            return await self._translate_next_body(state)
        if state.stage is BatchStage.ASSEMBLING:
            return self._assemble(state)
        return state

    async def _fetch(self, state: BatchState) -> BatchState:
        logger.info("Fetching JSON…")
        items = await self.loader.load(self.config.input_source)

        chapter_range = select_range(self.config.range_spec, len(items))
        chapters = tuple(chapter_range.slice(items))
        logger.info(f"Processing {chapter_range.start}-{chapter_range.end} of {len(items)} items")

        return replace(
            state,
            stage=BatchStage.TITLE_TRANSLATING,
            total_items=len(items),
            chapter_range=chapter_range,
            chapters=chapters,
        )

    async def _translate_titles(self, state: BatchState) -> BatchState:
        logger.info("Translating titles…")
        translated = await self.titles.translate_titles([c.title for c in state.chapters])

        next_stage = BatchStage.BODY_TRANSLATING if state.chapters else BatchStage.ASSEMBLING
        return replace(state, stage=next_stage, titles=tuple(translated))

    async def _translate_next_body(self, state: BatchState) -> BatchState:
        index = state.cursor
        chapter = state.chapters[index]
        title = state.title_for(index)
        logger.info(f"[{index + 1}/{len(state.chapters)}] Translating: {safe_truncate(title, 80)}")

        try:
            outcome = await self.primary.translate(chapter.content)
            result = ResultItem(title=title, content=outcome.text, model=outcome.model_used)
        except TranslationUnavailable as e:
            if not self.config.isolate_item_failures:
                raise
            logger.error(f"[Orchestrator] Chapter {index + 1} left untranslated: {e}")
            result = ResultItem(title=title, content="", model=UNAVAILABLE_MODEL_NAME)

        results = state.results + (result,)
        next_stage = (
            BatchStage.ASSEMBLING if len(results) >= len(state.chapters)
            else BatchStage.BODY_TRANSLATING
        )
        return replace(state, stage=next_stage, results=results)

    def _assemble(self, state: BatchState) -> BatchState:
        document = OutputDocument(range=state.chapter_range, items=state.results)

        output_path = None
        if self.writer is not None:
            output_path = self.writer.write(document)
        logger.info("Done! File saved.")

        return replace(state, stage=BatchStage.DONE, document=document, output_path=output_path)

    def _report_progress(self, progress: BatchProgress):
        if self._on_progress is None:
            return
        try:
            self._on_progress(progress.completed, progress.total)
        except Exception as e:
            logger.warning(f"[Orchestrator] Progress callback failed: {e}")
