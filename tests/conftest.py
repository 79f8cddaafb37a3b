import pytest

from chapter_translator.core.translation.orchestrator import BatchConfig, BatchOrchestrator
from chapter_translator.core.translation.pipeline import PrimaryTranslator, TitleTranslator

from fakes import FakeFallback, FakeGateway, FakeLoader, SleepRecorder


@pytest.fixture
def sleep_recorder():
    return SleepRecorder()


@pytest.fixture
def build_orchestrator(sleep_recorder):
    """Factory for orchestrators wired to fake backends."""

    def _build(
        items,
        range_spec="",
        body_gateway=None,
        title_gateway=None,
        fallback=None,
        delay_ms=None,
        writer=None,
        isolate=False,
        on_progress=None,
        loader=None,
        sleep=None,
    ):
        fallback = fallback or FakeFallback()
        config = BatchConfig(
            input_source="https://example.com/novel.json",
            range_spec=range_spec,
            api_key="test-key",
            model="fake-model",
            title_model="fake-title-model",
            delay_ms=delay_ms,
            isolate_item_failures=isolate,
        )
        return BatchOrchestrator(
            config=config,
            primary=PrimaryTranslator(body_gateway or FakeGateway(), fallback),
            titles=TitleTranslator(
                title_gateway or FakeGateway(model="fake-title-model"),
                fallback,
                tolerate_failures=isolate,
            ),
            loader=loader or FakeLoader(items),
            writer=writer,
            sleep=sleep or sleep_recorder,
            on_progress=on_progress,
        )

    return _build
