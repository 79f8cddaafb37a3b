import asyncio
import json
import time

import httpx
import pytest

from chapter_translator.core.errors import InputFormatError, TranslationUnavailable
from chapter_translator.core.io import OutputWriter
from chapter_translator.core.translation.models import FALLBACK_MODEL_NAME
from chapter_translator.core.translation.orchestrator import (
    BatchConfig,
    BatchOrchestrator,
    BatchStage,
    BatchState,
    parse_delay_ms,
)

from fakes import FakeFallback, FakeGateway, FakeLoader, make_items


async def test_full_range_translates_all_items_in_order(build_orchestrator, sleep_recorder):
    items = make_items(5)
    orchestrator = build_orchestrator(items)

    state = await orchestrator.run()

    assert state.stage is BatchStage.DONE
    assert state.chapter_range.as_tuple() == (1, 5)
    results = state.document.items
    assert [r.title for r in results] == [f"EN:{it.title}" for it in items]
    assert [r.content for r in results] == [f"EN:{it.content}" for it in items]
    assert all(r.model == "fake-model" for r in results)
    assert orchestrator.config.delay_ms == 4000
    assert sleep_recorder.calls == [4.0] * 5


async def test_primary_always_failing_uses_fallback_everywhere(build_orchestrator):
    items = make_items(4)
    fallback = FakeFallback()
    orchestrator = build_orchestrator(
        items,
        body_gateway=FakeGateway(error=RuntimeError("quota")),
        title_gateway=FakeGateway(error=RuntimeError("quota")),
        fallback=fallback,
    )

    state = await orchestrator.run()

    for item, result in zip(items, state.document.items):
        assert result.model == FALLBACK_MODEL_NAME
        assert result.content == f"G[{item.content.replace('。', '').replace('！', '')}]"
        assert result.title == f"G[{item.title}]"


async def test_short_title_response_keeps_last_original_title(build_orchestrator):
    items = make_items(3)
    title_gateway = FakeGateway(responder=lambda b: "Chapter One\nChapter Two")
    orchestrator = build_orchestrator(items, title_gateway=title_gateway)

    state = await orchestrator.run()

    titles = [r.title for r in state.document.items]
    assert titles == ["Chapter One", "Chapter Two", items[2].title]


async def test_empty_title_line_falls_back_to_original(build_orchestrator):
    items = make_items(3)
    title_gateway = FakeGateway(responder=lambda b: "Chapter One\n\nChapter Three")
    orchestrator = build_orchestrator(items, title_gateway=title_gateway)

    state = await orchestrator.run()

    assert state.document.items[1].title == items[1].title


async def test_range_selects_slice_and_names_output(build_orchestrator, tmp_path):
    items = make_items(10)
    orchestrator = build_orchestrator(items, range_spec="7-3", writer=OutputWriter(tmp_path))

    state = await orchestrator.run()

    assert state.chapter_range.as_tuple() == (3, 7)
    assert [r.content for r in state.document.items] == [
        f"EN:{it.content}" for it in items[2:7]
    ]
    assert state.output_path == tmp_path / "translated_3_7.json"
    written = json.loads(state.output_path.read_text(encoding="utf-8"))
    assert [list(row.keys()) for row in written] == [["title", "content", "model"]] * 5


async def test_progress_is_reported_after_each_chapter(build_orchestrator):
    seen = []
    orchestrator = build_orchestrator(make_items(3), on_progress=lambda c, t: seen.append((c, t)))

    await orchestrator.run()

    assert seen == [(1, 3), (2, 3), (3, 3)]


async def test_failing_progress_callback_does_not_stop_batch(build_orchestrator):
    def broken(completed, total):
        raise RuntimeError("ui gone")

    state = await build_orchestrator(make_items(2), on_progress=broken).run()

    assert state.stage is BatchStage.DONE
    assert len(state.document.items) == 2


async def test_custom_delay_applies_after_every_chapter(build_orchestrator, sleep_recorder):
    await build_orchestrator(make_items(3), delay_ms=250).run()

    assert sleep_recorder.calls == [0.25, 0.25, 0.25]


async def test_pacing_takes_at_least_n_times_delay(build_orchestrator):
    orchestrator = build_orchestrator(make_items(3), delay_ms=30, sleep=asyncio.sleep)

    started = time.monotonic()
    await orchestrator.run()
    elapsed = time.monotonic() - started

    assert elapsed >= 3 * 0.030


async def test_input_error_is_fatal_and_recorded(build_orchestrator):
    orchestrator = build_orchestrator([], loader=FakeLoader(error="JSON is not an array"))

    with pytest.raises(InputFormatError):
        await orchestrator.run()

    assert orchestrator.state.stage is BatchStage.FAILED
    assert orchestrator.state.error_message == "JSON is not an array"
    assert orchestrator.state.document is None


async def test_fallback_failure_aborts_batch_by_default(build_orchestrator, tmp_path):
    orchestrator = build_orchestrator(
        make_items(3),
        body_gateway=FakeGateway(error=RuntimeError("down")),
        fallback=FakeFallback(fail=True),
        writer=OutputWriter(tmp_path),
    )

    with pytest.raises(TranslationUnavailable):
        await orchestrator.run()

    assert orchestrator.state.stage is BatchStage.FAILED
    assert list(tmp_path.iterdir()) == []


async def test_isolated_failures_record_placeholder_and_continue(build_orchestrator):
    orchestrator = build_orchestrator(
        make_items(2),
        body_gateway=FakeGateway(error=RuntimeError("down")),
        title_gateway=FakeGateway(error=RuntimeError("down")),
        fallback=FakeFallback(fail=True),
        isolate=True,
    )

    state = await orchestrator.run()

    assert state.stage is BatchStage.DONE
    assert [r.model for r in state.document.items] == ["unavailable", "unavailable"]
    assert [r.content for r in state.document.items] == ["", ""]
    assert [r.title for r in state.document.items] == ["第1章", "第2章"]


async def test_cancel_stops_before_next_chapter(build_orchestrator, sleep_recorder):
    orchestrator = build_orchestrator(make_items(5))

    def cancel_after_two(completed, total):
        if completed == 2:
            orchestrator.cancel()

    orchestrator._on_progress = cancel_after_two
    state = await orchestrator.run()

    assert state.stage is BatchStage.CANCELLED
    assert len(state.results) == 2
    assert state.document is None


async def test_empty_input_produces_empty_document(build_orchestrator, sleep_recorder):
    title_gateway = FakeGateway()
    orchestrator = build_orchestrator([], title_gateway=title_gateway)

    state = await orchestrator.run()

    assert state.stage is BatchStage.DONE
    assert state.document.items == ()
    assert state.document.filename == "translated_1_0.json"
    assert title_gateway.calls == []
    assert sleep_recorder.calls == []


async def test_process_next_advances_one_stage_at_a_time(build_orchestrator):
    orchestrator = build_orchestrator(make_items(2))

    state = BatchState()
    stages = []
    while not state.stage.is_terminal:
        state = await orchestrator.process_next(state)
        stages.append(state.stage)

    assert stages == [
        BatchStage.TITLE_TRANSLATING,
        BatchStage.BODY_TRANSLATING,
        BatchStage.BODY_TRANSLATING,
        BatchStage.ASSEMBLING,
        BatchStage.DONE,
    ]


@pytest.mark.parametrize(
    "value,expected",
    [(None, 4000), ("", 4000), ("abc", 4000), (0, 4000), (-5, 4000), ("2500", 2500), (100, 100)],
)
def test_parse_delay_ms(value, expected):
    assert parse_delay_ms(value) == expected


def test_batch_config_defaults_delay():
    config = BatchConfig(input_source="x.json", delay_ms=None)
    assert config.delay_ms == 4000
    assert config.delay_seconds == 4.0


async def test_from_config_shares_one_client_and_closes_it_after_run():
    orchestrator = BatchOrchestrator.from_config(
        BatchConfig(input_source="novel.json", api_key="k", delay_ms=1)
    )
    client = orchestrator.loader._client
    assert client is not None
    assert orchestrator.primary.fallback._client is client
    assert orchestrator.titles.fallback._client is client

    orchestrator.loader = FakeLoader(error="JSON is not an array")
    with pytest.raises(InputFormatError):
        await orchestrator.run()

    assert client.is_closed


async def test_caller_supplied_client_is_left_open():
    async with httpx.AsyncClient() as client:
        orchestrator = BatchOrchestrator.from_config(
            BatchConfig(input_source="novel.json", api_key="k"), client=client
        )
        orchestrator.loader = FakeLoader(error="JSON is not an array")
        with pytest.raises(InputFormatError):
            await orchestrator.run()

        assert not client.is_closed
