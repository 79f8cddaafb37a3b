import re

import pytest

from chapter_translator.utils.text import chunk_text, safe_truncate

TERMINATORS = re.compile(r"[.!?！？。]+")


def sentence_content(text: str) -> str:
    return "".join(TERMINATORS.split(text)).strip()


def test_chunk_empty_text():
    assert chunk_text("", 1000) == []
    assert chunk_text("   ", 1000) == []
    assert chunk_text("。。！", 1000) == []


def test_chunk_short_text_is_one_chunk_without_terminators():
    assert chunk_text("A.B.C.", 1000) == ["ABC"]
    assert chunk_text("他来了。她走了！为什么？", 1000) == ["他来了她走了为什么"]


def test_chunk_respects_max_len():
    text = "。".join(["一二三四五"] * 40) + "。"
    chunks = chunk_text(text, 12)
    assert len(chunks) > 1
    assert all(len(chunk) <= 12 for chunk in chunks)
    assert "".join(chunks) == sentence_content(text)


def test_chunk_keeps_oversized_sentence_whole():
    long_sentence = "长" * 30
    text = f"短句。{long_sentence}。尾巴。"
    chunks = chunk_text(text, 10)
    assert long_sentence in chunks
    assert all(len(chunk) <= 10 for chunk in chunks if chunk != long_sentence)
    assert "".join(chunks) == sentence_content(text)


@pytest.mark.parametrize("max_len", [1, 5, 17, 100, 1000])
def test_chunk_concatenation_reproduces_sentence_content(max_len):
    text = (
        "The sword flashed. 剑光一闪！He laughed?? 他冷笑道：“你也配？”"
        " Night fell... 夜幕降临。End"
    )
    chunks = chunk_text(text, max_len)
    assert "".join(chunks) == sentence_content(text)

    sentences = [part.strip() for part in TERMINATORS.split(text)]
    for chunk in chunks:
        if len(chunk) > max_len:
            # only a single sentence may exceed the bound
            assert chunk.strip() in sentences


def test_chunk_treats_runs_of_terminators_as_one_boundary():
    assert chunk_text("What?!Really...", 1000) == ["WhatReally"]


def test_safe_truncate_short_text_unchanged():
    assert safe_truncate("Chapter 1", 80) == "Chapter 1"
    assert safe_truncate("", 5) == ""


def test_safe_truncate_breaks_at_word_boundary():
    result = safe_truncate("The quick brown fox jumps over the lazy dog", 18)
    assert result.endswith("...")
    assert len(result) <= 18 + 3
    assert result == "The quick brown..."
