"""Text utilities for fallback chunking and log-safe display."""

import re
from typing import List

# Latin and CJK sentence terminators; runs of them count as one boundary
SENTENCE_TERMINATORS_RE = re.compile(r"[.!?！？。]+")


def chunk_text(text: str, max_len: int = 1000) -> List[str]:
    """Split text into sentence-bounded chunks of at most ``max_len`` chars.

    The text is split on sentence terminators, which are discarded. Fragments
    are accumulated into a buffer; when adding the next fragment would push a
    non-empty buffer past ``max_len`` the buffer is emitted and a new one is
    started. A single sentence longer than ``max_len`` is kept whole.

    Args:
        text: Text to split
        max_len: Maximum chunk length in characters

    Returns:
        List of chunks in original order (empty for empty input)
    """
    chunks: List[str] = []
    buffer = ""

    for fragment in SENTENCE_TERMINATORS_RE.split(text):
        candidate = buffer + fragment
        if len(candidate) > max_len and buffer:
            chunks.append(buffer)
            buffer = fragment
        else:
            buffer = candidate

    if buffer.strip():
        chunks.append(buffer.strip())

    return chunks


def safe_truncate(text: str, max_chars: int, suffix: str = "...") -> str:
    """Truncate text for log lines, preferring a word or punctuation boundary.

    Args:
        text: Text to truncate
        max_chars: Maximum characters (excluding suffix)
        suffix: Suffix to append if truncated (default "...")

    Returns:
        Truncated text with suffix if needed
    """
    if not text or len(text) <= max_chars:
        return text

    truncated = text[:max_chars]

    # Look back up to 20 characters for a cleaner break point
    break_chars = {" ", "\n", "\t", ",", ".", "!", "?", ";", ":", "-", "。", "，", "、"}
    for i in range(1, min(20, max_chars - 1) + 1):
        if truncated[-i] in break_chars:
            truncated = truncated[: len(truncated) - i + 1].rstrip()
            break

    return truncated + suffix
