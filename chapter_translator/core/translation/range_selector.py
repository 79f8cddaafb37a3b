"""Chapter range selection.

Parses a human-entered range such as ``"3-7"`` into a validated window over
the input chapters.
"""

import re
from typing import Optional

from .models import ChapterRange

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def _leading_int(value: Optional[str]) -> Optional[int]:
    """Parse the leading integer of a string ("12abc" -> 12), or None."""
    if not value:
        return None
    match = _LEADING_INT_RE.match(value)
    if not match:
        return None
    return int(match.group(1))


def select_range(range_spec: Optional[str], item_count: int) -> ChapterRange:
    """Resolve a range spec against the number of available chapters.

    Either side of ``"<start>-<end>"`` may be missing or non-numeric; start
    then defaults to 1 and end to ``item_count`` (zero counts as missing).
    Both bounds are clamped to ``[1, item_count]`` and swapped if inverted.
    Never raises.

    Args:
        range_spec: Range string, e.g. "3-7", "5-", "-10" or empty
        item_count: Number of chapters in the input

    Returns:
        ChapterRange with 1 <= start <= end <= item_count, or {1, 0} when
        there are no chapters
    """
    if item_count < 1:
        return ChapterRange(start=1, end=0)

    if not range_spec or not range_spec.strip():
        return ChapterRange(start=1, end=item_count)

    start_part, _, end_part = range_spec.strip().partition("-")
    start = _leading_int(start_part) or 1
    end = _leading_int(end_part) or item_count

    start = min(max(start, 1), item_count)
    end = min(max(end, 1), item_count)
    if start > end:
        start, end = end, start

    return ChapterRange(start=start, end=end)
