"""Utility modules for chapter_translator."""

from .text import chunk_text, safe_truncate

__all__ = ["chunk_text", "safe_truncate"]
