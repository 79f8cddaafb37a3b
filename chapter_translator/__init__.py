"""Batch Chinese-to-English novel chapter translator."""

__version__ = "0.1.0"
