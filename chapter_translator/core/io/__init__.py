"""Input and output boundaries of a translation batch."""

from .loader import InputLoader
from .writer import OutputWriter

__all__ = ["InputLoader", "OutputWriter"]
