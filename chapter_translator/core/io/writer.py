"""Output document writing."""

import logging
from pathlib import Path
from typing import Optional

from chapter_translator.config import settings
from chapter_translator.core.translation.models import OutputDocument

logger = logging.getLogger(__name__)


class OutputWriter:
    """Writes a finished batch as translated_{start}_{end}.json."""

    def __init__(self, output_dir: Optional[Path] = None):
        self.output_dir = Path(output_dir or settings.output_dir)

    def write(self, document: OutputDocument) -> Path:
        """Serialize the document into the output directory.

        Returns:
            Path of the written file
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        output_path = self.output_dir / document.filename

        # Temp file, then an atomic replace
        temp_path = output_path.with_name(f"{output_path.name}.tmp")
        temp_path.write_text(document.to_json(), encoding="utf-8")
        temp_path.replace(output_path)

        logger.info(f"[Output] Wrote {len(document.items)} chapters to {output_path}")
        return output_path
