"""Input document loading.

The input is a JSON array of ``{"title": ..., "content": ...}`` objects,
fetched from an http(s) URL or read from a local file.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

import httpx
from pydantic import ValidationError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from chapter_translator.config import settings
from chapter_translator.core.errors import InputFormatError
from chapter_translator.core.translation.models import InputItem

logger = logging.getLogger(__name__)


class InputLoader:
    """Fetches and validates the chapter list."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
        attempts: Optional[int] = None,
        retry_wait: Optional[wait_base] = None,
    ):
        self._client = client
        self.timeout = timeout or settings.input_timeout
        self.attempts = attempts or settings.input_fetch_attempts
        self.retry_wait = retry_wait or wait_exponential(multiplier=1, min=1, max=10)

    async def load(self, source: str) -> List[InputItem]:
        """Load and validate the input document.

        Args:
            source: http(s) URL or local file path

        Returns:
            Chapters in document order

        Raises:
            InputFormatError: If the document cannot be fetched or parsed, or
                is not a list of {title, content} objects
        """
        if source.startswith(("http://", "https://")):
            data = await self._fetch_json(source)
        else:
            data = self._read_json(Path(source))

        return self.parse(data)

    @staticmethod
    def parse(data: object) -> List[InputItem]:
        """Validate decoded JSON as a list of chapters."""
        if not isinstance(data, list):
            raise InputFormatError("JSON is not an array")

        items = []
        for index, raw in enumerate(data, start=1):
            try:
                items.append(InputItem.model_validate(raw))
            except ValidationError as e:
                raise InputFormatError(
                    f"Item {index} is not a {{title, content}} object: "
                    f"{e.error_count()} validation error(s)"
                ) from e
        return items

    async def _fetch_json(self, url: str) -> object:
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.attempts),
                wait=self.retry_wait,
                retry=retry_if_exception_type(httpx.TransportError),
                reraise=True,
            ):
                with attempt:
                    response = await self._get(url)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            raise InputFormatError(f"Failed to fetch input from {url}: {e}") from e
        except ValueError as e:
            raise InputFormatError(f"Input at {url} is not valid JSON: {e}") from e

    async def _get(self, url: str) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(url, timeout=self.timeout)
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            return await client.get(url)

    @staticmethod
    def _read_json(path: Path) -> object:
        try:
            with path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except OSError as e:
            raise InputFormatError(f"Failed to read input file {path}: {e}") from e
        except ValueError as e:
            raise InputFormatError(f"Input file {path} is not valid JSON: {e}") from e
