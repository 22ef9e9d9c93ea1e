import json
import logging
from pathlib import Path
from typing import Optional

import httpx
from pydantic import ValidationError

from app.exceptions import FetchError, ParseError
from app.schemas.blog import BlogData
from app.services.navigation import category_index

logger = logging.getLogger(__name__)


class BlogDataRepo:
    """
    Loads the blog JSON document (posts + category counts) once per call.
    Nothing is cached between calls; the caller owns the returned data.
    """

    def __init__(
        self,
        source: str,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ):
        self.source = source
        self.timeout = timeout
        self.client = client

    def load(self) -> BlogData:
        payload = self._decode(self._read())
        try:
            data = BlogData.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Blog data in {self.source} failed validation: {e}")
            raise ParseError(self.source, str(e)) from e

        if not data.categories:
            data.categories = category_index(data.posts)

        logger.info(f"Loaded {len(data.posts)} posts from {self.source}")
        return data

    def _decode(self, raw: str) -> dict:
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Malformed JSON in {self.source}: {e}")
            raise ParseError(self.source, str(e)) from e

        if not isinstance(payload, dict):
            raise ParseError(self.source, "top-level value must be an object")
        return payload

    def _read(self) -> str:
        if self.source.startswith(("http://", "https://")):
            return self._fetch_remote()
        return self._read_local()

    def _fetch_remote(self) -> str:
        try:
            if self.client is not None:
                response = self.client.get(self.source)
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    response = client.get(self.source)
        except httpx.RequestError as e:
            logger.error(f"HTTP error loading {self.source}: {e}")
            raise FetchError(self.source, reason=str(e)) from e

        if response.is_error:
            logger.error(f"Failed to load {self.source}: {response.status_code}")
            raise FetchError(self.source, response.status_code, response.reason_phrase)
        return response.text

    def _read_local(self) -> str:
        path = Path(self.source)
        if not path.is_file():
            logger.error(f"Blog data file not found: {self.source}")
            raise FetchError(self.source, 404, "Not Found")
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Could not read {self.source}: {e}")
            raise FetchError(self.source, reason=str(e)) from e
