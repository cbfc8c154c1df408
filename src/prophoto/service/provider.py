"""
Image model providers.

The transformation service only talks to the small ``ImageModel`` interface,
so the Gemini backend can be swapped for a fake in tests.
"""

from __future__ import annotations

import abc
import base64
import logging
from typing import Any, List, Optional

from google import genai
from google.genai import types

from prophoto.config import GEMINI_IMAGE_MODEL
from prophoto.core.models import ContentPart
from prophoto.service.exceptions import ServiceError

logger = logging.getLogger(__name__)


class ImageModel(abc.ABC):
    """A hosted model that edits one image according to a text instruction."""

    @abc.abstractmethod
    async def generate(self, image_data: str, mime_type: str, instruction: str) -> List[ContentPart]:
        """
        Submit base64 ``image_data`` plus ``instruction`` in one request and
        return the response parts in order.
        """
        raise NotImplementedError


class GeminiImageModel(ImageModel):
    """``ImageModel`` backed by the Google Gemini API (google-genai SDK)."""

    def __init__(self, api_key: Optional[str], model: str = GEMINI_IMAGE_MODEL):
        self.model = model
        self._client: Optional[genai.Client] = None
        if api_key:
            self._client = genai.Client(api_key=api_key)
        else:
            logger.warning("GEMINI_API_KEY not set; transforms will fail until it is configured.")

    async def generate(self, image_data: str, mime_type: str, instruction: str) -> List[ContentPart]:
        if self._client is None:
            raise ServiceError("Gemini API key is not configured (set GEMINI_API_KEY).")

        image_part = types.Part.from_bytes(data=base64.b64decode(image_data), mime_type=mime_type)

        logger.debug("Gemini request: model=%s mime=%s prompt_chars=%d", self.model, mime_type, len(instruction))
        response = await self._client.aio.models.generate_content(
            model=self.model,
            contents=[image_part, instruction],
            config=types.GenerateContentConfig(response_modalities=["IMAGE", "TEXT"]),
        )
        return response_parts(response)


def response_parts(response: Any) -> List[ContentPart]:
    """
    Flatten the first candidate of a Gemini response into ``ContentPart``s.

    A response without candidates or content (e.g. blocked by safety filters)
    yields an empty list.
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []

    out: List[ContentPart] = []
    for part in parts:
        blob = getattr(part, "inline_data", None)
        data = getattr(blob, "data", None) if blob is not None else None
        if data:
            if isinstance(data, str):
                payload = data
            else:
                payload = base64.b64encode(data).decode("ascii")
            out.append(ContentPart(inline_data=payload, mime_type=getattr(blob, "mime_type", None)))
        else:
            out.append(ContentPart(text=getattr(part, "text", None)))
    return out
