from __future__ import annotations

import logging
from typing import List, Optional

from prophoto.core.encoding import DEFAULT_MIME_TYPE, split_data_uri, wrap_base64
from prophoto.core.models import ContentPart, TransformOptions
from prophoto.service.exceptions import GenerationFailedError, ServiceError, TransformError
from prophoto.service.prompt import build_instruction
from prophoto.service.provider import ImageModel

logger = logging.getLogger(__name__)


class TransformationService:
    """
    Turns an encoded photo into an encoded professional headshot.

    One request/response round trip per call: no retries, no timeout.
    """

    def __init__(self, model: ImageModel):
        self.model = model

    async def transform(self, encoded_image: str, options: TransformOptions) -> str:
        """
        Send ``encoded_image`` and an instruction built from ``options`` to the
        model and return the first generated image as a PNG data URI.

        Raises:
          GenerationFailedError: the model returned no image part.
          ServiceError: the model call failed.
        """
        mime_type, payload = split_data_uri(encoded_image)
        instruction = build_instruction(options)

        try:
            parts = await self.model.generate(payload, mime_type or DEFAULT_MIME_TYPE, instruction)
        except TransformError:
            logger.exception("Image model call failed")
            raise
        except Exception as e:
            logger.exception("Image model call failed")
            raise ServiceError(f"Image model call failed: {e}") from e

        image = first_image_part(parts)
        if image is None:
            texts = [p.text for p in parts if p.text]
            logger.error("Model returned no image (%d parts). Text: %s", len(parts), " ".join(texts)[:500])
            raise GenerationFailedError("Image generation failed: the model returned no image.")

        return wrap_base64(image.inline_data or "", "image/png")


def first_image_part(parts: List[ContentPart]) -> Optional[ContentPart]:
    for part in parts:
        if part.has_image:
            return part
    return None
