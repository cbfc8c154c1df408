from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable, Optional, Union

from prophoto.app.export import export_image
from prophoto.app.state import WorkflowState
from prophoto.core.encoding import DEFAULT_MIME_TYPE, mime_type_for_suffix, sniff_mime_type, to_data_uri
from prophoto.core.models import BackgroundTone, Gender, TransformOptions
from prophoto.service.transformer import TransformationService

logger = logging.getLogger(__name__)

TRANSFORM_ERROR_MESSAGE = "Something went wrong while transforming your photo. Please try again."


class TransformController:
    """
    Drives the upload -> transform -> export workflow for one session.

    Owns the session's ``WorkflowState`` and ``TransformOptions``. All methods
    are meant to be called from a single event loop; ``start_transform`` is
    the only one that suspends on the network.
    """

    def __init__(self, service: TransformationService, state: Optional[WorkflowState] = None):
        self.service = service
        self.state = state if state is not None else WorkflowState()
        self.options = TransformOptions()
        self._in_flight = False

    # ---------- Queries ----------

    @property
    def busy(self) -> bool:
        """True while a service call is outstanding, even if its result will be discarded."""
        return self._in_flight

    @property
    def can_transform(self) -> bool:
        return self.state.original_image is not None and not self.state.is_processing and not self._in_flight

    @property
    def can_export(self) -> bool:
        return self.state.transformed_image is not None

    # ---------- Input ----------

    def load_image(self, file_bytes: Optional[bytes], mime_type: Optional[str] = None) -> WorkflowState:
        if not file_bytes:
            return self.state

        mime = mime_type or sniff_mime_type(file_bytes) or DEFAULT_MIME_TYPE
        self.state.load(to_data_uri(file_bytes, mime))
        logger.info("Loaded image (%d bytes, %s)", len(file_bytes), mime)
        return self.state

    async def load_image_file(self, path: Union[str, Path, None]) -> WorkflowState:
        if not path:
            return self.state
        p = Path(path)
        data = await asyncio.to_thread(p.read_bytes)
        return self.load_image(data, mime_type_for_suffix(p.suffix))

    def set_option(self, key: str, value: Any) -> TransformOptions:
        if key == "gender":
            self.options = replace(self.options, gender=Gender(value))
        elif key == "background":
            self.options = replace(self.options, background=BackgroundTone(value))
        elif key == "suit_color":
            label = str(value).strip()
            if not label:
                raise ValueError("suit_color must not be empty")
            self.options = replace(self.options, suit_color=label)
        else:
            raise KeyError(f"Unknown option: {key}")
        return self.options

    # ---------- Transform ----------

    async def start_transform(self, on_started: Optional[Callable[[], None]] = None) -> WorkflowState:
        """
        Run one transform for the loaded image with the current options.

        ``on_started`` is called once the request is marked as processing,
        before the service call suspends.

        No-op unless an image is loaded and nothing is in flight. If the image
        is reloaded or the session reset before the call resolves, its outcome
        is dropped.
        """
        state = self.state
        if state.original_image is None or state.is_processing or self._in_flight:
            return state

        generation = state.generation
        original = state.original_image
        options = self.options

        self._in_flight = True
        state.is_processing = True
        state.last_error = None
        logger.info("Transform started (generation %d, %s)", generation, options)
        if on_started is not None:
            on_started()

        try:
            result = await self.service.transform(original, options)
        except Exception:
            if state.generation != generation:
                logger.info("Discarding failed transform for replaced image (generation %d)", generation)
                return state
            logger.exception("Transform failed")
            state.last_error = TRANSFORM_ERROR_MESSAGE
            return state
        finally:
            self._in_flight = False
            # holds on every exit, cancellation included
            if state.generation == generation:
                state.is_processing = False

        if state.generation != generation:
            logger.info("Discarding stale transform result (generation %d, now %d)", generation, state.generation)
            return state

        state.transformed_image = result
        logger.info("Transform finished (generation %d)", generation)
        return state

    # ---------- Session ----------

    def reset(self) -> WorkflowState:
        self.state.reset()
        return self.state

    def export_result(self, destination: Union[str, Path]) -> Optional[Path]:
        """Write the transformed image to ``destination``; None when there is nothing to export."""
        if self.state.transformed_image is None:
            return None
        path = export_image(self.state.transformed_image, destination)
        logger.info("Exported result to %s", path)
        return path
