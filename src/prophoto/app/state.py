from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class WorkflowState:
    """
    Mutable state for a single GUI session.

    The view reads this state, while the controller is responsible for
    orchestrating transitions (load -> transform -> export).

    ``generation`` identifies the currently loaded image. It changes on every
    load and reset, so a transform that finishes after either can tell its
    result no longer belongs here.
    """
    # Input
    original_image: Optional[str] = None

    # Output
    transformed_image: Optional[str] = None

    # Progress
    is_processing: bool = False
    last_error: Optional[str] = None

    generation: int = 0

    @property
    def is_empty(self) -> bool:
        return self.original_image is None

    def load(self, original_image: str) -> None:
        """Replace the session with a freshly loaded original."""
        self.original_image = original_image
        self.transformed_image = None
        self.is_processing = False
        self.last_error = None
        self.generation += 1

    def reset(self) -> None:
        """Clear all session state (used by a Reset button)."""
        self.original_image = None
        self.transformed_image = None
        self.is_processing = False
        self.last_error = None
        self.generation += 1
