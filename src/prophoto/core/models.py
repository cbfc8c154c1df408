from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class Gender(str, Enum):
    """Style hint for how the subject is described to the model."""
    MALE = "male"
    FEMALE = "female"
    UNSPECIFIED = "unspecified"


class BackgroundTone(str, Enum):
    GREY = "grey"
    WHITE = "white"


# (value, display label) presets offered by the UI. Any non-empty label is accepted.
SUIT_COLOR_PRESETS: Tuple[Tuple[str, str], ...] = (
    ("navy", "Classic navy"),
    ("black", "Sharp black"),
    ("dark grey", "Calm dark grey"),
    ("light", "Light colored"),
)
DEFAULT_SUIT_COLOR = "navy"


@dataclass(frozen=True)
class TransformOptions:
    """
    Styling options sent along with a transform request.

    gender:
        Subject description hint. Default unspecified (neutral wording).
    suit_color:
        Free-text suit color label, e.g. "navy". Default "navy".
    background:
        Studio backdrop tone. Default grey.
    """
    gender: Gender = Gender.UNSPECIFIED
    suit_color: str = DEFAULT_SUIT_COLOR
    background: BackgroundTone = BackgroundTone.GREY


@dataclass(frozen=True)
class ContentPart:
    """
    One part of a model response, independent of the provider SDK.

    inline_data is base64 text when the part carries an image, else None.
    """
    text: Optional[str] = None
    inline_data: Optional[str] = None
    mime_type: Optional[str] = None

    @property
    def has_image(self) -> bool:
        return bool(self.inline_data)
