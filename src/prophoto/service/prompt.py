from __future__ import annotations

from prophoto.core.models import BackgroundTone, Gender, TransformOptions

_SUBJECT = {
    Gender.MALE: "man",
    Gender.FEMALE: "woman",
    Gender.UNSPECIFIED: "person",
}

_UNDERGARMENT = {
    Gender.MALE: "shirt",
    Gender.FEMALE: "blouse",
    Gender.UNSPECIFIED: "shirt or blouse",
}

_BACKDROP = {
    BackgroundTone.WHITE: "clean white",
    BackgroundTone.GREY: "soft grey",
}


def build_instruction(options: TransformOptions) -> str:
    """Build the natural-language edit instruction sent with the photo."""
    subject = _SUBJECT[options.gender]
    backdrop = _BACKDROP[options.background]
    suit = options.suit_color.strip() or "navy"

    return "\n".join([
        f"Retouch the {subject} in this photo into a natural-looking professional resume headshot.",
        "",
        "Requirements:",
        f"1. Background: replace the background with a {backdrop} studio backdrop.",
        f"2. Attire: dress the {subject} in a neat {suit} business suit with a {_UNDERGARMENT[options.gender]}.",
        "3. Lighting: apply bright, even lighting as if shot in a professional photo studio.",
        "4. Identity: preserve the facial features, face shape and identity of the subject "
        "as closely as possible while giving a trustworthy impression.",
        "5. Quality: produce a sharp, high-resolution portrait.",
    ])
