from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Optional, Tuple

from PIL import Image, ImageTk

from prophoto.core.encoding import open_image


class ImageCanvas(ttk.Frame):
    """A resizable canvas that shows an encoded image scaled to fit."""

    def __init__(self, master, *, placeholder: str = "No image", bg: str = "#f1f5f9"):
        super().__init__(master)
        self._canvas = tk.Canvas(self, highlightthickness=0, bg=bg)
        self._canvas.pack(fill="both", expand=True)

        self._photo: Optional[ImageTk.PhotoImage] = None
        self._pil: Optional[Image.Image] = None
        self._encoded: Optional[str] = None

        self._canvas.bind("<Configure>", self._on_resize)

        self._placeholder_id = self._canvas.create_text(
            10, 10, anchor="nw",
            text=placeholder,
            fill="#64748b",
            font=("TkDefaultFont", 11),
        )

    def set_placeholder(self, text: str) -> None:
        self._canvas.itemconfigure(self._placeholder_id, text=text)

    def show(self, encoded: Optional[str]) -> None:
        """Display an encoded image; decoding is skipped if it is already shown."""
        if encoded == self._encoded:
            return
        try:
            pil = open_image(encoded) if encoded else None
        except (OSError, ValueError):
            # placeholder instead of the previous image; remembered so the failure is reported once
            self._encoded = encoded
            self._pil = None
            self._redraw()
            raise
        self._encoded = encoded
        self._pil = pil
        self._redraw()

    def clear(self) -> None:
        self.show(None)

    def _on_resize(self, _evt) -> None:
        self._redraw()

    def _fit_size(self, img_w: int, img_h: int, box_w: int, box_h: int) -> Tuple[int, int]:
        if img_w <= 0 or img_h <= 0 or box_w <= 2 or box_h <= 2:
            return (1, 1)
        scale = min(box_w / img_w, box_h / img_h)
        return max(1, int(img_w * scale)), max(1, int(img_h * scale))

    def _redraw(self) -> None:
        self._canvas.delete("img")
        if self._pil is None:
            self._canvas.itemconfigure(self._placeholder_id, state="normal")
            return

        self._canvas.itemconfigure(self._placeholder_id, state="hidden")

        w = max(1, self._canvas.winfo_width())
        h = max(1, self._canvas.winfo_height())

        new_w, new_h = self._fit_size(self._pil.width, self._pil.height, w, h)
        resized = self._pil.resize((new_w, new_h), Image.LANCZOS)

        self._photo = ImageTk.PhotoImage(resized)
        self._canvas.create_image((w - new_w) // 2, (h - new_h) // 2, anchor="nw", image=self._photo, tags=("img",))
