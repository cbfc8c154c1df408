from __future__ import annotations

import asyncio
import logging
import threading
import tkinter as tk
from concurrent.futures import Future
from tkinter import filedialog, messagebox, ttk
from typing import Any, Callable, Coroutine, Optional

from prophoto.app.controller import TransformController
from prophoto.config import APP_NAME, EXPORT_FILENAME, Settings
from prophoto.core.models import SUIT_COLOR_PRESETS, BackgroundTone, Gender
from prophoto.logging_utils import setup_logging
from prophoto.service.provider import GeminiImageModel
from prophoto.service.transformer import TransformationService
from prophoto.ui.image_canvas import ImageCanvas

logger = logging.getLogger(__name__)

GENDER_LABELS = (
    (Gender.UNSPECIFIED, "Detect automatically"),
    (Gender.MALE, "Male style"),
    (Gender.FEMALE, "Female style"),
)


class AsyncRunner:
    """
    Runs controller coroutines on a background asyncio loop and hands the
    outcome back to the Tk thread.
    """

    def __init__(self, master: tk.Misc):
        self.master = master
        self.loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self.loop.run_forever, name="prophoto-loop", daemon=True)
        self._thread.start()

    def submit(
        self,
        coro: Coroutine[Any, Any, Any],
        on_done: Callable[[Optional[BaseException]], None],
    ) -> Future:
        future = asyncio.run_coroutine_threadsafe(coro, self.loop)

        def finish(fut: Future) -> None:
            err = asyncio.CancelledError() if fut.cancelled() else fut.exception()
            self.master.after(0, lambda: on_done(err))

        future.add_done_callback(finish)
        return future

    def stop(self) -> None:
        self.loop.call_soon_threadsafe(self.loop.stop)


class ProPhotoApp(ttk.Frame):
    """Main window: upload, style options, transform, save."""

    def __init__(self, master: tk.Tk, controller: TransformController):
        super().__init__(master)
        self.master = master
        self.controller = controller
        self.runner = AsyncRunner(master)

        self._build_style()
        self._build_layout()
        self._bind_shortcuts()

        self.set_status("Ready. Upload a front-facing photo to begin.")
        self.render()

    # ---------- UI construction ----------

    def _build_style(self) -> None:
        style = ttk.Style(self.master)
        if "clam" in style.theme_names():
            style.theme_use("clam")
        style.configure("Error.TLabel", foreground="#b91c1c")

    def _build_layout(self) -> None:
        self.pack(fill="both", expand=True)

        # Top toolbar
        toolbar = ttk.Frame(self, padding=(10, 8))
        toolbar.pack(side="top", fill="x")

        self.btn_upload = ttk.Button(toolbar, text="Upload", command=self.on_upload)
        self.btn_transform = ttk.Button(toolbar, text="Transform", command=self.on_transform)
        self.btn_save = ttk.Button(toolbar, text="Download", command=self.on_save)
        self.btn_reset = ttk.Button(toolbar, text="Reset", command=self.on_reset)

        self.btn_upload.pack(side="left")
        ttk.Separator(toolbar, orient="vertical").pack(side="left", fill="y", padx=8)
        self.btn_transform.pack(side="left")
        self.btn_save.pack(side="left", padx=(6, 0))
        self.btn_reset.pack(side="left", padx=(12, 0))

        self.progress = ttk.Progressbar(toolbar, mode="indeterminate", length=120)
        self.progress.pack(side="right")

        main = ttk.PanedWindow(self, orient="horizontal")
        main.pack(side="top", fill="both", expand=True, padx=10, pady=(0, 10))

        # Left pane: original + options
        left = ttk.Frame(main)
        main.add(left, weight=1)

        lf_orig = ttk.LabelFrame(left, text="Your photo", padding=8)
        lf_orig.pack(fill="both", expand=True)
        self.original_canvas = ImageCanvas(lf_orig, placeholder="Click Upload to choose a photo.")
        self.original_canvas.pack(fill="both", expand=True)

        options = ttk.LabelFrame(left, text="Options", padding=8)
        options.pack(fill="x", pady=(8, 0))
        options.columnconfigure(1, weight=1)

        ttk.Label(options, text="Gender style:").grid(row=0, column=0, sticky="w", pady=3)
        self.var_gender = tk.StringVar(value=dict(GENDER_LABELS)[self.controller.options.gender])
        self.cmb_gender = ttk.Combobox(
            options, textvariable=self.var_gender, state="readonly",
            values=[label for _g, label in GENDER_LABELS],
        )
        self.cmb_gender.grid(row=0, column=1, sticky="ew", pady=3)
        self.cmb_gender.bind("<<ComboboxSelected>>", lambda e: self.on_gender_changed())

        ttk.Label(options, text="Suit color:").grid(row=1, column=0, sticky="w", pady=3)
        preset_labels = dict(SUIT_COLOR_PRESETS)
        self.var_suit = tk.StringVar(value=preset_labels.get(self.controller.options.suit_color, self.controller.options.suit_color))
        self.cmb_suit = ttk.Combobox(
            options, textvariable=self.var_suit, state="readonly",
            values=[label for _v, label in SUIT_COLOR_PRESETS],
        )
        self.cmb_suit.grid(row=1, column=1, sticky="ew", pady=3)
        self.cmb_suit.bind("<<ComboboxSelected>>", lambda e: self.on_suit_changed())

        ttk.Label(options, text="Background:").grid(row=2, column=0, sticky="w", pady=3)
        bg_row = ttk.Frame(options)
        bg_row.grid(row=2, column=1, sticky="w", pady=3)
        self.var_background = tk.StringVar(value=self.controller.options.background.value)
        ttk.Radiobutton(
            bg_row, text="Studio grey", value=BackgroundTone.GREY.value,
            variable=self.var_background, command=self.on_background_changed,
        ).pack(side="left")
        ttk.Radiobutton(
            bg_row, text="Clean white", value=BackgroundTone.WHITE.value,
            variable=self.var_background, command=self.on_background_changed,
        ).pack(side="left", padx=(12, 0))

        self.error_label = ttk.Label(left, text="", style="Error.TLabel", wraplength=420)
        self.error_label.pack(fill="x", pady=(8, 0))

        # Right pane: result
        right = ttk.Frame(main)
        main.add(right, weight=1)

        lf_result = ttk.LabelFrame(right, text="Result", padding=8)
        lf_result.pack(fill="both", expand=True)
        self.result_canvas = ImageCanvas(lf_result, placeholder="Choose a photo on the left and start the transform.")
        self.result_canvas.pack(fill="both", expand=True)

        ttk.Label(
            right,
            text="Tip: a front-facing photo with a natural expression and bright light works best. "
                 "Avoid glare on glasses.",
            wraplength=420,
        ).pack(fill="x", pady=(8, 0))

        # Status bar
        status = ttk.Frame(self, padding=(10, 6))
        status.pack(side="bottom", fill="x")

        self.status_var = tk.StringVar(value="Ready.")
        ttk.Label(status, textvariable=self.status_var).pack(side="left")

    def _bind_shortcuts(self) -> None:
        self.master.bind_all("<Control-o>", lambda e: self.on_upload())
        self.master.bind_all("<Command-o>", lambda e: self.on_upload())

        self.master.bind_all("<Control-r>", lambda e: self.on_transform())
        self.master.bind_all("<Command-r>", lambda e: self.on_transform())

        self.master.bind_all("<Control-s>", lambda e: self.on_save())
        self.master.bind_all("<Command-s>", lambda e: self.on_save())

    # ---------- Utilities ----------

    def set_status(self, text: str) -> None:
        self.status_var.set(text)

    def render(self) -> None:
        """Sync widgets with the controller's state."""
        state = self.controller.state
        busy = state.is_processing or self.controller.busy

        self.btn_transform.state(["!disabled"] if self.controller.can_transform else ["disabled"])
        self.btn_save.state(["!disabled"] if self.controller.can_export and not busy else ["disabled"])

        if busy:
            self.progress.start(12)
        else:
            self.progress.stop()

        for canvas, encoded in (
            (self.original_canvas, state.original_image),
            (self.result_canvas, state.transformed_image),
        ):
            try:
                canvas.show(encoded)
            except (OSError, ValueError) as e:
                logger.exception("Could not display image")
                messagebox.showerror("Display failed", f"Could not display the image.\n\n{e}")

        if state.is_processing:
            self.result_canvas.set_placeholder("Almost there! Replacing the background and balancing the light…")
        else:
            self.result_canvas.set_placeholder("Choose a photo on the left and start the transform.")

        self.error_label.configure(text=state.last_error or "")

    # ---------- Upload ----------

    def on_upload(self) -> None:
        path = filedialog.askopenfilename(
            title="Select a photo",
            filetypes=[
                ("Image files", "*.jpg *.jpeg *.png *.bmp *.tif *.tiff *.webp"),
                ("All files", "*.*"),
            ],
        )
        if not path:
            return

        def done(err: Optional[BaseException]) -> None:
            if err is not None:
                messagebox.showerror("Upload failed", f"Could not open image.\n\n{err}")
                self.set_status("Upload failed.")
            else:
                self.set_status("Loaded photo. Pick your options and press Transform.")
            self.render()

        self.runner.submit(self.controller.load_image_file(path), done)

    # ---------- Options ----------

    def on_gender_changed(self) -> None:
        by_label = {label: g for g, label in GENDER_LABELS}
        self.controller.set_option("gender", by_label[self.var_gender.get()])

    def on_suit_changed(self) -> None:
        by_label = {label: value for value, label in SUIT_COLOR_PRESETS}
        self.controller.set_option("suit_color", by_label[self.var_suit.get()])

    def on_background_changed(self) -> None:
        self.controller.set_option("background", self.var_background.get())

    # ---------- Transform ----------

    def on_transform(self) -> None:
        if not self.controller.can_transform:
            return

        def done(err: Optional[BaseException]) -> None:
            state = self.controller.state
            if err is not None:
                logger.error("Transform task crashed: %s", err)
            if state.last_error:
                self.set_status("Transform failed.")
            elif state.transformed_image is not None:
                self.set_status("Done. Press Download to save your photo.")
            self.render()

        def started() -> None:
            self.master.after(0, self.render)

        self.runner.submit(self.controller.start_transform(on_started=started), done)
        self.set_status("AI is transforming your photo…")

    # ---------- Download / Reset ----------

    def on_save(self) -> None:
        if not self.controller.can_export:
            return
        path = filedialog.asksaveasfilename(
            title="Save photo",
            initialfile=EXPORT_FILENAME,
            defaultextension=".png",
            filetypes=[("PNG image", "*.png")],
        )
        if not path:
            return
        try:
            saved = self.controller.export_result(path)
        except (OSError, ValueError) as e:
            logger.exception("Export failed")
            messagebox.showerror("Save failed", f"Could not save the photo.\n\n{e}")
            self.set_status("Save failed.")
            return
        self.set_status(f"Saved: {saved}")

    def on_reset(self) -> None:
        async def reset() -> None:
            self.controller.reset()

        def done(_err: Optional[BaseException]) -> None:
            self.set_status("Reset complete.")
            self.render()

        self.runner.submit(reset(), done)

    def close(self) -> None:
        self.runner.stop()
        self.master.destroy()


def run() -> None:
    settings = Settings.from_env()
    setup_logging(settings.log_level)

    service = TransformationService(GeminiImageModel(settings.api_key, model=settings.model))
    controller = TransformController(service)

    root = tk.Tk()
    root.title(APP_NAME)
    root.geometry("1100x720")
    root.minsize(900, 600)

    app = ProPhotoApp(root, controller)
    root.protocol("WM_DELETE_WINDOW", app.close)

    root.mainloop()
