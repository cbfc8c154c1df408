import unittest
from types import SimpleNamespace
from unittest import skipIf
from unittest.mock import MagicMock, patch

from tests._test_path import SRC  # noqa: F401

from prophoto.app.controller import TransformController
from prophoto.core.encoding import to_data_uri
from prophoto.service.transformer import TransformationService
from tests.fakes import FakeModel, png_bytes


def _can_import_ui() -> bool:
    try:
        import prophoto.ui.main_window  # noqa: F401
        return True
    except Exception:
        return False


def _fake_view(controller, original_canvas=None, result_canvas=None):
    return SimpleNamespace(
        controller=controller,
        btn_transform=MagicMock(),
        btn_save=MagicMock(),
        progress=MagicMock(),
        original_canvas=original_canvas or MagicMock(),
        result_canvas=result_canvas or MagicMock(),
        error_label=MagicMock(),
    )


@skipIf(not _can_import_ui(), "tkinter / Pillow ImageTk not available")
class TestRender(unittest.TestCase):
    def setUp(self):
        from prophoto.ui import main_window
        self.mw = main_window

    def test_undecodable_original_still_updates_result_pane(self):
        c = TransformController(TransformationService(FakeModel()))
        c.load_image(png_bytes())
        c.state.transformed_image = "data:image/png;base64,T0xE"
        c.load_image(b"not an image")

        view = _fake_view(c, original_canvas=MagicMock(show=MagicMock(side_effect=ValueError("bad image"))))
        with patch.object(self.mw, "messagebox") as mb, self.assertLogs("prophoto.ui", level="ERROR"):
            self.mw.ProPhotoApp.render(view)

        view.result_canvas.show.assert_called_once_with(None)
        mb.showerror.assert_called_once()


@skipIf(not _can_import_ui(), "tkinter / Pillow ImageTk not available")
class TestImageCanvasShow(unittest.TestCase):
    def setUp(self):
        from prophoto.ui.image_canvas import ImageCanvas
        self.show = ImageCanvas.show

    def test_failed_decode_drops_previous_image(self):
        previous = to_data_uri(png_bytes((4, 4)))
        canvas = SimpleNamespace(_encoded=previous, _pil=object(), _redraw=MagicMock())
        broken = to_data_uri(b"not an image")

        with self.assertRaises(OSError):
            self.show(canvas, broken)

        self.assertIsNone(canvas._pil)
        canvas._redraw.assert_called_once()

        # same image again: nothing to retry, no second error
        self.show(canvas, broken)
        self.assertIsNone(canvas._pil)

    def test_successful_decode_replaces_image(self):
        canvas = SimpleNamespace(_encoded=None, _pil=None, _redraw=MagicMock())
        encoded = to_data_uri(png_bytes((5, 3)))

        self.show(canvas, encoded)

        self.assertEqual(canvas._encoded, encoded)
        self.assertEqual(canvas._pil.size, (5, 3))


@skipIf(not _can_import_ui(), "tkinter / Pillow ImageTk not available")
class TestAsyncRunner(unittest.TestCase):
    def test_cancelled_future_reports_cancellation(self):
        import asyncio
        from prophoto.ui.main_window import AsyncRunner

        master = MagicMock()
        master.after.side_effect = lambda _ms, fn: fn()
        runner = AsyncRunner(master)
        outcomes = []
        try:
            future = runner.submit(asyncio.sleep(3600), outcomes.append)
            self.assertTrue(future.cancel())
        finally:
            runner.stop()

        self.assertEqual(len(outcomes), 1)
        self.assertIsInstance(outcomes[0], asyncio.CancelledError)

    def test_result_is_handed_back(self):
        import asyncio
        import threading
        from prophoto.ui.main_window import AsyncRunner

        master = MagicMock()
        master.after.side_effect = lambda _ms, fn: fn()
        runner = AsyncRunner(master)
        outcomes = []
        handed_back = threading.Event()

        def on_done(err):
            outcomes.append(err)
            handed_back.set()

        try:
            runner.submit(asyncio.sleep(0), on_done)
            self.assertTrue(handed_back.wait(timeout=5))
        finally:
            runner.stop()

        self.assertEqual(outcomes, [None])
