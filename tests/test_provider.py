import base64
import unittest
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

from tests._test_path import SRC  # noqa: F401

from prophoto.service import provider as p
from prophoto.service.exceptions import ServiceError


def _response(*parts):
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=list(parts)))])


class TestResponseParts(unittest.TestCase):
    def test_image_bytes_are_base64_encoded(self):
        resp = _response(
            SimpleNamespace(text="caption", inline_data=None),
            SimpleNamespace(text=None, inline_data=SimpleNamespace(data=b"\x89PNG", mime_type="image/png")),
        )
        parts = p.response_parts(resp)
        self.assertEqual(len(parts), 2)
        self.assertFalse(parts[0].has_image)
        self.assertEqual(parts[0].text, "caption")
        self.assertEqual(parts[1].inline_data, base64.b64encode(b"\x89PNG").decode())
        self.assertEqual(parts[1].mime_type, "image/png")

    def test_no_candidates(self):
        self.assertEqual(p.response_parts(SimpleNamespace(candidates=None)), [])
        self.assertEqual(p.response_parts(SimpleNamespace(candidates=[SimpleNamespace(content=None)])), [])


class TestGeminiImageModel(unittest.IsolatedAsyncioTestCase):
    async def test_missing_key_fails_on_first_use(self):
        with self.assertLogs("prophoto.service.provider", level="WARNING"):
            model = p.GeminiImageModel(api_key=None)
        with self.assertRaises(ServiceError):
            await model.generate("QUJD", "image/png", "make it nice")

    async def test_sends_image_and_text_in_one_request(self):
        client = MagicMock()
        client.aio.models.generate_content = AsyncMock(return_value=_response(
            SimpleNamespace(text=None, inline_data=SimpleNamespace(data=b"out", mime_type="image/png")),
        ))

        with patch.object(p.genai, "Client", return_value=client) as client_cls:
            model = p.GeminiImageModel(api_key="secret", model="test-model")
            parts = await model.generate(base64.b64encode(b"in").decode(), "image/jpeg", "instruction")

        client_cls.assert_called_once_with(api_key="secret")
        kwargs = client.aio.models.generate_content.await_args.kwargs
        self.assertEqual(kwargs["model"], "test-model")
        image_part, text = kwargs["contents"]
        self.assertEqual(image_part.inline_data.data, b"in")
        self.assertEqual(image_part.inline_data.mime_type, "image/jpeg")
        self.assertEqual(text, "instruction")
        self.assertEqual(parts[0].inline_data, base64.b64encode(b"out").decode())
