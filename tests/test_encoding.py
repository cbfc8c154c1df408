import base64
import unittest

from tests._test_path import SRC  # noqa: F401

from prophoto.core import encoding as enc
from tests.fakes import png_bytes


class TestEncoding(unittest.TestCase):
    def test_roundtrip_preserves_bytes(self):
        raw = png_bytes()
        uri = enc.to_data_uri(raw, "image/png")
        self.assertTrue(uri.startswith("data:image/png;base64,"))
        self.assertEqual(enc.decode_data_uri(uri), raw)

    def test_split_with_and_without_prefix(self):
        self.assertEqual(enc.split_data_uri("data:image/jpeg;base64,QUJD"), ("image/jpeg", "QUJD"))
        self.assertEqual(enc.split_data_uri("QUJD"), (None, "QUJD"))

    def test_decode_bare_base64(self):
        self.assertEqual(enc.decode_data_uri(base64.b64encode(b"abc").decode()), b"abc")

    def test_decode_rejects_garbage(self):
        with self.assertRaises(ValueError):
            enc.decode_data_uri("data:image/png;base64,not*base64!")

    def test_sniff_mime_type(self):
        self.assertEqual(enc.sniff_mime_type(png_bytes()), "image/png")
        self.assertIsNone(enc.sniff_mime_type(b"definitely not an image"))

    def test_mime_type_for_suffix(self):
        self.assertEqual(enc.mime_type_for_suffix(".JPG"), "image/jpeg")
        self.assertIsNone(enc.mime_type_for_suffix(".txt"))

    def test_open_image(self):
        img = enc.open_image(enc.to_data_uri(png_bytes((12, 8))))
        self.assertEqual(img.size, (12, 8))
        self.assertEqual(img.mode, "RGB")
