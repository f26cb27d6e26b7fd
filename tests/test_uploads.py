"""Unit tests for app.services.uploads: magic-byte detection and on-disk storage."""

import tempfile
import unittest
from pathlib import Path

from app.core.errors import ValidationError
from app.services.uploads import ImageStorage, detect_image_type

JPEG = b"\xff\xd8\xff\xe0" + b"\x00" * 32
PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
GIF = b"GIF89a" + b"\x00" * 32
WEBP = b"RIFF\x24\x00\x00\x00WEBPVP8 " + b"\x00" * 32


class TestDetectImageType(unittest.TestCase):
    def test_known_types(self) -> None:
        self.assertEqual(detect_image_type(JPEG[:12]), "image/jpeg")
        self.assertEqual(detect_image_type(PNG[:12]), "image/png")
        self.assertEqual(detect_image_type(GIF[:12]), "image/gif")
        self.assertEqual(detect_image_type(WEBP[:12]), "image/webp")

    def test_unknown(self) -> None:
        self.assertIsNone(detect_image_type(b"%PDF-1.7"))
        self.assertIsNone(detect_image_type(b"RIFF\x00\x00\x00\x00WAVE"))
        self.assertIsNone(detect_image_type(b""))


class TestImageStorage(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.storage = ImageStorage(self.root, max_bytes=1024)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_ensure_dirs(self) -> None:
        self.storage.ensure_dirs()
        self.assertTrue((self.root / "products").is_dir())
        self.assertTrue((self.root / "gallery").is_dir())

    def test_save_returns_public_url(self) -> None:
        url = self.storage.save("gallery", "Photo.JPEG", JPEG)
        self.assertTrue(url.startswith("/uploads/gallery/"))
        self.assertTrue(url.endswith(".jpeg"))
        self.assertEqual((self.root / "gallery" / url.rsplit("/", 1)[1]).read_bytes(), JPEG)

    def test_extension_follows_content_when_name_is_odd(self) -> None:
        url = self.storage.save("products", "../../evil.exe", PNG)
        self.assertTrue(url.endswith(".png"))
        stored = list((self.root / "products").iterdir())
        self.assertEqual(len(stored), 1)
        self.assertNotIn("evil", stored[0].name)

    def test_names_are_unique(self) -> None:
        first = self.storage.save("products", "a.png", PNG)
        second = self.storage.save("products", "a.png", PNG)
        self.assertNotEqual(first, second)

    def test_rejections(self) -> None:
        cases = [
            ("avatars", PNG),
            ("products", b""),
            ("products", b"plain text file"),
            ("products", PNG + b"\x00" * 1024),
        ]
        for kind, content in cases:
            with self.subTest(kind=kind, size=len(content)):
                with self.assertRaises(ValidationError):
                    self.storage.save(kind, "x.png", content)
