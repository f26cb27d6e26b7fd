"""Image upload storage: validate by magic bytes, write under UPLOAD_DIR, return a public URL."""

import logging
import secrets
import time
from pathlib import Path

from app.core.errors import ValidationError

logger = logging.getLogger(__name__)

UPLOAD_URL_PREFIX = "/uploads"
UPLOAD_KINDS = frozenset({"products", "gallery"})

EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "image/gif": ".gif",
}
ALLOWED_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".webp", ".gif"})


def detect_image_type(head: bytes) -> str | None:
    """Content type from the first bytes of the file, or None if it is not a supported image."""
    if head.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if head.startswith(b"\x89PNG"):
        return "image/png"
    if head.startswith(b"GIF8"):
        return "image/gif"
    if len(head) >= 12 and head[:4] == b"RIFF" and head[8:12] == b"WEBP":
        return "image/webp"
    return None


class ImageStorage:
    """Stores uploaded images on local disk under <root>/<kind>/."""

    def __init__(self, root: str | Path, max_bytes: int) -> None:
        self.root = Path(root)
        self.max_bytes = max_bytes

    def ensure_dirs(self) -> None:
        for kind in UPLOAD_KINDS:
            (self.root / kind).mkdir(parents=True, exist_ok=True)

    def save(self, kind: str, filename: str | None, content: bytes) -> str:
        """Validate and write the image; returns its URL relative to the site root."""
        if kind not in UPLOAD_KINDS:
            raise ValidationError(f"Unknown upload kind: {kind}.")
        if not content:
            raise ValidationError("Uploaded file is empty.")
        if len(content) > self.max_bytes:
            raise ValidationError(
                f"File size must not exceed {self.max_bytes // (1024 * 1024)} MB."
            )
        content_type = detect_image_type(content[:12])
        if content_type is None:
            raise ValidationError("Only JPEG, PNG, WebP and GIF images are allowed.")

        ext = Path(filename or "").suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            ext = EXTENSIONS[content_type]
        name = f"{int(time.time())}_{secrets.token_hex(8)}{ext}"

        target_dir = self.root / kind
        target_dir.mkdir(parents=True, exist_ok=True)
        (target_dir / name).write_bytes(content)
        logger.info(
            "Image stored",
            extra={"kind": kind, "file": name, "bytes": len(content), "content_type": content_type},
        )
        return f"{UPLOAD_URL_PREFIX}/{kind}/{name}"
