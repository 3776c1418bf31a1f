"""Thin wrappers around Pillow saving utilities."""

from __future__ import annotations

import io
from pathlib import Path

from PIL import Image


def encode_png(image: Image.Image, *, mode: str | None = None) -> bytes:
    """Return PNG-encoded bytes for the provided Pillow image."""

    buffer = io.BytesIO()
    target = image.convert(mode) if mode is not None else image
    target.save(buffer, format="PNG")
    return buffer.getvalue()


def save_png(image: Image.Image, destination: Path, *, mode: str | None = None) -> Path:
    """Persist ``image`` as PNG at ``destination``."""

    destination = destination.expanduser()
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_bytes(encode_png(image, mode=mode))
    return destination


__all__ = ["encode_png", "save_png"]
