"""
Test Helpers
============

Helper functions for common testing operations.
"""

import io
import zipfile
from pathlib import Path
from typing import Any, Dict, Iterable, Tuple

from PIL import Image


def extract_png_metadata(png_data: bytes) -> Dict[str, Any]:
    """Extract basic metadata from PNG data."""
    if len(png_data) < 24:
        return {"error": "Invalid PNG data"}

    # Check PNG signature
    if png_data[:8] != b'\x89PNG\r\n\x1a\n':
        return {"error": "Not a valid PNG file"}

    # Extract width and height from IHDR chunk
    width = int.from_bytes(png_data[16:20], byteorder='big')
    height = int.from_bytes(png_data[20:24], byteorder='big')

    return {
        "width": width,
        "height": height,
        "file_size": len(png_data),
        "valid": True
    }


def load_png(png_data: bytes) -> Image.Image:
    """Decode PNG bytes into an RGB image."""
    return Image.open(io.BytesIO(png_data)).convert("RGB")


def create_emoji_png(path: Path, color: Tuple[int, int, int] = (255, 0, 0), size: int = 72) -> Path:
    """Write a solid square RGBA emoji image."""
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGBA", (size, size), color + (255,)).save(path, format="PNG")
    return path


def create_emoji_archive(codepoints: Iterable[str], extra_members: Iterable[str] = ()) -> bytes:
    """Build an in-memory zip laid out like the Twemoji repository archive."""
    buf = io.BytesIO()
    png = io.BytesIO()
    Image.new("RGBA", (72, 72), (0, 128, 255, 255)).save(png, format="PNG")
    with zipfile.ZipFile(buf, "w") as archive:
        for codepoint in codepoints:
            archive.writestr(f"twemoji-master/assets/72x72/{codepoint}.png", png.getvalue())
        for member in extra_members:
            archive.writestr(member, b"not an emoji")
    return buf.getvalue()


def pixel(image: Image.Image, x: float, y: float) -> Tuple[int, int, int]:
    """RGB value at a (possibly fractional) position."""
    return image.getpixel((int(x), int(y)))[:3]
