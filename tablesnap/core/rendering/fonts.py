"""
Font Provider
=============

Font loading and text measurement on top of Pillow's FreeType bindings.
The layout engine and renderer only ever see a measurer, never a font file.
"""

from pathlib import Path
from typing import Optional, Sequence, Union

from PIL import ImageFont

from tablesnap.config.logging import get_logger

logger = get_logger(__name__)

# Covers both ascender and descender extents
REFERENCE_GLYPHS = "Mg"

DEFAULT_FONT_CANDIDATES: Sequence[str] = (
    "/usr/share/fonts/truetype/inter/Inter-Regular.ttf",
    "/usr/share/fonts/opentype/inter/Inter-Regular.otf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    "/Library/Fonts/Arial.ttf",
    "/System/Library/Fonts/Supplemental/Arial.ttf",
    "C:\\Windows\\Fonts\\arial.ttf",
)


class FontSetupError(Exception):
    """Exception raised when a font cannot be loaded for measurement or drawing."""

    pass


class PillowTextMeasurer:
    """Measures strings with a loaded FreeType font."""

    def __init__(self, font: ImageFont.FreeTypeFont, source: str = "default") -> None:
        self.font = font
        self.source = source

    def measure(self, text: str) -> float:
        """Return the advance width of *text* in pixels."""
        if not text:
            return 0.0
        return float(self.font.getlength(text))

    def line_height(self, reference: str = REFERENCE_GLYPHS) -> float:
        """Return the height spanned by *reference* from its top to its lowest descender."""
        _, top, _, bottom = self.font.getbbox(reference, anchor="ls")
        return float(bottom - top)


def _first_existing(paths: Sequence[str]) -> Optional[str]:
    for p in paths:
        if p and Path(p).is_file():
            return p
    return None


def load_font(
    size: float,
    font_path: Optional[Union[str, Path]] = None,
    candidates: Sequence[str] = DEFAULT_FONT_CANDIDATES,
) -> PillowTextMeasurer:
    """
    Load a font and wrap it in a measurer.

    Args:
        size: Font size in points
        font_path: Explicit font file; failure to load it is an error
        candidates: System font files tried in order when no path is given

    Returns:
        PillowTextMeasurer for the loaded font

    Raises:
        FontSetupError: If the requested font (or any usable fallback) cannot be loaded
    """
    if font_path is not None:
        try:
            font = ImageFont.truetype(str(font_path), size=size)
        except OSError as e:
            logger.error("Failed to load font", font_path=str(font_path), error=str(e))
            raise FontSetupError(f"failed to load font {font_path}: {e}")
        logger.debug("Font loaded", font_path=str(font_path), size=size)
        return PillowTextMeasurer(font, source=str(font_path))

    chosen = _first_existing(candidates)
    if chosen:
        try:
            font = ImageFont.truetype(chosen, size=size)
            logger.debug("System font loaded", font_path=chosen, size=size)
            return PillowTextMeasurer(font, source=chosen)
        except OSError as e:
            logger.warning("System font unusable, using bundled default", font_path=chosen, error=str(e))

    font = ImageFont.load_default(size=size)
    if not isinstance(font, ImageFont.FreeTypeFont):
        raise FontSetupError("FreeType support is required to render text at a given size")
    logger.debug("Bundled default font loaded", size=size)
    return PillowTextMeasurer(font, source="default")
