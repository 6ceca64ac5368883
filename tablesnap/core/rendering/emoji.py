"""
Emoji Image Lookup
==================

Pictographs that survive glyph substitution can be drawn from PNG images
(Twemoji naming: ``<hex codepoint>.png``). Images are searched in the user
cache first, then in an optional bundled set. A pictograph without an image
is drawn as ordinary text.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import AbstractSet, Dict, List, Optional, Protocol, Sequence

from PIL import Image

from tablesnap.config.logging import get_logger
from tablesnap.core.table.glyphs import DEFAULT_GLYPH_MAP

logger = get_logger(__name__)

VARIATION_SELECTOR = "\ufe0f"

EMOJI_RANGES = [
    (0x1F300, 0x1F9FF),  # Misc Symbols and Pictographs, Emoticons, Supplemental
    (0x2600, 0x26FF),  # Miscellaneous Symbols
    (0x2700, 0x27BF),  # Dingbats
    (0x2300, 0x23FF),  # Miscellaneous Technical
]
EMOJI_SINGLES = frozenset({0x2B55})

# Substitution output is monochrome by intent, never swapped for an image
FALLBACK_GLYPHS = frozenset(DEFAULT_GLYPH_MAP.values())


def is_emoji(char: str) -> bool:
    """Cheap range check for a single pictograph code point."""
    if not char:
        return False
    codepoint = ord(char[0])
    if codepoint in EMOJI_SINGLES:
        return True
    return any(start <= codepoint <= end for start, end in EMOJI_RANGES)


def emoji_codepoint(char: str) -> str:
    """Twemoji file stem for a pictograph, e.g. ``1f534``."""
    return format(ord(char[0]), "x")


class GlyphImageLookup(Protocol):
    """Anything that can return an image for a pictograph, or None."""

    def get_image(self, char: str) -> Optional[Image.Image]: ...


@dataclass(frozen=True)
class EmojiSegment:
    """A run of plain text, or a single pictograph."""

    text: str
    is_emoji: bool = False
    supported: bool = False


def split_emoji_segments(
    text: str,
    lookup: Optional[GlyphImageLookup] = None,
    plain: AbstractSet[str] = FALLBACK_GLYPHS,
) -> List[EmojiSegment]:
    """
    Split *text* into plain-text runs and single pictographs.

    A variation selector directly after a pictograph is absorbed into it.
    ``supported`` tells whether *lookup* has an image for the pictograph.
    Characters in *plain* are always text, even inside pictograph ranges.
    """
    segments: List[EmojiSegment] = []
    buf: List[str] = []
    previous_emoji = False

    for char in text:
        if char == VARIATION_SELECTOR and previous_emoji:
            continue
        if is_emoji(char) and char not in plain:
            if buf:
                segments.append(EmojiSegment("".join(buf)))
                buf = []
            supported = lookup is not None and lookup.get_image(char) is not None
            segments.append(EmojiSegment(char, is_emoji=True, supported=supported))
            previous_emoji = True
        else:
            buf.append(char)
            previous_emoji = False

    if buf:
        segments.append(EmojiSegment("".join(buf)))
    return segments


class EmojiImageLookup:
    """Finds pictograph images in an ordered list of directories."""

    def __init__(self, directories: Sequence[Path]) -> None:
        self.directories = [Path(d) for d in directories if d is not None]
        self._cache: Dict[str, Optional[Image.Image]] = {}
        self.logger = logger.bind(component="emoji_lookup")

    def get_image(self, char: str) -> Optional[Image.Image]:
        if not char:
            return None
        key = emoji_codepoint(char)
        if key not in self._cache:
            self._cache[key] = self._load(key)
        return self._cache[key]

    def _load(self, codepoint: str) -> Optional[Image.Image]:
        for directory in self.directories:
            path = directory / f"{codepoint}.png"
            if not path.is_file():
                continue
            try:
                with Image.open(path) as img:
                    return img.convert("RGBA")
            except (OSError, ValueError) as e:
                self.logger.debug("Unreadable emoji image", path=str(path), error=str(e))
        self.logger.debug("No emoji image", codepoint=codepoint)
        return None


def emoji_square_size(measurer) -> int:
    """Edge length in whole pixels of a pasted pictograph: one line high."""
    return max(1, round(measurer.line_height()))


class EmojiAwareMeasurer:
    """Measurer that sizes supported pictographs as squares one line high."""

    def __init__(
        self, measurer, lookup: GlyphImageLookup, plain: AbstractSet[str] = FALLBACK_GLYPHS
    ) -> None:
        self.measurer = measurer
        self.lookup = lookup
        self.plain = plain

    def line_height(self, *args) -> float:
        return self.measurer.line_height(*args)

    def measure(self, text: str) -> float:
        emoji_size = emoji_square_size(self.measurer)
        width = 0.0
        for segment in split_emoji_segments(text, self.lookup, self.plain):
            if segment.supported:
                width += emoji_size
            else:
                width += self.measurer.measure(segment.text)
        return width


def build_emoji_lookup(cache_dir: Optional[Path], bundle_dir: Optional[Path] = None) -> EmojiImageLookup:
    """Lookup over the installed pack first, then the bundled minimal set."""
    return EmojiImageLookup([d for d in (cache_dir, bundle_dir) if d is not None])
