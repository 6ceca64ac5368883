"""
Glyph Substitution
==================

Most system fonts ship no color emoji. Known pictograph sequences are
replaced with single monochrome characters before the table is parsed.
"""

import re
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional

from tablesnap.config.logging import get_logger

logger = get_logger(__name__)

CHECK = "✓"
CROSS = "✗"
CIRCLE = "○"
WARNING = "⚠"
DOT = "●"
WHITE_SQUARE = "□"
BLACK_SQUARE = "■"

DEFAULT_GLYPH_MAP: Mapping[str, str] = MappingProxyType(
    {
        "✅": CHECK,  # white heavy check mark
        "❌": CROSS,  # cross mark
        "⭕": CIRCLE,  # heavy large circle
        "❎": CROSS,  # negative squared cross mark
        "\u2611\ufe0f": CHECK,  # ballot box with check
        "\u2714\ufe0f": CHECK,  # heavy check mark
        "\u2716\ufe0f": CROSS,  # heavy multiplication x
        "\u26a0\ufe0f": WARNING,  # warning sign
        "\U0001f534": DOT,  # red circle
        "\U0001f7e2": DOT,  # green circle
        "\U0001f7e1": DOT,  # yellow circle
        "⬜": WHITE_SQUARE,  # white large square
        "⬛": BLACK_SQUARE,  # black large square
        "\U0001f532": WHITE_SQUARE,  # black square button
        "\U0001f533": WHITE_SQUARE,  # white square button
    }
)


class GlyphSubstitutor:
    """Replace every mapped sequence in a string with its fallback glyph."""

    def __init__(self, mapping: Optional[Mapping[str, str]] = None) -> None:
        self.mapping: Mapping[str, str] = MappingProxyType(
            dict(DEFAULT_GLYPH_MAP if mapping is None else mapping)
        )
        self._pattern: Optional["re.Pattern[str]"] = None
        keys = [key for key in self.mapping if key]
        if keys:
            # Longest first so a key never clobbers a longer key it prefixes
            keys.sort(key=len, reverse=True)
            self._pattern = re.compile("|".join(re.escape(key) for key in keys))

    def substitute(self, text: str) -> str:
        if not text or self._pattern is None:
            return text
        result, count = self._pattern.subn(lambda m: self.mapping[m.group(0)], text)
        if count:
            logger.debug("Substituted pictographs", count=count)
        return result

    @property
    def fallback_glyphs(self) -> FrozenSet[str]:
        """Characters this substitutor can produce."""
        return frozenset(self.mapping.values())


DEFAULT_SUBSTITUTOR = GlyphSubstitutor()


def replace_emoji(text: str, mapping: Optional[Mapping[str, str]] = None) -> str:
    """Replace known pictographs in *text* using *mapping* or the default table."""
    if mapping is None:
        return DEFAULT_SUBSTITUTOR.substitute(text)
    return GlyphSubstitutor(mapping).substitute(text)
