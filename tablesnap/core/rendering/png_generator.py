"""
PNG Generator
=============

Pillow-based raster rendering of a laid-out table grid, PNG encoding, and the
end-to-end text to PNG pipeline.
"""

from typing import AbstractSet, Optional
import base64
import io

from PIL import Image, ImageDraw

from tablesnap.config.logging import get_logger
from tablesnap.config.settings import Settings, get_settings
from tablesnap.core.rendering.emoji import (
    FALLBACK_GLYPHS,
    EmojiAwareMeasurer,
    GlyphImageLookup,
    build_emoji_lookup,
    emoji_square_size,
    split_emoji_segments,
)
from tablesnap.core.rendering.fonts import REFERENCE_GLYPHS, PillowTextMeasurer, load_font
from tablesnap.core.rendering.layout import measure_table
from tablesnap.core.table.glyphs import GlyphSubstitutor
from tablesnap.core.table.parser import parse_table
from tablesnap.models.schemas import (
    LayoutMetrics,
    PNGResult,
    RenderOptions,
    TableGrid,
    Theme,
    get_theme,
)

logger = get_logger(__name__)

BORDER_WIDTH = 1


class PNGGenerationError(Exception):
    """Exception raised when PNG generation fails."""

    pass


class TableRenderer:
    """Draws a grid onto a fresh canvas in a single top-to-bottom, left-to-right sweep."""

    def __init__(
        self,
        measurer: PillowTextMeasurer,
        lookup: Optional[GlyphImageLookup] = None,
        plain_glyphs: AbstractSet[str] = FALLBACK_GLYPHS,
    ) -> None:
        self.measurer = measurer
        self.lookup = lookup
        self.plain_glyphs = plain_glyphs
        self.logger = logger.bind(component="renderer")

    @property
    def layout_measurer(self):
        """Measurer that agrees with how cells will be drawn."""
        if self.lookup is None:
            return self.measurer
        return EmojiAwareMeasurer(self.measurer, self.lookup, self.plain_glyphs)

    def layout(self, grid: TableGrid, padding: float) -> LayoutMetrics:
        return measure_table(grid, self.layout_measurer, padding)

    def render(self, grid: TableGrid, theme: Theme, metrics: LayoutMetrics) -> Image.Image:
        """
        Draw *grid* using precomputed *metrics*.

        Args:
            grid: Normalized table grid, row 0 is the header
            theme: Color theme
            metrics: Layout computed for this grid and font

        Returns:
            RGB image sized from the layout metrics
        """
        width, height = metrics.canvas_size
        image = Image.new("RGB", (width, height), theme.background)
        draw = ImageDraw.Draw(image)

        padding = metrics.padding
        row_height = metrics.row_height
        band_left = padding
        band_right = padding + metrics.table_width

        y = padding
        for row_idx, row in enumerate(grid.rows):
            is_header = row_idx == 0
            is_alt_row = row_idx % 2 == 0 and row_idx > 0

            # Row background
            if is_header:
                self._fill(draw, band_left, y, band_right, y + row_height, theme.header_bg)
            elif is_alt_row:
                self._fill(draw, band_left, y, band_right, y + row_height, theme.alt_row)

            text_color = theme.header if is_header else theme.text
            baseline = y + metrics.line_height + padding / 2

            x = padding
            for i, cell in enumerate(row):
                if i >= len(metrics.column_widths):
                    continue
                col_width = metrics.column_widths[i]

                # Cell border
                draw.rectangle(
                    [round(x), round(y), round(x + col_width), round(y + row_height)],
                    outline=theme.border,
                    width=BORDER_WIDTH,
                )

                # Cell text
                if cell:
                    self._draw_cell_text(image, draw, x + padding, baseline, cell, text_color)

                x += col_width
            y += row_height

        self.logger.debug("Table rendered", width=width, height=height, rows=grid.row_count)
        return image

    @staticmethod
    def _fill(draw: ImageDraw.ImageDraw, x0: float, y0: float, x1: float, y1: float, color: str) -> None:
        # Pillow rectangles include their far edge
        if round(x1) - round(x0) < 1 or round(y1) - round(y0) < 1:
            return
        draw.rectangle([round(x0), round(y0), round(x1) - 1, round(y1) - 1], fill=color)

    def _draw_cell_text(
        self,
        image: Image.Image,
        draw: ImageDraw.ImageDraw,
        x: float,
        baseline: float,
        text: str,
        color: str,
    ) -> None:
        font = self.measurer.font
        if self.lookup is None:
            draw.text((x, baseline), text, fill=color, font=font, anchor="ls")
            return

        emoji_size = emoji_square_size(self.measurer)
        _, ref_top, _, _ = font.getbbox(REFERENCE_GLYPHS, anchor="ls")
        cursor = x
        for segment in split_emoji_segments(text, self.lookup, self.plain_glyphs):
            if segment.supported:
                glyph = self.lookup.get_image(segment.text)
                glyph = glyph.resize((emoji_size, emoji_size), Image.Resampling.LANCZOS)
                image.paste(glyph, (round(cursor), round(baseline + ref_top)), glyph)
                cursor += emoji_size
            else:
                draw.text((cursor, baseline), segment.text, fill=color, font=font, anchor="ls")
                cursor += self.measurer.measure(segment.text)

    def render_grid(self, grid: TableGrid, theme: Theme, padding: float) -> Image.Image:
        """Lay out and draw *grid* in one call."""
        return self.render(grid, theme, self.layout(grid, padding))


def encode_png(image: Image.Image) -> bytes:
    """Encode an image as PNG bytes."""
    output = io.BytesIO()
    try:
        image.save(output, format="PNG", optimize=True)
    except (OSError, ValueError) as e:
        raise PNGGenerationError(f"PNG encoding failed: {e}")
    return output.getvalue()


class PNGTableGenerator:
    """Runs the full pipeline: substitute, parse, measure, render, encode."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        lookup: Optional[GlyphImageLookup] = None,
        substitutor: Optional[GlyphSubstitutor] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.logger = logger.bind(generator="pillow")
        self.substitutor = substitutor or GlyphSubstitutor()
        if lookup is None and self.settings.emoji_enabled:
            lookup = build_emoji_lookup(
                self.settings.emoji_cache_dir, self.settings.emoji_bundle_dir
            )
        self.lookup = lookup

    def default_options(self) -> RenderOptions:
        """Render options seeded from settings."""
        return RenderOptions(
            theme=self.settings.default_theme,
            font_size=self.settings.font_size,
            padding=self.settings.padding,
            font_path=self.settings.font_path,
        )

    def render_image(self, text: str, options: Optional[RenderOptions] = None) -> Image.Image:
        """
        Render table text to an image.

        Raises:
            EmptyTableError: If the text contains no table rows
            FontSetupError: If the font cannot be loaded
        """
        options = options or self.default_options()

        if options.substitute_glyphs:
            text = self.substitutor.substitute(text)

        grid = parse_table(text)
        measurer = load_font(options.font_size, options.font_path)
        theme = get_theme(options.theme)

        renderer = TableRenderer(measurer, self.lookup, self.substitutor.fallback_glyphs)
        return renderer.render_grid(grid, theme, options.padding)

    def generate_png(self, text: str, options: Optional[RenderOptions] = None) -> PNGResult:
        """
        Generate a PNG from table text.

        Args:
            text: Raw table text
            options: Rendering options, defaults from settings

        Returns:
            PNGResult containing PNG data and metadata

        Raises:
            EmptyTableError: If the text contains no table rows
            FontSetupError: If the font cannot be loaded
            PNGGenerationError: If encoding fails
        """
        options = options or self.default_options()
        self.logger.info(
            "Generating PNG from table text",
            text_length=len(text),
            theme=options.theme.value,
            font_size=options.font_size,
        )

        image = self.render_image(text, options)
        png_bytes = encode_png(image)

        result = PNGResult(
            png_data=png_bytes,
            base64_data=base64.b64encode(png_bytes).decode("utf-8"),
            width=image.width,
            height=image.height,
            file_size=len(png_bytes),
            metadata={
                "generator": "pillow",
                "theme": options.theme.value,
                "font_size": options.font_size,
                "padding": options.padding,
            },
        )

        self.logger.info(
            "PNG generation completed",
            file_size=result.file_size,
            width=result.width,
            height=result.height,
        )
        return result


def render_table_text(
    text: str,
    options: Optional[RenderOptions] = None,
    lookup: Optional[GlyphImageLookup] = None,
) -> PNGResult:
    """
    Convenience function to render table text to PNG.

    Args:
        text: Raw table text
        options: Rendering options
        lookup: Optional pictograph image lookup

    Returns:
        PNGResult containing PNG data
    """
    generator = PNGTableGenerator(lookup=lookup)
    return generator.generate_png(text, options)
