"""
Layout Engine
=============

Compute column widths and a uniform row height from measured text extents.
Purely computational: nothing is drawn here.
"""

from typing import List, Protocol

from tablesnap.config.logging import get_logger
from tablesnap.core.rendering.fonts import REFERENCE_GLYPHS
from tablesnap.models.schemas import LayoutMetrics, TableGrid

logger = get_logger(__name__)


class TextMeasurer(Protocol):
    """Text measurement capability supplied by the font provider."""

    def measure(self, text: str) -> float: ...

    def line_height(self, reference: str = REFERENCE_GLYPHS) -> float: ...


def measure_table(grid: TableGrid, measurer: TextMeasurer, padding: float) -> LayoutMetrics:
    """
    Lay out a grid.

    Row height is the reference glyph line height plus vertical padding, the
    same for every row whatever its content. Each column is as wide as its
    widest cell plus horizontal padding.

    Args:
        grid: Normalized table grid
        measurer: Text measurement provider
        padding: Cell padding in pixels, applied on both sides

    Returns:
        LayoutMetrics for the grid
    """
    line_height = measurer.line_height(REFERENCE_GLYPHS)
    row_height = line_height + padding * 2

    column_widths: List[float] = [padding * 2] * grid.column_count
    for row in grid.rows:
        for i, cell in enumerate(row):
            if i >= len(column_widths):
                continue
            width = measurer.measure(cell) + padding * 2
            if width > column_widths[i]:
                column_widths[i] = width

    metrics = LayoutMetrics(
        column_widths=column_widths,
        row_height=row_height,
        line_height=line_height,
        padding=padding,
        row_count=grid.row_count,
    )
    logger.debug(
        "Table measured",
        columns=len(column_widths),
        rows=grid.row_count,
        canvas_width=metrics.canvas_width,
        canvas_height=metrics.canvas_height,
    )
    return metrics
