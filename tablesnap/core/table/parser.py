"""
Table Parser
============

Convert pipe-delimited (markdown-style) text into a normalized grid.

Parsing is permissive on structure: irregular rows are padded rather than
rejected. The only failure is input that yields no rows at all.
"""

from typing import List, Optional

from tablesnap.config.logging import get_logger
from tablesnap.models.schemas import TableGrid

logger = get_logger(__name__)

COLUMN_SEPARATOR = "|"
DIVIDER_CHAR = "-"
MIN_DIVIDER_WIDTH = 3


class TableParseError(Exception):
    """Exception raised when table parsing fails."""

    pass


class EmptyTableError(TableParseError):
    """Raised when the input contains no usable table rows."""

    def __init__(self, message: str = "no table data found") -> None:
        super().__init__(message)


def split_row(line: str) -> Optional[List[str]]:
    """
    Split a single table line into trimmed cells.

    A blank leading segment (leading separator) and a blank trailing segment
    (trailing separator) are dropped.

    Args:
        line: A line already known to contain the column separator

    Returns:
        The row's cells, or None when nothing is left after trimming
    """
    parts = line.split(COLUMN_SEPARATOR)
    if parts and not parts[0].strip():
        parts = parts[1:]
    if parts and not parts[-1].strip():
        parts = parts[:-1]
    if not parts:
        return None
    return [part.strip() for part in parts]


def is_divider_row(cells: List[str]) -> bool:
    """Return True for a markdown header separator such as ``| --- | --- |``."""
    if not cells:
        return False
    for cell in cells:
        if len(cell) < MIN_DIVIDER_WIDTH:
            return False
        if cell.strip(DIVIDER_CHAR):
            return False
    return True


def normalize_rows(rows: List[List[str]]) -> List[List[str]]:
    """Right-pad every row with empty cells up to the widest row. Never truncates."""
    max_cols = max((len(row) for row in rows), default=0)
    return [row + [""] * (max_cols - len(row)) for row in rows]


def parse_table(text: str) -> TableGrid:
    """
    Parse table text into a rectangular grid.

    Args:
        text: Raw text, possibly mixed with non-table lines

    Returns:
        TableGrid whose first row is the header

    Raises:
        EmptyTableError: If no table rows survive filtering
    """
    rows: List[List[str]] = []
    skipped = 0

    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if not line or COLUMN_SEPARATOR not in line:
            continue

        cells = split_row(line)
        if cells is None or is_divider_row(cells):
            skipped += 1
            continue
        rows.append(cells)

    if not rows:
        logger.debug("No table rows found", input_length=len(text))
        raise EmptyTableError()

    normalized = normalize_rows(rows)
    logger.debug(
        "Parsed table",
        rows=len(normalized),
        columns=len(normalized[0]),
        skipped=skipped,
    )
    return TableGrid(rows=normalized)
