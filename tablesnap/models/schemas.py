"""
Pydantic Models and Schemas
===========================

Core data models for parsed tables, layout metrics, themes and render results.
"""

from typing import Optional, List, Dict, Any, Union
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator
from PIL import ImageColor


# Enums
class ThemeName(str, Enum):
    """Built-in color themes."""
    DARK = "dark"
    LIGHT = "light"


# Theme Models
class Theme(BaseModel):
    """Six-color palette used by the raster renderer."""
    model_config = ConfigDict(frozen=True)

    background: str = Field(..., description="Canvas background")
    text: str = Field(..., description="Body cell text")
    header: str = Field(..., description="Header row text")
    header_bg: str = Field(..., description="Header row background")
    border: str = Field(..., description="Cell border stroke")
    alt_row: str = Field(..., description="Zebra stripe background")

    @field_validator("background", "text", "header", "header_bg", "border", "alt_row")
    @classmethod
    def validate_color(cls, v: str) -> str:
        """Reject colors Pillow cannot interpret."""
        try:
            ImageColor.getrgb(v)
        except ValueError:
            raise ValueError(f"Invalid color: {v!r}")
        return v

    def rgb(self, name: str) -> tuple:
        """Return the named color as an RGB tuple."""
        return ImageColor.getrgb(getattr(self, name))[:3]


DARK_THEME = Theme(
    background="#1a1a1a",
    text="#e0e0e0",
    header="#4fc3f7",
    header_bg="#262626",
    border="#3a3a3a",
    alt_row="#222222",
)

LIGHT_THEME = Theme(
    background="#ffffff",
    text="#333333",
    header="#1a73e8",
    header_bg="#f5f5f5",
    border="#dddddd",
    alt_row="#fafafa",
)

THEMES: Dict[ThemeName, Theme] = {
    ThemeName.DARK: DARK_THEME,
    ThemeName.LIGHT: LIGHT_THEME,
}


def get_theme(name: Union[ThemeName, str]) -> Theme:
    """Look up a built-in theme by name."""
    try:
        return THEMES[ThemeName(name.lower() if isinstance(name, str) else name)]
    except ValueError:
        raise ValueError(f"Unknown theme: {name!r} (expected one of: dark, light)")


# Table Models
class TableGrid(BaseModel):
    """Normalized rectangular table. Row 0 is the header."""
    model_config = ConfigDict(frozen=True)

    rows: List[List[str]] = Field(..., min_length=1, description="Rows of cell strings")

    @property
    def header(self) -> List[str]:
        return self.rows[0]

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return max(len(row) for row in self.rows)

    def to_text(self) -> str:
        """Rebuild pipe-delimited text from the grid."""
        return "\n".join("| " + " | ".join(row) + " |" for row in self.rows)


# Layout Models
class LayoutMetrics(BaseModel):
    """Column widths and uniform row height computed from measured text."""
    model_config = ConfigDict(frozen=True)

    column_widths: List[float] = Field(..., description="Pixel width per column")
    row_height: float = Field(..., ge=0, description="Uniform row height in pixels")
    line_height: float = Field(..., ge=0, description="Reference glyph line height")
    padding: float = Field(..., ge=0, description="Cell and canvas padding")
    row_count: int = Field(..., ge=0, description="Number of rows laid out")

    @property
    def table_width(self) -> float:
        return sum(self.column_widths)

    @property
    def canvas_width(self) -> float:
        return self.padding * 2 + self.table_width

    @property
    def canvas_height(self) -> float:
        return self.padding * 2 + self.row_count * self.row_height

    @property
    def canvas_size(self) -> tuple:
        """Integer canvas size, truncated like the drawing surface expects."""
        return int(self.canvas_width), int(self.canvas_height)


# Rendering Models
class RenderOptions(BaseModel):
    """Options for rendering a text table to PNG."""
    theme: ThemeName = Field(ThemeName.DARK, description="Color theme")
    font_size: float = Field(14.0, gt=0, le=512, description="Font size in points")
    padding: float = Field(10.0, ge=0, le=500, description="Cell padding in pixels")
    font_path: Optional[Path] = Field(None, description="Font file override")
    substitute_glyphs: bool = Field(True, description="Replace pictographs with safe glyphs")

    @field_validator("theme", mode="before")
    @classmethod
    def normalize_theme(cls, v):
        """Accept theme names in any case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v


class PNGResult(BaseModel):
    """Result of PNG generation."""
    png_data: bytes = Field(..., description="PNG binary data", exclude=True)
    base64_data: str = Field(..., description="Base64 encoded PNG data")
    width: int = Field(..., description="Image width")
    height: int = Field(..., description="Image height")
    file_size: int = Field(..., description="File size in bytes")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Generation metadata")
