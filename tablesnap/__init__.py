"""
tablesnap
=========

Render pipe-delimited (markdown-style) text tables into PNG images.

This package provides:
- Glyph substitution for pictographs that common fonts cannot draw
- A permissive table parser producing a normalized rectangular grid
- A metric-driven layout engine and a Pillow raster renderer
- A small command line front end
"""

__version__ = "1.0.0"
__author__ = "tablesnap Team"
