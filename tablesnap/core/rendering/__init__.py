"""
Rendering Module
===============

Layout and PNG creation with Pillow.

Components:
- fonts: font loading and text measurement
- layout: column widths and row height from measured text
- emoji: pictograph image lookup with text fallback
- png_generator: raster rendering, PNG encoding and the full pipeline
"""
