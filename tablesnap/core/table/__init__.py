"""
Table Processing Module
=======================

Text-level processing ahead of layout.

Components:
- glyphs: pictograph to font-safe glyph substitution
- parser: pipe-delimited text to normalized grid
"""
