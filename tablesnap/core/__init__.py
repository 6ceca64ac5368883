"""
Core Business Logic
==================

Core modules for turning text tables into images.

Modules:
- table: glyph substitution and table parsing
- rendering: font measurement, layout, emoji lookup and PNG generation
"""
