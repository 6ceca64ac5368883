"""
Data Models
===========

Pydantic data models for the table pipeline.

Models:
- schemas: themes, parsed grids, layout metrics, render options and results
"""
