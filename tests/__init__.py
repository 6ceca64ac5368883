"""
Test Suite
==========

Test suite matching the tablesnap/ package structure.

Test Categories:
- unit: Unit tests for individual components
- integration: Pipeline and command line tests
"""
