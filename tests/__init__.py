"""
Test Suite
==========

Test suite matching the html2pdf/ package structure.

Test Categories:
- unit: Unit tests for individual components
- integration: API tests with the browser mocked out
- e2e: End-to-end conversions through a real Chromium
"""
