"""
HTML to PDF Conversion Service
==============================

An HTTP service that accepts an HTML document and returns it rendered as a PDF
file through headless Chromium.

This package provides:
- FastAPI REST endpoints for HTTP access
- Request validation with structured, machine-readable errors
- Browser automation with Playwright
- A process-wide server object with explicit start/stop lifecycle
"""

__version__ = "1.0.0"
__author__ = "HTML to PDF Service Team"
