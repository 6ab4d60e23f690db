"""
Rendering Module
===============

PDF creation with browser automation.

Components:
- pdf_generator: Playwright render instances and print-to-PDF export
"""
