"""
Core Business Logic
===================

Request validation and PDF rendering.

Components:
- errors: Error taxonomy shared by validation, rendering and the API layer
- validation: Conversion request validation
- rendering: Browser automation for PDF generation
"""
