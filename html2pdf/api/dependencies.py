"""
API Dependencies
================

FastAPI dependencies resolving per-application objects from ``app.state``.
"""

from fastapi import Request

from html2pdf.config.settings import Settings
from html2pdf.core.rendering.pdf_generator import PlaywrightPDFGenerator


def get_current_settings(request: Request) -> Settings:
    """Dependency to get the settings the application was built with."""
    return request.app.state.settings


def get_pdf_generator(request: Request) -> PlaywrightPDFGenerator:
    """Dependency to get the application's PDF generator."""
    return request.app.state.pdf_generator
