"""
Test Configuration
==================

Pytest configuration with fixtures for all test types.
Provides test settings, a mocked PDF generator and API test clients.
"""

from typing import Any, Callable, Generator
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from html2pdf.api.main import create_app
from html2pdf.config.settings import Settings
from html2pdf.core.rendering.pdf_generator import PlaywrightPDFGenerator
from html2pdf.models.schemas import RenderedDocument

from tests.utils.mocks import FAKE_PDF, SAMPLE_HTML


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    """Build settings isolated from the developer's .env file."""

    def _make(**overrides: Any) -> Settings:
        values: dict[str, Any] = {
            "environment": "testing",
            "expose_error_details": True,
            "log_level": "DEBUG",
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def test_settings(make_settings: Callable[..., Settings]) -> Settings:
    """Test settings fixture."""
    return make_settings()


@pytest.fixture
def sample_html() -> str:
    """Minimal valid HTML document."""
    return SAMPLE_HTML


@pytest.fixture
def rendered_document() -> RenderedDocument:
    """Rendered document with a small but well-formed PDF body."""
    return RenderedDocument(pdf_data=FAKE_PDF)


@pytest.fixture
def mock_pdf_generator(rendered_document: RenderedDocument) -> AsyncMock:
    """Mock PDF generator for API tests."""
    generator = AsyncMock(spec=PlaywrightPDFGenerator)
    generator.generate_pdf.return_value = rendered_document
    generator.active_renders = 0
    return generator


@pytest.fixture
def app(test_settings: Settings, mock_pdf_generator: AsyncMock) -> FastAPI:
    """FastAPI application wired to the mock generator."""
    return create_app(test_settings, pdf_generator=mock_pdf_generator)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """FastAPI test client."""
    with TestClient(app) as test_client:
        yield test_client


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on file paths."""
    for item in items:
        # Add markers based on file path
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "e2e" in str(item.fspath):
            item.add_marker(pytest.mark.e2e)
