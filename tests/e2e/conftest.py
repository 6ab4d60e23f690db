"""
E2E Test Configuration
======================

Fixtures for conversions through a real headless Chromium. Every test here is
skipped when Playwright cannot launch a browser on this machine.
"""

from typing import Generator

import pytest
from fastapi.testclient import TestClient
from playwright.sync_api import Error as PlaywrightError, sync_playwright

from html2pdf.api.main import create_app
from html2pdf.core.rendering.pdf_generator import CHROMIUM_ARGS


@pytest.fixture(scope="session")
def chromium_available() -> bool:
    """Probe once whether Chromium can be launched."""
    try:
        with sync_playwright() as p:
            browser = p.chromium.launch(headless=True, args=CHROMIUM_ARGS)
            browser.close()
    except PlaywrightError as e:
        pytest.skip(f"Chromium is not available: {e}")
    return True


@pytest.fixture
def e2e_client(chromium_available, test_settings) -> Generator[TestClient, None, None]:
    """Test client rendering with the real Playwright generator."""
    with TestClient(create_app(test_settings)) as client:
        yield client
