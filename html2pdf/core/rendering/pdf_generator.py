"""
PDF Generator
=============

Playwright-based PDF generation from HTML content.

Each conversion gets its own Chromium process. The process is launched, used
for one page load and one PDF export, then closed before the conversion
returns, whether it succeeded or not.
"""

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncGenerator, AsyncIterator, Optional
import asyncio
import time

from playwright.async_api import (
    Browser,
    Page,
    Playwright,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from html2pdf.config.logging import get_logger
from html2pdf.config.settings import Settings, get_settings
from html2pdf.core.errors import PDFGenerationError, RenderCapacityError, RenderTimeoutError
from html2pdf.models.schemas import PDFOptions, RenderedDocument

logger = get_logger(__name__)

# Chromium's own sandbox needs kernel features most containers do not grant.
CHROMIUM_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
]


@dataclass
class RenderInstance:
    """One Playwright driver, one Chromium process and one page, owned by a single conversion."""

    playwright: Playwright
    browser: Browser
    page: Page


@asynccontextmanager
async def acquire_render_instance(
    settings: Optional[Settings] = None,
) -> AsyncGenerator[RenderInstance, None]:
    """
    Launch an isolated browser, open a page and yield it.

    The page, browser and driver are closed on exit on every path.

    Args:
        settings: Settings providing headless mode and launch timeout

    Yields:
        RenderInstance ready to load content
    """
    settings = settings or get_settings()
    playwright = await async_playwright().start()
    try:
        browser = await playwright.chromium.launch(
            headless=settings.playwright_headless,
            args=CHROMIUM_ARGS,
            timeout=settings.launch_timeout,
        )
        try:
            page = await browser.new_page()
            try:
                yield RenderInstance(playwright=playwright, browser=browser, page=page)
            finally:
                await page.close()
        finally:
            await browser.close()
    finally:
        await playwright.stop()


class PlaywrightPDFGenerator:
    """Playwright-based PDF generator implementation."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.logger: Any = logger.bind(generator="playwright")  # structlog.BoundLoggerBase
        self.max_concurrent = self.settings.max_concurrent_renders
        self._semaphore: Optional[asyncio.Semaphore] = (
            asyncio.Semaphore(self.max_concurrent) if self.max_concurrent else None
        )
        self.active_renders = 0

    @asynccontextmanager
    async def _render_slot(self) -> AsyncIterator[None]:
        """Admit one render, rejecting it when every slot is taken."""
        if self._semaphore is None:
            self.active_renders += 1
            try:
                yield
            finally:
                self.active_renders -= 1
            return

        if self._semaphore.locked():
            self.logger.warning(
                "Render capacity exhausted, rejecting request",
                active_renders=self.active_renders,
                max_concurrent=self.max_concurrent,
            )
            raise RenderCapacityError(
                "Too many concurrent PDF conversions. Please try again later.",
                context={"max_concurrent_renders": self.max_concurrent},
            )

        async with self._semaphore:
            self.active_renders += 1
            try:
                yield
            finally:
                self.active_renders -= 1

    async def generate_pdf(
        self, html_content: str, options: Optional[PDFOptions] = None
    ) -> RenderedDocument:
        """
        Generate a PDF from HTML content.

        Args:
            html_content: HTML document to render
            options: Print options, A4 with 1cm margins by default

        Returns:
            RenderedDocument containing PDF data and download filename

        Raises:
            RenderCapacityError: If an admission limit is configured and reached
            RenderTimeoutError: If launch, load or export exceeds its bound
            PDFGenerationError: If PDF generation fails for any other reason
        """
        options = options or PDFOptions()
        stage = "launch"
        start = time.perf_counter()

        async with self._render_slot():
            self.logger.info("Generating PDF from HTML", html_length=len(html_content))
            try:
                async with acquire_render_instance(self.settings) as instance:
                    stage = "load"
                    await instance.page.set_content(
                        html_content,
                        wait_until="networkidle",
                        timeout=self.settings.load_timeout,
                    )

                    stage = "export"
                    pdf_bytes = await asyncio.wait_for(
                        instance.page.pdf(
                            format=options.format,
                            print_background=options.print_background,
                            margin=options.margin.model_dump(),
                        ),
                        timeout=self.settings.export_timeout,
                    )

            except (PlaywrightTimeoutError, asyncio.TimeoutError) as e:
                error_msg = f"PDF generation timed out during {stage}: {e}".rstrip(": ")
                self.logger.error("PDF generation timeout", stage=stage, error=error_msg)
                raise RenderTimeoutError(error_msg) from e
            except Exception as e:
                error_msg = f"PDF generation failed during {stage}: {e}"
                self.logger.error("PDF generation error", stage=stage, error=error_msg)
                raise PDFGenerationError(error_msg) from e

        document = RenderedDocument(pdf_data=pdf_bytes)
        self.logger.info(
            "PDF generation completed",
            file_size=document.file_size,
            filename=document.filename,
            duration_ms=round((time.perf_counter() - start) * 1000, 1),
        )
        return document
