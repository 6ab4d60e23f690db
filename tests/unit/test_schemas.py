"""
Unit Tests for Schemas
======================

Tests for filenames, rendered documents, print options and error bodies.
"""

import re
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from html2pdf.core.errors import PDFGenerationError, RenderCapacityError, RenderTimeoutError
from html2pdf.models.schemas import (
    ConversionRequest,
    ErrorResponse,
    PDFOptions,
    RenderedDocument,
    build_pdf_filename,
    iso_timestamp,
)

from tests.utils.mocks import FAKE_PDF, FILENAME_PATTERN


class TestFilenames:
    """Test timestamp and filename generation."""

    def test_iso_timestamp_millisecond_precision(self):
        moment = datetime(2024, 1, 2, 3, 4, 5, 678901, tzinfo=timezone.utc)
        assert iso_timestamp(moment) == "2024-01-02T03:04:05.678Z"

    def test_iso_timestamp_converts_to_utc(self):
        moment = datetime(2024, 1, 2, 5, 4, 5, tzinfo=timezone(timedelta(hours=2)))
        assert iso_timestamp(moment) == "2024-01-02T03:04:05.000Z"

    def test_filename_replaces_separators(self):
        moment = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)
        assert build_pdf_filename(moment) == "document-2024-01-02T03-04-05-678Z.pdf"

    def test_filename_matches_pattern(self):
        assert re.match(FILENAME_PATTERN, build_pdf_filename())


class TestRenderedDocument:
    """Test rendered document model."""

    def test_defaults(self):
        document = RenderedDocument(pdf_data=FAKE_PDF)
        assert document.file_size == len(FAKE_PDF)
        assert re.match(FILENAME_PATTERN, document.filename)

    def test_immutable(self):
        document = RenderedDocument(pdf_data=FAKE_PDF)
        with pytest.raises(ValidationError):
            document.pdf_data = b"%PDF-other"

    def test_pdf_data_not_serialized(self):
        dumped = RenderedDocument(pdf_data=FAKE_PDF, filename="document.pdf").model_dump()
        assert dumped == {"filename": "document.pdf", "file_size": len(FAKE_PDF)}


class TestConversionRequest:
    """Test conversion request model."""

    def test_rejects_non_string(self):
        with pytest.raises(ValidationError):
            ConversionRequest(html=123)

    def test_rejects_empty(self):
        with pytest.raises(ValidationError):
            ConversionRequest(html="")


class TestPDFOptions:
    """Test print options."""

    def test_fixed_defaults(self):
        options = PDFOptions()
        assert options.format == "A4"
        assert options.print_background is True
        assert options.margin.model_dump() == {
            "top": "1cm",
            "right": "1cm",
            "bottom": "1cm",
            "left": "1cm",
        }


class TestErrorBodies:
    """Test structured error bodies."""

    def test_context_fields_kept(self):
        body = ErrorResponse(error="Bad Request", message="m", code="C", expected="html")
        assert body.to_content() == {
            "error": "Bad Request",
            "message": "m",
            "code": "C",
            "expected": "html",
        }

    def test_generation_error_hides_details_by_default(self):
        error = PDFGenerationError("net::ERR_ABORTED")
        content = error.to_response().to_content()
        assert content == {
            "error": "Internal Server Error",
            "message": "Failed to convert HTML to PDF",
            "code": "PDF_CONVERSION_FAILED",
        }

    def test_request_id_included_when_known(self):
        error = PDFGenerationError("net::ERR_ABORTED")
        content = error.to_response(request_id="abc").to_content()
        assert content["request_id"] == "abc"

    def test_generation_error_exposes_details(self):
        content = PDFGenerationError("net::ERR_ABORTED").to_response(True).to_content()
        assert content["details"] == "net::ERR_ABORTED"

    def test_timeout_shares_conversion_code(self):
        error = RenderTimeoutError("timed out")
        assert isinstance(error, PDFGenerationError)
        assert error.status_code == 500
        assert error.code == "PDF_CONVERSION_FAILED"

    def test_capacity_error(self):
        error = RenderCapacityError("busy", context={"max_concurrent_renders": 2})
        content = error.to_response().to_content()
        assert error.status_code == 503
        assert content["code"] == "SERVICE_OVERLOADED"
        assert content["max_concurrent_renders"] == 2
