"""
Service Errors
==============

Exception hierarchy for the conversion service. Every error knows the HTTP
status and structured body it maps to, so the API layer only has to render it.
"""

from typing import Any, Dict, Optional

from html2pdf.models.schemas import ErrorResponse


class ConversionServiceError(Exception):
    """Base class for errors reported to clients as structured JSON."""

    status_code: int = 500
    error: str = "Internal Server Error"
    code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        details: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.context: Dict[str, Any] = context or {}
        self.details = details

    def to_response(
        self, expose_details: bool = False, request_id: Optional[str] = None
    ) -> ErrorResponse:
        """Build the client-facing error body."""
        content: Dict[str, Any] = dict(self.context)
        if expose_details and self.details:
            content["details"] = self.details
        return ErrorResponse(
            error=self.error,
            message=self.message,
            code=self.code,
            request_id=request_id,
            **content,
        )


class BadRequestError(ConversionServiceError):
    """Client-caused error, never retried."""

    status_code = 400
    error = "Bad Request"
    code = "BAD_REQUEST"


class MalformedJSONError(BadRequestError):
    """Request body could not be decoded as JSON."""

    code = "INVALID_JSON"


class PayloadTooLargeError(ConversionServiceError):
    """Request body exceeds the configured size cap."""

    status_code = 413
    error = "Payload Too Large"
    code = "PAYLOAD_TOO_LARGE"


class PDFGenerationError(ConversionServiceError):
    """Exception raised when PDF generation fails.

    The underlying exception text is kept as ``details`` and only shown to
    clients when error details are exposed.
    """

    code = "PDF_CONVERSION_FAILED"

    def __init__(self, details: str, *, message: str = "Failed to convert HTML to PDF"):
        super().__init__(message, details=details)

    def __str__(self) -> str:
        return self.details or self.message


class RenderTimeoutError(PDFGenerationError):
    """A browser step did not finish within its time bound."""


class RenderCapacityError(ConversionServiceError):
    """All render slots are in use."""

    status_code = 503
    error = "Service Unavailable"
    code = "SERVICE_OVERLOADED"
