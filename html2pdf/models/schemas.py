"""
Pydantic Models and Schemas
===========================

Data models for conversion requests, rendered documents, print options and
API responses.
"""

from typing import Optional, Dict, Any, Literal
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, StrictStr, computed_field


EXAMPLE_HTML = "<html><body><h1>Your HTML content here</h1></body></html>"


def iso_timestamp(moment: Optional[datetime] = None) -> str:
    """Format a UTC instant as ISO 8601 with millisecond precision, e.g. ``2024-05-01T12:30:45.123Z``."""
    moment = (moment or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.replace(tzinfo=None).isoformat(timespec="milliseconds") + "Z"


def build_pdf_filename(moment: Optional[datetime] = None) -> str:
    """Build the download filename for a document rendered at ``moment``."""
    timestamp = iso_timestamp(moment).replace(":", "-").replace(".", "-")
    return f"document-{timestamp}.pdf"


# Conversion Models
class ConversionRequest(BaseModel):
    """A validated request to convert one HTML document."""

    model_config = ConfigDict(frozen=True)

    html: StrictStr = Field(..., min_length=1, description="HTML content to render")


class PDFMargins(BaseModel):
    """Page margins as CSS lengths."""

    model_config = ConfigDict(frozen=True)

    top: str = "1cm"
    right: str = "1cm"
    bottom: str = "1cm"
    left: str = "1cm"


class PDFOptions(BaseModel):
    """Print parameters passed to the browser's PDF export."""

    model_config = ConfigDict(frozen=True)

    format: Literal["A4"] = Field("A4", description="Paper format")
    print_background: bool = Field(True, description="Print background graphics")
    margin: PDFMargins = Field(default_factory=PDFMargins, description="Page margins")


class RenderedDocument(BaseModel):
    """Result of PDF generation."""

    model_config = ConfigDict(frozen=True)

    pdf_data: bytes = Field(..., description="PDF binary data", exclude=True)
    filename: str = Field(default_factory=build_pdf_filename, description="Download filename")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def file_size(self) -> int:
        return len(self.pdf_data)


# API Response Models
class ServiceInfo(BaseModel):
    """Static service metadata returned by the root endpoint."""

    message: str = Field(..., description="Welcome message")
    status: str = Field("online", description="Service status")
    version: str = Field(..., description="Application version")
    port: int = Field(..., description="Listen port")
    environment: str = Field(..., description="Deployment environment")
    endpoints: Dict[str, str] = Field(default_factory=dict, description="Available endpoints")


# Error Models
class ErrorResponse(BaseModel):
    """Standard error response model.

    Context keys (``received``, ``expected``, ``example``, ``details``) are
    carried as extra fields and dropped when unset, as is ``request_id``.
    """

    model_config = ConfigDict(extra="allow")

    error: str = Field(..., description="Short error category")
    message: str = Field(..., description="Human-readable error message")
    code: str = Field(..., description="Stable machine-readable error code")
    request_id: Optional[str] = Field(None, description="Request identifier for tracking")

    def to_content(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
