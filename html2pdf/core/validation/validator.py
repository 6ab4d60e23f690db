"""
Request Validator
=================

Validates parsed ``POST /files`` bodies before any rendering work starts.
Checks run in a fixed order and stop at the first failure.
"""

from enum import Enum
from typing import Any, Dict, Optional

from html2pdf.core.errors import BadRequestError
from html2pdf.models.schemas import EXAMPLE_HTML, ConversionRequest


class ValidationErrorKind(str, Enum):
    """Validation failure kinds and their stable error codes."""

    MISSING_BODY = "MISSING_REQUEST_BODY"
    INVALID_BODY = "INVALID_REQUEST_BODY"
    MISSING_FIELD = "MISSING_HTML_FIELD"
    INVALID_TYPE = "INVALID_HTML_TYPE"
    EMPTY_CONTENT = "EMPTY_HTML_CONTENT"


class ConversionValidationError(BadRequestError):
    """A request body that cannot be converted."""

    def __init__(
        self, kind: ValidationErrorKind, message: str, context: Optional[Dict[str, Any]] = None
    ):
        context = dict(context or {})
        context["example"] = {"html": EXAMPLE_HTML}
        super().__init__(message, code=kind.value, context=context)
        self.kind = kind


def json_type_name(value: Any) -> str:
    """Name a decoded JSON value's type the way JSON itself does."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def validate_conversion_request(body: Any) -> ConversionRequest:
    """
    Validate a decoded request body.

    Args:
        body: Decoded JSON body, or None when the request carried none

    Returns:
        ConversionRequest holding the HTML to render

    Raises:
        ConversionValidationError: If the body is unusable
    """
    if body is None or (isinstance(body, (dict, list)) and len(body) == 0):
        raise ConversionValidationError(
            ValidationErrorKind.MISSING_BODY,
            "Request body is missing. Please provide an HTML field in the request body.",
        )

    if not isinstance(body, dict):
        raise ConversionValidationError(
            ValidationErrorKind.INVALID_BODY,
            f"Request body must be a JSON object, but received {json_type_name(body)}.",
            {"received": {"type": json_type_name(body)}, "expected": "object"},
        )

    html = body.get("html")

    if html is None:
        raise ConversionValidationError(
            ValidationErrorKind.MISSING_FIELD,
            "HTML field is missing from request body.",
            {"received": list(body.keys()), "expected": "html"},
        )

    if not isinstance(html, str):
        type_name = json_type_name(html)
        raise ConversionValidationError(
            ValidationErrorKind.INVALID_TYPE,
            f"HTML field must be a string, but received {type_name}.",
            {"received": {"type": type_name, "value": html}, "expected": "string"},
        )

    if not html.strip():
        raise ConversionValidationError(
            ValidationErrorKind.EMPTY_CONTENT,
            "HTML content cannot be empty or contain only whitespace.",
        )

    return ConversionRequest(html=html)
