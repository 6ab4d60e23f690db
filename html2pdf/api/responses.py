"""
Request Bodies and Responses
============================

Reading JSON request bodies under a size cap, and writing PDF and structured
error responses.
"""

from typing import Any, Optional
import json

from fastapi import Request
from fastapi.responses import JSONResponse, Response

from html2pdf.core.errors import ConversionServiceError, MalformedJSONError, PayloadTooLargeError
from html2pdf.models.schemas import ErrorResponse, RenderedDocument


def is_json_content_type(content_type: Optional[str]) -> bool:
    """Whether a Content-Type header names a JSON media type."""
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


def _too_large(max_size: int) -> PayloadTooLargeError:
    return PayloadTooLargeError(
        f"Request body exceeds the maximum allowed size of {max_size} bytes.",
        context={"limit": max_size},
    )


async def read_json_body(request: Request, max_size: int) -> Any:
    """
    Read and decode a JSON request body.

    Bodies sent with a non-JSON content type are treated as absent.

    Args:
        request: Incoming request
        max_size: Maximum body size in bytes

    Returns:
        Decoded JSON value, or None when there is no JSON body

    Raises:
        PayloadTooLargeError: If the body is larger than ``max_size``
        MalformedJSONError: If the body is not valid JSON
    """
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > max_size:
        raise _too_large(max_size)

    if not is_json_content_type(request.headers.get("content-type")):
        return None

    raw = bytearray()
    async for chunk in request.stream():
        raw.extend(chunk)
        if len(raw) > max_size:
            raise _too_large(max_size)

    if not raw.strip():
        return None

    try:
        return json.loads(bytes(raw))
    except (ValueError, UnicodeDecodeError) as e:
        raise MalformedJSONError("Request body is not valid JSON.", details=str(e)) from e


def pdf_response(document: RenderedDocument) -> Response:
    """Write a rendered document as a PDF download."""
    return Response(
        content=document.pdf_data,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{document.filename}"',
            "Content-Length": str(document.file_size),
            "Cache-Control": "no-cache",
        },
    )


def _error_json(status_code: int, body: ErrorResponse) -> JSONResponse:
    # Set here too: handlers for unhandled faults run outside the request-id middleware.
    headers = {"X-Request-ID": body.request_id} if body.request_id else None
    return JSONResponse(status_code=status_code, content=body.to_content(), headers=headers)


def error_response(
    exc: ConversionServiceError,
    expose_details: bool = False,
    request_id: Optional[str] = None,
) -> JSONResponse:
    """Write a service error as its structured JSON body and status."""
    return _error_json(exc.status_code, exc.to_response(expose_details, request_id))


def json_error(
    status_code: int,
    error: str,
    message: str,
    code: str,
    request_id: Optional[str] = None,
) -> JSONResponse:
    """Write a structured error that has no exception class of its own."""
    body = ErrorResponse(error=error, message=message, code=code, request_id=request_id)
    return _error_json(status_code, body)
