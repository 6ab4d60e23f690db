"""
File Routes
===========

The HTML to PDF conversion endpoint.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from html2pdf.api.dependencies import get_current_settings, get_pdf_generator
from html2pdf.api.responses import pdf_response, read_json_body
from html2pdf.config.logging import get_logger
from html2pdf.config.settings import Settings
from html2pdf.core.rendering.pdf_generator import PlaywrightPDFGenerator
from html2pdf.core.validation import validate_conversion_request

logger = get_logger(__name__)

router = APIRouter(tags=["Conversion"])


@router.post(
    "/files",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}, "description": "Rendered PDF file"}},
)
async def convert_html_to_pdf(
    request: Request,
    settings: Settings = Depends(get_current_settings),
    generator: PlaywrightPDFGenerator = Depends(get_pdf_generator),
) -> Response:
    """
    Convert an HTML string to a PDF file.

    Expects a JSON body ``{"html": "<string>"}`` and answers with the PDF as
    an attachment. Validation failures are answered with 400 before any
    browser is launched.
    """
    body = await read_json_body(request, settings.max_body_size)
    conversion = validate_conversion_request(body)

    logger.info("PDF conversion requested", html_length=len(conversion.html))

    document = await generator.generate_pdf(conversion.html)

    logger.info(
        "PDF conversion completed",
        filename=document.filename,
        file_size=document.file_size,
    )
    return pdf_response(document)
