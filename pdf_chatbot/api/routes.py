"""Server-side PDF extraction endpoint.

Accepts the PDF as a JSON array of byte values, as sent by the browser-side
upload flow when extraction runs on the server.
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from pdf_chatbot.models.schemas import ParsePdfErrorResponse, ParsePdfRequest, ParsePdfResponse
from pdf_chatbot.parsing.extractors import LocalPdfExtractor
from pdf_chatbot.parsing.pdf_parser import PDFParseError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["parsing"])

_extractor = LocalPdfExtractor()


def _error(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    body = ParsePdfErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.post(
    "/parse-pdf",
    response_model=ParsePdfResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ParsePdfErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ParsePdfErrorResponse},
    },
)
async def parse_pdf_endpoint(request: ParsePdfRequest) -> ParsePdfResponse | JSONResponse:
    """Extract the text of a PDF.

    Args:
        request: Body carrying ``pdfBuffer``, the PDF bytes as integers.

    Returns:
        ParsePdfResponse with the extracted text.

    Raises:
        400: No buffer provided, or an empty one.
        422: Malformed body or byte values outside 0-255.
        500: The document could not be parsed.
    """
    if not request.pdf_buffer:
        return _error(status.HTTP_400_BAD_REQUEST, "No PDF buffer provided")

    try:
        text = await _extractor.extract(bytes(request.pdf_buffer))
    except PDFParseError as e:
        logger.warning(f"Error parsing PDF: {e}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to parse PDF", str(e))

    return ParsePdfResponse(text=text)
