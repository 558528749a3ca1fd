"""PDF parsing module using pypdf.

Extracts the text content of a PDF file with validation.
"""

import io
import logging

from pydantic import BaseModel, Field
from pypdf import PasswordType, PdfReader
from pypdf.errors import PdfReadError

logger = logging.getLogger(__name__)

# Constants
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
PDF_MAGIC_BYTES = b"%PDF"
PDF_MEDIA_TYPE = "application/pdf"


class PDFContent(BaseModel):
    """Extracted content from a PDF file.

    Attributes:
        text: Text of all pages, one page per line block, in page order.
        pages: Total number of pages in the document.
    """

    text: str
    pages: int = Field(ge=0)


class PDFParseError(Exception):
    """Raised when PDF parsing fails."""

    pass


def _validate_pdf_bytes(file_content: bytes) -> None:
    """Validate PDF file content before parsing.

    Args:
        file_content: Raw bytes of the PDF file.

    Raises:
        PDFParseError: If validation fails.
    """
    if not file_content:
        raise PDFParseError("Empty file provided")

    if len(file_content) > MAX_FILE_SIZE:
        size_mb = len(file_content) / (1024 * 1024)
        raise PDFParseError(f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)")

    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise PDFParseError("Invalid PDF: file does not start with PDF header")


def _unlock(reader: PdfReader) -> None:
    """Open an encrypted document with the empty user password.

    Owner-password-only PDFs open this way; anything else is rejected.
    """
    try:
        result = reader.decrypt("")
    except Exception as e:
        raise PDFParseError(f"Cannot decrypt PDF: {e}") from e

    if result == PasswordType.NOT_DECRYPTED:
        raise PDFParseError("PDF is password-protected")


def parse_pdf(file_content: bytes) -> PDFContent:
    """Parse a PDF file and extract its text content.

    Args:
        file_content: Raw bytes of the PDF file.

    Returns:
        PDFContent with extracted text and page count.

    Raises:
        PDFParseError: If the file is invalid, too large, empty, encrypted or corrupt.
    """
    _validate_pdf_bytes(file_content)

    try:
        reader = PdfReader(io.BytesIO(file_content))
        if reader.is_encrypted:
            _unlock(reader)
        pages = len(reader.pages)
    except PDFParseError:
        raise
    except PdfReadError as e:
        raise PDFParseError(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise PDFParseError(f"Failed to read PDF: {e}") from e

    if pages == 0:
        raise PDFParseError("PDF contains no pages")

    # Extract text from all pages
    text_parts: list[str] = []
    for i, page in enumerate(reader.pages):
        try:
            page_text = page.extract_text()
            if page_text:
                text_parts.append(page_text)
        except Exception as e:
            logger.warning(f"Failed to extract text from page {i + 1}: {e}")
            continue

    text = "\n".join(text_parts)

    if not text.strip():
        logger.warning("PDF contains no extractable text (may be scanned/image-based)")

    return PDFContent(text=text, pages=pages)
