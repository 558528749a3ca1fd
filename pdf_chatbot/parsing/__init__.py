"""PDF text extraction.

Responsibilities:
    - PDF validation and text extraction with pypdf
    - Choice between in-process and API-backed extraction

Callers only ever see ``PDFParseError`` on failure.
"""

from pdf_chatbot.parsing.extractors import (
    ExtractorConfig,
    LocalPdfExtractor,
    PdfExtractor,
    RemotePdfExtractor,
    get_pdf_extractor,
)
from pdf_chatbot.parsing.pdf_parser import PDF_MEDIA_TYPE, PDFContent, PDFParseError, parse_pdf

__all__ = [
    "PDF_MEDIA_TYPE",
    "ExtractorConfig",
    "LocalPdfExtractor",
    "PDFContent",
    "PDFParseError",
    "PdfExtractor",
    "RemotePdfExtractor",
    "get_pdf_extractor",
    "parse_pdf",
]
