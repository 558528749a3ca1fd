"""PDF text extractors used by the upload workflow.

Two interchangeable deployment variants:

- ``local``: pypdf runs in-process, in a worker thread so the UI event loop
  keeps serving other clients while a large document is parsed.
- ``remote``: the raw bytes are POSTed to the ``/api/parse-pdf`` endpoint as a
  JSON array of byte values and the extracted text is read back.

Both raise ``PDFParseError`` for every failure, so callers handle a single
exception type regardless of where extraction happens.
"""

import asyncio
import logging
import os
from typing import Literal, Protocol

import httpx
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from pdf_chatbot.models.schemas import ParsePdfRequest, ParsePdfResponse
from pdf_chatbot.parsing.pdf_parser import PDFParseError, parse_pdf

load_dotenv()

logger = logging.getLogger(__name__)

PARSE_PDF_PATH = "/api/parse-pdf"


class PdfExtractor(Protocol):
    """Anything that turns raw PDF bytes into flat text."""

    async def extract(self, content: bytes) -> str:
        """Return the text of the document.

        Raises:
            PDFParseError: If the document cannot be parsed.
        """
        ...


class ExtractorConfig(BaseModel):
    """Selects and configures the PDF extractor.

    Attributes:
        mode: ``local`` for in-process pypdf, ``remote`` for the API endpoint.
        api_base_url: Base URL of the API serving ``/api/parse-pdf``.
        timeout: Request timeout in seconds for the remote variant.
    """

    mode: Literal["local", "remote"] = Field(
        default_factory=lambda: os.getenv("PDF_EXTRACTOR", "local").lower(),
        description="Where PDF text extraction runs",
    )
    api_base_url: str = Field(
        default_factory=lambda: os.getenv("API_BASE_URL", "http://localhost:8000"),
        description="Base URL of the parse-pdf API",
    )
    timeout: float = Field(default=120.0, gt=0)


class LocalPdfExtractor:
    """Extracts text in-process with pypdf."""

    async def extract(self, content: bytes) -> str:
        result = await asyncio.to_thread(parse_pdf, content)
        logger.info(f"Extracted {len(result.text)} characters from {result.pages} pages")
        return result.text


class RemotePdfExtractor:
    """Extracts text through the server-side parse-pdf endpoint."""

    def __init__(
        self,
        api_base_url: str,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the extractor.

        Args:
            api_base_url: Base URL of the API serving ``/api/parse-pdf``.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self._api_base_url = api_base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def extract(self, content: bytes) -> str:
        payload = ParsePdfRequest(pdf_buffer=list(content)).model_dump(by_alias=True)

        async with httpx.AsyncClient(
            base_url=self._api_base_url,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.post(PARSE_PDF_PATH, json=payload)
                response.raise_for_status()
                return ParsePdfResponse.model_validate(response.json()).text
            except httpx.HTTPStatusError as e:
                raise PDFParseError(
                    f"Parse service returned HTTP {e.response.status_code}: {e.response.text}"
                ) from e
            except httpx.RequestError as e:
                raise PDFParseError(f"Parse service unreachable: {e}") from e
            except ValueError as e:
                # Invalid JSON or a body without "text"
                raise PDFParseError(f"Unexpected parse service response: {e}") from e


def get_pdf_extractor(config: ExtractorConfig | None = None) -> PdfExtractor:
    """Create the extractor selected by configuration.

    Args:
        config: Optional extractor configuration.
                Loads from environment if not provided.

    Returns:
        A LocalPdfExtractor or RemotePdfExtractor.
    """
    config = config or ExtractorConfig()
    if config.mode == "remote":
        return RemotePdfExtractor(config.api_base_url, timeout=config.timeout)
    return LocalPdfExtractor()
