"""Pytest fixtures and shared test configuration.

Fixtures:
    - pdf_factory: Builds small text PDFs in memory
    - completion_config: CompletionConfig with a dummy key
    - gemini_reply: Builds a generateContent success body
    - async_client: HTTPX client for API testing
"""

from collections.abc import AsyncIterator, Callable

import pytest
from httpx import ASGITransport, AsyncClient

from pdf_chatbot.api import app
from pdf_chatbot.completion.config import CompletionConfig


def build_pdf(pages: list[str]) -> bytes:
    """Build a PDF with one Helvetica text line per page.

    An empty string produces a page without any text.
    """
    page_count = len(pages)
    first_page_obj = 4
    page_refs = " ".join(f"{first_page_obj + 2 * i} 0 R" for i in range(page_count))

    objects: list[bytes] = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{page_refs}] /Count {page_count} >>".encode(),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    for i, text in enumerate(pages):
        content_obj = first_page_obj + 2 * i + 1
        objects.append(
            (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Resources << /Font << /F1 3 0 R >> >> /Contents {content_obj} 0 R >>"
            ).encode()
        )
        stream = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode() if text else b""
        objects.append(
            f"<< /Length {len(stream)} >>\nstream\n".encode() + stream + b"\nendstream"
        )

    out = bytearray(b"%PDF-1.4\n")
    offsets: list[int] = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"

    xref_offset = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode()
    out += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
        f"startxref\n{xref_offset}\n%%EOF\n"
    ).encode()
    return bytes(out)


def gemini_body(text: str) -> dict:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


@pytest.fixture
def pdf_factory() -> Callable[[list[str]], bytes]:
    """Return the in-memory PDF builder."""
    return build_pdf


@pytest.fixture
def gemini_reply() -> Callable[[str], dict]:
    """Return a builder for successful generateContent bodies."""
    return gemini_body


@pytest.fixture
def completion_config() -> CompletionConfig:
    """Completion settings pointing at a fake host."""
    return CompletionConfig(
        api_key="test-key",
        base_url="https://gemini.test/v1beta",
        model_name="gemini-test",
    )


@pytest.fixture
async def async_client() -> AsyncIterator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
