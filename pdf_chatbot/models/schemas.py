"""Pydantic models for chat state, the parse-pdf endpoint and the Gemini API."""

import uuid
from datetime import datetime
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class Sender(str, Enum):
    """Author of a chat message."""

    USER = "user"
    AI = "ai"


class Message(BaseModel):
    """A single entry in the chat transcript.

    Immutable once created; the transcript only ever grows.

    Attributes:
        id: Unique message identifier.
        sender: Who wrote the message (user or ai).
        text: The message text.
        timestamp: Creation time.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    sender: Sender
    text: str
    timestamp: datetime = Field(default_factory=datetime.now)


class UploadState(BaseModel):
    """State of the single upload slot.

    Attributes:
        processing: True while an accepted upload is being read and extracted.
        error: User-facing error of the latest attempt, if any.
        extracted_text: Text of the latest successfully extracted PDF.
    """

    model_config = ConfigDict(frozen=True)

    processing: bool = False
    error: str | None = None
    extracted_text: str | None = None


class ParsePdfRequest(BaseModel):
    """Request body for POST /api/parse-pdf.

    The PDF travels as a JSON array of byte values.
    """

    model_config = ConfigDict(populate_by_name=True)

    pdf_buffer: list[Annotated[int, Field(ge=0, le=255)]] | None = Field(
        None, alias="pdfBuffer", description="Raw PDF bytes as integers 0-255"
    )


class ParsePdfResponse(BaseModel):
    """Successful extraction result."""

    text: str


class ParsePdfErrorResponse(BaseModel):
    """Error body returned by POST /api/parse-pdf."""

    error: str
    details: str | None = None


# Gemini generateContent wire format


class Part(BaseModel):
    text: str | None = None


class Content(BaseModel):
    """One role-tagged conversation turn."""

    role: str | None = None
    parts: list[Part] = Field(default_factory=list)


class GenerationConfig(BaseModel):
    temperature: float
    top_p: float
    top_k: int
    max_output_tokens: int


class GenerateContentRequest(BaseModel):
    contents: list[Content]
    generation_config: GenerationConfig


class Candidate(BaseModel):
    content: Content | None = None


class GenerateContentResponse(BaseModel):
    candidates: list[Candidate] = Field(default_factory=list)
