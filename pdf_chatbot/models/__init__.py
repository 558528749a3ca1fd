"""Pydantic models shared across the app.

Models:
    - Message, Sender, UploadState: in-memory chat session state
    - ParsePdfRequest, ParsePdfResponse, ParsePdfErrorResponse: /api/parse-pdf
    - Content, Part, GenerationConfig, GenerateContentRequest,
      GenerateContentResponse: Gemini generateContent payloads
"""

from pdf_chatbot.models.schemas import (
    Candidate,
    Content,
    GenerateContentRequest,
    GenerateContentResponse,
    GenerationConfig,
    Message,
    ParsePdfErrorResponse,
    ParsePdfRequest,
    ParsePdfResponse,
    Part,
    Sender,
    UploadState,
)

__all__ = [
    "Candidate",
    "Content",
    "GenerateContentRequest",
    "GenerateContentResponse",
    "GenerationConfig",
    "Message",
    "ParsePdfErrorResponse",
    "ParsePdfRequest",
    "ParsePdfResponse",
    "Part",
    "Sender",
    "UploadState",
]
