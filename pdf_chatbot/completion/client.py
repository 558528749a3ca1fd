"""Gemini generateContent client.

One request per call: no streaming, no retries. Every failure (transport
error, non-2xx status, undecodable body, response without candidate text) is
raised as ``CompletionError`` so the conversation layer handles one type.
"""

import logging

import httpx
from pydantic import ValidationError

from pdf_chatbot.completion.config import CompletionConfig, get_completion_config
from pdf_chatbot.models.schemas import Content, GenerateContentRequest, GenerateContentResponse

logger = logging.getLogger(__name__)


class CompletionError(Exception):
    """Raised when the completion API call fails or returns an unusable response."""

    pass


def _extract_reply(response: GenerateContentResponse) -> str:
    """Return the text of the first part of the first candidate.

    Raises:
        CompletionError: If any level of the candidate structure is missing.
    """
    if not response.candidates:
        raise CompletionError("Invalid API response: no candidates")

    content = response.candidates[0].content
    if content is None or not content.parts:
        raise CompletionError("Invalid API response: candidate has no content")

    text = content.parts[0].text
    if text is None:
        raise CompletionError("Invalid API response: candidate part has no text")

    return text


class CompletionClient:
    """Async client for the Gemini generateContent endpoint."""

    def __init__(
        self,
        config: CompletionConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Optional completion configuration.
                    Loads from environment if not provided.
            transport: Optional httpx transport (used by tests).
        """
        self._config = config or get_completion_config()
        self._transport = transport

    @property
    def endpoint(self) -> str:
        base_url = self._config.base_url.rstrip("/")
        return f"{base_url}/models/{self._config.model_name}:generateContent"

    def build_request(self, contents: list[Content]) -> GenerateContentRequest:
        """Wrap conversation turns with the fixed generation parameters."""
        return GenerateContentRequest(
            contents=contents,
            generation_config=self._config.generation_config,
        )

    async def complete(self, contents: list[Content]) -> str:
        """Generate a reply for the given conversation.

        Args:
            contents: Ordered conversation turns, oldest first.

        Returns:
            The model's reply text.

        Raises:
            CompletionError: On any transport, status or response-shape failure.
        """
        payload = self.build_request(contents).model_dump(exclude_none=True)
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self._config.api_key,
        }

        async with httpx.AsyncClient(
            timeout=self._config.timeout, transport=self._transport
        ) as client:
            try:
                response = await client.post(self.endpoint, json=payload, headers=headers)
                response.raise_for_status()
                data = GenerateContentResponse.model_validate(response.json())
            except httpx.HTTPStatusError as e:
                raise CompletionError(
                    f"Completion API error: {e.response.status_code} - {e.response.text}"
                ) from e
            except httpx.RequestError as e:
                raise CompletionError(f"Completion API unreachable: {e}") from e
            except (ValidationError, ValueError) as e:
                raise CompletionError(f"Invalid API response: {e}") from e

        reply = _extract_reply(data)
        logger.info(f"Received {len(reply)} character reply from {self._config.model_name}")
        return reply
