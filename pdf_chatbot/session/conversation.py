"""Conversation controller: user turn in, model reply (or fallback) out."""

import logging
from collections.abc import Sequence

from pdf_chatbot.completion.client import CompletionClient, CompletionError
from pdf_chatbot.models.schemas import Content, Message, Part, Sender
from pdf_chatbot.session.state import ChatSession

logger = logging.getLogger(__name__)

FALLBACK_REPLY = "An error occurred while fetching the response. Please try again."
DOCUMENT_CONTEXT_PREFIX = "Here is the content of the uploaded PDF:\n"

_ROLES = {Sender.USER: "user", Sender.AI: "model"}


def build_contents(messages: Sequence[Message], document_text: str | None) -> list[Content]:
    """Map the transcript to Gemini turns.

    A document-context turn comes first when ``document_text`` is non-empty,
    followed by every message in chronological order.

    Args:
        messages: The transcript, oldest first, ending with the new user message.
        document_text: Extracted PDF text, if any.

    Returns:
        Turns ready for the completion request.
    """
    contents = [
        Content(role=_ROLES[message.sender], parts=[Part(text=message.text)])
        for message in messages
    ]

    if document_text:
        contents.insert(
            0,
            Content(role="user", parts=[Part(text=f"{DOCUMENT_CONTEXT_PREFIX}{document_text}")]),
        )

    return contents


class ConversationController:
    """Sends user messages to the completion API and records the replies."""

    def __init__(self, session: ChatSession, client: CompletionClient) -> None:
        self._session = session
        self._client = client

    async def send_message(self, text: str) -> None:
        """Append a user turn, request a reply and append it.

        Whitespace-only input is ignored. Failures never propagate: a fixed
        fallback reply is appended instead. The typing flag is cleared only
        after the reply (or fallback) is in the transcript.

        Args:
            text: Raw user input.
        """
        text = text.strip()
        if not text:
            return

        self._session.add_message(Sender.USER, text)
        self._session.set_typing(True)

        try:
            contents = build_contents(
                self._session.messages, self._session.upload.extracted_text
            )
            reply = await self._client.complete(contents)
            self._session.add_message(Sender.AI, reply)
        except CompletionError as e:
            logger.error(f"Error calling the completion API: {e}")
            self._session.add_message(Sender.AI, FALLBACK_REPLY)
        except Exception:
            logger.exception("Unexpected error while fetching the completion")
            self._session.add_message(Sender.AI, FALLBACK_REPLY)
        finally:
            self._session.set_typing(False)
