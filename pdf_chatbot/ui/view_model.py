"""What the chat page shows for a given session state.

Kept free of NiceGUI so the render rules can be checked without a browser.
"""

from pydantic import BaseModel, ConfigDict

from pdf_chatbot.models.schemas import Message
from pdf_chatbot.session.state import ChatSession

UPLOAD_LABEL = "Upload PDF"
PROCESSING_LABEL = "Processing..."


class ChatView(BaseModel):
    """Snapshot of everything the page renders.

    Attributes:
        messages: Transcript, drawn first.
        error: Upload error banner, drawn after the transcript.
        typing: Typing indicator, drawn last.
        upload_enabled: Whether the upload trigger accepts clicks.
        upload_label: Text on the upload trigger.
        send_enabled: Whether the send button accepts clicks.
    """

    model_config = ConfigDict(frozen=True)

    messages: tuple[Message, ...]
    error: str | None
    typing: bool
    upload_enabled: bool
    upload_label: str
    send_enabled: bool

    @property
    def is_empty(self) -> bool:
        return not self.messages and not self.error and not self.typing


def build_view(session: ChatSession) -> ChatView:
    processing = session.upload.processing
    return ChatView(
        messages=session.messages,
        error=session.upload.error,
        typing=session.is_typing,
        upload_enabled=not processing,
        upload_label=PROCESSING_LABEL if processing else UPLOAD_LABEL,
        send_enabled=not session.is_typing,
    )
