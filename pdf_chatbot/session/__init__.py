"""Chat session state and the controllers that drive it.

Responsibilities:
    - Per-page state container (transcript, upload slot, typing flag)
    - Upload workflow: validation, reading, extraction, error reporting
    - Conversation workflow: history assembly, completion call, fallback reply

No UI code lives here; the view subscribes to ``ChatSession`` changes.
"""

from pdf_chatbot.session.conversation import FALLBACK_REPLY, ConversationController, build_contents
from pdf_chatbot.session.state import ChatSession
from pdf_chatbot.session.upload import UploadController, UploadedFile

__all__ = [
    "FALLBACK_REPLY",
    "ChatSession",
    "ConversationController",
    "UploadController",
    "UploadedFile",
    "build_contents",
]
