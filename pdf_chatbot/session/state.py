"""Per-page chat session state.

One ``ChatSession`` is created for every page visit and owned by that page;
nothing here is shared between browser connections. Controllers mutate the
session through its methods and every mutation notifies the subscribers,
which is how the view knows to re-render.
"""

import logging
from collections.abc import Callable

from pdf_chatbot.models.schemas import Message, Sender, UploadState

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class ChatSession:
    """Manages chat state for a user session."""

    def __init__(self) -> None:
        self._messages: list[Message] = []
        self._upload = UploadState()
        self._is_typing = False
        self._listeners: list[Listener] = []

    @property
    def messages(self) -> tuple[Message, ...]:
        """The transcript, oldest first."""
        return tuple(self._messages)

    @property
    def upload(self) -> UploadState:
        return self._upload

    @property
    def is_typing(self) -> bool:
        return self._is_typing

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback run after every state change.

        Returns:
            A function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def add_message(self, sender: Sender, text: str) -> Message:
        message = Message(sender=sender, text=text)
        self._messages.append(message)
        self._notify()
        return message

    def update_upload(self, **changes: object) -> UploadState:
        """Replace the upload state with a copy carrying ``changes``.

        All fields passed in one call change together, before listeners run.
        """
        self._upload = self._upload.model_copy(update=changes)
        self._notify()
        return self._upload

    def set_typing(self, is_typing: bool) -> None:
        self._is_typing = is_typing
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
