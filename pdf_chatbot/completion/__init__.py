"""Chat completion through the hosted Gemini API.

Responsibilities:
    - Configuration of credentials, model and fixed generation parameters
    - A single-shot generateContent call with explicit success/failure

Maintains clean separation from the UI and the session state.
"""

from pdf_chatbot.completion.client import CompletionClient, CompletionError
from pdf_chatbot.completion.config import CompletionConfig, get_completion_config

__all__ = ["CompletionClient", "CompletionConfig", "CompletionError", "get_completion_config"]
