"""FastAPI endpoints for the PDF chatbot.

Endpoints:
    - GET /health: Service health status
    - POST /api/parse-pdf: Server-side PDF text extraction
"""

from pdf_chatbot.api.app import app, create_app

__all__ = ["app", "create_app"]
