"""PDF Chatbot - chat with the contents of an uploaded PDF.

Extracts text from an uploaded PDF with pypdf and forwards the conversation,
together with the extracted text, to the Gemini generateContent API.

Components:
    - api: FastAPI endpoints (server-side PDF extraction, health)
    - completion: Gemini client and its configuration
    - parsing: PDF text extraction, in-process or through the API
    - session: per-page chat state and the upload/conversation controllers
    - ui: NiceGUI chat page
    - models: Pydantic schemas
"""

__version__ = "0.1.0"
