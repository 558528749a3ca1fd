"""Test package for PDF Chatbot.

Structure:
    - unit/: Individual function and class tests
    - integration/: API endpoints and the upload-then-chat workflow

PDFs are generated by fixtures; the completion API is replaced with
httpx.MockTransport. Leverages pytest with pytest-check for soft assertions.
"""
