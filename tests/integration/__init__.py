"""Integration tests for components working together.

Coverage:
    - /api/parse-pdf and /health through the real FastAPI app
    - Remote extraction against the in-process API
    - Upload followed by chat, with a mocked completion transport
"""
