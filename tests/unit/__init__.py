"""Unit tests for individual components in isolation.

Coverage:
    - parsing/: Text extraction and extractor variants
    - completion/: Configuration and the generateContent client
    - session/: State container, upload and conversation controllers
"""
