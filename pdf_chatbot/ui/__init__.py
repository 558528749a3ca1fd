"""NiceGUI interface - thin visualization layer for the PDF chat.

Responsibilities:
    - Chat transcript display with typing indicator and upload errors
    - PDF upload trigger, disabled while a document is being processed
    - Scroll-to-latest after every state change

Contains no business logic. Delegates all operations to the session controllers.
"""
