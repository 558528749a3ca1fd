"""Upload controller: validates a selected file and drives text extraction.

State transitions for one submission:

    error cleared
      -> wrong MIME type: error set, nothing else happens
      -> processing = True
         -> read fails:      error set
         -> extraction fails: error set, previous extracted text kept
         -> success:          extracted text replaced, announcement appended
      -> processing = False  (always, via finally)
"""

import logging
from typing import Protocol

from pdf_chatbot.models.schemas import Sender
from pdf_chatbot.parsing.extractors import PdfExtractor
from pdf_chatbot.parsing.pdf_parser import PDF_MEDIA_TYPE, PDFParseError
from pdf_chatbot.session.state import ChatSession

logger = logging.getLogger(__name__)

INVALID_FILE_TYPE_ERROR = "Please upload a PDF file."
FILE_READ_ERROR = "Error reading the file. Please try again."
EXTRACTION_ERROR = "Failed to parse the PDF. The file might be corrupted or password-protected."
UNEXPECTED_UPLOAD_ERROR = "An unexpected error occurred. Please try again."


class UploadedFile(Protocol):
    """A user-selected file handle.

    NiceGUI's ``FileUpload`` (``UploadEventArguments.file``) matches this.
    """

    name: str
    content_type: str

    async def read(self) -> bytes: ...


def success_message(filename: str) -> str:
    return f'PDF "{filename}" processed successfully!'


class UploadController:
    """Turns a selected file into extracted text or a reported error."""

    def __init__(self, session: ChatSession, extractor: PdfExtractor) -> None:
        self._session = session
        self._extractor = extractor

    async def submit_upload(self, file: UploadedFile | None) -> None:
        """Validate, read and extract a user-selected file.

        Never raises; every outcome is reported through the session's
        upload state. The busy flag is released on every exit path once the
        file has been accepted.

        Args:
            file: The selected file, or None if the dialog was dismissed.
        """
        self._session.update_upload(error=None)

        if file is None:
            return

        if file.content_type != PDF_MEDIA_TYPE:
            logger.warning(f"Rejected upload {file.name!r} with type {file.content_type!r}")
            self._session.update_upload(error=INVALID_FILE_TYPE_ERROR)
            return

        self._session.update_upload(processing=True)
        try:
            await self._read_and_extract(file)
        except Exception:
            logger.exception(f"Unexpected error handling upload {file.name!r}")
            self._session.update_upload(error=UNEXPECTED_UPLOAD_ERROR)
        finally:
            self._session.update_upload(processing=False)

    async def _read_and_extract(self, file: UploadedFile) -> None:
        try:
            content = await file.read()
        except OSError as e:
            logger.warning(f"Failed to read upload {file.name!r}: {e}")
            self._session.update_upload(error=FILE_READ_ERROR)
            return

        try:
            text = await self._extractor.extract(content)
        except PDFParseError as e:
            logger.warning(f"PDF parse error for {file.name}: {e}")
            self._session.update_upload(error=EXTRACTION_ERROR)
            return

        self._session.update_upload(extracted_text=text)
        self._session.add_message(Sender.AI, success_message(file.name))
        logger.info(f"Processed PDF {file.name} ({len(text)} characters)")
