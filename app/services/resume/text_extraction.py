"""
Text Extraction Module

Routes an uploaded resume to a text extractor by media type and rejects
uploads whose extracted text is too short to analyze. Extraction itself is a
black box to the rest of the service: it yields text or one of the typed
failures below.

Dependencies:
- pypdf: For PDF text extraction.
- loguru: For logging operations.
- app.errors.exceptions: For typed extraction failures.
"""

import io
from pathlib import Path
from typing import Callable, Dict, Optional
from pypdf import PdfReader
from loguru import logger
from app.errors.exceptions import InvalidInput, TextExtractionFailed, UnsupportedFileType

MIN_TEXT_LENGTH = 50

Extractor = Callable[[bytes], str]


def extract_pdf_text(content: bytes) -> str:
    """Extract the text of every page of a PDF."""
    reader = PdfReader(io.BytesIO(content))
    parts = []
    for page in reader.pages:
        page_text = (page.extract_text() or "").strip()
        if page_text:
            parts.append(page_text)
    return "\n".join(parts)


def extract_plain_text(content: bytes) -> str:
    return content.decode("utf-8", errors="replace")


class TextExtractionDispatcher:
    """
    Picks an extractor for an upload and enforces the minimum text length.

    Extractors are keyed by kind ("pdf", "text"); more can be registered, for
    example an OCR extractor under "image".
    """

    def __init__(self, extractors: Optional[Dict[str, Extractor]] = None, min_length: int = MIN_TEXT_LENGTH):
        self.extractors = extractors if extractors is not None else {
            "pdf": extract_pdf_text,
            "text": extract_plain_text,
        }
        self.min_length = min_length

    @staticmethod
    def classify(media_type: Optional[str], filename: Optional[str]) -> Optional[str]:
        """Map a media type (or, for generic uploads, a file extension) to an extractor kind."""
        media_type = (media_type or "").lower()
        extension = Path(filename or "").suffix.lower()
        generic = media_type in ("", "application/octet-stream")

        if media_type == "application/pdf" or (generic and extension == ".pdf"):
            return "pdf"
        if media_type == "text/plain" or (generic and extension == ".txt"):
            return "text"
        if media_type.startswith("image/") or (generic and extension in (".jpg", ".jpeg", ".png")):
            return "image"
        return None

    def extract(self, content: bytes, filename: Optional[str], media_type: Optional[str]) -> str:
        """
        Extract text from an uploaded file.

        Args:
            content (bytes): Uploaded file contents
            filename (str): Client-supplied file name
            media_type (str): Client-supplied content type

        Returns:
            str: Extracted text of at least `min_length` characters

        Raises:
            InvalidInput: If the file is empty or its text is too short
            UnsupportedFileType: If no extractor handles the file
            TextExtractionFailed: If the extractor raised
        """
        if not content:
            raise InvalidInput("File is empty or unreadable")

        kind = self.classify(media_type, filename)
        extractor = self.extractors.get(kind) if kind else None
        if extractor is None:
            logger.error(f"[Resume Upload] Unsupported file type: {media_type} ({filename})")
            raise UnsupportedFileType(media_type)

        logger.info(f"[Resume Upload] Extracting {kind} text from {filename!r} ({len(content)} bytes)")
        try:
            text = extractor(content)
        except Exception as e:
            logger.error(f"[Resume Upload] {kind} extraction failed: {e}")
            raise TextExtractionFailed(
                f"Failed to extract text from {kind} file",
                suggestion="The file might be corrupted, password-protected, or in an unsupported format. Try converting it to a standard PDF."
            ) from e

        text = text or ""
        if len(text.strip()) < self.min_length:
            logger.error(f"[Resume Upload] Extracted text too short: {len(text.strip())} characters")
            raise InvalidInput("Text too short or empty. Please ensure your resume has readable content.")

        logger.info(f"[Resume Upload] Extracted {len(text)} characters")
        return text
