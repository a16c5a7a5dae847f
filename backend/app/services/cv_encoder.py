"""
Document encoder: turns an uploaded CV into an inline payload for the model.
"""
import base64
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional, Union

import fitz  # PyMuPDF

from .exceptions import EncodingError

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"

DocumentSource = Union[bytes, bytearray, str, Path, BinaryIO]


@dataclass(frozen=True)
class EncodedDocument:
    data: str  # base64
    mime_type: str
    size: int
    filename: Optional[str] = None
    page_count: Optional[int] = None

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.data)


def _read_source(source: DocumentSource) -> bytes:
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    if isinstance(source, (str, Path)):
        with open(source, "rb") as f:
            return f.read()
    content = source.read()
    if not isinstance(content, (bytes, bytearray)):
        raise EncodingError(f"expected a binary stream, got {type(content).__name__} from read()")
    return bytes(content)


def count_pdf_pages(pdf_bytes: bytes) -> int:
    """Open the PDF with PyMuPDF (no poppler dependency) and count its pages."""
    pdf_document = fitz.open(stream=pdf_bytes, filetype="pdf")
    try:
        return len(pdf_document)
    finally:
        pdf_document.close()


def encode_document(
    source: DocumentSource,
    mime_type: str = PDF_MIME_TYPE,
    filename: Optional[str] = None,
) -> EncodedDocument:
    """
    Read a CV and base64-encode it without touching its content.

    Size and type limits are the caller's job; this only fails when the
    bytes cannot be read or, for PDFs, cannot be opened at all.

    Raises:
        EncodingError: on any read failure
    """
    try:
        content = _read_source(source)
    except (OSError, ValueError) as e:
        logger.error("Could not read CV %s: %s", filename or "<upload>", e)
        raise EncodingError(str(e)) from e

    if not content:
        raise EncodingError("file is empty")

    page_count = None
    if mime_type == PDF_MIME_TYPE:
        try:
            page_count = count_pdf_pages(content)
        except Exception as e:
            logger.error("PyMuPDF could not open %s: %s", filename or "<upload>", e)
            raise EncodingError(f"not a readable PDF ({e})") from e
        if page_count == 0:
            raise EncodingError("PDF has no pages")

    encoded = base64.b64encode(content).decode("ascii")
    logger.info(
        "Encoded %s: %d bytes, %s pages, mime=%s",
        filename or "<upload>", len(content), page_count, mime_type,
    )
    return EncodedDocument(
        data=encoded,
        mime_type=mime_type,
        size=len(content),
        filename=filename,
        page_count=page_count,
    )
