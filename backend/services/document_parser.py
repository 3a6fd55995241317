import io
import logging
from pathlib import PurePath

import pdfplumber

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = frozenset({".pdf", ".docx", ".txt"})


class UnsupportedFormatError(ValueError):
    """Raised for resume files whose extension we cannot read."""

    def __init__(self, extension: str) -> None:
        self.extension = extension
        super().__init__(f"Unsupported file format: {extension or '(none)'}")


def file_extension(filename: str) -> str:
    return PurePath(filename or "").suffix.lower()


def extract_text_pdf(pdf_bytes: bytes) -> str:
    """Extract all text from a PDF file."""
    with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
        pages = [page.extract_text() or "" for page in pdf.pages]
    return "\n".join(pages).strip()


def extract_text_docx(docx_bytes: bytes) -> str:
    """Extract all text from a DOCX file."""
    from docx import Document

    doc = Document(io.BytesIO(docx_bytes))
    return "\n".join(p.text for p in doc.paragraphs).strip()


def extract_text_plain(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace").strip()


def extract_text(filename: str, content: bytes) -> str:
    """Dispatch on the file extension and return the document's raw text.

    Raises UnsupportedFormatError for anything other than PDF, DOCX or TXT.
    """
    extension = file_extension(filename)
    if extension not in SUPPORTED_EXTENSIONS:
        logger.info("Rejecting resume with unsupported extension %r", extension)
        raise UnsupportedFormatError(extension)

    logger.debug("Extracting %s resume (%d bytes)", extension, len(content))
    if extension == ".pdf":
        return extract_text_pdf(content)
    if extension == ".docx":
        return extract_text_docx(content)
    return extract_text_plain(content)
