"""
PDFNinja - Renderer Service

Reads just enough of a PDF to report its page count and basic metadata.
Uses pikepdf on in-memory data, so nothing touches the filesystem.
"""

import io
import logging
from dataclasses import dataclass

import pikepdf

from pdfninja.utils.exceptions import InvalidPdfError

logger = logging.getLogger(__name__)


@dataclass
class PDFInfo:
    """Basic information about a PDF file."""

    name: str
    page_count: int
    file_size_bytes: int
    title: str = ""
    author: str = ""
    creator: str = ""
    encrypted: bool = False
    pdf_version: str = ""

    @property
    def file_size_mb(self) -> float:
        return self.file_size_bytes / (1024 * 1024)


def _open(data: bytes, name: str) -> pikepdf.Pdf:
    if not data:
        raise InvalidPdfError(name, "file is empty")
    try:
        return pikepdf.open(io.BytesIO(data))
    except pikepdf.PasswordError:
        raise InvalidPdfError(name, "password-protected, remove the password first") from None
    except pikepdf.PdfError as e:
        raise InvalidPdfError(name, f"damaged or not a PDF: {e}") from None


def count_pages(data: bytes, name: str = "document.pdf") -> int:
    """Return the number of pages in *data*.

    Args:
        data: PDF content
        name: Filename used in error messages

    Returns:
        Page count (may be 0 for a PDF without pages)

    Raises:
        InvalidPdfError: If the content cannot be parsed
    """
    with _open(data, name) as pdf:
        page_count = len(pdf.pages)
    logger.debug(f"{name}: {page_count} page(s)")
    return page_count


def get_pdf_info(data: bytes, name: str = "document.pdf") -> PDFInfo:
    """Get basic information about a PDF.

    Raises:
        InvalidPdfError: If the content cannot be parsed
    """
    with _open(data, name) as pdf:
        info = PDFInfo(
            name=name,
            page_count=len(pdf.pages),
            file_size_bytes=len(data),
            pdf_version=str(pdf.pdf_version),
            encrypted=pdf.is_encrypted,
        )

        docinfo = pdf.docinfo
        if "/Title" in docinfo:
            info.title = str(docinfo["/Title"])
        if "/Author" in docinfo:
            info.author = str(docinfo["/Author"])
        if "/Creator" in docinfo:
            info.creator = str(docinfo["/Creator"])

    return info
