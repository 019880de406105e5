"""Pytest configuration for pdfninja tests.

Provides small in-memory PDFs built with pikepdf, so tests never depend on
files on disk.
"""

import io

import pikepdf
import pytest


def _create_test_pdf(num_pages: int = 3, title: str | None = None) -> bytes:
    """Create a minimal valid PDF and return its bytes."""
    pdf = pikepdf.Pdf.new()
    for _ in range(num_pages):
        page = pikepdf.Page(
            pikepdf.Dictionary(
                Type=pikepdf.Name.Page,
                MediaBox=[0, 0, 612, 792],
            )
        )
        pdf.pages.append(page)
    if title:
        pdf.docinfo["/Title"] = title
    buf = io.BytesIO()
    pdf.save(buf)
    return buf.getvalue()


@pytest.fixture
def pdf_bytes():
    """A three-page PDF."""
    return _create_test_pdf(3)


@pytest.fixture
def pdf_factory():
    """Callable building PDFs: pdf_factory(num_pages, title=None)."""
    return _create_test_pdf
