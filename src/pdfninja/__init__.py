"""
PDFNinja - Python client for the PDFNinja processing API

This package keeps per-document page state (selection, rotation, ordering)
on the client and sends documents to the remote PDF processing service.
"""

from pdfninja.config import APP_VERSION
from pdfninja.core.document import DocumentController, DocumentState
from pdfninja.core.page_set import PageSetTransformer
from pdfninja.services.api_client import ProcessingClient
from pdfninja.services.processor import ToolProcessor

__version__ = APP_VERSION
__author__ = "PDFNinja Team"

__all__ = [
    "DocumentController",
    "DocumentState",
    "PageSetTransformer",
    "ProcessingClient",
    "ToolProcessor",
    "__version__",
]
