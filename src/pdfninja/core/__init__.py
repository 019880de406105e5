"""
PDFNinja - Core Module

Client-side state shared by every tool: per-page selection, rotation and
ordering, the document lifecycle, and tool option structs.

Main Components:
- PageSetTransformer: page state and request payloads
- DocumentController: one loaded document and its state machine
- WatermarkOptions / PageNumberOptions: validated tool settings
"""

from pdfninja.core.document import (
    Document,
    DocumentController,
    DocumentState,
    ProcessingResult,
)
from pdfninja.core.options import (
    CompressionLevel,
    ConversionTarget,
    OcrLanguage,
    PageNumberOptions,
    WatermarkOptions,
)
from pdfninja.core.page_model import PageEntry
from pdfninja.core.page_set import PageSetTransformer

__all__ = [
    "Document",
    "DocumentController",
    "DocumentState",
    "ProcessingResult",
    "CompressionLevel",
    "ConversionTarget",
    "OcrLanguage",
    "PageNumberOptions",
    "WatermarkOptions",
    "PageEntry",
    "PageSetTransformer",
]
