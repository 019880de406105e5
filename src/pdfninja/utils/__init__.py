"""
PDFNinja - Utils Package

Utility modules for the client.
"""

from pdfninja.utils.i18n import _
from pdfninja.utils.logger import logger

__all__ = [
    "logger",
    "_",
]
