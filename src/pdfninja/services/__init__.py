"""
PDFNinja - Services Package

Rendering, the processing API client and the tool runners built on it.
"""

from pdfninja.services.api_client import ProcessingClient
from pdfninja.services.merge_queue import MergeQueue
from pdfninja.services.processor import ToolProcessor

__all__ = ["MergeQueue", "ProcessingClient", "ToolProcessor"]
