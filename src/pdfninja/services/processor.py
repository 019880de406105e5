"""
PDFNinja - Tool Processor

Runs one tool against the document held by a DocumentController: builds the
payload from the page set, marks the document busy, calls the processing API
and attaches the result. Local validation errors are raised before anything
changes; remote failures return the document to READY with the error
recorded, so it can be resubmitted, and are re-raised.
"""

import logging
from collections.abc import Callable

from pdfninja.core.document import DocumentController, ProcessingResult
from pdfninja.core.options import (
    CompressionLevel,
    ConversionTarget,
    OcrLanguage,
    PageNumberOptions,
    WatermarkOptions,
)
from pdfninja.core.page_set import PageSetTransformer
from pdfninja.services.api_client import ProcessingClient
from pdfninja.utils.exceptions import RemoteProcessingError

logger = logging.getLogger(__name__)


class ToolProcessor:
    """Submits the controller's document to the processing API."""

    def __init__(self, controller: DocumentController, client: ProcessingClient) -> None:
        self.controller = controller
        self.client = client

    def _submit(
        self, tool: str, call: Callable[[str, bytes], ProcessingResult]
    ) -> ProcessingResult:
        """Run *call* with the document's name and bytes inside a submission.

        Raises:
            SubmissionInProgressError: If a request is already in flight
            InvalidDocumentStateError: If the document cannot be submitted
            RemoteProcessingError: If the API call fails
        """
        document = self.controller.begin_submission()
        logger.info(f"Submitting {document.name} to {tool}")

        try:
            result = call(document.name, document.byte_source or b"")
        except RemoteProcessingError as e:
            self.controller.fail_submission(e.message)
            raise
        except Exception as e:
            self.controller.fail_submission(str(e))
            raise

        self.controller.complete_submission(result)
        return result

    def _ready_pages(self, operation: str) -> PageSetTransformer:
        """Page set of a submittable document; raises before any payload is built."""
        self.controller.require_submittable(operation)
        return self.controller.pages

    # ------------------------------------------------------------------
    # Page-level tools
    # ------------------------------------------------------------------

    def split(self) -> ProcessingResult:
        pages = self._ready_pages("split").build_split_payload()
        return self._submit("split", lambda name, data: self.client.split(name, data, pages))

    def extract(self) -> ProcessingResult:
        pages = self._ready_pages("extract pages").build_extraction_payload()
        return self._submit(
            "extract", lambda name, data: self.client.extract_pages(name, data, pages)
        )

    def remove_pages(self) -> ProcessingResult:
        pages = self._ready_pages("remove pages").build_removal_payload()
        return self._submit(
            "remove pages", lambda name, data: self.client.remove_pages(name, data, pages)
        )

    def organize(self) -> ProcessingResult:
        order = self._ready_pages("organize").build_reorder_payload()
        return self._submit("organize", lambda name, data: self.client.organize(name, data, order))

    def rotate(self, include_unrotated: bool = True) -> ProcessingResult:
        rotations = self._ready_pages("rotate").build_rotation_payload(include_unrotated)
        return self._submit("rotate", lambda name, data: self.client.rotate(name, data, rotations))

    # ------------------------------------------------------------------
    # Whole-document tools
    # ------------------------------------------------------------------

    def compress(self, level: CompressionLevel = CompressionLevel.MEDIUM) -> ProcessingResult:
        level = CompressionLevel(level)
        return self._submit("compress", lambda name, data: self.client.compress(name, data, level))

    def ocr(self, language: OcrLanguage = OcrLanguage.ENGLISH) -> ProcessingResult:
        language = OcrLanguage(language)
        return self._submit("ocr", lambda name, data: self.client.ocr(name, data, language))

    def repair(self) -> ProcessingResult:
        return self._submit("repair", self.client.repair)

    def watermark(self, options: WatermarkOptions | None = None) -> ProcessingResult:
        options = options or WatermarkOptions()
        return self._submit(
            "watermark", lambda name, data: self.client.watermark(name, data, options)
        )

    def add_page_numbers(self, options: PageNumberOptions | None = None) -> ProcessingResult:
        options = options or PageNumberOptions()
        return self._submit(
            "page numbers", lambda name, data: self.client.add_page_numbers(name, data, options)
        )

    def convert(self, target: ConversionTarget) -> ProcessingResult:
        target = ConversionTarget(target)
        return self._submit(
            target.value, lambda name, data: self.client.convert(name, data, target)
        )
