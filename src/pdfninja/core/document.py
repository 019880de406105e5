"""
PDFNinja - Document Model and Controller

A Document is one loaded source file plus everything derived from it. The
DocumentController owns exactly one Document at a time, drives its state
machine and releases its binary resources when it is cleared or replaced.

State machine::

    EMPTY -> LOADING -> READY -> SUBMITTING -> READY (result attached)
    LOADING -> ERROR        (file could not be parsed)
    SUBMITTING -> READY     (request failed, last_error set, resubmit allowed)
    any state -> EMPTY      (clear or load a new file, except while SUBMITTING)
"""

import os
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from pdfninja.core.page_set import PageSetTransformer
from pdfninja.utils import temp_manager
from pdfninja.utils.exceptions import (
    InvalidDocumentStateError,
    SubmissionInProgressError,
)
from pdfninja.utils.format_utils import format_file_size
from pdfninja.utils.logger import logger


class DocumentState(Enum):
    """Lifecycle state of a document."""

    EMPTY = "empty"
    LOADING = "loading"
    READY = "ready"
    SUBMITTING = "submitting"
    ERROR = "error"


@dataclass
class ProcessingResult:
    """Opaque response of the processing API.

    Attributes:
        content: Response body as returned by the server
        content_type: Response media type
        filename: Suggested download filename
        is_archive: Whether the body is a zip of several files
    """

    content: bytes
    content_type: str = "application/pdf"
    filename: str = ""
    is_archive: bool = False

    @property
    def size(self) -> int:
        return len(self.content)

    def save(self, path: str) -> str:
        """Write the content to *path* and return it."""
        with open(path, "wb") as f:
            f.write(self.content)
        logger.info(f"Saved {self.filename or 'result'} to {path} ({format_file_size(self.size)})")
        return path


@dataclass
class Document:
    """One loaded source file and its derived state.

    Attributes:
        id: Opaque token, "<name>-<millis>"
        name: Original filename
        byte_source: Owned binary content (None once released)
        page_count: Pages reported by the renderer (0 until known)
        state: Current lifecycle state
        result: Last processing result, if any
        result_path: Tracked blob holding the result content
        last_error: Message of the last failed load or submission
    """

    name: str
    byte_source: bytes | None
    id: str = ""
    page_count: int = 0
    state: DocumentState = DocumentState.LOADING
    result: ProcessingResult | None = None
    result_path: str | None = None
    last_error: str | None = None
    resources: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.id:
            self.id = f"{self.name}-{int(time.time() * 1000)}"

    @property
    def size(self) -> int:
        return len(self.byte_source) if self.byte_source is not None else 0

    @property
    def released(self) -> bool:
        return self.byte_source is None and not self.resources

    def attach_blob(self, data: bytes, suffix: str = "") -> str:
        """Store derived binary data as a blob owned by this document."""
        path = temp_manager.create_blob(data, suffix=suffix)
        self.resources.append(path)
        return path

    def release_blob(self, path: str) -> None:
        """Release one owned blob."""
        if path in self.resources:
            self.resources.remove(path)
        temp_manager.release_blob(path)

    def release(self) -> None:
        """Release every binary resource owned by this document."""
        for path in list(self.resources):
            temp_manager.release_blob(path)
        self.resources.clear()
        self.byte_source = None
        self.result = None
        self.result_path = None
        logger.debug(f"Released resources of document {self.id}")


class DocumentController:
    """Owns one document, its page set and its state transitions."""

    def __init__(self) -> None:
        self._document: Document | None = None
        self.pages = PageSetTransformer()

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def document(self) -> Document | None:
        return self._document

    @property
    def state(self) -> DocumentState:
        if self._document is None:
            return DocumentState.EMPTY
        return self._document.state

    @property
    def busy(self) -> bool:
        return self.state is DocumentState.SUBMITTING

    def require_document(self, operation: str) -> Document:
        """Return the current document or raise if there is none."""
        if self._document is None:
            raise InvalidDocumentStateError(operation, DocumentState.EMPTY.value)
        return self._document

    @property
    def can_submit(self) -> bool:
        """True when a document is READY for a request."""
        return self.state is DocumentState.READY

    def require_submittable(self, operation: str) -> Document:
        """Return the current document if a request can be submitted for it.

        Raises:
            SubmissionInProgressError: If a request is already in flight
            InvalidDocumentStateError: If there is no document, it is still
                loading, or it failed to load
        """
        if self.busy:
            raise SubmissionInProgressError()
        document = self.require_document(operation)
        if not self.can_submit:
            raise InvalidDocumentStateError(operation, document.state.value)
        return document

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, name: str, data: bytes) -> Document:
        """Start loading a new file, discarding the current one.

        Args:
            name: Original filename
            data: File content

        Returns:
            The new document in LOADING state
        """
        if self.busy:
            raise SubmissionInProgressError()

        self.clear()
        self._document = Document(name=os.path.basename(name), byte_source=data)
        logger.info(f"Loading {self._document.name} ({format_file_size(len(data))})")
        return self._document

    def page_count_reported(self, page_count: int) -> None:
        """Renderer finished parsing: populate the page set.

        Raises:
            InvalidPageCountError: If page_count is not positive (state unchanged)
        """
        document = self._expect("receive a page count", DocumentState.LOADING)
        self.pages.initialize(page_count)
        document.page_count = page_count
        document.state = DocumentState.READY
        logger.info(f"{document.name}: {page_count} page(s)")

    def load_failed(self, message: str) -> None:
        """Renderer could not parse the file."""
        document = self._expect("fail loading", DocumentState.LOADING)
        document.state = DocumentState.ERROR
        document.last_error = message
        logger.error(f"Failed to load {document.name}: {message}")

    def open_document(
        self, name: str, data: bytes, count_pages: Callable[[bytes], int]
    ) -> Document:
        """Load *data* and ask *count_pages* for its page count.

        Any exception raised by *count_pages* moves the document to ERROR
        and is re-raised.
        """
        document = self.load(name, data)
        try:
            page_count = count_pages(data)
            self.page_count_reported(page_count)
        except Exception as e:
            self.load_failed(str(e))
            raise
        return document

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def begin_submission(self) -> Document:
        """Mark a request as in flight.

        Raises:
            SubmissionInProgressError: If a request is already in flight
            InvalidDocumentStateError: If the document cannot be submitted
        """
        document = self.require_submittable("submit")
        document.state = DocumentState.SUBMITTING
        document.last_error = None
        return document

    def complete_submission(self, result: ProcessingResult) -> None:
        """Attach *result* and return to READY, releasing any previous result.

        If the result cannot be stored the submission is failed instead, the
        previous result is kept and the error is re-raised.
        """
        document = self._expect("complete a submission", DocumentState.SUBMITTING)

        suffix = os.path.splitext(result.filename)[1] if result.filename else ""
        try:
            path = document.attach_blob(result.content, suffix=suffix)
        except OSError as e:
            self.fail_submission(f"Could not store the result: {e}")
            raise

        if document.result_path is not None:
            document.release_blob(document.result_path)
        document.result_path = path
        document.result = result
        document.state = DocumentState.READY
        logger.info(
            f"{document.name}: received {result.filename or 'result'} "
            f"({format_file_size(result.size)})"
        )

    def fail_submission(self, message: str) -> None:
        """Return to READY after a failed request, keeping page state and any earlier result."""
        document = self._expect("fail a submission", DocumentState.SUBMITTING)
        document.state = DocumentState.READY
        document.last_error = message
        logger.error(f"{document.name}: request failed: {message}")

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Discard the current document and release its resources."""
        if self._document is None:
            return
        if self.busy:
            raise SubmissionInProgressError()
        self._document.release()
        self._document.state = DocumentState.EMPTY
        self._document = None
        self.pages.clear()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _expect(self, operation: str, state: DocumentState) -> Document:
        document = self.require_document(operation)
        if document.state is not state:
            raise InvalidDocumentStateError(operation, document.state.value)
        return document
