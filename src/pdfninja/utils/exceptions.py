"""
PDFNinja - Custom Exceptions Module

This module defines custom exception classes for specific error cases
in the PDFNinja client.
"""


class PdfNinjaError(Exception):
    """Base exception for all PDFNinja errors.

    All custom exceptions should inherit from this class to allow
    catching any PDFNinja-specific error.
    """

    def __init__(self, message: str, details: str | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional technical details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class ValidationError(PdfNinjaError):
    """Raised when input validation fails.

    Validation errors are local and recoverable: the caller corrects the
    input and tries again. State is never modified when one is raised.
    """

    def __init__(
        self,
        field: str,
        value: object = None,
        reason: str | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            field: Name of the field that failed validation
            value: Optional value that failed validation
            reason: Optional reason for the validation failure
        """
        self.field = field
        self.value = value
        self.reason = reason

        msg = f"Validation error for '{field}'"
        if reason:
            msg += f": {reason}"

        super().__init__(msg)


class InvalidPageCountError(ValidationError):
    """Raised when a document reports a page count that is not positive."""

    def __init__(self, page_count: object) -> None:
        self.page_count = page_count
        super().__init__(
            "page_count", page_count, f"page count must be a positive integer, got {page_count!r}"
        )


class PageOutOfRangeError(ValidationError):
    """Raised when a page number falls outside 1..page_count."""

    def __init__(self, page_number: object, page_count: int) -> None:
        self.page_number = page_number
        self.page_count = page_count
        super().__init__(
            "page_number",
            page_number,
            f"page {page_number!r} is outside 1..{page_count}",
        )


class IndexOutOfRangeError(ValidationError):
    """Raised when an ordering index falls outside 0..count-1."""

    def __init__(self, index: object, count: int) -> None:
        self.index = index
        self.count = count
        super().__init__("index", index, f"index {index!r} is outside 0..{count - 1}")


class InvalidRotationError(ValidationError):
    """Raised when a rotation delta is not a multiple of 90 degrees."""

    def __init__(self, degrees: object) -> None:
        self.degrees = degrees
        super().__init__(
            "rotation", degrees, f"rotation must be a multiple of 90 degrees, got {degrees!r}"
        )


class EmptySelectionError(ValidationError):
    """Raised when a tool needs at least one selected page and none is."""

    def __init__(self, tool: str = "") -> None:
        self.tool = tool
        reason = "select at least one page"
        if tool:
            reason += f" to {tool}"
        super().__init__("selection", None, reason)


class WouldRemoveAllPagesError(ValidationError):
    """Raised when a removal would leave the document without pages."""

    def __init__(self, page_count: int) -> None:
        self.page_count = page_count
        super().__init__(
            "selection",
            page_count,
            "cannot remove all pages, keep at least one page",
        )


class NotEnoughFilesError(ValidationError):
    """Raised when a multi-file tool has fewer files than it needs."""

    def __init__(self, required: int, available: int) -> None:
        self.required = required
        self.available = available
        super().__init__(
            "files",
            available,
            f"select at least {required} files (have {available})",
        )


class InvalidDocumentStateError(PdfNinjaError):
    """Raised when an operation is attempted in the wrong document state."""

    def __init__(self, operation: str, state: str) -> None:
        self.operation = operation
        self.state = state
        super().__init__(f"Cannot {operation} while document is {state}")


class SubmissionInProgressError(PdfNinjaError):
    """Raised when a submission is attempted while another is in flight."""

    def __init__(self) -> None:
        super().__init__("A request is already in progress")


class InvalidPdfError(PdfNinjaError):
    """Raised when a PDF file is invalid or corrupted."""

    def __init__(self, name: str, reason: str | None = None) -> None:
        """Initialize the exception.

        Args:
            name: Name of the invalid PDF file
            reason: Optional reason why the PDF is invalid
        """
        self.name = name
        self.reason = reason
        msg = f"Invalid PDF file: {name}"
        if reason:
            msg += f" - {reason}"
        super().__init__(msg)


class RemoteProcessingError(PdfNinjaError):
    """Raised when the processing API fails or cannot be reached."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        endpoint: str | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Server-provided message, or a generic one
            status_code: Optional HTTP status code of the response
            endpoint: Optional endpoint path that was called
        """
        self.status_code = status_code
        self.endpoint = endpoint

        details = None
        if status_code is not None:
            details = f"status={status_code}"
            if endpoint:
                details += f", endpoint={endpoint}"

        super().__init__(message, details=details)


class ConfigurationError(PdfNinjaError):
    """Raised when there's a configuration-related error."""

    def __init__(self, setting_name: str | None = None, reason: str | None = None) -> None:
        """Initialize the exception.

        Args:
            setting_name: Optional name of the problematic setting
            reason: Optional reason for the error
        """
        self.setting_name = setting_name
        self.reason = reason

        if setting_name:
            msg = f"Configuration error for '{setting_name}'"
        else:
            msg = "Configuration error"

        if reason:
            msg += f": {reason}"

        super().__init__(msg)


# Exception hierarchy summary:
# PdfNinjaError (base)
# ├── ValidationError
# │   ├── InvalidPageCountError
# │   ├── PageOutOfRangeError
# │   ├── IndexOutOfRangeError
# │   ├── InvalidRotationError
# │   ├── EmptySelectionError
# │   ├── WouldRemoveAllPagesError
# │   └── NotEnoughFilesError
# ├── InvalidDocumentStateError
# ├── SubmissionInProgressError
# ├── InvalidPdfError
# ├── RemoteProcessingError
# └── ConfigurationError
