"""
PDFNinja - Processing API Client

Thin httpx wrapper around the remote PDF processing service. Each tool is one
multipart POST; the response body is returned untouched as a
ProcessingResult. Failures are reported as RemoteProcessingError with the
server's message when it sends one. Requests are never retried.
"""

import json
import logging

import httpx

from pdfninja.config import DEFAULT_REQUEST_TIMEOUT
from pdfninja.constants import ARCHIVE_CONTENT_TYPES, ZIP_MAGIC
from pdfninja.core.document import ProcessingResult
from pdfninja.core.options import (
    CompressionLevel,
    ConversionTarget,
    OcrLanguage,
    PageNumberOptions,
    WatermarkOptions,
)
from pdfninja.utils.exceptions import ConfigurationError, RemoteProcessingError
from pdfninja.utils.format_utils import (
    prefixed_filename,
    replace_extension,
    suffixed_filename,
)

logger = logging.getLogger(__name__)

PDF_MIME = "application/pdf"

# Form field carrying the source file, per endpoint family
PDF_FIELD = "pdf"
CONVERT_FIELD = "file"
MERGE_FIELD = "pdfs"

FileTuple = tuple[str, bytes, str]


def _pdf_file(name: str, data: bytes) -> FileTuple:
    return (name, data, PDF_MIME)


def _is_archive(response: httpx.Response) -> bool:
    content_type = response.headers.get("content-type", "").split(";")[0].strip().lower()
    return content_type in ARCHIVE_CONTENT_TYPES or response.content[:4] == ZIP_MAGIC


def _error_message(response: httpx.Response, fallback: str) -> str:
    """Pick the most useful message out of an error response."""
    try:
        data = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError, ValueError):
        data = None

    if isinstance(data, dict):
        for key in ("details", "error", "message"):
            value = data.get(key)
            if isinstance(value, str) and value.strip():
                return value
    return fallback or f"Server responded with {response.status_code}"


class ProcessingClient:
    """Client for the PDFNinja processing API."""

    def __init__(
        self,
        base_url: str,
        timeout: float | None = DEFAULT_REQUEST_TIMEOUT,
        client: httpx.Client | None = None,
    ) -> None:
        """
        Args:
            base_url: API root, e.g. https://pdfninja-api.onrender.com
            timeout: Request timeout in seconds, None for no timeout
            client: Pre-built httpx client (tests inject a MockTransport here)

        Raises:
            ConfigurationError: If base_url is not an http(s) URL
        """
        if not base_url.startswith(("http://", "https://")):
            raise ConfigurationError("api.base_url", f"expected an http(s) URL, got {base_url!r}")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client or httpx.Client(timeout=timeout)
        self._owns_client = client is None
        logger.debug(f"ProcessingClient using {self.base_url}")

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "ProcessingClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _post(
        self,
        endpoint: str,
        files: list[tuple[str, FileTuple]],
        data: dict[str, str] | None = None,
        filename: str = "",
        failure: str = "",
    ) -> ProcessingResult:
        """POST a multipart body and wrap the response.

        Raises:
            RemoteProcessingError: On transport failure or non-2xx status
        """
        url = f"{self.base_url}{endpoint}"
        logger.info(f"POST {endpoint} ({len(files)} file(s))")

        try:
            response = self._client.post(url, files=files, data=data or {})
        except httpx.TimeoutException:
            logger.error(f"Request to {endpoint} timed out")
            raise RemoteProcessingError(
                f"{failure or 'Request failed'}: the server did not answer in time",
                endpoint=endpoint,
            ) from None
        except httpx.RequestError as e:
            logger.error(f"Network error calling {endpoint}: {e}")
            raise RemoteProcessingError(
                failure or "Could not reach the processing server", endpoint=endpoint
            ) from e

        if not response.is_success:
            message = _error_message(response, failure)
            logger.error(f"{endpoint} failed with status {response.status_code}: {message}")
            raise RemoteProcessingError(
                message, status_code=response.status_code, endpoint=endpoint
            )

        content_type = response.headers.get("content-type", PDF_MIME).split(";")[0].strip()
        result = ProcessingResult(
            content=response.content,
            content_type=content_type,
            filename=filename,
            is_archive=_is_archive(response),
        )
        logger.debug(f"{endpoint} returned {result.size} bytes ({content_type})")
        return result

    @staticmethod
    def _json(value: object) -> str:
        return json.dumps(value, separators=(",", ":"))

    # ------------------------------------------------------------------
    # Page-level tools
    # ------------------------------------------------------------------

    def split(self, name: str, data: bytes, pages: list[int]) -> ProcessingResult:
        """Split the selected pages out into a zip of single-page PDFs."""
        return self._post(
            "/pdf/split",
            files=[(PDF_FIELD, _pdf_file(name, data))],
            data={"pagesToSplit": self._json(pages)},
            filename=suffixed_filename(name, "split", ".zip"),
            failure="Failed to split PDF",
        )

    def extract_pages(self, name: str, data: bytes, pages: list[int]) -> ProcessingResult:
        return self._post(
            "/pdf/extract-pages",
            files=[(PDF_FIELD, _pdf_file(name, data))],
            data={"pagesToExtract": self._json(pages)},
            filename=suffixed_filename(name, "extracted"),
            failure="Failed to extract pages from PDF",
        )

    def remove_pages(self, name: str, data: bytes, pages: list[int]) -> ProcessingResult:
        return self._post(
            "/pdf/remove-pages",
            files=[(PDF_FIELD, _pdf_file(name, data))],
            data={"pagesToRemove": self._json(pages)},
            filename=suffixed_filename(name, "removed"),
            failure="Failed to remove pages from PDF",
        )

    def organize(self, name: str, data: bytes, page_order: list[int]) -> ProcessingResult:
        return self._post(
            "/pdf/organize",
            files=[(PDF_FIELD, _pdf_file(name, data))],
            data={"pageOrder": self._json(page_order)},
            filename=suffixed_filename(name, "organized"),
            failure="Failed to organize PDF pages",
        )

    def rotate(self, name: str, data: bytes, rotations: dict[int, int]) -> ProcessingResult:
        """Apply per-page rotations; JSON object keys are page numbers."""
        payload = {str(page): angle for page, angle in rotations.items()}
        return self._post(
            "/pdf/rotate",
            files=[(PDF_FIELD, _pdf_file(name, data))],
            data={"pageRotations": self._json(payload)},
            filename=suffixed_filename(name, "rotated"),
            failure="Failed to rotate PDF",
        )

    # ------------------------------------------------------------------
    # Whole-document tools
    # ------------------------------------------------------------------

    def merge(self, files: list[tuple[str, bytes]]) -> ProcessingResult:
        """Merge PDFs in the given order."""
        return self._post(
            "/api/merge-pdfs",
            files=[(MERGE_FIELD, _pdf_file(name, data)) for name, data in files],
            filename="merged.pdf",
            failure="Merge failed",
        )

    def compress(
        self, name: str, data: bytes, level: CompressionLevel = CompressionLevel.MEDIUM
    ) -> ProcessingResult:
        return self._post(
            "/pdf/compress",
            files=[(PDF_FIELD, _pdf_file(name, data))],
            data={"compressionLevel": CompressionLevel(level).value},
            filename=prefixed_filename(name, "compressed"),
            failure="Compression failed",
        )

    def ocr(
        self, name: str, data: bytes, language: OcrLanguage = OcrLanguage.ENGLISH
    ) -> ProcessingResult:
        return self._post(
            "/pdf/ocr",
            files=[(PDF_FIELD, _pdf_file(name, data))],
            data={"language": OcrLanguage(language).value},
            filename=prefixed_filename(name, "ocr"),
            failure="OCR processing failed",
        )

    def repair(self, name: str, data: bytes) -> ProcessingResult:
        return self._post(
            "/pdf/repair",
            files=[(PDF_FIELD, _pdf_file(name, data))],
            filename=prefixed_filename(name, "repaired"),
            failure="Repair failed",
        )

    def watermark(self, name: str, data: bytes, options: WatermarkOptions) -> ProcessingResult:
        files = [(PDF_FIELD, _pdf_file(name, data))]
        if options.type == "image" and options.image:
            files.append(("image", (options.image_name, options.image, "application/octet-stream")))
        return self._post(
            "/pdf/watermark",
            files=files,
            data=options.to_form_fields(),
            filename=prefixed_filename(name, "watermarked"),
            failure="Failed to apply watermark",
        )

    def add_page_numbers(
        self, name: str, data: bytes, options: PageNumberOptions
    ) -> ProcessingResult:
        return self._post(
            "/pdf/add-page-numbers",
            files=[(PDF_FIELD, _pdf_file(name, data))],
            data=options.to_form_fields(),
            filename=suffixed_filename(name, "numbered"),
            failure="Failed to add page numbers",
        )

    def convert(self, name: str, data: bytes, target: ConversionTarget) -> ProcessingResult:
        """Convert between PDF and JPG/PowerPoint."""
        target = ConversionTarget(target)
        mime = "image/jpeg" if target is ConversionTarget.JPG_TO_PDF else PDF_MIME
        fields = {"format": target.format_field} if target.format_field else {}

        if target is ConversionTarget.PDF_TO_JPG:
            filename = suffixed_filename(name, "images", ".zip")
        else:
            filename = replace_extension(name, target.output_extension)

        return self._post(
            f"/pdf/convert/{target.value}",
            files=[(CONVERT_FIELD, (name, data, mime))],
            data=fields,
            filename=filename,
            failure="Failed to convert file",
        )
