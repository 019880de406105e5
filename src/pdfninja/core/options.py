"""
PDFNinja - Tool Options

Configuration structs for the tools that take more than a page selection.
Every struct has explicit per-field defaults and is validated at
construction; ``to_form_fields`` yields the multipart fields the processing
API expects.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

from pdfninja.constants import DEFAULT_WATERMARK_GRID_POSITION, WATERMARK_GRID_SIZE
from pdfninja.core.page_spec import parse_page_list
from pdfninja.utils.exceptions import ValidationError

_HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")

# 3x3 grid, row by row
WATERMARK_GRID_POSITIONS: tuple[str, ...] = (
    "top-left",
    "top",
    "top-right",
    "left",
    "center",
    "right",
    "bottom-left",
    "bottom",
    "bottom-right",
)

PAGE_NUMBER_POSITIONS: tuple[str, ...] = (
    "top-left",
    "top-center",
    "top-right",
    "bottom-left",
    "bottom-center",
    "bottom-right",
)

PAGE_NUMBER_FORMATS: tuple[str, ...] = (
    "1",
    "roman",
    "roman-lowercase",
    "letter",
    "letter-lowercase",
    "page-of-total",
)

PAGE_NUMBER_FONTS: tuple[str, ...] = ("Helvetica", "Times-Roman", "Courier", "Arial", "Verdana")


class CompressionLevel(str, Enum):
    """How aggressively the server should compress."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class OcrLanguage(str, Enum):
    """OCR languages offered by the server (Tesseract codes)."""

    ENGLISH = "eng"
    FRENCH = "fra"
    GERMAN = "deu"
    SPANISH = "spa"


class ConversionTarget(str, Enum):
    """Format conversions and their endpoint names."""

    PDF_TO_JPG = "pdf-to-jpg"
    JPG_TO_PDF = "jpg-to-pdf"
    PDF_TO_POWERPOINT = "pdf-to-powerpoint"

    @property
    def format_field(self) -> str | None:
        """Value of the ``format`` form field, if the endpoint wants one."""
        return {
            ConversionTarget.PDF_TO_JPG: "jpg",
            ConversionTarget.PDF_TO_POWERPOINT: "pptx",
        }.get(self)

    @property
    def output_extension(self) -> str:
        return {
            ConversionTarget.PDF_TO_JPG: ".zip",
            ConversionTarget.JPG_TO_PDF: ".pdf",
            ConversionTarget.PDF_TO_POWERPOINT: ".pptx",
        }[self]


def _check_color(name: str, value: str) -> None:
    if not _HEX_COLOR_RE.match(value):
        raise ValidationError(name, value, "expected a #RRGGBB color")


def _check_choice(name: str, value: str, choices: tuple[str, ...]) -> None:
    if value not in choices:
        raise ValidationError(name, value, f"expected one of {', '.join(choices)}")


def _check_range(name: str, value: float, low: float, high: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not low <= value <= high:
        raise ValidationError(name, value, f"expected a number between {low} and {high}")


def _format_number(value: float) -> str:
    """Render whole floats without a trailing .0 (48, 0.5)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass
class WatermarkOptions:
    """Text or image watermark applied to every page.

    ``position`` is derived from ``grid_position`` on the 3x3 grid
    (0 = top-left ... 8 = bottom-right).
    """

    type: str = "text"
    text: str = "CONFIDENTIAL"
    text_color: str = "#FF3A5E"
    font_size: int = 48
    opacity: float = 0.5
    grid_position: int = DEFAULT_WATERMARK_GRID_POSITION
    rotation: int = 45
    scale: float = 0.5
    image: bytes | None = field(default=None, repr=False)
    image_name: str = "watermark.png"

    def __post_init__(self) -> None:
        _check_choice("type", self.type, ("text", "image"))
        if self.type == "text":
            if not self.text.strip():
                raise ValidationError("text", self.text, "watermark text cannot be empty")
            _check_color("text_color", self.text_color)
            _check_range("font_size", self.font_size, 1, 500)
        elif not self.image:
            raise ValidationError("image", None, "an image is required for image watermarks")
        _check_range("opacity", self.opacity, 0.0, 1.0)
        if (
            isinstance(self.grid_position, bool)
            or not isinstance(self.grid_position, int)
            or not 0 <= self.grid_position < WATERMARK_GRID_SIZE
        ):
            raise ValidationError("grid_position", self.grid_position, "expected 0..8")
        _check_range("rotation", self.rotation, -360, 360)
        _check_range("scale", self.scale, 0.01, 10.0)

    @property
    def position(self) -> str:
        return WATERMARK_GRID_POSITIONS[self.grid_position]

    def to_form_fields(self) -> dict[str, str]:
        fields = {"type": self.type}
        if self.type == "text":
            fields["text"] = self.text
            fields["textColor"] = self.text_color
            fields["fontSize"] = _format_number(self.font_size)
        fields.update(
            {
                "opacity": _format_number(self.opacity),
                "position": self.position,
                "gridPosition": str(self.grid_position),
                "rotation": _format_number(self.rotation),
                "scale": _format_number(self.scale),
            }
        )
        return fields


@dataclass
class PageNumberOptions:
    """Page numbering style."""

    start_number: int = 1
    position: str = "bottom-center"
    format: str = "1"
    font_size: int = 12
    font_color: str = "#000000"
    font_family: str = "Helvetica"
    prefix: str = ""
    suffix: str = ""
    margin: int = 20
    exclude_first_page: bool = False
    exclude_last_page: bool = False
    custom_ranges: str = ""

    def __post_init__(self) -> None:
        _check_range("start_number", self.start_number, 0, 1_000_000)
        _check_choice("position", self.position, PAGE_NUMBER_POSITIONS)
        _check_choice("format", self.format, PAGE_NUMBER_FORMATS)
        _check_range("font_size", self.font_size, 1, 200)
        _check_color("font_color", self.font_color)
        _check_choice("font_family", self.font_family, PAGE_NUMBER_FONTS)
        _check_range("margin", self.margin, 0, 500)
        if self.custom_ranges.strip():
            try:
                parse_page_list(self.custom_ranges)
            except ValueError as e:
                raise ValidationError("custom_ranges", self.custom_ranges, str(e)) from None

    def to_form_fields(self) -> dict[str, str]:
        return {
            "startNumber": str(self.start_number),
            "position": self.position,
            "format": self.format,
            "fontSize": str(self.font_size),
            "fontColor": self.font_color,
            "fontFamily": self.font_family,
            "prefix": self.prefix,
            "suffix": self.suffix,
            "margin": str(self.margin),
            "excludeFirstPage": str(self.exclude_first_page).lower(),
            "excludeLastPage": str(self.exclude_last_page).lower(),
            "customRanges": self.custom_ranges,
        }
