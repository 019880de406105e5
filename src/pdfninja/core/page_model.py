"""
PDFNinja - Page Model

Data model for the per-page state of a loaded document.
"""

from dataclasses import dataclass

from pdfninja.constants import FULL_TURN, ROTATION_STEP
from pdfninja.utils.exceptions import InvalidRotationError


def normalize_rotation(degrees: int) -> int:
    """Bring a multiple of 90 into the 0..270 range.

    Args:
        degrees: Rotation in degrees, may be negative or >= 360

    Returns:
        One of 0, 90, 180, 270

    Raises:
        InvalidRotationError: If degrees is not an integer multiple of 90
    """
    if isinstance(degrees, bool) or not isinstance(degrees, int) or degrees % ROTATION_STEP:
        raise InvalidRotationError(degrees)
    return degrees % FULL_TURN


@dataclass
class PageEntry:
    """State of a single page.

    Attributes:
        page_number: Original page number (1-indexed), stable identity
        selected: Whether the page is in the current selection
        rotation: Rotation angle in degrees (0, 90, 180, 270)
        output_position: Index in the user-defined output ordering (0-indexed)
    """

    page_number: int
    selected: bool = False
    rotation: int = 0
    output_position: int = 0

    def __post_init__(self) -> None:
        self.rotation = normalize_rotation(self.rotation)

    def rotate(self, degrees: int) -> None:
        """Rotate page by specified degrees (additive, modulo 360)."""
        self.rotation = (self.rotation + normalize_rotation(degrees)) % FULL_TURN

    def rotate_left(self) -> None:
        """Rotate page 90 degrees counter-clockwise."""
        self.rotate(-ROTATION_STEP)

    def rotate_right(self) -> None:
        """Rotate page 90 degrees clockwise."""
        self.rotate(ROTATION_STEP)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization.

        Returns:
            Dictionary representation of the page state
        """
        return {
            "page_number": self.page_number,
            "selected": self.selected,
            "rotation": self.rotation,
            "output_position": self.output_position,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PageEntry":
        """Create PageEntry from dictionary.

        Args:
            data: Dictionary with page state data

        Returns:
            New PageEntry instance
        """
        page_number = data.get("page_number", 1)
        return cls(
            page_number=page_number,
            selected=bool(data.get("selected", False)),
            rotation=data.get("rotation", 0),
            output_position=data.get("output_position", page_number - 1),
        )
