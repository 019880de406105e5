"""
PDFNinja - Page-Set Transformer

Selection, rotation and ordering state for the pages of one document, and the
payloads the processing API expects for each page-level tool.

Every operation validates its input before touching state, so a raised
ValidationError always leaves the page set exactly as it was.
"""

from collections.abc import Iterable
from dataclasses import replace
from typing import TypeVar

from pdfninja.core.page_model import PageEntry, normalize_rotation
from pdfninja.utils.exceptions import (
    EmptySelectionError,
    IndexOutOfRangeError,
    InvalidPageCountError,
    PageOutOfRangeError,
    ValidationError,
    WouldRemoveAllPagesError,
)
from pdfninja.utils.logger import logger

T = TypeVar("T")


def _is_index(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def move_item(items: list[T], from_index: int, to_index: int) -> list[T]:
    """Return a copy of *items* with one element moved.

    The element at *from_index* is removed and reinserted at *to_index*;
    everything in between shifts by one. This is not a swap.

    Raises:
        IndexOutOfRangeError: If either index is outside 0..len-1
    """
    count = len(items)
    for index in (from_index, to_index):
        if not _is_index(index) or not 0 <= index < count:
            raise IndexOutOfRangeError(index, count)

    moved = list(items)
    moved.insert(to_index, moved.pop(from_index))
    return moved


class PageSetTransformer:
    """Per-document page state.

    Entries are kept in original page order; the output ordering is derived
    from each entry's ``output_position``.
    """

    def __init__(self) -> None:
        self._entries: list[PageEntry] = []

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def page_count(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> list[PageEntry]:
        """Snapshot of the entries in original page order.

        The returned entries are copies; change state through the methods
        of this class so rotation and ordering stay valid.
        """
        return [replace(e) for e in self._entries]

    def entry(self, page_number: int) -> PageEntry:
        """Return a copy of the entry for *page_number*.

        Raises:
            PageOutOfRangeError: If the page does not exist
        """
        return replace(self._entry(page_number))

    def ordering(self) -> list[PageEntry]:
        """Copies of the entries sorted by output position."""
        return [replace(e) for e in self._ordered()]

    def selection(self) -> list[int]:
        """Selected page numbers, ascending."""
        return [e.page_number for e in self._entries if e.selected]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self, page_count: int) -> None:
        """Create one fresh entry per page.

        Args:
            page_count: Number of pages reported by the renderer

        Raises:
            InvalidPageCountError: If page_count is not a positive integer
        """
        if isinstance(page_count, bool) or not isinstance(page_count, int) or page_count <= 0:
            raise InvalidPageCountError(page_count)

        self._entries = [
            PageEntry(page_number=i + 1, output_position=i) for i in range(page_count)
        ]
        logger.debug(f"Initialized page set with {page_count} page(s)")

    def clear(self) -> None:
        """Drop all entries."""
        self._entries = []

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def toggle_selection(self, page_number: int) -> bool:
        """Flip the selected flag of one page.

        Returns:
            The new selected state
        """
        entry = self._entry(page_number)
        entry.selected = not entry.selected
        return entry.selected

    def select_all(self) -> None:
        for entry in self._entries:
            entry.selected = True

    def deselect_all(self) -> None:
        for entry in self._entries:
            entry.selected = False

    def select_pages(self, pages: Iterable[int]) -> None:
        """Replace the selection with exactly *pages*.

        Raises:
            PageOutOfRangeError: If any page is out of range (nothing changes)
        """
        wanted = set()
        for page_number in pages:
            self._check_page(page_number)
            wanted.add(page_number)

        for entry in self._entries:
            entry.selected = entry.page_number in wanted

    # ------------------------------------------------------------------
    # Rotation
    # ------------------------------------------------------------------

    def set_rotation(self, page_number: int, degrees: int) -> int:
        """Add *degrees* to one page's rotation.

        Args:
            page_number: Page to rotate (1-indexed)
            degrees: Any multiple of 90, negative for counter-clockwise

        Returns:
            The page's new rotation

        Raises:
            PageOutOfRangeError: If the page does not exist
            InvalidRotationError: If degrees is not a multiple of 90
        """
        entry = self._entry(page_number)
        entry.rotate(degrees)
        return entry.rotation

    def rotate_all(self, degrees: int) -> None:
        """Add *degrees* to every page's rotation."""
        normalize_rotation(degrees)
        for entry in self._entries:
            entry.rotate(degrees)

    def reset_rotation(self, page_number: int | None = None) -> None:
        """Reset one page's rotation to 0, or every page's when None."""
        if page_number is None:
            for entry in self._entries:
                entry.rotation = 0
        else:
            self._entry(page_number).rotation = 0

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------

    def reorder(self, from_index: int, to_index: int) -> None:
        """Move the entry at *from_index* so it ends up at *to_index*.

        This is a single-element move, not a swap: entries between the two
        indices shift by one position.

        Raises:
            IndexOutOfRangeError: If either index is outside 0..count-1
        """
        count = len(self._entries)
        ordered = move_item(self._ordered(), from_index, to_index)
        if from_index == to_index:
            return
        moved = ordered[to_index]

        # Multiset of page numbers must survive the move
        if sorted(e.page_number for e in ordered) != list(range(1, count + 1)):
            raise ValidationError(
                "order", [e.page_number for e in ordered], "reorder would not be a permutation"
            )

        for position, entry in enumerate(ordered):
            entry.output_position = position

        logger.debug(f"Moved page {moved.page_number} from {from_index} to {to_index}")

    def reverse_order(self) -> None:
        """Reverse the current output ordering."""
        ordered = self._ordered()
        for position, entry in enumerate(reversed(ordered)):
            entry.output_position = position

    def set_order(self, order: list[int]) -> None:
        """Set the output ordering from a full list of page numbers.

        Raises:
            PageOutOfRangeError: If a page does not exist
            ValidationError: If *order* is not a permutation of all pages
        """
        for page_number in order:
            self._check_page(page_number)
        if sorted(order) != list(range(1, self.page_count + 1)):
            raise ValidationError(
                "order", order, f"expected each of the {self.page_count} pages exactly once"
            )
        for position, page_number in enumerate(order):
            self._entries[page_number - 1].output_position = position

    def reset_order(self) -> None:
        """Restore the original page order."""
        for entry in self._entries:
            entry.output_position = entry.page_number - 1

    # ------------------------------------------------------------------
    # Payloads
    # ------------------------------------------------------------------

    def build_extraction_payload(self) -> list[int]:
        """Pages to extract, ascending and duplicate-free.

        Raises:
            EmptySelectionError: If no page is selected
        """
        pages = self.selection()
        if not pages:
            raise EmptySelectionError("extract")
        return pages

    def build_split_payload(self) -> list[int]:
        """Pages to split out, ascending and duplicate-free.

        Raises:
            EmptySelectionError: If no page is selected
        """
        pages = self.selection()
        if not pages:
            raise EmptySelectionError("split")
        return pages

    def build_removal_payload(self) -> list[int]:
        """Pages to remove, ascending and duplicate-free.

        Raises:
            EmptySelectionError: If no page is selected
            WouldRemoveAllPagesError: If every page is selected
        """
        pages = self.selection()
        if not pages:
            raise EmptySelectionError("remove")
        if len(pages) == self.page_count:
            raise WouldRemoveAllPagesError(self.page_count)
        return pages

    def build_reorder_payload(self) -> list[int]:
        """Original page numbers in output order."""
        return [e.page_number for e in self._ordered()]

    def build_rotation_payload(self, include_unrotated: bool = True) -> dict[int, int]:
        """Map of page number to final rotation angle.

        Args:
            include_unrotated: Keep pages whose rotation is 0
        """
        return {
            e.page_number: e.rotation
            for e in self._entries
            if include_unrotated or e.rotation
        }

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"pages": [e.to_dict() for e in self._entries]}

    @classmethod
    def from_dict(cls, data: dict) -> "PageSetTransformer":
        """Create a page set from :meth:`to_dict` output.

        Entries without an ``output_position`` keep their original place.

        Raises:
            ValidationError: If page numbers are not exactly 1..N or output
                positions are not exactly 0..N-1
            InvalidRotationError: If a rotation is not a multiple of 90
        """
        pages = data.get("pages", [])
        count = len(pages)

        numbers = [p.get("page_number") for p in pages]
        if not all(map(_is_index, numbers)) or sorted(numbers) != list(range(1, count + 1)):
            raise ValidationError("pages", numbers, f"expected pages 1..{count} exactly once")

        entries = [PageEntry.from_dict(p) for p in pages]
        positions = [e.output_position for e in entries]
        if not all(map(_is_index, positions)) or sorted(positions) != list(range(count)):
            raise ValidationError(
                "output_position", positions, f"expected positions 0..{count - 1} exactly once"
            )

        page_set = cls()
        page_set._entries = sorted(entries, key=lambda e: e.page_number)
        return page_set

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _entry(self, page_number: int) -> PageEntry:
        self._check_page(page_number)
        return self._entries[page_number - 1]

    def _ordered(self) -> list[PageEntry]:
        return sorted(self._entries, key=lambda e: e.output_position)

    def _check_page(self, page_number: int) -> None:
        if (
            isinstance(page_number, bool)
            or not isinstance(page_number, int)
            or not 1 <= page_number <= len(self._entries)
        ):
            raise PageOutOfRangeError(page_number, len(self._entries))
