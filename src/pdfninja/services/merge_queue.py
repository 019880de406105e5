"""
PDFNinja - Merge Queue

Ordered list of files for the merge tool. Files are moved with the same
single-move rule as pages, and at least two files are needed to submit.
"""

import logging
import os
import time
from dataclasses import dataclass

from pdfninja.constants import MIN_MERGE_FILES
from pdfninja.core.document import ProcessingResult
from pdfninja.core.page_set import move_item
from pdfninja.services.api_client import ProcessingClient
from pdfninja.utils.exceptions import (
    NotEnoughFilesError,
    SubmissionInProgressError,
    ValidationError,
)
from pdfninja.utils.format_utils import format_file_size
from pdfninja.utils.i18n import _

logger = logging.getLogger(__name__)


@dataclass
class MergeItem:
    """One queued file."""

    id: str
    name: str
    data: bytes | None

    @property
    def size(self) -> int:
        return len(self.data) if self.data is not None else 0


class MergeQueue:
    """Files to merge, in output order."""

    def __init__(self) -> None:
        self._items: list[MergeItem] = []
        self._counter = 0
        self.busy = False
        self.result: ProcessingResult | None = None
        self.last_error: str | None = None

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> list[MergeItem]:
        return list(self._items)

    def names(self) -> list[str]:
        return [item.name for item in self._items]

    def add(self, name: str, data: bytes) -> MergeItem:
        """Append a file to the end of the queue.

        Returns:
            The queued item; its id is used by :meth:`remove`
        """
        self._check_idle()
        self._counter += 1
        item = MergeItem(
            id=f"{os.path.basename(name)}-{int(time.time() * 1000)}-{self._counter}",
            name=os.path.basename(name),
            data=data,
        )
        self._items.append(item)
        logger.info(
            _("Queued {0} for merge ({1})").format(item.name, format_file_size(item.size))
        )
        return item

    def remove(self, item_id: str) -> None:
        """Drop one file from the queue and release its bytes.

        Raises:
            ValidationError: If no queued item has *item_id*
        """
        self._check_idle()
        for index, item in enumerate(self._items):
            if item.id == item_id:
                del self._items[index]
                item.data = None
                return
        raise ValidationError("item_id", item_id, "not in the merge queue")

    def reorder(self, from_index: int, to_index: int) -> None:
        """Move one file; files in between shift by one.

        Raises:
            IndexOutOfRangeError: If either index is outside the queue
        """
        self._check_idle()
        self._items = move_item(self._items, from_index, to_index)

    def clear(self) -> None:
        """Empty the queue and release every queued file and the last result."""
        self._check_idle()
        for item in self._items:
            item.data = None
        self._items = []
        self.result = None
        self.last_error = None

    def build_request(self) -> list[tuple[str, bytes]]:
        """(name, bytes) pairs in queue order.

        Raises:
            NotEnoughFilesError: If fewer than two files are queued
        """
        if len(self._items) < MIN_MERGE_FILES:
            raise NotEnoughFilesError(MIN_MERGE_FILES, len(self._items))
        return [(item.name, item.data or b"") for item in self._items]

    def submit(self, client: ProcessingClient) -> ProcessingResult:
        """Merge the queued files.

        Raises:
            SubmissionInProgressError: If a merge is already in flight
            NotEnoughFilesError: If fewer than two files are queued
            RemoteProcessingError: If the API call fails
        """
        self._check_idle()
        files = self.build_request()

        self.busy = True
        self.last_error = None
        try:
            self.result = client.merge(files)
        except Exception as e:
            self.last_error = getattr(e, "message", str(e))
            logger.error(f"Merge of {len(files)} files failed: {self.last_error}")
            raise
        finally:
            self.busy = False

        logger.info(f"Merged {len(files)} files ({format_file_size(self.result.size)})")
        return self.result

    def _check_idle(self) -> None:
        if self.busy:
            raise SubmissionInProgressError()
