"""
Centralized tracking of binary blobs written to temporary files.

Processing results and other derived binaries are stored as temp files owned
by a document. Every blob is tracked so it can be released explicitly when
its owner is discarded, with an exit-time sweep (including SIGTERM) for
anything left behind.
"""

import atexit
import os
import signal
import tempfile

from pdfninja.utils.logger import logger

# ---------------------------------------------------------------------------
# Global registry (de-duplication safe; cleaned at process exit)
# ---------------------------------------------------------------------------
_tracked_blobs: set[str] = set()
_cleanup_registered = False


def _register_cleanup() -> None:
    """Register atexit and SIGTERM handlers exactly once."""
    global _cleanup_registered
    if _cleanup_registered:
        return
    _cleanup_registered = True

    atexit.register(cleanup_all)

    prev_handler = signal.getsignal(signal.SIGTERM)

    def _on_sigterm(signum, frame):
        cleanup_all()
        # Chain to previous handler
        if callable(prev_handler):
            prev_handler(signum, frame)
        else:
            raise SystemExit(1)

    try:
        signal.signal(signal.SIGTERM, _on_sigterm)
    except ValueError:
        # Not in the main thread; atexit still covers normal shutdown
        pass


# ---------------------------------------------------------------------------
# Blob creation and release
# ---------------------------------------------------------------------------


def create_blob(data: bytes, suffix: str = "", prefix: str = "pdfninja_") -> str:
    """Write *data* to a new tracked temp file.

    Args:
        data: Binary content to store.
        suffix: Filename suffix, e.g. ".pdf" or ".zip".
        prefix: Filename prefix.

    Returns:
        Path of the created blob.
    """
    _register_cleanup()
    fd, path = tempfile.mkstemp(suffix=suffix, prefix=prefix)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
    except OSError:
        os.unlink(path)
        raise
    _tracked_blobs.add(path)
    logger.debug(f"Created blob {path} ({len(data)} bytes)")
    return path


def release_blob(path: str) -> None:
    """Remove a tracked blob immediately. Safe to call twice."""
    _tracked_blobs.discard(path)
    try:
        os.unlink(path)
        logger.debug(f"Released blob {path}")
    except FileNotFoundError:
        pass


def untrack_blob(path: str) -> None:
    """Remove a blob from tracking (caller takes ownership of the file)."""
    _tracked_blobs.discard(path)


def is_tracked(path: str) -> bool:
    """Return True while *path* is still owned by the registry."""
    return path in _tracked_blobs


def tracked_blobs() -> frozenset[str]:
    """Snapshot of every blob that has not been released yet."""
    return frozenset(_tracked_blobs)


# ---------------------------------------------------------------------------
# Global cleanup
# ---------------------------------------------------------------------------


def cleanup_all() -> None:
    """Remove all tracked blobs.

    Safe to call multiple times (idempotent).
    """
    for path in list(_tracked_blobs):
        try:
            if os.path.exists(path):
                os.unlink(path)
                logger.debug(f"Cleaned blob: {path}")
        except OSError as e:
            logger.warning(f"Could not remove blob {path}: {e}")
    _tracked_blobs.clear()
