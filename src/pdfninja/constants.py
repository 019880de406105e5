"""
PDFNinja - Numeric Constants

Simple constants with ZERO internal imports to avoid circular dependencies.
For application-level constants (strings, paths), use config.py.
"""

from typing import Final

# ============================================================================
# Page Rotation
# ============================================================================

ROTATION_STEP: Final[int] = 90
FULL_TURN: Final[int] = 360
VALID_ROTATIONS: Final[tuple[int, ...]] = (0, 90, 180, 270)

# ============================================================================
# Merge
# ============================================================================

MIN_MERGE_FILES: Final[int] = 2

# ============================================================================
# Watermark
# ============================================================================

WATERMARK_GRID_SIZE: Final[int] = 9
DEFAULT_WATERMARK_GRID_POSITION: Final[int] = 4

# ============================================================================
# HTTP
# ============================================================================

ARCHIVE_CONTENT_TYPES: Final[tuple[str, ...]] = (
    "application/zip",
    "application/x-zip-compressed",
)
ZIP_MAGIC: Final[bytes] = b"PK\x03\x04"
