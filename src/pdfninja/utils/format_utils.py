"""
PDFNinja - Format Utilities Module

Shared helpers for formatting sizes and deriving download filenames.
"""

import os


def format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted size string (e.g., "1.5 MB")
    """
    if size_bytes <= 0:
        return "0 B"

    units = ["B", "KB", "MB", "GB", "TB"]

    size = float(size_bytes)
    unit_index = 0

    while size >= 1024 and unit_index < len(units) - 1:
        size /= 1024
        unit_index += 1

    if unit_index == 0:
        return f"{int(size)} {units[unit_index]}"
    elif size >= 100:
        return f"{int(size)} {units[unit_index]}"
    elif size >= 10:
        return f"{size:.1f} {units[unit_index]}"
    else:
        return f"{size:.2f} {units[unit_index]}"


def strip_extension(filename: str) -> str:
    """Return *filename* without its last extension."""
    stem, _ext = os.path.splitext(os.path.basename(filename))
    return stem or os.path.basename(filename)


def suffixed_filename(filename: str, suffix: str, extension: str = ".pdf") -> str:
    """Build "<stem>_<suffix><extension>", e.g. report_split.zip."""
    return f"{strip_extension(filename)}_{suffix}{extension}"


def prefixed_filename(filename: str, prefix: str) -> str:
    """Build "<prefix>_<filename>", e.g. compressed_report.pdf."""
    return f"{prefix}_{os.path.basename(filename)}"


def replace_extension(filename: str, extension: str) -> str:
    """Swap the extension of *filename*, e.g. photo.jpg -> photo.pdf."""
    return f"{strip_extension(filename)}{extension}"
