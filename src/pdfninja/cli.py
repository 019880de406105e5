#!/usr/bin/env python3
"""
PDFNinja CLI: run the processing API's tools from the terminal.

Usage:
    python -m pdfninja <command> [options]

Commands:
    split         Split selected pages out into a zip of PDFs
    extract       Extract pages to a new PDF
    remove        Remove pages from a PDF
    organize      Reorder or reverse pages
    rotate        Rotate pages
    merge         Merge multiple PDFs into one
    compress      Compress PDF (reduce file size)
    ocr           Make a scanned PDF searchable
    repair        Repair a damaged PDF
    watermark     Stamp a text or image watermark
    page-numbers  Add page numbers
    convert       Convert between PDF, JPG and PowerPoint
    info          Show PDF metadata and page count

Examples:
    pdfninja-cli split input.pdf --pages 1-3,7
    pdfninja-cli remove input.pdf -o out.pdf --pages 2,4
    pdfninja-cli organize input.pdf -o out.pdf --order 3,1,2
    pdfninja-cli rotate input.pdf -o out.pdf --angle 90 --pages 1,3,5
    pdfninja-cli merge a.pdf b.pdf c.pdf -o merged.pdf
    pdfninja-cli compress input.pdf --level high
    pdfninja-cli watermark input.pdf --text DRAFT --opacity 0.3
    pdfninja-cli convert pdf-to-jpg input.pdf
    pdfninja-cli --api-url http://localhost:8000 info input.pdf
"""

import argparse
import logging
import sys
from collections.abc import Callable
from pathlib import Path

from pdfninja.config import (
    APP_DESCRIPTION,
    APP_NAME,
    APP_VERSION,
    LOG_DATE_FORMAT,
    LOG_FORMAT,
    LOG_LEVEL,
    resolve_api_base_url,
)
from pdfninja.core.document import DocumentController, ProcessingResult
from pdfninja.core.options import (
    PAGE_NUMBER_FONTS,
    PAGE_NUMBER_FORMATS,
    PAGE_NUMBER_POSITIONS,
    CompressionLevel,
    ConversionTarget,
    OcrLanguage,
    PageNumberOptions,
    WatermarkOptions,
)
from pdfninja.core.page_spec import parse_page_list, parse_page_order
from pdfninja.services.api_client import ProcessingClient
from pdfninja.services.merge_queue import MergeQueue
from pdfninja.services.processor import ToolProcessor
from pdfninja.services.renderer import count_pages, get_pdf_info
from pdfninja.utils.config_manager import get_config_manager
from pdfninja.utils.exceptions import ConfigurationError, PdfNinjaError
from pdfninja.utils.format_utils import format_file_size
from pdfninja.utils.i18n import _

# ---------------------------------------------------------------------------
# Argument parser construction
# ---------------------------------------------------------------------------


def _add_io_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("input", type=Path, help=_("Input PDF file"))
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help=_("Output file (default: server-suggested name next to the input)"),
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with subcommands."""
    p = argparse.ArgumentParser(
        prog="pdfninja-cli",
        description=APP_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("--version", action="version", version=f"{APP_NAME} {APP_VERSION}")
    p.add_argument("-v", "--verbose", action="store_true", help=_("Verbose logging (DEBUG)"))
    p.add_argument(
        "--api-url",
        default=None,
        metavar="URL",
        help=_("Processing API base URL (default: PDFNINJA_API_URL or settings)"),
    )
    p.add_argument(
        "--timeout",
        type=float,
        default=None,
        metavar="SECONDS",
        help=_("Request timeout in seconds (default: none)"),
    )
    p.add_argument(
        "--force",
        action="store_true",
        help=_("Overwrite the output file if it exists"),
    )

    sub = p.add_subparsers(dest="command", help=_("Available commands"))

    # --- page-selection tools ---
    split_p = sub.add_parser("split", help=_("Split selected pages into separate PDFs"))
    _add_io_arguments(split_p)
    split_p.add_argument(
        "--pages", type=str, required=True, help=_("Pages to split out (e.g. '1-3,7')")
    )

    extract_p = sub.add_parser("extract", help=_("Extract pages to a new PDF"))
    _add_io_arguments(extract_p)
    extract_p.add_argument(
        "--pages", type=str, required=True, help=_("Pages to extract (e.g. '1,3,7')")
    )

    remove_p = sub.add_parser("remove", help=_("Remove pages from a PDF"))
    _add_io_arguments(remove_p)
    remove_p.add_argument(
        "--pages", type=str, required=True, help=_("Pages to remove (e.g. '2,4-6')")
    )

    # --- organize ---
    organize_p = sub.add_parser("organize", help=_("Reorder or reverse pages"))
    _add_io_arguments(organize_p)
    organize_grp = organize_p.add_mutually_exclusive_group(required=True)
    organize_grp.add_argument(
        "--order",
        type=str,
        metavar="ORDER",
        help=_("New page order (e.g. '3,1,2,5,4')"),
    )
    organize_grp.add_argument(
        "--reverse",
        action="store_true",
        help=_("Reverse the page order"),
    )

    # --- rotate ---
    rotate_p = sub.add_parser("rotate", help=_("Rotate pages in a PDF"))
    _add_io_arguments(rotate_p)
    rotate_p.add_argument(
        "--angle",
        type=int,
        required=True,
        choices=[90, 180, 270, -90],
        help=_("Rotation angle in degrees (clockwise, -90 for counter-clockwise)"),
    )
    rotate_p.add_argument(
        "--pages",
        type=str,
        default=None,
        help=_("Pages to rotate (e.g. '1,3,5' or '1-5'). Default: all."),
    )

    # --- merge ---
    merge_p = sub.add_parser("merge", help=_("Merge multiple PDFs into one"))
    merge_p.add_argument("inputs", nargs="+", type=Path, help=_("Input PDF files (in order)"))
    merge_p.add_argument(
        "-o", "--output", type=Path, default=None, help=_("Output PDF file (default: merged.pdf)")
    )

    # --- whole-document tools ---
    compress_p = sub.add_parser("compress", help=_("Compress PDF to reduce file size"))
    _add_io_arguments(compress_p)
    compress_p.add_argument(
        "--level",
        choices=[level.value for level in CompressionLevel],
        default=None,
        help=_("Compression level (default: medium)"),
    )

    ocr_p = sub.add_parser("ocr", help=_("Make a scanned PDF searchable"))
    _add_io_arguments(ocr_p)
    ocr_p.add_argument(
        "--language",
        choices=[language.value for language in OcrLanguage],
        default=None,
        help=_("Document language (default: eng)"),
    )

    repair_p = sub.add_parser("repair", help=_("Repair a damaged PDF"))
    _add_io_arguments(repair_p)

    watermark_p = sub.add_parser("watermark", help=_("Add a text or image watermark"))
    _add_io_arguments(watermark_p)
    wm_content = watermark_p.add_mutually_exclusive_group()
    wm_content.add_argument("--text", type=str, default=None, help=_("Watermark text"))
    wm_content.add_argument(
        "--image", type=Path, default=None, help=_("Image file to use as watermark")
    )
    watermark_p.add_argument("--color", type=str, default="#FF3A5E", help=_("Text color"))
    watermark_p.add_argument("--font-size", type=int, default=48, help=_("Text size"))
    watermark_p.add_argument("--opacity", type=float, default=0.5, help=_("Opacity (0-1)"))
    watermark_p.add_argument(
        "--grid-position",
        type=int,
        default=4,
        choices=range(9),
        metavar="0-8",
        help=_("Cell of the 3x3 placement grid, row by row (default: 4, center)"),
    )
    watermark_p.add_argument("--rotation", type=int, default=45, help=_("Rotation in degrees"))
    watermark_p.add_argument("--scale", type=float, default=0.5, help=_("Image scale"))

    numbers_p = sub.add_parser("page-numbers", help=_("Add page numbers"))
    _add_io_arguments(numbers_p)
    numbers_p.add_argument("--start", type=int, default=1, help=_("First number"))
    numbers_p.add_argument(
        "--position", choices=PAGE_NUMBER_POSITIONS, default="bottom-center", help=_("Position")
    )
    numbers_p.add_argument(
        "--format", choices=PAGE_NUMBER_FORMATS, default="1", help=_("Number style")
    )
    numbers_p.add_argument("--font-size", type=int, default=12, help=_("Font size"))
    numbers_p.add_argument("--color", type=str, default="#000000", help=_("Font color"))
    numbers_p.add_argument(
        "--font", choices=PAGE_NUMBER_FONTS, default="Helvetica", help=_("Font family")
    )
    numbers_p.add_argument("--prefix", type=str, default="", help=_("Text before the number"))
    numbers_p.add_argument("--suffix", type=str, default="", help=_("Text after the number"))
    numbers_p.add_argument("--margin", type=int, default=20, help=_("Margin in points"))
    numbers_p.add_argument("--skip-first", action="store_true", help=_("Skip the first page"))
    numbers_p.add_argument("--skip-last", action="store_true", help=_("Skip the last page"))
    numbers_p.add_argument(
        "--ranges", type=str, default="", help=_("Only number these pages (e.g. '2-10')")
    )

    convert_p = sub.add_parser("convert", help=_("Convert between PDF, JPG and PowerPoint"))
    convert_p.add_argument(
        "target", choices=[target.value for target in ConversionTarget], help=_("Conversion")
    )
    _add_io_arguments(convert_p)

    # --- info ---
    info_p = sub.add_parser("info", help=_("Show PDF metadata and page count"))
    info_p.add_argument("input", type=Path, help=_("Input PDF file"))

    return p


# ---------------------------------------------------------------------------
# Shared plumbing
# ---------------------------------------------------------------------------


def _make_client(args) -> ProcessingClient:
    config = get_config_manager()
    base_url = resolve_api_base_url(args.api_url, config.get("api.base_url"))
    timeout = args.timeout if args.timeout is not None else config.get("api.timeout")
    if timeout is not None and (
        isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0
    ):
        raise ConfigurationError("api.timeout", f"expected a positive number, got {timeout!r}")
    return ProcessingClient(base_url, timeout=timeout)


def _output_path(args, result: ProcessingResult) -> Path:
    """Explicit -o, else the suggested filename in the configured or input directory."""
    if args.output is not None:
        return args.output

    directory = get_config_manager().get("output.directory")
    if not directory:
        source = getattr(args, "input", None)
        directory = source.parent if source is not None else Path.cwd()
    return Path(directory) / result.filename


def _save(args, result: ProcessingResult, logger) -> int:
    path = _output_path(args, result)
    overwrite = args.force or get_config_manager().get("output.overwrite_existing", False)
    if path.exists() and not overwrite:
        print(
            _("Error: {0} already exists (use --force to overwrite)").format(path),
            file=sys.stderr,
        )
        return 1

    result.save(str(path))
    kind = _("archive") if result.is_archive else result.content_type
    print(f"{path} ({kind}, {format_file_size(result.size)})")
    logger.debug(f"Wrote {result.size} bytes to {path}")
    return 0


def _run_tool(
    args,
    logger,
    tool: Callable[[ToolProcessor], ProcessingResult],
    prepare: Callable[[DocumentController], None] | None = None,
) -> int:
    """Load the input, apply *prepare* to its page set, run *tool* and save."""
    controller = DocumentController()
    data = args.input.read_bytes()
    name = args.input.name

    try:
        controller.open_document(name, data, lambda d: count_pages(d, name))
        if prepare is not None:
            prepare(controller)
        with _make_client(args) as client:
            result = tool(ToolProcessor(controller, client))
        return _save(args, result, logger)
    finally:
        controller.clear()


def _select(text: str) -> Callable[[DocumentController], None]:
    pages = parse_page_list(text)
    return lambda controller: controller.pages.select_pages(pages)


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _cmd_split(args, logger) -> int:
    """Handle the 'split' command."""
    return _run_tool(args, logger, ToolProcessor.split, _select(args.pages))


def _cmd_extract(args, logger) -> int:
    """Handle the 'extract' command."""
    return _run_tool(args, logger, ToolProcessor.extract, _select(args.pages))


def _cmd_remove(args, logger) -> int:
    """Handle the 'remove' command."""
    return _run_tool(args, logger, ToolProcessor.remove_pages, _select(args.pages))


def _cmd_organize(args, logger) -> int:
    """Handle the 'organize' command."""
    if args.reverse:
        prepare = lambda controller: controller.pages.reverse_order()  # noqa: E731
    else:
        order = parse_page_order(args.order)
        prepare = lambda controller: controller.pages.set_order(order)  # noqa: E731
    return _run_tool(args, logger, ToolProcessor.organize, prepare)


def _cmd_rotate(args, logger) -> int:
    """Handle the 'rotate' command."""
    pages = parse_page_list(args.pages) if args.pages else None

    def prepare(controller: DocumentController) -> None:
        if pages is None:
            controller.pages.rotate_all(args.angle)
            return
        # Check every page before rotating any
        for page in pages:
            controller.pages.entry(page)
        for page in pages:
            controller.pages.set_rotation(page, args.angle)

    return _run_tool(args, logger, ToolProcessor.rotate, prepare)


def _cmd_merge(args, logger) -> int:
    """Handle the 'merge' command."""
    for p in args.inputs:
        if not p.exists():
            print(f"Error: {p} not found", file=sys.stderr)
            return 1

    queue = MergeQueue()
    try:
        for p in args.inputs:
            queue.add(p.name, p.read_bytes())
        with _make_client(args) as client:
            result = queue.submit(client)
        return _save(args, result, logger)
    finally:
        queue.clear()


def _cmd_compress(args, logger) -> int:
    """Handle the 'compress' command."""
    level = CompressionLevel(
        args.level or get_config_manager().get("defaults.compression_level", "medium")
    )
    return _run_tool(args, logger, lambda processor: processor.compress(level))


def _cmd_ocr(args, logger) -> int:
    """Handle the 'ocr' command."""
    language = OcrLanguage(
        args.language or get_config_manager().get("defaults.ocr_language", "eng")
    )
    return _run_tool(args, logger, lambda processor: processor.ocr(language))


def _cmd_repair(args, logger) -> int:
    """Handle the 'repair' command."""
    return _run_tool(args, logger, ToolProcessor.repair)


def _cmd_watermark(args, logger) -> int:
    """Handle the 'watermark' command."""
    if args.image is not None:
        options = WatermarkOptions(
            type="image",
            image=args.image.read_bytes(),
            image_name=args.image.name,
            opacity=args.opacity,
            grid_position=args.grid_position,
            rotation=args.rotation,
            scale=args.scale,
        )
    else:
        options = WatermarkOptions(
            text=args.text or "CONFIDENTIAL",
            text_color=args.color,
            font_size=args.font_size,
            opacity=args.opacity,
            grid_position=args.grid_position,
            rotation=args.rotation,
            scale=args.scale,
        )
    return _run_tool(args, logger, lambda processor: processor.watermark(options))


def _cmd_page_numbers(args, logger) -> int:
    """Handle the 'page-numbers' command."""
    options = PageNumberOptions(
        start_number=args.start,
        position=args.position,
        format=args.format,
        font_size=args.font_size,
        font_color=args.color,
        font_family=args.font,
        prefix=args.prefix,
        suffix=args.suffix,
        margin=args.margin,
        exclude_first_page=args.skip_first,
        exclude_last_page=args.skip_last,
        custom_ranges=args.ranges,
    )
    return _run_tool(args, logger, lambda processor: processor.add_page_numbers(options))


def _cmd_convert(args, logger) -> int:
    """Handle the 'convert' command."""
    target = ConversionTarget(args.target)
    if target is not ConversionTarget.JPG_TO_PDF:
        return _run_tool(args, logger, lambda processor: processor.convert(target))

    # JPG input has no pages to count; send it straight to the API
    with _make_client(args) as client:
        result = client.convert(args.input.name, args.input.read_bytes(), target)
    return _save(args, result, logger)


def _cmd_info(args, _logger) -> int:
    """Handle the 'info' command."""
    info = get_pdf_info(args.input.read_bytes(), args.input.name)
    print(f"File:       {args.input}")
    print(f"Pages:      {info.page_count}")
    print(f"Size:       {info.file_size_mb:.2f} MB ({info.file_size_bytes:,} bytes)")
    print(f"Version:    PDF {info.pdf_version}")
    print(f"Encrypted:  {'Yes' if info.encrypted else 'No'}")
    if info.title:
        print(f"Title:      {info.title}")
    if info.author:
        print(f"Author:     {info.author}")
    if info.creator:
        print(f"Creator:    {info.creator}")
    return 0


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    # Configure logging
    level = logging.DEBUG if args.verbose else LOG_LEVEL
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    logger = logging.getLogger("pdfninja.cli")

    # Validate input file existence (except merge which has 'inputs')
    if hasattr(args, "input") and args.input and not args.input.exists():
        print(f"Error: {args.input} not found", file=sys.stderr)
        return 1

    # Dispatch to command handler
    handlers = {
        "split": _cmd_split,
        "extract": _cmd_extract,
        "remove": _cmd_remove,
        "organize": _cmd_organize,
        "rotate": _cmd_rotate,
        "merge": _cmd_merge,
        "compress": _cmd_compress,
        "ocr": _cmd_ocr,
        "repair": _cmd_repair,
        "watermark": _cmd_watermark,
        "page-numbers": _cmd_page_numbers,
        "convert": _cmd_convert,
        "info": _cmd_info,
    }

    handler = handlers.get(args.command)
    if not handler:
        parser.print_help()
        return 1

    try:
        return handler(args, logger)
    except (PdfNinjaError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e.strerror or e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
