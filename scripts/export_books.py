"""
Export book files to annotated text and Markdown.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

from tqdm import tqdm

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from bibletext.export import ExportReport, export_book
from bibletext.settings import FORMATS, ExportSettings


def _parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    """Return CLI arguments for the export script."""

    parser = argparse.ArgumentParser(
        description="Render verse JSON book files to text-vbv-strongs and markdown-par."
    )
    parser.add_argument(
        "books",
        nargs="+",
        type=Path,
        metavar="BOOK_JSON",
        help="Book files to export (JSON arrays of verses).",
    )
    parser.add_argument(
        "--output-root",
        "-o",
        type=Path,
        default=Path("exports"),
        help="Directory that receives the export folders.",
    )
    parser.add_argument(
        "--format",
        dest="formats",
        action="append",
        choices=FORMATS,
        help="Restrict output to one format; repeat for several. Defaults to all.",
    )
    return parser.parse_args(argv)


def _print_failures(report: ExportReport) -> None:
    for failure in report.failures:
        print(f"{report.source.name}: {failure.reference()}: {failure.reason}")


def main(argv: List[str] | None = None) -> int:
    """Export every requested book, reporting failed verses and carrying on.

    Example:
        >>> main(["bible-versions/KJV1769/01-GEN.json"])  # doctest: +SKIP
        0
    """

    args = _parse_args(argv)
    settings = ExportSettings(
        output_root=args.output_root,
        formats=tuple(args.formats) if args.formats else FORMATS,
    )
    failed = 0
    for path in tqdm(args.books, desc="Exporting books", unit="book"):
        try:
            report = export_book(path, settings)
        except (OSError, ValueError) as exc:
            print(f"{path}: {exc}")
            failed += 1
            continue
        _print_failures(report)
        failed += len(report.failures)
    print(f"Exported {len(args.books)} book(s) to {settings.output_root}")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
