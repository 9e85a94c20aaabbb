"""Output locations and switches for book exports."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

DEBUG_EXPORT = os.getenv("BIBLETEXT_DEBUG", "0") not in {
    "",
    "0",
    "false",
    "False",
}

TEXT_FORMAT = "text"
MARKDOWN_FORMAT = "markdown"
FORMATS = (TEXT_FORMAT, MARKDOWN_FORMAT)


@dataclass(slots=True)
class ExportSettings:
    """Where and how book files are exported.

    Example:
        >>> ExportSettings().text_path(Path("01-GEN.json"))
        PosixPath('exports/text-vbv-strongs/01-GEN.txt')
    """

    output_root: Path = Path("exports")
    formats: Tuple[str, ...] = FORMATS
    text_dir: str = "text-vbv-strongs"
    markdown_dir: str = "markdown-par"

    def __post_init__(self) -> None:
        unknown = [fmt for fmt in self.formats if fmt not in FORMATS]
        if unknown:
            raise ValueError(f"Unknown export formats: {', '.join(unknown)}")

    def wants(self, fmt: str) -> bool:
        return fmt in self.formats

    def text_path(self, book_file: Path) -> Path:
        """Return the annotated-text output path for a book file."""

        return self.output_root / self.text_dir / f"{book_file.stem}.txt"

    def markdown_path(self, book_file: Path) -> Path:
        """Return the Markdown output path for a book file."""

        return self.output_root / self.markdown_dir / f"{book_file.stem}.md"
