"""
Per-chapter footnote collection and lettering.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List


def footnote_letter(index: int) -> str:
    """Return the letter for the zero-based footnote index.

    Letters cycle back to 'a' after 'z' with no suffix.

    Example:
        >>> footnote_letter(0), footnote_letter(25), footnote_letter(26)
        ('a', 'z', 'a')
    """

    return chr(ord("a") + index % 26)


@dataclass(slots=True)
class NoteEntry:
    """A rendered footnote waiting to be listed after its chapter.

    Attributes:
        marker: Rendered marker, e.g. '<sup>a</sup>'.
        prefix: Context label: a verse number such as '3.', 'Heading.'
            or 'Subtitle.'.
        body: Rendered note body.
    """

    marker: str
    prefix: str
    body: str

    def line(self) -> str:
        """Return the list line, e.g. '- <sup>a</sup> 3. Hebrew: Elohim'."""

        return " ".join(part for part in (f"- {self.marker}", self.prefix, self.body) if part)


@dataclass(slots=True)
class FootnoteAccumulator:
    """Ordered footnote entries for one chapter.

    Example:
        >>> notes = FootnoteAccumulator()
        >>> notes.next_index()
        0
        >>> notes.add("<sup>a</sup>", "1.", "note").line()
        '- <sup>a</sup> 1. note'
        >>> notes.next_index()
        1
    """

    entries: List[NoteEntry] = field(default_factory=list)

    def next_index(self) -> int:
        """Return the index the next footnote will receive."""

        return len(self.entries)

    def add(self, marker: str, prefix: str, body: str) -> NoteEntry:
        entry = NoteEntry(marker=marker, prefix=prefix, body=body)
        self.entries.append(entry)
        return entry

    def mark(self) -> int:
        """Return a checkpoint usable with :meth:`rollback`."""

        return len(self.entries)

    def rollback(self, checkpoint: int) -> None:
        """Discard every entry added after ``checkpoint``."""

        del self.entries[checkpoint:]

    def lines(self) -> List[str]:
        return [entry.line() for entry in self]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[NoteEntry]:
        return iter(self.entries)
