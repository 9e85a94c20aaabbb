"""
Exception types raised while loading and rendering content.
"""

from __future__ import annotations


class ContentShapeError(ValueError):
    """A content node does not match any recognized shape.

    Attributes:
        path: Location of the offending node, e.g. ``content[2].foot``.
    """

    def __init__(self, message: str, path: str = "content") -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


class PolicyError(ValueError):
    """A render policy was constructed with a missing or invalid field."""


class VerseError(Exception):
    """Loading or rendering a specific verse failed.

    Attributes:
        book: Book identifier of the verse.
        chapter: Chapter number.
        verse: Verse number.
        reason: Human readable cause.
    """

    def __init__(self, book: str, chapter: int, verse: int, reason: str) -> None:
        super().__init__(f"{book} {chapter}:{verse}: {reason}")
        self.book = book
        self.chapter = chapter
        self.verse = verse
        self.reason = reason

    def reference(self) -> str:
        """Return the failing verse as 'BOOK C:V'."""

        return f"{self.book} {self.chapter}:{self.verse}"
