"""
Typed containers for annotated scripture content.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Tuple, Union


class Script(str, Enum):
    """Non-Latin scripts a text object may declare."""

    GREEK = "G"
    HEBREW = "H"


class Mark(str, Enum):
    """Formatting marks carried by a text object."""

    ITALIC = "i"
    BOLD = "b"
    WORDS_OF_CHRIST = "woc"
    SMALL_CAPS = "sc"


class FootnoteKind(str, Enum):
    """Footnote categories; study notes are the default."""

    STUDY = "stu"
    TRANSLATION = "trn"
    VARIANT = "var"
    MAP = "map"
    CROSS_REFERENCE = "xrf"


@dataclass(frozen=True, slots=True)
class Footnote:
    """A note attached to a text object or nested group.

    Attributes:
        content: The note body, itself full content.
        kind: Category of the note.
    """

    content: Content
    kind: FootnoteKind = FootnoteKind.STUDY


@dataclass(frozen=True, slots=True)
class TextObject:
    """A run of text with optional formatting and lexical annotations."""

    text: str | None = None
    script: Script | None = None
    marks: FrozenSet[Mark] = frozenset()
    foot: Footnote | None = None
    strong: str | None = None
    lemma: str | None = None
    morph: str | None = None
    paragraph: bool = False
    line_break: bool = False

    @property
    def small_caps(self) -> bool:
        return Mark.SMALL_CAPS in self.marks


@dataclass(frozen=True, slots=True)
class Nested:
    """One annotation set shared by several inner tokens.

    Example:
        >>> Nested(content="son of", strong="H1121").strong
        'H1121'
    """

    content: Content
    strong: str | None = None
    lemma: str | None = None
    morph: str | None = None
    foot: Footnote | None = None
    paragraph: bool = False
    line_break: bool = False


@dataclass(frozen=True, slots=True)
class Heading:
    """Section heading block."""

    content: Content


@dataclass(frozen=True, slots=True)
class ParagraphBlock:
    """Paragraph wrapper around inner content."""

    content: Content


@dataclass(frozen=True, slots=True)
class Subtitle:
    """Psalm-style subtitle (superscription) block."""

    content: Content


@dataclass(frozen=True, slots=True)
class ContentSequence:
    """Ordered concatenation of content items."""

    items: Tuple[Content, ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def rest(self) -> ContentSequence:
        """Return the sequence without its first item."""

        return ContentSequence(self.items[1:])


Content = Union[
    str, TextObject, Nested, Heading, ParagraphBlock, Subtitle, ContentSequence
]

Annotated = Union[TextObject, Nested]


@dataclass(frozen=True, slots=True)
class Verse:
    """A single verse of one book in one version."""

    book: str
    chapter: int
    verse: int
    content: Content

    def reference(self) -> str:
        """Return a compact reference such as 'GEN 1:1'."""
        return f"{self.book} {self.chapter}:{self.verse}"


def first_item(content: Content) -> Content | None:
    """Return the leading node of a content value.

    A sequence yields its first element (or None when empty); any other node
    is its own leading node.

    Example:
        >>> first_item(ContentSequence(("a", "b")))
        'a'
    """

    if isinstance(content, ContentSequence):
        return content.items[0] if content.items else None
    return content
