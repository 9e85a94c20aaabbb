"""
Verse and chapter assembly for the annotated-text and Markdown exports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import groupby
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from .cleaning import clean_markdown, clean_text, trim_spaces
from .errors import ContentShapeError, VerseError
from .footnotes import FootnoteAccumulator
from .models import (
    Content,
    ContentSequence,
    Heading,
    Nested,
    ParagraphBlock,
    Subtitle,
    TextObject,
    Verse,
    first_item,
)
from .parser import load_book
from .policy import MARKDOWN_POLICY, TEXT_POLICY, RenderPolicy
from .render import RenderContext, render
from .settings import DEBUG_EXPORT, MARKDOWN_FORMAT, TEXT_FORMAT, ExportSettings


def _debug(msg: str) -> None:
    if DEBUG_EXPORT:
        print(msg)


def group_by_chapter(verses: Iterable[Verse]) -> List[Tuple[int, List[Verse]]]:
    """Group verses by chapter, both chapters and verses in ascending order.

    Example:
        >>> [(n, len(vs)) for n, vs in group_by_chapter([Verse('GEN', 2, 1, ''), Verse('GEN', 1, 2, ''), Verse('GEN', 1, 1, '')])]
        [(1, 2), (2, 1)]
    """

    ordered = sorted(verses, key=lambda v: (v.chapter, v.verse))
    return [(number, list(group)) for number, group in groupby(ordered, key=lambda v: v.chapter)]


def split_leading_blocks(content: Content) -> Tuple[List[Content], Content]:
    """Detach a leading subtitle, then a leading heading, from verse content.

    The content tree is not modified; the remainder is a new sequence.

    Returns:
        (blocks, remainder) with blocks in output order.
    """

    blocks: List[Content] = []
    for block_type in (Subtitle, Heading):
        first = first_item(content)
        if isinstance(first, block_type):
            blocks.append(first)
            if isinstance(content, ContentSequence):
                content = content.rest()
            else:
                content = ContentSequence()
    return blocks, content


def opens_paragraph(content: Content) -> bool:
    """Return True when the content's first node starts a paragraph."""

    first = first_item(content)
    while isinstance(first, ContentSequence):
        first = first_item(first)
    if isinstance(first, ParagraphBlock):
        return True
    return isinstance(first, (TextObject, Nested)) and first.paragraph


def _verse_error(verse: Verse, exc: Exception) -> VerseError:
    _debug(f"{verse.reference()} failed: {exc}")
    return VerseError(verse.book, verse.chapter, verse.verse, str(exc))


def render_text_verse(
    verse: Verse,
    notes: FootnoteAccumulator | None = None,
    policy: RenderPolicy = TEXT_POLICY,
) -> str:
    """Render one verse as an annotated-text line, e.g. '001:001 In the beginning H7225'.

    Raises:
        VerseError: The verse content could not be rendered.
    """

    notes = notes if notes is not None else FootnoteAccumulator()
    checkpoint = notes.mark()
    try:
        body = render(verse.content, RenderContext(policy, notes, verse.verse))
    except ContentShapeError as exc:
        notes.rollback(checkpoint)
        raise _verse_error(verse, exc) from exc
    return f"{verse.chapter:03d}:{verse.verse:03d} {clean_text(body)}".rstrip()


def render_text_book(
    verses: Iterable[Verse],
    errors: List[VerseError] | None = None,
    policy: RenderPolicy = TEXT_POLICY,
) -> str:
    """Render a book's verses as annotated-text lines joined by newlines.

    Args:
        verses: Verses of one book, in any order.
        errors: When given, failing verses are recorded here and left out;
            otherwise the first failure propagates.
        policy: Render policy to apply.
    """

    lines: List[str] = []
    for _, chapter_verses in group_by_chapter(verses):
        notes = FootnoteAccumulator()
        for verse in chapter_verses:
            try:
                lines.append(render_text_verse(verse, notes, policy))
            except VerseError as exc:
                if errors is None:
                    raise
                _debug(f"skipping {exc.reference()}: {exc.reason}")
                errors.append(exc)
    return "\n".join(lines)


def render_markdown_verse(
    verse: Verse,
    notes: FootnoteAccumulator,
    opening: bool = False,
    policy: RenderPolicy = MARKDOWN_POLICY,
) -> str:
    """Render one verse as Markdown, preceded by any leading blocks.

    A blank line precedes the verse line when the verse opens a paragraph,
    follows a subtitle or heading block, or opens its chapter; never more
    than one.

    Example:
        >>> render_markdown_verse(Verse('GEN', 1, 1, TextObject(text='In the beginning', paragraph=True)), FootnoteAccumulator())
        '\\n<sup>1</sup> In the beginning'
    """

    ctx = RenderContext(policy, notes, verse.verse)
    checkpoint = notes.mark()
    try:
        blocks, body = split_leading_blocks(verse.content)
        rendered_blocks = [render(block, ctx).strip() for block in blocks]
        text = clean_markdown(render(body, ctx))
    except ContentShapeError as exc:
        notes.rollback(checkpoint)
        raise _verse_error(verse, exc) from exc

    leading = opens_paragraph(body) or text.startswith(policy.paragraph_marker)
    if leading:
        text = trim_spaces(text.removeprefix(policy.paragraph_marker))
    text = text.rstrip("\n")

    lines: List[str] = []
    for block in rendered_blocks:
        lines.extend(("", block))
    if leading or rendered_blocks or opening:
        lines.append("")
    lines.append(f"<sup>{verse.verse}</sup> {text}".rstrip())
    return "\n".join(lines)


def render_markdown_chapter(
    number: int,
    verses: Sequence[Verse],
    errors: List[VerseError] | None = None,
    policy: RenderPolicy = MARKDOWN_POLICY,
) -> List[str]:
    """Return the Markdown lines of one chapter, footnote list included."""

    lines = [f"## Chapter {number}"]
    notes = FootnoteAccumulator()
    opening = True
    for verse in verses:
        try:
            lines.append(render_markdown_verse(verse, notes, opening, policy))
        except VerseError as exc:
            if errors is None:
                raise
            _debug(f"skipping {exc.reference()}: {exc.reason}")
            errors.append(exc)
            continue
        opening = False
    if notes:
        lines.append("")
        lines.extend(f"> {line}" for line in notes.lines())
    return lines


def render_markdown_book(
    verses: Iterable[Verse],
    errors: List[VerseError] | None = None,
    policy: RenderPolicy = MARKDOWN_POLICY,
) -> str:
    """Render a book as one Markdown document, chapters separated by a blank line."""

    lines: List[str] = []
    for idx, (number, chapter_verses) in enumerate(group_by_chapter(verses)):
        if idx:
            lines.append("")
        lines.extend(render_markdown_chapter(number, chapter_verses, errors, policy))
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


@dataclass(slots=True)
class ExportReport:
    """Outcome of exporting one book file.

    Attributes:
        source: Book file that was read.
        written: Output files produced.
        failures: Verses that could not be loaded or rendered, each once.
    """

    source: Path
    written: List[Path] = field(default_factory=list)
    failures: List[VerseError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def record(self, errors: Iterable[VerseError]) -> None:
        seen = {exc.reference() for exc in self.failures}
        for exc in errors:
            if exc.reference() not in seen:
                seen.add(exc.reference())
                self.failures.append(exc)


def export_book(path: Path, settings: ExportSettings) -> ExportReport:
    """Write the annotated-text and/or Markdown renderings of one book file.

    Example:
        >>> export_book(Path('bible-versions/KJV1769/01-GEN.json'), ExportSettings())  # doctest: +SKIP
    """

    report = ExportReport(source=path)
    errors: List[VerseError] = []
    verses = load_book(path, errors)
    report.record(errors)

    outputs = []
    if settings.wants(TEXT_FORMAT):
        errors = []
        outputs.append((settings.text_path(path), render_text_book(verses, errors)))
        report.record(errors)
    if settings.wants(MARKDOWN_FORMAT):
        errors = []
        outputs.append((settings.markdown_path(path), render_markdown_book(verses, errors)))
        report.record(errors)

    for target, payload in outputs:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(payload, encoding="utf-8")
        report.written.append(target)
        _debug(f"wrote {target}")
    return report
