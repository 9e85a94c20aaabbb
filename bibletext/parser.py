"""
Parsing helpers that turn verse JSON into typed content trees.

Stored content is an untagged union: strings, arrays and objects whose shape
is decided by which keys are present. Parsing classifies every node once so
the renderer can dispatch on explicit types.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Iterable, List, Mapping

from .errors import ContentShapeError, VerseError
from .models import (
    Content,
    ContentSequence,
    Footnote,
    FootnoteKind,
    Heading,
    Mark,
    Nested,
    ParagraphBlock,
    Script,
    Subtitle,
    TextObject,
    Verse,
)


STRONG_RE = re.compile(r"^[GH]\d{1,4}$")

_TEXT_KEYS = frozenset(
    {"text", "script", "marks", "foot", "strong", "lemma", "morph", "paragraph", "break"}
)
_NESTED_KEYS = frozenset(
    {"content", "strong", "lemma", "morph", "foot", "paragraph", "break"}
)
_BLOCK_TYPES = {"heading": Heading, "subtitle": Subtitle}


def parse_content(raw: Any, path: str = "content") -> Content:
    """Classify raw JSON content into the typed model.

    Example:
        >>> parse_content([{"text": "God", "strong": "H430"}, " created"])
        ContentSequence(items=(TextObject(text='God', script=None, marks=frozenset(), foot=None, strong='H430', lemma=None, morph=None, paragraph=False, line_break=False), ' created'))
    """

    if isinstance(raw, str):
        return raw
    if isinstance(raw, list):
        return ContentSequence(
            tuple(parse_content(item, f"{path}[{idx}]") for idx, item in enumerate(raw))
        )
    if not isinstance(raw, Mapping):
        raise ContentShapeError(f"unexpected {type(raw).__name__}", path)
    if not raw:
        raise ContentShapeError("empty content object", path)

    for key, block in _BLOCK_TYPES.items():
        if key in raw:
            _only_key(raw, key, path)
            return block(parse_content(raw[key], f"{path}.{key}"))
    if "paragraph" in raw and not isinstance(raw["paragraph"], bool):
        _only_key(raw, "paragraph", path)
        return ParagraphBlock(parse_content(raw["paragraph"], f"{path}.paragraph"))
    if "content" in raw:
        return _parse_nested(raw, path)
    return _parse_text_object(raw, path)


def parse_footnote(raw: Any, path: str = "foot") -> Footnote:
    """Parse a ``{"type": ..., "content": ...}`` footnote object."""

    if not isinstance(raw, Mapping) or "content" not in raw:
        raise ContentShapeError("footnote needs a content field", path)
    _check_keys(raw, frozenset({"type", "content"}), path)
    kind = FootnoteKind.STUDY
    if "type" in raw:
        kind = _enum_value(FootnoteKind, raw["type"], f"{path}.type")
    return Footnote(content=parse_content(raw["content"], f"{path}.content"), kind=kind)


def parse_verse(raw: Mapping[str, Any]) -> Verse:
    """Parse one verse object: ``{book, chapter, verse, content}``."""

    if not isinstance(raw, Mapping):
        raise ContentShapeError("verse must be an object", "verse")
    for key in ("book", "chapter", "verse", "content"):
        if key not in raw:
            raise ContentShapeError(f"verse is missing '{key}'", "verse")
    chapter, number = raw["chapter"], raw["verse"]
    if not _is_positive_int(chapter) or not _is_positive_int(number):
        raise ContentShapeError("chapter and verse must be positive integers", "verse")
    ref = f"{raw['book']} {chapter}:{number}"
    return Verse(
        book=str(raw["book"]),
        chapter=chapter,
        verse=number,
        content=parse_content(raw["content"], f"{ref} content"),
    )


def parse_verses(
    rows: Iterable[Mapping[str, Any]], errors: List[VerseError] | None = None
) -> List[Verse]:
    """Parse verse objects in order.

    Args:
        rows: Raw verse objects.
        errors: When given, malformed verses are recorded here and skipped;
            otherwise the first ContentShapeError propagates.
    Returns:
        Parsed verses.
    """

    verses: List[Verse] = []
    for row in rows:
        try:
            verses.append(parse_verse(row))
        except ContentShapeError as exc:
            if errors is None:
                raise
            errors.append(_row_error(row, exc))
    return verses


def load_book(path: Path, errors: List[VerseError] | None = None) -> List[Verse]:
    """Load one book file of a version (a JSON array of verses).

    Example:
        >>> _ = load_book(Path('bible-versions/KJV1769/01-GEN.json'))  # doctest: +SKIP
    """

    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ContentShapeError("book file must hold a list of verses", str(path))
    return parse_verses(data, errors)


def _row_error(row: Any, exc: ContentShapeError) -> VerseError:
    if not isinstance(row, Mapping):
        row = {}
    return VerseError(
        str(row.get("book", "?")), row.get("chapter", 0), row.get("verse", 0), str(exc)
    )


def _parse_nested(raw: Mapping[str, Any], path: str) -> Nested:
    _check_keys(raw, _NESTED_KEYS, path)
    return Nested(
        content=parse_content(raw["content"], f"{path}.content"),
        **_annotation_fields(raw, path),
    )


def _parse_text_object(raw: Mapping[str, Any], path: str) -> TextObject:
    _check_keys(raw, _TEXT_KEYS, path)
    text = raw.get("text")
    if text is not None and not isinstance(text, str):
        raise ContentShapeError("text must be a string", f"{path}.text")
    script = None
    if "script" in raw:
        script = _enum_value(Script, raw["script"], f"{path}.script")
    marks = raw.get("marks", [])
    if not isinstance(marks, list):
        raise ContentShapeError("marks must be a list", f"{path}.marks")
    return TextObject(
        text=text,
        script=script,
        marks=frozenset(_enum_value(Mark, mark, f"{path}.marks") for mark in marks),
        **_annotation_fields(raw, path),
    )


def _annotation_fields(raw: Mapping[str, Any], path: str) -> dict:
    """Return the annotation keyword arguments shared by text and nested nodes."""

    strong = raw.get("strong")
    if strong is not None and not (isinstance(strong, str) and STRONG_RE.match(strong)):
        raise ContentShapeError(f"invalid Strong's number {strong!r}", f"{path}.strong")
    for key in ("lemma", "morph"):
        if raw.get(key) is not None and not isinstance(raw[key], str):
            raise ContentShapeError(f"{key} must be a string", f"{path}.{key}")
    for key in ("paragraph", "break"):
        if key in raw and not isinstance(raw[key], bool):
            raise ContentShapeError(f"{key} must be a boolean", f"{path}.{key}")
    foot = raw.get("foot")
    return {
        "strong": strong,
        "lemma": raw.get("lemma"),
        "morph": raw.get("morph"),
        "foot": parse_footnote(foot, f"{path}.foot") if foot is not None else None,
        "paragraph": raw.get("paragraph", False),
        "line_break": raw.get("break", False),
    }


def _check_keys(raw: Mapping[str, Any], allowed: frozenset, path: str) -> None:
    unknown = sorted(set(raw) - allowed)
    if unknown:
        raise ContentShapeError(f"unexpected keys {', '.join(unknown)}", path)


def _only_key(raw: Mapping[str, Any], key: str, path: str) -> None:
    _check_keys(raw, frozenset({key}), path)


def _enum_value(enum_type, value: Any, path: str):
    try:
        return enum_type(value)
    except ValueError:
        raise ContentShapeError(f"unknown {enum_type.__name__} {value!r}", path) from None


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0
