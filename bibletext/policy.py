"""
Render policies: the declarative switches behind each output encoding.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable

from .errors import PolicyError
from .footnotes import footnote_letter


class FootnoteStyle(str, Enum):
    """How footnote bodies are emitted."""

    INLINE = "inline"
    REFERENCE = "reference"


_FLAG_FIELDS = ("include_lexicon_codes", "include_parse_codes", "include_footnotes")
_MARKER_FIELDS = ("paragraph_marker", "line_break_marker")
_CALLABLE_FIELDS = ("heading_wrapper", "subtitle_wrapper", "footnote_marker")


@dataclass(frozen=True, slots=True)
class RenderPolicy:
    """Everything that distinguishes one output encoding from another.

    Every field is required; a policy with a missing or mistyped field is
    rejected when it is built, never while rendering.

    Attributes:
        include_lexicon_codes: Append Strong's numbers after annotated text.
        include_parse_codes: Append morphology codes in parentheses.
        include_footnotes: Emit footnote markers and bodies at all.
        footnote_style: Inline braces or chapter-level references.
        paragraph_marker: Literal emitted where a paragraph starts.
        line_break_marker: Literal emitted after a forced line break.
        heading_wrapper: Wraps rendered heading text.
        subtitle_wrapper: Wraps rendered subtitle text.
        footnote_marker: Maps a chapter footnote index to its marker.
    """

    include_lexicon_codes: bool
    include_parse_codes: bool
    include_footnotes: bool
    footnote_style: FootnoteStyle
    paragraph_marker: str
    line_break_marker: str
    heading_wrapper: Callable[[str], str]
    subtitle_wrapper: Callable[[str], str]
    footnote_marker: Callable[[int], str]

    def __post_init__(self) -> None:
        for name in _FLAG_FIELDS:
            if not isinstance(getattr(self, name), bool):
                raise PolicyError(f"{name} must be a bool")
        for name in _MARKER_FIELDS:
            if not isinstance(getattr(self, name), str):
                raise PolicyError(f"{name} must be a string")
        for name in _CALLABLE_FIELDS:
            if not callable(getattr(self, name)):
                raise PolicyError(f"{name} must be callable")
        if not isinstance(self.footnote_style, FootnoteStyle):
            raise PolicyError("footnote_style must be a FootnoteStyle")

    @property
    def inline_footnotes(self) -> bool:
        return self.footnote_style is FootnoteStyle.INLINE

    def footnote_body_policy(self) -> RenderPolicy:
        """Return the policy used for footnote bodies.

        Lexicon and parse codes are always suppressed. Referenced bodies are
        listed one per line after the chapter, so paragraph markers and
        heading or subtitle blocks are flattened to run on that line.
        """

        body = replace(self, include_lexicon_codes=False, include_parse_codes=False)
        if self.inline_footnotes:
            return body
        return replace(
            body,
            paragraph_marker=" ",
            heading_wrapper=_run_in_block,
            subtitle_wrapper=_run_in_block,
        )

    def without_footnotes(self) -> RenderPolicy:
        return replace(self, include_footnotes=False)


def _run_in_block(value: str) -> str:
    return f" {value} "


def _text_heading(value: str) -> str:
    return f"[[{value}]] "


def _text_subtitle(value: str) -> str:
    return f"«{value}» "


def _text_footnote_marker(index: int) -> str:
    return "°"


def _markdown_heading(value: str) -> str:
    return f"\n\n### {value}\n\n"


def _markdown_subtitle(value: str) -> str:
    return f"\n\n> _{value}_\n\n"


def _markdown_footnote_marker(index: int) -> str:
    return f"<sup>{footnote_letter(index)}</sup>"


TEXT_POLICY = RenderPolicy(
    include_lexicon_codes=True,
    include_parse_codes=True,
    include_footnotes=True,
    footnote_style=FootnoteStyle.INLINE,
    paragraph_marker="¶ ",
    line_break_marker="␤",
    heading_wrapper=_text_heading,
    subtitle_wrapper=_text_subtitle,
    footnote_marker=_text_footnote_marker,
)

MARKDOWN_POLICY = RenderPolicy(
    include_lexicon_codes=False,
    include_parse_codes=False,
    include_footnotes=True,
    footnote_style=FootnoteStyle.REFERENCE,
    paragraph_marker="\n\n",
    line_break_marker="<br>",
    heading_wrapper=_markdown_heading,
    subtitle_wrapper=_markdown_subtitle,
    footnote_marker=_markdown_footnote_marker,
)
