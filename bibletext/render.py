"""
Recursive rendering of content trees into flat annotated strings.

The renderer walks one node under a :class:`RenderContext` and returns a
string. Its only side effect is appending to the chapter's
:class:`FootnoteAccumulator`; the content tree itself is never touched.

Annotated nodes (text objects and nested groups) are assembled by a fixed
sequence of small steps, each of which contributes one piece:

    paragraph marker, text, footnote, lexicon code, parse code, line break
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from .cleaning import clean_markdown, clean_text
from .errors import ContentShapeError
from .footnotes import FootnoteAccumulator
from .models import (
    Annotated,
    Content,
    ContentSequence,
    Heading,
    Nested,
    ParagraphBlock,
    Subtitle,
    TextObject,
)
from .policy import RenderPolicy

HEADING_PREFIX = "Heading."
SUBTITLE_PREFIX = "Subtitle."


@dataclass(frozen=True, slots=True)
class RenderContext:
    """State threaded through one verse's render.

    Attributes:
        policy: Active output policy.
        notes: Footnote accumulator of the current chapter.
        verse: Verse number, used to label referenced footnotes.
        prefix: Overrides the footnote label inside headings and subtitles.
    """

    policy: RenderPolicy
    notes: FootnoteAccumulator
    verse: int
    prefix: str | None = None

    def with_prefix(self, prefix: str) -> RenderContext:
        return replace(self, prefix=prefix)

    def with_policy(self, policy: RenderPolicy) -> RenderContext:
        return replace(self, policy=policy)

    def note_prefix(self) -> str:
        """Return the label for a footnote found at this point."""

        return self.prefix if self.prefix is not None else f"{self.verse}."


def render(node: Content, ctx: RenderContext) -> str:
    """Render a content node to a string under ``ctx``.

    Example:
        >>> from .policy import TEXT_POLICY
        >>> ctx = RenderContext(TEXT_POLICY, FootnoteAccumulator(), verse=1)
        >>> render(TextObject(text="In the beginning", strong="H7225"), ctx)
        'In the beginning H7225'
    """

    if isinstance(node, str):
        return node
    if isinstance(node, ContentSequence):
        return "".join(render(item, ctx) for item in node.items)
    if isinstance(node, Heading):
        inner = render(node.content, ctx.with_prefix(HEADING_PREFIX))
        return ctx.policy.heading_wrapper(_block_text(inner, ctx.policy))
    if isinstance(node, Subtitle):
        inner = render(node.content, ctx.with_prefix(SUBTITLE_PREFIX))
        return ctx.policy.subtitle_wrapper(_block_text(inner, ctx.policy))
    if isinstance(node, ParagraphBlock):
        return render(node.content, ctx)
    if isinstance(node, Nested):
        return annotate(node, render(node.content, ctx), ctx)
    if isinstance(node, TextObject):
        return annotate(node, text_payload(node), ctx)
    raise ContentShapeError(f"cannot render {type(node).__name__} node")


def annotate(node: Annotated, text: str, ctx: RenderContext) -> str:
    """Surround ``text`` with the node's own annotations, in fixed order."""

    return "".join(
        (
            paragraph_prefix(node, ctx.policy),
            text,
            footnote_span(node, text, ctx),
            lexicon_suffix(node, ctx.policy),
            parse_suffix(node, ctx.policy),
            break_suffix(node, ctx.policy),
        )
    )


def paragraph_prefix(node: Annotated, policy: RenderPolicy) -> str:
    """Return the paragraph marker for a node that opens a paragraph.

    Inline-footnote encodings get a leading space so the marker never fuses
    with the previous token's trailing code.
    """

    if not node.paragraph:
        return ""
    if policy.inline_footnotes:
        return " " + policy.paragraph_marker
    return policy.paragraph_marker


def text_payload(node: TextObject) -> str:
    """Return the node's text with small caps applied as upper case."""

    text = node.text or ""
    return text.upper() if node.small_caps else text


def footnote_span(node: Annotated, text: str, ctx: RenderContext) -> str:
    """Return the footnote marker (and inline body) placed right after the text.

    Referenced footnotes are pushed onto the accumulator and only the marker
    is returned. Inline footnotes return ``marker{body}``; a footnote with no
    text before it gets a trailing space so following text stays separate.
    """

    policy = ctx.policy
    if node.foot is None or not policy.include_footnotes:
        return ""
    marker = policy.footnote_marker(ctx.notes.next_index())
    # The index is taken before the body renders so notes nested in it follow.
    entry = ctx.notes.add(marker, ctx.note_prefix(), "")
    body_ctx = ctx.with_policy(policy.footnote_body_policy())
    if not policy.inline_footnotes:
        entry.body = clean_markdown(render(node.foot.content, body_ctx))
        return marker
    entry.body = clean_text(render(node.foot.content, body_ctx))
    span = f"{marker}{{{entry.body}}}"
    return span if text else span + " "


def lexicon_suffix(node: Annotated, policy: RenderPolicy) -> str:
    if policy.include_lexicon_codes and node.strong:
        return " " + node.strong
    return ""


def parse_suffix(node: Annotated, policy: RenderPolicy) -> str:
    if policy.include_parse_codes and node.morph:
        return f" ({node.morph})"
    return ""


def break_suffix(node: Annotated, policy: RenderPolicy) -> str:
    return policy.line_break_marker if node.line_break else ""


def _block_text(inner: str, policy: RenderPolicy) -> str:
    if policy.inline_footnotes:
        return clean_text(inner)
    return clean_markdown(inner)
