from __future__ import annotations

import dataclasses

import pytest

from bibletext.errors import PolicyError
from bibletext.policy import MARKDOWN_POLICY, TEXT_POLICY, FootnoteStyle


def test_text_policy_is_inline_with_codes() -> None:
    assert TEXT_POLICY.footnote_style is FootnoteStyle.INLINE
    assert TEXT_POLICY.include_lexicon_codes and TEXT_POLICY.include_parse_codes
    assert TEXT_POLICY.paragraph_marker == "¶ "
    assert TEXT_POLICY.line_break_marker == "␤"
    assert TEXT_POLICY.footnote_marker(0) == TEXT_POLICY.footnote_marker(30) == "°"


def test_markdown_policy_references_footnotes_without_codes() -> None:
    assert MARKDOWN_POLICY.footnote_style is FootnoteStyle.REFERENCE
    assert not MARKDOWN_POLICY.include_lexicon_codes
    assert not MARKDOWN_POLICY.include_parse_codes
    assert MARKDOWN_POLICY.line_break_marker == "<br>"
    assert MARKDOWN_POLICY.footnote_marker(2) == "<sup>c</sup>"
    assert MARKDOWN_POLICY.footnote_marker(26) == "<sup>a</sup>"


def test_footnote_body_policy_only_drops_codes() -> None:
    body = TEXT_POLICY.footnote_body_policy()
    assert not body.include_lexicon_codes and not body.include_parse_codes
    assert body.include_footnotes
    assert body.footnote_style is TEXT_POLICY.footnote_style
    assert TEXT_POLICY.include_lexicon_codes


def test_without_footnotes() -> None:
    assert not MARKDOWN_POLICY.without_footnotes().include_footnotes
    assert MARKDOWN_POLICY.include_footnotes


def test_policies_are_immutable() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        TEXT_POLICY.paragraph_marker = "P "


@pytest.mark.parametrize(
    "change",
    [
        {"heading_wrapper": None},
        {"subtitle_wrapper": "«»"},
        {"footnote_marker": None},
        {"paragraph_marker": None},
        {"include_footnotes": "yes"},
        {"footnote_style": "inline"},
    ],
)
def test_misconfigured_policy_fails_at_construction(change) -> None:
    with pytest.raises(PolicyError):
        dataclasses.replace(TEXT_POLICY, **change)


def test_referenced_footnote_bodies_run_on_one_line() -> None:
    body = MARKDOWN_POLICY.footnote_body_policy()
    assert body.paragraph_marker == " "
    assert "\n" not in body.heading_wrapper("Aside")
    assert "\n" not in body.subtitle_wrapper("A Psalm")
    assert TEXT_POLICY.footnote_body_policy().paragraph_marker == TEXT_POLICY.paragraph_marker
