from __future__ import annotations

import re

from bibletext.export import render_text_verse
from bibletext.parser import parse_verse
from bibletext.policy import TEXT_POLICY

FOOTNOTE_SPAN = re.compile(r"°\{[^}]*\}")


def _verse(content, book="GEN", chapter=1, verse=1):
    return parse_verse({"book": book, "chapter": chapter, "verse": verse, "content": content})


def _line(content, **ref) -> str:
    return render_text_verse(_verse(content, **ref))


def test_plain_string_verse() -> None:
    assert (
        _line("In the beginning God created the heavens and the earth.")
        == "001:001 In the beginning God created the heavens and the earth."
    )


def test_strongs_and_morph_follow_each_word() -> None:
    content = [
        {"text": "In the beginning", "strong": "H7225"},
        {"text": " God", "strong": "H430"},
        {"text": " created", "strong": "H1254", "morph": "8804"},
        {"text": " the heaven", "strong": "H8064"},
        {"text": " and the earth.", "strong": "H776"},
    ]
    assert _line(content) == (
        "001:001 In the beginning H7225 God H430 created H1254 (8804) "
        "the heaven H8064 and the earth. H776"
    )


def test_psalm_subtitle_keeps_codes_and_separates_strongs_only_words() -> None:
    content = [
        {
            "subtitle": [
                {"text": "To the chief Musician", "strong": "H5329", "morph": "8764"},
                {"text": " upon Muthlabben,", "strong": "H4192"},
                {"strong": "H1121"},
                {"text": " A Psalm", "strong": "H4210"},
                {"text": " of David.", "strong": "H1732"},
            ]
        },
        {"paragraph": True, "text": "I will praise", "strong": "H3034", "morph": "8686"},
        {"text": " [thee], O LORD,", "strong": "H3068"},
        {"text": " with my whole heart;", "strong": "H3820"},
        {"text": " I will shew forth", "strong": "H5608", "morph": "8762"},
        {"text": " all thy marvellous works.", "strong": "H6381", "morph": "8737"},
    ]
    assert _line(content, book="PSA", chapter=9) == (
        "009:001 «To the chief Musician H5329 (8764) upon Muthlabben, H4192 H1121 "
        "A Psalm H4210 of David. H1732» ¶ I will praise H3034 (8686) [thee], O LORD, "
        "H3068 with my whole heart; H3820 I will shew forth H5608 (8762) all thy "
        "marvellous works. H6381 (8737)"
    )


def test_heading_is_bracketed_with_one_space_before_body() -> None:
    content = [{"heading": "The Creation"}, {"text": "In the beginning"}]
    assert _line(content) == "001:001 [[The Creation]] In the beginning"


def test_heading_followed_by_spaced_text_still_has_single_space() -> None:
    content = [{"heading": "Heading Text"}, " Body Text"]
    assert _line(content) == "001:001 [[Heading Text]] Body Text"


def test_paragraph_wrapper_has_no_marker() -> None:
    content = {"paragraph": "And the earth was without form"}
    assert _line(content, verse=2) == "001:002 And the earth was without form"


def test_paragraph_flag_opens_with_pilcrow() -> None:
    content = [{"paragraph": True, "text": "In the beginning", "strong": "H7225"}]
    assert _line(content) == "001:001 ¶ In the beginning H7225"


def test_mid_verse_paragraph_is_spaced_from_previous_code() -> None:
    content = [
        {"text": "First sentence.", "strong": "G1234"},
        {"paragraph": True, "text": "Second sentence.", "strong": "G5678"},
    ]
    assert _line(content, book="MAT", verse=6) == (
        "001:006 First sentence. G1234 ¶ Second sentence. G5678"
    )


def test_line_break_marker() -> None:
    content = [{"text": "Blessed is the man", "break": True}, {"text": " that walketh not"}]
    assert _line(content, book="PSA") == "001:001 Blessed is the man␤ that walketh not"


def test_line_break_markers_add_no_spaces() -> None:
    content = [
        {"paragraph": True, "text": "Yahweh God said to the serpent,", "break": True},
        {"text": "“Because you have done this,", "break": True},
        {"text": "you are cursed above all livestock,", "break": True},
    ]
    result = _line(content, chapter=3, verse=14)
    assert result == (
        "003:014 ¶ Yahweh God said to the serpent,␤“Because you have done this,"
        "␤you are cursed above all livestock,␤"
    )
    assert ", ␤" not in result
    assert "␤ “" not in result


def test_small_caps_become_uppercase_before_strongs() -> None:
    content = [
        {"text": "the "},
        {"text": "Lord", "marks": ["sc"], "strong": "H3068"},
        {"text": " God", "strong": "H430"},
    ]
    assert _line(content, chapter=2, verse=4) == "002:004 the LORD H3068 God H430"


def test_small_caps_without_codes() -> None:
    content = [{"text": "the "}, {"text": "Lord", "marks": ["sc"]}, {"text": " God made"}]
    assert _line(content, chapter=2, verse=4) == "002:004 the LORD God made"


def test_footnote_body_sits_between_text_and_strongs() -> None:
    content = [
        {"text": "God", "strong": "H430", "foot": {"content": "Hebrew: Elohim"}},
        {"text": " created"},
    ]
    assert _line(content) == "001:001 God°{Hebrew: Elohim} H430 created"


def test_variant_footnote_precedes_strongs_and_morph() -> None:
    content = [
        {"text": "Σαλμὼν", "strong": "G4533", "morph": "N-PRI"},
        {"text": " δὲ", "strong": "G1161", "morph": "CONJ"},
        {"text": " ἐγέννησεν", "strong": "G1080", "morph": "V-AAI-3S"},
        {"text": " τὸν", "strong": "G3588", "morph": "T-ASM"},
        {
            "text": " Βοὸζ",
            "strong": "G1003",
            "morph": "N-PRI",
            "foot": {"type": "var", "content": "N Βοὸζ ἐκ ⇒ Βόες ἐκ"},
        },
        {"text": " ἐκ", "strong": "G1537", "morph": "PREP"},
    ]
    result = _line(content, book="MAT", verse=5)
    assert "Βοὸζ°{N Βοὸζ ἐκ ⇒ Βόες ἐκ} G1003 (N-PRI) ἐκ G1537 (PREP)" in result


def test_each_footnote_precedes_its_own_strongs() -> None:
    content = [
        {"text": "Word1", "strong": "G1111", "foot": {"content": "Note 1"}},
        {"text": " Word2", "strong": "G2222", "foot": {"content": "Note 2"}},
    ]
    assert _line(content, book="MAT") == "001:001 Word1°{Note 1} G1111 Word2°{Note 2} G2222"


def test_footnote_body_drops_codes() -> None:
    content = [
        {
            "text": "beginning",
            "strong": "H7225",
            "foot": {"content": [{"text": "Or, first", "strong": "H7223", "morph": "8675"}]},
        }
    ]
    assert _line(content) == "001:001 beginning°{Or, first} H7225"


def test_textless_footnote_at_start_gets_trailing_space() -> None:
    content = [
        {"foot": {"type": "var", "content": "Originally verse 50:22."}},
        "et vidit Ephraim filios",
    ]
    result = _line(content, chapter=50, verse=23)
    assert result == "050:023 °{Originally verse 50:22.} et vidit Ephraim filios"
    assert "} et vidit" in result


def test_footnote_after_text_has_no_space_before_brace() -> None:
    content = [
        {
            "text": "cumque Aaron spoliasset vestibus suis induit eis Eleazarum filium eius ",
            "foot": {"type": "var", "content": "Originally verse 20:29."},
        },
        "illo mortuo in montis supercilio descendit cum Eleazaro",
    ]
    result = _line(content, book="NUM", chapter=20, verse=28)
    assert result == (
        "020:028 cumque Aaron spoliasset vestibus suis induit eis Eleazarum filium eius "
        "°{Originally verse 20:29.}illo mortuo in montis supercilio descendit cum Eleazaro"
    )
    assert "° {" not in result


def test_trailing_textless_footnote_leaves_no_trailing_space() -> None:
    content = [
        {
            "text": "διαρπάσῃ.",
            "foot": {"type": "var", "content": "B διαρπάσῃ ⇒ διαρπάσει"},
            "strong": "G1283",
            "morph": "V-AAS-3S",
        },
        {"foot": {"type": "var", "content": "N διαρπάσῃ ⇒ διαρπάσει"}},
    ]
    result = _line(content, book="MRK", chapter=3, verse=27)
    assert result == (
        "003:027 διαρπάσῃ.°{B διαρπάσῃ ⇒ διαρπάσει} G1283 (V-AAS-3S)°{N διαρπάσῃ ⇒ διαρπάσει}"
    )


def test_strongs_only_neighbours_have_one_space() -> None:
    content = [{"text": "son", "strong": "H1121"}, {"strong": "H853"}, {"strong": "H1"}]
    assert _line(content) == "001:001 son H1121 H853 H1"


def test_nested_group_annotates_whole_phrase() -> None:
    content = [
        {"content": [{"text": "son"}, " of man"], "strong": "H1121", "foot": {"content": "Or, human"}},
        {"text": " said", "strong": "H559"},
    ]
    assert _line(content) == "001:001 son of man°{Or, human} H1121 said H559"


def test_removing_footnote_spans_matches_render_without_footnotes() -> None:
    cases = [
        [{"text": "eius ", "foot": {"type": "var", "content": "note"}}, "illo mortuo"],
        [
            {"text": "Βοὸζ", "foot": {"content": "N Βοὸζ ⇒ Βόες"}, "strong": "G1003", "morph": "N-PRI"},
            {"text": " ἐκ", "strong": "G1537", "morph": "PREP"},
        ],
        [
            {"text": "God", "strong": "H430", "foot": {"content": "Hebrew: Elohim"}},
            {"text": " created", "paragraph": True, "break": True},
        ],
    ]
    bare = TEXT_POLICY.without_footnotes()
    for content in cases:
        verse = _verse(content)
        with_notes = render_text_verse(verse)
        assert "°{" in with_notes
        assert FOOTNOTE_SPAN.sub("", with_notes) == render_text_verse(verse, policy=bare)


def test_removing_textless_footnote_needs_only_space_collapse() -> None:
    verse = _verse(
        [{"foot": {"content": "Originally verse 20:30."}}, "omnis autem multitudo"],
        chapter=20,
        verse=29,
    )
    stripped = re.sub(r" {2,}", " ", FOOTNOTE_SPAN.sub("", render_text_verse(verse)))
    assert stripped == render_text_verse(verse, policy=TEXT_POLICY.without_footnotes())


def test_normalized_lines_have_no_double_or_edge_spaces() -> None:
    content = [
        " ",
        {"paragraph": True, "strong": "G1161"},
        {"text": "  In ", "strong": "G1722"},
        {"foot": {"content": " spaced  note "}},
        {"text": " those  days ", "break": True},
        " ",
    ]
    result = _line(content)
    assert "  " not in result
    body = result.split(" ", 1)[1]
    assert body == body.strip()
