"""
Small, focused whitespace cleaning utilities applied after rendering.
"""

import re
from typing import Callable


_SPACE_RUN = re.compile(r" {2,}")
_SPACE_BEFORE_PUNCTUATION = re.compile(r" +([.,;:!?])")
_SPACES_AROUND_NEWLINE = re.compile(r" *\n *")


def collapse_spaces(value: str) -> str:
    """Collapse runs of ASCII spaces into one.

    Example:
        >>> collapse_spaces("In  the   beginning")
        'In the beginning'
    """

    return _SPACE_RUN.sub(" ", value)


def trim_spaces(value: str) -> str:
    """Strip leading and trailing spaces, leaving markers such as '␤' intact.

    Example:
        >>> trim_spaces(" serpent,␤ ")
        'serpent,␤'
    """

    return value.strip(" ")


def tighten_punctuation(value: str) -> str:
    """Remove spaces that precede closing punctuation.

    Example:
        >>> tighten_punctuation("earth .")
        'earth.'
    """

    return _SPACE_BEFORE_PUNCTUATION.sub(r"\1", value)


def detach_newlines(value: str) -> str:
    """Drop spaces that touch a newline."""

    return _SPACES_AROUND_NEWLINE.sub("\n", value)


def _run(value: str, cleaners: tuple[Callable[[str], str], ...]) -> str:
    result = value
    for cleaner in cleaners:
        result = cleaner(result)
    return result


def clean_text(value: str) -> str:
    """Normalize a rendered annotated-text fragment."""

    return _run(value, (collapse_spaces, trim_spaces))


def clean_markdown(value: str) -> str:
    """Normalize a rendered Markdown fragment.

    Example:
        >>> clean_markdown(" the earth .<br>  And ")
        'the earth.<br> And'
    """

    return _run(
        value,
        (collapse_spaces, tighten_punctuation, detach_newlines, trim_spaces),
    )
