#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/utils/escape.py
"""LaTeX text escaping and width utilities.

This module provides the escaping used by every renderer, the CJK script
detection that drives font package selection, and the display width
heuristic used for table column sizing.

"""

from __future__ import annotations

import re

# LaTeX special characters that need escaping
LATEX_SPECIAL_CHARS = {
    "\\": r"\textbackslash{}",
    "&": r"\&",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "_": r"\_",
    "{": r"\{",
    "}": r"\}",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
}

# Single-pass table so the braces of \textbackslash{} are never re-escaped
_LATEX_TRANSLATION = str.maketrans(LATEX_SPECIAL_CHARS)

# Display math is tried first so "$$x$$" is never read as two empty inline spans
_MATH_SPAN_PATTERN = re.compile(r"\$\$[\s\S]+?\$\$|\$[^$]+?\$")

CJK_PATTERN = re.compile("[\u4e00-\u9fa5]")

_MARKDOWN_MARKERS = (
    (re.compile(r"\*\*"), ""),
    (re.compile(r"\*"), ""),
    (re.compile(r"~~(.+?)~~"), r"\1"),
    (re.compile(r"`(.+?)`"), r"\1"),
    (re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1"),
)


def _escape_plain(text: str) -> str:
    return text.translate(_LATEX_TRANSLATION)


def find_math_spans(text: str) -> list[str]:
    """Return the ``$...$`` and ``$$...$$`` spans in ``text``, left to right.

    Parameters
    ----------
    text : str
        Text to scan

    Returns
    -------
    list[str]
        Math spans including their delimiters

    """
    if not text:
        return []
    return [match.group(0) for match in _MATH_SPAN_PATTERN.finditer(text)]


def split_math_segments(text: str) -> list[tuple[str, bool]]:
    """Split ``text`` into ``(segment, is_math)`` pairs, left to right.

    Math segments keep their ``$`` delimiters. Display spans may cross line
    breaks. Empty plain segments are omitted.

    Examples
    --------
        >>> split_math_segments("a $x$ b")
        [('a ', False), ('$x$', True), (' b', False)]

    """
    if not text:
        return []
    segments: list[tuple[str, bool]] = []
    position = 0
    for match in _MATH_SPAN_PATTERN.finditer(text):
        if match.start() > position:
            segments.append((text[position : match.start()], False))
        segments.append((match.group(0), True))
        position = match.end()
    if position < len(text):
        segments.append((text[position:], False))
    return segments


def escape_latex(text: str, preserve_math: bool = False) -> str:
    r"""Escape special LaTeX characters in text.

    Parameters
    ----------
    text : str
        Text to escape
    preserve_math : bool, default False
        When True, inline ``$...$`` and display ``$$...$$`` spans are passed
        through verbatim while the surrounding text is escaped.

    Returns
    -------
    str
        Escaped text

    Examples
    --------
        >>> escape_latex("50% of R&D")
        '50\\% of R\\&D'
        >>> escape_latex("a_b $x^2$ c_d", preserve_math=True)
        'a\\_b $x^2$ c\\_d'

    """
    if not text:
        return ""

    if not preserve_math:
        return _escape_plain(text)

    return "".join(segment if is_math else _escape_plain(segment) for segment, is_math in split_math_segments(text))


def has_chinese_script(text: str) -> bool:
    """Return True if ``text`` contains a CJK Unified Ideograph (U+4E00 to U+9FA5)."""
    return bool(text) and CJK_PATTERN.search(text) is not None


def display_width(text: str) -> int:
    """Approximate the typeset width of ``text`` in character cells.

    CJK ideographs count as two cells and every other character as one.
    This is a heuristic for comparing column content lengths, not a font
    metrics measurement.

    Parameters
    ----------
    text : str
        Text to measure

    Returns
    -------
    int
        Approximate display width

    Examples
    --------
        >>> display_width("中a")
        3

    """
    if not text:
        return 0
    return sum(2 if CJK_PATTERN.match(char) else 1 for char in text)


def strip_markdown_formatting(text: str) -> str:
    """Remove bold, italic, strikethrough, code and link markers from Markdown text."""
    if not text:
        return ""
    result = text
    for pattern, replacement in _MARKDOWN_MARKERS:
        result = pattern.sub(replacement, result)
    return result
