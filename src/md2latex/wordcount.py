#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/wordcount.py
"""Word and character statistics for Markdown documents.

Text is collected from the markdown-it token stream, so table cells are
told apart from body text by document structure rather than by scanning
for pipe characters. Code blocks, inline code, math spans and image alt
text are not counted.

Counting rules
--------------
- Every CJK ideograph is one word.
- Every remaining run of ASCII letters and digits is one word.
- Characters are counted with all whitespace removed.

"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Sequence

from markdown_it.token import Token

from md2latex.options.markdown import MarkdownParserOptions
from md2latex.parsers.markdown import MarkdownTokenizer
from md2latex.utils.escape import CJK_PATTERN, find_math_spans

_WORD_PATTERN = re.compile(r"[A-Za-z0-9]+")
_WHITESPACE_PATTERN = re.compile(r"\s+")

_SKIPPED_INLINE_TYPES = frozenset({"code_inline", "image", "html_inline"})


@dataclass(frozen=True)
class WordCountResult:
    """Word and character counts, split into body and table text."""

    total_words: int = 0
    body_words: int = 0
    table_words: int = 0
    total_chars: int = 0
    body_chars: int = 0
    table_chars: int = 0


def count_words(text: str) -> int:
    """Count words in mixed CJK and Latin text.

    Examples
    --------
        >>> count_words("Hello 世界 2025")
        4

    """
    if not text or not text.strip():
        return 0
    ideographs = len(CJK_PATTERN.findall(text))
    return ideographs + len(_WORD_PATTERN.findall(CJK_PATTERN.sub(" ", text)))


def count_chars(text: str) -> int:
    """Count characters excluding whitespace."""
    if not text:
        return 0
    return len(_WHITESPACE_PATTERN.sub("", text))


def _strip_math(text: str) -> str:
    for span in find_math_spans(text):
        text = text.replace(span, " ", 1)
    return text


def _inline_text(token: Token) -> str:
    parts: list[str] = []
    for child in token.children or []:
        if child.type in _SKIPPED_INLINE_TYPES:
            continue
        if child.type in ("softbreak", "hardbreak"):
            parts.append(" ")
        elif child.content:
            parts.append(child.content)
    return _strip_math("".join(parts))


def collect_text(tokens: Sequence[Token]) -> tuple[str, str]:
    """Return the countable body text and table text of a token stream."""
    body: list[str] = []
    table: list[str] = []
    table_depth = 0

    for token in tokens:
        if token.type == "table_open":
            table_depth += 1
        elif token.type == "table_close":
            table_depth = max(table_depth - 1, 0)
        elif token.type == "inline":
            (table if table_depth else body).append(_inline_text(token))

    return " ".join(body), " ".join(table)


def count_markdown_words(markdown: str, parser_options: Optional[MarkdownParserOptions] = None) -> WordCountResult:
    """Count words and characters in a Markdown document.

    Parameters
    ----------
    markdown : str
        Markdown source
    parser_options : MarkdownParserOptions or None, default = None
        Tokenizer configuration

    Returns
    -------
    WordCountResult
        Counts for body text, table cells and their totals

    Examples
    --------
        >>> result = count_markdown_words("# 标题\\n\\nSome `code` text\\n\\n| A | B |\\n|---|---|\\n| one | two |")
        >>> result.body_words, result.table_words
        (4, 4)

    """
    if not markdown or not markdown.strip():
        return WordCountResult()

    body_text, table_text = collect_text(MarkdownTokenizer(parser_options).parse(markdown))

    body_words = count_words(body_text)
    table_words = count_words(table_text)
    body_chars = count_chars(body_text)
    table_chars = count_chars(table_text)

    return WordCountResult(
        total_words=body_words + table_words,
        body_words=body_words,
        table_words=table_words,
        total_chars=body_chars + table_chars,
        body_chars=body_chars,
        table_chars=table_chars,
    )
