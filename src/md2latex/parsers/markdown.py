#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/parsers/markdown.py
"""Markdown tokenization.

This module wraps markdown-it-py to produce the flat block/inline token
stream consumed by :class:`md2latex.renderers.latex.LatexEmitter`. The
CommonMark preset is used with the table and strikethrough extensions
enabled.

"""

from __future__ import annotations

from typing import Optional

from markdown_it import MarkdownIt
from markdown_it.token import Token

from md2latex.exceptions import InvalidOptionsError
from md2latex.options.markdown import MarkdownParserOptions


class MarkdownTokenizer:
    """Tokenize Markdown text with markdown-it-py.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Tokenizer configuration

    Examples
    --------
        >>> tokens = MarkdownTokenizer().parse("# Hello")
        >>> [token.type for token in tokens]
        ['heading_open', 'inline', 'heading_close']

    """

    def __init__(self, options: Optional[MarkdownParserOptions] = None):
        """Initialize the tokenizer with options."""
        if options is not None and not isinstance(options, MarkdownParserOptions):
            raise InvalidOptionsError("MarkdownTokenizer", MarkdownParserOptions, type(options))
        self.options = options or MarkdownParserOptions()
        self._md = MarkdownIt("commonmark", {"breaks": self.options.breaks, "html": self.options.html}).enable(
            ["table", "strikethrough"]
        )

    def parse(self, markdown: str) -> list[Token]:
        """Return the token stream for ``markdown``.

        With ``breaks`` enabled, soft line breaks inside paragraphs are
        retyped as hard breaks so every renderer sees the same line structure.
        """
        tokens = self._md.parse(markdown or "")
        if self.options.breaks:
            for token in tokens:
                for child in token.children or []:
                    if child.type == "softbreak":
                        child.type = "hardbreak"
                        child.tag = "br"
        return tokens
