#  Copyright (c) 2025 Tom Villani, Ph.D.

# md2latex/options/markdown.py
"""Configuration options for Markdown tokenization."""

from __future__ import annotations

from dataclasses import dataclass, field

from md2latex.constants import DEFAULT_MARKDOWN_BREAKS, DEFAULT_MARKDOWN_HTML
from md2latex.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class MarkdownParserOptions(CloneFrozenMixin):
    """Configuration options for the Markdown tokenizer.

    Parameters
    ----------
    breaks : bool, default True
        Treat single newlines inside paragraphs as hard line breaks.
    html : bool, default False
        Recognize raw HTML. HTML tokens have no LaTeX rendering and are dropped.

    """

    breaks: bool = field(
        default=DEFAULT_MARKDOWN_BREAKS,
        metadata={"help": "Convert single newlines into line breaks"},
    )
    html: bool = field(
        default=DEFAULT_MARKDOWN_HTML,
        metadata={"help": "Recognize raw HTML in the source"},
    )
