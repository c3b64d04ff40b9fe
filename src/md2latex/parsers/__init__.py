"""Markdown tokenization for md2latex."""

from md2latex.parsers.markdown import MarkdownTokenizer

__all__ = ["MarkdownTokenizer"]
