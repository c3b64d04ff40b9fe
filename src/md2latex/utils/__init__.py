"""Utility helpers shared by the md2latex renderers."""

from md2latex.utils.escape import (
    display_width,
    escape_latex,
    find_math_spans,
    has_chinese_script,
    split_math_segments,
    strip_markdown_formatting,
)

__all__ = [
    "display_width",
    "escape_latex",
    "find_math_spans",
    "has_chinese_script",
    "split_math_segments",
    "strip_markdown_formatting",
]
