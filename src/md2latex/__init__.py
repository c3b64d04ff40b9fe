"""md2latex - Markdown to LaTeX conversion.

md2latex turns Markdown into compilable LaTeX documents. The Markdown is
tokenized with markdown-it-py, walked into a LaTeX body, and wrapped in a
preamble that loads only the packages the body needs.

Key Features
------------
- Headings, lists, quotes, code listings, links, images and strikethrough
- Automatic table layout: tabular, tabularx or longtable with proportional
  column widths for long text
- CJK support through fontspec/xeCJK, detected from the content
- Inline and display math passed through unescaped
- Native compilation with xelatex or pdflatex
- Word and character statistics for mixed CJK and Latin text

Examples
--------
Generate a document:

    >>> from md2latex import to_latex
    >>> latex = to_latex("# Report\\n\\nResults are **final**.")
    >>> latex.splitlines()[0]
    '\\\\documentclass[11pt,a4paper]{article}'

Render only the body:

    >>> from md2latex import render_markdown
    >>> render_markdown("# Report").content
    '\\\\section{Report}'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from md2latex.api import compile_latex, convert_file, render_markdown, to_latex
from md2latex.compiler import CompileResult, LatexCompiler
from md2latex.exceptions import (
    CompilationError,
    DependencyError,
    FileError,
    InvalidOptionsError,
    Md2LatexError,
    RenderingError,
    ValidationError,
)
from md2latex.options import CompileOptions, DocumentOptions, MarkdownParserOptions, TableOptions
from md2latex.renderers import DocumentAssembler, LatexEmitter, RenderResult, TableLayoutEngine
from md2latex.utils.escape import display_width, escape_latex
from md2latex.wordcount import WordCountResult, count_markdown_words

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CompilationError",
    "CompileOptions",
    "CompileResult",
    "DependencyError",
    "DocumentAssembler",
    "DocumentOptions",
    "FileError",
    "InvalidOptionsError",
    "LatexCompiler",
    "LatexEmitter",
    "MarkdownParserOptions",
    "Md2LatexError",
    "RenderResult",
    "RenderingError",
    "TableLayoutEngine",
    "TableOptions",
    "ValidationError",
    "WordCountResult",
    "compile_latex",
    "convert_file",
    "count_markdown_words",
    "display_width",
    "escape_latex",
    "render_markdown",
    "to_latex",
]
