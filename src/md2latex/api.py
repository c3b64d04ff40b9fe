#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/api.py
"""High-level conversion entry points.

These functions wire the tokenizer, the LaTeX emitter, the document
assembler and the native compiler together. Each call builds its own
pipeline objects, so concurrent calls share no mutable state.

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from md2latex.compiler import CompileResult, LatexCompiler
from md2latex.exceptions import FileError, RenderingError
from md2latex.options.compile import CompileOptions
from md2latex.options.document import DocumentOptions
from md2latex.options.markdown import MarkdownParserOptions
from md2latex.options.table import TableOptions
from md2latex.parsers.markdown import MarkdownTokenizer
from md2latex.renderers.document import DocumentAssembler
from md2latex.renderers.latex import LatexEmitter, RenderResult

logger = logging.getLogger(__name__)


def render_markdown(
    markdown: str,
    table_options: Optional[TableOptions] = None,
    parser_options: Optional[MarkdownParserOptions] = None,
) -> RenderResult:
    r"""Convert Markdown to a LaTeX body without a preamble.

    Parameters
    ----------
    markdown : str
        Markdown source
    table_options : TableOptions or None, default = None
        Table layout configuration
    parser_options : MarkdownParserOptions or None, default = None
        Tokenizer configuration

    Returns
    -------
    RenderResult
        LaTeX body with the packages and feature flags it requires

    Raises
    ------
    RenderingError
        If tokenizing or emission fails unexpectedly

    Examples
    --------
        >>> render_markdown("Some *text*").content
        'Some \\textit{text}'

    """
    tokenizer = MarkdownTokenizer(parser_options)
    emitter = LatexEmitter(table_options)

    try:
        tokens = tokenizer.parse(markdown)
    except Exception as e:
        raise RenderingError(
            f"Failed to tokenize Markdown: {e!r}", rendering_stage="tokenizing", original_error=e
        ) from e
    logger.debug(f"Tokenized {len(markdown or '')} characters into {len(tokens)} tokens")

    try:
        return emitter.render(tokens)
    except Exception as e:
        raise RenderingError(f"Failed to render LaTeX: {e!r}", rendering_stage="rendering", original_error=e) from e


def to_latex(
    markdown: str,
    document_options: Optional[DocumentOptions] = None,
    table_options: Optional[TableOptions] = None,
    for_export: bool = False,
    parser_options: Optional[MarkdownParserOptions] = None,
) -> str:
    """Convert Markdown to a complete LaTeX document.

    Parameters
    ----------
    markdown : str
        Markdown source
    document_options : DocumentOptions or None, default = None
        Document class, font, paper and section settings
    table_options : TableOptions or None, default = None
        Table layout configuration
    for_export : bool, default False
        Reference system CJK fonts instead of the sandboxed font path
    parser_options : MarkdownParserOptions or None, default = None
        Tokenizer configuration

    Returns
    -------
    str
        Complete document source

    """
    result = render_markdown(markdown, table_options=table_options, parser_options=parser_options)
    return DocumentAssembler().generate(result, document_options, for_export=for_export)


def convert_file(
    input_path: Union[str, Path],
    output_path: Union[str, Path, None] = None,
    document_options: Optional[DocumentOptions] = None,
    table_options: Optional[TableOptions] = None,
    for_export: bool = True,
    parser_options: Optional[MarkdownParserOptions] = None,
) -> str:
    """Convert a Markdown file to a LaTeX document.

    Parameters
    ----------
    input_path : str or Path
        Markdown file to read (UTF-8)
    output_path : str, Path or None, default = None
        Where to write the ``.tex`` file. Nothing is written when omitted.
    document_options, table_options, parser_options
        As for :func:`to_latex`
    for_export : bool, default True
        Files are usually compiled outside the sandbox, so system fonts are referenced

    Returns
    -------
    str
        Complete document source

    Raises
    ------
    FileError
        If the input cannot be read or the output cannot be written

    """
    source = Path(input_path)
    try:
        markdown = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileError(f"Could not read {source}: {e}", file_path=str(source), original_error=e) from e

    latex = to_latex(
        markdown,
        document_options=document_options,
        table_options=table_options,
        for_export=for_export,
        parser_options=parser_options,
    )

    if output_path is not None:
        target = Path(output_path)
        try:
            target.write_text(latex, encoding="utf-8")
        except OSError as e:
            raise FileError(f"Could not write {target}: {e}", file_path=str(target), original_error=e) from e
        logger.info(f"Wrote {target}")

    return latex


def compile_latex(latex: str, options: Optional[CompileOptions] = None) -> CompileResult:
    """Compile a LaTeX document with the native engine.

    Failures, including a missing engine, are reported in the returned
    CompileResult rather than raised.
    """
    return LatexCompiler(options).compile(latex)
