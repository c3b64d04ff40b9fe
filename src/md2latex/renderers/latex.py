#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/renderers/latex.py
"""LaTeX emission from a Markdown token stream.

This module provides the LatexEmitter class which walks the flat block/inline
token stream produced by markdown-it-py and emits LaTeX fragments. Table
blocks are delegated to the TableLayoutEngine. While walking, the emitter
records which LaTeX packages and content features the document needs so the
DocumentAssembler can build a matching preamble.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from markdown_it.token import Token

from md2latex.constants import HEADING_COMMANDS, ColumnAlignment
from md2latex.options.table import TableOptions
from md2latex.renderers.table import TableLayoutEngine
from md2latex.utils.escape import escape_latex, find_math_spans, has_chinese_script, split_math_segments
from md2latex.utils.security import escape_url, sanitize_language_identifier

logger = logging.getLogger(__name__)

# Inline open marker -> matching close marker
_INLINE_PAIRS = {
    "strong_open": "strong_close",
    "em_open": "em_close",
    "s_open": "s_close",
    "link_open": "link_close",
}
_INLINE_CLOSERS = {close: open_ for open_, close in _INLINE_PAIRS.items()}
# Adjacent children of these types are rendered together so math can span line breaks
_TEXT_RUN_TYPES = frozenset({"text", "softbreak", "hardbreak"})


@dataclass
class RenderResult:
    """LaTeX body plus the packages and features it depends on.

    Attributes
    ----------
    content : str
        Emitted LaTeX body
    packages : set[str]
        Package names required by the emitted markup
    has_chinese : bool
        CJK text is present
    has_images : bool
        At least one image was emitted
    has_tables : bool
        At least one table was emitted
    has_code : bool
        At least one code block was emitted
    has_math : bool
        Inline or display math spans are present

    """

    content: str
    packages: set[str] = field(default_factory=set)
    has_chinese: bool = False
    has_images: bool = False
    has_tables: bool = False
    has_code: bool = False
    has_math: bool = False


@dataclass
class RenderContext:
    """Accumulator for one render call, threaded through every handler."""

    packages: set[str] = field(default_factory=set)
    has_chinese: bool = False
    has_images: bool = False
    has_tables: bool = False
    has_code: bool = False
    has_math: bool = False

    def note_text(self, text: str) -> None:
        """Update the script and math flags from a run of source text."""
        if not text:
            return
        if not self.has_chinese and has_chinese_script(text):
            self.has_chinese = True
        if not self.has_math and find_math_spans(text):
            self.has_math = True

    def to_result(self, content: str) -> RenderResult:
        """Freeze the accumulated state into a RenderResult."""
        return RenderResult(
            content=content,
            packages=set(self.packages),
            has_chinese=self.has_chinese,
            has_images=self.has_images,
            has_tables=self.has_tables,
            has_code=self.has_code,
            has_math=self.has_math,
        )


@dataclass
class TableData:
    """Cells and alignments collected from a table's tokens."""

    rows: list[list[str]] = field(default_factory=list)
    plain_rows: list[list[str]] = field(default_factory=list)
    alignments: list[ColumnAlignment] = field(default_factory=list)


BlockHandler = Callable[[Sequence[Token], int, RenderContext], Tuple[str, int]]


class LatexEmitter:
    r"""Render a markdown-it token stream to a LaTeX body.

    Each block handler receives the token list, the index of its opening
    token and the per-call RenderContext, and returns the rendered fragment
    together with the index of the first token after the construct.

    Parameters
    ----------
    table_options : TableOptions or None, default = None
        Options for the table layout engine

    Examples
    --------
        >>> from md2latex.parsers.markdown import MarkdownTokenizer
        >>> tokens = MarkdownTokenizer().parse("# Title\n\nSome **bold** text")
        >>> result = LatexEmitter().render(tokens)
        >>> print(result.content)
        \section{Title}
        <BLANKLINE>
        Some \textbf{bold} text

    """

    def __init__(self, table_options: TableOptions | None = None):
        """Initialize the emitter and its table layout engine."""
        self.table_engine = TableLayoutEngine(table_options)
        self._block_handlers: Dict[str, BlockHandler] = {
            "heading_open": self._render_heading,
            "paragraph_open": self._render_paragraph,
            "bullet_list_open": self._render_list,
            "ordered_list_open": self._render_list,
            "blockquote_open": self._render_blockquote,
            "fence": self._render_code_block,
            "code_block": self._render_code_block,
            "hr": self._render_rule,
            "table_open": self._render_table,
        }

    def update_table_options(self, **changes: Any) -> TableOptions:
        """Change table options for subsequent renders."""
        return self.table_engine.update_options(**changes)

    def render(self, tokens: Sequence[Token]) -> RenderResult:
        """Render a token stream.

        Parameters
        ----------
        tokens : sequence of Token
            Block-level token stream, as returned by ``MarkdownIt.parse``

        Returns
        -------
        RenderResult
            LaTeX body, required packages and feature flags of this document only

        """
        context = RenderContext()
        fragments = self._render_blocks(tokens, 0, len(tokens), context)
        return context.to_result("\n\n".join(fragments))

    def _render_blocks(self, tokens: Sequence[Token], start: int, stop: int, context: RenderContext) -> list[str]:
        fragments: list[str] = []
        index = start
        while index < stop:
            fragment, index = self._render_block(tokens, index, context)
            if fragment:
                fragments.append(fragment)
        return fragments

    def _render_block(self, tokens: Sequence[Token], index: int, context: RenderContext) -> tuple[str, int]:
        token = tokens[index]
        handler = self._block_handlers.get(token.type)
        if handler is None:
            # Unknown containers are stepped into so their children still render
            if not token.type.endswith("_close"):
                logger.debug(f"No LaTeX rendering for token type {token.type!r}")
            return "", index + 1
        return handler(tokens, index, context)

    @staticmethod
    def find_close(tokens: Sequence[Token], index: int) -> int:
        """Return the index of the token closing ``tokens[index]``.

        Nested constructs of the same type are balanced by depth counting.
        Returns ``len(tokens)`` when the stream ends before the close.
        """
        open_type = tokens[index].type
        close_type = open_type[: -len("_open")] + "_close"
        depth = 0
        for position in range(index, len(tokens)):
            token_type = tokens[position].type
            if token_type == open_type:
                depth += 1
            elif token_type == close_type:
                depth -= 1
                if depth == 0:
                    return position
        return len(tokens)

    @staticmethod
    def _inline_child(tokens: Sequence[Token], index: int) -> Optional[Token]:
        following = index + 1
        if following < len(tokens) and tokens[following].type == "inline":
            return tokens[following]
        return None

    def _render_heading(self, tokens: Sequence[Token], index: int, context: RenderContext) -> tuple[str, int]:
        level = _heading_level(tokens[index])
        command = HEADING_COMMANDS[min(max(level, 1), len(HEADING_COMMANDS)) - 1]
        content = self.render_inline(self._inline_child(tokens, index), context)
        return f"\\{command}{{{content}}}", self.find_close(tokens, index) + 1

    def _render_paragraph(self, tokens: Sequence[Token], index: int, context: RenderContext) -> tuple[str, int]:
        content = self.render_inline(self._inline_child(tokens, index), context)
        return content, self.find_close(tokens, index) + 1

    def _render_list(self, tokens: Sequence[Token], index: int, context: RenderContext) -> tuple[str, int]:
        environment = "enumerate" if tokens[index].type == "ordered_list_open" else "itemize"
        close = self.find_close(tokens, index)

        lines = [f"\\begin{{{environment}}}"]
        position = index + 1
        while position < close:
            if tokens[position].type == "list_item_open":
                item_close = self.find_close(tokens, position)
                blocks = self._render_blocks(tokens, position + 1, min(item_close, close), context)
                body = "\n".join(blocks)
                lines.append(f"\\item {body}" if body else "\\item")
                position = item_close + 1
            else:
                position += 1
        lines.append(f"\\end{{{environment}}}")

        return "\n".join(lines), close + 1

    def _render_blockquote(self, tokens: Sequence[Token], index: int, context: RenderContext) -> tuple[str, int]:
        close = self.find_close(tokens, index)
        blocks = self._render_blocks(tokens, index + 1, close, context)
        lines = ["\\begin{quote}", *(["\n\n".join(blocks)] if blocks else []), "\\end{quote}"]
        return "\n".join(lines), close + 1

    def _render_code_block(self, tokens: Sequence[Token], index: int, context: RenderContext) -> tuple[str, int]:
        token = tokens[index]
        context.has_code = True
        context.packages.update(("listings", "xcolor"))

        code = token.content or ""
        if code and not code.endswith("\n"):
            code += "\n"
        if not context.has_chinese and has_chinese_script(code):
            context.has_chinese = True

        info = (token.info or "").strip()
        language = sanitize_language_identifier(info.split()[0]) if info else ""
        if language:
            return f"\\begin{{lstlisting}}[language={language}]\n{code}\\end{{lstlisting}}", index + 1
        return f"\\begin{{lstlisting}}\n{code}\\end{{lstlisting}}", index + 1

    @staticmethod
    def _render_rule(tokens: Sequence[Token], index: int, context: RenderContext) -> tuple[str, int]:
        return "\\hrule", index + 1

    def _render_table(self, tokens: Sequence[Token], index: int, context: RenderContext) -> tuple[str, int]:
        context.has_tables = True
        close = self.find_close(tokens, index)
        data = self.extract_table_data(tokens, index, context)

        result = self.table_engine.process_table(data.rows, data.alignments, measure_rows=data.plain_rows)
        context.packages.update(result.packages)

        return result.latex_code, close + 1

    def extract_table_data(self, tokens: Sequence[Token], index: int, context: RenderContext) -> TableData:
        """Collect rendered cells, plain cell text and header alignments of a table.

        Parameters
        ----------
        tokens : sequence of Token
            Token stream
        index : int
            Index of the ``table_open`` token
        context : RenderContext
            Accumulator for the current render

        Returns
        -------
        TableData
            Rows of LaTeX cells, rows of plain text for measurement and alignments

        """
        data = TableData()
        close = self.find_close(tokens, index)
        in_header = False
        row: list[str] = []
        plain_row: list[str] = []

        position = index + 1
        while position < close:
            token = tokens[position]
            token_type = token.type

            if token_type == "thead_open":
                in_header = True
            elif token_type in ("thead_close", "tbody_open"):
                in_header = False
            elif token_type == "tr_open":
                row, plain_row = [], []
            elif token_type == "tr_close":
                if row:
                    data.rows.append(row)
                    data.plain_rows.append(plain_row)
                row, plain_row = [], []
            elif token_type in ("th_open", "td_open"):
                if in_header and token_type == "th_open":
                    data.alignments.append(_cell_alignment(token))
                inline = self._inline_child(tokens, position)
                row.append(self.render_inline(inline, context))
                plain_row.append(_plain_text(inline))

            position += 1

        return data

    def render_inline(self, token: Optional[Token], context: RenderContext) -> str:
        r"""Render the children of an inline container token.

        Bold, italic, strikethrough and link markers wrap exactly the
        fragments between their open and close markers, so repeated text
        in one paragraph is never decorated twice or at the wrong place.

        Parameters
        ----------
        token : Token or None
            Inline container token (``type == "inline"``)
        context : RenderContext
            Accumulator for the current render

        Returns
        -------
        str
            LaTeX for the inline run

        """
        if token is None or not token.children:
            return ""

        # Each frame is (open marker, rendered parts); the root frame has no marker
        stack: list[tuple[Optional[Token], list[str]]] = [(None, [])]
        run: list[Token] = []

        for child in token.children:
            child_type = child.type
            if child_type in _TEXT_RUN_TYPES:
                run.append(child)
                continue
            if run:
                stack[-1][1].append(self._render_text_run(run, context))
                run = []

            if child_type in _INLINE_PAIRS:
                stack.append((child, []))
            elif child_type in _INLINE_CLOSERS:
                opener = stack[-1][0]
                if opener is not None and opener.type == _INLINE_CLOSERS[child_type]:
                    _, parts = stack.pop()
                    stack[-1][1].append(self._decorate(opener, "".join(parts), context))
                else:
                    logger.debug(f"Ignoring unmatched inline marker {child_type!r}")
            else:
                stack[-1][1].append(self._render_inline_leaf(child, context))

        if run:
            stack[-1][1].append(self._render_text_run(run, context))

        # Markers left open by a malformed stream contribute their text undecorated
        while len(stack) > 1:
            _, parts = stack.pop()
            stack[-1][1].append("".join(parts))

        return "".join(stack[0][1])

    @staticmethod
    def _render_text_run(run: Sequence[Token], context: RenderContext) -> str:
        """Render adjacent text and line break children as one unit.

        Math spans are located on the joined text, so ``$$`` on its own line
        keeps the formula verbatim. Breaks inside math stay plain newlines;
        breaks outside math render as usual.
        """
        source = "".join(child.content if child.type == "text" else "\n" for child in run)
        breaks = iter(["\\\\\n" if child.type == "hardbreak" else "\n" for child in run if child.type != "text"])
        context.note_text(source)

        parts: list[str] = []
        for segment, is_math in split_math_segments(source):
            lines = segment.split("\n")
            if is_math:
                # Consume the breaks the span swallowed
                for _ in lines[1:]:
                    next(breaks, None)
                parts.append(segment)
                continue
            parts.append(escape_latex(lines[0]))
            for line in lines[1:]:
                parts.append(next(breaks, "\n"))
                parts.append(escape_latex(line))
        return "".join(parts)

    def _render_inline_leaf(self, child: Token, context: RenderContext) -> str:
        child_type = child.type

        if child_type == "code_inline":
            if not context.has_chinese and has_chinese_script(child.content):
                context.has_chinese = True
            return f"\\texttt{{{escape_latex(child.content)}}}"
        if child_type == "image":
            context.has_images = True
            context.packages.add("graphicx")
            return f"\\includegraphics{{{child.attrGet('src') or ''}}}"
        if child_type in ("html_inline", "html_block"):
            logger.debug(f"Dropping raw HTML: {child.content[:50]!r}")
            return ""

        if child.content:
            context.note_text(child.content)
            return escape_latex(child.content, preserve_math=True)
        return ""

    @staticmethod
    def _decorate(opener: Token, content: str, context: RenderContext) -> str:
        opener_type = opener.type
        if opener_type == "strong_open":
            return f"\\textbf{{{content}}}"
        if opener_type == "em_open":
            return f"\\textit{{{content}}}"
        if opener_type == "s_open":
            context.packages.add("ulem")
            return f"\\sout{{{content}}}"
        context.packages.add("hyperref")
        href = escape_url(str(opener.attrGet("href") or ""))
        return f"\\href{{{href}}}{{{content}}}"


def _heading_level(token: Token) -> int:
    tag = token.tag or ""
    if len(tag) > 1 and tag[0] in "hH" and tag[1:].isdigit():
        return int(tag[1:])
    return 1


def _cell_alignment(token: Token) -> ColumnAlignment:
    style = str(token.attrGet("style") or "").replace(" ", "").lower()
    if "text-align:center" in style:
        return "center"
    if "text-align:right" in style:
        return "right"
    return "left"


def _plain_text(token: Optional[Token]) -> str:
    """Visible text of an inline container, without markup."""
    if token is None or not token.children:
        return ""
    return "".join(child.content for child in token.children if child.type in ("text", "code_inline"))
