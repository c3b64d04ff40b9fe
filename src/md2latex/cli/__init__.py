"""Command-line interface for md2latex.

This module provides the ``md2latex`` command which converts a Markdown
file (or standard input) into a LaTeX document, optionally compiles it to
PDF with a native engine, and can report word counts.

Configuration Sources
---------------------
Option defaults are resolved in this order, later sources winning:

1. Built-in defaults
2. Configuration file (``--config``, ``MD2LATEX_CONFIG`` or discovered
   ``.md2latex.toml`` / ``.md2latex.yaml`` / ``.md2latex.json`` /
   ``[tool.md2latex]`` in ``pyproject.toml``)
3. ``MD2LATEX_<OPTION_NAME>`` environment variables
4. Command-line arguments

Examples
--------
Convert a file::

    $ md2latex notes.md -o notes.tex

Emit the body only, for inclusion in another document::

    $ md2latex notes.md --body-only

Compile straight to PDF::

    $ md2latex notes.md --pdf notes.pdf --toc

Use environment variables for defaults::

    $ export MD2LATEX_TABLE_STYLE=standard
    $ md2latex notes.md

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from md2latex import __version__
from md2latex.api import render_markdown
from md2latex.cli.config import (
    apply_config_to_parser,
    apply_env_vars_to_parser,
    discover_config_file,
    load_config_file,
)
from md2latex.cli.output import print_word_counts, should_use_rich_output
from md2latex.compiler import LatexCompiler
from md2latex.constants import (
    DEFAULT_AUTO_WRAP_THRESHOLD,
    DEFAULT_COMPILE_PASSES,
    DEFAULT_COMPILE_TIMEOUT,
    DEFAULT_DOCUMENT_CLASS,
    DEFAULT_FONT_SIZE,
    DEFAULT_LATEX_ENGINE,
    DEFAULT_PAGE_MARGIN,
    DEFAULT_PAGE_SIZE,
    DEFAULT_TABLE_STYLE,
    DOCUMENT_CLASSES,
    ENV_VAR_PREFIX,
    EXIT_COMPILATION_ERROR,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    FONT_SIZES,
    LATEX_ENGINES,
    PAGE_SIZES,
    TABLE_STYLES,
)
from md2latex.exceptions import (
    CompilationError,
    DependencyError,
    FileError,
    Md2LatexError,
    ValidationError,
)
from md2latex.logging_utils import configure_logging
from md2latex.options import CompileOptions, DocumentOptions, MarkdownParserOptions, TableOptions
from md2latex.renderers.document import DocumentAssembler
from md2latex.wordcount import count_markdown_words

logger = logging.getLogger(__name__)

__all__ = ["main", "create_parser"]


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser with built-in defaults."""
    parser = argparse.ArgumentParser(
        prog="md2latex",
        description="Convert Markdown to a compilable LaTeX document.",
        epilog=f"Every option can also be set with an {ENV_VAR_PREFIX}<OPTION_NAME> environment variable.",
    )
    parser.add_argument("input", help="Markdown file to convert, or '-' for standard input")
    parser.add_argument("-o", "--output", help="Write LaTeX to this file instead of standard output")
    parser.add_argument("--config", help="Configuration file (TOML, YAML or JSON)")
    parser.add_argument("--no-config", action="store_true", help="Ignore configuration files")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    document = parser.add_argument_group("document options")
    document.add_argument("--document-class", choices=DOCUMENT_CLASSES, default=DEFAULT_DOCUMENT_CLASS)
    document.add_argument("--font-size", choices=FONT_SIZES, default=DEFAULT_FONT_SIZE)
    document.add_argument("--page-size", choices=PAGE_SIZES, default=DEFAULT_PAGE_SIZE)
    document.add_argument("--margin", default=DEFAULT_PAGE_MARGIN, help="Page margin on every side")
    document.add_argument("--chinese", action="store_true", help="Always include CJK font support")
    document.add_argument("--toc", action="store_true", help="Insert a table of contents")
    document.add_argument(
        "--export",
        action="store_true",
        help="Reference system CJK fonts instead of the sandboxed font path",
    )
    document.add_argument("--body-only", action="store_true", help="Emit the LaTeX body without a preamble")

    table = parser.add_argument_group("table options")
    table.add_argument("--table-style", choices=TABLE_STYLES, default=DEFAULT_TABLE_STYLE)
    table.add_argument(
        "--wrap-threshold",
        type=int,
        default=DEFAULT_AUTO_WRAP_THRESHOLD,
        help="Display width at which a table column wraps",
    )

    markdown = parser.add_argument_group("markdown options")
    markdown.add_argument(
        "--no-breaks",
        dest="breaks",
        action="store_false",
        help="Treat single newlines as spaces instead of line breaks",
    )

    compile_group = parser.add_argument_group("compilation")
    compile_group.add_argument("--pdf", help="Compile the document and write the PDF here")
    compile_group.add_argument("--engine", choices=LATEX_ENGINES, default=DEFAULT_LATEX_ENGINE)
    compile_group.add_argument("--passes", type=int, default=DEFAULT_COMPILE_PASSES)
    compile_group.add_argument("--compile-timeout", type=float, default=DEFAULT_COMPILE_TIMEOUT)

    reporting = parser.add_argument_group("reporting")
    reporting.add_argument("--stats", action="store_true", help="Print word and character counts")
    reporting.add_argument("--rich", action="store_true", help="Use Rich formatting for terminal output")
    reporting.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )
    reporting.add_argument("--log-file", help="Also write log messages to this file")
    reporting.add_argument("-v", "--verbose", action="store_true", help="Shortcut for --log-level DEBUG")
    reporting.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")

    return parser


def _pre_parse_config(args: list[str] | None) -> argparse.Namespace:
    """Read only the config-selection flags so defaults can be loaded before the full parse."""
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--config")
    pre.add_argument("--no-config", action="store_true")
    known, _ = pre.parse_known_args(args)
    return known


def _resolve_config_path(pre_args: argparse.Namespace) -> Optional[Path]:
    if pre_args.no_config:
        return None
    explicit = pre_args.config or os.environ.get(f"{ENV_VAR_PREFIX}CONFIG")
    if explicit:
        return Path(explicit)
    return discover_config_file()


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments

    """
    # --trace takes highest precedence, then --verbose, then --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level == "WARNING":
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def build_options(
    parsed_args: argparse.Namespace,
) -> tuple[DocumentOptions, TableOptions, MarkdownParserOptions, CompileOptions]:
    """Create validated options objects from parsed arguments.

    Raises
    ------
    ValidationError
        If any option value is rejected

    """
    document_options = DocumentOptions(
        document_class=parsed_args.document_class,
        font_size=parsed_args.font_size,
        page_size=parsed_args.page_size,
        enable_chinese=parsed_args.chinese,
        enable_toc=parsed_args.toc,
        margin=parsed_args.margin,
    )
    table_options = TableOptions(
        table_style=parsed_args.table_style,
        auto_wrap_threshold=parsed_args.wrap_threshold,
    )
    parser_options = MarkdownParserOptions(breaks=parsed_args.breaks)
    compile_options = CompileOptions(
        engine=parsed_args.engine,
        passes=parsed_args.passes,
        timeout=parsed_args.compile_timeout,
    )
    return document_options, table_options, parser_options, compile_options


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileError(f"Could not read {path}: {e}", file_path=str(path), original_error=e) from e


def _write_output(target: str, data: str | bytes) -> None:
    path = Path(target)
    try:
        if isinstance(data, bytes):
            path.write_bytes(data)
        else:
            path.write_text(data, encoding="utf-8")
    except OSError as e:
        raise FileError(f"Could not write {path}: {e}", file_path=str(path), original_error=e) from e
    logger.info(f"Wrote {path}")


def convert(parsed_args: argparse.Namespace) -> int:
    """Run the conversion described by ``parsed_args`` and return an exit code."""
    if parsed_args.pdf and parsed_args.body_only:
        raise ValidationError("--pdf needs a complete document and cannot be combined with --body-only")

    document_options, table_options, parser_options, compile_options = build_options(parsed_args)

    markdown = _read_input(parsed_args.input)
    result = render_markdown(markdown, table_options=table_options, parser_options=parser_options)

    if parsed_args.body_only:
        latex = result.content
    else:
        latex = DocumentAssembler().generate(result, document_options, for_export=parsed_args.export)

    latex_to_stdout = not parsed_args.output and not parsed_args.pdf
    if parsed_args.output:
        _write_output(parsed_args.output, latex)
    elif latex_to_stdout:
        sys.stdout.write(latex)
        if not latex.endswith("\n"):
            sys.stdout.write("\n")

    if parsed_args.pdf:
        pdf = LatexCompiler(compile_options).compile_or_raise(latex)
        _write_output(parsed_args.pdf, pdf)

    if parsed_args.stats:
        stream = sys.stderr if latex_to_stdout else sys.stdout
        use_rich = should_use_rich_output(parsed_args, stream=stream)
        print_word_counts(count_markdown_words(markdown, parser_options), use_rich=use_rich, stream=stream)

    return EXIT_SUCCESS


def main(args: list[str] | None = None) -> int:
    """Execute the md2latex command line and return its exit code."""
    parser = create_parser()

    config_path = _resolve_config_path(_pre_parse_config(args))
    if config_path is not None:
        try:
            apply_config_to_parser(parser, load_config_file(config_path), str(config_path))
        except argparse.ArgumentTypeError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_VALIDATION_ERROR

    apply_env_vars_to_parser(parser)
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)
    if config_path is not None:
        logger.debug(f"Loaded configuration from {config_path}")

    try:
        return convert(parsed_args)
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except FileError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR
    except (CompilationError, DependencyError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_COMPILATION_ERROR
    except Md2LatexError as e:
        logger.debug("Conversion failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
