"""Utility functions for cli output."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/md2latex/cli/output.py
import argparse
import sys
from typing import TextIO

from md2latex.wordcount import WordCountResult


def check_rich_available() -> bool:
    """Check if Rich library is available.

    Returns
    -------
    bool
        True if Rich is available, False otherwise

    """
    try:
        import rich  # noqa: F401

        return True
    except ImportError:
        return False


def should_use_rich_output(args: argparse.Namespace, stream: TextIO | None = None) -> bool:
    """Determine if Rich output should be used based on TTY and args.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line arguments
    stream : optional, default None
        Uses sys.stdout unless otherwise specified.

    Returns
    -------
    bool
        True if Rich output should be used

    Notes
    -----
    Rich output is used when:
    - The --rich flag is set
    - AND the target stream is a TTY
    - AND Rich library is available

    """
    if not getattr(args, "rich", False):
        return False

    if not check_rich_available():
        return False

    target = stream or sys.stdout
    isatty = getattr(target, "isatty", None)
    if callable(isatty):
        try:
            return bool(isatty())
        except (OSError, ValueError):
            return False

    return False


def _stats_rows(stats: WordCountResult) -> list[tuple[str, int, int]]:
    return [
        ("Body", stats.body_words, stats.body_chars),
        ("Tables", stats.table_words, stats.table_chars),
        ("Total", stats.total_words, stats.total_chars),
    ]


def print_word_counts(stats: WordCountResult, use_rich: bool = False, stream: TextIO | None = None) -> None:
    """Print word and character counts as a plain or Rich table.

    Parameters
    ----------
    stats : WordCountResult
        Counts to display
    use_rich : bool, default False
        Render with Rich; callers decide this with :func:`should_use_rich_output`
    stream : optional, default None
        Uses sys.stdout unless otherwise specified.

    """
    target = stream or sys.stdout

    if use_rich:
        from rich.console import Console
        from rich.table import Table

        table = Table(title="Word count")
        table.add_column("Section", style="cyan")
        table.add_column("Words", justify="right")
        table.add_column("Characters", justify="right")
        for label, words, chars in _stats_rows(stats):
            table.add_row(label, str(words), str(chars), style="bold" if label == "Total" else None)
        Console(file=target).print(table)
        return

    print(f"{'Section':<8} {'Words':>8} {'Characters':>12}", file=target)
    for label, words, chars in _stats_rows(stats):
        print(f"{label:<8} {words:>8} {chars:>12}", file=target)
