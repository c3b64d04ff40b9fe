#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/renderers/table.py
"""LaTeX table layout from Markdown table rows.

This module provides the TableLayoutEngine class which turns the cell strings
of a Markdown table into a complete LaTeX table block. The engine measures
column content, picks between ``tabular``, ``tabularx`` and ``longtable``,
allocates widths to long-text columns and emits the rules of the configured
style.

"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from decimal import ROUND_DOWN, Decimal
from typing import Any, Optional, Sequence

from md2latex.constants import (
    ALIGNMENT_BOX_TYPES,
    ALIGNMENT_LETTERS,
    COLUMN_ALIGNMENTS,
    COLUMN_SPACING_FRACTION,
    LONGTABLE_ROW_THRESHOLD,
    MAX_COLUMN_FRACTION,
    MIN_COLUMN_FRACTION,
    PAGE_MARGIN_FRACTION,
    TABULARX_MAX_COLUMNS,
    ColumnAlignment,
    TableEnvironment,
)
from md2latex.exceptions import InvalidOptionsError
from md2latex.options.table import TableOptions
from md2latex.utils.escape import display_width, strip_markdown_formatting

logger = logging.getLogger(__name__)

_FRACTION_QUANTUM = Decimal("0.01")


@dataclass
class TableAnalysis:
    """Measured characteristics of one table.

    Attributes
    ----------
    num_rows : int
        Row count, header included
    num_cols : int
        Column count (widest row)
    column_max_lengths : list[int]
        Largest display width per column
    has_long_text : bool
        Whether any column reaches the wrap threshold
    long_text_columns : list[int]
        Indices of the columns reaching the wrap threshold
    alignments : list[str]
        One of left/center/right per column
    total_content_length : int
        Sum of ``column_max_lengths``

    """

    num_rows: int
    num_cols: int
    column_max_lengths: list[int]
    has_long_text: bool
    long_text_columns: list[int]
    alignments: list[ColumnAlignment]
    total_content_length: int


@dataclass
class TableProcessResult:
    """Output of :meth:`TableLayoutEngine.process_table`."""

    latex_code: str
    environment: TableEnvironment
    packages: list[str] = field(default_factory=list)
    analysis: Optional[TableAnalysis] = None


class TableLayoutEngine:
    r"""Convert Markdown table rows into a LaTeX table environment.

    Parameters
    ----------
    options : TableOptions or None, default = None
        Table style and wrap threshold

    Examples
    --------
        >>> engine = TableLayoutEngine(TableOptions(table_style="standard"))
        >>> result = engine.process_table([["Name", "Qty"], ["Apple", "3"]], ["left", "right"])
        >>> result.environment
        'tabular'
        >>> print(result.latex_code)
        \begin{tabular}{l r}
        \hline
        Name & Qty \\
        \hline
        Apple & 3 \\
        \hline
        \end{tabular}

    Notes
    -----
    Options are immutable. :meth:`update_options` swaps in a modified copy,
    and each :meth:`process_table` call works from the options it saw on
    entry, so an update racing with an in-flight call never mixes settings.

    """

    def __init__(self, options: TableOptions | None = None):
        """Initialize the engine with table options."""
        if options is not None and not isinstance(options, TableOptions):
            raise InvalidOptionsError("TableLayoutEngine", TableOptions, type(options))
        self._options = options or TableOptions()
        self._lock = threading.Lock()

    @property
    def options(self) -> TableOptions:
        """Return the current options snapshot."""
        with self._lock:
            return self._options

    def update_options(self, **changes: Any) -> TableOptions:
        """Replace the options with a copy carrying ``changes``.

        Parameters
        ----------
        **changes : Any
            TableOptions field names and their new values

        Returns
        -------
        TableOptions
            The newly installed options

        Raises
        ------
        ValidationError
            If the updated options are invalid; the previous options stay in place

        """
        with self._lock:
            self._options = self._options.create_updated(**changes)
            return self._options

    def process_table(
        self,
        rows: Sequence[Sequence[str]],
        alignments: Sequence[str],
        measure_rows: Sequence[Sequence[str]] | None = None,
    ) -> TableProcessResult:
        """Build the LaTeX code for one table.

        Parameters
        ----------
        rows : sequence of sequence of str
            Cell contents, header row first. Cells are emitted as given, so
            they must already be valid LaTeX.
        alignments : sequence of str
            Column alignments from the header; missing entries default to left
        measure_rows : sequence of sequence of str, optional
            Plain text used for width measurement instead of ``rows``. When
            omitted, ``rows`` are measured with Markdown markers stripped.

        Returns
        -------
        TableProcessResult
            LaTeX code, selected environment, required packages and analysis

        """
        options = self.options

        if not rows:
            return TableProcessResult(latex_code="", environment="tabular", packages=[])

        analysis = self.analyze_table(rows, alignments, options, measure_rows)
        environment = self.select_environment(analysis)
        column_spec = self.generate_column_spec(analysis, environment)
        content = self._generate_table_content(rows)
        latex_code = self._assemble_table(environment, column_spec, content, options)
        packages = self._required_packages(environment, options)

        logger.debug(
            "Table %dx%d -> %s (long columns: %s)",
            analysis.num_rows,
            analysis.num_cols,
            environment,
            analysis.long_text_columns,
        )

        return TableProcessResult(latex_code=latex_code, environment=environment, packages=packages, analysis=analysis)

    def analyze_table(
        self,
        rows: Sequence[Sequence[str]],
        alignments: Sequence[str],
        options: TableOptions | None = None,
        measure_rows: Sequence[Sequence[str]] | None = None,
    ) -> TableAnalysis:
        """Measure column widths and detect long-text columns."""
        options = options or self.options
        source = measure_rows if measure_rows is not None else rows

        num_rows = len(rows)
        num_cols = max((len(row) for row in rows), default=0)

        column_max_lengths = []
        for col in range(num_cols):
            widths = [
                display_width(strip_markdown_formatting(row[col])) if col < len(row) and row[col] else 0
                for row in source
            ]
            column_max_lengths.append(max(widths, default=0))

        long_text_columns = [
            idx for idx, length in enumerate(column_max_lengths) if length >= options.auto_wrap_threshold
        ]

        resolved_alignments: list[ColumnAlignment] = []
        for col in range(num_cols):
            align = alignments[col] if col < len(alignments) else "left"
            resolved_alignments.append(align if align in COLUMN_ALIGNMENTS else "left")  # type: ignore[arg-type]

        return TableAnalysis(
            num_rows=num_rows,
            num_cols=num_cols,
            column_max_lengths=column_max_lengths,
            has_long_text=bool(long_text_columns),
            long_text_columns=long_text_columns,
            alignments=resolved_alignments,
            total_content_length=sum(column_max_lengths),
        )

    @staticmethod
    def select_environment(analysis: TableAnalysis) -> TableEnvironment:
        """Pick the table environment; the first matching rule wins.

        Tables with many long-text columns fall back to ``tabular`` and may
        overflow the text width.
        """
        if analysis.num_rows > LONGTABLE_ROW_THRESHOLD:
            return "longtable"
        if not analysis.has_long_text:
            return "tabular"
        if analysis.num_cols <= TABULARX_MAX_COLUMNS:
            return "tabularx"
        return "tabular"

    def generate_column_spec(self, analysis: TableAnalysis, environment: TableEnvironment) -> str:
        """Build the column specification string for ``environment``."""
        long_columns = set(analysis.long_text_columns)
        specs: list[str] = []

        if environment == "tabularx":
            for col in range(analysis.num_cols):
                if col in long_columns:
                    specs.append("X")
                else:
                    specs.append(ALIGNMENT_LETTERS[analysis.alignments[col]])
            return " ".join(specs)

        widths = self.calculate_column_widths(analysis.column_max_lengths, analysis.long_text_columns)
        for col in range(analysis.num_cols):
            align = analysis.alignments[col]
            if col in long_columns and widths[col] > 0:
                specs.append(f"{ALIGNMENT_BOX_TYPES[align]}{{{widths[col]}\\textwidth}}")
            else:
                specs.append(ALIGNMENT_LETTERS[align])
        return " ".join(specs)

    @staticmethod
    def calculate_column_widths(column_max_lengths: Sequence[int], long_text_columns: Sequence[int]) -> list[float]:
        """Allocate fractions of the text width to long-text columns.

        The width left after the page margin and inter-column spacing is
        shared among long-text columns in proportion to their content length.
        Each share is clamped to [0.10, 0.80]. If the clamped shares overflow
        the available width, the part of each share above the 0.10 floor is
        scaled down uniformly so the total equals the available width; when
        even the floors do not fit, all shares are scaled uniformly instead.
        This differs from plain uniform rescaling, which can push a share
        below the 0.10 floor; trimming only the part above the floor keeps
        every share inside [0.10, 0.80]. Fractions are rounded down to two decimals so the total never
        exceeds the available width.

        Parameters
        ----------
        column_max_lengths : sequence of int
            Content length per column
        long_text_columns : sequence of int
            Indices of the columns that receive a width

        Returns
        -------
        list[float]
            Fraction of ``\\textwidth`` per column, 0.0 for columns without a width

        """
        num_cols = len(column_max_lengths)
        widths = [0.0] * num_cols
        if not long_text_columns:
            return widths

        available = 1.0 - PAGE_MARGIN_FRACTION - COLUMN_SPACING_FRACTION * (num_cols - 1)
        if available <= 0:
            return widths

        lengths = [column_max_lengths[idx] for idx in long_text_columns]
        total = sum(lengths)

        shares: list[float] = []
        for length in lengths:
            ratio = length / total if total > 0 else 1 / len(lengths)
            shares.append(min(max(available * ratio, MIN_COLUMN_FRACTION), MAX_COLUMN_FRACTION))

        allocated = sum(shares)
        if allocated > available:
            floor_total = MIN_COLUMN_FRACTION * len(shares)
            if floor_total <= available:
                scale = (available - floor_total) / (allocated - floor_total)
                shares = [MIN_COLUMN_FRACTION + (share - MIN_COLUMN_FRACTION) * scale for share in shares]
            else:
                scale = available / allocated
                shares = [share * scale for share in shares]

        for idx, share in zip(long_text_columns, shares):
            widths[idx] = _round_down(share)

        return widths

    @staticmethod
    def _generate_table_content(rows: Sequence[Sequence[str]]) -> list[str]:
        return [" & ".join(cell.strip() for cell in row) for row in rows]

    @staticmethod
    def _assemble_table(
        environment: TableEnvironment, column_spec: str, content: list[str], options: TableOptions
    ) -> str:
        booktabs = options.table_style == "booktabs"
        lines: list[str] = []

        if environment == "tabularx":
            lines.append(f"\\begin{{tabularx}}{{\\textwidth}}{{{column_spec}}}")
        else:
            lines.append(f"\\begin{{{environment}}}{{{column_spec}}}")

        lines.append("\\toprule" if booktabs else "\\hline")

        if content:
            lines.append(f"{content[0]} \\\\")
            lines.append("\\midrule" if booktabs else "\\hline")

        for row in content[1:]:
            lines.append(f"{row} \\\\")

        lines.append("\\bottomrule" if booktabs else "\\hline")
        lines.append(f"\\end{{{environment}}}")

        return "\n".join(lines)

    @staticmethod
    def _required_packages(environment: TableEnvironment, options: TableOptions) -> list[str]:
        packages = []
        if options.table_style == "booktabs":
            packages.append("booktabs")
        if environment in ("tabularx", "longtable"):
            packages.append(environment)
        return packages


def _round_down(value: float) -> float:
    """Truncate ``value`` to two decimal places without binary rounding drift."""
    return float(Decimal(repr(value)).quantize(_FRACTION_QUANTUM, rounding=ROUND_DOWN))
