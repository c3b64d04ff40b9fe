#  Copyright (c) 2025 Tom Villani, Ph.D.

# md2latex/options/table.py
"""Configuration options for the table layout engine."""

from __future__ import annotations

from dataclasses import dataclass, field

from md2latex.constants import DEFAULT_AUTO_WRAP_THRESHOLD, DEFAULT_TABLE_STYLE, TABLE_STYLES, TableStyle
from md2latex.options.base import CloneFrozenMixin, validate_choice, validate_positive


@dataclass(frozen=True)
class TableOptions(CloneFrozenMixin):
    """Configuration options for converting Markdown tables.

    Parameters
    ----------
    table_style : {"booktabs", "standard"}, default "booktabs"
        Rule style: booktabs top/mid/bottom rules or plain horizontal lines.
    auto_wrap_threshold : int, default 20
        Display width at or above which a column is treated as long text
        and given a wrapping column type.

    """

    table_style: TableStyle = field(
        default=DEFAULT_TABLE_STYLE,
        metadata={"help": "Table rule style", "choices": list(TABLE_STYLES)},
    )
    auto_wrap_threshold: int = field(
        default=DEFAULT_AUTO_WRAP_THRESHOLD,
        metadata={"help": "Display width that marks a column as long text", "type": int},
    )

    def __post_init__(self) -> None:
        """Reject unknown styles and non-positive thresholds."""
        validate_choice("table_style", self.table_style, TABLE_STYLES)
        validate_positive("auto_wrap_threshold", self.auto_wrap_threshold, integer=True)
