"""Configuration options for md2latex components.

Every options class is a frozen dataclass validated in ``__post_init__``;
use ``create_updated(**changes)`` to derive a modified copy.
"""

from md2latex.options.base import CloneFrozenMixin
from md2latex.options.compile import CompileOptions
from md2latex.options.document import DocumentOptions
from md2latex.options.markdown import MarkdownParserOptions
from md2latex.options.table import TableOptions

__all__ = [
    "CloneFrozenMixin",
    "CompileOptions",
    "DocumentOptions",
    "MarkdownParserOptions",
    "TableOptions",
]
