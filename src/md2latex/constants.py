#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for md2latex.

This module centralizes the hardcoded values, layout heuristics, and default
configuration constants used across md2latex.

Constants are organized by category:
1. Type Definitions - Literal types for every enumerated option
2. Document Defaults - Document class, font, page and CJK font settings
3. Table Layout - Wrap threshold, environment thresholds and width allocation
4. Markdown Parsing - Tokenizer defaults
5. Compilation - Native engine defaults
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions - All Literal Types and Type Aliases
# =============================================================================

DocumentClass = Literal["article", "report", "book"]
FontSize = Literal["10pt", "11pt", "12pt"]
PageSize = Literal["a4paper", "letterpaper", "a5paper"]

TableStyle = Literal["booktabs", "standard"]
TableEnvironment = Literal["tabular", "tabularx", "longtable"]
ColumnAlignment = Literal["left", "center", "right"]

LatexEngine = Literal["xelatex", "pdflatex"]

DOCUMENT_CLASSES: tuple[str, ...] = ("article", "report", "book")
FONT_SIZES: tuple[str, ...] = ("10pt", "11pt", "12pt")
PAGE_SIZES: tuple[str, ...] = ("a4paper", "letterpaper", "a5paper")
TABLE_STYLES: tuple[str, ...] = ("booktabs", "standard")
COLUMN_ALIGNMENTS: tuple[str, ...] = ("left", "center", "right")
LATEX_ENGINES: tuple[str, ...] = ("xelatex", "pdflatex")

# =============================================================================
# Document Defaults
# =============================================================================

DEFAULT_DOCUMENT_CLASS: DocumentClass = "article"
DEFAULT_FONT_SIZE: FontSize = "11pt"
DEFAULT_PAGE_SIZE: PageSize = "a4paper"
DEFAULT_ENABLE_CHINESE = False
DEFAULT_ENABLE_TOC = False
DEFAULT_PAGE_MARGIN = "2.5cm"

# Export target: font name resolved by the TeX distribution
DEFAULT_CJK_FONT_NAME = "Noto Sans CJK SC"
# Sandboxed target: font file mounted in the compiler's virtual filesystem
DEFAULT_CJK_FONT_FILE = "NotoSansCJKsc-Regular.otf"
DEFAULT_CJK_FONT_PATH = "/fonts/"

# Heading level -> sectioning command, clamped to the last entry
HEADING_COMMANDS: tuple[str, ...] = ("section", "subsection", "subsubsection", "paragraph", "subparagraph")

# =============================================================================
# Table Layout
# =============================================================================

DEFAULT_TABLE_STYLE: TableStyle = "booktabs"
DEFAULT_AUTO_WRAP_THRESHOLD = 20

# More rows than this switches to a page-breaking longtable
LONGTABLE_ROW_THRESHOLD = 30
# tabularx is only chosen for tables with at most this many columns
TABULARX_MAX_COLUMNS = 5

PAGE_MARGIN_FRACTION = 0.05
COLUMN_SPACING_FRACTION = 0.02
MIN_COLUMN_FRACTION = 0.10
MAX_COLUMN_FRACTION = 0.80

ALIGNMENT_LETTERS: dict[str, str] = {"left": "l", "center": "c", "right": "r"}
# Paragraph box variant per alignment: top, middle and bottom anchored
ALIGNMENT_BOX_TYPES: dict[str, str] = {"left": "p", "center": "m", "right": "b"}

# =============================================================================
# Markdown Parsing
# =============================================================================

DEFAULT_MARKDOWN_BREAKS = True
DEFAULT_MARKDOWN_HTML = False

# =============================================================================
# Compilation
# =============================================================================

DEFAULT_LATEX_ENGINE: LatexEngine = "xelatex"
DEFAULT_COMPILE_PASSES = 2
DEFAULT_COMPILE_TIMEOUT = 60.0
DEFAULT_JOB_NAME = "document"

# =============================================================================
# CLI
# =============================================================================

ENV_VAR_PREFIX = "MD2LATEX_"
CONFIG_FILENAMES: tuple[str, ...] = (".md2latex.toml", ".md2latex.yaml", ".md2latex.yml", ".md2latex.json")

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 2
EXIT_FILE_ERROR = 3
EXIT_COMPILATION_ERROR = 4

# =============================================================================
# Security
# =============================================================================

SAFE_LANGUAGE_IDENTIFIER_PATTERN = r"^[a-zA-Z0-9_+\-]+$"
MAX_LANGUAGE_IDENTIFIER_LENGTH = 50
