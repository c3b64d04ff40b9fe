#  Copyright (c) 2025 Tom Villani, Ph.D.

# md2latex/options/document.py
"""Configuration options for assembling complete LaTeX documents.

This module defines the options consumed by the DocumentAssembler when it
wraps emitted content in a compilable document.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from md2latex.constants import (
    DEFAULT_CJK_FONT_FILE,
    DEFAULT_CJK_FONT_NAME,
    DEFAULT_CJK_FONT_PATH,
    DEFAULT_DOCUMENT_CLASS,
    DEFAULT_ENABLE_CHINESE,
    DEFAULT_ENABLE_TOC,
    DEFAULT_FONT_SIZE,
    DEFAULT_PAGE_MARGIN,
    DEFAULT_PAGE_SIZE,
    DOCUMENT_CLASSES,
    FONT_SIZES,
    PAGE_SIZES,
    DocumentClass,
    FontSize,
    PageSize,
)
from md2latex.exceptions import ValidationError
from md2latex.options.base import CloneFrozenMixin, validate_choice


@dataclass(frozen=True)
class DocumentOptions(CloneFrozenMixin):
    r"""Configuration options for the generated LaTeX document.

    Parameters
    ----------
    document_class : {"article", "report", "book"}, default "article"
        LaTeX document class.
    font_size : {"10pt", "11pt", "12pt"}, default "11pt"
        Base font size passed as a class option.
    page_size : {"a4paper", "letterpaper", "a5paper"}, default "a4paper"
        Paper size passed as a class option.
    enable_chinese : bool, default False
        Always load fontspec/xeCJK, even when no CJK text is detected.
    enable_toc : bool, default False
        Emit \tableofcontents and a page break before the content.
    margin : str, default "2.5cm"
        Page margin applied on all four sides through geometry.
    cjk_font_name : str, default "Noto Sans CJK SC"
        System font name used when generating for export.
    cjk_font_file : str, default "NotoSansCJKsc-Regular.otf"
        Font file loaded by the sandboxed compiler.
    cjk_font_path : str, default "/fonts/"
        Directory of ``cjk_font_file`` in the sandbox's virtual filesystem.

    """

    document_class: DocumentClass = field(
        default=DEFAULT_DOCUMENT_CLASS,
        metadata={"help": "LaTeX document class", "choices": list(DOCUMENT_CLASSES)},
    )
    font_size: FontSize = field(
        default=DEFAULT_FONT_SIZE,
        metadata={"help": "Base font size", "choices": list(FONT_SIZES)},
    )
    page_size: PageSize = field(
        default=DEFAULT_PAGE_SIZE,
        metadata={"help": "Paper size", "choices": list(PAGE_SIZES)},
    )
    enable_chinese: bool = field(
        default=DEFAULT_ENABLE_CHINESE,
        metadata={"help": "Always include CJK font support"},
    )
    enable_toc: bool = field(
        default=DEFAULT_ENABLE_TOC,
        metadata={"help": "Insert a table of contents before the content"},
    )
    margin: str = field(
        default=DEFAULT_PAGE_MARGIN,
        metadata={"help": "Page margin on every side (any TeX length)"},
    )
    cjk_font_name: str = field(
        default=DEFAULT_CJK_FONT_NAME,
        metadata={"help": "CJK system font name for exported documents"},
    )
    cjk_font_file: str = field(
        default=DEFAULT_CJK_FONT_FILE,
        metadata={"help": "CJK font file for the sandboxed compiler"},
    )
    cjk_font_path: str = field(
        default=DEFAULT_CJK_FONT_PATH,
        metadata={"help": "Font directory in the sandboxed compiler's filesystem"},
    )

    def __post_init__(self) -> None:
        """Reject unrecognized document settings.

        Raises
        ------
        ValidationError
            If any enumerated field holds an unknown value or a string field is empty.

        """
        validate_choice("document_class", self.document_class, DOCUMENT_CLASSES)
        validate_choice("font_size", self.font_size, FONT_SIZES)
        validate_choice("page_size", self.page_size, PAGE_SIZES)

        for name in ("margin", "cjk_font_name", "cjk_font_file", "cjk_font_path"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ValidationError(f"{name} must be a non-empty string", parameter_name=name, parameter_value=value)
