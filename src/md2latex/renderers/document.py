#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/renderers/document.py
"""Complete LaTeX document assembly.

This module provides the DocumentAssembler class which wraps an emitted
LaTeX body in a compilable document. Packages are loaded only for the
features the body actually uses, as reported by its RenderResult.

Two targets are supported. The sandboxed target loads the CJK font from an
absolute path in the compiler's virtual filesystem; the export target names
a system font so the source compiles on a standard TeX distribution.

"""

from __future__ import annotations

import logging

from md2latex.exceptions import InvalidOptionsError
from md2latex.options.document import DocumentOptions
from md2latex.renderers.latex import RenderResult

logger = logging.getLogger(__name__)

HYPERREF_SETUP = (
    "\\hypersetup{",
    "    colorlinks=true,",
    "    linkcolor=blue,",
    "    urlcolor=blue,",
    "    citecolor=blue",
    "}",
)

LISTINGS_SETUP = (
    "\\lstset{",
    "    basicstyle=\\ttfamily\\small,",
    "    breaklines=true,",
    "    frame=single,",
    "    numbers=left,",
    "    numberstyle=\\tiny,",
    "    backgroundcolor=\\color{gray!10},",
    "    keywordstyle=\\color{blue},",
    "    commentstyle=\\color{green!50!black},",
    "    stringstyle=\\color{red}",
    "}",
)

TABLE_PACKAGES = ("booktabs", "tabularx", "longtable")


class DocumentAssembler:
    r"""Wrap a rendered LaTeX body in a full document.

    Examples
    --------
        >>> from md2latex.renderers.latex import RenderResult
        >>> doc = DocumentAssembler().generate(RenderResult(content="Hello"), DocumentOptions())
        >>> doc.splitlines()[0]
        '\\documentclass[11pt,a4paper]{article}'

    """

    def generate(
        self, render_result: RenderResult, options: DocumentOptions | None = None, for_export: bool = False
    ) -> str:
        """Build the complete document source.

        Parameters
        ----------
        render_result : RenderResult
            Emitted body with its packages and feature flags
        options : DocumentOptions or None, default = None
            Document class, font, paper and optional sections
        for_export : bool, default False
            Target a standard TeX distribution instead of the sandboxed compiler

        Returns
        -------
        str
            Document source, ready to compile

        """
        if options is not None and not isinstance(options, DocumentOptions):
            raise InvalidOptionsError("DocumentAssembler", DocumentOptions, type(options))
        options = options or DocumentOptions()

        sections = [
            self.generate_document_class(options),
            "",
            self.generate_packages(render_result, options, for_export),
            "",
            self.generate_document_config(options),
            "",
            "\\begin{document}",
            "",
        ]

        if options.enable_toc:
            sections.extend(["\\tableofcontents", "\\newpage", ""])

        sections.extend([render_result.content, "", "\\end{document}"])

        return "\n".join(sections)

    @staticmethod
    def generate_document_class(options: DocumentOptions) -> str:
        """Return the ``\\documentclass`` line."""
        return f"\\documentclass[{options.font_size},{options.page_size}]{{{options.document_class}}}"

    def generate_packages(self, result: RenderResult, options: DocumentOptions, for_export: bool = False) -> str:
        """Return the package import block for ``result``."""
        lines = ["\\usepackage{geometry}"]

        if options.enable_chinese or result.has_chinese:
            lines.extend(self._cjk_packages(options, for_export))

        if result.has_images:
            lines.append("\\usepackage{graphicx}")

        if "hyperref" in result.packages:
            lines.append("\\usepackage{hyperref}")
            lines.extend(HYPERREF_SETUP)

        if result.has_math:
            lines.append("\\usepackage{amsmath}")
            lines.append("\\usepackage{amssymb}")

        if result.has_tables:
            for package in TABLE_PACKAGES:
                if package in result.packages:
                    lines.append(f"\\usepackage{{{package}}}")
            lines.append("\\usepackage{array}")

        if result.has_code:
            lines.append("\\usepackage{listings}")
            lines.append("\\usepackage{xcolor}")
            lines.extend(LISTINGS_SETUP)

        if "ulem" in result.packages:
            lines.append("\\usepackage[normalem]{ulem}")

        lines.append("\\usepackage{enumitem}")
        lines.append("\\usepackage{float}")

        return "\n".join(lines)

    @staticmethod
    def _cjk_packages(options: DocumentOptions, for_export: bool) -> list[str]:
        lines = ["\\usepackage{fontspec}", "\\usepackage{xeCJK}"]
        if for_export:
            lines.append("% CJK font provided by the TeX distribution; replace it if compilation fails")
            font = options.cjk_font_name
            lines.extend(f"\\setCJK{family}font{{{font}}}" for family in ("main", "sans", "mono"))
        else:
            font = options.cjk_font_file
            path = options.cjk_font_path
            lines.extend(f"\\setCJK{family}font[Path={path}]{{{font}}}" for family in ("main", "sans", "mono"))
        logger.debug(f"CJK support enabled ({'export' if for_export else 'sandbox'} target)")
        return lines

    @staticmethod
    def generate_document_config(options: DocumentOptions) -> str:
        """Return the page geometry and paragraph settings."""
        margin = options.margin
        return "\n".join(
            [
                "% Page layout",
                "\\geometry{",
                f"    left={margin},",
                f"    right={margin},",
                f"    top={margin},",
                f"    bottom={margin}",
                "}",
                "",
                "% Paragraphs",
                "\\setlength{\\parindent}{0pt}",
                "\\setlength{\\parskip}{0.5em}",
            ]
        )
