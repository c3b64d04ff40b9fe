"""LaTeX renderers: body emission, table layout and document assembly."""

from md2latex.renderers.document import DocumentAssembler
from md2latex.renderers.latex import LatexEmitter, RenderContext, RenderResult
from md2latex.renderers.table import TableAnalysis, TableLayoutEngine, TableProcessResult

__all__ = [
    "DocumentAssembler",
    "LatexEmitter",
    "RenderContext",
    "RenderResult",
    "TableAnalysis",
    "TableLayoutEngine",
    "TableProcessResult",
]
