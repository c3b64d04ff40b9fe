"""Unit tests for complete document assembly."""

import pytest

from md2latex.exceptions import InvalidOptionsError
from md2latex.options import DocumentOptions, TableOptions
from md2latex.renderers.document import DocumentAssembler
from md2latex.renderers.latex import RenderResult


@pytest.fixture
def assembler():
    """Provide a document assembler."""
    return DocumentAssembler()


def _lines(document: str) -> list[str]:
    return document.splitlines()


@pytest.mark.unit
class TestDocumentStructure:
    """Test the fixed document skeleton."""

    def test_minimal_document(self, assembler):
        """Test the order of the mandatory sections."""
        doc = assembler.generate(RenderResult(content="Hello"), DocumentOptions())
        lines = _lines(doc)

        assert lines[0] == r"\documentclass[11pt,a4paper]{article}"
        assert lines.index(r"\begin{document}") < lines.index("Hello") < lines.index(r"\end{document}")
        assert lines[-1] == r"\end{document}"
        assert r"\usepackage{geometry}" in lines
        assert r"\setlength{\parindent}{0pt}" in lines
        assert r"\setlength{\parskip}{0.5em}" in lines

    def test_defaults_when_options_omitted(self, assembler):
        """Test that None selects the default options."""
        assert assembler.generate(RenderResult(content="x")) == assembler.generate(
            RenderResult(content="x"), DocumentOptions()
        )

    def test_class_options(self, assembler):
        """Test document class, font size and paper size."""
        options = DocumentOptions(document_class="report", font_size="12pt", page_size="letterpaper")
        assert _lines(assembler.generate(RenderResult(content=""), options))[0] == (
            r"\documentclass[12pt,letterpaper]{report}"
        )

    def test_margin(self, assembler):
        """Test that the margin reaches all four geometry keys."""
        doc = assembler.generate(RenderResult(content=""), DocumentOptions(margin="1in"))
        for side in ("left", "right", "top", "bottom"):
            assert f"{side}=1in" in doc

    def test_table_of_contents(self, assembler):
        """Test that the TOC and a page break precede the content."""
        lines = _lines(assembler.generate(RenderResult(content="Body"), DocumentOptions(enable_toc=True)))
        toc = lines.index(r"\tableofcontents")
        assert lines.index(r"\begin{document}") < toc
        assert lines[toc + 1] == r"\newpage"
        assert toc < lines.index("Body")

    def test_no_table_of_contents_by_default(self, assembler):
        """Test that the TOC is opt-in."""
        assert r"\tableofcontents" not in assembler.generate(RenderResult(content="Body"))

    def test_rejects_wrong_options_type(self, assembler):
        """Test that another options class is refused."""
        with pytest.raises(InvalidOptionsError):
            assembler.generate(RenderResult(content=""), TableOptions())


@pytest.mark.unit
class TestConditionalPackages:
    """Test feature-driven package selection."""

    def test_plain_document_has_only_fixed_packages(self, assembler):
        """Test the packages included for plain text."""
        packages = assembler.generate_packages(RenderResult(content="x"), DocumentOptions())
        assert packages.splitlines() == [
            r"\usepackage{geometry}",
            r"\usepackage{enumitem}",
            r"\usepackage{float}",
        ]

    def test_images(self, assembler):
        """Test graphicx for images."""
        packages = assembler.generate_packages(RenderResult(content="", has_images=True), DocumentOptions())
        assert r"\usepackage{graphicx}" in packages

    def test_hyperref_with_setup(self, assembler):
        """Test hyperref and its color configuration."""
        packages = assembler.generate_packages(RenderResult(content="", packages={"hyperref"}), DocumentOptions())
        assert r"\usepackage{hyperref}" in packages
        assert r"\hypersetup{" in packages
        assert "    colorlinks=true," in packages

    def test_math(self, assembler):
        """Test AMS packages for math."""
        packages = assembler.generate_packages(RenderResult(content="", has_math=True), DocumentOptions())
        assert r"\usepackage{amsmath}" in packages
        assert r"\usepackage{amssymb}" in packages

    def test_tables_carry_engine_packages(self, assembler):
        """Test table packages from the render result plus array."""
        result = RenderResult(content="", packages={"booktabs", "tabularx"}, has_tables=True)
        lines = assembler.generate_packages(result, DocumentOptions()).splitlines()
        assert lines[1:4] == [r"\usepackage{booktabs}", r"\usepackage{tabularx}", r"\usepackage{array}"]
        assert r"\usepackage{longtable}" not in lines

    def test_code(self, assembler):
        """Test listings, xcolor and the listing style."""
        result = RenderResult(content="", packages={"listings", "xcolor"}, has_code=True)
        packages = assembler.generate_packages(result, DocumentOptions())
        assert r"\usepackage{listings}" in packages
        assert r"\usepackage{xcolor}" in packages
        assert r"\lstset{" in packages
        assert r"    backgroundcolor=\color{gray!10}," in packages

    def test_strikethrough(self, assembler):
        """Test ulem with the normalem option."""
        packages = assembler.generate_packages(RenderResult(content="", packages={"ulem"}), DocumentOptions())
        assert r"\usepackage[normalem]{ulem}" in packages

    def test_sandbox_cjk_fonts(self, assembler):
        """Test that the sandbox target loads fonts from the virtual path."""
        packages = assembler.generate_packages(RenderResult(content="", has_chinese=True), DocumentOptions())
        assert r"\usepackage{fontspec}" in packages
        assert r"\usepackage{xeCJK}" in packages
        assert r"\setCJKmainfont[Path=/fonts/]{NotoSansCJKsc-Regular.otf}" in packages
        assert r"\setCJKmonofont[Path=/fonts/]{NotoSansCJKsc-Regular.otf}" in packages

    def test_export_cjk_fonts(self, assembler):
        """Test that the export target names a system font."""
        packages = assembler.generate_packages(
            RenderResult(content="", has_chinese=True), DocumentOptions(), for_export=True
        )
        assert r"\setCJKmainfont{Noto Sans CJK SC}" in packages
        assert r"\setCJKsansfont{Noto Sans CJK SC}" in packages
        assert "Path=" not in packages

    def test_enable_chinese_forces_cjk(self, assembler):
        """Test that CJK packages load without CJK content when enabled."""
        packages = assembler.generate_packages(RenderResult(content=""), DocumentOptions(enable_chinese=True))
        assert r"\usepackage{xeCJK}" in packages

    def test_custom_cjk_font(self, assembler):
        """Test that the export font name is configurable."""
        options = DocumentOptions(cjk_font_name="Source Han Serif SC")
        packages = assembler.generate_packages(RenderResult(content="", has_chinese=True), options, for_export=True)
        assert r"\setCJKmainfont{Source Han Serif SC}" in packages
