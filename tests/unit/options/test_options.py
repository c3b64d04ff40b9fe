"""Unit tests for options validation and cloning."""

import dataclasses

import pytest

from md2latex.exceptions import ValidationError
from md2latex.options import CompileOptions, DocumentOptions, MarkdownParserOptions, TableOptions


@pytest.mark.unit
class TestDocumentOptions:
    """Test DocumentOptions validation."""

    def test_defaults(self):
        """Test default document settings."""
        options = DocumentOptions()
        assert options.document_class == "article"
        assert options.font_size == "11pt"
        assert options.page_size == "a4paper"
        assert options.enable_chinese is False
        assert options.enable_toc is False

    @pytest.mark.parametrize(
        "field_name,value",
        [("document_class", "memoir"), ("font_size", "14pt"), ("page_size", "b5paper")],
    )
    def test_rejects_unknown_values(self, field_name, value):
        """Test that out-of-range values fail before any output."""
        with pytest.raises(ValidationError) as exc_info:
            DocumentOptions(**{field_name: value})
        assert exc_info.value.parameter_name == field_name
        assert exc_info.value.parameter_value == value

    def test_rejects_empty_margin(self):
        """Test that an empty margin is refused."""
        with pytest.raises(ValidationError):
            DocumentOptions(margin=" ")

    def test_is_frozen(self):
        """Test that options cannot be mutated in place."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            DocumentOptions().font_size = "12pt"  # type: ignore[misc]

    def test_create_updated(self):
        """Test that cloning changes only the given fields."""
        original = DocumentOptions()
        updated = original.create_updated(enable_toc=True)
        assert updated.enable_toc is True
        assert original.enable_toc is False
        assert updated.font_size == original.font_size

    def test_create_updated_validates(self):
        """Test that clones are validated too."""
        with pytest.raises(ValidationError):
            DocumentOptions().create_updated(font_size="9pt")


@pytest.mark.unit
class TestTableOptions:
    """Test TableOptions validation."""

    def test_defaults(self):
        """Test default table settings."""
        options = TableOptions()
        assert options.table_style == "booktabs"
        assert options.auto_wrap_threshold == 20

    @pytest.mark.parametrize("threshold", [0, -5, 2.5, True, "20"])
    def test_rejects_invalid_threshold(self, threshold):
        """Test that the threshold must be a positive integer."""
        with pytest.raises(ValidationError):
            TableOptions(auto_wrap_threshold=threshold)

    def test_rejects_unknown_style(self):
        """Test that unknown table styles are refused."""
        with pytest.raises(ValidationError):
            TableOptions(table_style="grid")


@pytest.mark.unit
class TestCompileOptions:
    """Test CompileOptions validation."""

    def test_defaults(self):
        """Test default compile settings."""
        options = CompileOptions()
        assert options.engine == "xelatex"
        assert options.passes == 2

    @pytest.mark.parametrize(
        "kwargs",
        [{"engine": "lualatex"}, {"passes": 0}, {"timeout": -1}, {"job_name": "../doc"}, {"job_name": ""}],
    )
    def test_rejects_invalid_values(self, kwargs):
        """Test invalid engine, pass count, timeout and job names."""
        with pytest.raises(ValidationError):
            CompileOptions(**kwargs)


@pytest.mark.unit
def test_option_fields_have_help():
    """Test that every option field documents itself for the CLI."""
    for options_class in (DocumentOptions, TableOptions, CompileOptions, MarkdownParserOptions):
        for option_field in dataclasses.fields(options_class):
            assert option_field.metadata.get("help"), f"{options_class.__name__}.{option_field.name}"
