"""Unit tests for configuration discovery, loading and parser defaults."""

import argparse
import json
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from md2latex.cli import create_parser
from md2latex.cli.config import (
    apply_config_to_parser,
    apply_env_vars_to_parser,
    discover_config_file,
    find_config_in_parents,
    flatten_config,
    get_env_var_value,
    load_config_file,
)


@pytest.mark.unit
@pytest.mark.cli
class TestConfigDiscovery:
    """Test config file discovery order."""

    def test_finds_toml_in_start_dir(self):
        """Test discovery of .md2latex.toml in the starting directory."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config = Path(tmpdir) / ".md2latex.toml"
            config.write_text('table_style = "standard"\n')
            assert find_config_in_parents(Path(tmpdir)) == config.resolve()

    def test_toml_preferred_over_yaml(self):
        """Test that TOML wins when several formats exist."""
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / ".md2latex.yaml").write_text("toc: true\n")
            toml_path = Path(tmpdir) / ".md2latex.toml"
            toml_path.write_text("toc = true\n")
            assert find_config_in_parents(Path(tmpdir)) == toml_path.resolve()

    def test_finds_config_in_parent(self):
        """Test that the search walks up to parent directories."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config = Path(tmpdir) / ".md2latex.json"
            config.write_text("{}")
            nested = Path(tmpdir) / "a" / "b"
            nested.mkdir(parents=True)
            assert find_config_in_parents(nested) == config.resolve()

    def test_pyproject_needs_tool_section(self):
        """Test that pyproject.toml counts only with [tool.md2latex]."""
        with tempfile.TemporaryDirectory() as tmpdir:
            pyproject = Path(tmpdir) / "pyproject.toml"
            pyproject.write_text('[project]\nname = "demo"\n')
            with patch("pathlib.Path.home", return_value=Path(tmpdir) / "nohome"):
                assert discover_config_file(Path(tmpdir)) is None

            pyproject.write_text('[project]\nname = "demo"\n\n[tool.md2latex]\ntoc = true\n')
            assert find_config_in_parents(Path(tmpdir)) == pyproject.resolve()

    def test_uses_cwd_by_default(self):
        """Test that discovery starts at the current directory."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config = Path(tmpdir) / ".md2latex.yml"
            config.write_text("toc: true\n")
            with patch("pathlib.Path.cwd", return_value=Path(tmpdir)):
                assert find_config_in_parents() == config.resolve()

    def test_falls_back_to_home(self):
        """Test the home directory fallback."""
        with tempfile.TemporaryDirectory() as project, tempfile.TemporaryDirectory() as home:
            config = Path(home) / ".md2latex.toml"
            config.write_text("toc = true\n")
            with patch("pathlib.Path.home", return_value=Path(home)):
                with patch("md2latex.cli.config.find_config_in_parents", return_value=None):
                    assert discover_config_file(Path(project)) == config


@pytest.mark.unit
@pytest.mark.cli
class TestConfigLoading:
    """Test loading each supported format."""

    def test_load_toml(self):
        """Test a TOML config with sections."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.toml"
            path.write_text('[document]\nfont_size = "12pt"\n\n[table]\nwrap_threshold = 30\n')
            assert load_config_file(path) == {"document": {"font_size": "12pt"}, "table": {"wrap_threshold": 30}}

    def test_load_yaml(self):
        """Test a YAML config."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.yaml"
            path.write_text("toc: true\nmargin: 1in\n")
            assert load_config_file(path) == {"toc": True, "margin": "1in"}

    def test_load_empty_yaml(self):
        """Test that an empty YAML file is an empty config."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.yml"
            path.write_text("")
            assert load_config_file(path) == {}

    def test_load_json(self):
        """Test a JSON config."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.json"
            path.write_text(json.dumps({"table_style": "standard"}))
            assert load_config_file(str(path)) == {"table_style": "standard"}

    def test_load_pyproject(self):
        """Test the [tool.md2latex] section of pyproject.toml."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "pyproject.toml"
            path.write_text('[tool.md2latex]\nengine = "pdflatex"\n\n[tool.other]\nx = 1\n')
            assert load_config_file(path) == {"engine": "pdflatex"}

    @pytest.mark.parametrize(
        "filename,content",
        [
            ("bad.toml", "toc = = true"),
            ("bad.yaml", "toc: [unclosed"),
            ("bad.json", "{not json"),
            ("list.json", "[1, 2]"),
            ("list.yaml", "- a\n- b\n"),
            ("config.ini", "[section]"),
        ],
    )
    def test_invalid_files(self, filename, content):
        """Test that malformed or unsupported files are rejected."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / filename
            path.write_text(content)
            with pytest.raises(argparse.ArgumentTypeError):
                load_config_file(path)

    def test_missing_file(self):
        """Test that a missing path is rejected."""
        with pytest.raises(argparse.ArgumentTypeError, match="does not exist"):
            load_config_file("/nonexistent/.md2latex.toml")


@pytest.mark.unit
@pytest.mark.cli
class TestApplyConfig:
    """Test setting parser defaults from config values."""

    def test_flatten_config(self):
        """Test that sections only group keys."""
        config = {"document": {"font-size": "12pt", "toc": True}, "table": {"table_style": "standard"}, "pdf": "x.pdf"}
        assert flatten_config(config) == {
            "font_size": "12pt",
            "toc": True,
            "table_style": "standard",
            "pdf": "x.pdf",
        }

    def test_values_become_defaults(self):
        """Test that config values become parser defaults."""
        parser = create_parser()
        apply_config_to_parser(
            parser,
            {"document": {"font_size": "12pt", "toc": True}, "table": {"wrap_threshold": "30"}},
            "test",
        )
        args = parser.parse_args(["doc.md"])
        assert args.font_size == "12pt"
        assert args.toc is True
        assert args.wrap_threshold == 30

    def test_command_line_wins(self):
        """Test that explicit arguments override config defaults."""
        parser = create_parser()
        apply_config_to_parser(parser, {"font_size": "12pt"}, "test")
        assert parser.parse_args(["doc.md", "--font-size", "10pt"]).font_size == "10pt"

    def test_store_false_flag(self):
        """Test that breaks can be disabled from config."""
        parser = create_parser()
        apply_config_to_parser(parser, {"breaks": False}, "test")
        assert parser.parse_args(["doc.md"]).breaks is False

    def test_invalid_choice(self):
        """Test that a value outside the choices is rejected."""
        with pytest.raises(argparse.ArgumentTypeError, match="table_style"):
            apply_config_to_parser(create_parser(), {"table_style": "grid"}, "test")

    def test_invalid_type(self):
        """Test that an unconvertible value is rejected."""
        with pytest.raises(argparse.ArgumentTypeError, match="passes"):
            apply_config_to_parser(create_parser(), {"passes": "many"}, "test")

    def test_unknown_keys_are_ignored(self, caplog):
        """Test that unknown keys only produce a warning."""
        parser = create_parser()
        apply_config_to_parser(parser, {"colour_scheme": "dark", "input": "other.md"}, "test")
        assert parser.parse_args(["doc.md"]).input == "doc.md"
        assert "colour_scheme" in caplog.text


@pytest.mark.unit
@pytest.mark.cli
class TestEnvironmentVariables:
    """Test MD2LATEX_* environment variable handling."""

    def test_get_env_var_value(self, monkeypatch):
        """Test the prefix and name normalization."""
        monkeypatch.setenv("MD2LATEX_TABLE_STYLE", "standard")
        monkeypatch.delenv("MD2LATEX_FONT_SIZE", raising=False)
        assert get_env_var_value("table-style") == "standard"
        assert get_env_var_value("font_size") is None

    def test_env_values_become_defaults(self, monkeypatch):
        """Test typed and boolean environment values."""
        monkeypatch.setenv("MD2LATEX_WRAP_THRESHOLD", "25")
        monkeypatch.setenv("MD2LATEX_CHINESE", "true")
        monkeypatch.setenv("MD2LATEX_TOC", "0")
        parser = create_parser()
        apply_env_vars_to_parser(parser)
        args = parser.parse_args(["doc.md"])
        assert args.wrap_threshold == 25
        assert args.chinese is True
        assert args.toc is False

    def test_env_overrides_config(self, monkeypatch):
        """Test that the environment is applied on top of config defaults."""
        monkeypatch.setenv("MD2LATEX_FONT_SIZE", "12pt")
        parser = create_parser()
        apply_config_to_parser(parser, {"font_size": "10pt"}, "test")
        apply_env_vars_to_parser(parser)
        assert parser.parse_args(["doc.md"]).font_size == "12pt"

    def test_invalid_env_value_is_ignored(self, monkeypatch, caplog):
        """Test that a bad environment value keeps the previous default."""
        monkeypatch.setenv("MD2LATEX_PAGE_SIZE", "b5paper")
        parser = create_parser()
        apply_env_vars_to_parser(parser)
        assert parser.parse_args(["doc.md"]).page_size == "a4paper"
        assert "MD2LATEX_PAGE_SIZE" in caplog.text

    def test_input_is_not_configurable(self, monkeypatch):
        """Test that the positional input never takes an environment default."""
        monkeypatch.setenv("MD2LATEX_INPUT", "env.md")
        parser = create_parser()
        apply_env_vars_to_parser(parser)
        assert parser.parse_args(["doc.md"]).input == "doc.md"
