#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for md2latex CLI.

This module handles automatic discovery of configuration files, loading
configs from TOML, YAML or JSON format, and applying configuration values
and ``MD2LATEX_*`` environment variables as parser defaults so that
explicit command-line arguments always win.
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from md2latex.constants import CONFIG_FILENAMES, ENV_VAR_PREFIX

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("true", "1", "yes", "on")

# Parser destinations that never take a default from a file or the environment
_NON_CONFIGURABLE = frozenset({"help", "version", "input", "config", "no_config"})


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load [tool.md2latex] section from pyproject.toml file.

    Parameters
    ----------
    pyproject_path : Path
        Path to pyproject.toml file

    Returns
    -------
    dict
        Configuration dictionary from [tool.md2latex] section, or empty dict if not found

    Raises
    ------
    argparse.ArgumentTypeError
        If pyproject.toml cannot be parsed

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in pyproject.toml {pyproject_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading pyproject.toml {pyproject_path}: {e}") from e

    config = data.get("tool", {}).get("md2latex", {})
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.md2latex] section in {pyproject_path} must be a table, got {type(config).__name__}"
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find configuration file by searching parent directories.

    Walks up the directory tree from start_dir to the filesystem root,
    checking each directory for ``.md2latex.toml``, ``.md2latex.yaml``,
    ``.md2latex.yml``, ``.md2latex.json`` and finally a ``pyproject.toml``
    with a ``[tool.md2latex]`` section.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except argparse.ArgumentTypeError:
                logger.debug(f"Skipping unreadable {pyproject_path}")

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover configuration file in standard locations.

    The parent-directory search runs first; the user's home directory is
    checked for the dedicated config filenames afterwards.

    Returns
    -------
    Path or None
        Path to discovered config file, or None if not found

    """
    config_in_parents = find_config_in_parents(start_dir)
    if config_in_parents:
        return config_in_parents

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from TOML, YAML, JSON or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    argparse.ArgumentTypeError
        If the file cannot be read, parsed, or has invalid format

    Examples
    --------
    >>> config = load_config_file(".md2latex.toml")  # doctest: +SKIP
    >>> config.get("table_style")  # doctest: +SKIP
    'standard'

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")

    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == "pyproject.toml":
        return _load_pyproject_section(config_path)
    elif ext == ".toml":
        return _load_toml_config(config_path)
    elif ext in (".yaml", ".yml"):
        return _load_yaml_config(config_path)
    elif ext == ".json":
        return _load_json_config(config_path)
    raise argparse.ArgumentTypeError(f"Unsupported config file format: {ext}. Use .toml, .yaml or .json")


def _load_toml_config(config_path: Path) -> Dict[str, Any]:
    """Load configuration from TOML file."""
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading TOML config {config_path}: {e}") from e


def _load_json_config(config_path: Path) -> Dict[str, Any]:
    """Load configuration from JSON file."""
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid JSON in config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading JSON config {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(f"JSON config file must contain an object, got {type(config).__name__}")
    return config


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    """Load configuration from YAML file."""
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise argparse.ArgumentTypeError(f"Invalid YAML in config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading YAML config {config_path}: {e}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(f"YAML config file must contain a mapping, got {type(config).__name__}")
    return config


def flatten_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten section tables into one level of option names.

    Sections such as ``[document]`` or ``[table]`` only group keys; the
    keys themselves are the option names. Hyphens become underscores.

    Examples
    --------
    >>> flatten_config({"document": {"font-size": "12pt"}, "toc": True})
    {'font_size': '12pt', 'toc': True}

    """
    flat: Dict[str, Any] = {}
    for key, value in config.items():
        if isinstance(value, dict):
            flat.update(flatten_config(value))
        else:
            flat[key.replace("-", "_")] = value
    return flat


def _convert_value(action: argparse.Action, value: Any, source: str) -> Any:
    """Coerce a config or environment value to the type ``action`` expects.

    Raises
    ------
    argparse.ArgumentTypeError
        If the value cannot be converted or is not an allowed choice

    """
    if isinstance(action, (argparse._StoreTrueAction, argparse._StoreFalseAction)):
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in _TRUE_VALUES

    if action.type is not None and not isinstance(value, bool):
        try:
            value = action.type(value)
        except (TypeError, ValueError) as e:
            raise argparse.ArgumentTypeError(f"Invalid value for {action.dest} in {source}: {value!r}") from e

    if action.choices and value not in action.choices:
        raise argparse.ArgumentTypeError(
            f"Invalid choice for {action.dest} in {source}: {value!r}. Choices: {list(action.choices)}"
        )
    return value


def apply_config_to_parser(parser: argparse.ArgumentParser, config: Dict[str, Any], source: str) -> None:
    """Set parser defaults from a loaded configuration mapping.

    Parameters
    ----------
    parser : argparse.ArgumentParser
        The argument parser to modify
    config : dict
        Configuration loaded with :func:`load_config_file`
    source : str
        Description of the origin, used in error messages

    Raises
    ------
    argparse.ArgumentTypeError
        If a value has the wrong type or is not an allowed choice

    """
    actions = {action.dest: action for action in parser._actions if action.dest not in _NON_CONFIGURABLE}
    for key, value in flatten_config(config).items():
        action = actions.get(key)
        if action is None:
            logger.warning(f"Ignoring unknown option {key!r} in {source}")
            continue
        action.default = _convert_value(action, value, source)


def get_env_var_value(key: str) -> Optional[str]:
    """Get environment variable with MD2LATEX_ prefix.

    Parameters
    ----------
    key : str
        The parameter name (e.g., 'rich', 'table_style')

    Returns
    -------
    Optional[str]
        Environment variable value or None if not set

    """
    env_key = f"{ENV_VAR_PREFIX}{key.upper().replace('-', '_')}"
    return os.environ.get(env_key)


def apply_env_vars_to_parser(parser: argparse.ArgumentParser) -> None:
    """Apply environment variables as defaults to parser arguments.

    Environment values override configuration files but not command-line
    arguments. Invalid values are reported and ignored.

    Parameters
    ----------
    parser : argparse.ArgumentParser
        The argument parser to modify

    """
    for action in parser._actions:
        if not action.dest or action.dest in _NON_CONFIGURABLE:
            continue
        env_value = get_env_var_value(action.dest)
        if env_value is None:
            continue
        try:
            action.default = _convert_value(action, env_value, f"{ENV_VAR_PREFIX}{action.dest.upper()}")
        except argparse.ArgumentTypeError as e:
            logger.warning(str(e))
