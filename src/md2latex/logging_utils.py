#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/logging_utils.py
"""Logging setup for the md2latex command line.

Library modules only create ``logging.getLogger(__name__)`` loggers; handlers
are installed here, once, by the CLI.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PLAIN_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are only interesting when tracing
_TOKENIZER_LOGGERS = ("markdown_it",)


def _resolve_level(log_level: int | str) -> int:
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else logging.INFO


def _make_handler(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Install stderr (and optionally file) handlers on the root logger.

    Parameters
    ----------
    log_level : int | str
        Numeric level or level name such as ``"DEBUG"``; unknown names fall back to INFO.
    log_file : str, optional
        Append log records to this file as well.
    trace_mode : bool, default False
        Timestamped records with logger names; tokenizer debug output is let through.

    Returns
    -------
    logging.Logger
        The root logger.

    """
    level = _resolve_level(log_level)
    formatter = logging.Formatter(
        TRACE_FORMAT if trace_mode else PLAIN_FORMAT,
        datefmt=TRACE_DATE_FORMAT if trace_mode else None,
    )

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.setLevel(level)
    root.addHandler(_make_handler(logging.StreamHandler(sys.stderr), level, formatter))

    for name in _TOKENIZER_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET if trace_mode else max(level, logging.WARNING))

    if log_file:
        try:
            root.addHandler(_make_handler(logging.FileHandler(log_file, encoding="utf-8"), level, formatter))
        except OSError as exc:
            root.warning(f"Could not open log file {log_file}: {exc}")
        else:
            root.debug(f"Appending log records to {log_file}")

    return root
