#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/utils/security.py
"""Validation of untrusted values that are spliced into LaTeX commands."""

from __future__ import annotations

import logging
import re

from md2latex.constants import MAX_LANGUAGE_IDENTIFIER_LENGTH, SAFE_LANGUAGE_IDENTIFIER_PATTERN

logger = logging.getLogger(__name__)


def sanitize_language_identifier(language: str) -> str:
    r"""Sanitize a code fence language before it becomes a listings option.

    The identifier ends up inside ``[language=...]``, so anything beyond
    alphanumerics, underscores, hyphens and plus signs is rejected.

    Parameters
    ----------
    language : str
        Raw language identifier

    Returns
    -------
    str
        Sanitized language identifier, or empty string if invalid

    Examples
    --------
    >>> sanitize_language_identifier("python")
    'python'
    >>> sanitize_language_identifier("c++")
    'c++'
    >>> sanitize_language_identifier("tex]{evil}")
    ''

    """
    if not language:
        return ""

    language = language.strip()

    if len(language) > MAX_LANGUAGE_IDENTIFIER_LENGTH:
        logger.warning(
            f"Language identifier exceeds maximum length ({MAX_LANGUAGE_IDENTIFIER_LENGTH}): {language[:50]}..."
        )
        return ""

    if not re.match(SAFE_LANGUAGE_IDENTIFIER_PATTERN, language):
        logger.warning(f"Dropped language identifier containing invalid characters: {language[:50]}")
        return ""

    return language


def escape_url(url: str) -> str:
    r"""Prepare a URL for the first argument of ``\href``.

    Backslashes and braces are percent-encoded, then ``%`` and ``#`` are
    escaped so the URL survives being nested in another command's argument.
    """
    if not url:
        return ""
    encoded = url.replace("\\", "%5C").replace("{", "%7B").replace("}", "%7D")
    return encoded.replace("%", r"\%").replace("#", r"\#")
