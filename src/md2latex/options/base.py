"""Base classes for md2latex options.

This module defines the foundation classes for the immutable configuration
objects used throughout the md2latex pipeline.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, replace
from typing import Any, Iterable

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from md2latex.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


def validate_choice(name: str, value: Any, choices: Iterable[str]) -> None:
    """Raise ValidationError unless ``value`` is one of ``choices``.

    Parameters
    ----------
    name : str
        Option name used in the error message
    value : Any
        Value supplied by the caller
    choices : Iterable[str]
        Recognized values

    Raises
    ------
    ValidationError
        If ``value`` is not a recognized choice

    """
    allowed = tuple(choices)
    if value not in allowed:
        raise ValidationError(
            f"{name} must be one of {', '.join(allowed)}, got {value!r}",
            parameter_name=name,
            parameter_value=value,
        )


def validate_positive(name: str, value: Any, integer: bool = False) -> None:
    """Raise ValidationError unless ``value`` is a positive number."""
    expected = int if integer else (int, float)
    if isinstance(value, bool) or not isinstance(value, expected) or value <= 0:
        kind = "a positive integer" if integer else "a positive number"
        raise ValidationError(f"{name} must be {kind}, got {value!r}", parameter_name=name, parameter_value=value)
