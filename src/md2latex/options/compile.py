#  Copyright (c) 2025 Tom Villani, Ph.D.

# md2latex/options/compile.py
"""Configuration options for compiling LaTeX with a native engine."""

from __future__ import annotations

from dataclasses import dataclass, field

from md2latex.constants import (
    DEFAULT_COMPILE_PASSES,
    DEFAULT_COMPILE_TIMEOUT,
    DEFAULT_JOB_NAME,
    DEFAULT_LATEX_ENGINE,
    LATEX_ENGINES,
    LatexEngine,
)
from md2latex.exceptions import ValidationError
from md2latex.options.base import CloneFrozenMixin, validate_choice, validate_positive


@dataclass(frozen=True)
class CompileOptions(CloneFrozenMixin):
    """Configuration options for the native LaTeX compiler.

    Parameters
    ----------
    engine : {"xelatex", "pdflatex"}, default "xelatex"
        Engine executable. CJK documents need xelatex.
    passes : int, default 2
        Number of engine runs; two are needed to resolve the table of contents.
    timeout : float, default 60.0
        Seconds allowed for each engine run.
    job_name : str, default "document"
        Base name of the generated files.

    """

    engine: LatexEngine = field(
        default=DEFAULT_LATEX_ENGINE,
        metadata={"help": "LaTeX engine executable", "choices": list(LATEX_ENGINES)},
    )
    passes: int = field(
        default=DEFAULT_COMPILE_PASSES,
        metadata={"help": "Number of engine runs", "type": int},
    )
    timeout: float = field(
        default=DEFAULT_COMPILE_TIMEOUT,
        metadata={"help": "Seconds allowed per engine run", "type": float},
    )
    job_name: str = field(
        default=DEFAULT_JOB_NAME,
        metadata={"help": "Base name for generated files"},
    )

    def __post_init__(self) -> None:
        """Validate engine choice and numeric ranges."""
        validate_choice("engine", self.engine, LATEX_ENGINES)
        validate_positive("passes", self.passes, integer=True)
        validate_positive("timeout", self.timeout)
        if not self.job_name or any(sep in self.job_name for sep in ("/", "\\")):
            raise ValidationError(
                f"job_name must be a plain file stem, got {self.job_name!r}",
                parameter_name="job_name",
                parameter_value=self.job_name,
            )
