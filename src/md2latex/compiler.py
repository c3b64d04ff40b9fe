#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/compiler.py
"""Native LaTeX compilation.

This module runs a locally installed TeX engine (xelatex by default) over a
generated document in a scratch directory and returns the resulting PDF
bytes together with the engine log. Several passes are run so that the
table of contents and cross references resolve.

Examples
--------
Compile a document when xelatex is installed::

    compiler = LatexCompiler(CompileOptions(passes=1))
    if compiler.is_available():
        pdf_bytes = compiler.compile_or_raise(latex_source)

"""

from __future__ import annotations

import logging
import shutil
import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from md2latex.exceptions import CompilationError, DependencyError, InvalidOptionsError
from md2latex.options.compile import CompileOptions

logger = logging.getLogger(__name__)

# Lines of the engine log kept in error messages
_LOG_TAIL_LINES = 20


@dataclass
class CompileResult:
    """Outcome of a compilation run.

    Attributes
    ----------
    success : bool
        A non-empty PDF was produced
    pdf : bytes or None
        PDF content when compilation succeeded
    log : str
        Engine log (or captured output when no log file was written)
    returncode : int or None
        Exit status of the last engine run
    passes_run : int
        Number of engine invocations performed
    error : str or None
        Short failure description, None on success

    """

    success: bool
    pdf: Optional[bytes] = None
    log: str = ""
    returncode: Optional[int] = None
    passes_run: int = 0
    error: Optional[str] = None

    def error_summary(self) -> str:
        """Return the LaTeX error lines of the log, or its tail when none are marked."""
        lines = self.log.splitlines()
        errors = [line for line in lines if line.startswith("!")]
        if errors:
            return "\n".join(errors)
        return "\n".join(lines[-_LOG_TAIL_LINES:])


class LatexCompiler:
    """Compile LaTeX source with a native engine.

    Parameters
    ----------
    options : CompileOptions or None, default = None
        Engine, pass count and timeout

    """

    def __init__(self, options: CompileOptions | None = None):
        """Initialize the compiler with options."""
        if options is not None and not isinstance(options, CompileOptions):
            raise InvalidOptionsError("LatexCompiler", CompileOptions, type(options))
        self.options = options or CompileOptions()

    def executable(self) -> Optional[str]:
        """Return the resolved path of the engine, or None when it is not installed."""
        return shutil.which(self.options.engine)

    def is_available(self) -> bool:
        """Return whether the configured engine is on PATH."""
        return self.executable() is not None

    def build_command(self, executable: str, output_dir: Path, tex_path: Path) -> list[str]:
        """Return the engine command line for one pass."""
        return [
            executable,
            "-interaction=nonstopmode",
            "-halt-on-error",
            f"-jobname={self.options.job_name}",
            f"-output-directory={output_dir}",
            str(tex_path),
        ]

    def compile(self, latex: str) -> CompileResult:
        """Compile ``latex`` and return the PDF and log.

        The run succeeds only when the engine leaves a non-empty PDF
        behind. Engine failures and timeouts are reported through the
        result rather than raised.

        Parameters
        ----------
        latex : str
            Complete document source

        Returns
        -------
        CompileResult
            PDF bytes, log and run metadata

        """
        executable = self.executable()
        if executable is None:
            logger.warning(f"{self.options.engine} is not installed")
            return CompileResult(success=False, error=f"{self.options.engine} not found on PATH")

        job = self.options.job_name
        with tempfile.TemporaryDirectory(prefix="md2latex-") as workdir:
            output_dir = Path(workdir)
            tex_path = output_dir / f"{job}.tex"
            tex_path.write_text(latex, encoding="utf-8")
            command = self.build_command(executable, output_dir, tex_path)

            returncode: Optional[int] = None
            captured = ""
            passes_run = 0
            for pass_number in range(1, self.options.passes + 1):
                logger.debug(f"Running {self.options.engine} pass {pass_number}/{self.options.passes}")
                try:
                    completed = subprocess.run(
                        command,
                        cwd=output_dir,
                        capture_output=True,
                        text=True,
                        encoding="utf-8",
                        errors="replace",
                        timeout=self.options.timeout,
                        check=False,
                    )
                except subprocess.TimeoutExpired:
                    logger.warning(f"{self.options.engine} timed out after {self.options.timeout}s")
                    log = self._read_log(output_dir / f"{job}.log")
                    return CompileResult(
                        success=False,
                        log=log,
                        passes_run=pass_number,
                        error=f"{self.options.engine} timed out after {self.options.timeout} seconds",
                    )

                passes_run = pass_number
                returncode = completed.returncode
                captured = (completed.stdout or "") + (completed.stderr or "")
                if returncode != 0:
                    break

            log = self._read_log(output_dir / f"{job}.log") or captured
            pdf_path = output_dir / f"{job}.pdf"
            pdf = pdf_path.read_bytes() if pdf_path.is_file() else b""

        if returncode == 0 and pdf:
            logger.info(f"Compiled PDF ({len(pdf)} bytes) in {passes_run} pass(es)")
            return CompileResult(success=True, pdf=pdf, log=log, returncode=returncode, passes_run=passes_run)

        error = f"{self.options.engine} exited with status {returncode}" if returncode else "no PDF was produced"
        logger.warning(f"Compilation failed: {error}")
        return CompileResult(success=False, log=log, returncode=returncode, passes_run=passes_run, error=error)

    def compile_or_raise(self, latex: str) -> bytes:
        """Compile ``latex`` and return the PDF bytes.

        Raises
        ------
        DependencyError
            If the engine executable is not on PATH
        CompilationError
            If no PDF was produced

        """
        if not self.is_available():
            raise DependencyError(self.options.engine)
        result = self.compile(latex)
        if not result.success or result.pdf is None:
            raise CompilationError(
                f"LaTeX compilation failed ({result.error}):\n{result.error_summary()}",
                log=result.log,
            )
        return result.pdf

    @staticmethod
    def _read_log(path: Path) -> str:
        if not path.is_file():
            return ""
        return path.read_text(encoding="utf-8", errors="replace")
