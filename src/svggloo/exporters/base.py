"""Abstract base class for PDF exporters.

Each exporter wraps one external converter program. An exporter:
1. Builds the converter's argument lists for a batch of rendered files
2. Runs each invocation through a process runner
3. Turns a missing program, timeout or non-zero exit into ExportProcessError

The process runner is injectable so tests can record invocations instead
of spawning converters.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from pathlib import Path

from svggloo.exceptions import ExportProcessError
from svggloo.models import ExportTarget

logger = logging.getLogger(__name__)

# Default per-invocation timeout in seconds
DEFAULT_TIMEOUT = 300

PDF_SUFFIX = ".pdf"

# (argv, timeout) -> completed process
ProcessRunner = Callable[[list[str], float | None], subprocess.CompletedProcess]


def run_process(argv: list[str], timeout: float | None) -> subprocess.CompletedProcess:
    """Run a command, capturing its output as text."""
    return subprocess.run(
        argv,
        capture_output=True,
        text=True,
        timeout=timeout,
        check=False,
    )


def get_in_out_file(src: Path) -> tuple[str, str]:
    """Return the input path and its PDF output path as strings.

    ``brochure.svg`` → ``("brochure.svg", "brochure.pdf")``
    """
    src = Path(src)
    return str(src), str(src.with_suffix(PDF_SUFFIX))


class Exporter(ABC):
    """Abstract interface for SVG → PDF converters.

    Adding a converter means subclassing Exporter, implementing
    build_invocations() and registering it in the ExporterRegistry.

    Attributes:
        target: Export target this exporter implements
        program: Converter executable name
        timeout: Per-invocation timeout in seconds (None disables it)
    """

    target: ExportTarget
    program: str

    def __init__(
        self,
        timeout: float | None = DEFAULT_TIMEOUT,
        runner: ProcessRunner | None = None,
    ) -> None:
        """Initialize the exporter.

        Args:
            timeout: Per-invocation timeout in seconds
            runner: Process runner (defaults to subprocess.run)
        """
        self.timeout = timeout
        self._runner = runner or run_process

    def get_version(self) -> str | None:
        """Return the converter's version string, if it reports one."""
        try:
            result = self._runner([self.program, "--version"], 10)
        except (subprocess.TimeoutExpired, OSError):
            return None
        if result.returncode != 0:
            return None
        output = (result.stdout or "").strip()
        return output.split("\n")[0].strip() if output else None

    @abstractmethod
    def build_invocations(self, artifacts: Sequence[Path]) -> list[list[str]]:
        """Build the argument lists (without the program) for a batch.

        Args:
            artifacts: Rendered files, in record order

        Returns:
            One argument list per converter invocation
        """
        pass

    def export(self, artifacts: Sequence[Path]) -> None:
        """Convert rendered files to PDF.

        Output files are written beside each input by the converter.

        Args:
            artifacts: Rendered files, in record order

        Raises:
            ExportProcessError: If the converter is missing, times out or
                exits non-zero; later invocations are not attempted
        """
        if not artifacts:
            logger.debug("Nothing to export with %s", self.program)
            return

        invocations = self.build_invocations(artifacts)
        logger.info(
            "Exporting %d file(s) with %s (%d invocation(s))",
            len(artifacts),
            self.program,
            len(invocations),
        )
        for args in invocations:
            self._invoke(args)

    def _invoke(self, args: list[str]) -> None:
        """Run the converter once with the given arguments."""
        argv = [self.program, *args]
        logger.debug("Running: %s", " ".join(argv))

        try:
            result = self._runner(argv, self.timeout)
        except FileNotFoundError as e:
            raise ExportProcessError(self.program, args, f"program not found: {e}") from e
        except subprocess.TimeoutExpired as e:
            raise ExportProcessError(
                self.program, args, f"timed out after {self.timeout} seconds"
            ) from e
        except OSError as e:
            raise ExportProcessError(self.program, args, str(e)) from e

        if result.returncode != 0:
            raise ExportProcessError(
                self.program,
                args,
                "conversion failed",
                exit_code=result.returncode,
                stderr=result.stderr,
            )
