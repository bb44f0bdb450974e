"""svggloo exception hierarchy.

Every failure raised by the render pipeline derives from ``SvgglooError``.
File and directory access problems are left as the builtin ``OSError``.

Record-level errors (naming and rendering) are annotated by the pipeline
with the row number and the stage that failed before they propagate.
"""

from pathlib import Path
from typing import Any


class SvgglooError(Exception):
    """Base class for all svggloo errors.

    Attributes:
        message: Human-readable description
        row: 1-based CSV row number (header is row 1), if known
        stage: Pipeline stage that failed ("naming", "render", "export", ...)
    """

    def __init__(self, message: str, row: int | None = None) -> None:
        self.message = message
        self.row = row
        self.stage: str | None = None
        super().__init__(message)

    def with_context(self, row: int | None = None, stage: str | None = None) -> "SvgglooError":
        """Attach record context and return self for re-raising."""
        if row is not None:
            self.row = row
        if stage is not None:
            self.stage = stage
        return self

    def __str__(self) -> str:
        prefix = ""
        if self.row is not None:
            prefix = f"row {self.row}: "
        if self.stage is not None:
            prefix = f"[{self.stage}] {prefix}"
        return f"{prefix}{self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "row": self.row,
            "stage": self.stage,
        }


class DataFormatError(SvgglooError):
    """Raised when the CSV data file cannot be read or has a bad shape."""

    def __init__(self, path: Path | str, message: str, row: int | None = None) -> None:
        self.path = Path(path)
        super().__init__(f"{self.path}: {message}", row=row)


class InvalidNameError(DataFormatError):
    """Raised when a computed output name is not a usable file name."""

    def __init__(self, name: str, message: str | None = None) -> None:
        self.name = name
        self.path = Path(name)
        SvgglooError.__init__(self, f"{name!r}: {message or 'not a usable output file name'}")


class MissingFieldError(SvgglooError):
    """Raised when a record lacks a field required for naming."""

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"Missing field in record: {field!r}")


class TemplateSyntaxError(SvgglooError):
    """Raised when a template cannot be parsed."""

    def __init__(self, name: str, message: str, lineno: int | None = None) -> None:
        self.name = name
        self.lineno = lineno
        location = f"{name}:{lineno}" if lineno is not None else name
        super().__init__(f"Template syntax error in {location}: {message}")


class TemplateRenderError(SvgglooError):
    """Raised when rendering a template against a record fails."""

    def __init__(self, name: str, message: str) -> None:
        self.name = name
        super().__init__(f"Failed to render {name}: {message}")


class ExportProcessError(SvgglooError):
    """Raised when an external converter is missing, fails or times out."""

    def __init__(
        self,
        program: str,
        argv: list[str],
        cause: str,
        exit_code: int | None = None,
        stderr: str | None = None,
    ) -> None:
        self.program = program
        self.argv = list(argv)
        self.cause = cause
        self.exit_code = exit_code
        self.stderr = stderr
        message = f"Failed to execute command `{program} {' '.join(self.argv)}`: {cause}"
        if exit_code is not None:
            message += f" (exit code: {exit_code})"
        super().__init__(message)
        self.stage = "export"

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(
            {
                "program": self.program,
                "args": self.argv,
                "exit_code": self.exit_code,
                "stderr": self.stderr,
            }
        )
        return data


class ExporterNotRegisteredError(SvgglooError):
    """Raised when no exporter is registered for a target."""

    def __init__(self, target: str, available: list[str] | None = None) -> None:
        self.target = target
        message = f"Exporter '{target}' not registered"
        if available is not None:
            message += f". Available: {available}"
        super().__init__(message)


class RenderCancelledError(SvgglooError):
    """Raised when a run is cancelled between records.

    Attributes:
        artifacts: Files written before cancellation (left on disk)
    """

    def __init__(self, artifacts: list[Path]) -> None:
        self.artifacts = list(artifacts)
        super().__init__(f"Render cancelled after {len(self.artifacts)} record(s)")
