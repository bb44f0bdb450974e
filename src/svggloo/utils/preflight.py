"""Preflight validation of external converters.

Converters run only after every record has been rendered, so a missing
binary would otherwise surface late. ``svggloo check`` and
``svggloo render --export`` look them up first.
"""

import shutil
from dataclasses import dataclass, field
from typing import Any

from svggloo.exporters import ExporterRegistry, get_registry, setup_default_exporters
from svggloo.models import ExportTarget

# Where to get each converter
INSTALL_HINTS: dict[ExportTarget, str] = {
    ExportTarget.INKSCAPE: "Install from: https://inkscape.org/release/",
    ExportTarget.CAIROSVG: "Install via: pip install cairosvg",
    ExportTarget.SVG2PDF: "Install via: cargo install svg2pdf-cli",
}


@dataclass
class ToolCheck:
    """Result of checking a single converter.

    Attributes:
        name: Export target name
        program: Executable looked up on PATH
        available: Whether the executable was found
        version: Version string if available
        required: Whether this run needs the converter
        path: Path to executable if available
        message: Status message (human-readable context)
    """

    name: str
    program: str
    available: bool
    version: str | None = None
    required: bool = False
    path: str | None = None
    message: str = ""


@dataclass
class PreflightResult:
    """Result of preflight validation.

    Attributes:
        success: Whether every required converter is available
        checks: Individual converter check results
        errors: Messages for missing required converters
        warnings: Messages for missing optional converters
    """

    success: bool = True
    checks: list[ToolCheck] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_check(self, check: ToolCheck) -> None:
        """Add a converter check result."""
        self.checks.append(check)

        if not check.available:
            if check.required:
                self.success = False
                self.errors.append(f"Required converter not found: {check.program}")
            else:
                self.warnings.append(f"Optional converter not found: {check.program}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "success": self.success,
            "checks": [
                {
                    "name": c.name,
                    "program": c.program,
                    "available": c.available,
                    "version": c.version,
                    "required": c.required,
                    "path": c.path,
                    "message": c.message,
                }
                for c in self.checks
            ],
            "errors": self.errors,
            "warnings": self.warnings,
        }


class PreflightChecker:
    """Looks up converter executables before a run.

    Usage:
        checker = PreflightChecker()
        result = checker.check_all(required=ExportTarget.INKSCAPE)
        if not result.success:
            raise typer.Exit(1)
    """

    def __init__(self, timeout: int = 10, registry: ExporterRegistry | None = None) -> None:
        """Initialize preflight checker.

        Args:
            timeout: Timeout in seconds for version checks
            registry: Exporter registry (global default registry if None)
        """
        self.timeout = timeout
        if registry is None:
            registry = setup_default_exporters(get_registry())
        self._registry = registry

    def check_command_available(self, command: str) -> tuple[bool, str | None]:
        """Check if a command is available in PATH.

        Returns:
            Tuple of (available, path)
        """
        path = shutil.which(command)
        return path is not None, path

    def check_exporter(self, target: ExportTarget, required: bool = False) -> ToolCheck:
        """Check a single converter.

        Args:
            target: Export target to check
            required: Whether the current run needs it

        Returns:
            ToolCheck result
        """
        exporter = self._registry.get_exporter(target, timeout=self.timeout)
        program = exporter.program
        available, path = self.check_command_available(program)

        if available:
            return ToolCheck(
                name=target.value,
                program=program,
                available=True,
                version=exporter.get_version(),
                required=required,
                path=path,
                message="SVG → PDF converter",
            )

        return ToolCheck(
            name=target.value,
            program=program,
            available=False,
            required=required,
            message=INSTALL_HINTS.get(target, ""),
        )

    def check_all(self, required: ExportTarget | None = None) -> PreflightResult:
        """Check every registered converter.

        Args:
            required: Converter the run depends on (others are optional)

        Returns:
            PreflightResult with one check per registered converter
        """
        result = PreflightResult()
        for name in self._registry.list_exporters():
            target = ExportTarget(name)
            result.add_check(self.check_exporter(target, required=target == required))
        return result
