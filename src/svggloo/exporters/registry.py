"""Exporter registry.

Maps each export target to the exporter class that implements it. The
target is chosen in YAML config or on the command line, never hardcoded.
"""

from svggloo.exceptions import ExporterNotRegisteredError
from svggloo.exporters.base import DEFAULT_TIMEOUT, Exporter, ProcessRunner
from svggloo.models import ExportTarget


class ExporterRegistry:
    """Registry of exporter classes by export target.

    Configuration example:
        export:
          target: inkscape   # → InkscapeExporter
          timeout: 300

    Adding a converter:
        1. Add a member to ExportTarget
        2. Subclass Exporter and implement build_invocations()
        3. Register it here
    """

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._exporters: dict[ExportTarget, type[Exporter]] = {}

    def register(self, target: ExportTarget, exporter_class: type[Exporter]) -> None:
        """Register the exporter class for a target.

        Args:
            target: Export target
            exporter_class: Exporter implementation
        """
        self._exporters[target] = exporter_class

    def get_exporter(
        self,
        target: ExportTarget | str,
        timeout: float | None = DEFAULT_TIMEOUT,
        runner: ProcessRunner | None = None,
    ) -> Exporter:
        """Get an exporter instance for a target.

        Args:
            target: Export target (or its config name)
            timeout: Per-invocation timeout in seconds
            runner: Process runner override

        Returns:
            Instantiated exporter

        Raises:
            ExporterNotRegisteredError: If no exporter is registered for target
        """
        try:
            resolved = ExportTarget.parse(target)
        except ValueError:
            raise ExporterNotRegisteredError(str(target), self.list_exporters()) from None

        if resolved is None:
            raise ExporterNotRegisteredError("none", self.list_exporters())

        if resolved not in self._exporters:
            raise ExporterNotRegisteredError(resolved.value, self.list_exporters())

        return self._exporters[resolved](timeout=timeout, runner=runner)

    def list_exporters(self) -> list[str]:
        """Get registered target names."""
        return [target.value for target in self._exporters]


# Global registry instance
_registry: ExporterRegistry | None = None


def get_registry() -> ExporterRegistry:
    """Get the global exporter registry instance."""
    global _registry
    if _registry is None:
        _registry = ExporterRegistry()
    return _registry


def reset_registry() -> None:
    """Reset the global registry (primarily for testing)."""
    global _registry
    _registry = None
