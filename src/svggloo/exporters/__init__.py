"""svggloo exporters - external SVG → PDF converters.

Exporters:
- InkscapeExporter: one batched Inkscape process for all files
- CairoSVGExporter: one CairoSVG process per file, explicit output path
- SVG2PDFExporter: one svg2pdf process per file, output name inferred
"""

from svggloo.exporters.base import (
    DEFAULT_TIMEOUT,
    Exporter,
    ProcessRunner,
    get_in_out_file,
    run_process,
)
from svggloo.exporters.cairosvg import CairoSVGExporter
from svggloo.exporters.inkscape import InkscapeExporter
from svggloo.exporters.registry import ExporterRegistry, get_registry, reset_registry
from svggloo.exporters.svg2pdf import SVG2PDFExporter
from svggloo.models import ExportTarget

__all__ = [
    "DEFAULT_TIMEOUT",
    "CairoSVGExporter",
    "Exporter",
    "ExporterRegistry",
    "InkscapeExporter",
    "ProcessRunner",
    "SVG2PDFExporter",
    "get_in_out_file",
    "get_registry",
    "reset_registry",
    "run_process",
    "setup_default_exporters",
]


def setup_default_exporters(registry: ExporterRegistry | None = None) -> ExporterRegistry:
    """Register all built-in exporters.

    Args:
        registry: Registry to populate (uses global if None)

    Returns:
        Populated ExporterRegistry
    """
    if registry is None:
        registry = get_registry()

    registry.register(ExportTarget.INKSCAPE, InkscapeExporter)
    registry.register(ExportTarget.CAIROSVG, CairoSVGExporter)
    registry.register(ExportTarget.SVG2PDF, SVG2PDFExporter)

    return registry
