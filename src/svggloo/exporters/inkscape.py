"""Inkscape exporter.

Inkscape converts a whole batch in a single process:
``inkscape --export-area-drawing --batch-process --export-type=pdf a.svg b.svg``
https://inkscape.org/doc/inkscape-man.html
"""

from collections.abc import Sequence
from pathlib import Path

from svggloo.exporters.base import Exporter
from svggloo.models import ExportTarget

# Crop to the drawing, no GUI, PDF output
INKSCAPE_FLAGS: list[str] = [
    "--export-area-drawing",
    "--batch-process",
    "--export-type=pdf",
]


class InkscapeExporter(Exporter):
    """Batch exporter: one Inkscape invocation carries every file."""

    target = ExportTarget.INKSCAPE
    program = "inkscape"

    def build_invocations(self, artifacts: Sequence[Path]) -> list[list[str]]:
        return [[*INKSCAPE_FLAGS, *(str(path) for path in artifacts)]]
