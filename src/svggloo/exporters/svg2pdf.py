"""svg2pdf exporter.

svg2pdf takes only the input file and derives the output name itself:
``svg2pdf brochure.svg``
https://github.com/typst/svg2pdf
"""

from collections.abc import Sequence
from pathlib import Path

from svggloo.exporters.base import Exporter
from svggloo.models import ExportTarget


class SVG2PDFExporter(Exporter):
    """Per-file exporter passing only the input path."""

    target = ExportTarget.SVG2PDF
    program = "svg2pdf"

    def build_invocations(self, artifacts: Sequence[Path]) -> list[list[str]]:
        return [[str(src)] for src in artifacts]
