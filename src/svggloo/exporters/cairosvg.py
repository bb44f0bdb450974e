"""CairoSVG exporter.

CairoSVG converts one file per process with explicit input and output:
``cairosvg -f pdf -o brochure.pdf brochure.svg``
https://cairosvg.org/documentation/
"""

from collections.abc import Sequence
from pathlib import Path

from svggloo.exporters.base import Exporter, get_in_out_file
from svggloo.models import ExportTarget


class CairoSVGExporter(Exporter):
    """Per-file exporter writing ``X.pdf`` beside each ``X.svg``."""

    target = ExportTarget.CAIROSVG
    program = "cairosvg"

    def build_invocations(self, artifacts: Sequence[Path]) -> list[list[str]]:
        invocations: list[list[str]] = []
        for src in artifacts:
            in_svg, out_pdf = get_in_out_file(src)
            invocations.append(["-f", "pdf", "-o", out_pdf, in_svg])
        return invocations
