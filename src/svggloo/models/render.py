"""Render run entities.

- ExportTarget: closed set of supported PDF converters
- RenderResult: artifacts and metadata produced by one run
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import Any


class ExportTarget(Enum):
    """External converter used to turn rendered SVG files into PDF."""

    INKSCAPE = "inkscape"
    CAIROSVG = "cairosvg"
    SVG2PDF = "svg2pdf"

    @classmethod
    def parse(cls, value: "str | ExportTarget | None") -> "ExportTarget | None":
        """Convert a config/CLI value to an ExportTarget.

        Raises:
            ValueError: If the value names no known converter
        """
        if value is None or isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = [target.value for target in cls]
            raise ValueError(f"Invalid export target: {value}. Valid: {valid}") from None


@dataclass
class RenderResult:
    """Summary of a render run.

    Attributes:
        template_path: Template that was rendered
        data_path: Companion CSV file the records came from
        output_dir: Directory the artifacts were written to
        artifacts: Written files, in record order
        export_target: Converter used, if any
        started_at: Run start (UTC)
        finished_at: Run end (UTC)
        dry_run: True when nothing was written
    """

    template_path: Path
    data_path: Path
    output_dir: Path
    artifacts: list[Path] = field(default_factory=list)
    export_target: ExportTarget | None = None
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    finished_at: datetime | None = None
    dry_run: bool = False

    @property
    def record_count(self) -> int:
        """Number of records rendered."""
        return len(self.artifacts)

    @property
    def exported(self) -> bool:
        """True if the artifacts were handed to a converter."""
        return self.export_target is not None and not self.dry_run

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "template_path": str(self.template_path),
            "data_path": str(self.data_path),
            "output_dir": str(self.output_dir),
            "artifacts": [str(path) for path in self.artifacts],
            "record_count": self.record_count,
            "export_target": self.export_target.value if self.export_target else None,
            "exported": self.exported,
            "dry_run": self.dry_run,
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
        }
