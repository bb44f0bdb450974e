"""Render pipeline orchestrator.

Merges every record of a template's companion CSV file into the template,
writes one file per record and optionally hands the whole batch to a PDF
exporter.

The pipeline sequence:
1. Locate the companion data file (``brochure.svg`` → ``brochure.csv``)
2. Prepare the output directory
3. Load the template once
4. For each record: name it, render it, write it
5. Export all written files in one batch (optional)

A record that fails to name or render aborts the run. Files written for
earlier records stay on disk.
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from svggloo.config import SvgglooConfig
from svggloo.exceptions import RenderCancelledError, SvgglooError
from svggloo.exporters import DEFAULT_TIMEOUT, ProcessRunner, get_registry, setup_default_exporters
from svggloo.models import ExportTarget, NamingPolicy, Record, RenderResult
from svggloo.naming import check_name, compute_name
from svggloo.records import companion_data_path, read_records
from svggloo.templates import TemplateEngine, TemplateHandle, read_template

logger = logging.getLogger(__name__)


@dataclass
class RenderOptions:
    """Options for controlling a render run.

    Attributes:
        output_dir: Directory receiving rendered files
        export_target: Converter to run after rendering (None skips export)
        naming: Naming policy for output files
        timeout: Per-invocation converter timeout in seconds
        dry_run: Name and render every record without writing or exporting
    """

    output_dir: Path = field(default_factory=lambda: Path("output"))
    export_target: ExportTarget | None = None
    naming: NamingPolicy = field(default_factory=NamingPolicy)
    timeout: float | None = DEFAULT_TIMEOUT
    dry_run: bool = False

    @classmethod
    def from_config(cls, config: SvgglooConfig) -> "RenderOptions":
        """Build options from loaded configuration."""
        return cls(
            output_dir=Path(config.output.dir),
            export_target=config.export.export_target,
            naming=config.naming.to_policy(),
            timeout=config.export.timeout,
        )


class RenderPipeline:
    """Renders a template once per CSV record.

    Usage:
        pipeline = RenderPipeline(config)
        artifacts = pipeline.run(Path("brochure.svg"), Path("output"))
    """

    def __init__(
        self,
        config: SvgglooConfig | None = None,
        runner: ProcessRunner | None = None,
    ) -> None:
        """Initialize the render pipeline.

        Args:
            config: svggloo configuration (uses defaults if None)
            runner: Process runner handed to exporters (subprocess by default)
        """
        self.config = config or SvgglooConfig()
        self._runner = runner

        setup_default_exporters()
        self._registry = get_registry()

    def run(
        self,
        template_path: Path,
        output_dir: Path | None = None,
        export_target: ExportTarget | None = None,
        naming_policy: NamingPolicy | None = None,
        cancel_event: threading.Event | None = None,
    ) -> list[Path]:
        """Render every record of a template's data file.

        Arguments left as None fall back to the configuration.

        Args:
            template_path: Template file; its data lives beside it as ``.csv``
            output_dir: Directory receiving rendered files
            export_target: Converter to run on the rendered files
            naming_policy: Fields and separator for output names
            cancel_event: Checked between records; when set the run stops

        Returns:
            Written file paths, in record order

        Raises:
            OSError: If the template or output directory cannot be accessed
            DataFormatError: If the data file is missing or malformed
            MissingFieldError: If a record lacks a naming field
            TemplateSyntaxError: If the template cannot be parsed
            TemplateRenderError: If a record cannot be rendered
            ExportProcessError: If the converter fails
            RenderCancelledError: If cancel_event was set
        """
        options = self._resolve_options(output_dir, export_target, naming_policy)
        result = self.run_with_summary(template_path, options, cancel_event)
        return result.artifacts

    def run_with_summary(
        self,
        template_path: Path,
        options: RenderOptions | None = None,
        cancel_event: threading.Event | None = None,
    ) -> RenderResult:
        """Render every record and return a summary of the run.

        Args:
            template_path: Template file
            options: Run options (defaults from configuration)
            cancel_event: Checked between records; when set the run stops

        Returns:
            RenderResult listing the written (or, for dry runs, planned) files
        """
        options = options or RenderOptions.from_config(self.config)
        template_path = Path(template_path)
        data_path = companion_data_path(template_path)

        result = RenderResult(
            template_path=template_path,
            data_path=data_path,
            output_dir=options.output_dir,
            export_target=options.export_target,
            dry_run=options.dry_run,
        )

        logger.info("Rendering %s with data from %s", template_path, data_path)

        if not options.dry_run:
            options.output_dir.mkdir(parents=True, exist_ok=True)

        # Parse once, render many; the engine lives for this run only
        engine = TemplateEngine()
        try:
            source = read_template(template_path)
            handle = engine.load(template_path.name, source)
        except SvgglooError as e:
            raise e.with_context(stage="load")

        # Row numbers count the header as row 1
        for row, record in enumerate(read_records(data_path), start=2):
            if cancel_event is not None and cancel_event.is_set():
                logger.warning("Render cancelled before row %d", row)
                raise RenderCancelledError(result.artifacts)

            output_file = self._render_one(engine, handle, record, row, options)
            result.artifacts.append(output_file)

        logger.info(
            "Rendered %d file(s) to %s%s",
            result.record_count,
            options.output_dir,
            " (dry run)" if options.dry_run else "",
        )

        if options.export_target is not None and not options.dry_run:
            self._export(result.artifacts, options.export_target, options.timeout)

        result.finished_at = datetime.now(UTC)
        return result

    def _render_one(
        self,
        engine: TemplateEngine,
        handle: TemplateHandle,
        record: Record,
        row: int,
        options: RenderOptions,
    ) -> Path:
        """Name, render and write a single record.

        Errors are tagged with the row and stage before propagating.
        """
        try:
            base_name = check_name(compute_name(record, options.naming))
        except SvgglooError as e:
            logger.error("Row %d: cannot name output file: %s", row, e.message)
            raise e.with_context(row=row, stage="naming")

        try:
            rendered = engine.render(handle, record)
        except SvgglooError as e:
            logger.error("Row %d (%s): render failed: %s", row, base_name, e.message)
            raise e.with_context(row=row, stage="render")

        output_file = options.output_dir / f"{base_name}{Path(handle.name).suffix}"
        if not options.dry_run:
            output_file.write_text(rendered, encoding="utf-8")
        logger.debug("Row %d → %s", row, output_file)

        return output_file

    def _export(
        self,
        artifacts: list[Path],
        target: ExportTarget,
        timeout: float | None,
    ) -> None:
        """Hand the whole batch to the exporter for target."""
        exporter = self._registry.get_exporter(
            target,
            timeout=timeout,
            runner=self._runner,
        )
        exporter.export(artifacts)

    def _resolve_options(
        self,
        output_dir: Path | None,
        export_target: ExportTarget | None,
        naming_policy: NamingPolicy | None,
    ) -> RenderOptions:
        """Merge explicit run arguments over configured defaults."""
        options = RenderOptions.from_config(self.config)
        if output_dir is not None:
            options.output_dir = Path(output_dir)
        if export_target is not None:
            options.export_target = export_target
        if naming_policy is not None:
            options.naming = naming_policy
        return options
