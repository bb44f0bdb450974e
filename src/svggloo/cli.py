"""svggloo CLI interface.

Commands:
- render: Merge a template's CSV data into one SVG per record
- check: Validate converter availability
- validate: Validate a template's syntax
- init: Create a default configuration file

Global options:
- --config: Path to configuration file
- --verbose: Enable verbose output with timestamps
- --quiet: Suppress info messages
- --ci: JSON log lines
- --version: Show version and exit
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from svggloo import __version__
from svggloo.config import SvgglooConfig, create_default_config, load_config
from svggloo.exceptions import SvgglooError
from svggloo.models import ExportTarget, NamingPolicy
from svggloo.utils.logging import configure_from_cli, get_logger

app = typer.Typer(
    name="svggloo",
    help="Render SVG templates with CSV data and export them to PDF",
    add_completion=False,
    no_args_is_help=True,
)

# Global state
_config: SvgglooConfig | None = None
_logger = get_logger()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"svggloo {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output with timestamps"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress info messages (warnings and errors only)"),
    ] = False,
    ci: Annotated[
        bool,
        typer.Option("--ci", help="Enable CI mode with JSON log lines"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """svggloo - merge CSV data into SVG templates.

    Each row of TEMPLATE's companion CSV file becomes one rendered SVG,
    optionally converted to PDF.
    """
    global _config

    configure_from_cli(verbose=verbose, quiet=quiet, ci=ci)

    try:
        _config = load_config(config_path=config)
        if _config.config_path:
            _logger.debug(f"Loaded config from: {_config.config_path}")
    except FileNotFoundError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except ValueError as e:
        _logger.error(f"Failed to load config: {e}")
        raise typer.Exit(1)


# =============================================================================
# render command
# =============================================================================


def _parse_export(value: str | None) -> ExportTarget | None:
    try:
        return ExportTarget.parse(value)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from None


@app.command()
def render(
    template: Annotated[
        Path,
        typer.Argument(
            help="SVG template; its data is read from the .csv file beside it",
            exists=True,
            dir_okay=False,
        ),
    ],
    output_dir: Annotated[
        Path | None,
        typer.Argument(help="Output directory (overrides config, default: output)"),
    ] = None,
    field: Annotated[
        list[str] | None,
        typer.Option(
            "--field",
            "-F",
            help="Data field used to name output files (repeat for several)",
        ),
    ] = None,
    separator: Annotated[
        str | None,
        typer.Option("--separator", "-s", help="Separator between field values"),
    ] = None,
    export: Annotated[
        str | None,
        typer.Option(
            "--export",
            "-e",
            help="Export to PDF with: inkscape, cairosvg, svg2pdf",
        ),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", help="Converter timeout in seconds", min=1),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Render without writing files or exporting"),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Print the run summary as JSON"),
    ] = False,
) -> None:
    """Render one file per CSV record.

    Exit codes:
        0: All records rendered (and exported)
        1: Error during rendering or export
    """
    from svggloo.pipeline import RenderOptions, RenderPipeline
    from svggloo.utils.preflight import PreflightChecker

    config = _config or SvgglooConfig()
    options = RenderOptions.from_config(config)

    # Apply CLI overrides to config
    if output_dir is not None:
        options.output_dir = output_dir
    if field or separator is not None:
        options.naming = NamingPolicy.from_fields(
            field or config.naming.fields,
            separator if separator is not None else config.naming.separator,
        )
    if export is not None:
        options.export_target = _parse_export(export)
    if timeout is not None:
        options.timeout = timeout
    options.dry_run = dry_run

    if options.export_target is not None and not dry_run:
        tool = PreflightChecker().check_exporter(options.export_target, required=True)
        if not tool.available:
            _logger.error(f"Required converter not found: {tool.program}. {tool.message}")
            raise typer.Exit(1)

    pipeline = RenderPipeline(config=config)
    try:
        result = pipeline.run_with_summary(template, options)
    except SvgglooError as e:
        _logger.error(f"Render failed: {e}", extra={"extra_data": e.to_dict()})
        raise typer.Exit(1)
    except OSError as e:
        _logger.error(f"Render failed: {e}")
        raise typer.Exit(1)

    if json_output:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    elif dry_run:
        for path in result.artifacts:
            typer.echo(str(path))
    else:
        typer.echo(f"Rendered {result.record_count} file(s) to: {result.output_dir}")
        if result.exported:
            typer.echo(f"Exported with: {result.export_target.value}")


# =============================================================================
# check command
# =============================================================================


@app.command()
def check(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output results as JSON"),
    ] = False,
) -> None:
    """Validate converter availability.

    The converter selected in config (export.target) is required; the
    others are reported as optional.

    Exit codes:
        0: All required converters available
        1: The configured converter is missing
    """
    from svggloo.utils.preflight import PreflightChecker

    required = _config.export.export_target if _config else None
    result = PreflightChecker().check_all(required=required)

    if json_output:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    else:
        typer.echo("\nConverter Check Results\n")
        for check_result in result.checks:
            status = "✅" if check_result.available else "❌"
            version_str = f" ({check_result.version})" if check_result.version else ""
            required_str = " [required]" if check_result.required else " [optional]"

            typer.echo(f"  {status} {check_result.program}{version_str}{required_str}")
            if check_result.available and check_result.path:
                typer.echo(f"     └─ {check_result.path}")
            elif not check_result.available:
                typer.echo(f"     └─ {check_result.message}")
        typer.echo()

    if not result.success:
        if not json_output:
            typer.echo("❌ Converter check FAILED")
            for error in result.errors:
                typer.echo(f"   • {error}")
        raise typer.Exit(1)

    if not json_output:
        typer.echo("✅ Converter check passed")


# =============================================================================
# validate command
# =============================================================================


@app.command()
def validate(
    template: Annotated[
        Path,
        typer.Argument(
            help="Path to template to validate",
            exists=True,
            dir_okay=False,
        ),
    ],
) -> None:
    """Validate a template's syntax and its companion data file."""
    from svggloo.exceptions import TemplateSyntaxError
    from svggloo.records import companion_data_path, read_records
    from svggloo.templates import TemplateEngine, read_template

    _logger.info(f"Validating template: {template}")

    try:
        TemplateEngine().load(template.name, read_template(template))
    except TemplateSyntaxError as e:
        typer.echo(f"❌ {e.message}")
        raise typer.Exit(1)

    data_path = companion_data_path(template)
    try:
        count = sum(1 for _ in read_records(data_path))
    except SvgglooError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(1)

    typer.echo(f"✅ Template is valid: {template} ({count} record(s) in {data_path.name})")


# =============================================================================
# init command
# =============================================================================


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite existing config"),
    ] = False,
) -> None:
    """Create a default svggloo.yaml in the current directory."""
    config_file = Path("svggloo.yaml")

    if config_file.exists() and not force:
        _logger.error(f"Config already exists: {config_file}")
        _logger.info("Use --force to overwrite")
        raise typer.Exit(1)

    config_file.write_text(create_default_config(), encoding="utf-8")
    _logger.info(f"Created config: {config_file}")
    typer.echo(f"✅ svggloo configuration initialized: {config_file}")


if __name__ == "__main__":
    app()
