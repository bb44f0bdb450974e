"""svggloo configuration system.

Configuration is YAML-based with CLI overrides (--field, --separator,
--export, --timeout, output directory argument).
Supports environment variable substitution (${VAR}) in config files.

Configuration file discovery (in priority order):
1. CLI --config argument
2. ./.svggloo/config.yaml
3. ./svggloo.yaml
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from svggloo.exporters.base import DEFAULT_TIMEOUT
from svggloo.models import ExportTarget, NamingPolicy
from svggloo.models.naming import DEFAULT_SEPARATOR

# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class OutputConfig:
    """Output configuration.

    Attributes:
        dir: Directory receiving the rendered files
    """

    dir: str = "output"


@dataclass
class NamingConfig:
    """Output file naming configuration.

    Attributes:
        fields: Data fields joined to build each file name (empty → first field)
        separator: String placed between field values
    """

    fields: list[str] = field(default_factory=list)
    separator: str = DEFAULT_SEPARATOR

    def __post_init__(self) -> None:
        """Validate naming configuration."""
        if isinstance(self.fields, str) or not isinstance(self.fields, list):
            raise ValueError(f"naming.fields must be a list of field names (got {self.fields!r})")
        if not all(isinstance(name, str) and name for name in self.fields):
            raise ValueError(f"naming.fields must contain non-empty strings (got {self.fields!r})")
        if not isinstance(self.separator, str):
            raise ValueError(f"naming.separator must be a string (got {self.separator!r})")

    def to_policy(self) -> NamingPolicy:
        """Build the immutable naming policy for a run."""
        return NamingPolicy.from_fields(self.fields, self.separator)


@dataclass
class ExportConfig:
    """PDF export configuration.

    Attributes:
        target: Converter to run (inkscape, cairosvg, svg2pdf); None disables export
        timeout: Per-invocation timeout in seconds (None disables it)
    """

    target: str | None = None
    timeout: float | None = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        """Validate export configuration."""
        # Raises ValueError for unknown converters
        ExportTarget.parse(self.target)

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"export.timeout must be positive (got {self.timeout})")

    @property
    def export_target(self) -> ExportTarget | None:
        """Get the configured target as an ExportTarget."""
        return ExportTarget.parse(self.target)


@dataclass
class SvgglooConfig:
    """Top-level svggloo configuration.

    Attributes:
        output: Output directory
        naming: Output file naming
        export: PDF export
    """

    output: OutputConfig = field(default_factory=OutputConfig)
    naming: NamingConfig = field(default_factory=NamingConfig)
    export: ExportConfig = field(default_factory=ExportConfig)

    # Runtime overrides (set by CLI)
    _config_path: Path | None = field(default=None, repr=False)

    @property
    def config_path(self) -> Path | None:
        """Get the path to the config file that was loaded."""
        return self._config_path


# =============================================================================
# Environment Variable Substitution
# =============================================================================

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)\}")


def substitute_env_vars(value: Any) -> Any:
    """Substitute environment variables in config values.

    Supports ${VAR} syntax, e.g. ``dir: "${HOME}/renders"``.

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with environment variables substituted

    Raises:
        ValueError: If a referenced variable is not set
    """
    if isinstance(value, str):

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable not set: {var_name}")
            return env_value

        return _ENV_VAR_RE.sub(replace_var, value)

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]

    return value


# =============================================================================
# Config File Discovery
# =============================================================================


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find configuration file in standard locations.

    Search order:
    1. ./.svggloo/config.yaml
    2. ./svggloo.yaml

    Args:
        start_path: Starting directory for search (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    start_path = start_path.resolve()

    candidates = [
        start_path / ".svggloo" / "config.yaml",
        start_path / "svggloo.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            return candidate

    return None


# =============================================================================
# Config Loading
# =============================================================================


def load_config_from_dict(data: dict[str, Any]) -> SvgglooConfig:
    """Load configuration from a dictionary.

    Args:
        data: Configuration dictionary

    Returns:
        SvgglooConfig instance

    Raises:
        ValueError: If a value is invalid
    """
    data = substitute_env_vars(data)

    config = SvgglooConfig()

    if "output" in data:
        output_data = data["output"] or {}
        config.output = OutputConfig(
            dir=str(output_data.get("dir", config.output.dir)),
        )

    if "naming" in data:
        naming_data = data["naming"] or {}
        config.naming = NamingConfig(
            fields=naming_data.get("fields") or [],
            separator=naming_data.get("separator", DEFAULT_SEPARATOR),
        )

    if "export" in data:
        export_data = data["export"] or {}
        config.export = ExportConfig(
            target=export_data.get("target"),
            timeout=export_data.get("timeout", DEFAULT_TIMEOUT),
        )

    return config


def load_config(
    config_path: Path | None = None,
    auto_discover: bool = True,
) -> SvgglooConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file
        auto_discover: Whether to search for config file if not specified

    Returns:
        SvgglooConfig instance

    Raises:
        FileNotFoundError: If config_path specified but doesn't exist
        ValueError: If the file is not valid YAML or holds invalid values
    """
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        found_path = config_path
    elif auto_discover:
        found_path = find_config_file()
    else:
        found_path = None

    if found_path is not None:
        with open(found_path, encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {found_path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {found_path}")
        config = load_config_from_dict(data)
        config._config_path = found_path
    else:
        config = SvgglooConfig()

    return config


def create_default_config() -> str:
    """Create default configuration YAML content.

    Returns:
        YAML string with default configuration and comments
    """
    return '''# svggloo configuration

# Where rendered files are written
output:
  dir: "output"

# Output file naming
# With no fields, files are named after the first CSV column.
naming:
  fields: []            # e.g. ["country", "state", "city"]
  separator: "-"

# PDF export (optional)
export:
  target: null          # inkscape, cairosvg, svg2pdf
  timeout: 300          # seconds per converter invocation
'''
