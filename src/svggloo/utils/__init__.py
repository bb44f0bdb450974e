"""svggloo utility modules.

- logging: Standardized logging with human/verbose/JSON modes
- preflight: Converter availability checks
"""

from svggloo.utils.logging import configure_from_cli, get_logger, setup_logging
from svggloo.utils.preflight import PreflightChecker, PreflightResult

__all__ = [
    "configure_from_cli",
    "get_logger",
    "setup_logging",
    "PreflightChecker",
    "PreflightResult",
]
