"""Test fixtures for svggloo.

This package provides sample templates with their companion CSV files,
and a fake process runner for exporter tests.

Sample templates:
- templates/cities.svg + cities.csv: three cities, fields city/state/country/population
"""

import subprocess
from pathlib import Path

# Path to fixtures directory
FIXTURES_DIR = Path(__file__).parent

# Path to sample templates
TEMPLATES_DIR = FIXTURES_DIR / "templates"

# Specific sample template paths
CITIES_TEMPLATE = TEMPLATES_DIR / "cities.svg"
CITIES_DATA = TEMPLATES_DIR / "cities.csv"

# Example projects shipped at the repository root
BROCHURE_EXAMPLE = FIXTURES_DIR.parents[1] / "examples" / "brochure" / "brochure.svg"


class FakeRunner:
    """Process runner recording invocations instead of spawning them.

    Attributes:
        calls: (argv, timeout) for every invocation, in order
    """

    def __init__(
        self,
        returncode: int = 0,
        stderr: str = "",
        stdout: str = "",
        missing: bool = False,
        timeout: bool = False,
    ) -> None:
        self.returncode = returncode
        self.stderr = stderr
        self.stdout = stdout
        self.missing = missing
        self.timeout = timeout
        self.calls: list[tuple[list[str], float | None]] = []

    def __call__(self, argv: list[str], timeout: float | None) -> subprocess.CompletedProcess:
        self.calls.append((list(argv), timeout))
        if self.missing:
            raise FileNotFoundError(2, "No such file or directory", argv[0])
        if self.timeout:
            raise subprocess.TimeoutExpired(argv, timeout or 0)
        return subprocess.CompletedProcess(
            argv, self.returncode, stdout=self.stdout, stderr=self.stderr
        )

    @property
    def argvs(self) -> list[list[str]]:
        """Recorded argument vectors, program included."""
        return [argv for argv, _ in self.calls]
