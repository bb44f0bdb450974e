"""Unit tests for converter preflight checks."""

import pytest

from svggloo.exporters import ExporterRegistry, setup_default_exporters
from svggloo.models import ExportTarget
from svggloo.utils.preflight import INSTALL_HINTS, PreflightChecker, PreflightResult, ToolCheck


@pytest.fixture
def only_inkscape(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pretend only inkscape is installed, reporting a fixed version."""

    def fake_which(name: str) -> str | None:
        return "/usr/bin/inkscape" if name == "inkscape" else None

    monkeypatch.setattr("svggloo.utils.preflight.shutil.which", fake_which)
    monkeypatch.setattr(
        "svggloo.exporters.base.Exporter.get_version",
        lambda self: f"{self.program} 1.0",
    )


class TestPreflightResult:
    """Tests for PreflightResult."""

    def test_missing_required_fails(self) -> None:
        """Test a missing required converter fails the check."""
        result = PreflightResult()

        result.add_check(ToolCheck(name="inkscape", program="inkscape", available=False, required=True))

        assert result.success is False
        assert result.errors == ["Required converter not found: inkscape"]

    def test_missing_optional_warns(self) -> None:
        """Test a missing optional converter only warns."""
        result = PreflightResult()

        result.add_check(ToolCheck(name="svg2pdf", program="svg2pdf", available=False))

        assert result.success is True
        assert result.warnings == ["Optional converter not found: svg2pdf"]

    def test_to_dict(self) -> None:
        """Test JSON serialization."""
        result = PreflightResult()
        result.add_check(ToolCheck(name="cairosvg", program="cairosvg", available=True, version="2.7.1"))

        data = result.to_dict()

        assert data["success"] is True
        assert data["checks"][0]["program"] == "cairosvg"
        assert data["checks"][0]["version"] == "2.7.1"


@pytest.mark.usefixtures("only_inkscape")
class TestPreflightChecker:
    """Tests for PreflightChecker."""

    def test_available_converter(self) -> None:
        """Test an installed converter reports path and version."""
        check = PreflightChecker().check_exporter(ExportTarget.INKSCAPE, required=True)

        assert check.available is True
        assert check.path == "/usr/bin/inkscape"
        assert check.version == "inkscape 1.0"
        assert check.required is True

    def test_missing_converter_has_hint(self) -> None:
        """Test a missing converter carries an install hint."""
        check = PreflightChecker().check_exporter(ExportTarget.SVG2PDF)

        assert check.available is False
        assert check.version is None
        assert check.message == INSTALL_HINTS[ExportTarget.SVG2PDF]

    def test_check_all_without_requirement(self) -> None:
        """Test missing converters are optional when none is required."""
        result = PreflightChecker().check_all()

        assert result.success is True
        assert [c.name for c in result.checks] == ["inkscape", "cairosvg", "svg2pdf"]
        assert len(result.warnings) == 2

    def test_check_all_required_present(self) -> None:
        """Test the run passes when the required converter exists."""
        result = PreflightChecker().check_all(required=ExportTarget.INKSCAPE)

        assert result.success is True

    def test_check_all_required_missing(self) -> None:
        """Test the run fails when the required converter is missing."""
        result = PreflightChecker().check_all(required=ExportTarget.CAIROSVG)

        assert result.success is False
        assert result.errors == ["Required converter not found: cairosvg"]

    def test_custom_registry(self) -> None:
        """Test only the given registry's converters are checked."""
        registry = ExporterRegistry()
        setup_default_exporters(registry)

        result = PreflightChecker(registry=registry).check_all()

        assert len(result.checks) == 3

    def test_check_command_available(self) -> None:
        """Test PATH lookups return the resolved path."""
        checker = PreflightChecker()

        assert checker.check_command_available("inkscape") == (True, "/usr/bin/inkscape")
        assert checker.check_command_available("svg2pdf") == (False, None)
