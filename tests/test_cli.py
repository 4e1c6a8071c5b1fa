"""
Tests for the command-line interface.

Run with: pytest tests/test_cli.py -v
"""

import json

import pytest
from typer.testing import CliRunner

from facadeflux import __version__
from facadeflux.cli import app


runner = CliRunner()


@pytest.fixture(autouse=True)
def _logging_restored(restore_logging):
    """Every CLI invocation reconfigures logging."""
    yield


class TestComputeCommand:
    """Tests for `facadeflux compute`."""

    def test_compute_table(self, model_file):
        """Test the default rich table output."""
        result = runner.invoke(app, ["compute", str(model_file)])

        assert result.exit_code == 0, result.output
        assert "Average ETTV" in result.output
        assert "40.03" in result.output
        assert "PASS" in result.output

    def test_compute_json(self, model_file):
        """Test JSON output."""
        result = runner.invoke(app, ["--log-level", "ERROR", "compute", str(model_file), "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["index"] == "ettv"
        assert data["overall_average_index_w_m2"] == pytest.approx(40.03, abs=0.01)
        assert data["passed"] is True

    def test_compute_retv_with_limit(self, model_file):
        """Test index selection and limit override."""
        result = runner.invoke(
            app,
            ["--log-level", "ERROR", "compute", str(model_file), "--index", "retv", "--limit", "5", "--json"],
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["index"] == "retv"
        assert data["limit_w_m2"] == 5.0
        assert data["passed"] is False

    def test_compute_coefficient_override(self, model_file):
        """Test coefficient overrides from the command line."""
        result = runner.invoke(
            app,
            ["--log-level", "ERROR", "compute", str(model_file), "--wall-coefficient", "15", "--json"],
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["coefficients"]["wall_conductance"] == 15.0
        assert data["overall_average_index_w_m2"] == pytest.approx(41.03, abs=0.01)

    def test_compute_summary(self, model_file):
        """Test printing the full text summary."""
        result = runner.invoke(app, ["compute", str(model_file), "--summary"])

        assert result.exit_code == 0, result.output
        assert "Breakdown by orientation:" in result.output

    def test_compute_missing_file(self, tmp_path):
        """Test that a missing model file exits with an error."""
        result = runner.invoke(app, ["compute", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_compute_invalid_document(self, tmp_path):
        """Test that schema errors exit with an error."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"surfaces": [{"id": 1, "area": 1.0, "construction": "X"}]}), encoding="utf-8")
        result = runner.invoke(app, ["compute", str(path)])

        assert result.exit_code == 1
        assert "Invalid model document" in result.output

    def test_compute_invalid_json(self, tmp_path):
        """Test that malformed JSON exits with an error."""
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        result = runner.invoke(app, ["compute", str(path)])

        assert result.exit_code == 1
        assert "not valid JSON" in result.output


class TestToolCommands:
    """Tests for the helper commands."""

    def test_sc2(self):
        """Test SC2 lookup for an east window."""
        result = runner.invoke(app, ["sc2", "--projection", "0.5", "--height", "1.0", "--orientation", "E"])

        assert result.exit_code == 0, result.output
        assert "SC2 = 0.7248" in result.output

    def test_uvalue(self):
        """Test U-value of a single explicit layer."""
        result = runner.invoke(app, ["uvalue", "--layer", "Test layer:0.1:1.0"])

        assert result.exit_code == 0, result.output
        assert "U-value: 3.846 W/m²K" in result.output

    def test_uvalue_library_material_with_colon(self):
        """Test library names that contain a colon."""
        result = runner.invoke(app, ["uvalue", "--layer", "Plaster: gypsum:0.37", "--rsi", "0.13", "--rse", "0.57"])

        assert result.exit_code == 0, result.output
        assert "U-value: 0.588 W/m²K" in result.output

    def test_uvalue_unknown_material(self):
        """Test that unknown library names exit with an error."""
        result = runner.invoke(app, ["uvalue", "--layer", "Unobtainium:0.1"])

        assert result.exit_code == 1
        assert "Unknown material" in result.output

    def test_materials(self):
        """Test listing the material library."""
        result = runner.invoke(app, ["materials", "--search", "glass"])

        assert result.exit_code == 0, result.output
        assert "Glass, sheet" in result.output
        assert "Bitumen" not in result.output

    def test_version(self):
        """Test the version command."""
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.output
