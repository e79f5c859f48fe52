"""Tests for the command-line interface."""

import json

import pytest
from typer.testing import CliRunner

from sapengine import __version__
from sapengine.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    """Keep the CLI from replacing the test session's log handlers."""
    monkeypatch.setattr("sapengine.cli.ensure_logging", lambda level=None: None)


@pytest.fixture
def description_file(tmp_path, minimal_building_dict):
    path = tmp_path / "building.json"
    path.write_text(json.dumps(minimal_building_dict))
    return path


@pytest.fixture
def certificate_file(tmp_path, certificate_record):
    path = tmp_path / "certificate.json"
    path.write_text(json.dumps(certificate_record))
    return path


class TestSimulate:
    """simulate command."""

    def test_table(self, description_file):
        """Test the demand table is printed."""
        result = runner.invoke(app, ["simulate", str(description_file)])

        assert result.exit_code == 0
        assert "Space heating" in result.output

    def test_json(self, description_file):
        """Test --json prints the full result."""
        result = runner.invoke(app, ["simulate", str(description_file), "--json"])

        assert result.exit_code == 0
        assert "annual_space_heating_kwh" in result.output

    def test_missing_file(self, tmp_path):
        """Test a missing file exits with an error."""
        result = runner.invoke(app, ["simulate", str(tmp_path / "nope.json")])

        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_invalid_description(self, tmp_path, minimal_building_dict):
        """Test an invalid description reports the field."""
        minimal_building_dict["region"] = 99
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(minimal_building_dict))

        result = runner.invoke(app, ["simulate", str(path)])

        assert result.exit_code == 1
        assert "region" in result.output


class TestInferAndRecommend:
    """infer and recommend commands."""

    def test_infer_writes_output(self, certificate_file, tmp_path):
        """Test the inferred description is saved."""
        output = tmp_path / "description.json"

        result = runner.invoke(app, ["infer", str(certificate_file), "-o", str(output)])

        assert result.exit_code == 0
        assert json.loads(output.read_text())["region"] == 13

    def test_recommend(self, certificate_file):
        """Test recommendations are listed."""
        result = runner.invoke(app, ["recommend", str(certificate_file), "--workers", "1"])

        assert result.exit_code == 0
        assert "Recommended Upgrades" in result.output

    def test_version(self):
        """Test the version command."""
        result = runner.invoke(app, ["version"])

        assert __version__ in result.output
