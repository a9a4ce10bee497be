"""Unit tests for the salary-calc CLI."""

import json

import pytest
import yaml
from click.testing import CliRunner

from salarycalc.cli.__main__ import cli


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Set up an isolated config directory."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv("SALARY_CALC_CONFIG_PATH", str(config_dir))
    return config_dir


def invoke(*args):
    return CliRunner().invoke(cli, list(args))


class TestNetCommand:

    def test_json_output(self, isolated_config):
        result = invoke("net", "30000", "--format", "json")

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["selected_region"] == "LOMBARDIA"
        assert data["selected_municipality"] == "MILANO"
        assert data["regional_surtax"] == 377.94
        assert data["annual_net"] == pytest.approx(23360.52, abs=0.01)
        assert data["incentive_applied"] == "NONE"

    def test_options(self, isolated_config):
        result = invoke("net", "30000", "-r", "puglia", "-m", "bari", "-i", "sud", "--format", "json")

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["incentive_applied"] == "SUD"
        assert data["company_savings"] == pytest.approx(1740)

    def test_manual_rate(self, isolated_config):
        result = invoke("net", "30000", "--manual-rate", "0.5", "--format", "json")

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["selected_municipality"] == "Manuale"
        assert data["municipal_surtax"] == pytest.approx(136.22, abs=0.01)

    def test_manual_rate_and_municipality_conflict(self, isolated_config):
        result = invoke("net", "30000", "-m", "ROMA", "--manual-rate", "0.5")

        assert result.exit_code != 0
        assert "not both" in result.output

    def test_defaults_from_settings(self, isolated_config):
        assert invoke("settings", "set", "default_region", "VENETO").exit_code == 0

        data = json.loads(invoke("net", "30000", "--format", "json").output)
        assert data["selected_region"] == "VENETO"

    def test_text_output(self, isolated_config):
        result = invoke("net", "30000")

        assert result.exit_code == 0, result.output
        assert "Netto annuo" in result.output
        assert "Costo totale" in result.output

    def test_unknown_incentive_rejected(self, isolated_config):
        result = invoke("net", "30000", "-i", "BONUS")
        assert result.exit_code != 0


class TestCostCommand:

    def test_json_output(self, isolated_config):
        result = invoke("cost", "30000", "--age", "28", "--sex", "F",
                        "--unemployment-months", "13", "--format", "json")

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["applied_incentive"]["id"] == "DONNE_V2"
        assert data["final_cost"] == 33342.22
        assert [c["id"] for c in data["candidates"]][0] == "DONNE_V2"

    def test_text_output(self, isolated_config):
        result = invoke("cost", "30000", "--age", "55", "--unemployment-months", "24")

        assert result.exit_code == 0, result.output
        assert "Incentivo Over 50" in result.output

    def test_age_required(self, isolated_config):
        result = invoke("cost", "30000")
        assert result.exit_code != 0


class TestListings:

    def test_regions(self, isolated_config):
        result = invoke("regions")

        assert result.exit_code == 0
        assert "LOMBARDIA" in result.output
        assert "DEFAULT schedule" in result.output

    def test_provinces(self, isolated_config):
        result = invoke("provinces", "Emilia-Romagna")

        assert result.exit_code == 0
        assert "BO  Bologna" in result.output

    def test_provinces_unknown_region(self, isolated_config):
        result = invoke("provinces", "Atlantide")

        assert result.exit_code != 0
        assert "No provinces found" in result.output

    def test_jurisdictions_dir_from_settings(self, isolated_config, tmp_path):
        """The CLI loads custom tables when jurisdictions_dir is set."""
        tables = tmp_path / "tables"
        tables.mkdir()
        (tables / "regions.yaml").write_text(yaml.safe_dump({
            "MOLISE": {"method": "flat", "rate": 0.02},
            "DEFAULT": {"method": "flat", "rate": 0.01},
        }))
        (tables / "municipalities.yaml").write_text(yaml.safe_dump({
            "MILANO": {"flat_rate": 0.0},
            "DEFAULT": {"flat_rate": 0.0},
        }))
        assert invoke("settings", "set", "jurisdictions_dir", str(tables)).exit_code == 0

        result = invoke("regions")
        assert result.exit_code == 0, result.output
        assert "MOLISE" in result.output
        assert "LOMBARDIA" not in result.output

        data = json.loads(invoke("net", "30000", "-r", "MOLISE", "--format", "json").output)
        assert data["regional_surtax"] == pytest.approx(round(data["taxable_income"] * 0.02, 2))

    def test_missing_jurisdictions_dir(self, isolated_config, tmp_path):
        invoke("settings", "set", "jurisdictions_dir", str(tmp_path / "missing"))

        result = invoke("net", "30000")

        assert result.exit_code != 0
        assert "not found" in result.output


class TestSettingsCommands:

    def test_show_defaults(self, isolated_config):
        result = invoke("settings", "show")

        assert result.exit_code == 0
        assert "File exists: False" in result.output
        assert "default_region: LOMBARDIA (default)" in result.output

    def test_set_and_unset(self, isolated_config):
        result = invoke("settings", "set", "manual_municipal_rate", "0.9")
        assert result.exit_code == 0, result.output

        shown = invoke("settings", "show").output
        assert "manual_municipal_rate: 0.9" in shown
        assert "manual_municipal_rate: 0.9 (default)" not in shown

        assert invoke("settings", "unset", "manual_municipal_rate").exit_code == 0
        assert "manual_municipal_rate: 0.8 (default)" in invoke("settings", "show").output

    def test_set_non_numeric_rate(self, isolated_config):
        result = invoke("settings", "set", "manual_municipal_rate", "abc")
        assert result.exit_code != 0

    def test_set_out_of_range(self, isolated_config):
        result = invoke("settings", "set", "manual_municipal_rate", "250")

        assert result.exit_code != 0
        assert "Invalid settings" in result.output

    def test_unset_missing_key(self, isolated_config):
        result = invoke("settings", "unset", "default_region")

        assert result.exit_code == 0
        assert "was not set" in result.output
