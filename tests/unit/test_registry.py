"""Unit tests for the jurisdiction registry.

Tests:
- Name normalization and DEFAULT fallback
- Province capital index
- Validation errors for malformed tables
- Loading tables from a custom directory
"""

import json
from types import MappingProxyType

import pytest
import yaml

from salarycalc.sdk.jurisdictions import (
    DEFAULT_KEY,
    JurisdictionDataError,
    JurisdictionRegistry,
    default_registry,
    load_registry,
    normalize_name,
)


def make_tables():
    """Minimal valid tables: one region, one municipality, plus DEFAULTs."""
    regions = {
        "Friuli-Venezia Giulia": {"method": "flat", "rate": 0.007},
        "DEFAULT": {"method": "flat", "rate": 0.0123},
    }
    municipalities = {
        "Trieste": {"flat_rate": 0.008, "exemption_threshold": 10000},
        "DEFAULT": {"flat_rate": 0.005},
    }
    provinces = [
        {"name": "Trieste", "code": "TS", "region": "Friuli-Venezia Giulia"},
        {"name": "Udine", "code": "UD", "region": "FRIULI VENEZIA GIULIA"},
    ]
    return regions, municipalities, provinces


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point the config directory at an empty temp dir."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("SALARY_CALC_CONFIG_PATH", str(config_dir))
    return config_dir


class TestNormalizeName:

    @pytest.mark.parametrize("raw,expected", [
        ("Emilia-Romagna", "EMILIA ROMAGNA"),
        ("  emilia   romagna ", "EMILIA ROMAGNA"),
        ("Valle d'Aosta", "VALLE D'AOSTA"),
        ("", ""),
        (None, ""),
    ])
    def test_values(self, raw, expected):
        assert normalize_name(raw) == expected


class TestLookups:
    """Lookups on a synthetic registry."""

    def test_lookup_by_any_spelling(self):
        registry = JurisdictionRegistry.from_dicts(*make_tables())

        rule = registry.lookup_region("friuli venezia giulia")
        assert rule.rate == 0.007
        assert registry.lookup_region("FRIULI-VENEZIA-GIULIA") is rule

    def test_unknown_names_fall_back_to_default(self):
        registry = JurisdictionRegistry.from_dicts(*make_tables())

        assert registry.lookup_region("ATLANTIDE").rate == 0.0123
        assert registry.lookup_region(None).rate == 0.0123
        assert registry.lookup_municipality("NOWHERE").flat_rate == 0.005

    def test_has_region_and_municipality(self):
        registry = JurisdictionRegistry.from_dicts(*make_tables())

        assert registry.has_region("Friuli-Venezia Giulia")
        assert not registry.has_region("Molise")
        assert registry.has_municipality("trieste")
        assert not registry.has_municipality("Udine")

    def test_listing_excludes_default(self):
        registry = JurisdictionRegistry.from_dicts(*make_tables())

        assert registry.regions() == ["FRIULI VENEZIA GIULIA"]
        assert registry.municipalities() == ["TRIESTE"]

    def test_provinces_match_normalized_region(self):
        """Capitals are grouped by normalized region name."""
        registry = JurisdictionRegistry.from_dicts(*make_tables())

        assert registry.provinces_of("friuli-venezia giulia") == {"Trieste", "Udine"}
        assert registry.provinces_of("") == set()
        assert registry.provinces_of("Lazio") == set()

    def test_tables_are_read_only(self):
        registry = JurisdictionRegistry.from_dicts(*make_tables())

        assert isinstance(registry._regions, MappingProxyType)
        with pytest.raises(TypeError):
            registry._regions["MOLISE"] = registry.lookup_region(DEFAULT_KEY)


class TestValidation:
    """Malformed tables raise JurisdictionDataError."""

    def test_missing_default_region(self):
        regions, municipalities, provinces = make_tables()
        del regions["DEFAULT"]

        with pytest.raises(JurisdictionDataError, match="regions: missing required 'DEFAULT'"):
            JurisdictionRegistry.from_dicts(regions, municipalities, provinces)

    def test_missing_default_municipality(self):
        regions, municipalities, provinces = make_tables()
        del municipalities["DEFAULT"]

        with pytest.raises(JurisdictionDataError, match="municipalities"):
            JurisdictionRegistry.from_dicts(regions, municipalities, provinces)

    def test_duplicate_after_normalization(self):
        regions, municipalities, provinces = make_tables()
        regions["FRIULI VENEZIA GIULIA"] = {"method": "flat", "rate": 0.01}

        with pytest.raises(JurisdictionDataError, match="duplicate"):
            JurisdictionRegistry.from_dicts(regions, municipalities, provinces)

    @pytest.mark.parametrize("bad_rule", [
        {"method": "flat"},
        {"method": "flat_above_threshold", "rate": 0.01},
        {"method": "brackets", "brackets": []},
        {"method": "brackets", "brackets": [{"up_to": 15000, "rate": 0.01}]},
        {"method": "brackets_with_adjustments", "brackets": [{"rate": 0.01}]},
        {"method": "progressive", "rate": 0.01},
        {"method": "flat", "rate": 0.01, "surprise": True},
    ])
    def test_invalid_regional_rule(self, bad_rule):
        regions, municipalities, provinces = make_tables()
        regions["MOLISE"] = bad_rule

        with pytest.raises(JurisdictionDataError, match="Invalid jurisdiction data"):
            JurisdictionRegistry.from_dicts(regions, municipalities, provinces)

    @pytest.mark.parametrize("bad_rule", [
        {"exemption_threshold": 10000},
        {"is_progressive": True, "flat_rate": 0.008},
    ])
    def test_invalid_municipal_rule(self, bad_rule):
        regions, municipalities, provinces = make_tables()
        municipalities["GORIZIA"] = bad_rule

        with pytest.raises(JurisdictionDataError):
            JurisdictionRegistry.from_dicts(regions, municipalities, provinces)

    def test_invalid_adjustment_kind(self):
        regions, municipalities, provinces = make_tables()
        regions["MOLISE"] = {
            "method": "brackets_with_adjustments",
            "brackets": [{"rate": 0.01}],
            "adjustments": [{"kind": "bonus_for_everyone", "amount": 100}],
        }

        with pytest.raises(JurisdictionDataError):
            JurisdictionRegistry.from_dicts(regions, municipalities, provinces)


class TestFromDirectory:
    """Loading YAML tables from disk."""

    def write_tables(self, directory, with_provinces=True):
        regions, municipalities, provinces = make_tables()
        directory.mkdir(parents=True, exist_ok=True)
        (directory / "regions.yaml").write_text(yaml.safe_dump(regions))
        (directory / "municipalities.yaml").write_text(yaml.safe_dump(municipalities))
        if with_provinces:
            (directory / "provinces.yaml").write_text(yaml.safe_dump({"provinces": provinces}))

    def test_loads_tables(self, tmp_path):
        self.write_tables(tmp_path)

        registry = JurisdictionRegistry.from_directory(tmp_path)

        assert registry.lookup_municipality("Trieste").exemption_threshold == 10000
        assert registry.provinces_of("Friuli-Venezia Giulia") == {"Trieste", "Udine"}

    def test_provinces_file_is_optional(self, tmp_path):
        self.write_tables(tmp_path, with_provinces=False)

        registry = JurisdictionRegistry.from_directory(tmp_path)

        assert registry.provinces_of("Friuli-Venezia Giulia") == set()

    def test_missing_table(self, tmp_path):
        with pytest.raises(JurisdictionDataError, match="not found"):
            JurisdictionRegistry.from_directory(tmp_path)

    def test_unparseable_yaml(self, tmp_path):
        self.write_tables(tmp_path)
        (tmp_path / "regions.yaml").write_text("DEFAULT: [unclosed")

        with pytest.raises(JurisdictionDataError, match="Cannot parse"):
            JurisdictionRegistry.from_directory(tmp_path)


class TestPackagedTables:
    """The tables shipped with the package."""

    def test_load_registry_is_cached(self):
        assert load_registry() is load_registry()

    def test_has_expected_regions(self):
        registry = load_registry()

        for region in ("LOMBARDIA", "LAZIO", "VENETO", "EMILIA ROMAGNA", "VALLE D'AOSTA"):
            assert registry.has_region(region)

    def test_province_capitals(self):
        registry = load_registry()

        assert "Milano" in registry.provinces_of("LOMBARDIA")
        assert "Bologna" in registry.provinces_of("Emilia-Romagna")
        assert "Livorno" in registry.provinces_of("TOSCANA")

    def test_province_codes_are_strings(self):
        """Codes like NO and OR stay strings, not YAML booleans."""
        registry = load_registry()

        codes = {p.code for p in registry.provinces_by_region("Piemonte")}
        assert "NO" in codes


class TestDefaultRegistry:
    """default_registry always returns the packaged tables."""

    def test_packaged_tables(self, isolated_config):
        assert default_registry() is load_registry()

    def test_settings_are_not_read(self, isolated_config, tmp_path):
        """A jurisdictions_dir setting does not swap the tables."""
        tables = tmp_path / "tables"
        TestFromDirectory().write_tables(tables)
        (isolated_config / "settings.json").write_text(json.dumps({"jurisdictions_dir": str(tables)}))

        registry = default_registry()

        assert registry is load_registry()
        assert registry.has_region("LOMBARDIA")

    def test_corrupt_settings_ignored(self, isolated_config):
        (isolated_config / "settings.json").write_text("{not json")

        assert default_registry().has_region("LOMBARDIA")
