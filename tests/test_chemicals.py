"""Tests for the chemical property table and lookups."""

import json

import pytest

from data.chemicals import (
    CHEMICAL_DATABASE,
    BuiltinChemicalLookup,
    FileChemicalLookup,
    convert_concentration_unit,
    get_exposure_guidelines,
    get_threshold_descriptions,
    mg_per_ppm,
)
from models.hazard_zones import zone_thresholds


class TestBuiltinLookup:
    def test_known_chemicals(self):
        lookup = BuiltinChemicalLookup()
        assert len(lookup.names()) == 10
        assert "chlorine" in lookup.names()
        assert lookup.get("Chlorine").molecular_weight == pytest.approx(70.91)

    def test_unknown_returns_none(self):
        assert BuiltinChemicalLookup().get("unobtainium") is None

    def test_database_is_read_only(self):
        with pytest.raises(TypeError):
            CHEMICAL_DATABASE["water"] = None


class TestFileChemicalLookup:
    def _write(self, tmp_path, data):
        path = tmp_path / "chemicals.json"
        path.write_text(json.dumps(data))
        return str(path)

    def test_loads_records(self, tmp_path):
        path = self._write(tmp_path, [
            {"name": "Widgetine", "molecular_weight": 48.9, "idlh": 100,
             "aegl1": 1, "aegl2": 10, "aegl3": 50, "hazards": ["Toxic"]},
        ])
        lookup = FileChemicalLookup(path)
        record = lookup.get("WIDGETINE")
        assert record.name == "Widgetine"
        assert record.hazards == ("Toxic",)
        assert lookup.names() == ["widgetine"]

    def test_missing_optional_tiers_default_to_none(self, tmp_path):
        path = self._write(tmp_path, [{"name": "Bare", "molecular_weight": 30.0, "idlh": 50}])
        record = FileChemicalLookup(path).get("bare")
        assert record.aegl1 is None
        assert record.aegl3 is None

    def test_thresholds_from_file(self, tmp_path):
        path = self._write(tmp_path, [
            {"name": "Bare", "molecular_weight": 24.45, "idlh": 50},
        ])
        thresholds = zone_thresholds("bare", FileChemicalLookup(path))
        assert thresholds == pytest.approx((50.0, 5.0, 0.5))

    def test_missing_required_key_raises(self, tmp_path):
        path = self._write(tmp_path, [{"name": "Broken", "idlh": 5}])
        with pytest.raises(ValueError, match="missing required keys"):
            FileChemicalLookup(path)

    def test_empty_file_raises(self, tmp_path):
        path = self._write(tmp_path, [])
        with pytest.raises(ValueError, match="non-empty JSON array"):
            FileChemicalLookup(path)

    def test_object_instead_of_array_raises(self, tmp_path):
        path = self._write(tmp_path, {"name": "Solo"})
        with pytest.raises(ValueError):
            FileChemicalLookup(path)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            FileChemicalLookup(str(tmp_path / "nope.json"))


class TestUnitConversion:
    def test_mg_per_ppm(self):
        assert mg_per_ppm(24.45) == pytest.approx(1.0)

    def test_ppm_to_mg(self):
        assert convert_concentration_unit(10.0, "ammonia", "ppm", "mg/m3") == pytest.approx(
            10.0 * 17.03 / 24.45
        )

    def test_mg_to_ppm(self):
        assert convert_concentration_unit(70.91, "chlorine", "mg/m3", "ppm") == pytest.approx(24.45)

    def test_percent_to_ppm(self):
        assert convert_concentration_unit(1.0, "methane", "percent", "ppm") == pytest.approx(10000.0)

    def test_same_unit_unchanged(self):
        assert convert_concentration_unit(3.0, "chlorine", "ppm", "ppm") == 3.0

    def test_unknown_chemical_unchanged(self):
        assert convert_concentration_unit(3.0, "unobtainium", "ppm", "mg/m3") == 3.0

    def test_unknown_unit_raises(self):
        with pytest.raises(ValueError, match="Unknown concentration unit"):
            convert_concentration_unit(1.0, "chlorine", "ppb", "ppm")


class TestGuidelines:
    def test_guidelines_for_known_chemical(self):
        guidelines = get_exposure_guidelines("chlorine")
        assert guidelines["aegl3"] == 20.0
        assert guidelines["idlh"] == 10

    def test_guidelines_for_unknown_chemical(self):
        assert get_exposure_guidelines("unobtainium") is None

    def test_descriptions_cover_guidelines(self):
        descriptions = get_threshold_descriptions()
        assert set(get_exposure_guidelines("ammonia")) == set(descriptions)
