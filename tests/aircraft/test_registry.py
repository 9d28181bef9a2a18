"""Tests for aircraft profiles and the fleet registry."""

import tempfile
from dataclasses import replace
from pathlib import Path

import pytest

from navplan.aircraft import AircraftProfile, AircraftRegistry, default_aircraft_profiles
from navplan.aircraft.registry import profile_from_yaml
from navplan.core.resource_path import get_config_path


class TestAircraftProfile:
    """Tests for profile validation."""

    def test_endurance(self, dr400: AircraftProfile) -> None:
        """Endurance is usable fuel over burn."""
        assert dr400.endurance_minutes == pytest.approx(110 / 35 * 60)

    @pytest.mark.parametrize(
        "changes",
        [
            {"cruise_speed_kts": 0},
            {"fuel_burn_lph": -1},
            {"cg_min": 0.8, "cg_max": 0.2},
            {"cg_min": 0.5, "cg_max": 0.5},
            {"empty_weight_kg": -1},
            {"arm_fuel": -0.1},
        ],
    )
    def test_invalid_profiles(self, dr400: AircraftProfile, changes: dict) -> None:
        """Invalid values are rejected."""
        with pytest.raises(ValueError):
            replace(dr400, **changes)


class TestAircraftRegistry:
    """Tests for AircraftRegistry."""

    def test_defaults(self) -> None:
        """The built-in fleet has the DR400 and the PA-28."""
        registry = AircraftRegistry()
        assert [p.id for p in registry.list()] == ["PH-VCR", "PH-XYZ"]
        assert registry.get("PH-XYZ").name == "Piper PA-28-181"

    def test_get_unknown(self) -> None:
        """Unknown registrations return None."""
        assert AircraftRegistry().get("PH-ABC") is None

    def test_save_adds_and_replaces(self, dr400: AircraftProfile) -> None:
        """save() adds new profiles and replaces existing ones."""
        registry = AircraftRegistry([])
        registry.save(dr400)
        registry.save(replace(dr400, fuel_burn_lph=32))
        assert len(registry.list()) == 1
        assert registry.get("PH-VCR").fuel_burn_lph == 32

    def test_delete(self) -> None:
        """delete() reports whether a profile was removed."""
        registry = AircraftRegistry()
        assert registry.delete("PH-XYZ")
        assert not registry.delete("PH-XYZ")
        assert [p.id for p in registry.list()] == ["PH-VCR"]

    def test_load_bundled_fleet(self) -> None:
        """The shipped fleet file matches the built-in profiles."""
        registry = AircraftRegistry.load_from_yaml(get_config_path("fleet.yaml"))
        assert registry.list() == default_aircraft_profiles()

    def test_load_skips_invalid_entries(self) -> None:
        """Entries missing required keys are skipped."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "fleet.yaml"
            path.write_text(
                "aircraft:\n"
                "  - id: PH-ONE\n"
                "    cruise_speed: 95\n"
                "    fuel_burn: 25\n"
                "    cg_min: 0.3\n"
                "    cg_max: 0.6\n"
                "  - id: PH-BAD\n"
                "    cruise_speed: 95\n",
                encoding="utf-8",
            )
            registry = AircraftRegistry.load_from_yaml(path)
        assert [p.id for p in registry.list()] == ["PH-ONE"]
        assert registry.get("PH-ONE").name == "PH-ONE"

    def test_load_missing_file(self) -> None:
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            AircraftRegistry.load_from_yaml("/nonexistent/fleet.yaml")

    def test_load_without_aircraft_list(self) -> None:
        """A file without an aircraft list is rejected."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "fleet.yaml"
            path.write_text("fleet: []\n", encoding="utf-8")
            with pytest.raises(ValueError, match="aircraft"):
                AircraftRegistry.load_from_yaml(path)

    def test_profile_from_yaml_missing_keys(self) -> None:
        """Required keys are listed in the error."""
        with pytest.raises(ValueError, match="fuel_burn"):
            profile_from_yaml({"id": "PH-X", "cruise_speed": 100, "cg_min": 0.1, "cg_max": 0.2})
