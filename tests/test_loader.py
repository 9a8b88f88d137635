#!/usr/bin/env python3
"""Tests for YAML loading and saving utilities."""

from pathlib import Path

import pytest
import yaml

from convoy import (
    FleetDocument,
    InvalidInput,
    NotFound,
    VehicleSpec,
    load_fleet,
    save_fleet,
)
from convoy.loader import (
    add_convoy,
    add_vehicle_spec,
    create_fleet_file,
    delete_vehicle,
    document_from_dict,
    document_to_dict,
)

MINIMAL_FLEET = """
vehicles:
  - id: civic
    spec:
      make: Honda
      model: Civic
      topSpeed: 200
      vehicleType: car
      driveType: fwd
  - id: truck
    spec:
      make: Ford
      model: F-150
      topSpeed: 170
      vehicleType: truck
      driveType: 4wd
      weight: 2200
convoys:
  - name: Pair
    vehicleIds: [civic, truck]
    terrainModifier: 0.9
"""

# =============================================================================
# load_fleet tests
# =============================================================================


class TestLoadFleet:
    """Tests for load_fleet function."""

    def test_loads_minimal_fleet(self, tmp_path):
        """Load a minimal valid fleet file."""
        yaml_file = tmp_path / "fleet.yaml"
        yaml_file.write_text(MINIMAL_FLEET)

        document = load_fleet(yaml_file)

        assert len(document.fleet) == 2
        civic = document.fleet.get("civic")
        assert civic.display_name == "Honda Civic"
        assert civic.base_statistics.speed_rating == 13
        assert not civic.has_condition
        convoy = document.get_convoy("Pair")
        assert [v.id for v in convoy.vehicles] == ["civic", "truck"]
        assert convoy.terrain_modifier == 0.9
        assert convoy.fleet is document.fleet

    def test_loads_empty_file(self, tmp_path):
        """An empty file is an empty fleet."""
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")
        document = load_fleet(yaml_file)
        assert len(document.fleet) == 0
        assert document.convoys == []

    def test_unquoted_timestamps(self, tmp_path):
        """YAML timestamps are accepted as well as quoted strings."""
        yaml_file = tmp_path / "fleet.yaml"
        yaml_file.write_text("""
vehicles:
  - id: civic
    spec:
      topSpeed: 200
      vehicleType: car
      driveType: fwd
      weight: 1300
    condition:
      currentDurability: 20
      maxDurability: 30
      damageHistory:
        - amount: 10
          source: Pothole
          timestamp: 2024-03-02 14:30:00+00:00
          durabilityAfter: 20
""")
        civic = load_fleet(yaml_file).fleet.get("civic")
        entry = civic.condition.damage_history[0]
        assert entry.timestamp.year == 2024
        assert entry.timestamp.tzinfo is not None
        assert entry.damage_type == "Physical"

    def test_numeric_ids_become_strings(self, tmp_path):
        """Ids written as numbers still match convoy members."""
        yaml_file = tmp_path / "fleet.yaml"
        yaml_file.write_text("""
vehicles:
  - id: 1
    spec: {topSpeed: 200, vehicleType: car, driveType: fwd}
convoys:
  - name: Solo
    vehicleIds: [1]
""")
        document = load_fleet(yaml_file)
        assert document.get_convoy("Solo").vehicle_ids == ["1"]

    def test_unknown_convoy_member(self, tmp_path):
        """A convoy naming an unknown vehicle fails to load."""
        yaml_file = tmp_path / "fleet.yaml"
        yaml_file.write_text("""
vehicles: []
convoys:
  - name: Ghosts
    vehicleIds: [nobody]
""")
        with pytest.raises(NotFound):
            load_fleet(yaml_file)

    def test_invalid_vehicle_kept(self, tmp_path):
        """Vehicles with invalid specs load with their errors."""
        yaml_file = tmp_path / "fleet.yaml"
        yaml_file.write_text("""
vehicles:
  - id: broken
    spec: {name: Broken, topSpeed: 0}
""")
        broken = load_fleet(yaml_file).fleet.get("broken")
        assert not broken.is_valid
        assert "Top speed must be greater than 0" in broken.errors

    def test_loads_example_fleet(self):
        """The bundled example fleet loads."""
        example = Path(__file__).parent.parent / "fleets" / "example.yaml"
        document = load_fleet(example)
        assert len(document.fleet) == 4
        assert [c.name for c in document.convoys] == ["Supply Run", "Armored Escort"]


# =============================================================================
# save_fleet tests
# =============================================================================


class TestSaveFleet:
    """Tests for save_fleet and the dict conversion."""

    def test_round_trip(self, tmp_path):
        """Saved state loads back the same."""
        yaml_file = tmp_path / "fleet.yaml"
        yaml_file.write_text(MINIMAL_FLEET)
        document = load_fleet(yaml_file)
        truck = document.fleet.get("truck")
        truck.apply_damage(20, "Ballistic", "Ambush")
        truck.add_cargo("Ammo", 4, "Munitions")

        save_fleet(yaml_file, document)
        reloaded = load_fleet(yaml_file)

        truck = reloaded.fleet.get("truck")
        assert truck.condition.current_durability == 40
        assert truck.condition.damage_history[0].source == "Ambush"
        assert truck.cargo.items[0].name == "Ammo"
        assert reloaded.get_convoy("Pair").terrain_modifier == 0.9

    def test_saved_yaml_layout(self, tmp_path):
        """Keys keep their order and derived ratings are written for readers."""
        yaml_file = tmp_path / "fleet.yaml"
        yaml_file.write_text(MINIMAL_FLEET)
        save_fleet(yaml_file, load_fleet(yaml_file))

        data = yaml.safe_load(yaml_file.read_text())
        assert list(data) == ["vehicles", "convoys"]
        vehicle = data["vehicles"][0]
        assert list(vehicle)[:2] == ["id", "spec"]
        assert vehicle["statistics"]["speedRating"] == 13
        assert "statistics" not in data["convoys"][0]

    def test_document_dict_round_trip(self):
        """document_from_dict reads what document_to_dict writes."""
        document = FleetDocument()
        spec = VehicleSpec(top_speed=150, vehicle_type="suv", drive_type="awd")
        document.fleet.add_spec(spec, vehicle_id="suv")
        document.add_convoy("Solo", ["suv"], weather_modifier=0.7)
        restored = document_from_dict(document_to_dict(document))
        assert restored.get_convoy("Solo").weather_modifier == 0.7
        expected_stats = document.fleet.get("suv").base_statistics
        assert restored.fleet.get("suv").base_statistics == expected_stats


# =============================================================================
# FleetDocument tests
# =============================================================================


class TestFleetDocument:
    """Tests for FleetDocument convoy and vehicle management."""

    @pytest.fixture
    def document(self):
        return document_from_dict(yaml.safe_load(MINIMAL_FLEET))

    def test_get_convoy_unknown(self, document):
        with pytest.raises(NotFound, match="Convoy not found: Nope"):
            document.get_convoy("Nope")

    def test_add_convoy_duplicate_name(self, document):
        with pytest.raises(InvalidInput):
            document.add_convoy("Pair", ["civic"])

    def test_remove_vehicle_leaves_convoys(self, document):
        document.remove_vehicle("truck")
        assert "truck" not in document.fleet
        assert document.get_convoy("Pair").vehicle_ids == ["civic"]

    def test_remove_unknown_vehicle(self, document):
        with pytest.raises(NotFound):
            document.remove_vehicle("ghost")


# =============================================================================
# File operation tests
# =============================================================================


class TestFileOperations:
    """Tests for the load-modify-save helpers."""

    def test_create_fleet_file(self, tmp_path):
        yaml_file = tmp_path / "new.yaml"
        create_fleet_file(yaml_file)
        assert yaml.safe_load(yaml_file.read_text()) == {"vehicles": [], "convoys": []}

    def test_create_fleet_file_exists(self, tmp_path):
        yaml_file = tmp_path / "fleet.yaml"
        yaml_file.write_text(MINIMAL_FLEET)
        with pytest.raises(FileExistsError):
            create_fleet_file(yaml_file)
        assert yaml_file.read_text() == MINIMAL_FLEET

    def test_add_vehicle_spec(self, tmp_path):
        yaml_file = tmp_path / "fleet.yaml"
        yaml_file.write_text(MINIMAL_FLEET)
        spec = VehicleSpec(
            name="Bike", top_speed=180, vehicle_type="motorcycle", drive_type="rwd"
        )
        vehicle = add_vehicle_spec(yaml_file, spec)
        document = load_fleet(yaml_file)
        assert document.fleet.get(vehicle.id).display_name == "Bike"

    def test_add_invalid_vehicle_spec(self, tmp_path):
        yaml_file = tmp_path / "fleet.yaml"
        yaml_file.write_text(MINIMAL_FLEET)
        vehicle = add_vehicle_spec(yaml_file, VehicleSpec(name="Broken"))
        reloaded = load_fleet(yaml_file).fleet.get(vehicle.id)
        assert not reloaded.is_valid

    def test_delete_vehicle(self, tmp_path):
        yaml_file = tmp_path / "fleet.yaml"
        yaml_file.write_text(MINIMAL_FLEET)
        delete_vehicle(yaml_file, "civic")
        document = load_fleet(yaml_file)
        assert len(document.fleet) == 1
        assert document.get_convoy("Pair").vehicle_ids == ["truck"]

    def test_add_convoy(self, tmp_path):
        yaml_file = tmp_path / "fleet.yaml"
        yaml_file.write_text(MINIMAL_FLEET)
        add_convoy(yaml_file, "Solo", ["truck"], terrain_modifier=0.6)
        convoy = load_fleet(yaml_file).get_convoy("Solo")
        assert convoy.vehicle_ids == ["truck"]
        assert convoy.terrain_modifier == 0.6
