#!/usr/bin/env python3
"""Tests for convoy aggregation."""

import pytest

from convoy import (
    Convoy,
    ConvoyStatistics,
    Fleet,
    InvalidInput,
    NotFound,
    OperationalParams,
    ValidationError,
    VehicleSpec,
)
from convoy.convoy import (
    build_convoy,
    clamp_modifier,
    convoy_size_category,
    convoy_size_modifier,
    estimate_fuel_capacity,
)
from convoy.vehicle import build_vehicle

CIVIC = VehicleSpec(
    make="Honda",
    model="Civic",
    top_speed=200,
    vehicle_type="car",
    drive_type="fwd",
    cylinders=4,
    displacement=1.5,
    horsepower=158,
    weight=1300,
)
F150 = VehicleSpec(
    make="Ford",
    model="F-150",
    top_speed=170,
    vehicle_type="truck",
    drive_type="4wd",
    cylinders=8,
    displacement=5.0,
    horsepower=395,
    weight=2200,
)
LAND_CRUISER = VehicleSpec(
    make="Toyota",
    model="Land Cruiser",
    top_speed=180,
    vehicle_type="suv",
    drive_type="4wd",
    cylinders=8,
    displacement=5.7,
    horsepower=381,
    weight=2700,
)
ABRAMS = VehicleSpec(
    make="General Dynamics",
    model="M1 Abrams",
    top_speed=67,
    vehicle_type="military",
    drive_type="tracks",
    horsepower=1500,
    weight=54000,
    military_class="heavy",
)

# =============================================================================
# Helpers
# =============================================================================


class TestConvoySize:
    """Tests for size categories and modifiers."""

    @pytest.mark.parametrize(
        "count,category,modifier",
        [
            (1, "Small", 1.0),
            (2, "Small", 1.0),
            (3, "Medium", 0.9),
            (5, "Medium", 0.9),
            (6, "Large", 0.8),
            (10, "Large", 0.8),
            (11, "Huge", 0.5),
        ],
    )
    def test_size(self, count, category, modifier):
        assert convoy_size_category(count) == category
        assert convoy_size_modifier(count) == modifier

    def test_empty(self):
        assert convoy_size_category(0) == "Empty"
        assert convoy_size_modifier(0) == 1.0


class TestClampModifier:
    """Tests for clamp_modifier."""

    def test_clamps(self):
        assert clamp_modifier(0.5) == 0.5
        assert clamp_modifier(0) == 0.1
        assert clamp_modifier(-3) == 0.1
        assert clamp_modifier(1.7) == 1.0

    @pytest.mark.parametrize("value", ["0.5", None, True, float("nan")])
    def test_rejects_non_numbers(self, value):
        with pytest.raises(InvalidInput):
            clamp_modifier(value)


class TestOperationalParams:
    """Tests for OperationalParams."""

    def test_defaults(self):
        params = OperationalParams()
        assert params.hours_per_day == 8
        assert params.efficiency == 0.85
        assert params.travel_days_per_month == 20
        assert params.fuel_reserve == 0.1

    def test_updated(self):
        params = OperationalParams().updated(hours_per_day=10, efficiency=None)
        assert params.hours_per_day == 10
        assert params.efficiency == 0.85

    @pytest.mark.parametrize("value", ["8", float("nan"), -2, True])
    def test_values_must_be_non_negative_numbers(self, value):
        with pytest.raises(InvalidInput, match="hours_per_day"):
            OperationalParams(hours_per_day=value)
        with pytest.raises(InvalidInput, match="hours_per_day"):
            OperationalParams().updated(hours_per_day=value)

    def test_updated_unknown(self):
        with pytest.raises(InvalidInput, match="crew_size"):
            OperationalParams().updated(crew_size=4)


# =============================================================================
# Statistics
# =============================================================================


class TestConvoyStatistics:
    """Tests for statistics of a convoy."""

    def test_empty_convoy(self):
        convoy = Convoy("Nobody")
        assert convoy.is_empty
        assert convoy.statistics == ConvoyStatistics()
        assert convoy.statistics.convoy_size == "Empty"
        assert convoy.statistics.convoy_speed == 0

    def test_single_abrams(self):
        convoy = build_convoy("Armor", [ABRAMS])
        stats = convoy.statistics
        assert stats.vehicle_count == 1
        assert stats.convoy_speed == 40
        assert stats.total_fuel_consumption == 38
        assert stats.fuel_capacity == 500
        # 500 x 0.9 / 0.38
        assert stats.fuel_limited_range == 1184
        assert stats.convoy_complexity == "Specialized"

    def test_pair_of_civics(self):
        convoy = build_convoy("Commuters", [CIVIC, CIVIC])
        stats = convoy.statistics
        assert stats.convoy_size == "Small"
        assert stats.size_modifier == 1.0
        assert stats.convoy_speed == 130
        assert stats.sustainable_speed == 130
        assert stats.total_fuel_consumption == 8
        assert stats.total_cargo_capacity == 4
        assert stats.average_maneuverability == 10
        assert stats.total_durability == 60
        assert stats.total_power_rating == 6
        assert stats.total_maintenance_cost == 4
        assert stats.daily_travel_distance == 884
        assert stats.monthly_travel_distance == 17680
        assert stats.fuel_capacity == 100
        assert stats.fuel_limited_range == 1125
        assert stats.monthly_fuel_consumption == 1414
        assert stats.monthly_maintenance_hours == 4
        assert stats.monthly_parts_cost == 1
        assert stats.convoy_complexity == "Simple"

    def test_mixed_convoy(self):
        convoy = build_convoy("Supply Run", [CIVIC, F150, LAND_CRUISER])
        stats = convoy.statistics
        assert stats.convoy_size == "Medium"
        # slowest member SPD 11 x 10 x 0.9
        assert stats.convoy_speed == 99
        assert stats.total_fuel_consumption == 36
        assert stats.total_cargo_capacity == 21
        assert stats.average_maneuverability == 10
        assert stats.total_durability == 150
        assert stats.total_power_rating == 19
        assert stats.total_maintenance_cost == 10
        assert stats.daily_travel_distance == 673
        assert stats.convoy_complexity == "Standard"
        # mean of 50, 100 and 70 rounds to 73
        assert stats.fuel_capacity == 219

    def test_terrain_modifier(self):
        convoy = build_convoy(
            "Supply Run", [CIVIC, F150, LAND_CRUISER], terrain_modifier=0.9
        )
        assert convoy.statistics.convoy_speed == 89

    def test_weather_not_applied_to_statistics(self):
        convoy = build_convoy("Commuters", [CIVIC], weather_modifier=0.5)
        assert convoy.weather_modifier == 0.5
        assert convoy.statistics.convoy_speed == 130

    def test_large_convoy(self):
        spec = VehicleSpec(
            name="Van", top_speed=96, vehicle_type="commercial", drive_type="rwd"
        )
        convoy = build_convoy("Movers", [spec] * 6)
        assert convoy.size_category == "Large"
        assert convoy.statistics.convoy_speed == 48

    def test_operational_params(self):
        params = OperationalParams(
            hours_per_day=10, efficiency=1.0, travel_days_per_month=10
        )
        convoy = build_convoy("Commuters", [CIVIC], operational_params=params)
        stats = convoy.statistics
        assert stats.daily_travel_distance == 1300
        assert stats.monthly_travel_distance == 13000

    def test_damage_is_reflected(self):
        convoy = build_convoy("Supply Run", [CIVIC, F150, LAND_CRUISER])
        truck = convoy.vehicles[1]
        truck.apply_damage(31)
        stats = convoy.statistics
        # F-150 halved to SPD 5
        assert stats.convoy_speed == 45
        assert stats.total_fuel_consumption == 38

    def test_destroyed_member_stops_convoy(self):
        convoy = build_convoy("Commuters", [CIVIC, CIVIC])
        convoy.vehicles[0].apply_damage(1000)
        assert convoy.statistics.convoy_speed == 0
        assert convoy.statistics.daily_travel_distance == 0

    def test_estimate_fuel_capacity(self):
        vehicles = [build_vehicle(CIVIC), build_vehicle(ABRAMS)]
        assert estimate_fuel_capacity(vehicles) == 550


# =============================================================================
# Membership
# =============================================================================


class TestConvoyMembership:
    """Tests for adding and removing convoy members."""

    @pytest.fixture
    def fleet(self):
        fleet = Fleet()
        fleet.add_spec(CIVIC, vehicle_id="civic")
        fleet.add_spec(F150, vehicle_id="f150")
        fleet.add_spec(VehicleSpec(name="Broken"), vehicle_id="broken")
        return fleet

    def test_from_ids(self, fleet):
        convoy = Convoy("Pair", fleet=fleet, vehicle_ids=["f150", "civic"])
        assert len(convoy) == 2
        assert [v.id for v in convoy.vehicles] == ["f150", "civic"]
        assert "civic" in convoy

    def test_unknown_id(self, fleet):
        with pytest.raises(NotFound):
            Convoy("Pair", fleet=fleet, vehicle_ids=["ghost"])

    def test_add_invalid_vehicle(self, fleet):
        convoy = Convoy("Pair", fleet=fleet)
        with pytest.raises(ValidationError):
            convoy.add_vehicle(fleet.get("broken"))
        assert convoy.is_empty

    def test_add_duplicate(self, fleet):
        convoy = Convoy("Pair", fleet=fleet, vehicle_ids=["civic"])
        with pytest.raises(InvalidInput):
            convoy.add_vehicle(fleet.get("civic"))

    def test_add_registers_with_fleet(self, fleet):
        convoy = Convoy("Pair", fleet=fleet)
        vehicle = build_vehicle(CIVIC, vehicle_id="new")
        convoy.add_vehicle(vehicle)
        assert fleet.get("new") is vehicle

    def test_remove(self, fleet):
        convoy = Convoy("Pair", fleet=fleet, vehicle_ids=["civic", "f150"])
        removed = convoy.remove_vehicle("civic")
        assert removed.id == "civic"
        assert convoy.vehicle_ids == ["f150"]
        assert "civic" in fleet

    def test_remove_non_member(self, fleet):
        convoy = Convoy("Pair", fleet=fleet, vehicle_ids=["civic"])
        with pytest.raises(NotFound, match="Convoy member not found: f150"):
            convoy.remove_vehicle("f150")

    def test_shared_vehicle(self, fleet):
        first = Convoy("First", fleet=fleet, vehicle_ids=["f150"])
        second = Convoy("Second", fleet=fleet, vehicle_ids=["f150", "civic"])
        fleet.get("f150").apply_damage(31)
        assert first.statistics.convoy_speed == 50
        assert second.statistics.convoy_speed == 50

    def test_modifiers_clamped(self, fleet):
        convoy = Convoy("Pair", fleet=fleet, terrain_modifier=5, weather_modifier=0)
        assert convoy.terrain_modifier == 1.0
        assert convoy.weather_modifier == 0.1
        convoy.set_terrain_modifier(0.5)
        assert convoy.terrain_modifier == 0.5


# =============================================================================
# build_convoy
# =============================================================================


class TestBuildConvoy:
    """Tests for build_convoy."""

    def test_invalid_specs_recorded(self):
        broken = VehicleSpec(name="Broken", top_speed=-1)
        convoy = build_convoy("Mixed", [CIVIC, broken])
        assert len(convoy) == 1
        assert convoy.errors == [
            "Failed to add vehicle Broken: Required field missing: vehicleType, "
            "Required field missing: driveType, Top speed must be greater than 0"
        ]
        assert len(convoy.fleet) == 2

    def test_shared_fleet(self):
        fleet = Fleet()
        convoy = build_convoy("Pair", [CIVIC, F150], fleet=fleet)
        assert convoy.fleet is fleet
        assert len(fleet) == 2

    def test_no_specs(self):
        convoy = build_convoy("Nobody", [])
        assert convoy.is_empty
        assert convoy.name == "Nobody"
