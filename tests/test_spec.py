#!/usr/bin/env python3
"""Tests for VehicleSpec validation and categorization."""

import pytest

from convoy import VehicleSpec, categorize, validate_spec
from convoy.categories import (
    NOT_MILITARY,
    determine_complexity_level,
    determine_size_category,
    most_complex,
)

# =============================================================================
# VehicleSpec
# =============================================================================


class TestVehicleSpec:
    """Tests for VehicleSpec naming helpers."""

    def test_display_name_from_make_model_year(self):
        spec = VehicleSpec(make="Honda", model="Civic", year=2020, name="Blue")
        assert spec.display_name == "Honda Civic 2020"
        assert spec.full_identifier == "Blue (Honda Civic 2020)"

    def test_display_name_without_year(self):
        spec = VehicleSpec(make="Honda", model="Civic")
        assert spec.display_name == "Honda Civic"

    def test_display_name_falls_back_to_name(self):
        assert VehicleSpec(name="Rover").display_name == "Rover"
        assert VehicleSpec(make="Honda").display_name == "Unnamed Vehicle"

    def test_full_identifier_same_as_display(self):
        spec = VehicleSpec(name="Rover")
        assert spec.full_identifier == "Rover"

    def test_is_military(self):
        assert VehicleSpec(vehicle_type="military").is_military
        assert VehicleSpec(vehicle_type="Military").is_military
        assert VehicleSpec(vehicle_type="truck", military_class="light").is_military
        assert not VehicleSpec(vehicle_type="truck").is_military


# =============================================================================
# Validation
# =============================================================================


class TestValidateSpec:
    """Tests for validate_spec."""

    def test_valid_minimal(self):
        spec = VehicleSpec(top_speed=180, vehicle_type="car", drive_type="fwd")
        assert validate_spec(spec) == []

    def test_all_required_missing(self):
        errors = validate_spec(VehicleSpec())
        assert errors == [
            "Required field missing: topSpeed",
            "Required field missing: vehicleType",
            "Required field missing: driveType",
        ]

    def test_blank_strings_are_missing(self):
        spec = VehicleSpec(top_speed=100, vehicle_type="  ", drive_type="")
        errors = validate_spec(spec)
        assert "Required field missing: vehicleType" in errors
        assert "Required field missing: driveType" in errors

    def test_top_speed_must_be_positive(self):
        spec = VehicleSpec(top_speed=0, vehicle_type="car", drive_type="fwd")
        assert validate_spec(spec) == ["Top speed must be greater than 0"]

    def test_top_speed_must_be_number(self):
        spec = VehicleSpec(top_speed="fast", vehicle_type="car", drive_type="fwd")
        assert validate_spec(spec) == ["Top speed must be a number"]

    def test_top_speed_bool_rejected(self):
        spec = VehicleSpec(top_speed=True, vehicle_type="car", drive_type="fwd")
        assert validate_spec(spec) == ["Top speed must be a number"]

    @pytest.mark.parametrize("speed", [float("nan"), float("inf"), float("-inf")])
    def test_top_speed_must_be_finite(self, speed):
        spec = VehicleSpec(top_speed=speed, vehicle_type="car", drive_type="fwd")
        assert validate_spec(spec) == ["Top speed must be a number"]

    def test_non_finite_optional_fields(self):
        spec = VehicleSpec(
            top_speed=100,
            vehicle_type="car",
            drive_type="fwd",
            horsepower=float("nan"),
            weight=float("inf"),
        )
        assert validate_spec(spec) == [
            "Horsepower cannot be negative",
            "Weight cannot be negative",
        ]

    def test_military_class_must_be_text(self):
        spec = VehicleSpec(
            top_speed=100, vehicle_type="car", drive_type="fwd", military_class=3
        )
        assert validate_spec(spec) == ["militaryClass must be text"]

    def test_type_must_be_text(self):
        spec = VehicleSpec(top_speed=100, vehicle_type=3, drive_type="fwd")
        assert validate_spec(spec) == ["vehicleType must be text"]

    def test_optional_fields(self):
        spec = VehicleSpec(
            top_speed=100,
            vehicle_type="car",
            drive_type="fwd",
            cylinders=0,
            displacement=-1,
            horsepower=-5,
            weight=-10,
        )
        assert validate_spec(spec) == [
            "Cylinders must be greater than 0 if specified",
            "Displacement must be greater than 0 if specified",
            "Horsepower cannot be negative",
            "Weight cannot be negative",
        ]

    def test_zero_horsepower_and_weight_allowed(self):
        spec = VehicleSpec(
            top_speed=100, vehicle_type="car", drive_type="fwd", horsepower=0, weight=0
        )
        assert validate_spec(spec) == []

    def test_collects_every_error(self):
        spec = VehicleSpec(top_speed=-5, drive_type="fwd", cylinders=-2)
        errors = validate_spec(spec)
        assert len(errors) == 3


# =============================================================================
# Categorization
# =============================================================================


class TestSizeCategory:
    """Tests for determine_size_category."""

    def test_weight_ladder(self):
        def size(weight):
            spec = VehicleSpec(
                top_speed=100, vehicle_type="car", drive_type="fwd", weight=weight
            )
            return determine_size_category(spec)

        assert size(1300) == "Compact"
        assert size(1500) == "Midsize"
        assert size(2499) == "Midsize"
        assert size(2500) == "Fullsize"
        assert size(4000) == "Large"
        assert size(9999) == "Large"
        assert size(10000) == "Oversized"

    def test_without_weight(self):
        def size(vehicle_type, displacement=None):
            return determine_size_category(
                VehicleSpec(
                    top_speed=100,
                    vehicle_type=vehicle_type,
                    drive_type="fwd",
                    displacement=displacement,
                )
            )

        assert size("motorcycle", 8.0) == "Compact"
        assert size("military", 12.0) == "Oversized"
        assert size("commercial") == "Large"
        assert size("specialty") == "Large"
        assert size("truck", 5.5) == "Large"
        assert size("car", 4.5) == "Fullsize"
        assert size("car", 3.0) == "Midsize"
        assert size("car", 2.0) == "Compact"
        assert size("car") == "Compact"


class TestComplexityLevel:
    """Tests for determine_complexity_level."""

    def level(self, **kwargs):
        spec = VehicleSpec(top_speed=100, drive_type="fwd", **kwargs)
        return determine_complexity_level(spec, spec.is_military)

    def test_levels(self):
        assert self.level(vehicle_type="military") == "Specialized"
        assert self.level(vehicle_type="commercial") == "Complex"
        assert self.level(vehicle_type="car", displacement=6.5) == "Complex"
        assert self.level(vehicle_type="car", cylinders=10) == "Complex"
        assert self.level(vehicle_type="car", cylinders=6) == "Standard"
        assert self.level(vehicle_type="car", displacement=3.5) == "Standard"
        assert self.level(vehicle_type="car", cylinders=4, displacement=1.5) == "Simple"

    def test_most_complex(self):
        assert most_complex(["Simple", "Complex", "Standard"]) == "Complex"
        assert most_complex([]) == "Simple"


class TestCategorize:
    """Tests for categorize."""

    def test_civilian(self):
        spec = VehicleSpec(
            top_speed=170, vehicle_type="Truck", drive_type="4wd", weight=2200
        )
        categories = categorize(spec)
        assert categories.size_category == "Midsize"
        assert categories.type_category == "truck"
        assert categories.military_class == NOT_MILITARY
        assert not categories.is_military

    def test_military_default_class(self):
        spec = VehicleSpec(top_speed=90, vehicle_type="military", drive_type="awd")
        categories = categorize(spec)
        assert categories.military_class == "light"
        assert categories.complexity_level == "Specialized"
        assert categories.is_military

    def test_military_class_lowercased(self):
        spec = VehicleSpec(
            top_speed=90, vehicle_type="truck", drive_type="awd", military_class="Heavy"
        )
        assert categorize(spec).military_class == "heavy"
