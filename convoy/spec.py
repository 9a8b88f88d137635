"""VehicleSpec - raw vehicle specifications and their validation."""

import math
from dataclasses import dataclass
from numbers import Number
from typing import List, Optional, Union

DEFAULT_VEHICLE_NAME = "Unnamed Vehicle"

REQUIRED_FIELDS = ("top_speed", "vehicle_type", "drive_type")

# Error messages name fields the way fleet files and JSON requests do
_FIELD_LABELS = {
    "top_speed": "topSpeed",
    "vehicle_type": "vehicleType",
    "drive_type": "driveType",
    "military_class": "militaryClass",
}


@dataclass(frozen=True)
class VehicleSpec:
    """Real-world specifications of a vehicle, as supplied by the caller."""

    top_speed: Optional[Union[int, float]] = None
    vehicle_type: Optional[str] = None
    drive_type: Optional[str] = None
    name: str = DEFAULT_VEHICLE_NAME
    make: str = ""
    model: str = ""
    year: Optional[int] = None
    cylinders: Optional[int] = None
    displacement: Optional[float] = None
    horsepower: Optional[int] = None
    weight: Optional[float] = None
    military_class: Optional[str] = None
    fuel_type: str = "gasoline"

    @property
    def display_name(self) -> str:
        """Human-readable vehicle name ("Make Model Year" when known)."""
        if self.make and self.model:
            year = f" {self.year}" if self.year else ""
            return f"{self.make} {self.model}{year}"
        return self.name

    @property
    def full_identifier(self) -> str:
        display = self.display_name
        if self.name != display:
            return f"{self.name} ({display})"
        return display

    @property
    def is_military(self) -> bool:
        vehicle_type = (self.vehicle_type or "").lower()
        return vehicle_type == "military" or bool(self.military_class)


def is_number(value) -> bool:
    """True for finite real numbers; bools, NaN and infinities are not."""
    if isinstance(value, bool) or not isinstance(value, Number):
        return False
    return math.isfinite(value)


def validate_spec(spec: VehicleSpec) -> List[str]:
    """
    Check a spec and return every violated rule.

    Returns an empty list for a valid spec. All rules are evaluated, so the
    caller sees the complete set of problems at once.
    """
    errors = []

    for field in REQUIRED_FIELDS:
        value = getattr(spec, field)
        if value is None or (isinstance(value, str) and not value.strip()):
            errors.append(f"Required field missing: {_FIELD_LABELS[field]}")

    for field in ("vehicle_type", "drive_type", "military_class"):
        value = getattr(spec, field)
        if value is not None and not isinstance(value, str):
            errors.append(f"{_FIELD_LABELS[field]} must be text")

    if spec.top_speed is not None:
        if not is_number(spec.top_speed):
            errors.append("Top speed must be a number")
        elif spec.top_speed <= 0:
            errors.append("Top speed must be greater than 0")

    if spec.cylinders is not None and (
        not is_number(spec.cylinders) or spec.cylinders <= 0
    ):
        errors.append("Cylinders must be greater than 0 if specified")

    if spec.displacement is not None and (
        not is_number(spec.displacement) or spec.displacement <= 0
    ):
        errors.append("Displacement must be greater than 0 if specified")

    if spec.horsepower is not None and (
        not is_number(spec.horsepower) or spec.horsepower < 0
    ):
        errors.append("Horsepower cannot be negative")

    if spec.weight is not None and (not is_number(spec.weight) or spec.weight < 0):
        errors.append("Weight cannot be negative")

    return errors
