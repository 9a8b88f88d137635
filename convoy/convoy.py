"""Convoy aggregation - convoy-level statistics and operational projections."""

import logging
from dataclasses import dataclass, fields
from typing import Iterable, List, Optional, Sequence

from . import tables
from .categories import most_complex
from .errors import InvalidInput, NotFound, ValidationError
from .fleet import Fleet
from .formulas import round_half_up
from .spec import VehicleSpec, is_number
from .vehicle import Vehicle

logger = logging.getLogger(__name__)

MIN_MODIFIER = 0.1
MAX_MODIFIER = 1.0
PARTS_COST_FACTOR = 0.2


@dataclass
class OperationalParams:
    """How a convoy operates: daily hours, efficiency, travel days, fuel reserve."""

    hours_per_day: float = 8
    efficiency: float = 0.85
    travel_days_per_month: int = 20
    fuel_reserve: float = 0.1

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not is_number(value) or value < 0:
                raise InvalidInput(
                    f"Operational param {f.name} must be a non-negative number, "
                    f"got {value!r}"
                )

    def updated(self, **changes) -> "OperationalParams":
        """Copy with the given fields replaced; unknown names are rejected."""
        known = {f.name for f in fields(self)}
        unknown = set(changes) - known
        if unknown:
            raise InvalidInput(
                f"Unknown operational params: {', '.join(sorted(unknown))}"
            )
        values = {name: getattr(self, name) for name in known}
        values.update({k: v for k, v in changes.items() if v is not None})
        return OperationalParams(**values)


@dataclass
class ConvoyStatistics:
    """Aggregate statistics for the current members and modifiers."""

    vehicle_count: int = 0
    convoy_size: str = tables.CONVOY_SIZE_EMPTY
    convoy_complexity: str = "Simple"
    size_modifier: float = 1.0
    convoy_speed: int = 0
    total_fuel_consumption: int = 0
    total_cargo_capacity: int = 0
    average_maneuverability: int = 0
    total_durability: int = 0
    total_power_rating: int = 0
    total_maintenance_cost: int = 0
    daily_travel_distance: int = 0
    monthly_travel_distance: int = 0
    fuel_capacity: int = 0
    fuel_limited_range: int = 0
    monthly_fuel_consumption: int = 0
    monthly_maintenance_hours: int = 0
    monthly_parts_cost: int = 0

    @property
    def sustainable_speed(self) -> int:
        return self.convoy_speed


def convoy_size_category(count: int) -> str:
    """Small (<=2), Medium (<=5), Large (<=10) or Huge; "Empty" for none."""
    if count <= 0:
        return tables.CONVOY_SIZE_EMPTY
    for limit, label in tables.CONVOY_SIZE_THRESHOLDS:
        if count <= limit:
            return label
    return tables.CONVOY_SIZE_LARGEST


def convoy_size_modifier(count: int) -> float:
    return tables.CONVOY_SIZE_MODIFIER.get(convoy_size_category(count), 1.0)


def fuel_capacity_for(vehicle: Vehicle) -> int:
    return tables.FUEL_CAPACITY_ESTIMATE.get(
        vehicle.categories.type_category, tables.FUEL_CAPACITY_ESTIMATE_DEFAULT
    )


def estimate_fuel_capacity(vehicles: Sequence[Vehicle]) -> int:
    """Total fuel tank estimate in liters, summed by vehicle type."""
    return sum(fuel_capacity_for(vehicle) for vehicle in vehicles)


def calculate_convoy_statistics(
    vehicles: Sequence[Vehicle],
    terrain_modifier: float = 1.0,
    params: Optional[OperationalParams] = None,
) -> ConvoyStatistics:
    """
    Aggregate live vehicle statistics into convoy statistics.

    - Speed is set by the slowest member, scaled by the size and terrain
      modifiers (weather is applied at travel planning)
    - Fuel, cargo, durability, power and maintenance are summed
    - Range and monthly figures follow from the operational params
    """
    params = params or OperationalParams()
    count = len(vehicles)
    if count == 0:
        return ConvoyStatistics()

    live = [vehicle.live_statistics for vehicle in vehicles]
    size_modifier = convoy_size_modifier(count)

    convoy_speed = round_half_up(
        min(s.speed_rating for s in live) * 10 * size_modifier * terrain_modifier
    )
    total_fuel = sum(s.fuel_consumption for s in live)
    total_maintenance = sum(s.maintenance_cost for s in live)

    daily = round_half_up(convoy_speed * params.hours_per_day * params.efficiency)
    monthly = daily * params.travel_days_per_month

    average_capacity = round_half_up(estimate_fuel_capacity(vehicles) / count)
    fuel_capacity = average_capacity * count
    if total_fuel > 0:
        fuel_limited_range = round_half_up(
            fuel_capacity * (1 - params.fuel_reserve) / (total_fuel / 100)
        )
    else:
        fuel_limited_range = 0

    return ConvoyStatistics(
        vehicle_count=count,
        convoy_size=convoy_size_category(count),
        convoy_complexity=most_complex(v.categories.complexity_level for v in vehicles),
        size_modifier=size_modifier,
        convoy_speed=convoy_speed,
        total_fuel_consumption=total_fuel,
        total_cargo_capacity=sum(s.cargo_capacity for s in live),
        average_maneuverability=round_half_up(
            sum(s.maneuverability for s in live) / count
        ),
        total_durability=sum(s.durability for s in live),
        total_power_rating=sum(s.power_rating for s in live),
        total_maintenance_cost=total_maintenance,
        daily_travel_distance=daily,
        monthly_travel_distance=monthly,
        fuel_capacity=fuel_capacity,
        fuel_limited_range=fuel_limited_range,
        monthly_fuel_consumption=round_half_up(monthly / 100 * total_fuel),
        monthly_maintenance_hours=total_maintenance,
        monthly_parts_cost=round_half_up(total_maintenance * PARTS_COST_FACTOR),
    )


def clamp_modifier(modifier: float) -> float:
    if not is_number(modifier):
        raise InvalidInput(f"Modifier must be a number, got {modifier!r}")
    return max(MIN_MODIFIER, min(MAX_MODIFIER, float(modifier)))


class Convoy:
    """
    An ordered group of fleet vehicles travelling together.

    Statistics are recalculated from the members on every read, so they
    always reflect the current membership, modifiers and vehicle condition.
    """

    def __init__(
        self,
        name: str = "Unnamed Convoy",
        fleet: Optional[Fleet] = None,
        vehicle_ids: Optional[Iterable[str]] = None,
        terrain_modifier: float = 1.0,
        weather_modifier: float = 1.0,
        operational_params: Optional[OperationalParams] = None,
    ):
        self.name = name
        self.fleet = fleet if fleet is not None else Fleet()
        self.vehicle_ids: List[str] = []
        self.terrain_modifier = clamp_modifier(terrain_modifier)
        self.weather_modifier = clamp_modifier(weather_modifier)
        self.operational_params = operational_params or OperationalParams()
        self.errors: List[str] = []
        for vehicle_id in vehicle_ids or []:
            self.add_vehicle(self.fleet.get(vehicle_id))

    def __len__(self) -> int:
        return len(self.vehicle_ids)

    def __contains__(self, vehicle_id: str) -> bool:
        return vehicle_id in self.vehicle_ids

    @property
    def vehicles(self) -> List[Vehicle]:
        """Member vehicles in arrival order."""
        return [self.fleet.get(vehicle_id) for vehicle_id in self.vehicle_ids]

    @property
    def size_category(self) -> str:
        return convoy_size_category(len(self.vehicle_ids))

    @property
    def size_modifier(self) -> float:
        return convoy_size_modifier(len(self.vehicle_ids))

    @property
    def statistics(self) -> ConvoyStatistics:
        return calculate_convoy_statistics(
            self.vehicles, self.terrain_modifier, self.operational_params
        )

    @property
    def is_empty(self) -> bool:
        return not self.vehicle_ids

    def add_vehicle(self, vehicle: Vehicle) -> None:
        """
        Append a vehicle, registering it with the fleet if needed.

        Raises ValidationError for a vehicle without valid statistics and
        InvalidInput if the vehicle is already a member.
        """
        if not vehicle.is_valid:
            raise ValidationError(
                vehicle.errors or ["statistics not calculated"],
                subject=(
                    "Cannot add vehicle with invalid statistics: "
                    f"{vehicle.display_name}"
                ),
            )
        if vehicle.id in self.vehicle_ids:
            raise InvalidInput(
                f"{vehicle.display_name} is already in convoy {self.name}"
            )
        self.fleet.register(vehicle)
        self.vehicle_ids.append(vehicle.id)
        logger.info("Added %s to convoy %s", vehicle.display_name, self.name)

    def remove_vehicle(self, vehicle_id: str) -> Vehicle:
        """Drop a member by id; the vehicle stays in the fleet."""
        if vehicle_id not in self.vehicle_ids:
            raise NotFound("Convoy member", vehicle_id)
        self.vehicle_ids.remove(vehicle_id)
        vehicle = self.fleet.get(vehicle_id)
        logger.info("Removed %s from convoy %s", vehicle.display_name, self.name)
        return vehicle

    def set_terrain_modifier(self, modifier: float) -> None:
        """Terrain speed modifier, clamped to [0.1, 1.0]."""
        self.terrain_modifier = clamp_modifier(modifier)

    def set_weather_modifier(self, modifier: float) -> None:
        """Weather speed modifier, clamped to [0.1, 1.0]."""
        self.weather_modifier = clamp_modifier(modifier)


def build_convoy(
    name: str,
    specs: Iterable[VehicleSpec],
    terrain_modifier: Optional[float] = None,
    weather_modifier: Optional[float] = None,
    operational_params: Optional[OperationalParams] = None,
    fleet: Optional[Fleet] = None,
) -> Convoy:
    """
    Build vehicles from specs and group the valid ones into a convoy.

    Invalid specs are skipped; the reason is recorded in ``convoy.errors``.
    """
    convoy = Convoy(name, fleet=fleet, operational_params=operational_params)
    for spec in specs:
        vehicle = convoy.fleet.add_spec(spec)
        if vehicle.is_valid:
            convoy.add_vehicle(vehicle)
        else:
            message = (
                f"Failed to add vehicle {vehicle.display_name}: "
                f"{', '.join(vehicle.errors)}"
            )
            convoy.errors.append(message)
            logger.warning(message)

    if terrain_modifier is not None:
        convoy.set_terrain_modifier(terrain_modifier)
    if weather_modifier is not None:
        convoy.set_weather_modifier(weather_modifier)
    return convoy
