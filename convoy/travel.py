"""Travel planner - trip duration, rest days and refuel stops for a convoy."""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from .convoy import Convoy, estimate_fuel_capacity
from .errors import InvalidInput
from .formulas import round_half_up, round_places
from .spec import is_number

logger = logging.getLogger(__name__)

TRAVEL_HOURS_PER_DAY = 8
# 2 rest days for every 5 travel days
REST_DAY_FACTOR = 1.4
# Tanks are refilled at 90% usable
USABLE_FUEL_FRACTION = 0.9


@dataclass
class TravelPlan:
    """Projected trip for a convoy over a distance."""

    distance: float
    effective_speed: int
    hours: float
    travel_days: int
    total_days: int
    fuel_required: int
    fuel_capacity: int
    fuel_stops: int
    terrain_modifier: float
    weather_modifier: float

    @property
    def same_day(self) -> bool:
        return self.hours < TRAVEL_HOURS_PER_DAY

    @property
    def summary(self) -> str:
        if self.same_day:
            duration = f"{self.hours:g}h (same day)"
        else:
            duration = f"{self.total_days} days ({self.hours:g}h travel time)"
        text = (
            f"Journey of {self.distance:g}km will take {duration} at "
            f"{self.effective_speed} km/h. Fuel required: {self.fuel_required}L"
        )
        if self.fuel_stops > 0:
            text += f", requiring {self.fuel_stops} refuel stop(s)"
        return text + "."


def _modifier(value, label: str) -> float:
    if not is_number(value):
        raise InvalidInput(f"{label} modifier must be a number, got {value!r}")
    return float(value)


def plan_travel(
    convoy: Convoy,
    distance_km: float,
    terrain_modifier: float = 1.0,
    weather_modifier: Optional[float] = None,
) -> TravelPlan:
    """
    Plan a trip of ``distance_km`` for the convoy.

    Convoy speed already includes the convoy's terrain modifier; the
    ``terrain_modifier`` here is an extra factor for this trip. Weather
    defaults to the convoy's stored weather modifier.

    Raises InvalidInput for an empty convoy, a non-positive distance, or a
    convoy that cannot move (effective speed of zero).
    """
    if convoy.is_empty:
        raise InvalidInput("No vehicles in convoy")
    if not is_number(distance_km):
        raise InvalidInput(f"Distance must be a number, got {distance_km!r}")
    if distance_km <= 0:
        raise InvalidInput("Distance must be greater than 0")

    terrain = _modifier(terrain_modifier, "Terrain")
    if weather_modifier is None:
        weather = convoy.weather_modifier
    else:
        weather = _modifier(weather_modifier, "Weather")

    stats = convoy.statistics
    effective_speed = stats.convoy_speed * terrain * weather
    if effective_speed <= 0:
        logger.warning("Convoy %s cannot move; travel not planned", convoy.name)
        raise InvalidInput(f"Convoy {convoy.name} has no effective speed")

    hours = distance_km / effective_speed
    travel_days = math.ceil(hours / TRAVEL_HOURS_PER_DAY)
    if travel_days <= 1:
        total_days = 1
    else:
        total_days = math.ceil(travel_days * REST_DAY_FACTOR)

    fuel_required = round_half_up(distance_km / 100 * stats.total_fuel_consumption)
    fuel_capacity = estimate_fuel_capacity(convoy.vehicles)
    usable_fuel = fuel_capacity * USABLE_FUEL_FRACTION
    fuel_stops = max(0, math.ceil(fuel_required / usable_fuel) - 1)

    plan = TravelPlan(
        distance=distance_km,
        effective_speed=round_half_up(effective_speed),
        hours=round_places(hours, 1),
        travel_days=travel_days,
        total_days=total_days,
        fuel_required=fuel_required,
        fuel_capacity=fuel_capacity,
        fuel_stops=fuel_stops,
        terrain_modifier=terrain,
        weather_modifier=weather,
    )
    logger.debug("Travel plan for %s: %s", convoy.name, plan.summary)
    return plan
