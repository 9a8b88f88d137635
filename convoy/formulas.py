"""Statistic formulas - pure functions from specs and categories to ratings."""

import logging
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Tuple

from . import tables
from .categories import NOT_MILITARY, Categories
from .spec import VehicleSpec
from .statistics import Statistics

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    if not math.isfinite(value):
        raise ValueError(f"cannot round {value!r}")
    exact = Decimal(repr(float(value)))
    return int(exact.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def round_places(value: float, places: int) -> float:
    """round_half_up to a number of decimal places (1.25 -> 1.3 for one place)."""
    if not math.isfinite(value):
        raise ValueError(f"cannot round {value!r}")
    step = Decimal(1).scaleb(-places)
    return float(Decimal(repr(float(value))).quantize(step, rounding=ROUND_HALF_UP))


def speed_rating(top_speed: float) -> int:
    """SPD = top speed / 16, minimum 1."""
    return max(round_half_up(top_speed / 16), 1)


def displacement_category(displacement: float) -> str:
    for upper, inclusive, _, name in tables.DISPLACEMENT_BRACKETS:
        if displacement < upper or (inclusive and displacement == upper):
            return name
    return tables.DISPLACEMENT_OPEN_BRACKET[1]


def displacement_multiplier(displacement: float) -> float:
    """Fuel multiplier: <2.0L 1.0, <=4.0L 1.5, <=6.0L 2.0, larger 3.0."""
    for upper, inclusive, multiplier, _ in tables.DISPLACEMENT_BRACKETS:
        if displacement < upper or (inclusive and displacement == upper):
            return multiplier
    return tables.DISPLACEMENT_OPEN_BRACKET[0]


def fuel_consumption(
    cylinders: Optional[int],
    displacement: Optional[float],
    is_military: bool,
    vehicle_type: str,
) -> int:
    """
    Fuel consumption per 100 km.

    - With engine data: cylinders x displacement multiplier
    - Without: base consumption for the vehicle type
    Military vehicles pay a 25% penalty before the single final rounding.
    """
    if cylinders and displacement:
        consumption = cylinders * displacement_multiplier(displacement)
    else:
        consumption = tables.FALLBACK_FUEL_CONSUMPTION.get(
            vehicle_type.lower(), tables.FALLBACK_FUEL_CONSUMPTION_DEFAULT
        )
    if is_military:
        consumption *= tables.MILITARY_FUEL_PENALTY
    return max(round_half_up(consumption), 1)


def power_rating(
    horsepower: Optional[float], displacement: Optional[float] = None
) -> int:
    """
    PWR = horsepower / 50, minimum 1.

    Without horsepower the midpoint of the displacement bracket is used,
    and 3 when displacement is unknown too.
    """
    if horsepower is not None:
        return max(round_half_up(horsepower / 50), 1)
    if displacement:
        bracket = displacement_category(displacement)
        return tables.FALLBACK_POWER_BY_DISPLACEMENT[bracket]
    return tables.FALLBACK_POWER_DEFAULT


def cargo_category(capacity: int) -> str:
    for limit, label in tables.CARGO_CATEGORY_THRESHOLDS:
        if capacity <= limit:
            return label
    return tables.CARGO_CATEGORY_LARGEST


def cargo_capacity(size_category: str, type_category: str) -> Tuple[int, str]:
    """Cargo units and category label: mean of the size range x type multiplier."""
    low, high = tables.CARGO_SIZE_RANGE.get(
        size_category.lower(), tables.CARGO_SIZE_RANGE_DEFAULT
    )
    multiplier = tables.CARGO_TYPE_MULTIPLIER.get(
        type_category.lower(), tables.CARGO_TYPE_MULTIPLIER_DEFAULT
    )
    capacity = round_half_up((low + high) / 2 * multiplier)
    return capacity, cargo_category(capacity)


def size_penalty(size_category: str) -> int:
    return tables.SIZE_PENALTY.get(size_category.lower(), tables.SIZE_PENALTY_DEFAULT)


def maneuverability(
    size_category: str, drive_type: str, is_military: bool = False
) -> int:
    """MAN = 10 - size penalty x 2 + drive bonus (+2 military), minimum 1."""
    drive_bonus = tables.DRIVE_TYPE_BONUS.get(
        drive_type.lower(), tables.DRIVE_TYPE_BONUS_DEFAULT
    )
    rating = 10 - size_penalty(size_category) * 2 + drive_bonus
    if is_military:
        rating += tables.MILITARY_MANEUVERABILITY_BONUS
    return max(rating, 1)


def durability(
    type_category: str, size_category: str, is_military: bool = False
) -> int:
    """DUR = type base + size modifier, x1.5 for military, minimum 10."""
    base = tables.BASE_DURABILITY.get(
        type_category.lower(), tables.BASE_DURABILITY_DEFAULT
    )
    modifier = tables.SIZE_DURABILITY_MODIFIER.get(
        size_category.lower(), tables.SIZE_DURABILITY_MODIFIER_DEFAULT
    )
    value = base + modifier
    if is_military:
        value = round_half_up(value * tables.MILITARY_DURABILITY_BONUS)
    return max(value, 10)


def maintenance_cost(
    fuel: int,
    speed: int,
    complexity_level: str,
    military_class: Optional[str] = None,
) -> int:
    """MC = (FC + SPD) / 10 x complexity x military multiplier, minimum 1."""
    complexity = tables.COMPLEXITY_MULTIPLIER.get(
        complexity_level.lower(), tables.COMPLEXITY_MULTIPLIER_DEFAULT
    )
    military = tables.MILITARY_MULTIPLIER_DEFAULT
    if military_class and military_class != NOT_MILITARY:
        military = tables.MILITARY_MULTIPLIER.get(
            military_class.lower(), tables.MILITARY_MULTIPLIER_DEFAULT
        )
    return max(round_half_up((fuel + speed) / 10 * complexity * military), 1)


def calculate_statistics(spec: VehicleSpec, categories: Categories) -> Statistics:
    """Evaluate every formula for a validated spec."""
    is_military = spec.is_military
    speed = speed_rating(spec.top_speed)
    fuel = fuel_consumption(
        spec.cylinders, spec.displacement, is_military, spec.vehicle_type
    )
    capacity, capacity_label = cargo_capacity(
        categories.size_category, categories.type_category
    )
    statistics = Statistics(
        speed_rating=speed,
        fuel_consumption=fuel,
        cargo_capacity=capacity,
        cargo_category=capacity_label,
        maneuverability=maneuverability(
            categories.size_category, spec.drive_type, is_military
        ),
        durability=durability(
            categories.type_category, categories.size_category, is_military
        ),
        power_rating=power_rating(spec.horsepower, spec.displacement),
        maintenance_cost=maintenance_cost(
            fuel, speed, categories.complexity_level, categories.military_class
        ),
    )
    logger.debug("Calculated statistics for %s: %s", spec.display_name, statistics)
    return statistics
