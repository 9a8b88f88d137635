"""Convoy comparison and composition recommendations."""

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Sequence

from .convoy import Convoy, ConvoyStatistics
from .errors import InvalidInput
from .fleet import Fleet
from .formulas import round_places
from .spec import VehicleSpec, is_number
from .vehicle import Vehicle

logger = logging.getLogger(__name__)

SPEED_FOCUSED_LIMIT = 3
RANGE_FOCUSED_LIMIT = 4

# Weights for the balanced score; fuel scores as (20 - FC) so lower is better
BALANCED_WEIGHTS = {
    "speed_rating": 0.3,
    "fuel_consumption": 0.2,
    "cargo_capacity": 0.2,
    "power_rating": 0.15,
    "maneuverability": 0.15,
}
FUEL_SCORE_BASE = 20


def fuel_efficiency(stats: ConvoyStatistics) -> Optional[float]:
    """Monthly fuel per monthly km; None when the convoy covers no distance."""
    if stats.monthly_travel_distance <= 0:
        return None
    return stats.monthly_fuel_consumption / stats.monthly_travel_distance


# ============================================================================
# Comparison
# ============================================================================


@dataclass
class ConvoySummary:
    """One convoy's row in a comparison."""

    name: str
    vehicle_count: int
    speed: int
    daily_range: int
    monthly_range: int
    fuel_limited_range: int
    cargo: int
    power: int
    monthly_fuel: int
    monthly_maintenance: int
    efficiency: Optional[float]

    @classmethod
    def for_convoy(cls, convoy: Convoy) -> "ConvoySummary":
        stats = convoy.statistics
        return cls(
            name=convoy.name,
            vehicle_count=stats.vehicle_count,
            speed=stats.sustainable_speed,
            daily_range=stats.daily_travel_distance,
            monthly_range=stats.monthly_travel_distance,
            fuel_limited_range=stats.fuel_limited_range,
            cargo=stats.total_cargo_capacity,
            power=stats.total_power_rating,
            monthly_fuel=stats.monthly_fuel_consumption,
            monthly_maintenance=stats.monthly_maintenance_hours,
            efficiency=fuel_efficiency(stats),
        )


@dataclass
class Comparison:
    """Side by side convoy summaries and the leader in each category."""

    convoys: List[ConvoySummary] = field(default_factory=list)
    fastest: Optional[str] = None
    longest_range: Optional[str] = None
    most_cargo: Optional[str] = None
    most_powerful: Optional[str] = None
    most_efficient: Optional[str] = None


def _leader(
    summaries: Sequence[ConvoySummary],
    key: Callable[[ConvoySummary], Optional[float]],
    lowest: bool = False,
) -> Optional[str]:
    """Name of the best summary by ``key``; the first one wins a tie."""
    best = None
    best_value = None
    for summary in summaries:
        value = key(summary)
        if value is None:
            continue
        if best_value is None or (value < best_value if lowest else value > best_value):
            best, best_value = summary.name, value
    return best


def compare_convoys(convoys: Sequence[Convoy]) -> Comparison:
    """
    Summarize convoys and name the fastest, longest range (fuel limited),
    most cargo, most powerful and most fuel efficient.

    Raises InvalidInput when no convoys are given.
    """
    if not convoys:
        raise InvalidInput("No convoys provided for comparison")

    summaries = [ConvoySummary.for_convoy(convoy) for convoy in convoys]
    return Comparison(
        convoys=summaries,
        fastest=_leader(summaries, lambda s: s.speed),
        longest_range=_leader(summaries, lambda s: s.fuel_limited_range),
        most_cargo=_leader(summaries, lambda s: s.cargo),
        most_powerful=_leader(summaries, lambda s: s.power),
        most_efficient=_leader(summaries, lambda s: s.efficiency, lowest=True),
    )


# ============================================================================
# Recommendations
# ============================================================================


@dataclass
class Requirements:
    """Mission minimums a candidate convoy is checked against."""

    min_speed: float = 0
    min_range: float = 0
    min_cargo: float = 0
    min_power: float = 0
    max_vehicles: int = 10

    def __post_init__(self):
        for name in ("min_speed", "min_range", "min_cargo", "min_power"):
            value = getattr(self, name)
            if not is_number(value):
                raise InvalidInput(f"{name} must be a number, got {value!r}")
        max_vehicles = self.max_vehicles
        if isinstance(max_vehicles, bool) or not isinstance(max_vehicles, int):
            raise InvalidInput(
                f"max_vehicles must be a whole number, got {max_vehicles!r}"
            )
        if max_vehicles < 1:
            raise InvalidInput("max_vehicles must be at least 1")


@dataclass
class Recommendation:
    """A candidate convoy composition."""

    name: str
    meets_requirements: bool
    vehicles: List[str]
    vehicle_ids: List[str]
    speed: int
    range: int
    cargo: int
    power: int
    efficiency: Optional[float]


def balanced_score(vehicle: Vehicle) -> float:
    stats = vehicle.live_statistics
    fuel_score = FUEL_SCORE_BASE - stats.fuel_consumption
    return (
        stats.speed_rating * BALANCED_WEIGHTS["speed_rating"]
        + fuel_score * BALANCED_WEIGHTS["fuel_consumption"]
        + stats.cargo_capacity * BALANCED_WEIGHTS["cargo_capacity"]
        + stats.power_rating * BALANCED_WEIGHTS["power_rating"]
        + stats.maneuverability * BALANCED_WEIGHTS["maneuverability"]
    )


def select_for_speed(vehicles: Sequence[Vehicle], max_count: int) -> List[Vehicle]:
    ranked = sorted(
        vehicles, key=lambda v: v.live_statistics.speed_rating, reverse=True
    )
    return ranked[: min(max_count, SPEED_FOCUSED_LIMIT)]


def select_for_range(vehicles: Sequence[Vehicle], max_count: int) -> List[Vehicle]:
    ranked = sorted(vehicles, key=lambda v: v.live_statistics.fuel_consumption)
    return ranked[: min(max_count, RANGE_FOCUSED_LIMIT)]


def select_for_cargo(vehicles: Sequence[Vehicle], max_count: int) -> List[Vehicle]:
    ranked = sorted(
        vehicles, key=lambda v: v.live_statistics.cargo_capacity, reverse=True
    )
    return ranked[:max_count]


def select_balanced(vehicles: Sequence[Vehicle], max_count: int) -> List[Vehicle]:
    ranked = sorted(vehicles, key=balanced_score, reverse=True)
    return ranked[:max_count]


CANDIDATES = (
    ("Speed Focused", select_for_speed),
    ("Range Focused", select_for_range),
    ("Cargo Focused", select_for_cargo),
    ("Balanced", select_balanced),
)


def meets(requirements: Requirements, stats: ConvoyStatistics) -> bool:
    return (
        stats.sustainable_speed >= requirements.min_speed
        and stats.fuel_limited_range >= requirements.min_range
        and stats.total_cargo_capacity >= requirements.min_cargo
        and stats.total_power_rating >= requirements.min_power
    )


def recommend(
    requirements: Requirements,
    available: Iterable[VehicleSpec],
    fleet: Optional[Fleet] = None,
) -> List[Recommendation]:
    """
    Propose four convoy compositions from the available vehicle specs.

    Specs that fail validation are ignored. Returns an empty list when no
    valid vehicle is available. Ties in each ranking keep input order.
    """
    fleet = fleet if fleet is not None else Fleet()
    vehicles = [fleet.add_spec(spec) for spec in available]
    valid = [vehicle for vehicle in vehicles if vehicle.is_valid]
    if not valid:
        logger.warning("No valid vehicles available for recommendations")
        return []

    recommendations = []
    for name, select in CANDIDATES:
        chosen = select(valid, requirements.max_vehicles)
        if not chosen:
            continue
        convoy = Convoy(name, fleet=fleet, vehicle_ids=[v.id for v in chosen])
        stats = convoy.statistics
        efficiency = fuel_efficiency(stats)
        recommendations.append(
            Recommendation(
                name=name,
                meets_requirements=meets(requirements, stats),
                vehicles=[v.display_name for v in chosen],
                vehicle_ids=[v.id for v in chosen],
                speed=stats.sustainable_speed,
                range=stats.fuel_limited_range,
                cargo=stats.total_cargo_capacity,
                power=stats.total_power_rating,
                efficiency=(
                    round_places(efficiency, 2) if efficiency is not None else None
                ),
            )
        )
        logger.debug(
            "Candidate %s: %d vehicles, speed %d",
            name,
            len(chosen),
            stats.convoy_speed,
        )
    return recommendations
