"""
Operations exposed to collaborators (CLI, web app, persistence).

Each function accepts either engine records or their camelCase dict form
and raises a ConvoyError subclass on failure. Results are dataclasses; use
``convoy.serialize`` to turn them into plain dicts.
"""

from typing import Iterable, List, Mapping, Optional, Sequence, Union

from . import convoy as convoy_module
from . import recommend as recommend_module
from . import travel
from . import vehicle as vehicle_module
from .cargo import CargoResult
from .condition import ConditionChange
from .convoy import Convoy, OperationalParams
from .errors import InvalidInput
from .fleet import Fleet
from .recommend import Comparison, Recommendation, Requirements
from .serialize import (
    operational_params_from_dict,
    requirements_from_dict,
    spec_from_dict,
)
from .spec import VehicleSpec, is_number
from .travel import TravelPlan
from .vehicle import Vehicle

SpecLike = Union[VehicleSpec, Mapping]


def _as_spec(spec: SpecLike) -> VehicleSpec:
    if isinstance(spec, VehicleSpec):
        return spec
    return spec_from_dict(spec)


def _require_number(value, what: str) -> float:
    if not is_number(value):
        raise InvalidInput(f"{what} must be a finite number, got {value!r}")
    return value


def build_vehicle(spec: SpecLike, vehicle_id: Optional[str] = None) -> Vehicle:
    """Validate, categorize and rate a spec. Check ``is_valid`` on the result."""
    return vehicle_module.build_vehicle(_as_spec(spec), vehicle_id)


def build_convoy(
    name: str,
    specs: Iterable[SpecLike],
    terrain_modifier: Optional[float] = None,
    weather_modifier: Optional[float] = None,
    operational_params: Union[OperationalParams, Mapping, None] = None,
    fleet: Optional[Fleet] = None,
) -> Convoy:
    """Build a convoy from specs; invalid specs are listed in ``convoy.errors``."""
    if not isinstance(operational_params, OperationalParams):
        operational_params = operational_params_from_dict(operational_params)
    return convoy_module.build_convoy(
        name,
        [_as_spec(spec) for spec in specs],
        terrain_modifier=terrain_modifier,
        weather_modifier=weather_modifier,
        operational_params=operational_params,
        fleet=fleet,
    )


def apply_damage(
    vehicle: Vehicle,
    amount: float,
    damage_type: str = "Physical",
    source: str = "Unknown",
) -> ConditionChange:
    """Damage a vehicle; the amount is clamped to its remaining durability."""
    return vehicle.apply_damage(
        _require_number(amount, "Damage amount"), damage_type, source
    )


def repair(
    vehicle: Vehicle,
    amount: float,
    parts_cost: float = 0,
    time_spent: float = 0,
    notes: str = "",
) -> ConditionChange:
    """Repair a vehicle; the amount is clamped to the missing durability."""
    return vehicle.repair(
        _require_number(amount, "Repair amount"),
        _require_number(parts_cost, "Parts cost"),
        _require_number(time_spent, "Time spent"),
        notes,
    )


def add_cargo(
    vehicle: Vehicle,
    name: str,
    weight: float,
    category: str = "General",
    notes: str = "",
) -> CargoResult:
    return vehicle.add_cargo(
        name, _require_number(weight, "Cargo weight"), category, notes
    )


def remove_cargo(vehicle: Vehicle, item_id: str) -> CargoResult:
    return vehicle.remove_cargo(item_id)


def plan_travel(
    convoy: Convoy,
    distance_km: float,
    terrain_modifier: float = 1.0,
    weather_modifier: Optional[float] = None,
) -> TravelPlan:
    return travel.plan_travel(convoy, distance_km, terrain_modifier, weather_modifier)


def compare_convoys(convoys: Sequence[Convoy]) -> Comparison:
    return recommend_module.compare_convoys(convoys)


def recommend(
    requirements: Union[Requirements, Mapping, None],
    available_specs: Iterable[SpecLike],
) -> List[Recommendation]:
    if not isinstance(requirements, Requirements):
        requirements = requirements_from_dict(requirements)
    return recommend_module.recommend(
        requirements, [_as_spec(s) for s in available_specs]
    )
