"""Conversion between engine records and plain camelCase dicts.

The dicts are JSON-serializable (timestamps become ISO-8601 strings) and are
the shape used by the fleet YAML files, the CLI's JSON output and the web app.
"""

from dataclasses import fields
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from dateutil.parser import isoparse

from .cargo import CargoHold, CargoItem, CargoResult
from .categories import Categories
from .condition import (
    Condition,
    ConditionChange,
    DamageEntry,
    MaintenanceEntry,
)
from .convoy import Convoy, ConvoyStatistics, OperationalParams
from .errors import InvalidInput
from .recommend import Comparison, Recommendation, Requirements
from .spec import VehicleSpec
from .statistics import Statistics
from .travel import TravelPlan
from .vehicle import Vehicle

# VehicleSpec attribute -> dict key
SPEC_KEYS = {
    "name": "name",
    "make": "make",
    "model": "model",
    "year": "year",
    "top_speed": "topSpeed",
    "vehicle_type": "vehicleType",
    "drive_type": "driveType",
    "cylinders": "cylinders",
    "displacement": "displacement",
    "horsepower": "horsepower",
    "weight": "weight",
    "military_class": "militaryClass",
    "fuel_type": "fuelType",
}


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _dataclass_to_dict(obj) -> Dict[str, Any]:
    """Flat dataclass to a dict with camelCase keys."""
    return {camel_case(f.name): getattr(obj, f.name) for f in fields(obj)}


def _timestamp(value: datetime) -> str:
    return value.isoformat()


def parse_timestamp(value) -> datetime:
    """Accept a datetime or an ISO-8601 string; values without an offset are UTC."""
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = isoparse(str(value))
        except ValueError as e:
            raise InvalidInput(f"Invalid timestamp {value!r}: {e}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _require_mapping(data, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise InvalidInput(f"{what} must be an object, got {type(data).__name__}")
    return data


# ============================================================================
# Specs
# ============================================================================


def spec_to_dict(spec: VehicleSpec) -> Dict[str, Any]:
    """Serialize a VehicleSpec, omitting unset optional fields."""
    d: Dict[str, Any] = {}
    for attr, key in SPEC_KEYS.items():
        value = getattr(spec, attr)
        if value is None or value == "":
            continue
        d[key] = value
    return d


def spec_from_dict(data: Mapping[str, Any]) -> VehicleSpec:
    """
    Build a VehicleSpec from a camelCase dict.

    Keys that are not spec fields (such as derived statistics) are ignored.
    Values are not validated here; see ``validate_spec``.
    """
    data = _require_mapping(data, "Vehicle spec")
    kwargs = {attr: data[key] for attr, key in SPEC_KEYS.items() if key in data}
    for attr in ("name", "make", "model", "fuel_type"):
        if kwargs.get(attr) is None:
            kwargs.pop(attr, None)
    return VehicleSpec(**kwargs)


# ============================================================================
# Vehicle records
# ============================================================================


def categories_to_dict(categories: Categories) -> Dict[str, Any]:
    return _dataclass_to_dict(categories)


def statistics_to_dict(stats: Statistics) -> Dict[str, Any]:
    d = _dataclass_to_dict(stats)
    d["sustainableSpeed"] = stats.sustainable_speed
    return d


def damage_entry_to_dict(entry: DamageEntry) -> Dict[str, Any]:
    return {
        "amount": entry.amount,
        "damageType": entry.damage_type,
        "source": entry.source,
        "timestamp": _timestamp(entry.timestamp),
        "durabilityAfter": entry.durability_after,
    }


def damage_entry_from_dict(data: Mapping[str, Any]) -> DamageEntry:
    return DamageEntry(
        amount=data["amount"],
        damage_type=data.get("damageType", "Physical"),
        source=data.get("source", "Unknown"),
        timestamp=parse_timestamp(data["timestamp"]),
        durability_after=data["durabilityAfter"],
    )


def maintenance_entry_to_dict(entry: MaintenanceEntry) -> Dict[str, Any]:
    d = {
        "repairAmount": entry.repair_amount,
        "partsCost": entry.parts_cost,
        "timeSpent": entry.time_spent,
        "timestamp": _timestamp(entry.timestamp),
        "durabilityAfter": entry.durability_after,
    }
    if entry.notes:
        d["notes"] = entry.notes
    return d


def maintenance_entry_from_dict(data: Mapping[str, Any]) -> MaintenanceEntry:
    return MaintenanceEntry(
        repair_amount=data["repairAmount"],
        parts_cost=data.get("partsCost", 0),
        time_spent=data.get("timeSpent", 0),
        notes=data.get("notes") or "",
        timestamp=parse_timestamp(data["timestamp"]),
        durability_after=data["durabilityAfter"],
    )


def condition_to_dict(condition: Condition) -> Dict[str, Any]:
    return {
        "currentDurability": condition.current_durability,
        "maxDurability": condition.max_durability,
        "state": condition.state.label,
        "disadvantages": list(condition.disadvantages),
        "damageHistory": [damage_entry_to_dict(e) for e in condition.damage_history],
        "maintenanceHistory": [
            maintenance_entry_to_dict(e) for e in condition.maintenance_history
        ],
    }


def condition_from_dict(data: Mapping[str, Any]) -> Condition:
    """Rebuild a Condition; the state label is derived, so it is not read back."""
    return Condition(
        max_durability=data["maxDurability"],
        current_durability=data.get("currentDurability"),
        damage_history=[
            damage_entry_from_dict(e) for e in data.get("damageHistory") or []
        ],
        maintenance_history=[
            maintenance_entry_from_dict(e) for e in data.get("maintenanceHistory") or []
        ],
    )


def cargo_item_to_dict(item: CargoItem) -> Dict[str, Any]:
    d = {
        "id": item.id,
        "name": item.name,
        "weight": item.weight,
        "category": item.category,
        "added": _timestamp(item.added),
    }
    if item.notes:
        d["notes"] = item.notes
    return d


def cargo_item_from_dict(data: Mapping[str, Any]) -> CargoItem:
    return CargoItem(
        name=data["name"],
        weight=data["weight"],
        category=data.get("category") or "General",
        notes=data.get("notes") or "",
        id=str(data["id"]),
        added=parse_timestamp(data["added"]),
    )


def cargo_to_dict(cargo: CargoHold) -> Dict[str, Any]:
    return {
        "maxCapacity": cargo.max_capacity,
        "currentLoad": cargo.current_load,
        "items": [cargo_item_to_dict(item) for item in cargo.items],
    }


def cargo_from_dict(data: Mapping[str, Any]) -> CargoHold:
    """Rebuild a CargoHold; the load is always summed from the items."""
    items = [cargo_item_from_dict(i) for i in data.get("items") or []]
    return CargoHold(data.get("maxCapacity", 0), items)


def vehicle_to_dict(vehicle: Vehicle, include_derived: bool = True) -> Dict[str, Any]:
    """
    Serialize a vehicle.

    With ``include_derived`` the categories, base and live statistics are
    written too. Condition and cargo are written only once they exist.
    """
    d: Dict[str, Any] = {"id": vehicle.id, "spec": spec_to_dict(vehicle.spec)}
    if vehicle.errors:
        d["errors"] = list(vehicle.errors)
    if include_derived and vehicle.is_valid:
        d["displayName"] = vehicle.display_name
        d["isMilitary"] = vehicle.is_military
        d["categories"] = categories_to_dict(vehicle.categories)
        d["statistics"] = statistics_to_dict(vehicle.base_statistics)
        d["liveStatistics"] = statistics_to_dict(vehicle.live_statistics)
    if vehicle.has_condition:
        d["condition"] = condition_to_dict(vehicle.condition)
    if vehicle.has_cargo:
        d["cargo"] = cargo_to_dict(vehicle.cargo)
    return d


def vehicle_from_dict(data: Mapping[str, Any]) -> Vehicle:
    """
    Rebuild a vehicle, recomputing categories and statistics from the spec.

    A stored condition follows the recomputed base durability and a stored
    cargo hold takes the recomputed capacity.
    """
    data = _require_mapping(data, "Vehicle")
    spec = spec_from_dict(data.get("spec") or {})
    vehicle_id = data.get("id")
    if vehicle_id is not None:
        vehicle_id = str(vehicle_id)
    vehicle = Vehicle(spec, vehicle_id=vehicle_id)
    condition = condition_from_dict(data["condition"]) if "condition" in data else None
    cargo = cargo_from_dict(data["cargo"]) if "cargo" in data else None
    vehicle.restore_state(condition, cargo)
    return vehicle


# ============================================================================
# Convoys
# ============================================================================


def operational_params_to_dict(params: OperationalParams) -> Dict[str, Any]:
    return _dataclass_to_dict(params)


def operational_params_from_dict(
    data: Optional[Mapping[str, Any]],
) -> OperationalParams:
    if not data:
        return OperationalParams()
    data = _require_mapping(data, "Operational params")
    known = {camel_case(f.name): f.name for f in fields(OperationalParams)}
    unknown = set(data) - set(known)
    if unknown:
        raise InvalidInput(f"Unknown operational params: {', '.join(sorted(unknown))}")
    return OperationalParams().updated(**{known[k]: v for k, v in data.items()})


def convoy_statistics_to_dict(stats: ConvoyStatistics) -> Dict[str, Any]:
    d = _dataclass_to_dict(stats)
    d["sustainableSpeed"] = stats.sustainable_speed
    return d


def convoy_to_dict(convoy: Convoy, include_statistics: bool = True) -> Dict[str, Any]:
    """Serialize a convoy: members by id, modifiers and operational params."""
    d: Dict[str, Any] = {
        "name": convoy.name,
        "vehicleIds": list(convoy.vehicle_ids),
        "terrainModifier": convoy.terrain_modifier,
        "weatherModifier": convoy.weather_modifier,
        "operationalParams": operational_params_to_dict(convoy.operational_params),
    }
    if convoy.errors:
        d["errors"] = list(convoy.errors)
    if include_statistics:
        d["sizeModifier"] = convoy.size_modifier
        d["statistics"] = convoy_statistics_to_dict(convoy.statistics)
    return d


# ============================================================================
# Operation results
# ============================================================================


def condition_change_to_dict(change: ConditionChange) -> Dict[str, Any]:
    return {
        "actualAmount": change.actual_amount,
        "newDurability": change.new_durability,
        "conditionState": change.condition_state.label,
    }


def cargo_result_to_dict(result: CargoResult) -> Dict[str, Any]:
    return {
        "item": cargo_item_to_dict(result.item),
        "newLoad": result.new_load,
        "remainingCapacity": result.remaining_capacity,
    }


def travel_plan_to_dict(plan: TravelPlan) -> Dict[str, Any]:
    d = _dataclass_to_dict(plan)
    d["summary"] = plan.summary
    return d


def comparison_to_dict(comparison: Comparison) -> Dict[str, Any]:
    return {
        "convoys": [_dataclass_to_dict(summary) for summary in comparison.convoys],
        "fastest": comparison.fastest,
        "longestRange": comparison.longest_range,
        "mostCargo": comparison.most_cargo,
        "mostPowerful": comparison.most_powerful,
        "mostEfficient": comparison.most_efficient,
    }


def recommendation_to_dict(recommendation: Recommendation) -> Dict[str, Any]:
    return {
        "name": recommendation.name,
        "meetsRequirements": recommendation.meets_requirements,
        "vehicles": list(recommendation.vehicles),
        "vehicleIds": list(recommendation.vehicle_ids),
        "statistics": {
            "speed": recommendation.speed,
            "range": recommendation.range,
            "cargo": recommendation.cargo,
            "power": recommendation.power,
            "efficiency": recommendation.efficiency,
        },
    }


def recommendations_to_list(
    recommendations: List[Recommendation],
) -> List[Dict[str, Any]]:
    return [recommendation_to_dict(r) for r in recommendations]


def requirements_from_dict(data: Optional[Mapping[str, Any]]) -> Requirements:
    """Requirements from camelCase keys; missing or null values take the defaults."""
    data = _require_mapping(data or {}, "Requirements")
    kwargs = {}
    for f in fields(Requirements):
        value = data.get(camel_case(f.name))
        if value is not None:
            kwargs[f.name] = value
    return Requirements(**kwargs)
