"""
Vehicle and convoy statistics.

This package derives ratings from vehicle specs and tracks vehicles over time:
- VehicleSpec / Vehicle: specs, validation, categories and statistics
- Condition: durability, damage and repair history, stat penalties
- CargoHold: cargo items loaded against a vehicle's capacity
- Fleet / Convoy: vehicles owned by id and grouped into convoys
- plan_travel, compare_convoys, recommend: convoy-level planning
"""

from .errors import (
    CapacityExceeded,
    ConvoyError,
    InvalidInput,
    NotFound,
    ValidationError,
)
from .spec import VehicleSpec, validate_spec
from .categories import Categories, categorize
from .statistics import Statistics
from .condition_state import ConditionState
from .condition import Condition, ConditionChange
from .cargo import CargoHold, CargoItem, CargoResult
from .vehicle import Vehicle
from .fleet import Fleet
from .convoy import Convoy, ConvoyStatistics, OperationalParams
from .travel import TravelPlan
from .recommend import Comparison, Recommendation, Requirements
from .engine import (
    add_cargo,
    apply_damage,
    build_convoy,
    build_vehicle,
    compare_convoys,
    plan_travel,
    recommend,
    remove_cargo,
    repair,
)
from .loader import FleetDocument, load_fleet, save_fleet

__all__ = [
    "CapacityExceeded",
    "ConvoyError",
    "InvalidInput",
    "NotFound",
    "ValidationError",
    "VehicleSpec",
    "validate_spec",
    "Categories",
    "categorize",
    "Statistics",
    "ConditionState",
    "Condition",
    "ConditionChange",
    "CargoHold",
    "CargoItem",
    "CargoResult",
    "Vehicle",
    "Fleet",
    "Convoy",
    "ConvoyStatistics",
    "OperationalParams",
    "TravelPlan",
    "Comparison",
    "Recommendation",
    "Requirements",
    "add_cargo",
    "apply_damage",
    "build_convoy",
    "build_vehicle",
    "compare_convoys",
    "plan_travel",
    "recommend",
    "remove_cargo",
    "repair",
    "FleetDocument",
    "load_fleet",
    "save_fleet",
]
