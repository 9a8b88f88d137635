"""Vehicle class - the main aggregate for vehicle data and calculations."""

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from .cargo import CargoHold, CargoResult, new_id
from .categories import Categories, categorize
from .condition import Condition, ConditionChange, apply_condition_penalties
from .condition_state import ConditionState
from .errors import ValidationError
from .formulas import calculate_statistics
from .spec import VehicleSpec, validate_spec
from .statistics import Statistics

logger = logging.getLogger(__name__)


class Vehicle:
    """Complete vehicle record: spec, derived ratings, condition and cargo."""

    def __init__(
        self,
        spec: VehicleSpec,
        vehicle_id: Optional[str] = None,
        condition: Optional[Condition] = None,
        cargo: Optional[CargoHold] = None,
    ):
        self.id = vehicle_id or new_id()
        self.spec = spec
        self.errors: List[str] = []
        self.categories: Optional[Categories] = None
        self.base_statistics: Optional[Statistics] = None
        self._condition = condition
        self._cargo = cargo
        self._calculate()

    def _calculate(self) -> None:
        self.errors = validate_spec(self.spec)
        if self.errors:
            self.categories = None
            self.base_statistics = None
            logger.warning(
                "Invalid spec for %s: %s",
                self.spec.display_name,
                "; ".join(self.errors),
            )
            return
        self.categories = categorize(self.spec)
        self.base_statistics = calculate_statistics(self.spec, self.categories)

    @property
    def display_name(self) -> str:
        return self.spec.display_name

    @property
    def full_identifier(self) -> str:
        return self.spec.full_identifier

    @property
    def is_military(self) -> bool:
        return self.spec.is_military

    @property
    def is_valid(self) -> bool:
        """True when the spec passed validation and ratings were calculated."""
        return (
            not self.errors
            and self.base_statistics is not None
            and self.base_statistics.speed_rating is not None
            and self.base_statistics.fuel_consumption is not None
        )

    def require_valid(self) -> None:
        """Raise ValidationError listing every problem if the vehicle is invalid."""
        if not self.is_valid:
            raise ValidationError(self.errors, subject=self.display_name)

    @property
    def condition(self) -> Condition:
        """Condition record, created at full durability on first access."""
        if self._condition is None:
            self.require_valid()
            self._condition = Condition(self.base_statistics.durability)
        return self._condition

    @property
    def cargo(self) -> CargoHold:
        """Cargo hold, created empty on first access."""
        if self._cargo is None:
            self.require_valid()
            self._cargo = CargoHold(self.base_statistics.cargo_capacity)
        return self._cargo

    @property
    def has_condition(self) -> bool:
        """True once damage, repair or a stored record created the condition."""
        return self._condition is not None

    @property
    def has_cargo(self) -> bool:
        return self._cargo is not None

    def restore_state(
        self, condition: Optional[Condition] = None, cargo: Optional[CargoHold] = None
    ) -> None:
        """
        Attach stored condition and cargo records.

        They follow the current base durability and cargo capacity; a stored
        load larger than the capacity is kept as is.
        """
        if condition is not None:
            if self.is_valid:
                durability = self.base_statistics.durability
                if condition.max_durability != durability:
                    condition.resync_max_durability(durability)
            self._condition = condition
        if cargo is not None:
            if self.is_valid:
                cargo.max_capacity = self.base_statistics.cargo_capacity
            self._cargo = cargo

    @property
    def condition_state(self) -> ConditionState:
        return self.condition.state

    @property
    def live_statistics(self) -> Optional[Statistics]:
        """Base statistics with the current condition's penalties applied."""
        if not self.is_valid:
            return None
        if self._condition is None:
            return self.base_statistics.copy()
        return apply_condition_penalties(self.base_statistics, self._condition.state)

    @property
    def disadvantages(self) -> Tuple[str, ...]:
        """Checks rolled with disadvantage in the current condition."""
        if self._condition is None:
            return ()
        return self._condition.disadvantages

    def apply_damage(
        self,
        amount: float,
        damage_type: str = "Physical",
        source: str = "Unknown",
        timestamp: Optional[datetime] = None,
    ) -> ConditionChange:
        return self.condition.apply_damage(amount, damage_type, source, timestamp)

    def repair(
        self,
        amount: float,
        parts_cost: float = 0,
        time_spent: float = 0,
        notes: str = "",
        timestamp: Optional[datetime] = None,
    ) -> ConditionChange:
        return self.condition.repair(amount, parts_cost, time_spent, notes, timestamp)

    def add_cargo(
        self,
        name: str,
        weight: float,
        category: str = "General",
        notes: str = "",
    ) -> CargoResult:
        return self.cargo.add_item(name, weight, category, notes)

    def remove_cargo(self, item_id: str) -> CargoResult:
        return self.cargo.remove_item(item_id)

    def update_spec(self, spec: VehicleSpec) -> None:
        """
        Replace the spec and recalculate.

        Condition and cargo created earlier follow the new base durability
        and cargo capacity. Raises ValidationError (leaving the vehicle
        unchanged) if the new spec is invalid, and CapacityExceeded if the
        loaded cargo would no longer fit.
        """
        errors = validate_spec(spec)
        if errors:
            raise ValidationError(errors, subject=spec.display_name)

        categories = categorize(spec)
        statistics = calculate_statistics(spec, categories)
        if self._cargo is not None:
            self._cargo.resync_capacity(statistics.cargo_capacity)
        if self._condition is not None:
            self._condition.resync_max_durability(statistics.durability)

        self.spec = spec
        self.errors = []
        self.categories = categories
        self.base_statistics = statistics
        logger.info("Recalculated %s", self.display_name)


def build_vehicle(spec: VehicleSpec, vehicle_id: Optional[str] = None) -> Vehicle:
    """
    Categorize and rate a spec.

    Never raises for a bad spec: check ``vehicle.is_valid`` (or call
    ``require_valid()``) before using the statistics.
    """
    return Vehicle(spec, vehicle_id=vehicle_id)
