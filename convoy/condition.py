"""Vehicle condition - durability pool, damage/repair history and stat penalties."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from .condition_state import ConditionState
from .statistics import Statistics

logger = logging.getLogger(__name__)

# Checks a caller should roll with disadvantage; advisory only, the
# numbers are not changed
DISADVANTAGES: Dict[ConditionState, Tuple[str, ...]] = {
    ConditionState.PRISTINE: (),
    ConditionState.DAMAGED: ("power",),
    ConditionState.HEAVILY_DAMAGED: ("maneuverability", "power"),
    ConditionState.CRITICAL: ("maneuverability", "power", "all"),
    ConditionState.DESTROYED: (),
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class DamageEntry:
    """A record of damage taken."""

    amount: float
    damage_type: str
    source: str
    timestamp: datetime
    durability_after: float


@dataclass
class MaintenanceEntry:
    """A record of repair work performed."""

    repair_amount: float
    parts_cost: float
    time_spent: float
    notes: str
    timestamp: datetime
    durability_after: float


@dataclass
class ConditionChange:
    """Outcome of a damage or repair operation."""

    actual_amount: float
    new_durability: float
    condition_state: ConditionState


def apply_condition_penalties(base: Statistics, state: ConditionState) -> Statistics:
    """
    Live statistics for a condition tier, starting from the base values.

    - Damaged: +1 FC
    - Heavily Damaged: half speed (min 1), +2 FC, 2x MC
    - Critical: no movement, +3 FC, 3x MC
    - Destroyed: no movement, no fuel use, no power
    """
    live = base.copy()
    if state == ConditionState.DAMAGED:
        live.fuel_consumption += 1
    elif state == ConditionState.HEAVILY_DAMAGED:
        live.speed_rating = max(1, live.speed_rating // 2)
        live.fuel_consumption += 2
        live.maintenance_cost *= 2
    elif state == ConditionState.CRITICAL:
        live.speed_rating = 0
        live.fuel_consumption += 3
        live.maintenance_cost *= 3
    elif state == ConditionState.DESTROYED:
        live.speed_rating = 0
        live.fuel_consumption = 0
        live.power_rating = 0
    return live


class Condition:
    """Durability tracking for one vehicle."""

    def __init__(
        self,
        max_durability: float,
        current_durability: Optional[float] = None,
        damage_history: Optional[List[DamageEntry]] = None,
        maintenance_history: Optional[List[MaintenanceEntry]] = None,
    ):
        self.max_durability = max_durability
        if current_durability is None:
            current_durability = max_durability
        self.current_durability = min(max(current_durability, 0), max_durability)
        self.damage_history = damage_history or []
        self.maintenance_history = maintenance_history or []

    @property
    def ratio(self) -> float:
        if self.max_durability <= 0:
            return 0.0
        return self.current_durability / self.max_durability

    @property
    def state(self) -> ConditionState:
        """Condition tier, always derived from the current durability ratio."""
        return ConditionState.for_ratio(self.ratio)

    @property
    def disadvantages(self) -> Tuple[str, ...]:
        return DISADVANTAGES[self.state]

    @property
    def missing_durability(self) -> float:
        return self.max_durability - self.current_durability

    def apply_damage(
        self,
        amount: float,
        damage_type: str = "Physical",
        source: str = "Unknown",
        timestamp: Optional[datetime] = None,
    ) -> ConditionChange:
        """
        Reduce durability by ``amount``, clamped to what is left.

        The history entry records the amount actually applied.
        """
        actual = max(0, min(amount, self.current_durability))
        before = self.state
        self.current_durability -= actual
        self.damage_history.append(
            DamageEntry(
                amount=actual,
                damage_type=damage_type,
                source=source,
                timestamp=timestamp or utc_now(),
                durability_after=self.current_durability,
            )
        )
        after = self.state
        logger.info(
            "Applied %g %s damage from %s: durability %g/%g (%s)",
            actual,
            damage_type,
            source,
            self.current_durability,
            self.max_durability,
            after.label,
        )
        if after != before:
            logger.info("Condition changed: %s -> %s", before.label, after.label)
        return ConditionChange(actual, self.current_durability, after)

    def repair(
        self,
        amount: float,
        parts_cost: float = 0,
        time_spent: float = 0,
        notes: str = "",
        timestamp: Optional[datetime] = None,
    ) -> ConditionChange:
        """
        Restore durability by ``amount``, clamped to the missing durability.

        The history entry records the amount actually restored.
        """
        actual = max(0, min(amount, self.missing_durability))
        before = self.state
        self.current_durability += actual
        self.maintenance_history.append(
            MaintenanceEntry(
                repair_amount=actual,
                parts_cost=parts_cost,
                time_spent=time_spent,
                notes=notes,
                timestamp=timestamp or utc_now(),
                durability_after=self.current_durability,
            )
        )
        after = self.state
        logger.info(
            "Repaired %g durability: %g/%g (%s)",
            actual,
            self.current_durability,
            self.max_durability,
            after.label,
        )
        if after != before:
            logger.info("Condition changed: %s -> %s", before.label, after.label)
        return ConditionChange(actual, self.current_durability, after)

    def resync_max_durability(self, new_max: float) -> None:
        """
        Follow a recalculated base durability.

        Max and current durability shift by the same difference, so damage
        already taken is kept; current durability stays within [0, max].
        """
        difference = new_max - self.max_durability
        self.max_durability = new_max
        self.current_durability = min(
            max(self.current_durability + difference, 0), new_max
        )
