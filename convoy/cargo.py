"""Cargo ledger - load carried by one vehicle against its capacity."""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from .condition import utc_now
from .errors import CapacityExceeded, InvalidInput, NotFound
from .spec import is_number

logger = logging.getLogger(__name__)


def new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class CargoItem:
    """An item loaded onto a vehicle."""

    name: str
    weight: float
    category: str = "General"
    notes: str = ""
    id: str = field(default_factory=new_id)
    added: datetime = field(default_factory=utc_now)


@dataclass
class CargoResult:
    """Outcome of a load or unload operation."""

    item: CargoItem
    new_load: float
    remaining_capacity: float


class CargoHold:
    """Ordered cargo items tracked against a fixed capacity."""

    def __init__(self, max_capacity: float, items: Optional[List[CargoItem]] = None):
        self.max_capacity = max_capacity
        self.items = list(items or [])

    @property
    def current_load(self) -> float:
        """Sum of item weights."""
        return sum(item.weight for item in self.items)

    @property
    def remaining_capacity(self) -> float:
        return self.max_capacity - self.current_load

    @property
    def load_percent(self) -> int:
        if self.max_capacity <= 0:
            return 0
        return round(self.current_load / self.max_capacity * 100)

    def get_item(self, item_id: str) -> CargoItem:
        for item in self.items:
            if item.id == item_id:
                return item
        raise NotFound("Cargo item", item_id)

    def add_item(
        self,
        name: str,
        weight: float,
        category: str = "General",
        notes: str = "",
        item_id: Optional[str] = None,
        timestamp: Optional[datetime] = None,
    ) -> CargoResult:
        """
        Load an item if it fits.

        Raises:
            InvalidInput: weight is not a positive number, or the id is taken.
            CapacityExceeded: the item does not fit; the hold is unchanged.
        """
        if not is_number(weight):
            raise InvalidInput(f"Cargo weight must be a number, got {weight!r}")
        if weight <= 0:
            raise InvalidInput("Cargo weight must be greater than 0")
        if item_id and any(existing.id == item_id for existing in self.items):
            raise InvalidInput(f"Cargo item id already in use: {item_id}")
        if self.current_load + weight > self.max_capacity:
            logger.warning(
                "Rejected cargo %r (%g): %g of %g units free",
                name,
                weight,
                self.remaining_capacity,
                self.max_capacity,
            )
            raise CapacityExceeded(weight, self.remaining_capacity)

        item = CargoItem(
            name=name,
            weight=weight,
            category=category,
            notes=notes,
            id=item_id or new_id(),
            added=timestamp or utc_now(),
        )
        self.items.append(item)
        logger.info(
            "Loaded %r (%g): %g/%g", name, weight, self.current_load, self.max_capacity
        )
        return CargoResult(item, self.current_load, self.remaining_capacity)

    def remove_item(self, item_id: str) -> CargoResult:
        """Unload an item by id. Raises NotFound for an unknown id."""
        item = self.get_item(item_id)
        self.items = [existing for existing in self.items if existing.id != item_id]
        logger.info(
            "Unloaded %r (%g): %g/%g",
            item.name,
            item.weight,
            self.current_load,
            self.max_capacity,
        )
        return CargoResult(item, self.current_load, self.remaining_capacity)

    def resync_capacity(self, max_capacity: float) -> None:
        """
        Follow a recalculated base cargo capacity.

        Raises CapacityExceeded (and keeps the old capacity) when the
        current load would no longer fit.
        """
        if self.current_load > max_capacity:
            raise CapacityExceeded(self.current_load, max_capacity)
        self.max_capacity = max_capacity
