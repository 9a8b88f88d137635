"""Statistics dataclass for calculated vehicle ratings."""

from dataclasses import dataclass, replace


@dataclass
class Statistics:
    """The seven vehicle ratings plus the cargo category label."""

    speed_rating: int
    fuel_consumption: int
    cargo_capacity: int
    cargo_category: str
    maneuverability: int
    durability: int
    power_rating: int
    maintenance_cost: int

    @property
    def sustainable_speed(self) -> int:
        """Sustainable travel speed in km/h."""
        return self.speed_rating * 10

    def copy(self, **changes) -> "Statistics":
        return replace(self, **changes)
