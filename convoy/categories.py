"""Vehicle categorization - size, type, complexity and military class."""

from dataclasses import dataclass

from .spec import VehicleSpec

SIZE_CATEGORIES = ("Compact", "Midsize", "Fullsize", "Large", "Oversized")
COMPLEXITY_LEVELS = ("Simple", "Standard", "Complex", "Specialized")

# Military class of a civilian vehicle; lookups treat it as "no multiplier"
NOT_MILITARY = "N/A"
DEFAULT_MILITARY_CLASS = "light"

# (exclusive upper bound in kg, category)
_WEIGHT_LADDER = (
    (1500, "Compact"),
    (2500, "Midsize"),
    (4000, "Fullsize"),
    (10000, "Large"),
)


@dataclass(frozen=True)
class Categories:
    """Categories derived from a spec; every statistic formula reads these."""

    size_category: str
    type_category: str
    complexity_level: str
    military_class: str

    @property
    def is_military(self) -> bool:
        return self.military_class != NOT_MILITARY


def determine_size_category(spec: VehicleSpec) -> str:
    """
    Size from weight when known, else from vehicle type and engine size.

    Weight ladder: <1500 Compact, <2500 Midsize, <4000 Fullsize,
    <10000 Large, otherwise Oversized.
    """
    if spec.weight:
        for limit, category in _WEIGHT_LADDER:
            if spec.weight < limit:
                return category
        return "Oversized"

    vehicle_type = spec.vehicle_type.lower()
    displacement = spec.displacement or 0

    if vehicle_type == "motorcycle":
        return "Compact"
    if vehicle_type == "military" and displacement > 10:
        return "Oversized"
    if vehicle_type in ("commercial", "specialty"):
        return "Large"
    if vehicle_type == "truck" and displacement > 5:
        return "Large"
    if displacement > 4:
        return "Fullsize"
    if displacement > 2:
        return "Midsize"
    return "Compact"


def determine_complexity_level(spec: VehicleSpec, is_military: bool) -> str:
    if is_military:
        return "Specialized"

    vehicle_type = spec.vehicle_type.lower()
    displacement = spec.displacement or 0
    cylinders = spec.cylinders or 0

    if vehicle_type in ("specialty", "commercial"):
        return "Complex"
    if displacement > 6 or cylinders > 8:
        return "Complex"
    if displacement > 3 or cylinders > 4:
        return "Standard"
    return "Simple"


def categorize(spec: VehicleSpec) -> Categories:
    """Derive all categories for a validated spec."""
    is_military = spec.is_military
    return Categories(
        size_category=determine_size_category(spec),
        type_category=spec.vehicle_type.lower(),
        complexity_level=determine_complexity_level(spec, is_military),
        military_class=(
            (spec.military_class or DEFAULT_MILITARY_CLASS).lower()
            if is_military
            else NOT_MILITARY
        ),
    )


def most_complex(levels) -> str:
    """Highest complexity level among ``levels`` ("Simple" when empty)."""
    ranked = [
        COMPLEXITY_LEVELS.index(level) for level in levels if level in COMPLEXITY_LEVELS
    ]
    return COMPLEXITY_LEVELS[max(ranked)] if ranked else "Simple"
