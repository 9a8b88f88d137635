"""Static lookup tables used by the statistic formulas.

Keys are lowercase. Each table has a matching ``*_DEFAULT`` used when a key
is not present (unknown vehicle type, unknown drive type, ...).
"""

from types import MappingProxyType

# Maneuverability bonus by drive type
DRIVE_TYPE_BONUS = MappingProxyType(
    {
        "fwd": 0,
        "rwd": 1,
        "awd": 2,
        "4wd": 3,
        "tracks": -1,
    }
)
DRIVE_TYPE_BONUS_DEFAULT = 0

# Durability base by vehicle type
BASE_DURABILITY = MappingProxyType(
    {
        "motorcycle": 20,
        "car": 40,
        "suv": 50,
        "truck": 60,
        "commercial": 80,
        "military": 120,
        "specialty": 100,
    }
)
BASE_DURABILITY_DEFAULT = 60

# Durability modifier by size category
SIZE_DURABILITY_MODIFIER = MappingProxyType(
    {
        "compact": -10,
        "midsize": 0,
        "fullsize": 10,
        "large": 20,
        "oversized": 30,
    }
)
SIZE_DURABILITY_MODIFIER_DEFAULT = 0

# Maneuverability penalty by size category (applied x2)
SIZE_PENALTY = MappingProxyType(
    {
        "compact": 0,
        "midsize": 1,
        "fullsize": 2,
        "large": 3,
        "oversized": 4,
    }
)
SIZE_PENALTY_DEFAULT = 0

# Maintenance cost multiplier by complexity level
COMPLEXITY_MULTIPLIER = MappingProxyType(
    {
        "simple": 1.0,
        "standard": 1.5,
        "complex": 2.0,
        "specialized": 3.0,
    }
)
COMPLEXITY_MULTIPLIER_DEFAULT = 1.5

# Maintenance cost multiplier by military class ("N/A" falls to the default)
MILITARY_MULTIPLIER = MappingProxyType(
    {
        "light": 2.0,
        "medium": 2.5,
        "heavy": 3.0,
        "specialized": 4.0,
    }
)
MILITARY_MULTIPLIER_DEFAULT = 1.0

# Fuel consumption when cylinders/displacement are unknown
FALLBACK_FUEL_CONSUMPTION = MappingProxyType(
    {
        "motorcycle": 3,
        "car": 8,
        "suv": 12,
        "truck": 15,
        "commercial": 25,
        "military": 30,
        "specialty": 20,
    }
)
FALLBACK_FUEL_CONSUMPTION_DEFAULT = 10

MILITARY_FUEL_PENALTY = 1.25
MILITARY_DURABILITY_BONUS = 1.5
MILITARY_MANEUVERABILITY_BONUS = 2

# (upper bound, inclusive?, multiplier, name); the last bracket is open-ended
DISPLACEMENT_BRACKETS = (
    (2.0, False, 1.0, "small"),
    (4.0, True, 1.5, "medium"),
    (6.0, True, 2.0, "large"),
)
DISPLACEMENT_OPEN_BRACKET = (3.0, "veryLarge")

# Power rating when horsepower is unknown: midpoint of each displacement
# bracket (2-4, 5-7, 8-10, 12-16)
FALLBACK_POWER_BY_DISPLACEMENT = MappingProxyType(
    {
        "small": 3,
        "medium": 6,
        "large": 9,
        "veryLarge": 14,
    }
)
FALLBACK_POWER_DEFAULT = 3

# Cargo capacity range (min, max) by size category
CARGO_SIZE_RANGE = MappingProxyType(
    {
        "compact": (2, 4),
        "midsize": (4, 8),
        "fullsize": (8, 12),
        "large": (12, 20),
        "oversized": (20, 40),
    }
)
CARGO_SIZE_RANGE_DEFAULT = (4, 8)

CARGO_TYPE_MULTIPLIER = MappingProxyType(
    {
        "motorcycle": 0.2,
        "car": 0.8,
        "suv": 1.0,
        "truck": 1.5,
        "commercial": 2.0,
        "military": 1.2,
        "specialty": 1.3,
    }
)
CARGO_TYPE_MULTIPLIER_DEFAULT = 1.0

# (inclusive upper bound, label); anything larger is "Very Large"
CARGO_CATEGORY_THRESHOLDS = (
    (3, "Very Small"),
    (6, "Small"),
    (12, "Medium"),
    (20, "Large"),
)
CARGO_CATEGORY_LARGEST = "Very Large"

# Fuel tank estimate in liters by vehicle type
FUEL_CAPACITY_ESTIMATE = MappingProxyType(
    {
        "motorcycle": 15,
        "car": 50,
        "suv": 70,
        "truck": 100,
        "commercial": 200,
        "military": 500,
        "specialty": 300,
    }
)
FUEL_CAPACITY_ESTIMATE_DEFAULT = 50

# Convoy size category by vehicle count: (inclusive upper bound, label)
CONVOY_SIZE_THRESHOLDS = (
    (2, "Small"),
    (5, "Medium"),
    (10, "Large"),
)
CONVOY_SIZE_LARGEST = "Huge"
CONVOY_SIZE_EMPTY = "Empty"

CONVOY_SIZE_MODIFIER = MappingProxyType(
    {
        "Small": 1.0,
        "Medium": 0.9,
        "Large": 0.8,
        "Huge": 0.5,
    }
)

VEHICLE_TYPES = (
    "motorcycle",
    "car",
    "suv",
    "truck",
    "commercial",
    "military",
    "specialty",
)
DRIVE_TYPES = tuple(DRIVE_TYPE_BONUS)
MILITARY_CLASSES = tuple(MILITARY_MULTIPLIER)
