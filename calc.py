#!/usr/bin/env python3
"""
Unified CLI for vehicle and convoy statistics.

Commands:
  vehicles     - List the fleet with key ratings and condition
  show         - Show one vehicle in detail
  add-vehicle  - Add a vehicle from its specifications
  damage       - Record damage taken by a vehicle
  repair       - Record repair work on a vehicle
  load-cargo   - Load a cargo item onto a vehicle
  unload-cargo - Remove a cargo item from a vehicle
  history      - View damage and repair history
  add-convoy   - Group fleet vehicles into a convoy
  convoy       - Show convoy statistics
  travel       - Plan a trip for a convoy
  compare      - Compare convoys side by side
  recommend    - Suggest convoy compositions from the fleet
"""

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from dateutil.parser import isoparse
from tabulate import tabulate

from convoy import (
    ConvoyError,
    InvalidInput,
    Requirements,
    VehicleSpec,
    add_cargo,
    apply_damage,
    compare_convoys,
    load_fleet,
    plan_travel,
    recommend,
    remove_cargo,
    repair,
    save_fleet,
)
from convoy import serialize
from convoy.tables import DRIVE_TYPES, MILITARY_CLASSES, VEHICLE_TYPES

logger = logging.getLogger("calc")

SHORT_ID = 8

# =============================================================================
# Formatting helpers
# =============================================================================


def format_number(value: Optional[float]) -> str:
    """Format a quantity for display."""
    if value is None:
        return "-"
    return f"{value:,.0f}" if float(value).is_integer() else f"{value:,.1f}"


def format_cost(cost: Optional[float]) -> str:
    """Format cost for display."""
    return f"${cost:,.2f}" if cost is not None else "-"


def format_durability(vehicle) -> str:
    """Current/max durability, e.g. '30/40'."""
    if not vehicle.is_valid:
        return "-"
    condition = vehicle.condition
    current = format_number(condition.current_durability)
    return f"{current}/{format_number(condition.max_durability)}"


def format_load(vehicle) -> str:
    """Cargo load against capacity, e.g. '3/8 (38%)'."""
    if not vehicle.is_valid:
        return "-"
    cargo = vehicle.cargo
    return (
        f"{format_number(cargo.current_load)}/{format_number(cargo.max_capacity)}"
        f" ({cargo.load_percent}%)"
    )


def format_timestamp(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M")


def short_id(value: str) -> str:
    return value[:SHORT_ID]


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if not text:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def print_json(data) -> None:
    print(json.dumps(data, indent=2))


def parse_since(value: str) -> datetime:
    """Parse a --since date; naive values are taken as UTC."""
    try:
        parsed = isoparse(value)
    except ValueError as e:
        raise InvalidInput(f"Invalid --since date {value!r}: {e}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# =============================================================================
# Vehicles and show commands
# =============================================================================


VEHICLE_HEADERS = [
    "ID",
    "Vehicle",
    "Type",
    "Size",
    "SPD",
    "FC",
    "Durability",
    "Condition",
    "Cargo",
]


def make_vehicle_table(vehicles) -> List[List[str]]:
    """Convert vehicles to table rows."""
    rows = []
    for vehicle in vehicles:
        if not vehicle.is_valid:
            row = [short_id(vehicle.id), vehicle.display_name, "INVALID"]
            rows.append(row + ["-"] * (len(VEHICLE_HEADERS) - len(row)))
            continue
        live = vehicle.live_statistics
        rows.append(
            [
                short_id(vehicle.id),
                vehicle.display_name,
                vehicle.categories.type_category,
                vehicle.categories.size_category,
                live.speed_rating,
                live.fuel_consumption,
                format_durability(vehicle),
                vehicle.condition_state.label,
                format_load(vehicle),
            ]
        )
    return rows


def cmd_vehicles(args, document):
    """List the fleet."""
    vehicles = document.fleet.vehicles
    if args.json:
        print_json([serialize.vehicle_to_dict(v) for v in vehicles])
        return 0

    print(f"Vehicles: {len(vehicles)}")
    print(f"Convoys: {len(document.convoys)}")
    print()
    if not vehicles:
        print("No vehicles found.")
        return 0
    print(
        tabulate(
            make_vehicle_table(vehicles), headers=VEHICLE_HEADERS, tablefmt="simple"
        )
    )
    return 0


def make_statistics_table(vehicle) -> List[List[str]]:
    """Base and live statistics side by side."""
    base = vehicle.base_statistics
    live = vehicle.live_statistics
    rows = []
    for label, attr in (
        ("Speed (SPD)", "speed_rating"),
        ("Sustainable speed (km/h)", "sustainable_speed"),
        ("Fuel consumption (FC)", "fuel_consumption"),
        ("Cargo capacity", "cargo_capacity"),
        ("Maneuverability (MAN)", "maneuverability"),
        ("Durability (DUR)", "durability"),
        ("Power (PWR)", "power_rating"),
        ("Maintenance cost (MC)", "maintenance_cost"),
    ):
        rows.append([label, getattr(base, attr), getattr(live, attr)])
    return rows


def cmd_show(args, document):
    """Show one vehicle in detail."""
    vehicle = document.fleet.find(args.vehicle)
    if args.json:
        print_json(serialize.vehicle_to_dict(vehicle))
        return 0

    print(f"Vehicle: {vehicle.full_identifier}")
    print(f"ID: {vehicle.id}")
    if not vehicle.is_valid:
        print("Invalid specification:")
        for error in vehicle.errors:
            print(f"  - {error}")
        return 0

    categories = vehicle.categories
    print(
        f"Category: {categories.size_category} {categories.type_category}, "
        f"{categories.complexity_level} maintenance"
    )
    if vehicle.is_military:
        print(f"Military class: {categories.military_class}")
    condition = vehicle.condition
    print(f"Condition: {condition.state.label} ({format_durability(vehicle)})")
    if vehicle.disadvantages:
        print(f"Disadvantage on: {', '.join(vehicle.disadvantages)}")
    print()

    print(
        tabulate(
            make_statistics_table(vehicle),
            headers=["Statistic", "Base", "Live"],
            tablefmt="simple",
        )
    )
    print()

    cargo = vehicle.cargo
    print(f"Cargo: {format_load(vehicle)}")
    if cargo.items:
        rows = [
            [
                short_id(item.id),
                item.name,
                format_number(item.weight),
                item.category,
                truncate(item.notes),
            ]
            for item in cargo.items
        ]
        headers = ["ID", "Item", "Weight", "Category", "Notes"]
        print(tabulate(rows, headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Add vehicle command
# =============================================================================


def spec_from_args(args) -> VehicleSpec:
    kwargs = {
        "top_speed": args.top_speed,
        "vehicle_type": args.type,
        "drive_type": args.drive,
        "year": args.year,
        "cylinders": args.cylinders,
        "displacement": args.displacement,
        "horsepower": args.horsepower,
        "weight": args.weight,
        "military_class": args.military_class,
    }
    for attr in ("name", "make", "model", "fuel_type"):
        value = getattr(args, attr)
        if value is not None:
            kwargs[attr] = value
    return VehicleSpec(**kwargs)


def cmd_add_vehicle(args, document):
    """Add a vehicle from its specifications."""
    vehicle = document.fleet.add_spec(spec_from_args(args))
    vehicle.require_valid()

    live = vehicle.live_statistics
    print(f"Adding vehicle to {args.fleet_file}:")
    print(f"  Vehicle: {vehicle.full_identifier}")
    print(f"  Size:    {vehicle.categories.size_category}")
    print(
        f"  Ratings: SPD {live.speed_rating}, FC {live.fuel_consumption}, "
        f"CARGO {live.cargo_capacity}, MAN {live.maneuverability}, "
        f"DUR {live.durability}, PWR {live.power_rating}, MC {live.maintenance_cost}"
    )
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_fleet(args.fleet_file, document)
    print(f"Vehicle saved as {vehicle.id}.")
    return 0


# =============================================================================
# Condition commands
# =============================================================================


def cmd_damage(args, document):
    """Record damage taken by a vehicle."""
    vehicle = document.fleet.find(args.vehicle)
    before = vehicle.condition.state
    change = apply_damage(vehicle, args.amount, args.type, args.source)

    print(f"Vehicle: {vehicle.display_name}")
    print(
        f"Damage applied: {format_number(change.actual_amount)} "
        f"({args.type}, {args.source})"
    )
    print(f"Durability: {format_durability(vehicle)}")
    if change.condition_state != before:
        print(f"Condition: {before.label} -> {change.condition_state.label}")
    else:
        print(f"Condition: {change.condition_state.label}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_fleet(args.fleet_file, document)
    print("Damage recorded.")
    return 0


def cmd_repair(args, document):
    """Record repair work on a vehicle."""
    vehicle = document.fleet.find(args.vehicle)
    before = vehicle.condition.state
    change = repair(vehicle, args.amount, args.parts_cost, args.time, args.notes or "")

    print(f"Vehicle: {vehicle.display_name}")
    print(f"Repaired: {format_number(change.actual_amount)}")
    if args.parts_cost:
        print(f"Parts cost: {format_cost(args.parts_cost)}")
    print(f"Durability: {format_durability(vehicle)}")
    if change.condition_state != before:
        print(f"Condition: {before.label} -> {change.condition_state.label}")
    else:
        print(f"Condition: {change.condition_state.label}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_fleet(args.fleet_file, document)
    print("Repair recorded.")
    return 0


# =============================================================================
# Cargo commands
# =============================================================================


def cmd_load_cargo(args, document):
    """Load a cargo item onto a vehicle."""
    vehicle = document.fleet.find(args.vehicle)
    result = add_cargo(vehicle, args.name, args.weight, args.category, args.notes or "")

    print(f"Vehicle: {vehicle.display_name}")
    print(f"Loaded: {result.item.name} ({format_number(result.item.weight)})")
    print(f"Cargo: {format_load(vehicle)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_fleet(args.fleet_file, document)
    print(f"Cargo saved as {result.item.id}.")
    return 0


def find_cargo_item(vehicle, prefix: str):
    """Cargo item by id or unique id prefix."""
    matches = [item for item in vehicle.cargo.items if item.id.startswith(prefix)]
    exact = [item for item in matches if item.id == prefix]
    if exact:
        return exact[0]
    if len(matches) == 1:
        return matches[0]
    if not matches:
        # Let the hold raise its own NotFound
        return vehicle.cargo.get_item(prefix)
    raise InvalidInput(f"Ambiguous cargo item id prefix: {prefix}")


def cmd_unload_cargo(args, document):
    """Remove a cargo item from a vehicle."""
    vehicle = document.fleet.find(args.vehicle)
    item = find_cargo_item(vehicle, args.item)
    result = remove_cargo(vehicle, item.id)

    print(f"Vehicle: {vehicle.display_name}")
    print(f"Unloaded: {result.item.name} ({format_number(result.item.weight)})")
    print(f"Cargo: {format_load(vehicle)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_fleet(args.fleet_file, document)
    print("Cargo removed.")
    return 0


# =============================================================================
# History command
# =============================================================================


def make_history_rows(vehicle, kind: str = "all", since: Optional[datetime] = None):
    """Damage and repair entries as table rows, newest first."""
    events = []
    condition = vehicle.condition
    if kind in ("all", "damage"):
        for entry in condition.damage_history:
            detail = f"{entry.damage_type} from {entry.source}"
            events.append(
                (
                    entry.timestamp,
                    "damage",
                    -entry.amount,
                    entry.durability_after,
                    detail,
                    None,
                )
            )
    if kind in ("all", "repair"):
        for entry in condition.maintenance_history:
            events.append(
                (
                    entry.timestamp,
                    "repair",
                    entry.repair_amount,
                    entry.durability_after,
                    entry.notes,
                    entry.parts_cost,
                )
            )
    if since is not None:
        events = [e for e in events if e[0] >= since]
    events.sort(key=lambda e: e[0], reverse=True)

    rows = []
    for timestamp, event_kind, amount, after, detail, cost in events:
        rows.append(
            [
                format_timestamp(timestamp),
                event_kind,
                f"{amount:+g}",
                format_number(after),
                format_cost(cost) if cost else "-",
                truncate(detail),
            ]
        )
    return rows


def cmd_history(args, document):
    """View damage and repair history."""
    vehicle = document.fleet.find(args.vehicle)
    vehicle.require_valid()
    since = parse_since(args.since) if args.since else None
    rows = make_history_rows(vehicle, args.kind, since)

    condition = vehicle.condition
    print(f"Vehicle: {vehicle.display_name}")
    print(f"Condition: {condition.state.label} ({format_durability(vehicle)})")
    print(f"Damage entries: {len(condition.damage_history)}")
    print(f"Repair entries: {len(condition.maintenance_history)}")
    total_parts = sum(e.parts_cost for e in condition.maintenance_history)
    if total_parts > 0:
        print(f"Total parts cost: {format_cost(total_parts)}")
    print()

    if not rows:
        print("No history entries found.")
        return 0

    headers = ["Date", "Kind", "Amount", "Durability", "Cost", "Details"]
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Convoy commands
# =============================================================================


def cmd_add_convoy(args, document):
    """Group fleet vehicles into a convoy."""
    vehicle_ids = [document.fleet.find(prefix).id for prefix in args.vehicles]
    convoy = document.add_convoy(
        args.name,
        vehicle_ids,
        terrain_modifier=args.terrain,
        weather_modifier=args.weather,
    )

    stats = convoy.statistics
    print(f"Adding convoy to {args.fleet_file}:")
    print(f"  Name:     {convoy.name}")
    print(f"  Vehicles: {', '.join(v.display_name for v in convoy.vehicles)}")
    print(f"  Size:     {stats.convoy_size} ({stats.vehicle_count} vehicles)")
    print(f"  Speed:    {stats.convoy_speed} km/h")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_fleet(args.fleet_file, document)
    print("Convoy saved.")
    return 0


def cmd_convoy(args, document):
    """Show convoy statistics."""
    convoy = document.get_convoy(args.name)
    stats = convoy.statistics
    if args.json:
        print_json(serialize.convoy_to_dict(convoy))
        return 0

    print(f"Convoy: {convoy.name}")
    print(
        f"Size: {stats.convoy_size} ({stats.vehicle_count} vehicles), "
        f"{stats.convoy_complexity} maintenance"
    )
    print(
        f"Modifiers: size {stats.size_modifier:g}, "
        f"terrain {convoy.terrain_modifier:g}, "
        f"weather {convoy.weather_modifier:g}"
    )
    print()

    if convoy.vehicles:
        vehicle_rows = make_vehicle_table(convoy.vehicles)
        print(tabulate(vehicle_rows, headers=VEHICLE_HEADERS, tablefmt="simple"))
        print()

    rows = [
        ["Convoy speed", f"{stats.convoy_speed} km/h"],
        ["Daily travel", f"{stats.daily_travel_distance:,} km"],
        ["Monthly travel", f"{stats.monthly_travel_distance:,} km"],
        ["Fuel capacity", f"{stats.fuel_capacity:,} L"],
        ["Fuel-limited range", f"{stats.fuel_limited_range:,} km"],
        ["Total fuel consumption", f"{stats.total_fuel_consumption} L/100km"],
        ["Monthly fuel", f"{stats.monthly_fuel_consumption:,} L"],
        ["Total cargo", stats.total_cargo_capacity],
        ["Total durability", stats.total_durability],
        ["Total power", stats.total_power_rating],
        ["Average maneuverability", stats.average_maneuverability],
        ["Monthly maintenance", f"{stats.monthly_maintenance_hours} h"],
        ["Monthly parts cost", stats.monthly_parts_cost],
    ]
    print(tabulate(rows, tablefmt="simple"))
    return 0


def cmd_travel(args, document):
    """Plan a trip for a convoy."""
    convoy = document.get_convoy(args.name)
    plan = plan_travel(convoy, args.distance, args.terrain, args.weather)
    if args.json:
        print_json(serialize.travel_plan_to_dict(plan))
        return 0

    print(f"Convoy: {convoy.name}")
    print(plan.summary)
    print()
    rows = [
        ["Distance", f"{format_number(plan.distance)} km"],
        ["Effective speed", f"{plan.effective_speed} km/h"],
        ["Travel time", f"{plan.hours:g} h"],
        ["Travel days", plan.travel_days],
        ["Total days (with rest)", plan.total_days],
        ["Fuel required", f"{plan.fuel_required:,} L"],
        ["Fuel capacity", f"{plan.fuel_capacity:,} L"],
        ["Refuel stops", plan.fuel_stops],
    ]
    print(tabulate(rows, tablefmt="simple"))
    return 0


def cmd_compare(args, document):
    """Compare convoys side by side."""
    if args.names:
        convoys = [document.get_convoy(name) for name in args.names]
    else:
        convoys = document.convoys
    comparison = compare_convoys(convoys)
    if args.json:
        print_json(serialize.comparison_to_dict(comparison))
        return 0

    rows = []
    for summary in comparison.convoys:
        rows.append(
            [
                summary.name,
                summary.vehicle_count,
                summary.speed,
                f"{summary.monthly_range:,}",
                f"{summary.fuel_limited_range:,}",
                summary.cargo,
                summary.power,
                f"{summary.monthly_fuel:,}",
                f"{summary.efficiency:.2f}" if summary.efficiency is not None else "-",
            ]
        )
    headers = [
        "Convoy",
        "Vehicles",
        "Speed",
        "Monthly km",
        "Range",
        "Cargo",
        "Power",
        "Monthly fuel",
        "L/km",
    ]
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    print()
    print(f"Fastest:        {comparison.fastest or '-'}")
    print(f"Longest range:  {comparison.longest_range or '-'}")
    print(f"Most cargo:     {comparison.most_cargo or '-'}")
    print(f"Most powerful:  {comparison.most_powerful or '-'}")
    print(f"Most efficient: {comparison.most_efficient or '-'}")
    return 0


def cmd_recommend(args, document):
    """Suggest convoy compositions from the fleet's vehicles."""
    requirements = Requirements(
        min_speed=args.min_speed,
        min_range=args.min_range,
        min_cargo=args.min_cargo,
        min_power=args.min_power,
        max_vehicles=args.max_vehicles,
    )
    specs = [vehicle.spec for vehicle in document.fleet.valid_vehicles]
    recommendations = recommend(requirements, specs)
    if args.json:
        print_json(serialize.recommendations_to_list(recommendations))
        return 0

    if not recommendations:
        print("No valid vehicles available.")
        return 0

    rows = []
    for rec in recommendations:
        rows.append(
            [
                rec.name,
                "yes" if rec.meets_requirements else "no",
                rec.speed,
                f"{rec.range:,}",
                rec.cargo,
                rec.power,
                f"{rec.efficiency:.2f}" if rec.efficiency is not None else "-",
                truncate(", ".join(rec.vehicles), 50),
            ]
        )
    headers = [
        "Candidate",
        "Meets",
        "Speed",
        "Range",
        "Cargo",
        "Power",
        "L/km",
        "Vehicles",
    ]
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Main
# =============================================================================

COMMANDS = {
    "vehicles": cmd_vehicles,
    "show": cmd_show,
    "add-vehicle": cmd_add_vehicle,
    "damage": cmd_damage,
    "repair": cmd_repair,
    "load-cargo": cmd_load_cargo,
    "unload-cargo": cmd_unload_cargo,
    "history": cmd_history,
    "add-convoy": cmd_add_convoy,
    "convoy": cmd_convoy,
    "travel": cmd_travel,
    "compare": cmd_compare,
    "recommend": cmd_recommend,
}


VEHICLE_HELP = "Vehicle id (or unique prefix)"


def add_dry_run(parser) -> None:
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would change without saving",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Vehicle and convoy statistics calculator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s fleets/example.yaml vehicles
  %(prog)s fleets/example.yaml show 3f2a
  %(prog)s fleets/example.yaml add-vehicle --make Honda --model Civic \\
      --year 2020 --top-speed 200 --type car --drive fwd
  %(prog)s fleets/example.yaml damage 3f2a 15 --source "roadside ambush"
  %(prog)s fleets/example.yaml repair 3f2a 10 --parts-cost 120
  %(prog)s fleets/example.yaml load-cargo 3f2a "Water barrels" 2
  %(prog)s fleets/example.yaml history 3f2a --kind damage --since 2024-01-01
  %(prog)s fleets/example.yaml convoy "Supply Run"
  %(prog)s fleets/example.yaml travel "Supply Run" 800 --weather 0.8
  %(prog)s fleets/example.yaml compare
  %(prog)s fleets/example.yaml recommend --min-speed 60 --min-cargo 20
""",
    )
    parser.add_argument(
        "fleet_file",
        type=Path,
        help="Path to fleet YAML file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print JSON instead of tables (read-only commands)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("vehicles", help="List the fleet")

    show_parser = subparsers.add_parser("show", help="Show one vehicle in detail")
    show_parser.add_argument("vehicle", help=VEHICLE_HELP)

    # Add vehicle subcommand
    add_parser = subparsers.add_parser(
        "add-vehicle", help="Add a vehicle from its specifications"
    )
    add_parser.add_argument(
        "--name",
        type=str,
        help="Name used when make/model are not given",
    )
    add_parser.add_argument("--make", type=str, help="Manufacturer (e.g., 'Honda')")
    add_parser.add_argument("--model", type=str, help="Model (e.g., 'Civic')")
    add_parser.add_argument("--year", type=int, help="Model year")
    add_parser.add_argument(
        "--top-speed",
        type=float,
        required=True,
        help="Top speed in km/h",
    )
    add_parser.add_argument(
        "--type",
        type=str,
        required=True,
        choices=VEHICLE_TYPES,
        help="Vehicle type",
    )
    add_parser.add_argument(
        "--drive",
        type=str,
        required=True,
        choices=DRIVE_TYPES,
        help="Drive type",
    )
    add_parser.add_argument("--cylinders", type=int, help="Engine cylinders")
    add_parser.add_argument(
        "--displacement",
        type=float,
        help="Engine displacement in liters",
    )
    add_parser.add_argument("--horsepower", type=int, help="Engine horsepower")
    add_parser.add_argument("--weight", type=float, help="Curb weight in kg")
    add_parser.add_argument(
        "--military-class",
        type=str,
        choices=MILITARY_CLASSES,
        help="Military class",
    )
    add_parser.add_argument("--fuel-type", type=str, help="Fuel type (informational)")
    add_dry_run(add_parser)

    # Condition subcommands
    damage_parser = subparsers.add_parser(
        "damage", help="Record damage taken by a vehicle"
    )
    damage_parser.add_argument("vehicle", help=VEHICLE_HELP)
    damage_parser.add_argument("amount", type=float, help="Durability lost")
    damage_parser.add_argument(
        "--type",
        type=str,
        default="Physical",
        help="Damage type (default: Physical)",
    )
    damage_parser.add_argument(
        "--source",
        type=str,
        default="Unknown",
        help="What caused the damage",
    )
    add_dry_run(damage_parser)

    repair_parser = subparsers.add_parser(
        "repair", help="Record repair work on a vehicle"
    )
    repair_parser.add_argument("vehicle", help=VEHICLE_HELP)
    repair_parser.add_argument("amount", type=float, help="Durability restored")
    repair_parser.add_argument(
        "--parts-cost",
        type=float,
        default=0,
        help="Cost of parts",
    )
    repair_parser.add_argument("--time", type=float, default=0, help="Hours spent")
    repair_parser.add_argument("--notes", type=str, help="Notes about the repair")
    add_dry_run(repair_parser)

    # Cargo subcommands
    load_parser = subparsers.add_parser(
        "load-cargo", help="Load a cargo item onto a vehicle"
    )
    load_parser.add_argument("vehicle", help=VEHICLE_HELP)
    load_parser.add_argument("name", help="Item name")
    load_parser.add_argument("weight", type=float, help="Item weight in cargo units")
    load_parser.add_argument(
        "--category",
        type=str,
        default="General",
        help="Item category",
    )
    load_parser.add_argument("--notes", type=str, help="Notes about the item")
    add_dry_run(load_parser)

    unload_parser = subparsers.add_parser(
        "unload-cargo", help="Remove a cargo item from a vehicle"
    )
    unload_parser.add_argument("vehicle", help=VEHICLE_HELP)
    unload_parser.add_argument("item", help="Cargo item id (or unique prefix)")
    add_dry_run(unload_parser)

    # History subcommand
    history_parser = subparsers.add_parser(
        "history", help="View damage and repair history"
    )
    history_parser.add_argument("vehicle", help=VEHICLE_HELP)
    history_parser.add_argument(
        "--kind",
        choices=["all", "damage", "repair"],
        default="all",
        help="Which entries to show (default: all)",
    )
    history_parser.add_argument(
        "--since",
        type=str,
        help="Show only entries since date (YYYY-MM-DD or ISO-8601)",
    )

    # Convoy subcommands
    add_convoy_parser = subparsers.add_parser(
        "add-convoy", help="Group fleet vehicles into a convoy"
    )
    add_convoy_parser.add_argument("name", help="Convoy name")
    add_convoy_parser.add_argument(
        "vehicles",
        nargs="+",
        help="Vehicle ids (or unique prefixes)",
    )
    add_convoy_parser.add_argument(
        "--terrain",
        type=float,
        default=1.0,
        help="Terrain modifier (0.1-1.0)",
    )
    add_convoy_parser.add_argument(
        "--weather",
        type=float,
        default=1.0,
        help="Weather modifier (0.1-1.0)",
    )
    add_dry_run(add_convoy_parser)

    convoy_parser = subparsers.add_parser("convoy", help="Show convoy statistics")
    convoy_parser.add_argument("name", help="Convoy name")

    travel_parser = subparsers.add_parser("travel", help="Plan a trip for a convoy")
    travel_parser.add_argument("name", help="Convoy name")
    travel_parser.add_argument("distance", type=float, help="Distance in km")
    travel_parser.add_argument(
        "--terrain",
        type=float,
        default=1.0,
        help="Extra terrain factor for this trip (default: 1.0)",
    )
    travel_parser.add_argument(
        "--weather",
        type=float,
        help="Weather factor (default: the convoy's weather modifier)",
    )

    compare_parser = subparsers.add_parser(
        "compare", help="Compare convoys side by side"
    )
    compare_parser.add_argument("names", nargs="*", help="Convoy names (default: all)")

    recommend_parser = subparsers.add_parser(
        "recommend", help="Suggest convoy compositions"
    )
    for flag, help_text in (
        ("--min-speed", "Minimum sustainable speed"),
        ("--min-range", "Minimum fuel-limited range"),
        ("--min-cargo", "Minimum total cargo"),
        ("--min-power", "Minimum total power"),
    ):
        recommend_parser.add_argument(flag, type=float, default=0, help=help_text)
    recommend_parser.add_argument(
        "--max-vehicles",
        type=int,
        default=10,
        help="Maximum vehicles per convoy",
    )

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    # Validate fleet file exists
    if not args.fleet_file.exists():
        print(f"Error: File not found: {args.fleet_file}")
        return 1

    logger.debug("Running %s on %s", args.command, args.fleet_file)
    try:
        document = load_fleet(args.fleet_file)
        return COMMANDS[args.command](args, document)
    except ConvoyError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
