#!/usr/bin/env python3
"""Validate fleet YAML files against the schema and the engine's rules.

Usage: validate_yaml.py [FILE ...]

With no arguments every ``*.yaml``/``*.yml`` file under fleets/ is checked.
"""
import sys
from collections import Counter
from pathlib import Path

import yaml
from jsonschema import Draft7Validator

from convoy import ConvoyError, load_fleet

FLEETS_DIR = Path(__file__).parent / "fleets"


def load_schema() -> dict:
    """Load the JSON schema from schema.yaml."""
    with open(Path(__file__).parent / "schema.yaml") as f:
        return yaml.safe_load(f)


def _schema_errors(data, schema: dict) -> list[str]:
    found = sorted(
        Draft7Validator(schema).iter_errors(data), key=lambda e: list(e.path)
    )
    lines = []
    for error in found:
        lines.append(f"Schema validation error: {error.message}")
        if error.path:
            lines.append(f"  at path: {'.'.join(str(p) for p in error.path)}")
    return lines


def _duplicate_convoys(data) -> list[str]:
    names = Counter(c.get("name") for c in (data or {}).get("convoys") or [])
    return [f"Duplicate convoy name: {name}" for name, n in names.items() if n > 1]


def validate_fleet_file(filepath: Path, schema: dict) -> list[str]:
    """
    Validate a single fleet YAML file. Returns list of errors.

    Every schema violation is reported. A file that matches the schema is
    then loaded, which catches convoys naming unknown vehicles and specs
    the statistics engine rejects.
    """
    try:
        with open(filepath) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        return [f"YAML parse error: {e}"]
    except OSError as e:
        return [f"Error: {e}"]

    errors = _schema_errors(data, schema)
    if errors:
        return errors
    errors = _duplicate_convoys(data)

    try:
        document = load_fleet(filepath)
    except ConvoyError as e:
        return errors + [f"Fleet error: {e}"]

    for vehicle in document.fleet:
        errors.extend(f"Vehicle {vehicle.id}: {msg}" for msg in vehicle.errors)
    return errors


def find_fleet_files(directory: Path) -> list[Path]:
    """Fleet files in a directory, sorted by name."""
    return sorted([*directory.glob("*.yaml"), *directory.glob("*.yml")])


def main(argv=None) -> int:
    paths = [Path(p) for p in (sys.argv[1:] if argv is None else argv)]
    if not paths:
        if not FLEETS_DIR.is_dir():
            print(f"Error: fleets directory not found: {FLEETS_DIR}")
            return 1
        paths = find_fleet_files(FLEETS_DIR)
        if not paths:
            print(f"Warning: No YAML files found in {FLEETS_DIR}")
            return 0

    schema = load_schema()
    failed = 0
    for path in paths:
        errors = validate_fleet_file(path, schema)
        print(f"{'FAIL' if errors else 'OK'}: {path.name}")
        for error in errors:
            print(f"  {error}")
        failed += bool(errors)

    if len(paths) > 1:
        print(f"\n{len(paths) - failed}/{len(paths)} fleet files valid")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
