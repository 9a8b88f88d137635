"""Flask JSON API over the convoy calculator."""

from pathlib import Path

from flask import Flask, jsonify, request

# Add parent directory to path for package imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from convoy import (
    CapacityExceeded,
    ConvoyError,
    InvalidInput,
    NotFound,
    ValidationError,
    build_convoy,
    build_vehicle,
    compare_convoys,
    load_fleet,
    plan_travel,
    recommend,
)
from convoy import serialize, tables
from convoy.loader import document_to_dict

app = Flask(__name__)

# Path to fleets directory (relative to project root)
FLEETS_DIR = Path(__file__).parent.parent / "fleets"

ERROR_STATUS = {
    ValidationError: 400,
    InvalidInput: 400,
    NotFound: 404,
    CapacityExceeded: 409,
}


def get_fleet_files():
    """Get all fleet YAML files."""
    return sorted(FLEETS_DIR.glob("*.yaml"))


def get_fleet_path(fleet_id: str) -> Path:
    """Get full path for a fleet ID (filename without extension)."""
    path = FLEETS_DIR / f"{fleet_id}.yaml"
    if path.parent != FLEETS_DIR or not path.exists():
        raise NotFound("Fleet", fleet_id)
    return path


def json_body() -> dict:
    """The request's JSON object; anything else is rejected."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidInput("Request body must be a JSON object")
    return data


def convoy_from_request(data: dict):
    """
    Build a convoy from a request object.

    Keys: name, vehicles, terrainModifier, weatherModifier, operationalParams.
    """
    if not isinstance(data, dict):
        raise InvalidInput("Convoy must be a JSON object")
    specs = data.get("vehicles")
    if not isinstance(specs, list):
        raise InvalidInput("Convoy must include a 'vehicles' array")
    return build_convoy(
        data.get("name") or "Unnamed Convoy",
        specs,
        terrain_modifier=data.get("terrainModifier"),
        weather_modifier=data.get("weatherModifier"),
        operational_params=data.get("operationalParams"),
    )


def convoy_response(convoy) -> dict:
    result = serialize.convoy_to_dict(convoy)
    result["vehicles"] = [serialize.vehicle_to_dict(v) for v in convoy.vehicles]
    return result


@app.errorhandler(ConvoyError)
def handle_convoy_error(error: ConvoyError):
    status = next(
        (code for cls, code in ERROR_STATUS.items() if isinstance(error, cls)), 400
    )
    details = list(error.errors) if isinstance(error, ValidationError) else []
    return jsonify({"error": str(error), "details": details}), status


@app.route("/api/tables")
def lookup_tables():
    """The lookup tables the ratings are derived from."""
    return jsonify(
        {
            "vehicleTypes": list(tables.VEHICLE_TYPES),
            "driveTypes": list(tables.DRIVE_TYPES),
            "militaryClasses": list(tables.MILITARY_CLASSES),
            "driveTypeBonus": dict(tables.DRIVE_TYPE_BONUS),
            "baseDurability": dict(tables.BASE_DURABILITY),
            "sizeDurabilityModifier": dict(tables.SIZE_DURABILITY_MODIFIER),
            "complexityMultiplier": dict(tables.COMPLEXITY_MULTIPLIER),
            "militaryMultiplier": dict(tables.MILITARY_MULTIPLIER),
            "fallbackFuelConsumption": dict(tables.FALLBACK_FUEL_CONSUMPTION),
            "cargoSizeRange": {k: list(v) for k, v in tables.CARGO_SIZE_RANGE.items()},
            "cargoTypeMultiplier": dict(tables.CARGO_TYPE_MULTIPLIER),
            "fuelCapacityEstimate": dict(tables.FUEL_CAPACITY_ESTIMATE),
            "convoySizeModifier": dict(tables.CONVOY_SIZE_MODIFIER),
        }
    )


@app.route("/api/vehicle", methods=["POST"])
def calculate_vehicle():
    """Ratings for one vehicle spec."""
    vehicle = build_vehicle(json_body())
    vehicle.require_valid()
    return jsonify(serialize.vehicle_to_dict(vehicle))


@app.route("/api/convoy", methods=["POST"])
def calculate_convoy():
    """Convoy statistics for vehicle specs; invalid specs are listed in errors."""
    convoy = convoy_from_request(json_body())
    return jsonify(convoy_response(convoy))


@app.route("/api/travel", methods=["POST"])
def calculate_travel():
    """Travel plan for {convoy, distance, terrainModifier, weatherModifier}."""
    data = json_body()
    convoy_data = data.get("convoy")
    if not isinstance(convoy_data, dict):
        raise InvalidInput("Travel request must include a 'convoy' object")
    convoy = convoy_from_request(convoy_data)
    plan = plan_travel(
        convoy,
        data.get("distance"),
        data.get("terrainModifier", 1.0),
        data.get("weatherModifier"),
    )
    return jsonify(serialize.travel_plan_to_dict(plan))


@app.route("/api/compare", methods=["POST"])
def compare():
    """Side by side comparison of {convoys: [...]}."""
    convoys_data = json_body().get("convoys")
    if not isinstance(convoys_data, list):
        raise InvalidInput("Compare request must include a 'convoys' array")
    convoys = [convoy_from_request(c) for c in convoys_data]
    return jsonify(serialize.comparison_to_dict(compare_convoys(convoys)))


@app.route("/api/recommend", methods=["POST"])
def recommend_convoys():
    """Candidate convoys for {requirements, availableVehicles}."""
    data = json_body()
    available = data.get("availableVehicles")
    if not isinstance(available, list):
        raise InvalidInput(
            "Recommend request must include an 'availableVehicles' array"
        )
    recommendations = recommend(data.get("requirements"), available)
    return jsonify(
        {
            "requirements": data.get("requirements") or {},
            "recommendations": serialize.recommendations_to_list(recommendations),
        }
    )


@app.route("/api/fleets")
def fleets():
    """Fleet files available on the server."""
    results = []
    for path in get_fleet_files():
        document = load_fleet(path)
        results.append(
            {
                "id": path.stem,
                "vehicleCount": len(document.fleet),
                "convoys": [convoy.name for convoy in document.convoys],
            }
        )
    return jsonify(results)


@app.route("/api/fleets/<fleet_id>")
def fleet_detail(fleet_id: str):
    """One fleet file, with convoy statistics."""
    document = load_fleet(get_fleet_path(fleet_id))
    result = document_to_dict(document)
    result["convoys"] = [serialize.convoy_to_dict(c) for c in document.convoys]
    return jsonify(result)


if __name__ == "__main__":
    # Run with debug mode for development
    app.run(debug=True, host="0.0.0.0", port=5001)
