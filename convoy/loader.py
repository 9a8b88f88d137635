"""YAML loading and saving utilities for fleet files."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import yaml

from .convoy import Convoy, OperationalParams
from .errors import InvalidInput, NotFound
from .fleet import Fleet
from .serialize import (
    convoy_to_dict,
    operational_params_from_dict,
    vehicle_from_dict,
    vehicle_to_dict,
)
from .spec import VehicleSpec
from .vehicle import Vehicle

logger = logging.getLogger(__name__)


@dataclass
class FleetDocument:
    """The contents of one fleet file: the vehicles and the convoys built from them."""

    fleet: Fleet = field(default_factory=Fleet)
    convoys: List[Convoy] = field(default_factory=list)

    def get_convoy(self, name: str) -> Convoy:
        for convoy in self.convoys:
            if convoy.name == name:
                return convoy
        raise NotFound("Convoy", name)

    def add_convoy(
        self,
        name: str,
        vehicle_ids: Sequence[str] = (),
        terrain_modifier: float = 1.0,
        weather_modifier: float = 1.0,
        operational_params: Optional[OperationalParams] = None,
    ) -> Convoy:
        if any(convoy.name == name for convoy in self.convoys):
            raise InvalidInput(f"Convoy already exists: {name}")
        convoy = Convoy(
            name,
            fleet=self.fleet,
            vehicle_ids=vehicle_ids,
            terrain_modifier=terrain_modifier,
            weather_modifier=weather_modifier,
            operational_params=operational_params,
        )
        self.convoys.append(convoy)
        return convoy

    def remove_vehicle(self, vehicle_id: str) -> Vehicle:
        """Remove a vehicle from the fleet and from every convoy holding it."""
        self.fleet.get(vehicle_id)
        for convoy in self.convoys:
            if vehicle_id in convoy:
                convoy.remove_vehicle(vehicle_id)
        return self.fleet.remove(vehicle_id)


def _convoy_from_dict(data: Dict[str, Any], fleet: Fleet) -> Convoy:
    return Convoy(
        data.get("name") or "Unnamed Convoy",
        fleet=fleet,
        vehicle_ids=[str(v) for v in data.get("vehicleIds") or []],
        terrain_modifier=data.get("terrainModifier", 1.0),
        weather_modifier=data.get("weatherModifier", 1.0),
        operational_params=operational_params_from_dict(data.get("operationalParams")),
    )


def document_from_dict(data: Optional[Dict[str, Any]]) -> FleetDocument:
    """Rebuild a FleetDocument; derived statistics in the data are ignored."""
    data = data or {}
    fleet = Fleet([vehicle_from_dict(v) for v in data.get("vehicles") or []])
    convoys = [_convoy_from_dict(c, fleet) for c in data.get("convoys") or []]
    return FleetDocument(fleet, convoys)


def document_to_dict(document: FleetDocument) -> Dict[str, Any]:
    """Serialize a FleetDocument; vehicle ratings are written for readers."""
    return {
        "vehicles": [vehicle_to_dict(v) for v in document.fleet],
        "convoys": [
            convoy_to_dict(c, include_statistics=False) for c in document.convoys
        ],
    }


def _dump(data: Dict[str, Any], fp) -> None:
    yaml.dump(
        data,
        fp,
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
        width=120,
    )


def load_fleet(filename: Union[str, Path]) -> FleetDocument:
    """Load a fleet from a YAML file."""
    with open(filename, "rb") as fp:
        # Round-trip through JSON so YAML timestamps and dates become plain strings
        json_data = json.dumps(yaml.load(fp, Loader=yaml.SafeLoader), default=str)
    document = document_from_dict(json.loads(json_data))
    logger.debug(
        "Loaded %d vehicles and %d convoys from %s",
        len(document.fleet),
        len(document.convoys),
        filename,
    )
    return document


def save_fleet(filename: Union[str, Path], document: FleetDocument) -> None:
    """Write a fleet to a YAML file, replacing its contents."""
    data = document_to_dict(document)
    with open(filename, "w") as fp:
        _dump(data, fp)
    logger.debug("Saved %d vehicles to %s", len(document.fleet), filename)


def create_fleet_file(filename: Union[str, Path]) -> FleetDocument:
    """
    Create a new, empty fleet YAML file.

    Raises FileExistsError rather than overwriting an existing file.
    """
    document = FleetDocument()
    with open(filename, "x") as fp:
        _dump(document_to_dict(document), fp)
    return document


def add_vehicle_spec(filename: Union[str, Path], spec: VehicleSpec) -> Vehicle:
    """
    Add a vehicle to a fleet YAML file.

    Invalid specs are stored too (with their errors) so they can be fixed
    later; they cannot join a convoy until then.
    """
    document = load_fleet(filename)
    vehicle = document.fleet.add_spec(spec)
    save_fleet(filename, document)
    return vehicle


def delete_vehicle(filename: Union[str, Path], vehicle_id: str) -> Vehicle:
    """Remove a vehicle from a fleet YAML file and from every convoy in it."""
    document = load_fleet(filename)
    vehicle = document.remove_vehicle(vehicle_id)
    save_fleet(filename, document)
    return vehicle


def add_convoy(
    filename: Union[str, Path],
    name: str,
    vehicle_ids: Sequence[str],
    terrain_modifier: float = 1.0,
    weather_modifier: float = 1.0,
    operational_params: Optional[OperationalParams] = None,
) -> Convoy:
    """Append a convoy of existing fleet vehicles to a fleet YAML file."""
    document = load_fleet(filename)
    convoy = document.add_convoy(
        name, vehicle_ids, terrain_modifier, weather_modifier, operational_params
    )
    save_fleet(filename, document)
    return convoy
