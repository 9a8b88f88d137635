"""Fleet registry - the single owner of Vehicle records."""

import logging
from typing import Dict, Iterator, List, Optional

from .errors import InvalidInput, NotFound
from .spec import VehicleSpec
from .vehicle import Vehicle, build_vehicle

logger = logging.getLogger(__name__)


class Fleet:
    """
    Vehicles keyed by id.

    Convoys hold vehicle ids and resolve them here, so a vehicle that is a
    member of several convoys is still one mutable record.
    """

    def __init__(self, vehicles: Optional[List[Vehicle]] = None):
        self._vehicles: Dict[str, Vehicle] = {}
        for vehicle in vehicles or []:
            self.register(vehicle)

    def __len__(self) -> int:
        return len(self._vehicles)

    def __iter__(self) -> Iterator[Vehicle]:
        return iter(list(self._vehicles.values()))

    def __contains__(self, vehicle_id: str) -> bool:
        return vehicle_id in self._vehicles

    @property
    def vehicles(self) -> List[Vehicle]:
        return list(self._vehicles.values())

    def register(self, vehicle: Vehicle) -> Vehicle:
        """Add a vehicle. Registering the same object twice is a no-op."""
        existing = self._vehicles.get(vehicle.id)
        if existing is vehicle:
            return vehicle
        if existing is not None:
            raise InvalidInput(f"Vehicle id already registered: {vehicle.id}")
        self._vehicles[vehicle.id] = vehicle
        logger.debug("Registered %s as %s", vehicle.display_name, vehicle.id)
        return vehicle

    def add_spec(self, spec: VehicleSpec, vehicle_id: Optional[str] = None) -> Vehicle:
        """Build a vehicle from a spec and register it (valid or not)."""
        return self.register(build_vehicle(spec, vehicle_id))

    def get(self, vehicle_id: str) -> Vehicle:
        try:
            return self._vehicles[vehicle_id]
        except KeyError:
            raise NotFound("Vehicle", vehicle_id) from None

    def find(self, prefix: str) -> Vehicle:
        """
        Look up a vehicle by id or unique id prefix.

        Raises NotFound when nothing matches and InvalidInput when the
        prefix is ambiguous.
        """
        if prefix in self._vehicles:
            return self._vehicles[prefix]
        matches = [v for v_id, v in self._vehicles.items() if v_id.startswith(prefix)]
        if not matches:
            raise NotFound("Vehicle", prefix)
        if len(matches) > 1:
            raise InvalidInput(f"Ambiguous vehicle id prefix: {prefix}")
        return matches[0]

    def remove(self, vehicle_id: str) -> Vehicle:
        vehicle = self.get(vehicle_id)
        del self._vehicles[vehicle_id]
        logger.info("Removed %s from fleet", vehicle.display_name)
        return vehicle

    @property
    def valid_vehicles(self) -> List[Vehicle]:
        return [v for v in self._vehicles.values() if v.is_valid]
