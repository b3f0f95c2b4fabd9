"""
Building -> Floor -> Room store, same read-modify-write shape as the
department hierarchy.
"""

import logging
from typing import List, Optional, Tuple

from models.schemas import ActionResult, Building, Floor, Room, RoomListing
from service.json_store import (
    RecordStore,
    StoreBackend,
    find_by_id,
    new_id,
    tenant_key,
)

logger = logging.getLogger(__name__)

BUILDINGS_FILE = "buildings.json"


class BuildingStore(RecordStore):
    def __init__(self, backend: StoreBackend, admin_email: Optional[str] = None):
        super().__init__(backend)
        self.key = tenant_key(admin_email, BUILDINGS_FILE) if admin_email else BUILDINGS_FILE

    def _read(self) -> List[Building]:
        return self._load(self.key, Building)

    def _write(self, buildings: List[Building], success_message: str) -> ActionResult:
        return self._save(self.key, buildings, success_message)

    def _locate_floor(self, buildings: List[Building], building_id: str,
                      floor_id: str) -> Tuple[Optional[Floor], Optional[ActionResult]]:
        building = find_by_id(buildings, building_id)
        if building is None:
            return None, ActionResult(success=False, message="Building not found.")
        floor = find_by_id(building.floors, floor_id)
        if floor is None:
            return None, ActionResult(success=False, message="Floor not found.")
        return floor, None

    # ─── Buildings ───

    def list(self) -> List[Building]:
        return self._read()

    def get(self, building_id: str) -> Optional[Building]:
        return find_by_id(self._read(), building_id)

    def create(self, name: str) -> ActionResult:
        buildings = self._read()
        buildings.append(Building(id=new_id(), name=name, floors=[]))
        return self._write(buildings, "Building created successfully.")

    def update(self, building_id: str, name: str) -> ActionResult:
        buildings = self._read()
        building = find_by_id(buildings, building_id)
        if building is None:
            return ActionResult(success=False, message="Building not found.")
        building.name = name
        return self._write(buildings, "Building updated successfully.")

    def delete(self, building_id: str) -> ActionResult:
        buildings = self._read()
        remaining = [b for b in buildings if b.id != building_id]
        if len(remaining) == len(buildings):
            return ActionResult(success=False, message="Building not found.")
        return self._write(remaining, "Building deleted successfully.")

    # ─── Floors ───

    def add_floors(self, building_id: str, names: List[str]) -> ActionResult:
        """Append one floor per name in a single rewrite."""
        buildings = self._read()
        building = find_by_id(buildings, building_id)
        if building is None:
            return ActionResult(success=False, message="Building not found.")
        for name in names:
            building.floors.append(Floor(id=new_id(), name=name, rooms=[]))
        noun = "Floor" if len(names) == 1 else "Floors"
        return self._write(buildings, f"{noun} added successfully.")

    def update_floor(self, building_id: str, floor_id: str, name: str) -> ActionResult:
        buildings = self._read()
        floor, error = self._locate_floor(buildings, building_id, floor_id)
        if error:
            return error
        floor.name = name
        return self._write(buildings, "Floor updated successfully.")

    def delete_floor(self, building_id: str, floor_id: str) -> ActionResult:
        buildings = self._read()
        building = find_by_id(buildings, building_id)
        if building is None:
            return ActionResult(success=False, message="Building not found.")
        original_count = len(building.floors)
        building.floors = [f for f in building.floors if f.id != floor_id]
        if len(building.floors) == original_count:
            return ActionResult(success=False, message="Floor not found.")
        return self._write(buildings, "Floor deleted successfully.")

    # ─── Rooms ───

    def add_room(self, building_id: str, floor_id: str, name: str, capacity: int) -> ActionResult:
        buildings = self._read()
        floor, error = self._locate_floor(buildings, building_id, floor_id)
        if error:
            return error
        floor.rooms.append(Room(id=new_id(), name=name, capacity=capacity))
        return self._write(buildings, "Room added successfully.")

    def update_room(self, building_id: str, floor_id: str, room_id: str,
                    name: str, capacity: int) -> ActionResult:
        buildings = self._read()
        floor, error = self._locate_floor(buildings, building_id, floor_id)
        if error:
            return error
        room = find_by_id(floor.rooms, room_id)
        if room is None:
            return ActionResult(success=False, message="Room not found.")
        room.name = name
        room.capacity = capacity
        return self._write(buildings, "Room updated successfully.")

    def delete_room(self, building_id: str, floor_id: str, room_id: str) -> ActionResult:
        return self.delete_rooms(building_id, floor_id, [room_id])

    def delete_rooms(self, building_id: str, floor_id: str, room_ids: List[str]) -> ActionResult:
        """Remove every listed room from a floor; fails only if none matched."""
        buildings = self._read()
        floor, error = self._locate_floor(buildings, building_id, floor_id)
        if error:
            return error
        doomed = set(room_ids)
        original_count = len(floor.rooms)
        floor.rooms = [r for r in floor.rooms if r.id not in doomed]
        removed = original_count - len(floor.rooms)
        if removed == 0:
            return ActionResult(success=False, message="Room not found.")
        message = "Room deleted successfully." if removed == 1 else f"{removed} rooms deleted successfully."
        return self._write(buildings, message)

    def all_rooms(self) -> List[RoomListing]:
        """Every room in every building, annotated with where it is."""
        return [
            RoomListing(**room.model_dump(), building_name=building.name, floor_name=floor.name)
            for building in self._read()
            for floor in building.floors
            for room in floor.rooms
        ]
