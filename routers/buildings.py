from fastapi import APIRouter, Depends, HTTPException
from typing import List

from models.schemas import ActionResult, Building, NameBody, NamesBody, RoomBody, RoomIdsBody, RoomListing
from routers.dependencies import get_building_store
from service.buildings import BuildingStore

# Create a router instance
router = APIRouter()

BUILDING = "/buildings/{building_id}"
FLOOR = BUILDING + "/floors/{floor_id}"


@router.get("/buildings", response_model=List[Building])
async def list_buildings(store: BuildingStore = Depends(get_building_store)):
    return store.list()


@router.get("/rooms", response_model=List[RoomListing])
async def list_all_rooms(store: BuildingStore = Depends(get_building_store)):
    """Every room, tagged with its building and floor names."""
    return store.all_rooms()


@router.get(BUILDING, response_model=Building)
async def get_building(building_id: str, store: BuildingStore = Depends(get_building_store)):
    building = store.get(building_id)
    if building is None:
        raise HTTPException(status_code=404, detail="Building not found.")
    return building


@router.post("/buildings", response_model=ActionResult)
async def create_building(body: NameBody, store: BuildingStore = Depends(get_building_store)):
    return store.create(body.name)


@router.put(BUILDING, response_model=ActionResult)
async def update_building(building_id: str, body: NameBody, store: BuildingStore = Depends(get_building_store)):
    return store.update(building_id, body.name)


@router.delete(BUILDING, response_model=ActionResult)
async def delete_building(building_id: str, store: BuildingStore = Depends(get_building_store)):
    return store.delete(building_id)


@router.post(BUILDING + "/floors", response_model=ActionResult)
async def add_floors(building_id: str, body: NamesBody, store: BuildingStore = Depends(get_building_store)):
    """Bulk-add floors, one per name."""
    return store.add_floors(building_id, body.names)


@router.put(FLOOR, response_model=ActionResult)
async def update_floor(building_id: str, floor_id: str, body: NameBody,
                       store: BuildingStore = Depends(get_building_store)):
    return store.update_floor(building_id, floor_id, body.name)


@router.delete(FLOOR, response_model=ActionResult)
async def delete_floor(building_id: str, floor_id: str, store: BuildingStore = Depends(get_building_store)):
    return store.delete_floor(building_id, floor_id)


@router.post(FLOOR + "/rooms", response_model=ActionResult)
async def add_room(building_id: str, floor_id: str, body: RoomBody,
                   store: BuildingStore = Depends(get_building_store)):
    return store.add_room(building_id, floor_id, body.name, body.capacity)


@router.put(FLOOR + "/rooms/{room_id}", response_model=ActionResult)
async def update_room(building_id: str, floor_id: str, room_id: str, body: RoomBody,
                      store: BuildingStore = Depends(get_building_store)):
    return store.update_room(building_id, floor_id, room_id, body.name, body.capacity)


@router.delete(FLOOR + "/rooms/{room_id}", response_model=ActionResult)
async def delete_room(building_id: str, floor_id: str, room_id: str,
                      store: BuildingStore = Depends(get_building_store)):
    return store.delete_room(building_id, floor_id, room_id)


@router.post(FLOOR + "/rooms/delete", response_model=ActionResult)
async def delete_selected_rooms(building_id: str, floor_id: str, body: RoomIdsBody,
                                store: BuildingStore = Depends(get_building_store)):
    """Remove several rooms of a floor at once."""
    return store.delete_rooms(building_id, floor_id, body.room_ids)
