"""
Lookup and path-copy helpers for the building tree.

Updates never mutate a node: they rebuild only the Building -> Floor -> Room
spine leading to the changed node and share every untouched sibling with the
previous tree.
"""

from typing import Callable, List, Optional, Tuple

from dormitory.schemas.dormitory_schema import Building, Floor, Resident, Room


def find_building(buildings: List[Building], building_id: str) -> Optional[Building]:
    return next((b for b in buildings if b.id == building_id), None)


def find_floor(
    buildings: List[Building], floor_id: str
) -> Optional[Tuple[Building, Floor]]:
    for building in buildings:
        for floor in building.floors:
            if floor.id == floor_id:
                return building, floor
    return None


def find_room(
    buildings: List[Building], room_id: str
) -> Optional[Tuple[Building, Floor, Room]]:
    for building in buildings:
        for floor, room in building.iter_rooms():
            if room.id == room_id:
                return building, floor, room
    return None


def find_resident(
    buildings: List[Building], resident_id: str
) -> Optional[Tuple[Building, Floor, Room, Resident]]:
    for building in buildings:
        for floor, room in building.iter_rooms():
            for resident in room.residents:
                if resident.id == resident_id:
                    return building, floor, room, resident
    return None


def replace_building(
    buildings: List[Building], building_id: str, update: Callable[[Building], Building]
) -> List[Building]:
    return [update(b) if b.id == building_id else b for b in buildings]


def replace_floor(
    buildings: List[Building], floor_id: str, update: Callable[[Floor], Floor]
) -> List[Building]:
    location = find_floor(buildings, floor_id)
    if location is None:
        return buildings
    building, _ = location
    return replace_building(
        buildings,
        building.id,
        lambda b: b.model_copy(
            update={"floors": [update(f) if f.id == floor_id else f for f in b.floors]}
        ),
    )


def replace_room(
    buildings: List[Building], room_id: str, update: Callable[[Room], Room]
) -> List[Building]:
    location = find_room(buildings, room_id)
    if location is None:
        return buildings
    _, floor, _ = location
    return replace_floor(
        buildings,
        floor.id,
        lambda f: f.model_copy(
            update={"rooms": [update(r) if r.id == room_id else r for r in f.rooms]}
        ),
    )
