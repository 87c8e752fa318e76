from typing import List

from dormitory.enums.room_type import RoomType
from dormitory.schemas.dormitory_schema import Building, Floor, Room

MOCK_BUILDING_COUNT = 2
MOCK_FLOOR_COUNT = 4
MOCK_ROOMS_PER_FLOOR = 4


def room_number(building_number, floor_number: int, sequence: int) -> str:
    """Room number made of building digits, floor number and a two-digit sequence."""
    return f"{building_number}{floor_number}{sequence:02d}"


def default_room_type(sequence: int) -> RoomType:
    """The first two rooms of a generated floor are single, the rest double."""
    return RoomType.SINGLE if sequence <= 2 else RoomType.DOUBLE


def create_initial_buildings() -> List[Building]:
    """
    Fixed offline tree: 2 buildings x 4 floors x 4 rooms, no residents or bills.
    Only used when the store cannot be reached.
    """
    buildings = []
    for b in range(1, MOCK_BUILDING_COUNT + 1):
        floors = []
        for f in range(MOCK_FLOOR_COUNT, 0, -1):
            rooms = [
                Room(
                    id=f"b{b}-f{f}-r{r}",
                    number=room_number(b, f, r),
                    type=default_room_type(r),
                )
                for r in range(1, MOCK_ROOMS_PER_FLOOR + 1)
            ]
            floors.append(Floor(id=f"b{b}-f{f}", number=f, rooms=rooms))
        buildings.append(Building(id=f"b{b}", name=f"Building {b}", floors=floors))
    return buildings
