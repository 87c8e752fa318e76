from collections import defaultdict
from typing import Any, Dict, Iterable, List, Mapping, Type, TypeVar

from pydantic import ValidationError

from dormitory.schemas.dormitory_schema import BillData, Building, Floor, Resident, Room
from dormitory.schemas.record_schema import (
    BillRecord,
    BuildingRecord,
    FloorRecord,
    RecordBase,
    ResidentRecord,
    RoomRecord,
)

RecordType = TypeVar("RecordType", bound=RecordBase)


def normalize_rows(rows: Iterable[Any], schema: Type[RecordType]) -> List[RecordType]:
    """Validate raw rows against a record schema, skipping rows that fail."""
    records = []
    for row in rows or []:
        if isinstance(row, RecordBase):
            row = row.model_dump(by_alias=True)
        try:
            records.append(schema.model_validate(row))
        except ValidationError:
            continue
    return records


def _group_by(records: Iterable[RecordBase], key: str) -> Dict[str, list]:
    groups = defaultdict(list)
    for record in records:
        groups[getattr(record, key)].append(record)
    return groups


def fold_bills(bills: Iterable[BillRecord]) -> Dict[str, BillData]:
    """Fold a room's bill rows into a month-keyed mapping; later rows win."""
    folded = {}
    for bill in bills:
        folded[bill.month] = BillData(
            water=bill.water_price,
            water_units=bill.water_units,
            electricity=bill.electricity_price,
            electricity_units=bill.electricity_units,
        )
    return folded


def build_tree(
    buildings: Iterable[Any],
    floors: Iterable[Any],
    rooms: Iterable[Any],
    residents: Iterable[Any],
    bills: Iterable[Any],
) -> List[Building]:
    """
    Build the Building -> Floor -> Room tree from flat store rows.

    Floors are ordered top floor first, rooms by their number. Rows whose
    parent is missing are dropped.

    Args:
        buildings: Rows of the Buildings table
        floors: Rows of the Floors table
        rooms: Rows of the Rooms table
        residents: Rows of the Residents table
        bills: Rows of the Bills table

    Returns:
        List[Building]: Buildings in the order they were given
    """
    floors_by_building = _group_by(normalize_rows(floors, FloorRecord), "building_id")
    rooms_by_floor = _group_by(normalize_rows(rooms, RoomRecord), "floor_id")
    residents_by_room = _group_by(normalize_rows(residents, ResidentRecord), "room_id")
    bills_by_room = _group_by(normalize_rows(bills, BillRecord), "room_id")

    tree = []
    for building in normalize_rows(buildings, BuildingRecord):
        building_floors = sorted(
            floors_by_building.get(building.id, []),
            key=lambda floor: floor.number,
            reverse=True,
        )
        tree.append(
            Building(
                id=building.id,
                name=building.name,
                floors=[
                    _build_floor(floor, rooms_by_floor, residents_by_room, bills_by_room)
                    for floor in building_floors
                ],
            )
        )
    return tree


def _build_floor(
    floor: FloorRecord,
    rooms_by_floor: Mapping[str, List[RoomRecord]],
    residents_by_room: Mapping[str, List[ResidentRecord]],
    bills_by_room: Mapping[str, List[BillRecord]],
) -> Floor:
    floor_rooms = sorted(rooms_by_floor.get(floor.id, []), key=lambda room: room.number)
    return Floor(
        id=floor.id,
        number=floor.number,
        name=floor.name,
        rooms=[
            Room(
                id=room.id,
                number=room.number,
                type=room.type,
                residents=[
                    Resident(id=resident.id, name=resident.name)
                    for resident in residents_by_room.get(room.id, [])
                ],
                bills=fold_bills(bills_by_room.get(room.id, [])),
            )
            for room in floor_rooms
        ],
    )
