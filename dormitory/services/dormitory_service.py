import traceback
from typing import Any, Dict, List, Optional

from dormitory.config import DEFAULT_ADMIN_PASSWORD, DEFAULT_ADMIN_USERNAME
from dormitory.enums.room_type import RoomType
from dormitory.enums.table_name import RecordOperation, TableName
from dormitory.enums.user_role import UserRole
from dormitory.enums.utility import Utility
from dormitory.schemas.analytics_schema import BuildingAnalytics
from dormitory.schemas.dormitory_schema import (
    BillData,
    Building,
    DormitorySnapshot,
    Floor,
    Resident,
    Room,
)
from dormitory.schemas.record_schema import UserRecord
from dormitory.services.analytics_service import compute_building_analytics
from dormitory.services.billing_service import bill_payload, with_amount, with_bill, with_units
from dormitory.services.fallback_service import (
    MOCK_ROOMS_PER_FLOOR,
    create_initial_buildings,
    default_room_type,
    room_number,
)
from dormitory.services.record_store import RecordStore, RemoteWriter
from dormitory.services.tree_builder import build_tree, normalize_rows
from dormitory.utils.date_utils import current_month, validate_month_key
from dormitory.utils.id_generator import generate_record_id, id_digits
from dormitory.utils.tree_updates import (
    find_building,
    find_floor,
    find_resident,
    find_room,
    replace_building,
    replace_floor,
    replace_room,
)


def initial_users() -> List[UserRecord]:
    return [
        UserRecord(
            id="admin-popa",
            username=DEFAULT_ADMIN_USERNAME,
            password=DEFAULT_ADMIN_PASSWORD,
            role=UserRole.ADMIN,
            name="System Administrator",
        )
    ]


def building_payload(building: Building) -> Dict[str, Any]:
    return {"id": building.id, "name": building.name}


def floor_payload(building_id: str, floor: Floor) -> Dict[str, Any]:
    return {
        "id": floor.id,
        "number": floor.number,
        "name": floor.name,
        "buildingId": building_id,
    }


def room_payload(floor_id: str, room: Room) -> Dict[str, Any]:
    return {"id": room.id, "number": room.number, "type": room.type.value, "floorId": floor_id}


def resident_payload(room: Room, resident: Resident) -> Dict[str, Any]:
    return {
        "id": resident.id,
        "name": resident.name,
        "roomId": room.id,
        "roomNumber": room.number,
    }


def user_payload(user: UserRecord) -> Dict[str, Any]:
    return user.model_dump(mode="json", by_alias=True)


def generate_floor(building_id: str, number: int, suffix: str = "") -> Floor:
    """New floor with the default room layout; the suffix keeps regenerated ids unique."""
    token = f"-{suffix}" if suffix else ""
    building_number = id_digits(building_id)
    rooms = [
        Room(
            id=f"{building_id}-f{number}-r{sequence}{token}",
            number=room_number(building_number, number, sequence),
            type=default_room_type(sequence),
        )
        for sequence in range(1, MOCK_ROOMS_PER_FLOOR + 1)
    ]
    return Floor(id=f"{building_id}-f{number}{token}", number=number, rooms=rooms)


class DormitoryService:
    """
    Application state: the building tree, the user list and the selected
    building and billing month.

    Every command updates the in-memory tree first and then issues one
    independent write to the record store. The in-memory tree is the source
    of truth for the session; write failures are only reported.
    """

    def __init__(self, store: RecordStore, month: Optional[str] = None):
        self.store = store
        self.write = RemoteWriter(store)
        self.buildings: List[Building] = []
        self.users: List[UserRecord] = initial_users()
        self.offline = False
        self.active_building_id = ""
        self.current_month = validate_month_key(month) if month else current_month()

    # Loading

    def load(self) -> DormitorySnapshot:
        """Fetch every table and rebuild the tree, or fall back to the offline tree."""
        try:
            data = self.store.fetch_all()
            if data is None:
                raise ValueError("Fetch returned no data")
        except Exception as e:
            print(f"Critical error fetching data, falling back to offline data: {e}")
            self.offline = True
            self.buildings = create_initial_buildings()
            self.active_building_id = self.buildings[0].id
            return self.snapshot()

        print("Successfully fetched data from the record store")
        self.offline = False

        users = normalize_rows(data.get(str(TableName.USERS)) or [], UserRecord)
        if users:
            self.users = users

        self.buildings = build_tree(
            data.get(str(TableName.BUILDINGS)) or [],
            data.get(str(TableName.FLOORS)) or [],
            data.get(str(TableName.ROOMS)) or [],
            data.get(str(TableName.RESIDENTS)) or [],
            data.get(str(TableName.BILLS)) or [],
        )
        # An empty store yields an empty tree, not the offline data
        self.active_building_id = self.buildings[0].id if self.buildings else ""
        return self.snapshot()

    def seed_database(self) -> DormitorySnapshot:
        """
        Write the default users and the initial building layout to the store,
        then reload. Writes run in sequence and the first failure is raised.
        """
        try:
            for user in initial_users():
                self.store.save(TableName.USERS, RecordOperation.ADD, user_payload(user))

            for building in create_initial_buildings():
                self.store.save(TableName.BUILDINGS, RecordOperation.ADD, building_payload(building))
                for floor in building.floors:
                    self.store.save(
                        TableName.FLOORS, RecordOperation.ADD, floor_payload(building.id, floor)
                    )
                    for room in floor.rooms:
                        self.store.save(
                            TableName.ROOMS, RecordOperation.ADD, room_payload(floor.id, room)
                        )
        except Exception:
            print("Seeding error")
            traceback.print_exc()
            raise
        return self.load()

    def snapshot(self) -> DormitorySnapshot:
        return DormitorySnapshot(
            buildings=self.buildings,
            offline=self.offline,
            active_building_id=self.active_building_id,
            current_month=self.current_month,
        )

    # Selection

    def get_building(self, building_id: Optional[str] = None) -> Optional[Building]:
        return find_building(self.buildings, building_id or self.active_building_id)

    def select_building(self, building_id: str) -> Optional[Building]:
        building = find_building(self.buildings, building_id)
        if building:
            self.active_building_id = building.id
        return building

    def set_month(self, month: str) -> str:
        self.current_month = validate_month_key(month)
        return self.current_month

    def _month(self, month: Optional[str]) -> str:
        return validate_month_key(month) if month else self.current_month

    # Users

    def authenticate(self, username: str, password: str) -> Optional[UserRecord]:
        return next(
            (u for u in self.users if u.username == username and u.password == password),
            None,
        )

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        return next((u for u in self.users if u.id == user_id), None)

    def add_user(
        self, username: str, password: str, role: UserRole, name: Optional[str] = None
    ) -> UserRecord:
        if any(u.username == username for u in self.users):
            raise ValueError(f"Username '{username}' already exists")
        user = UserRecord(
            id=generate_record_id(), username=username, password=password, role=role, name=name
        )
        self.users = [*self.users, user]
        self.write(TableName.USERS, RecordOperation.ADD, user_payload(user))
        return user

    def update_user(self, user_id: str, **changes) -> Optional[UserRecord]:
        user = self.get_user(user_id)
        if not user:
            return None
        changes = {key: value for key, value in changes.items() if value is not None}
        username = changes.get("username")
        if username and any(u.username == username and u.id != user_id for u in self.users):
            raise ValueError(f"Username '{username}' already exists")
        updated = user.model_copy(update=changes)
        self.users = [updated if u.id == user_id else u for u in self.users]
        self.write(TableName.USERS, RecordOperation.ADD, user_payload(updated))
        return updated

    def delete_user(self, user_id: str) -> bool:
        if not self.get_user(user_id):
            return False
        self.users = [u for u in self.users if u.id != user_id]
        self.write(TableName.USERS, RecordOperation.DELETE, {"id": user_id})
        return True

    # Buildings and floors

    def add_building(self) -> Building:
        next_number = max((int(id_digits(b.id) or 0) for b in self.buildings), default=0) + 1
        building_id = f"b{next_number}"
        building = Building(
            id=building_id,
            name=f"New Building {next_number}",
            floors=[generate_floor(building_id, 1)],
        )
        self.buildings = [*self.buildings, building]

        self.write(TableName.BUILDINGS, RecordOperation.ADD, building_payload(building))
        self._write_floor(building.id, building.floors[0])

        self.active_building_id = building.id
        return building

    def rename_building(self, building_id: str, name: str) -> Optional[Building]:
        building = find_building(self.buildings, building_id)
        if not building or not name or not name.strip():
            return building
        self.buildings = replace_building(
            self.buildings, building_id, lambda b: b.model_copy(update={"name": name})
        )
        self.write(TableName.BUILDINGS, RecordOperation.ADD, {"id": building_id, "name": name})
        return find_building(self.buildings, building_id)

    def delete_building(self, building_id: str) -> bool:
        if not find_building(self.buildings, building_id):
            return False
        self.buildings = [b for b in self.buildings if b.id != building_id]
        if self.active_building_id == building_id:
            self.active_building_id = self.buildings[0].id if self.buildings else ""
        self.write(TableName.BUILDINGS, RecordOperation.DELETE, {"id": building_id})
        return True

    def add_floor(self, building_id: Optional[str] = None) -> Optional[Floor]:
        building = self.get_building(building_id)
        if not building:
            return None
        next_number = max((f.number for f in building.floors), default=0) + 1
        floor = generate_floor(building.id, next_number, suffix=generate_record_id())

        # New floors go on top
        self.buildings = replace_building(
            self.buildings,
            building.id,
            lambda b: b.model_copy(update={"floors": [floor, *b.floors]}),
        )
        self._write_floor(building.id, floor)
        return floor

    def _write_floor(self, building_id: str, floor: Floor) -> None:
        self.write(TableName.FLOORS, RecordOperation.ADD, floor_payload(building_id, floor))
        for room in floor.rooms:
            self.write(TableName.ROOMS, RecordOperation.ADD, room_payload(floor.id, room))

    def rename_floor(self, floor_id: str, name: str) -> Optional[Floor]:
        location = find_floor(self.buildings, floor_id)
        if not location:
            return None
        building, floor = location
        if not name or not name.strip():
            return floor
        self.buildings = replace_floor(
            self.buildings, floor_id, lambda f: f.model_copy(update={"name": name})
        )
        _, renamed = find_floor(self.buildings, floor_id)
        self.write(TableName.FLOORS, RecordOperation.ADD, floor_payload(building.id, renamed))
        return renamed

    def delete_floor(self, floor_id: str) -> bool:
        location = find_floor(self.buildings, floor_id)
        if not location:
            return False
        building, _ = location
        self.buildings = replace_building(
            self.buildings,
            building.id,
            lambda b: b.model_copy(update={"floors": [f for f in b.floors if f.id != floor_id]}),
        )
        self.write(TableName.FLOORS, RecordOperation.DELETE, {"id": floor_id})
        return True

    # Rooms

    def add_room(self, floor_id: str, room_type: RoomType) -> Optional[Room]:
        location = find_floor(self.buildings, floor_id)
        if not location:
            return None
        building, floor = location
        room = Room(
            id=generate_record_id("new-"),
            number=room_number(id_digits(building.id), floor.number, len(floor.rooms) + 1),
            type=room_type,
        )
        self.buildings = replace_floor(
            self.buildings, floor_id, lambda f: f.model_copy(update={"rooms": [*f.rooms, room]})
        )
        self.write(TableName.ROOMS, RecordOperation.ADD, room_payload(floor_id, room))
        return room

    def update_room(self, room_id: str, number: str, room_type: RoomType) -> Optional[Room]:
        location = find_room(self.buildings, room_id)
        if not location:
            return None
        _, floor, room = location
        if not number or not number.strip():
            raise ValueError("Room number is required")
        if len(room.residents) > room_type.capacity:
            raise ValueError(
                f"Cannot change room {room.number} to {room_type.value}: "
                f"it has {len(room.residents)} residents"
            )
        updated = room.model_copy(update={"number": number, "type": room_type})
        self.buildings = replace_room(self.buildings, room_id, lambda r: updated)
        self.write(TableName.ROOMS, RecordOperation.ADD, room_payload(floor.id, updated))
        return updated

    def delete_room(self, room_id: str) -> bool:
        location = find_room(self.buildings, room_id)
        if not location:
            return False
        _, floor, _ = location
        self.buildings = replace_floor(
            self.buildings,
            floor.id,
            lambda f: f.model_copy(update={"rooms": [r for r in f.rooms if r.id != room_id]}),
        )
        self.write(TableName.ROOMS, RecordOperation.DELETE, {"id": room_id})
        return True

    # Residents

    def add_resident(self, room_id: str, name: str) -> Optional[Resident]:
        location = find_room(self.buildings, room_id)
        if not location:
            return None
        _, _, room = location
        if not name or not name.strip():
            raise ValueError("Resident name is required")
        if room.is_full:
            raise ValueError(f"Room {room.number} is full")

        resident = Resident(id=generate_record_id(), name=name.strip())
        self.buildings = replace_room(
            self.buildings,
            room_id,
            lambda r: r.model_copy(update={"residents": [*r.residents, resident]}),
        )
        self.write(TableName.RESIDENTS, RecordOperation.ADD, resident_payload(room, resident))
        return resident

    def rename_resident(self, resident_id: str, name: str) -> Optional[Resident]:
        location = find_resident(self.buildings, resident_id)
        if not location:
            return None
        _, _, room, resident = location
        if not name or not name.strip():
            raise ValueError("Resident name is required")
        renamed = resident.model_copy(update={"name": name.strip()})
        self.buildings = replace_room(
            self.buildings,
            room.id,
            lambda r: r.model_copy(
                update={"residents": [renamed if x.id == resident_id else x for x in r.residents]}
            ),
        )
        self.write(TableName.RESIDENTS, RecordOperation.ADD, resident_payload(room, renamed))
        return renamed

    def remove_resident(self, resident_id: str) -> bool:
        location = find_resident(self.buildings, resident_id)
        if not location:
            return False
        _, _, room, _ = location
        self.buildings = replace_room(
            self.buildings,
            room.id,
            lambda r: r.model_copy(
                update={"residents": [x for x in r.residents if x.id != resident_id]}
            ),
        )
        self.write(TableName.RESIDENTS, RecordOperation.DELETE, {"id": resident_id})
        return True

    def move_resident(self, resident_id: str, target_room_id: str) -> Optional[Room]:
        """
        Move a resident to another room, in any building.

        Returns:
            Room: The target room after the move, None when the resident or
            the target room does not exist
        """
        source = find_resident(self.buildings, resident_id)
        target = find_room(self.buildings, target_room_id)
        if not source or not target:
            return None
        _, _, source_room, resident = source
        _, _, target_room = target

        if source_room.id == target_room.id:
            return target_room
        if target_room.is_full:
            raise ValueError(f"Room {target_room.number} is full")

        buildings = replace_room(
            self.buildings,
            source_room.id,
            lambda r: r.model_copy(
                update={"residents": [x for x in r.residents if x.id != resident_id]}
            ),
        )
        self.buildings = replace_room(
            buildings,
            target_room.id,
            lambda r: r.model_copy(update={"residents": [*r.residents, resident]}),
        )
        self.write(TableName.RESIDENTS, RecordOperation.ADD, resident_payload(target_room, resident))
        _, _, moved_into = find_room(self.buildings, target_room.id)
        return moved_into

    # Bills

    def set_bill_amount(
        self, room_id: str, utility: Utility, value: float, month: Optional[str] = None
    ) -> Optional[BillData]:
        """Override the billed amount for a utility; the unit count is kept."""
        month = self._month(month)
        return self._update_bill(room_id, month, lambda bill: with_amount(bill, utility, value))

    def set_units(
        self, room_id: str, utility: Utility, units: float, month: Optional[str] = None
    ) -> Optional[BillData]:
        """Record a meter reading; the amount is recomputed from the unit price."""
        month = self._month(month)
        return self._update_bill(room_id, month, lambda bill: with_units(bill, utility, units))

    def set_water_units(self, room_id: str, units: float, month: Optional[str] = None):
        return self.set_units(room_id, Utility.WATER, units, month)

    def set_electricity_units(self, room_id: str, units: float, month: Optional[str] = None):
        return self.set_units(room_id, Utility.ELECTRICITY, units, month)

    def _update_bill(self, room_id: str, month: str, update) -> Optional[BillData]:
        location = find_room(self.buildings, room_id)
        if not location:
            return None
        _, _, room = location
        bill = update(room.bill_for(month))
        self.buildings = replace_room(self.buildings, room_id, lambda r: with_bill(r, month, bill))
        self.write(TableName.BILLS, RecordOperation.ADD, bill_payload(room, month, bill))
        return bill

    # Analytics

    def analytics(
        self, building_id: Optional[str] = None, month: Optional[str] = None
    ) -> Optional[BuildingAnalytics]:
        return compute_building_analytics(self.get_building(building_id), self._month(month))
