from pydantic import BaseModel, ConfigDict, computed_field
from typing import Dict, Iterator, List, Optional, Tuple

from dormitory.enums.room_type import RoomType
from dormitory.enums.utility import Utility


class Resident(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str


class BillData(BaseModel):
    model_config = ConfigDict(frozen=True)

    water: float = 0
    water_units: float = 0
    electricity: float = 0
    electricity_units: float = 0

    def units(self, utility: Utility) -> float:
        return self.water_units if utility == Utility.WATER else self.electricity_units

    def amount(self, utility: Utility) -> float:
        return self.water if utility == Utility.WATER else self.electricity


EMPTY_BILL = BillData()


class Room(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    number: str
    type: RoomType
    residents: List[Resident] = []
    bills: Dict[str, BillData] = {}

    @computed_field
    @property
    def capacity(self) -> int:
        return self.type.capacity

    @property
    def is_full(self) -> bool:
        return len(self.residents) >= self.capacity

    @property
    def is_occupied(self) -> bool:
        return len(self.residents) > 0

    def bill_for(self, month: str) -> BillData:
        """Bill for the month, all zero when nothing was recorded."""
        return self.bills.get(month, EMPTY_BILL)


class Floor(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    number: int
    name: Optional[str] = None
    rooms: List[Room] = []

    @computed_field
    @property
    def display_name(self) -> str:
        return self.name or f"Floor {self.number}"


class Building(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    floors: List[Floor] = []

    def iter_rooms(self) -> Iterator[Tuple[Floor, Room]]:
        for floor in self.floors:
            for room in floor.rooms:
                yield floor, room


class DormitorySnapshot(BaseModel):
    buildings: List[Building] = []
    offline: bool = False
    active_building_id: str = ""
    current_month: str
