from pydantic import BaseModel, Field
from typing import Optional

from dormitory.enums.room_type import RoomType
from dormitory.utils.date_utils import MONTH_KEY_PATTERN


class NameUpdate(BaseModel):
    name: str = Field(min_length=1)


class RoomCreate(BaseModel):
    type: RoomType = RoomType.SINGLE


class RoomUpdate(BaseModel):
    number: str = Field(min_length=1)
    type: RoomType


class ResidentCreate(BaseModel):
    room_id: str
    name: str = Field(min_length=1)


class ResidentMove(BaseModel):
    target_room_id: str


class MonthSelect(BaseModel):
    month: str = Field(pattern=MONTH_KEY_PATTERN.pattern)


class BillAmountUpdate(BaseModel):
    room_id: str
    value: float = Field(ge=0)
    month: Optional[str] = Field(default=None, pattern=MONTH_KEY_PATTERN.pattern)


class BillUnitsUpdate(BaseModel):
    room_id: str
    units: float = Field(ge=0)
    month: Optional[str] = Field(default=None, pattern=MONTH_KEY_PATTERN.pattern)
