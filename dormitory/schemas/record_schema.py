"""
Row shapes of the remote record store.

Rows arrive loosely typed: identifiers may be numbers or strings and numeric
bill fields may be missing or blank. These models are the single place where
rows are coerced into canonical form; anything that fails validation here is
skipped rather than passed further in.
"""

import math
from typing import Any, Dict, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dormitory.enums.room_type import RoomType
from dormitory.enums.table_name import TableName
from dormitory.enums.user_role import UserRole


def coerce_id(value: Any) -> Any:
    """Canonical string form of an identifier (1, 1.0 and "1" are the same id)."""
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None


def coerce_number(value: Any) -> float:
    """Numeric field with missing, blank or non-numeric input read as 0."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(number) or math.isinf(number):
        return 0
    return int(number) if number.is_integer() else number


class RecordBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        return coerce_id(value)


class UserRecord(RecordBase):
    username: str
    password: str
    role: UserRole = UserRole.ADMIN
    name: Optional[str] = None


class BuildingRecord(RecordBase):
    name: str = ""

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value):
        return "" if value is None else str(value)


class FloorRecord(RecordBase):
    number: int = 0
    name: Optional[str] = None
    building_id: str = Field(alias="buildingId")

    @field_validator("building_id", mode="before")
    @classmethod
    def _coerce_parent(cls, value):
        return coerce_id(value)

    @field_validator("number", mode="before")
    @classmethod
    def _coerce_number(cls, value):
        return int(coerce_number(value))

    @field_validator("name", mode="before")
    @classmethod
    def _blank_name(cls, value):
        if value is None or not str(value).strip():
            return None
        return str(value)


class RoomRecord(RecordBase):
    number: str
    type: RoomType = RoomType.SINGLE
    floor_id: str = Field(alias="floorId")

    @field_validator("floor_id", mode="before")
    @classmethod
    def _coerce_parent(cls, value):
        return coerce_id(value)

    @field_validator("number", mode="before")
    @classmethod
    def _coerce_room_number(cls, value):
        return coerce_id(value)


class ResidentRecord(RecordBase):
    name: str
    room_id: str = Field(alias="roomId")
    room_number: Optional[str] = Field(default=None, alias="roomNumber")

    @field_validator("room_id", "room_number", mode="before")
    @classmethod
    def _coerce_room(cls, value):
        return coerce_id(value)


class BillRecord(RecordBase):
    # Bills are addressed by (roomId, month); the synthetic id is optional on read
    id: Optional[str] = None
    room_id: str = Field(alias="roomId")
    room_number: Optional[str] = Field(default=None, alias="roomNumber")
    month: str
    water_units: float = Field(default=0, alias="waterUnits")
    water_price: float = Field(default=0, alias="waterPrice")
    electricity_units: float = Field(default=0, alias="electricityUnits")
    electricity_price: float = Field(default=0, alias="electricityPrice")

    @field_validator("room_id", "room_number", mode="before")
    @classmethod
    def _coerce_room(cls, value):
        return coerce_id(value)

    @field_validator("month", mode="before")
    @classmethod
    def _require_month(cls, value):
        if value is None or not str(value).strip():
            return None
        return str(value).strip()

    @field_validator(
        "water_units",
        "water_price",
        "electricity_units",
        "electricity_price",
        mode="before",
    )
    @classmethod
    def _coerce_amount(cls, value):
        return coerce_number(value)


RECORD_SCHEMAS: Dict[TableName, Type[RecordBase]] = {
    TableName.USERS: UserRecord,
    TableName.BUILDINGS: BuildingRecord,
    TableName.FLOORS: FloorRecord,
    TableName.ROOMS: RoomRecord,
    TableName.RESIDENTS: ResidentRecord,
    TableName.BILLS: BillRecord,
}
