from sqlalchemy import Column, Integer, String, Enum
from dormitory.database.init import Base
from dormitory.enums.room_type import RoomType

# Parent references are plain indexed columns; the store does not enforce
# referential integrity, orphaned rows are dropped when the tree is built.


class Building(Base):
    __tablename__ = "Buildings"

    id = Column(String(64), primary_key=True, index=True)
    name = Column(String(255))


class Floor(Base):
    __tablename__ = "Floors"

    id = Column(String(64), primary_key=True, index=True)
    number = Column(Integer)
    name = Column(String(255), nullable=True)
    building_id = Column("buildingId", String(64), index=True)


class Room(Base):
    __tablename__ = "Rooms"

    id = Column(String(64), primary_key=True, index=True)
    number = Column(String(50))
    type = Column(Enum(RoomType), default=RoomType.SINGLE)
    floor_id = Column("floorId", String(64), index=True)
