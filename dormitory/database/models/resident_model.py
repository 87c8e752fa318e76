from sqlalchemy import Column, String
from dormitory.database.init import Base


class Resident(Base):
    __tablename__ = "Residents"

    id = Column(String(64), primary_key=True, index=True)
    name = Column(String(255))
    room_id = Column("roomId", String(64), index=True)
    room_number = Column("roomNumber", String(50), nullable=True)
