from sqlalchemy import Column, Float, String
from dormitory.database.init import Base


class Bill(Base):
    """One row per room and billing month, keyed "{roomId}-{month}"."""

    __tablename__ = "Bills"

    id = Column(String(100), primary_key=True, index=True)
    room_id = Column("roomId", String(64), index=True)
    room_number = Column("roomNumber", String(50), nullable=True)
    month = Column(String(7), index=True)
    water_units = Column("waterUnits", Float, default=0)
    water_price = Column("waterPrice", Float, default=0)
    electricity_units = Column("electricityUnits", Float, default=0)
    electricity_price = Column("electricityPrice", Float, default=0)

    def __repr__(self):
        return f"<Bill(id={self.id})>"
