from sqlalchemy import Column, String, Enum
from dormitory.database.init import Base
from dormitory.enums.user_role import UserRole


class User(Base):
    __tablename__ = "Users"

    id = Column(String(64), primary_key=True, index=True)
    username = Column(String(100), unique=True, index=True)
    password = Column(String(255))
    role = Column(Enum(UserRole), default=UserRole.ADMIN)
    name = Column(String(255), nullable=True)
