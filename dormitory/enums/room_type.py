from enum import Enum


class RoomType(str, Enum):
    """Enum for room types, each with a fixed resident capacity"""

    SINGLE = "SINGLE"
    DOUBLE = "DOUBLE"

    @property
    def capacity(self) -> int:
        return 1 if self is RoomType.SINGLE else 2

    def __str__(self):
        return self.value
