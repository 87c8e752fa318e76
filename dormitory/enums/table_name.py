from enum import Enum


class TableName(str, Enum):
    """Tables of the remote record store"""

    USERS = "Users"
    BUILDINGS = "Buildings"
    FLOORS = "Floors"
    ROOMS = "Rooms"
    RESIDENTS = "Residents"
    BILLS = "Bills"

    def __str__(self):
        return self.value


class RecordOperation(str, Enum):
    ADD = "ADD"
    DELETE = "DELETE"

    def __str__(self):
        return self.value
