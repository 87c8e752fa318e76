from .user_model import User
from .building_model import Building, Floor, Room
from .resident_model import Resident
from .bill_model import Bill

__all__ = ["User", "Building", "Floor", "Room", "Resident", "Bill"]
