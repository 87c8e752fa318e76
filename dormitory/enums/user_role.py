from enum import Enum


class UserRole(str, Enum):
    """Enum for user roles"""

    ADMIN = "ADMIN"
    WATER = "WATER"
    ELECTRIC = "ELECTRIC"

    @property
    def landing_view(self) -> str:
        if self is UserRole.WATER:
            return "water-meter"
        if self is UserRole.ELECTRIC:
            return "electricity-meter"
        return "dashboard"

    def __str__(self):
        return self.value
