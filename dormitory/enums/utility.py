from enum import Enum


class Utility(str, Enum):
    """Metered utilities billed per room and month"""

    WATER = "water"
    ELECTRICITY = "electricity"

    def __str__(self):
        return self.value
