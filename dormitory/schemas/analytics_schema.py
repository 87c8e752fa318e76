from pydantic import BaseModel, computed_field
from typing import List

from dormitory.enums.utility import Utility


def ratio(part: float, whole: float) -> float:
    """part / whole, with an empty denominator read as 0."""
    if not whole:
        return 0.0
    return part / whole


class FloorStat(BaseModel):
    id: str
    display_name: str
    water_units_sum: float = 0
    elec_units_sum: float = 0
    water_share: float = 0
    elec_share: float = 0


class ZeroUsageAlert(BaseModel):
    room_id: str
    room_number: str
    floor_name: str
    utilities: List[Utility]


class BuildingAnalytics(BaseModel):
    building_id: str
    month: str
    month_label: str
    total_water_units: float = 0
    total_water_cost: float = 0
    total_elec_units: float = 0
    total_elec_cost: float = 0
    occupied_rooms: int = 0
    total_rooms: int = 0
    floor_stats: List[FloorStat] = []
    zero_usage_alerts: List[ZeroUsageAlert] = []

    @computed_field
    @property
    def total_cost(self) -> float:
        return self.total_water_cost + self.total_elec_cost

    @computed_field
    @property
    def occupancy_rate(self) -> float:
        return ratio(self.occupied_rooms, self.total_rooms)
