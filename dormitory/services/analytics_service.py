from typing import Optional

from dormitory.enums.utility import Utility
from dormitory.schemas.analytics_schema import (
    BuildingAnalytics,
    FloorStat,
    ZeroUsageAlert,
    ratio,
)
from dormitory.schemas.dormitory_schema import Building
from dormitory.utils.date_utils import format_thai_month


def compute_building_analytics(
    building: Optional[Building], month: str
) -> Optional[BuildingAnalytics]:
    """
    Monthly usage statistics for one building.

    Sums recorded units and amounts over every room, counts occupied rooms,
    breaks unit usage down per floor and flags occupied rooms whose water or
    electricity reading for the month is zero. Vacant rooms never raise an
    alert.

    Args:
        building: Building to analyse, None when no building is selected
        month: Month key (e.g., 2024-01)

    Returns:
        BuildingAnalytics or None when there is no building
    """
    if building is None:
        return None

    total_water_units = 0
    total_water_cost = 0
    total_elec_units = 0
    total_elec_cost = 0
    occupied_rooms = 0
    total_rooms = 0
    floor_totals = []
    alerts = []

    for floor in building.floors:
        floor_water = 0
        floor_elec = 0

        for room in floor.rooms:
            bill = room.bill_for(month)
            total_rooms += 1

            total_water_units += bill.water_units
            total_water_cost += bill.water
            total_elec_units += bill.electricity_units
            total_elec_cost += bill.electricity

            floor_water += bill.water_units
            floor_elec += bill.electricity_units

            if not room.is_occupied:
                continue
            occupied_rooms += 1

            zero_utilities = [
                utility for utility in Utility if bill.units(utility) == 0
            ]
            if zero_utilities:
                alerts.append(
                    ZeroUsageAlert(
                        room_id=room.id,
                        room_number=room.number,
                        floor_name=floor.display_name,
                        utilities=zero_utilities,
                    )
                )

        floor_totals.append((floor, floor_water, floor_elec))

    # Shares need the building totals, so they are filled in after the scan
    floor_stats = [
        FloorStat(
            id=floor.id,
            display_name=floor.display_name,
            water_units_sum=water,
            elec_units_sum=elec,
            water_share=ratio(water, total_water_units),
            elec_share=ratio(elec, total_elec_units),
        )
        for floor, water, elec in floor_totals
    ]

    return BuildingAnalytics(
        building_id=building.id,
        month=month,
        month_label=format_thai_month(month),
        total_water_units=total_water_units,
        total_water_cost=total_water_cost,
        total_elec_units=total_elec_units,
        total_elec_cost=total_elec_cost,
        occupied_rooms=occupied_rooms,
        total_rooms=total_rooms,
        floor_stats=floor_stats,
        zero_usage_alerts=alerts,
    )
