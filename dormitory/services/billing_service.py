import math
from typing import Any, Dict, Optional

from dormitory.config import ELECTRICITY_UNIT_PRICE, WATER_UNIT_PRICE
from dormitory.enums.utility import Utility
from dormitory.schemas.dormitory_schema import BillData, Room

UNIT_PRICES = {
    Utility.WATER: WATER_UNIT_PRICE,
    Utility.ELECTRICITY: ELECTRICITY_UNIT_PRICE,
}

_AMOUNT_FIELDS = {Utility.WATER: "water", Utility.ELECTRICITY: "electricity"}
_UNIT_FIELDS = {Utility.WATER: "water_units", Utility.ELECTRICITY: "electricity_units"}


def bill_record_id(room_id: str, month: str) -> str:
    return f"{room_id}-{month}"


def price_for_units(units: float, unit_price: float) -> int:
    """Amount for a unit count, rounded half up to a whole currency amount."""
    return int(math.floor(units * unit_price + 0.5))


def with_amount(bill: BillData, utility: Utility, value: float) -> BillData:
    """Manual amount correction; the unit count is left as it is."""
    return bill.model_copy(update={_AMOUNT_FIELDS[utility]: value})


def with_units(
    bill: BillData, utility: Utility, units: float, unit_price: Optional[float] = None
) -> BillData:
    """
    New unit count for a utility. The amount is always recomputed from the
    units, replacing any manually set amount.
    """
    if unit_price is None:
        unit_price = UNIT_PRICES[utility]
    return bill.model_copy(
        update={
            _UNIT_FIELDS[utility]: units,
            _AMOUNT_FIELDS[utility]: price_for_units(units, unit_price),
        }
    )


def with_bill(room: Room, month: str, bill: BillData) -> Room:
    return room.model_copy(update={"bills": {**room.bills, month: bill}})


def bill_payload(room: Room, month: str, bill: BillData) -> Dict[str, Any]:
    """Complete Bills row for a room and month."""
    return {
        "id": bill_record_id(room.id, month),
        "roomId": room.id,
        "roomNumber": room.number,
        "month": month,
        "waterUnits": bill.water_units,
        "waterPrice": bill.water,
        "electricityUnits": bill.electricity_units,
        "electricityPrice": bill.electricity,
    }
