from dormitory.enums.utility import Utility
from dormitory.schemas.dormitory_schema import BillData
from dormitory.services.billing_service import (
    bill_record_id,
    price_for_units,
    with_amount,
    with_units,
)


def test_price_rounds_half_up():
    assert price_for_units(10, 18) == 180
    assert price_for_units(0.5, 7) == 4
    assert price_for_units(2.25, 18) == 41


def test_units_update_recomputes_amount():
    bill = with_units(BillData(), Utility.WATER, 10)
    assert bill.water_units == 10
    assert bill.water == 180

    bill = with_units(bill, Utility.ELECTRICITY, 3)
    assert bill.electricity_units == 3
    assert bill.electricity == 21
    assert bill.water == 180


def test_amount_override_keeps_units_until_next_reading():
    bill = with_units(BillData(), Utility.WATER, 10)

    corrected = with_amount(bill, Utility.WATER, 150)
    assert corrected.water == 150
    assert corrected.water_units == 10

    recomputed = with_units(corrected, Utility.WATER, 10)
    assert recomputed.water == 180


def test_bill_record_id():
    assert bill_record_id("r1", "2024-01") == "r1-2024-01"
