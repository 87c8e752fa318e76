from fastapi import APIRouter, Depends
import traceback

from dormitory.enums.utility import Utility
from dormitory.schemas.record_schema import UserRecord
from dormitory.schemas.request_schema import BillAmountUpdate, BillUnitsUpdate, MonthSelect
from dormitory.services.dormitory_service import DormitoryService
from dormitory.utils.dependencies import (
    ensure_utility_access,
    get_current_user,
    get_dormitory,
)

from dormitory.responses.success import data_response
from dormitory.responses.error import not_found_error, internal_server_error

router = APIRouter(prefix="/bills", tags=["Bills"])


@router.put("/month")
async def select_month(
    payload: MonthSelect,
    dormitory: DormitoryService = Depends(get_dormitory),
    current_user=Depends(get_current_user),
):
    """Select the billing period shown and edited by default"""
    return data_response({"month": dormitory.set_month(payload.month)})


@router.put("/{utility}/amount")
async def update_bill_amount(
    utility: Utility,
    payload: BillAmountUpdate,
    dormitory: DormitoryService = Depends(get_dormitory),
    current_user: UserRecord = Depends(get_current_user),
):
    """Correct the billed amount without touching the recorded units"""
    ensure_utility_access(current_user, utility)
    try:
        bill = dormitory.set_bill_amount(payload.room_id, utility, payload.value, payload.month)
        if not bill:
            return not_found_error(f"No room found with id {payload.room_id}")
        return data_response(bill)
    except Exception as e:
        traceback.print_exc()
        return internal_server_error(str(e))


@router.put("/{utility}/units")
async def update_bill_units(
    utility: Utility,
    payload: BillUnitsUpdate,
    dormitory: DormitoryService = Depends(get_dormitory),
    current_user: UserRecord = Depends(get_current_user),
):
    """Record a meter reading; the amount is recomputed from the unit price"""
    ensure_utility_access(current_user, utility)
    try:
        bill = dormitory.set_units(payload.room_id, utility, payload.units, payload.month)
        if not bill:
            return not_found_error(f"No room found with id {payload.room_id}")
        return data_response(bill)
    except Exception as e:
        traceback.print_exc()
        return internal_server_error(str(e))
