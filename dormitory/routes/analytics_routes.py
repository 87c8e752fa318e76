from fastapi import APIRouter, Depends, Query
from typing import Optional

from dormitory.services.dormitory_service import DormitoryService
from dormitory.utils.date_utils import MONTH_KEY_PATTERN
from dormitory.utils.dependencies import admin_required, get_dormitory

from dormitory.responses.success import data_response
from dormitory.responses.error import not_found_error

router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get("")
async def get_analytics(
    building_id: Optional[str] = None,
    month: Optional[str] = Query(default=None, pattern=MONTH_KEY_PATTERN.pattern),
    dormitory: DormitoryService = Depends(get_dormitory),
    current_user=Depends(admin_required),
):
    """Monthly usage totals, per-floor breakdown and zero-usage alerts of a building"""
    analytics = dormitory.analytics(building_id, month)
    if analytics is None:
        return not_found_error("No building selected")
    return data_response(analytics)
