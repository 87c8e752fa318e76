from fastapi import APIRouter, Depends
import traceback

from dormitory.schemas.request_schema import NameUpdate, ResidentCreate, ResidentMove
from dormitory.services.dormitory_service import DormitoryService
from dormitory.utils.dependencies import admin_required, get_dormitory

from dormitory.responses.success import data_response, empty_response
from dormitory.responses.error import (
    conflict_error,
    not_found_error,
    internal_server_error,
)

router = APIRouter(prefix="/residents", tags=["Residents"])


@router.post("")
async def add_resident(
    payload: ResidentCreate,
    dormitory: DormitoryService = Depends(get_dormitory),
    current_user=Depends(admin_required),
):
    """Assign a new resident to a room that still has a free place"""
    try:
        resident = dormitory.add_resident(payload.room_id, payload.name)
        if not resident:
            return not_found_error(f"No room found with id {payload.room_id}")
        return data_response(resident)
    except ValueError as e:
        return conflict_error(str(e))
    except Exception as e:
        traceback.print_exc()
        return internal_server_error(str(e))


@router.patch("/{resident_id}")
async def rename_resident(
    resident_id: str,
    payload: NameUpdate,
    dormitory: DormitoryService = Depends(get_dormitory),
    current_user=Depends(admin_required),
):
    try:
        resident = dormitory.rename_resident(resident_id, payload.name)
        if not resident:
            return not_found_error(f"No resident found with id {resident_id}")
        return data_response(resident)
    except ValueError as e:
        return conflict_error(str(e))


@router.delete("/{resident_id}")
async def remove_resident(
    resident_id: str,
    dormitory: DormitoryService = Depends(get_dormitory),
    current_user=Depends(admin_required),
):
    if not dormitory.remove_resident(resident_id):
        return not_found_error(f"No resident found with id {resident_id}")
    return empty_response()


@router.post("/{resident_id}/move")
async def move_resident(
    resident_id: str,
    payload: ResidentMove,
    dormitory: DormitoryService = Depends(get_dormitory),
    current_user=Depends(admin_required),
):
    """Move a resident to another room, possibly in another building"""
    try:
        room = dormitory.move_resident(resident_id, payload.target_room_id)
        if not room:
            return not_found_error("Resident or target room not found")
        return data_response(room)
    except ValueError as e:
        return conflict_error(str(e))
    except Exception as e:
        traceback.print_exc()
        return internal_server_error(str(e))
