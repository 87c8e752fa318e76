from fastapi import APIRouter, Depends
import traceback

from dormitory.schemas.request_schema import NameUpdate, RoomCreate, RoomUpdate
from dormitory.services.dormitory_service import DormitoryService
from dormitory.utils.dependencies import admin_required, get_current_user, get_dormitory

from dormitory.responses.success import data_response, empty_response
from dormitory.responses.error import (
    conflict_error,
    not_found_error,
    internal_server_error,
)

router = APIRouter(prefix="/buildings", tags=["Buildings"])


@router.get("")
async def get_buildings(
    dormitory: DormitoryService = Depends(get_dormitory),
    current_user=Depends(get_current_user),
):
    """Current building tree with the offline flag and the active selection"""
    return data_response(dormitory.snapshot())


@router.post("/reload")
async def reload_buildings(
    dormitory: DormitoryService = Depends(get_dormitory),
    current_user=Depends(admin_required),
):
    return data_response(dormitory.load())


@router.post("/seed")
async def seed_buildings(
    dormitory: DormitoryService = Depends(get_dormitory),
    current_user=Depends(admin_required),
):
    """Write the initial users and buildings to an empty store"""
    try:
        return data_response(dormitory.seed_database())
    except Exception as e:
        traceback.print_exc()
        return internal_server_error(f"Failed to seed the database: {str(e)}")


@router.post("")
async def create_building(
    dormitory: DormitoryService = Depends(get_dormitory),
    current_user=Depends(admin_required),
):
    try:
        return data_response(dormitory.add_building())
    except Exception as e:
        traceback.print_exc()
        return internal_server_error(str(e))


@router.post("/{building_id}/select")
async def select_building(
    building_id: str,
    dormitory: DormitoryService = Depends(get_dormitory),
    current_user=Depends(get_current_user),
):
    building = dormitory.select_building(building_id)
    if not building:
        return not_found_error(f"No building found with id {building_id}")
    return data_response(building)


@router.patch("/{building_id}")
async def rename_building(
    building_id: str,
    payload: NameUpdate,
    dormitory: DormitoryService = Depends(get_dormitory),
    current_user=Depends(admin_required),
):
    building = dormitory.rename_building(building_id, payload.name)
    if not building:
        return not_found_error(f"No building found with id {building_id}")
    return data_response(building)


@router.delete("/{building_id}")
async def delete_building(
    building_id: str,
    dormitory: DormitoryService = Depends(get_dormitory),
    current_user=Depends(admin_required),
):
    if not dormitory.delete_building(building_id):
        return not_found_error(f"No building found with id {building_id}")
    return empty_response()


# Floor Routes


@router.post("/{building_id}/floors")
async def create_floor(
    building_id: str,
    dormitory: DormitoryService = Depends(get_dormitory),
    current_user=Depends(admin_required),
):
    floor = dormitory.add_floor(building_id)
    if not floor:
        return not_found_error(f"No building found with id {building_id}")
    return data_response(floor)


@router.patch("/floors/{floor_id}")
async def rename_floor(
    floor_id: str,
    payload: NameUpdate,
    dormitory: DormitoryService = Depends(get_dormitory),
    current_user=Depends(admin_required),
):
    floor = dormitory.rename_floor(floor_id, payload.name)
    if not floor:
        return not_found_error(f"No floor found with id {floor_id}")
    return data_response(floor)


@router.delete("/floors/{floor_id}")
async def delete_floor(
    floor_id: str,
    dormitory: DormitoryService = Depends(get_dormitory),
    current_user=Depends(admin_required),
):
    if not dormitory.delete_floor(floor_id):
        return not_found_error(f"No floor found with id {floor_id}")
    return empty_response()


# Room Routes


@router.post("/floors/{floor_id}/rooms")
async def create_room(
    floor_id: str,
    payload: RoomCreate,
    dormitory: DormitoryService = Depends(get_dormitory),
    current_user=Depends(admin_required),
):
    room = dormitory.add_room(floor_id, payload.type)
    if not room:
        return not_found_error(f"No floor found with id {floor_id}")
    return data_response(room)


@router.put("/rooms/{room_id}")
async def update_room(
    room_id: str,
    payload: RoomUpdate,
    dormitory: DormitoryService = Depends(get_dormitory),
    current_user=Depends(admin_required),
):
    try:
        room = dormitory.update_room(room_id, payload.number, payload.type)
        if not room:
            return not_found_error(f"No room found with id {room_id}")
        return data_response(room)
    except ValueError as e:
        return conflict_error(str(e))
    except Exception as e:
        traceback.print_exc()
        return internal_server_error(str(e))


@router.delete("/rooms/{room_id}")
async def delete_room(
    room_id: str,
    dormitory: DormitoryService = Depends(get_dormitory),
    current_user=Depends(admin_required),
):
    if not dormitory.delete_room(room_id):
        return not_found_error(f"No room found with id {room_id}")
    return empty_response()
