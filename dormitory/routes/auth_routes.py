from fastapi import APIRouter, Depends
import traceback

from dormitory.schemas.auth_schema import (
    LoginRequest,
    LoginResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
)
from dormitory.schemas.record_schema import UserRecord
from dormitory.services.dormitory_service import DormitoryService
from dormitory.utils.dependencies import (
    admin_required,
    create_access_token,
    get_current_user,
    get_dormitory,
)

from dormitory.responses.success import data_response, empty_response
from dormitory.responses.error import (
    unauthorized_error,
    conflict_error,
    not_found_error,
    internal_server_error,
)


router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/signin")
async def signin(
    credentials: LoginRequest,
    dormitory: DormitoryService = Depends(get_dormitory),
):
    try:
        user = dormitory.authenticate(credentials.username, credentials.password)
        if not user:
            return unauthorized_error("Invalid username or password")

        token = create_access_token({"sub": user.id})
        return data_response(
            LoginResponse(
                access_token=token,
                token_type="bearer",
                user=UserResponse.model_validate(user),
                landing_view=user.role.landing_view,
            )
        )
    except Exception as e:
        traceback.print_exc()
        return internal_server_error(str(e))


@router.get("/me")
async def get_me(current_user: UserRecord = Depends(get_current_user)):
    return data_response(UserResponse.model_validate(current_user))


@router.get("/users")
async def get_users(
    dormitory: DormitoryService = Depends(get_dormitory),
    current_user=Depends(admin_required),
):
    """List every user account"""
    return data_response([UserResponse.model_validate(u) for u in dormitory.users])


@router.post("/users")
async def create_user(
    payload: UserCreate,
    dormitory: DormitoryService = Depends(get_dormitory),
    current_user=Depends(admin_required),
):
    try:
        user = dormitory.add_user(payload.username, payload.password, payload.role, payload.name)
        return data_response(UserResponse.model_validate(user))
    except ValueError as e:
        return conflict_error(str(e))
    except Exception as e:
        traceback.print_exc()
        return internal_server_error(f"Failed to create user: {str(e)}")


@router.put("/users/{user_id}")
async def update_user(
    user_id: str,
    payload: UserUpdate,
    dormitory: DormitoryService = Depends(get_dormitory),
    current_user=Depends(admin_required),
):
    try:
        user = dormitory.update_user(user_id, **payload.model_dump(exclude_unset=True))
        if not user:
            return not_found_error(f"No user found with id {user_id}")
        return data_response(UserResponse.model_validate(user))
    except ValueError as e:
        return conflict_error(str(e))
    except Exception as e:
        traceback.print_exc()
        return internal_server_error(str(e))


@router.delete("/users/{user_id}")
async def delete_user(
    user_id: str,
    dormitory: DormitoryService = Depends(get_dormitory),
    current_user=Depends(admin_required),
):
    if user_id == current_user.id:
        return conflict_error("You cannot delete your own account")
    if not dormitory.delete_user(user_id):
        return not_found_error(f"No user found with id {user_id}")
    return empty_response()
