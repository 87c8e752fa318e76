from fastapi import Depends, HTTPException, Request
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from datetime import datetime, timedelta, timezone
from typing import Optional

from dormitory.config import ALGORITHM, SECRET_KEY, ACCESS_TOKEN_EXPIRE_MINUTES
from dormitory.enums.user_role import UserRole
from dormitory.enums.utility import Utility
from dormitory.schemas.record_schema import UserRecord
from dormitory.services.dormitory_service import DormitoryService

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/signin")


def get_dormitory(request: Request) -> DormitoryService:
    return request.app.state.dormitory


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def get_current_user(
    token: str = Depends(oauth2_scheme),
    dormitory: DormitoryService = Depends(get_dormitory),
) -> UserRecord:
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        user_id = payload.get("sub")
        if user_id is None:
            raise HTTPException(status_code=401, detail="Invalid credentials")
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid provided token")

    user = dormitory.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="User no longer exists")

    return user


def admin_required(current_user: UserRecord = Depends(get_current_user)) -> UserRecord:
    """Dependency to ensure the current user is an administrator"""
    if current_user.role != UserRole.ADMIN:
        raise HTTPException(status_code=403, detail="Only administrators can access this endpoint")
    return current_user


UTILITY_ROLES = {
    Utility.WATER: UserRole.WATER,
    Utility.ELECTRICITY: UserRole.ELECTRIC,
}


def ensure_utility_access(user: UserRecord, utility: Utility) -> None:
    """Meter readers may only record the utility they are responsible for"""
    if user.role not in (UserRole.ADMIN, UTILITY_ROLES[utility]):
        raise HTTPException(status_code=403, detail=f"Not allowed to update {utility} bills")
