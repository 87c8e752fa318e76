from pydantic import BaseModel, ConfigDict
from typing import Optional

from dormitory.enums.user_role import UserRole


class LoginRequest(BaseModel):
    username: str
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str


class UserCreate(BaseModel):
    username: str
    password: str
    role: UserRole
    name: Optional[str] = None


class UserUpdate(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None
    role: Optional[UserRole] = None
    name: Optional[str] = None


class UserResponse(BaseModel):
    id: str
    username: str
    role: UserRole
    name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(Token):
    user: UserResponse
    landing_view: str
