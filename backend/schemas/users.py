from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from models.users import UserRole
from schemas.common import CamelModel


class UserBase(CamelModel):
    username: str = Field(min_length=1)
    full_name: str
    role: UserRole
    email: str
    farm_id: Optional[str] = None


class UserCreate(UserBase):
    password: str = Field(min_length=1)

    @field_validator('role')
    @classmethod
    def validate_role(cls, v):
        # Admins are promoted by another admin, never self-registered
        if v == UserRole.ADMIN:
            raise ValueError("role must be one of ['farmer', 'inspector']")
        return v


class User(UserBase):
    """Public view of a user. The password hash is never part of it."""
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserInDB(User):
    password: str


class RoleUpdate(BaseModel):
    role: str  # validated by the route so an unknown role is a 400


class LoginCredentials(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class Token(CamelModel):
    token: str
    token_type: str = "bearer"
    user: User


class RegisterResponse(CamelModel):
    message: str
    user_id: str
