# eventpro/models/user.py
import re
from datetime import datetime
from typing import Optional

from pydantic import field_validator

from eventpro.models.base import WireModel

PASSWORD_PATTERN = re.compile(r"^(?=.*[A-Za-z])(?=.*\d)(?=.*[@$!%*#?&])[A-Za-z\d@$!%*#?&_]{8,}$")


def check_password_strength(value: str) -> str:
    if not PASSWORD_PATTERN.match(value):
        raise ValueError(
            "Password must have at least 8 characters, including letters, numbers and special characters."
        )
    return value


class UserBase(WireModel):
    name: str
    lastname: str
    date_of_birth: datetime
    cpf: str
    phone: str
    email: str


class UserCreate(UserBase):
    password: str

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        return check_password_strength(v)


class UserUpdate(WireModel):
    name: Optional[str] = None
    lastname: Optional[str] = None
    date_of_birth: Optional[datetime] = None
    cpf: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        if v is None:
            return v
        return check_password_strength(v)


class User(UserBase):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LoginRequest(WireModel):
    email: str
    password: str


class LoginUser(WireModel):
    id: str
    email: str
    name: str
    lastname: str


class LoginResponse(WireModel):
    message: str
    user: LoginUser


class UserResponse(WireModel):
    message: str
    user: User
