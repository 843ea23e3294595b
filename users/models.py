from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime

ALLOWED_ROLES = {'user', 'admin', 'super_admin'}


def _validate_role(v):
    if v is None:
        return v
    v = v.strip().lower()
    if v not in ALLOWED_ROLES:
        raise ValueError(f"Role must be one of: {', '.join(sorted(ALLOWED_ROLES))}")
    return v


class UserBase(BaseModel):
    email: EmailStr
    name: str = Field(min_length=1)
    role: str = 'user'
    phone: Optional[str] = None

    @field_validator('role', mode='before')
    @classmethod
    def validate_role(cls, v):
        return _validate_role(v)


class UserCreate(UserBase):
    password: str = Field(min_length=6)


class UserUpdate(BaseModel):
    email: Optional[EmailStr] = None
    name: Optional[str] = None
    role: Optional[str] = None
    phone: Optional[str] = None
    password: Optional[str] = Field(default=None, min_length=6)

    @field_validator('role', mode='before')
    @classmethod
    def validate_role(cls, v):
        return _validate_role(v)


class UserPublic(BaseModel):
    """User as returned by the API. Never carries the password hash."""
    id: str
    email: str
    name: str
    role: str
    phone: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
