from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class TeamMemberBase(BaseModel):
    name: str = Field(min_length=1)
    position: str = Field(min_length=1)
    bio: str
    photo_url: Optional[str] = None
    email: Optional[str] = None
    linkedin: Optional[str] = None
    order: int = 0
    active: bool = True


class TeamMemberCreate(TeamMemberBase):
    pass


class TeamMemberUpdate(BaseModel):
    name: Optional[str] = None
    position: Optional[str] = None
    bio: Optional[str] = None
    photo_url: Optional[str] = None
    email: Optional[str] = None
    linkedin: Optional[str] = None
    order: Optional[int] = None
    active: Optional[bool] = None


class TeamMember(TeamMemberBase):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
