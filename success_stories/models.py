from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class SuccessStoryBase(BaseModel):
    title: str = Field(min_length=1)
    client_name: str = Field(min_length=1)
    description: str
    category: str = 'Agriculture'
    location: str
    area_size: str
    water_savings: Optional[str] = None
    yield_increase: Optional[str] = None
    photo_url: Optional[str] = None
    completed_date: str
    featured: bool = False
    active: bool = True


class SuccessStoryCreate(SuccessStoryBase):
    pass


class SuccessStoryUpdate(BaseModel):
    title: Optional[str] = None
    client_name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None
    area_size: Optional[str] = None
    water_savings: Optional[str] = None
    yield_increase: Optional[str] = None
    photo_url: Optional[str] = None
    completed_date: Optional[str] = None
    featured: Optional[bool] = None
    active: Optional[bool] = None


class SuccessStory(SuccessStoryBase):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
