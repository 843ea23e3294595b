from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Optional
from datetime import datetime

# Allowed statuses
ALLOWED_STATUSES = {
    'planning',
    'in_progress',
    'completed',
    'on_hold',
}


def _normalize_status(v):
    if v is None:
        return None

    v = v.strip().lower()

    # Normalize "in progress" → "in_progress", "on hold" → "on_hold"
    v = v.replace(" ", "_")

    if v not in ALLOWED_STATUSES:
        raise ValueError(f"Status must be one of: {', '.join(sorted(ALLOWED_STATUSES))}")

    return v


class ProjectBase(BaseModel):
    name: str = Field(min_length=1)
    description: str
    location: str
    project_type: str
    area_size: str
    value: float = Field(ge=0)
    currency: str = 'KSH'
    status: str = 'planning'
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    images: List[str] = []
    results: Optional[Dict[str, Any]] = None
    client_id: Optional[str] = None

    @field_validator('status', mode='before')
    @classmethod
    def validate_status(cls, v):
        return _normalize_status(v) or 'planning'


class ProjectCreate(ProjectBase):
    pass


class ProjectUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    project_type: Optional[str] = None
    area_size: Optional[str] = None
    value: Optional[float] = Field(default=None, ge=0)
    currency: Optional[str] = None
    status: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    images: Optional[List[str]] = None
    results: Optional[Dict[str, Any]] = None
    client_id: Optional[str] = None

    @field_validator('status', mode='before')
    @classmethod
    def validate_status(cls, v):
        return _normalize_status(v)


class Project(ProjectBase):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
