from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime

CONTACT_STATUSES = {'new', 'replied', 'closed'}


class ContactBase(BaseModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    subject: str = Field(min_length=1)
    message: str = Field(min_length=1)


class ContactCreate(ContactBase):
    pass


class ContactStatusUpdate(BaseModel):
    status: str

    @field_validator('status', mode='before')
    @classmethod
    def validate_status(cls, v):
        v = (v or '').strip().lower()
        if v not in CONTACT_STATUSES:
            raise ValueError(f"Status must be one of: {', '.join(sorted(CONTACT_STATUSES))}")
        return v


class ContactRead(ContactBase):
    id: str
    status: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
