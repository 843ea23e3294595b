from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Any, List, Literal, Optional
from datetime import datetime

# Allowed statuses. "sent" is kept as a settable label; the send action
# itself is recorded separately in sent_at.
ALLOWED_STATUSES = {
    'pending',
    'in_progress',
    'completed',
    'cancelled',
    'sent',
}

DELIVERY_METHODS = {'email', 'whatsapp', 'sms'}


def _normalize_status(v):
    if v is None:
        return None
    v = v.strip().lower()

    # Normalize "in progress" → "in_progress"
    if v == "in progress":
        v = "in_progress"

    if v not in ALLOWED_STATUSES:
        raise ValueError(f"Status must be one of: {', '.join(sorted(ALLOWED_STATUSES))}")
    return v


def _normalize_delivery_method(v):
    if v is None:
        return None
    v = v.strip().lower()
    if v not in DELIVERY_METHODS:
        raise ValueError(f"Delivery method must be one of: {', '.join(sorted(DELIVERY_METHODS))}")
    return v


# -----------------------------
# Quote Items
# -----------------------------
class QuoteItem(BaseModel):
    """
    One line of a quote. Stored in the quotes.items JSON column using the
    camelCase aliases (unitPrice). `total` is always recomputed from
    quantity * unit_price and never trusted from input.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    name: str = ''
    description: str = ''
    quantity: float = Field(default=1, gt=0, allow_inf_nan=False)
    unit: str = 'pcs'
    unit_price: float = Field(default=0, ge=0, allow_inf_nan=False, alias='unitPrice')
    total: float = 0.0


class QuoteTotals(BaseModel):
    subtotal: float = 0.0
    vat: float = 0.0
    final_total: float = 0.0


# -----------------------------
# Public quote request
# -----------------------------
class QuoteCreate(BaseModel):
    customer_name: str = Field(min_length=1)
    customer_email: EmailStr
    customer_phone: str = Field(min_length=1)
    customer_address: Optional[str] = None

    project_type: str = Field(min_length=1)
    area_size: str = Field(min_length=1)
    crop_type: Optional[str] = None
    location: str = Field(min_length=1)
    water_source: Optional[str] = None
    distance_to_farm: Optional[str] = None
    number_of_beds: Optional[int] = Field(default=None, ge=0)
    soil_type: Optional[str] = None
    budget_range: Optional[str] = None
    timeline: Optional[str] = None
    requirements: Optional[str] = None
    delivery_method: str = 'email'

    # Normalize empty strings → None
    @field_validator(
        'customer_address', 'crop_type', 'water_source', 'distance_to_farm',
        'soil_type', 'budget_range', 'timeline', 'requirements', mode='before'
    )
    @classmethod
    def empty_str_to_none(cls, v):
        if v == "":
            return None
        return v

    @field_validator('delivery_method', mode='before')
    @classmethod
    def validate_delivery_method(cls, v):
        return _normalize_delivery_method(v) or 'email'


# -----------------------------
# Admin update (partial)
# -----------------------------
class QuoteUpdate(BaseModel):
    customer_name: Optional[str] = Field(default=None, min_length=1)
    customer_email: Optional[EmailStr] = None
    customer_phone: Optional[str] = Field(default=None, min_length=1)
    customer_address: Optional[str] = None

    project_type: Optional[str] = Field(default=None, min_length=1)
    area_size: Optional[str] = Field(default=None, min_length=1)
    crop_type: Optional[str] = None
    location: Optional[str] = Field(default=None, min_length=1)
    water_source: Optional[str] = None
    distance_to_farm: Optional[str] = None
    number_of_beds: Optional[int] = Field(default=None, ge=0)
    soil_type: Optional[str] = None
    budget_range: Optional[str] = None
    timeline: Optional[str] = None
    requirements: Optional[str] = None

    status: Optional[str] = None
    notes: Optional[str] = None
    currency: Optional[str] = None
    assigned_to: Optional[str] = None
    delivery_method: Optional[str] = None

    items: Optional[List[QuoteItem]] = None

    # Empty string clears the assignee
    @field_validator('assigned_to', mode='before')
    @classmethod
    def empty_assignee_to_none(cls, v):
        if v == "":
            return None
        return v

    @field_validator('status', mode='before')
    @classmethod
    def validate_status(cls, v):
        return _normalize_status(v)

    @field_validator('delivery_method', mode='before')
    @classmethod
    def validate_delivery_method(cls, v):
        return _normalize_delivery_method(v)


class StatusUpdate(BaseModel):
    status: str

    @field_validator('status', mode='before')
    @classmethod
    def validate_status(cls, v):
        return _normalize_status(v)


# -----------------------------
# Line item editing
# -----------------------------
class ItemAdd(BaseModel):
    product_id: Optional[str] = None
    suggest: bool = False


class ItemFieldUpdate(BaseModel):
    field: Literal['name', 'description', 'quantity', 'unit', 'unit_price', 'unitPrice']
    value: Any


# -----------------------------
# FULL RESPONSE MODEL
# -----------------------------
class QuoteResponse(BaseModel):
    id: str

    customer_name: str
    customer_email: str
    customer_phone: str
    customer_address: Optional[str] = None

    project_type: str
    area_size: str
    crop_type: Optional[str] = None
    location: str
    water_source: Optional[str] = None
    distance_to_farm: Optional[str] = None
    number_of_beds: Optional[int] = None
    soil_type: Optional[str] = None
    budget_range: Optional[str] = None
    timeline: Optional[str] = None
    requirements: Optional[str] = None

    status: str
    items: List[QuoteItem] = []
    total_amount: float = 0.0
    vat_amount: float = 0.0
    final_total: float = 0.0
    currency: str = 'KSH'

    notes: Optional[str] = None
    assigned_to: Optional[str] = None
    sent_at: Optional[datetime] = None
    delivery_method: str = 'email'

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
