from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import datetime


class ProductBase(BaseModel):
    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    model: str
    description: str
    price: float = Field(ge=0)
    currency: str = 'KSH'
    images: List[str] = []
    specifications: Dict[str, Any] = {}
    features: List[str] = []
    applications: List[str] = []
    in_stock: bool = True
    stock_quantity: int = Field(default=0, ge=0)


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    model: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    currency: Optional[str] = None
    images: Optional[List[str]] = None
    specifications: Optional[Dict[str, Any]] = None
    features: Optional[List[str]] = None
    applications: Optional[List[str]] = None
    in_stock: Optional[bool] = None
    stock_quantity: Optional[int] = Field(default=None, ge=0)


class Product(ProductBase):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
