from sqlalchemy import Boolean, Column, Float, Integer, JSON, String, Text

from database import Base
from .base import id_column, created_at_column, updated_at_column


class Product(Base):
    __tablename__ = "products"

    id = id_column()
    name = Column(String, nullable=False)
    category = Column(String, nullable=False, index=True)  # drip_irrigation, sprinkler, filtration, ...
    model = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Float, nullable=False)
    currency = Column(String, nullable=False, default="KSH")
    images = Column(JSON, nullable=False, default=list)
    specifications = Column(JSON, nullable=False, default=dict)
    features = Column(JSON, nullable=False, default=list)
    applications = Column(JSON, nullable=False, default=list)
    in_stock = Column(Boolean, nullable=False, default=True)
    stock_quantity = Column(Integer, nullable=False, default=0)
    created_at = created_at_column()
    updated_at = updated_at_column()
