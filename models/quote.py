from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, JSON, String, Text

from database import Base
from .base import id_column, created_at_column, updated_at_column


class Quote(Base):
    __tablename__ = "quotes"

    id = id_column()

    customer_name = Column(String, nullable=False)
    customer_email = Column(String, nullable=False)
    customer_phone = Column(String, nullable=False)
    customer_address = Column(Text, nullable=True)

    project_type = Column(String, nullable=False)
    area_size = Column(String, nullable=False)
    crop_type = Column(String, nullable=True)
    location = Column(String, nullable=False)
    water_source = Column(String, nullable=True)
    distance_to_farm = Column(String, nullable=True)
    number_of_beds = Column(Integer, nullable=True)
    soil_type = Column(String, nullable=True)
    budget_range = Column(String, nullable=True)
    timeline = Column(String, nullable=True)
    requirements = Column(Text, nullable=True)

    status = Column(String, nullable=False, default="pending", index=True)

    # Line items as a JSON document; totals are denormalized copies of
    # compute_totals(items) and rewritten together with the items.
    items = Column(JSON, nullable=False, default=list)
    total_amount = Column(Float, nullable=False, default=0.0)
    vat_amount = Column(Float, nullable=False, default=0.0)
    final_total = Column(Float, nullable=False, default=0.0)
    currency = Column(String, nullable=False, default="KSH")

    notes = Column(Text, nullable=True)
    assigned_to = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    sent_at = Column(DateTime, nullable=True)
    delivery_method = Column(String, nullable=False, default="email")  # email, whatsapp, sms

    created_at = created_at_column()
    updated_at = updated_at_column()
