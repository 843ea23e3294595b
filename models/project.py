from sqlalchemy import Column, DateTime, Float, ForeignKey, JSON, String, Text

from database import Base
from .base import id_column, created_at_column, updated_at_column


class Project(Base):
    __tablename__ = "projects"

    id = id_column()
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String, nullable=False)
    project_type = Column(String, nullable=False)
    area_size = Column(String, nullable=False)
    value = Column(Float, nullable=False)
    currency = Column(String, nullable=False, default="KSH")
    status = Column(String, nullable=False, default="planning")  # planning, in_progress, completed, on_hold
    start_date = Column(DateTime, nullable=True)
    end_date = Column(DateTime, nullable=True)
    images = Column(JSON, nullable=False, default=list)
    results = Column(JSON, nullable=True)
    client_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = created_at_column()
    updated_at = updated_at_column()
