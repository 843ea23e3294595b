from datetime import datetime

from sqlalchemy import Column, DateTime, String

from database import Base
from .base import id_column


class PageView(Base):
    __tablename__ = "page_views"

    id = id_column()
    page = Column(String, nullable=False)
    user_agent = Column(String, nullable=True)
    ip_address = Column(String, nullable=True)
    session_id = Column(String, nullable=False, index=True)
    referrer = Column(String, nullable=True)
    timestamp = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
