from sqlalchemy import Column, String, Text

from database import Base
from .base import id_column, created_at_column


class Contact(Base):
    __tablename__ = "contacts"

    id = id_column()
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    subject = Column(String, nullable=False)
    message = Column(Text, nullable=False)
    status = Column(String, nullable=False, default="new")  # new, replied, closed
    created_at = created_at_column()
