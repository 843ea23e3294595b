from sqlalchemy import Column, String

from database import Base
from .base import id_column, created_at_column, updated_at_column


class User(Base):
    __tablename__ = "users"

    id = id_column()
    email = Column(String, nullable=False, unique=True, index=True)
    password_hash = Column(String, nullable=False)
    name = Column(String, nullable=False)
    role = Column(String, nullable=False, default="user")  # user, admin, super_admin
    phone = Column(String, nullable=True)
    created_at = created_at_column()
    updated_at = updated_at_column()
