from sqlalchemy import Boolean, Column, Integer, String, Text

from database import Base
from .base import id_column, created_at_column, updated_at_column


class TeamMember(Base):
    __tablename__ = "team_members"

    id = id_column()
    name = Column(String, nullable=False)
    position = Column(String, nullable=False)
    bio = Column(Text, nullable=False)
    photo_url = Column(String, nullable=True)
    email = Column(String, nullable=True)
    linkedin = Column(String, nullable=True)
    order = Column(Integer, nullable=False, default=0)
    active = Column(Boolean, nullable=False, default=True)
    created_at = created_at_column()
    updated_at = updated_at_column()
