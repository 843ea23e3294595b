from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, func

from database import Base
from .base import id_column, created_at_column, updated_at_column


class Achievement(Base):
    __tablename__ = "achievements"

    id = id_column()
    name = Column(String, nullable=False)
    description = Column(String, nullable=False)
    icon = Column(String, nullable=False)
    category = Column(String, nullable=False)  # quotes, projects, engagement
    requirement = Column(Integer, nullable=False)
    points = Column(Integer, nullable=False, default=0)
    badge = Column(String, nullable=False, default="bronze")
    active = Column(Boolean, nullable=False, default=True)
    created_at = created_at_column()


class UserAchievement(Base):
    __tablename__ = "user_achievements"

    id = id_column()
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    achievement_id = Column(String(36), ForeignKey("achievements.id", ondelete="CASCADE"), nullable=False)
    progress = Column(Integer, nullable=False, default=100)
    unlocked_at = Column(DateTime, nullable=False, server_default=func.now())


class GamificationStats(Base):
    __tablename__ = "gamification_stats"

    id = id_column()
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
    total_points = Column(Integer, nullable=False, default=0)
    level = Column(Integer, nullable=False, default=1)
    quotes_created = Column(Integer, nullable=False, default=0)
    projects_completed = Column(Integer, nullable=False, default=0)
    achievements_unlocked = Column(Integer, nullable=False, default=0)
    last_active = Column(DateTime, nullable=False, server_default=func.now())
    created_at = created_at_column()
    updated_at = updated_at_column()
