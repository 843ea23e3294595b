from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from datetime import datetime


class PageViewCreate(BaseModel):
    page: str = Field(min_length=1)
    session_id: str = Field(min_length=1)
    referrer: Optional[str] = None


class AnalyticsSummary(BaseModel):
    total_products: int
    total_quotes: int
    total_projects: int
    quotes_by_status: Dict[str, int]
    quoted_value: float
    unique_visitors_today: int
    visitor_growth: int
    recent_activity: List[dict] = []


class Achievement(BaseModel):
    id: str
    name: str
    description: str
    icon: str
    category: str
    requirement: int
    points: int
    badge: str

    class Config:
        from_attributes = True


class UnlockedAchievement(BaseModel):
    id: str
    achievement_id: str
    name: str
    description: str
    icon: str
    points: int
    badge: str
    progress: int
    unlocked_at: datetime


class GamificationStats(BaseModel):
    user_id: str
    total_points: int
    level: int
    quotes_created: int
    projects_completed: int
    achievements_unlocked: int
    last_active: Optional[datetime] = None

    class Config:
        from_attributes = True
