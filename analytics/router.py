from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session
from typing import List

from auth.service import require_admin
from database import get_db
from models.user import User
from .models import (
    Achievement,
    AnalyticsSummary,
    GamificationStats,
    PageViewCreate,
    UnlockedAchievement,
)
from . import gamification, service

router = APIRouter(prefix='/track', tags=['analytics'])
admin_router = APIRouter(prefix='/admin', tags=['analytics'])


@router.post('/pageview')
def track_page_view(view: PageViewCreate, request: Request, db: Session = Depends(get_db)):
    service.track_page_view(
        db,
        page=view.page,
        session_id=view.session_id,
        user_agent=request.headers.get("user-agent"),
        ip_address=request.client.host if request.client else None,
        referrer=view.referrer,
    )
    return {"success": True}


@admin_router.get('/analytics', response_model=AnalyticsSummary)
def get_analytics(db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    """Dashboard counters and visitor trend"""
    return service.get_analytics(db)


# ============================================================
# GAMIFICATION
# ============================================================

def _current_user_id(db: Session, current_user: dict) -> str:
    user_id = current_user.get("sub")
    if not db.query(User.id).filter(User.id == user_id).first():
        raise HTTPException(status_code=404, detail="User not found")
    return user_id


@admin_router.get('/gamification/stats', response_model=GamificationStats)
def get_stats(db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    return gamification.update_stats(db, _current_user_id(db, current_user))


@admin_router.get('/gamification/achievements', response_model=List[UnlockedAchievement])
def get_my_achievements(db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    return gamification.get_user_achievements(db, _current_user_id(db, current_user))


@admin_router.post('/gamification/check', response_model=List[Achievement])
def check_milestones(db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    """Unlock any milestones the current totals have reached"""
    return gamification.check_and_unlock_milestones(db, _current_user_id(db, current_user))
