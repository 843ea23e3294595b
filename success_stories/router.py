from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from auth.service import require_admin
from database import get_db
from .models import SuccessStory, SuccessStoryCreate, SuccessStoryUpdate
from . import service

router = APIRouter(prefix='/success-stories', tags=['success stories'])
admin_router = APIRouter(prefix='/admin/success-stories', tags=['success stories'])


@router.get('/', response_model=List[SuccessStory])
def get_public_stories(db: Session = Depends(get_db)):
    """Active stories only"""
    return service.get_success_stories(db, active_only=True)


@admin_router.get('/', response_model=List[SuccessStory])
def get_stories(db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    return service.get_success_stories(db)


@admin_router.post('/', response_model=SuccessStory)
def create_story(
    story: SuccessStoryCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    return service.create_success_story(db, story)


@admin_router.put('/{story_id}', response_model=SuccessStory)
def update_story(
    story_id: str,
    story: SuccessStoryUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    updated = service.update_success_story(db, story_id, story)
    if not updated:
        raise HTTPException(status_code=404, detail="Success story not found")
    return updated


@admin_router.delete('/{story_id}')
def delete_story(story_id: str, db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    if not service.delete_success_story(db, story_id):
        raise HTTPException(status_code=404, detail="Success story not found")
    return {"message": "Success story deleted successfully"}
