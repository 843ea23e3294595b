from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from auth.service import require_admin
from database import get_db
from .models import TeamMember, TeamMemberCreate, TeamMemberUpdate
from . import service

router = APIRouter(prefix='/team', tags=['team'])
admin_router = APIRouter(prefix='/admin/team', tags=['team'])


@router.get('/', response_model=List[TeamMember])
def get_public_team(db: Session = Depends(get_db)):
    return service.get_team_members(db, active_only=True)


@admin_router.get('/', response_model=List[TeamMember])
def get_team(db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    return service.get_team_members(db)


@admin_router.post('/', response_model=TeamMember)
def create_team_member(
    member: TeamMemberCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    return service.create_team_member(db, member)


@admin_router.put('/{member_id}', response_model=TeamMember)
def update_team_member(
    member_id: str,
    member: TeamMemberUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    updated = service.update_team_member(db, member_id, member)
    if not updated:
        raise HTTPException(status_code=404, detail="Team member not found")
    return updated


@admin_router.delete('/{member_id}')
def delete_team_member(member_id: str, db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    if not service.delete_team_member(db, member_id):
        raise HTTPException(status_code=404, detail="Team member not found")
    return {"message": "Team member deleted successfully"}
