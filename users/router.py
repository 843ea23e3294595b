from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from auth.service import require_admin
from database import get_db
from .models import UserCreate, UserUpdate, UserPublic
from . import service

router = APIRouter(prefix='/admin/users', tags=['users'])


@router.get('/', response_model=List[UserPublic])
def get_users(db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    """Get all users"""
    return service.get_all_users(db)


@router.post('/', response_model=UserPublic)
def create_user(user: UserCreate, db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    """Create new user"""
    return service.create_user(db, user)


@router.put('/{user_id}', response_model=UserPublic)
def update_user(
    user_id: str,
    user_update: UserUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """Update user, re-hashing the password when one is supplied"""
    updated = service.update_user(db, user_id, user_update)
    if not updated:
        raise HTTPException(status_code=404, detail="User not found")
    return updated


@router.delete('/{user_id}')
def delete_user(user_id: str, db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    """Delete user. Admins cannot delete their own account."""
    if user_id == current_user.get("sub"):
        raise HTTPException(status_code=400, detail="Cannot delete your own account")

    if not service.delete_user(db, user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return {"message": "User deleted successfully"}
