from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from auth.service import require_admin
from database import get_db
from .models import Project, ProjectCreate, ProjectUpdate
from . import service

router = APIRouter(prefix='/projects', tags=['projects'])
admin_router = APIRouter(prefix='/admin/projects', tags=['projects'])


@router.get('/', response_model=List[Project])
def get_public_projects(db: Session = Depends(get_db)):
    """Completed projects only"""
    return service.get_all_projects(db, status="completed")


@admin_router.get('/', response_model=List[Project])
def get_projects(db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    return service.get_all_projects(db)


@admin_router.post('/', response_model=Project)
def create_project(project: ProjectCreate, db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    return service.create_project(db, project)


@admin_router.put('/{project_id}', response_model=Project)
def update_project(
    project_id: str,
    project: ProjectUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    updated = service.update_project(db, project_id, project)
    if not updated:
        raise HTTPException(status_code=404, detail="Project not found")
    return updated


@admin_router.delete('/{project_id}')
def delete_project(project_id: str, db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    if not service.delete_project(db, project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    return {"message": "Project deleted successfully"}
