from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from models.base import apply_changes
from models.project import Project
from .models import ProjectCreate, ProjectUpdate


def _check_dates(start_date, end_date):
    if start_date and end_date and end_date < start_date:
        raise HTTPException(status_code=400, detail="End date must be after start date")


def get_all_projects(db: Session, status: Optional[str] = None) -> List[Project]:
    query = db.query(Project)
    if status:
        query = query.filter(Project.status == status)
    return query.order_by(Project.created_at.desc()).all()


def get_project_by_id(db: Session, project_id: str) -> Optional[Project]:
    return db.query(Project).filter(Project.id == project_id).first()


def create_project(db: Session, project_in: ProjectCreate) -> Project:
    _check_dates(project_in.start_date, project_in.end_date)

    project = Project(**project_in.model_dump())
    db.add(project)
    db.commit()
    db.refresh(project)
    return project


def update_project(db: Session, project_id: str, project_in: ProjectUpdate) -> Optional[Project]:
    project = get_project_by_id(db, project_id)
    if not project:
        return None

    changes = project_in.model_dump(exclude_unset=True)
    _check_dates(changes.get("start_date", project.start_date), changes.get("end_date", project.end_date))

    apply_changes(project, changes)

    db.commit()
    db.refresh(project)
    return project


def delete_project(db: Session, project_id: str) -> bool:
    project = get_project_by_id(db, project_id)
    if not project:
        return False

    db.delete(project)
    db.commit()
    return True
