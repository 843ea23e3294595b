from typing import List, Optional

from sqlalchemy.orm import Session

from models.base import apply_changes
from models.team_member import TeamMember
from .models import TeamMemberCreate, TeamMemberUpdate


def get_team_members(db: Session, active_only: bool = False) -> List[TeamMember]:
    query = db.query(TeamMember)
    if active_only:
        query = query.filter(TeamMember.active.is_(True))
    return query.order_by(TeamMember.order, TeamMember.name).all()


def get_team_member(db: Session, member_id: str) -> Optional[TeamMember]:
    return db.query(TeamMember).filter(TeamMember.id == member_id).first()


def create_team_member(db: Session, member_in: TeamMemberCreate) -> TeamMember:
    member = TeamMember(**member_in.model_dump())
    db.add(member)
    db.commit()
    db.refresh(member)
    return member


def update_team_member(db: Session, member_id: str, member_in: TeamMemberUpdate) -> Optional[TeamMember]:
    member = get_team_member(db, member_id)
    if not member:
        return None

    apply_changes(member, member_in.model_dump(exclude_unset=True))

    db.commit()
    db.refresh(member)
    return member


def delete_team_member(db: Session, member_id: str) -> bool:
    member = get_team_member(db, member_id)
    if not member:
        return False

    db.delete(member)
    db.commit()
    return True
