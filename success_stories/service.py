from typing import List, Optional

from sqlalchemy.orm import Session

from models.base import apply_changes
from models.success_story import SuccessStory
from .models import SuccessStoryCreate, SuccessStoryUpdate


def get_success_stories(db: Session, active_only: bool = False) -> List[SuccessStory]:
    query = db.query(SuccessStory)
    if active_only:
        query = query.filter(SuccessStory.active.is_(True))
    # Featured stories first
    return query.order_by(SuccessStory.featured.desc(), SuccessStory.created_at.desc()).all()


def get_success_story(db: Session, story_id: str) -> Optional[SuccessStory]:
    return db.query(SuccessStory).filter(SuccessStory.id == story_id).first()


def create_success_story(db: Session, story_in: SuccessStoryCreate) -> SuccessStory:
    story = SuccessStory(**story_in.model_dump())
    db.add(story)
    db.commit()
    db.refresh(story)
    return story


def update_success_story(db: Session, story_id: str, story_in: SuccessStoryUpdate) -> Optional[SuccessStory]:
    story = get_success_story(db, story_id)
    if not story:
        return None

    apply_changes(story, story_in.model_dump(exclude_unset=True))

    db.commit()
    db.refresh(story)
    return story


def delete_success_story(db: Session, story_id: str) -> bool:
    story = get_success_story(db, story_id)
    if not story:
        return False

    db.delete(story)
    db.commit()
    return True
