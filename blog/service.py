from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from models.base import apply_changes
from models.blog_post import BlogPost
from .models import BlogPostCreate, BlogPostUpdate


def _ensure_unique_slug(db: Session, slug: str, exclude_id: Optional[str] = None):
    query = db.query(BlogPost.id).filter(BlogPost.slug == slug)
    if exclude_id:
        query = query.filter(BlogPost.id != exclude_id)
    if query.first():
        raise HTTPException(status_code=400, detail="A post with this slug already exists")


def get_all_posts(db: Session, published_only: bool = False) -> List[BlogPost]:
    query = db.query(BlogPost)
    if published_only:
        query = query.filter(BlogPost.published.is_(True))
    return query.order_by(BlogPost.created_at.desc()).all()


def get_post_by_id(db: Session, post_id: str) -> Optional[BlogPost]:
    return db.query(BlogPost).filter(BlogPost.id == post_id).first()


def get_post_by_slug(db: Session, slug: str) -> Optional[BlogPost]:
    return db.query(BlogPost).filter(BlogPost.slug == slug).first()


def create_post(db: Session, post_in: BlogPostCreate, author_id: Optional[str]) -> BlogPost:
    _ensure_unique_slug(db, post_in.slug)

    post = BlogPost(**post_in.model_dump(), author_id=author_id)
    db.add(post)
    db.commit()
    db.refresh(post)
    return post


def update_post(db: Session, post_id: str, post_in: BlogPostUpdate) -> Optional[BlogPost]:
    post = get_post_by_id(db, post_id)
    if not post:
        return None

    changes = post_in.model_dump(exclude_unset=True)
    if changes.get("slug"):
        _ensure_unique_slug(db, changes["slug"], exclude_id=post_id)

    apply_changes(post, changes)

    db.commit()
    db.refresh(post)
    return post


def delete_post(db: Session, post_id: str) -> bool:
    post = get_post_by_id(db, post_id)
    if not post:
        return False

    db.delete(post)
    db.commit()
    return True
