from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from auth.service import require_admin
from database import get_db
from models.user import User
from .models import BlogPost, BlogPostCreate, BlogPostUpdate
from . import service

router = APIRouter(prefix='/blog', tags=['blog'])
admin_router = APIRouter(prefix='/admin/blog', tags=['blog'])


@router.get('/', response_model=List[BlogPost])
def get_published_posts(db: Session = Depends(get_db)):
    """Published posts only"""
    return service.get_all_posts(db, published_only=True)


@router.get('/{slug}', response_model=BlogPost)
def get_post(slug: str, db: Session = Depends(get_db)):
    post = service.get_post_by_slug(db, slug)
    if not post or not post.published:
        raise HTTPException(status_code=404, detail="Post not found")
    return post


@admin_router.get('/', response_model=List[BlogPost])
def get_posts(db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    return service.get_all_posts(db)


@admin_router.post('/', response_model=BlogPost)
def create_post(post: BlogPostCreate, db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    """Create a post authored by the current user"""
    author_id = current_user.get("sub")
    if not db.query(User.id).filter(User.id == author_id).first():
        author_id = None
    return service.create_post(db, post, author_id)


@admin_router.put('/{post_id}', response_model=BlogPost)
def update_post(
    post_id: str,
    post: BlogPostUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    updated = service.update_post(db, post_id, post)
    if not updated:
        raise HTTPException(status_code=404, detail="Blog post not found")
    return updated


@admin_router.delete('/{post_id}')
def delete_post(post_id: str, db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    if not service.delete_post(db, post_id):
        raise HTTPException(status_code=404, detail="Blog post not found")
    return {"message": "Blog post deleted successfully"}
