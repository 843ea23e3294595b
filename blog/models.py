import re

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime

SLUG_PATTERN = re.compile(r'^[a-z0-9]+(?:-[a-z0-9]+)*$')


def _validate_slug(v):
    if v is None:
        return v
    v = v.strip().lower()
    if not SLUG_PATTERN.match(v):
        raise ValueError("Slug may only contain lowercase letters, digits and single hyphens")
    return v


class BlogPostBase(BaseModel):
    title: str = Field(min_length=1)
    slug: str
    content: str = Field(min_length=1)
    excerpt: str
    category: str = 'General'
    tags: List[str] = []
    featured_image: Optional[str] = None
    published: bool = False

    @field_validator('slug', mode='before')
    @classmethod
    def validate_slug(cls, v):
        return _validate_slug(v)


class BlogPostCreate(BlogPostBase):
    pass


class BlogPostUpdate(BaseModel):
    title: Optional[str] = None
    slug: Optional[str] = None
    content: Optional[str] = None
    excerpt: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    featured_image: Optional[str] = None
    published: Optional[bool] = None

    @field_validator('slug', mode='before')
    @classmethod
    def validate_slug(cls, v):
        return _validate_slug(v)


class BlogPost(BlogPostBase):
    id: str
    author_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
