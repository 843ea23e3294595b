from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from auth.service import get_password_hash
from models.user import User
from .models import UserCreate, UserUpdate


def get_all_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.created_at.desc()).all()


def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email.lower()).first()


def create_user(db: Session, user_in: UserCreate) -> User:
    if get_user_by_email(db, user_in.email):
        raise HTTPException(status_code=400, detail="User with this email already exists")

    user = User(
        email=user_in.email.lower(),
        password_hash=get_password_hash(user_in.password),
        name=user_in.name,
        role=user_in.role,
        phone=user_in.phone,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update_user(db: Session, user_id: str, user_in: UserUpdate) -> Optional[User]:
    user = get_user_by_id(db, user_id)
    if not user:
        return None

    changes = user_in.model_dump(exclude_unset=True)

    password = changes.pop("password", None)
    if password:
        user.password_hash = get_password_hash(password)

    email = changes.pop("email", None)
    if email and email.lower() != user.email:
        if get_user_by_email(db, email):
            raise HTTPException(status_code=400, detail="User with this email already exists")
        user.email = email.lower()

    for key, value in changes.items():
        if value is not None:
            setattr(user, key, value)

    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: str) -> bool:
    user = get_user_by_id(db, user_id)
    if not user:
        return False

    db.delete(user)
    db.commit()
    return True


def ensure_admin_user(db: Session, email: str, password: str, name: str = "Administrator") -> Optional[User]:
    """Create the bootstrap admin account if no user has this email yet."""
    if get_user_by_email(db, email):
        return None

    user = User(
        email=email.lower(),
        password_hash=get_password_hash(password),
        name=name,
        role="super_admin",
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
