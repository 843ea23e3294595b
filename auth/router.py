from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from database import get_db
from users import service as users_service
from users.models import UserPublic
from .service import (
    verify_password,
    create_access_token,
    get_current_user_from_bearer,
)

router = APIRouter(prefix="/auth", tags=["authentication"])

# ============================
# MODELS
# ============================

class LoginRequest(BaseModel):
    email: str
    password: str = Field(min_length=6)


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserPublic


# ============================
# LOGIN
# ============================

@router.post("/login", response_model=LoginResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    user = users_service.get_user_by_email(db, credentials.email)
    if not user:
        raise HTTPException(status_code=401, detail="Account not found")

    if not verify_password(credentials.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Incorrect password")

    access_token = create_access_token({
        "sub": user.id,
        "email": user.email,
        "role": user.role,
    })

    return LoginResponse(
        access_token=access_token,
        user=UserPublic.model_validate(user),
    )


# ============================
# AUTHENTICATED USER INFO
# ============================

@router.get("/me", response_model=UserPublic)
def get_current_user(
    user: dict = Depends(get_current_user_from_bearer),
    db: Session = Depends(get_db),
):
    db_user = users_service.get_user_by_id(db, user.get("sub"))
    if not db_user:
        raise HTTPException(status_code=404, detail="User not found")
    return db_user
