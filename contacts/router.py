from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from auth.service import require_admin
from database import get_db
from contacts.schemas import ContactCreate, ContactRead, ContactStatusUpdate
from .service import (
    create_contact,
    get_contacts,
    update_contact_status,
)

router = APIRouter(prefix="/contact", tags=["Contacts"])
admin_router = APIRouter(prefix="/admin/contacts", tags=["Contacts"])


@router.post("/", response_model=ContactRead, status_code=status.HTTP_201_CREATED)
def create_contact_endpoint(contact_in: ContactCreate, db: Session = Depends(get_db)):
    return create_contact(db, contact_in)


@admin_router.get("/", response_model=list[ContactRead])
def list_contacts(db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    return get_contacts(db)


@admin_router.patch("/{contact_id}/status", response_model=ContactRead)
def update_contact_status_endpoint(
    contact_id: str,
    status_in: ContactStatusUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin),
):
    updated = update_contact_status(db, contact_id, status_in.status)
    if not updated:
        raise HTTPException(status_code=404, detail="Contact not found")
    return updated
