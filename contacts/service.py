from sqlalchemy.orm import Session
from models.contact import Contact
from contacts.schemas import ContactCreate


def create_contact(db: Session, contact_in: ContactCreate):
    contact = Contact(**contact_in.model_dump())
    db.add(contact)
    db.commit()
    db.refresh(contact)
    return contact


def get_contacts(db: Session):
    return (
        db.query(Contact)
        .order_by(Contact.created_at.desc())
        .all()
    )


def update_contact_status(db: Session, contact_id: str, status: str):
    contact = db.query(Contact).filter(Contact.id == contact_id).first()
    if not contact:
        return None

    contact.status = status

    db.commit()
    db.refresh(contact)
    return contact
