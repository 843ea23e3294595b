import uuid

from sqlalchemy import Column, DateTime, String, func


def generate_uuid() -> str:
    return str(uuid.uuid4())


def id_column():
    return Column(String(36), primary_key=True, default=generate_uuid)


def created_at_column():
    return Column(DateTime, server_default=func.now(), nullable=False)


def updated_at_column():
    return Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)


def apply_changes(instance, changes: dict) -> None:
    """Copy a partial update onto a row. Nulls aimed at NOT NULL columns are ignored."""
    columns = instance.__table__.columns
    for key, value in changes.items():
        if value is None and key in columns and not columns[key].nullable:
            continue
        setattr(instance, key, value)
