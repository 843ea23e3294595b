from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from fastapi.responses import HTMLResponse, StreamingResponse
from sqlalchemy.orm import Session
from typing import List, Optional

from auth.service import require_admin, require_admin_download
from database import get_db
from notifications import NotificationError, get_notifier
from pdf.builder_quote import create_quote_pdf
from .models import (
    ItemAdd,
    ItemFieldUpdate,
    QuoteCreate,
    QuoteResponse,
    QuoteUpdate,
    StatusUpdate,
)
from . import service

public_router = APIRouter(prefix='/quotes', tags=['quotes'])
router = APIRouter(prefix='/admin/quotes', tags=['quotes'])


# ============================================================
# PUBLIC
# ============================================================

@public_router.post('/', response_model=QuoteResponse, status_code=status.HTTP_201_CREATED)
def request_quote(
    quote: QuoteCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    notifier=Depends(get_notifier),
):
    """Submit a quote request. The acknowledgement is sent after the response."""
    created = QuoteResponse.model_validate(service.request_quote(db, quote))
    background_tasks.add_task(notifier.notify_quote_received, created)
    return created


# ============================================================
# ADMIN
# ============================================================

@router.get('/', response_model=List[QuoteResponse])
def get_quotes(
    status: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """Get all quotes, newest first"""
    return service.get_all_quotes(db, status)


@router.get('/{quote_id}', response_model=QuoteResponse)
def get_quote(quote_id: str, db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    """Get a single quote"""
    return service.get_quote_by_id(db, quote_id)


@router.put('/{quote_id}', response_model=QuoteResponse)
def update_quote(
    quote_id: str,
    quote_update: QuoteUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """Update a quote; totals are recomputed whenever items are supplied"""
    return service.update_quote(db, quote_id, quote_update)


@router.patch('/{quote_id}/status', response_model=QuoteResponse)
def update_quote_status(
    quote_id: str,
    status_update: StatusUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """Update quote status"""
    return service.update_quote_status(db, quote_id, status_update.status)


@router.delete('/{quote_id}')
def delete_quote(quote_id: str, db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    """Delete a quote"""
    return service.delete_quote(db, quote_id)


@router.post('/{quote_id}/send')
def send_quote(
    quote_id: str,
    db: Session = Depends(get_db),
    notifier=Depends(get_notifier),
    current_user: dict = Depends(require_admin)
):
    """Email the quotation to the customer"""
    try:
        quote = service.send_quote(db, quote_id, notifier)
    except NotificationError:
        raise HTTPException(status_code=502, detail="Failed to send quote")

    return {
        "message": "Quote sent successfully",
        "quote_id": quote.id,
        "sent_at": quote.sent_at,
    }


@router.get('/{quote_id}/document', response_class=HTMLResponse)
def get_quote_document(quote_id: str, db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    """Printable HTML quotation"""
    return HTMLResponse(service.render_document(db, quote_id))


@router.get('/{quote_id}/pdf')
def get_quote_pdf(quote_id: str, db: Session = Depends(get_db), current_user: dict = Depends(require_admin_download)):
    """Generate and stream a quote PDF"""
    quote, items, totals = service.get_quote_with_totals(db, quote_id)
    pdf_stream = create_quote_pdf(QuoteResponse.model_validate(quote), items, totals)

    return StreamingResponse(
        pdf_stream,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"inline; filename=quote_{quote_id}.pdf"
        }
    )


# ============================================================
# LINE ITEMS
# ============================================================

@router.post('/{quote_id}/items', response_model=QuoteResponse)
def add_quote_item(
    quote_id: str,
    item: ItemAdd,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """Append a blank, catalog-prefilled or suggested line"""
    return service.add_quote_item(db, quote_id, product_id=item.product_id, suggest=item.suggest)


@router.patch('/{quote_id}/items/{item_id}', response_model=QuoteResponse)
def update_quote_item(
    quote_id: str,
    item_id: str,
    change: ItemFieldUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    return service.update_quote_item(db, quote_id, item_id, change.field, change.value)


@router.delete('/{quote_id}/items/{item_id}', response_model=QuoteResponse)
def remove_quote_item(
    quote_id: str,
    item_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    return service.remove_quote_item(db, quote_id, item_id)


@router.post('/{quote_id}/items/{item_id}/duplicate', response_model=QuoteResponse)
def duplicate_quote_item(
    quote_id: str,
    item_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    return service.duplicate_quote_item(db, quote_id, item_id)
