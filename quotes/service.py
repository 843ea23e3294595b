import logging
from typing import List, Optional, Tuple

from fastapi import HTTPException
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.product import Product
from models.base import apply_changes
from models.quote import Quote
from models.user import User
from .document import render_quote_document
from .models import QuoteCreate, QuoteItem, QuoteResponse, QuoteTotals, QuoteUpdate
from .pricing import (
    InvalidLineItem,
    LineItemNotFound,
    add_item,
    compute_totals,
    duplicate_item,
    normalize_items,
    remove_item,
    update_item_field,
)

logger = logging.getLogger(__name__)


# ============================================================
# HELPERS
# ============================================================

def load_items(quote: Quote) -> List[QuoteItem]:
    return [QuoteItem.model_validate(raw) for raw in (quote.items or [])]


def _apply_items(quote: Quote, items: List[QuoteItem]) -> QuoteTotals:
    """Write items and their derived totals onto the row together."""
    items = normalize_items(items)
    totals = compute_totals(items)
    quote.items = [item.model_dump(by_alias=True) for item in items]
    quote.total_amount = totals.subtotal
    quote.vat_amount = totals.vat
    quote.final_total = totals.final_total
    return totals


def _touch(quote: Quote) -> None:
    # Database clock, same as created_at
    quote.updated_at = func.now()


def _commit(db: Session, quote: Quote, action: str) -> Quote:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to %s quote %s", action, quote.id)
        raise HTTPException(status_code=500, detail=f"Failed to {action} quote")
    db.refresh(quote)
    return quote


def _line_item_error(exc: Exception) -> HTTPException:
    if isinstance(exc, LineItemNotFound):
        return HTTPException(status_code=404, detail=str(exc))
    return HTTPException(status_code=400, detail=str(exc))


# ============================================================
# CREATE QUOTE (PUBLIC REQUEST)
# ============================================================

def request_quote(db: Session, quote_in: QuoteCreate) -> Quote:
    """A customer's quote request: pending, no items, zero totals."""
    quote = Quote(**quote_in.model_dump(), status="pending")
    _apply_items(quote, [])

    db.add(quote)
    quote = _commit(db, quote, "create")
    logger.info("Quote %s requested by %s", quote.id, quote.customer_email)
    return quote


# ============================================================
# GET QUOTES
# ============================================================

def get_all_quotes(db: Session, status: Optional[str] = None) -> List[Quote]:
    query = db.query(Quote)
    if status:
        query = query.filter(Quote.status == status)
    return query.order_by(Quote.created_at.desc()).all()


def get_quote_by_id(db: Session, quote_id: str) -> Quote:
    quote = db.query(Quote).filter(Quote.id == quote_id).first()
    if not quote:
        raise HTTPException(status_code=404, detail="Quote not found")
    return quote


def get_quote_with_totals(db: Session, quote_id: str) -> Tuple[Quote, List[QuoteItem], QuoteTotals]:
    quote = get_quote_by_id(db, quote_id)
    items = load_items(quote)
    return quote, items, compute_totals(items)


# ============================================================
# UPDATE QUOTE
# ============================================================

def update_quote(db: Session, quote_id: str, quote_update: QuoteUpdate) -> Quote:
    """
    Partial update. When items are supplied they replace the whole list and
    the totals are recomputed in the same commit.
    """
    quote = get_quote_by_id(db, quote_id)

    update_dict = quote_update.model_dump(exclude_unset=True)
    update_dict.pop("items", None)

    if update_dict.get("assigned_to"):
        if not db.query(User.id).filter(User.id == update_dict["assigned_to"]).first():
            raise HTTPException(status_code=400, detail="Assigned user not found")

    apply_changes(quote, update_dict)

    if quote_update.items is not None:
        try:
            _apply_items(quote, quote_update.items)
        except InvalidLineItem as e:
            raise _line_item_error(e)

    _touch(quote)
    return _commit(db, quote, "update")


def update_quote_status(db: Session, quote_id: str, status: str) -> Quote:
    quote = get_quote_by_id(db, quote_id)
    quote.status = status
    _touch(quote)
    return _commit(db, quote, "update")


# ============================================================
# LINE ITEM EDITING
# ============================================================

def _edit_items(db: Session, quote_id: str, edit) -> Quote:
    quote = get_quote_by_id(db, quote_id)
    try:
        items = edit(load_items(quote))
        _apply_items(quote, items)
    except (InvalidLineItem, LineItemNotFound) as e:
        raise _line_item_error(e)
    _touch(quote)
    return _commit(db, quote, "update")


def add_quote_item(db: Session, quote_id: str, product_id: Optional[str] = None, suggest: bool = False) -> Quote:
    product = None
    if product_id:
        product = db.query(Product).filter(Product.id == product_id).first()
        if not product:
            raise HTTPException(status_code=404, detail="Product not found")
    return _edit_items(db, quote_id, lambda items: add_item(items, product=product, suggest=suggest))


def update_quote_item(db: Session, quote_id: str, item_id: str, field: str, value) -> Quote:
    return _edit_items(db, quote_id, lambda items: update_item_field(items, item_id, field, value))


def remove_quote_item(db: Session, quote_id: str, item_id: str) -> Quote:
    return _edit_items(db, quote_id, lambda items: remove_item(items, item_id))


def duplicate_quote_item(db: Session, quote_id: str, item_id: str) -> Quote:
    return _edit_items(db, quote_id, lambda items: duplicate_item(items, item_id))


# ============================================================
# DOCUMENT & SEND
# ============================================================

def render_document(db: Session, quote_id: str) -> str:
    quote, items, totals = get_quote_with_totals(db, quote_id)
    return render_quote_document(QuoteResponse.model_validate(quote), items, totals)


def send_quote(db: Session, quote_id: str, notifier) -> Quote:
    """
    Deliver the quotation to the customer and record sent_at. Delivery errors
    propagate before anything is written. Repeat sends are allowed and
    refresh sent_at; status is left as it is.
    """
    quote, items, totals = get_quote_with_totals(db, quote_id)
    snapshot = QuoteResponse.model_validate(quote)

    notifier.send_quote(snapshot, render_quote_document(snapshot, items, totals))

    quote.sent_at = func.now()
    _touch(quote)
    quote = _commit(db, quote, "send")
    logger.info("Quote %s sent to %s", quote.id, quote.customer_email)
    return quote


# ============================================================
# DELETE QUOTE
# ============================================================

def delete_quote(db: Session, quote_id: str) -> dict:
    quote = get_quote_by_id(db, quote_id)
    db.delete(quote)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to delete quote %s", quote_id)
        raise HTTPException(status_code=500, detail="Failed to delete quote")
    return {"message": "Quote deleted successfully"}
