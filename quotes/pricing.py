"""
Quote pricing engine.

Pure functions over QuoteItem lists. Every operation that changes the items
returns a new list; callers recompute totals with compute_totals() before
persisting. Values are kept unrounded; rounding happens only when rendering.
"""
import math
import random
import secrets
import string
from typing import Any, List, Optional

from .models import QuoteItem, QuoteTotals

# Fixed VAT rate (16%), not configurable
VAT_RATE = 0.16

ID_ALPHABET = string.ascii_lowercase + string.digits
ID_LENGTH = 9

EDITABLE_FIELDS = {'name', 'description', 'quantity', 'unit', 'unit_price'}

# Materials offered when an admin asks for a suggested line
SUGGESTED_MATERIALS = [
    {"name": "Pressure Compensating Dripper", "description": "Flow rate 2-4 L/h, anti-drain",
     "unit": "pcs", "unit_price": 25.0},
    {"name": "16mm Drip Lateral Pipe", "description": "LDPE drip line, 30cm emitter spacing",
     "unit": "meters", "unit_price": 45.0},
    {"name": "Micro Sprinkler System", "description": "3-5m coverage radius, adjustable spray",
     "unit": "pcs", "unit_price": 150.0},
    {"name": "Filtration System", "description": "1000 L/h multi-stage filter with backwash",
     "unit": "pcs", "unit_price": 300.0},
    {"name": "Timer Control System", "description": "Programmable irrigation controller",
     "unit": "pcs", "unit_price": 200.0},
    {"name": "Installation & Commissioning", "description": "System setup, testing and training",
     "unit": "service", "unit_price": 15000.0},
]


class InvalidLineItem(ValueError):
    """A line item value that cannot be priced."""


class LineItemNotFound(LookupError):
    """No line item with the requested id."""


# ============================================================
# NUMBERS
# ============================================================

def _to_number(value: Any, field: str) -> float:
    if isinstance(value, bool) or value is None:
        raise InvalidLineItem(f"{field} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidLineItem(f"{field} must be a number")
    if not math.isfinite(number):
        raise InvalidLineItem(f"{field} must be finite")
    return number


def parse_quantity(value: Any) -> float:
    quantity = _to_number(value, "quantity")
    if quantity <= 0:
        raise InvalidLineItem("quantity must be greater than 0")
    return quantity


def parse_unit_price(value: Any) -> float:
    unit_price = _to_number(value, "unit_price")
    if unit_price < 0:
        raise InvalidLineItem("unit_price must not be negative")
    return unit_price


def compute_item_total(quantity: Any, unit_price: Any) -> float:
    return parse_quantity(quantity) * parse_unit_price(unit_price)


def compute_totals(items: List[QuoteItem]) -> QuoteTotals:
    subtotal = sum(item.total for item in items)
    vat = subtotal * VAT_RATE
    return QuoteTotals(subtotal=subtotal, vat=vat, final_total=subtotal + vat)


# ============================================================
# ITEMS
# ============================================================

def new_item_id() -> str:
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(ID_LENGTH))


def normalize_items(items: List[QuoteItem]) -> List[QuoteItem]:
    """Recompute every total and give id-less (or clashing) items a fresh id."""
    seen = set()
    normalized = []
    for item in items:
        item_id = item.id
        if not item_id or item_id in seen:
            item_id = new_item_id()
        seen.add(item_id)
        normalized.append(item.model_copy(update={
            "id": item_id,
            "total": compute_item_total(item.quantity, item.unit_price),
        }))
    return normalized


def _find_index(items: List[QuoteItem], item_id: str) -> int:
    for index, item in enumerate(items):
        if item.id == item_id:
            return index
    raise LineItemNotFound(f"Item {item_id} not found")


def add_item(
    items: List[QuoteItem],
    product: Optional[Any] = None,
    suggest: bool = False,
    rng: Optional[random.Random] = None,
) -> List[QuoteItem]:
    """
    Append a line. A catalog product prefills name/description/price with
    quantity 1; suggest=True picks a random entry from SUGGESTED_MATERIALS;
    otherwise a blank editable line is added.
    """
    if product is not None:
        unit_price = parse_unit_price(product.price)
        item = QuoteItem(
            id=new_item_id(),
            name=product.name,
            description=product.description or '',
            quantity=1,
            unit='pcs',
            unit_price=unit_price,
            total=unit_price,
        )
    elif suggest:
        material = (rng or random).choice(SUGGESTED_MATERIALS)
        item = QuoteItem(
            id=new_item_id(),
            name=material["name"],
            description=material["description"],
            quantity=1,
            unit=material["unit"],
            unit_price=material["unit_price"],
            total=material["unit_price"],
        )
    else:
        item = QuoteItem(id=new_item_id())

    return list(items) + [item]


def update_item_field(items: List[QuoteItem], item_id: str, field: str, value: Any) -> List[QuoteItem]:
    if field == 'unitPrice':
        field = 'unit_price'
    if field not in EDITABLE_FIELDS:
        raise InvalidLineItem(f"{field} is not an editable item field")

    index = _find_index(items, item_id)
    item = items[index]

    if field == 'quantity':
        changes = {"quantity": parse_quantity(value)}
    elif field == 'unit_price':
        changes = {"unit_price": parse_unit_price(value)}
    else:
        changes = {field: '' if value is None else str(value)}

    updated = item.model_copy(update=changes)
    updated = updated.model_copy(update={
        "total": compute_item_total(updated.quantity, updated.unit_price)
    })

    result = list(items)
    result[index] = updated
    return result


def remove_item(items: List[QuoteItem], item_id: str) -> List[QuoteItem]:
    _find_index(items, item_id)
    if len(items) <= 1:
        raise InvalidLineItem("A quote must keep at least one line item")
    return [item for item in items if item.id != item_id]


def duplicate_item(items: List[QuoteItem], item_id: str) -> List[QuoteItem]:
    original = items[_find_index(items, item_id)]
    existing = {item.id for item in items}

    copy_id = new_item_id()
    while copy_id in existing:
        copy_id = new_item_id()

    return list(items) + [original.model_copy(update={"id": copy_id})]
