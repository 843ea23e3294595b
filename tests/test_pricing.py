"""Unit tests for the quote pricing engine."""

import math
import random
from types import SimpleNamespace

import pytest

from quotes.models import QuoteItem
from quotes.pricing import (
    ID_LENGTH,
    SUGGESTED_MATERIALS,
    VAT_RATE,
    InvalidLineItem,
    LineItemNotFound,
    add_item,
    compute_item_total,
    compute_totals,
    duplicate_item,
    new_item_id,
    normalize_items,
    remove_item,
    update_item_field,
)


def _item(item_id, quantity, unit_price):
    return QuoteItem(
        id=item_id,
        name=f"Item {item_id}",
        quantity=quantity,
        unit_price=unit_price,
        total=quantity * unit_price,
    )


@pytest.fixture
def items():
    return normalize_items([_item("a", 10, 150), _item("b", 5, 100)])


# ─────────────────────────────── Totals ──────────────────────────────────────


def test_totals_for_two_lines(items):
    totals = compute_totals(items)
    assert totals.subtotal == 2000
    assert math.isclose(totals.vat, 320)
    assert math.isclose(totals.final_total, 2320)


def test_totals_are_consistent_with_vat_rate(items):
    totals = compute_totals(items)
    assert math.isclose(totals.subtotal, sum(item.total for item in items))
    assert math.isclose(totals.vat, totals.subtotal * VAT_RATE)
    assert math.isclose(totals.final_total, totals.subtotal + totals.vat)


def test_empty_items_have_zero_totals():
    totals = compute_totals([])
    assert (totals.subtotal, totals.vat, totals.final_total) == (0, 0, 0)


def test_item_total_is_quantity_times_price():
    assert compute_item_total(3, 2.5) == 7.5
    assert compute_item_total("4", "10") == 40


@pytest.mark.parametrize("quantity, unit_price", [
    (0, 10),
    (-1, 10),
    (1, -5),
    ("abc", 10),
    (1, None),
    (float("nan"), 1),
    (1, float("inf")),
    (True, 1),
])
def test_invalid_numbers_are_rejected(quantity, unit_price):
    with pytest.raises(InvalidLineItem):
        compute_item_total(quantity, unit_price)


def test_normalize_recomputes_stale_totals():
    stale = QuoteItem(id="x", name="Pipe", quantity=2, unit_price=45, total=999)
    [fixed] = normalize_items([stale])
    assert fixed.total == 90


def test_normalize_assigns_missing_and_duplicate_ids():
    result = normalize_items([
        QuoteItem(name="one", quantity=1, unit_price=1),
        QuoteItem(id="dup", name="two", quantity=1, unit_price=1),
        QuoteItem(id="dup", name="three", quantity=1, unit_price=1),
    ])
    ids = [item.id for item in result]
    assert all(ids)
    assert len(set(ids)) == 3
    assert ids[1] == "dup"


def test_new_item_id_shape():
    item_id = new_item_id()
    assert len(item_id) == ID_LENGTH
    assert item_id.isalnum() and item_id == item_id.lower()


# ─────────────────────────────── Editing ─────────────────────────────────────


def test_update_quantity_recomputes_total(items):
    result = update_item_field(items, "a", "quantity", "12")
    edited = next(item for item in result if item.id == "a")
    assert edited.quantity == 12
    assert edited.total == 1800
    assert compute_totals(result).subtotal == 2300


def test_update_unit_price_accepts_camel_case(items):
    result = update_item_field(items, "b", "unitPrice", 120)
    edited = next(item for item in result if item.id == "b")
    assert edited.unit_price == 120
    assert edited.total == 600


def test_update_text_field_keeps_total(items):
    result = update_item_field(items, "a", "name", "Micro Sprinkler")
    edited = next(item for item in result if item.id == "a")
    assert edited.name == "Micro Sprinkler"
    assert edited.total == 1500


def test_update_leaves_input_untouched(items):
    update_item_field(items, "a", "quantity", 1)
    assert items[0].quantity == 10


def test_update_rejects_bad_quantity(items):
    with pytest.raises(InvalidLineItem):
        update_item_field(items, "a", "quantity", "lots")


def test_update_rejects_unknown_field(items):
    with pytest.raises(InvalidLineItem):
        update_item_field(items, "a", "total", 5)


def test_update_unknown_item(items):
    with pytest.raises(LineItemNotFound):
        update_item_field(items, "missing", "quantity", 1)


def test_add_blank_item(items):
    result = add_item(items)
    assert len(result) == 3
    blank = result[-1]
    assert blank.quantity == 1
    assert blank.unit_price == 0
    assert blank.id not in {"a", "b"}


def test_add_item_from_product():
    product = SimpleNamespace(name="Drip Kit", description="Starter kit", price=4500)
    [item] = add_item([], product=product)
    assert item.name == "Drip Kit"
    assert item.description == "Starter kit"
    assert item.quantity == 1
    assert item.unit_price == 4500
    assert item.total == 4500


def test_add_suggested_item_uses_material_list():
    rng = random.Random(7)
    expected = random.Random(7).choice(SUGGESTED_MATERIALS)
    [item] = add_item([], suggest=True, rng=rng)
    assert item.name == expected["name"]
    assert item.unit == expected["unit"]
    assert item.total == expected["unit_price"]


def test_remove_item(items):
    result = remove_item(items, "a")
    assert [item.id for item in result] == ["b"]
    assert compute_totals(result).subtotal == 500


def test_remove_last_item_is_refused(items):
    single = remove_item(items, "a")
    with pytest.raises(InvalidLineItem):
        remove_item(single, "b")


def test_duplicate_item_gets_new_id(items):
    result = duplicate_item(items, "b")
    assert len(result) == 3
    copy = result[-1]
    assert copy.id not in {"a", "b"}
    assert (copy.name, copy.quantity, copy.unit_price, copy.total) == ("Item b", 5, 100, 500)
    assert compute_totals(result).subtotal == 2500


def test_pricing_example_from_mixed_lines():
    lines = normalize_items([
        QuoteItem(quantity=2, unit_price=500),
        QuoteItem(quantity=1, unit_price=1000),
    ])
    totals = compute_totals(lines)
    assert totals.subtotal == 2000
    assert totals.vat == pytest.approx(320)
    assert totals.final_total == pytest.approx(2320)
    assert totals.final_total == pytest.approx(totals.subtotal * (1 + VAT_RATE))
