from __future__ import annotations

from datetime import date
from decimal import Decimal

from xeroxml import Contact, Invoice, LineItem


def _invoice(*line_items: LineItem) -> Invoice:
    return Invoice(
        invoice_number="INV-001",
        date=date(2024, 1, 5),
        contact=Contact(name="ABC Limited"),
        line_items=list(line_items),
    )


def test_totals_use_exact_decimal_arithmetic():
    invoice = _invoice(
        *(LineItem(description="Pen", unit_amount=0.1, tax_amount=Decimal("0.01")) for _ in range(3))
    )

    assert invoice.sub_total == Decimal("0.3")
    assert invoice.total_tax == Decimal("0.03")
    assert invoice.total == Decimal("0.33")
    assert invoice.total == invoice.sub_total + invoice.total_tax


def test_sub_total_multiplies_quantity_by_unit_amount():
    invoice = _invoice(
        LineItem(description="Widgets", quantity=Decimal("3"), unit_amount=Decimal("19.99")),
        LineItem(description="Setup", unit_amount=Decimal("50"), tax_amount=Decimal("7.50")),
    )

    assert invoice.sub_total == Decimal("109.97")
    assert invoice.total_tax == Decimal("7.50")
    assert invoice.total == Decimal("117.47")


def test_empty_invoice_totals_are_zero():
    invoice = _invoice()

    assert invoice.sub_total == Decimal("0")
    assert invoice.total_tax == Decimal("0")
    assert invoice.total == Decimal("0")


def test_totals_follow_line_item_changes():
    invoice = _invoice(LineItem(description="Widgets", unit_amount=Decimal("10")))
    assert invoice.total == Decimal("10")

    invoice.add_line_item({"description": "More", "unit_amount": Decimal("5")})
    invoice.line_items[0].quantity = Decimal("2")

    assert invoice.sub_total == Decimal("25")


def test_legacy_total_setters_are_ignored():
    invoice = _invoice(LineItem(description="Widgets", unit_amount=Decimal("10")))

    invoice.sub_total = Decimal("999")
    invoice.total_tax = Decimal("999")
    invoice.total = Decimal("999")

    assert invoice.sub_total == Decimal("10")
    assert invoice.total_tax == Decimal("0")
    assert invoice.total == Decimal("10")
