"""Payments applied against an invoice."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from lxml import etree

from .utils import (
    add_text,
    format_date_time,
    format_money,
    iter_children,
    optional_text,
    parse_date,
    parse_decimal,
)


@dataclass
class Payment:
    """Payment received for (or made against) an invoice."""

    payment_id: str | None = None
    date: date | None = None
    amount: Decimal | None = None
    reference: str | None = None
    currency_rate: Decimal | None = None

    def to_xml(self, parent: etree._Element | None = None) -> etree._Element:
        if parent is None:
            element = etree.Element("Payment")
        else:
            element = etree.SubElement(parent, "Payment")
        if self.payment_id is not None:
            add_text(element, "PaymentID", self.payment_id)
        if self.date is not None:
            add_text(element, "Date", format_date_time(self.date))
        if self.amount is not None:
            add_text(element, "Amount", format_money(self.amount))
        if self.reference is not None:
            add_text(element, "Reference", self.reference)
        if self.currency_rate is not None:
            add_text(element, "CurrencyRate", format(self.currency_rate, "f"))
        return element

    @classmethod
    def from_xml(cls, element: etree._Element) -> "Payment":
        payment = cls()
        for name, child in iter_children(element):
            text = optional_text(child)
            if text is None:
                continue
            if name == "PaymentID":
                payment.payment_id = text
            elif name == "Date":
                payment.date = parse_date(text)
            elif name == "Amount":
                payment.amount = parse_decimal(text)
            elif name == "Reference":
                payment.reference = text
            elif name == "CurrencyRate":
                payment.currency_rate = parse_decimal(text)
        return payment


__all__ = ["Payment"]
