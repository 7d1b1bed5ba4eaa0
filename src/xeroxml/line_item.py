"""Invoice line items."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from lxml import etree

from .utils import (
    add_text,
    format_money,
    is_guid,
    iter_children,
    optional_text,
    parse_decimal,
)

_TEXT_TAGS = {
    "LineItemID": "line_item_id",
    "Description": "description",
    "AccountCode": "account_code",
    "TaxType": "tax_type",
}
_MONEY_TAGS = {
    "Quantity": "quantity",
    "UnitAmount": "unit_amount",
    "TaxAmount": "tax_amount",
}


@dataclass
class LineItem:
    """Single line of an invoice.

    ``line_amount`` is always ``quantity * unit_amount``; a ``LineAmount``
    value received from the service is ignored on read.
    """

    description: str | None = None
    quantity: Decimal = field(default_factory=lambda: Decimal("1"))
    unit_amount: Decimal = field(default_factory=lambda: Decimal("0"))
    tax_amount: Decimal = field(default_factory=lambda: Decimal("0"))
    account_code: str | None = None
    tax_type: str | None = None
    line_item_id: str | None = None
    errors: list[tuple[str, str]] = field(default_factory=list, compare=False, repr=False)

    def __post_init__(self) -> None:
        self.quantity = parse_decimal(self.quantity, default=Decimal("1"))
        self.unit_amount = parse_decimal(self.unit_amount)
        self.tax_amount = parse_decimal(self.tax_amount)

    @property
    def line_amount(self) -> Decimal:
        return self.quantity * self.unit_amount

    def valid(self) -> bool:
        """Check the line item and rebuild :attr:`errors`."""

        self.errors = []
        if self.line_item_id and not is_guid(self.line_item_id):
            self.errors.append(("line_item_id", "must be blank or a valid Xero GUID"))
        if not self.description:
            self.errors.append(("description", "can't be blank"))
        return not self.errors

    def to_xml(self, parent: etree._Element | None = None) -> etree._Element:
        if parent is None:
            element = etree.Element("LineItem")
        else:
            element = etree.SubElement(parent, "LineItem")
        if self.line_item_id is not None:
            add_text(element, "LineItemID", self.line_item_id)
        if self.description is not None:
            add_text(element, "Description", self.description)
        add_text(element, "Quantity", format_money(self.quantity))
        add_text(element, "UnitAmount", format_money(self.unit_amount))
        if self.tax_type is not None:
            add_text(element, "TaxType", self.tax_type)
        add_text(element, "TaxAmount", format_money(self.tax_amount))
        add_text(element, "LineAmount", format_money(self.line_amount))
        if self.account_code is not None:
            add_text(element, "AccountCode", self.account_code)
        return element

    @classmethod
    def from_xml(cls, element: etree._Element) -> "LineItem":
        line_item = cls()
        for name, child in iter_children(element):
            text = optional_text(child)
            if name in _TEXT_TAGS:
                setattr(line_item, _TEXT_TAGS[name], text)
            elif name in _MONEY_TAGS and text is not None:
                setattr(line_item, _MONEY_TAGS[name], parse_decimal(text))
        return line_item


__all__ = ["LineItem"]
