"""Invoice aggregate and its mapping to the Xero XML format."""

from __future__ import annotations

import datetime
import logging
import weakref
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping

from lxml import etree

from .contact import Contact
from .gateway import Gateway
from .line_item import LineItem
from .payment import Payment
from .utils import (
    add_text,
    date_text,
    format_date_time,
    format_money,
    is_guid,
    iter_children,
    optional_text,
    parse_date,
    parse_decimal,
)

LOGGER = logging.getLogger("xeroxml.invoice")


class InvoiceError(RuntimeError):
    """Base class for invoice failures."""


class NoGatewayError(InvoiceError):
    """Raised when a remote operation is attempted without a gateway."""


class InvalidLineItemError(InvoiceError):
    """Raised when a value cannot be turned into a :class:`LineItem`."""


class InvoiceNotFoundError(InvoiceError):
    """Raised when the service does not return the requested invoice."""


class InvoiceType(str, Enum):
    ACCREC = "ACCREC"
    ACCPAY = "ACCPAY"

    @property
    def description(self) -> str:
        return _INVOICE_TYPE_DESCRIPTIONS[self.value]


class InvoiceStatus(str, Enum):
    AUTHORISED = "AUTHORISED"
    DELETED = "DELETED"
    DRAFT = "DRAFT"
    PAID = "PAID"
    SUBMITTED = "SUBMITTED"
    VOID = "VOID"

    @property
    def description(self) -> str:
        return _INVOICE_STATUS_DESCRIPTIONS[self.value]


class LineAmountType(str, Enum):
    EXCLUSIVE = "Exclusive"
    INCLUSIVE = "Inclusive"
    NO_TAX = "NoTax"

    @property
    def description(self) -> str:
        return _LINE_AMOUNT_TYPE_DESCRIPTIONS[self.value]


_INVOICE_TYPE_DESCRIPTIONS = {
    "ACCREC": "Accounts Receivable",
    "ACCPAY": "Accounts Payable",
}
_INVOICE_STATUS_DESCRIPTIONS = {
    "AUTHORISED": "Approved invoices awaiting payment",
    "DELETED": "Draft invoices that are deleted",
    "DRAFT": "Invoices saved as draft or entered via API",
    "PAID": "Invoices approved and fully paid",
    "SUBMITTED": "Invoices entered by an employee awaiting approval",
    "VOID": "Approved invoices that are voided",
}
_LINE_AMOUNT_TYPE_DESCRIPTIONS = {
    "Exclusive": "Line amounts are exclusive of tax",
    "Inclusive": "Line amounts are inclusive of tax",
    "NoTax": "Line items have no tax",
}

INVOICE_TYPES = tuple(member.value for member in InvoiceType)
INVOICE_STATUSES = tuple(member.value for member in InvoiceStatus)
LINE_AMOUNT_TYPES = tuple(member.value for member in LineAmountType)

_TEXT_TAGS = {
    "InvoiceStatus": "invoice_status",
    "InvoiceID": "invoice_id",
    "InvoiceNumber": "invoice_number",
    "Type": "invoice_type",
    "Reference": "reference",
    "LineAmountTypes": "line_amount_types",
    "CurrencyCode": "currency_code",
}
_DATE_TAGS = {
    "Date": "date",
    "DueDate": "due_date",
    "FullyPaidOn": "fully_paid_on",
}
_AMOUNT_TAGS = {
    "AmountDue": "amount_due",
    "AmountPaid": "amount_paid",
    "AmountCredited": "amount_credited",
}
_REPORTED_TOTAL_TAGS = {
    "SubTotal": "sub_total",
    "TotalTax": "total_tax",
    "Total": "total",
}


@dataclass
class Downloaded:
    """Line items known to be complete for the invoice."""

    items: list[LineItem] = field(default_factory=list)


@dataclass
class NotDownloaded:
    """Line items held locally; the service copy may hold more."""

    items: list[LineItem] = field(default_factory=list)


def _code(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


class Invoice:
    """Xero invoice.

    Totals are always derived from the line items. Line items of an invoice
    read from a summary listing are downloaded through the gateway on first
    access.
    """

    def __init__(
        self,
        *,
        invoice_id: str | None = None,
        invoice_number: str | None = None,
        invoice_type: str | InvoiceType | None = None,
        invoice_status: str | InvoiceStatus | None = None,
        date: datetime.date | None = None,
        due_date: datetime.date | None = None,
        reference: str | None = None,
        line_amount_types: str | LineAmountType | None = LineAmountType.EXCLUSIVE,
        currency_code: str | None = None,
        contact: Contact | None = None,
        line_items: list[LineItem] | None = None,
        payments: list[Payment] | None = None,
        fully_paid_on: datetime.date | None = None,
        amount_due: Decimal | None = None,
        amount_paid: Decimal | None = None,
        amount_credited: Decimal | None = None,
        line_items_downloaded: bool = False,
        gateway: Gateway | None = None,
    ) -> None:
        self.invoice_id = invoice_id
        self.invoice_number = invoice_number
        self.invoice_type = _code(invoice_type)
        self.invoice_status = _code(invoice_status)
        self.date = date
        self.due_date = due_date
        self.reference = reference
        self.line_amount_types = _code(line_amount_types)
        self.currency_code = currency_code
        self.fully_paid_on = fully_paid_on
        self.amount_due = amount_due
        self.amount_paid = amount_paid
        self.amount_credited = amount_credited
        self.payments: list[Payment] = list(payments or [])
        self.errors: list[tuple[str, str]] = []
        self.reported_totals: dict[str, Decimal] = {}
        self._contact = contact
        items = list(line_items or [])
        self._line_items: Downloaded | NotDownloaded = (
            Downloaded(items) if line_items_downloaded else NotDownloaded(items)
        )
        self.gateway = gateway

    # -- gateway -----------------------------------------------------------

    @property
    def gateway(self) -> Gateway | None:
        if self._gateway_ref is None:
            return None
        return self._gateway_ref()

    @gateway.setter
    def gateway(self, value: Gateway | None) -> None:
        if value is None:
            self._gateway_ref = None
            return
        try:
            self._gateway_ref = weakref.ref(value)
        except TypeError as exc:
            raise InvoiceError(
                f"Gateway {type(value).__name__} must support weak references."
            ) from exc

    # -- validation --------------------------------------------------------

    def valid(self) -> bool:
        """Validate the invoice against the rules enforced by the service.

        Rebuilds :attr:`errors` as a list of ``(field, message)`` pairs. All
        checks run, so several problems are reported together.
        """

        self.errors = []

        if self.invoice_id and not is_guid(self.invoice_id):
            self.errors.append(("invoice_id", "must be blank or a valid Xero GUID"))

        if self.invoice_status and self.invoice_status not in INVOICE_STATUSES:
            self.errors.append(
                ("invoice_status", f"must be one of {'/'.join(INVOICE_STATUSES)}")
            )

        if not self.invoice_number:
            self.errors.append(("invoice_number", "can't be blank"))

        if self.date is None:
            self.errors.append(("invoice_date", "can't be blank"))

        if self._contact is None or not self._contact.valid():
            self.errors.append(("contact", "is invalid"))

        if not all(line_item.valid() for line_item in self.line_items):
            self.errors.append(("line_items", "at least one line item invalid"))

        return not self.errors

    @property
    def error(self) -> tuple[str, str] | None:
        """Return the first error found by the last :meth:`valid` call."""

        return self.errors[0] if self.errors else None

    # -- contact -----------------------------------------------------------

    def build_contact(self, **fields: Any) -> Contact:
        """Create and attach a contact, through the gateway when it can."""

        builder = getattr(self.gateway, "build_contact", None)
        self._contact = builder(**fields) if builder is not None else Contact(**fields)
        return self._contact

    @property
    def contact(self) -> Contact:
        if self._contact is None:
            self.build_contact()
        return self._contact

    @contact.setter
    def contact(self, value: Contact | None) -> None:
        self._contact = value

    # -- line items --------------------------------------------------------

    @property
    def line_items_downloaded(self) -> bool:
        return isinstance(self._line_items, Downloaded)

    @property
    def line_items(self) -> list[LineItem]:
        """Return the line items, downloading them once when needed."""

        state = self._line_items
        if isinstance(state, Downloaded) or not is_guid(self.invoice_id):
            return state.items

        self._line_items = Downloaded(self._fetch_line_items())
        return self._line_items.items

    @line_items.setter
    def line_items(self, items: list[LineItem]) -> None:
        self._line_items.items = list(items)

    def _fetch_line_items(self) -> list[LineItem]:
        gateway = self.gateway
        if gateway is None:
            raise NoGatewayError(
                f"Invoice {self.invoice_id} has no gateway to download its line items."
            )

        LOGGER.debug("Downloading line items for invoice %s", self.invoice_id)
        response = gateway.fetch_invoice_by_id(self.invoice_id)
        if not response.success or not isinstance(response.invoice, Invoice):
            raise InvoiceNotFoundError(f"Invoice with ID {self.invoice_id} not found in Xero.")
        return list(response.invoice.line_items)

    def add_line_item(self, line_item: LineItem | Mapping[str, Any]) -> LineItem:
        """Append a line item given as a :class:`LineItem` or a field mapping.

        Usage::

            invoice.add_line_item({"description": "Widgets", "quantity": 1, "unit_amount": 120})
        """

        if isinstance(line_item, LineItem):
            item = line_item
        elif isinstance(line_item, Mapping):
            try:
                item = LineItem(**line_item)
            except TypeError as exc:
                raise InvalidLineItemError(str(exc)) from exc
        else:
            raise InvalidLineItemError(
                f"Cannot build a line item from {type(line_item).__name__}."
            )

        self._line_items.items.append(item)
        return item

    # -- totals ------------------------------------------------------------

    @property
    def sub_total(self) -> Decimal:
        """Sum of the line amounts."""

        return sum(
            (Decimal(str(item.line_amount)) for item in self.line_items), Decimal("0")
        )

    @sub_total.setter
    def sub_total(self, value: Any) -> None:
        # Accepted for wire compatibility; totals are always derived.
        pass

    @property
    def total_tax(self) -> Decimal:
        """Sum of the line tax amounts."""

        return sum(
            (Decimal(str(item.tax_amount)) for item in self.line_items), Decimal("0")
        )

    @total_tax.setter
    def total_tax(self, value: Any) -> None:
        pass

    @property
    def total(self) -> Decimal:
        return self.sub_total + self.total_tax

    @total.setter
    def total(self, value: Any) -> None:
        pass

    @property
    def accounts_payable(self) -> bool:
        return self.invoice_type == InvoiceType.ACCPAY.value

    @property
    def accounts_receivable(self) -> bool:
        return self.invoice_type == InvoiceType.ACCREC.value

    # -- equality ----------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Invoice):
            return NotImplemented
        for name in (
            "invoice_number",
            "invoice_type",
            "invoice_status",
            "reference",
            "line_amount_types",
            "sub_total",
            "total_tax",
            "total",
            "contact",
            "line_items",
        ):
            if getattr(self, name) != getattr(other, name):
                return False
        for name in ("date", "due_date"):
            if date_text(getattr(self, name)) != date_text(getattr(other, name)):
                return False
        return True

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Invoice(invoice_id={self.invoice_id!r}, "
            f"invoice_number={self.invoice_number!r}, "
            f"invoice_status={self.invoice_status!r})"
        )

    # -- persistence -------------------------------------------------------

    def create(self) -> Any:
        """Create the invoice through the attached gateway.

        The service only supports creation, so :meth:`save` is the same
        operation.
        """

        gateway = self.gateway
        if gateway is None:
            raise NoGatewayError("Invoice has no gateway to be created with.")
        LOGGER.debug("Creating invoice %s", self.invoice_number)
        return gateway.create_invoice(self)

    save = create

    # -- XML ---------------------------------------------------------------

    def to_xml(self, parent: etree._Element | None = None) -> etree._Element:
        """Serialise the invoice to an ``Invoice`` element."""

        if parent is None:
            element = etree.Element("Invoice")
        else:
            element = etree.SubElement(parent, "Invoice")

        add_text(element, "Type", self.invoice_type or "")
        self.contact.to_xml(element)
        add_text(element, "Date", format_date_time(self.date or datetime.date.today()))
        if self.due_date:
            add_text(element, "DueDate", format_date_time(self.due_date))
        if self.invoice_number:
            add_text(element, "InvoiceNumber", self.invoice_number)
        if self.reference:
            add_text(element, "Reference", self.reference)
        if self.line_amount_types:
            add_text(element, "LineAmountTypes", self.line_amount_types)
        if self.currency_code:
            add_text(element, "CurrencyCode", self.currency_code)

        line_items = self.line_items
        add_text(element, "SubTotal", format_money(self.sub_total))
        add_text(element, "TotalTax", format_money(self.total_tax))
        add_text(element, "Total", format_money(self.total))

        items_element = etree.SubElement(element, "LineItems")
        for line_item in line_items:
            line_item.to_xml(items_element)
        return element

    def to_string(self, *, pretty: bool = False) -> str:
        return etree.tostring(self.to_xml(), encoding="unicode", pretty_print=pretty)

    @classmethod
    def from_xml(
        cls,
        element: etree._Element,
        gateway: Gateway | None = None,
        **fields: Any,
    ) -> "Invoice":
        """Build an invoice from an ``Invoice`` element.

        ``fields`` seed the constructor before the element is read. Unknown
        child elements are skipped. A ``LineItems`` child marks the line
        items as downloaded.
        """

        invoice = cls(gateway=gateway, **fields)
        for name, child in iter_children(element):
            text = optional_text(child)
            if name in _TEXT_TAGS:
                setattr(invoice, _TEXT_TAGS[name], text)
            elif name in _DATE_TAGS:
                setattr(invoice, _DATE_TAGS[name], parse_date(text) if text else None)
            elif name in _AMOUNT_TAGS:
                setattr(invoice, _AMOUNT_TAGS[name], parse_decimal(text) if text else None)
            elif name in _REPORTED_TOTAL_TAGS:
                if text:
                    invoice.reported_totals[_REPORTED_TOTAL_TAGS[name]] = parse_decimal(text)
            elif name == "Contact":
                invoice.contact = Contact.from_xml(child)
            elif name == "LineItems":
                items = invoice._line_items.items
                items.extend(LineItem.from_xml(item) for _, item in iter_children(child))
                invoice._line_items = Downloaded(items)
            elif name == "Payments":
                invoice.payments.extend(
                    Payment.from_xml(payment) for _, payment in iter_children(child)
                )
        return invoice


__all__ = [
    "Invoice",
    "InvoiceError",
    "NoGatewayError",
    "InvalidLineItemError",
    "InvoiceNotFoundError",
    "InvoiceType",
    "InvoiceStatus",
    "LineAmountType",
    "INVOICE_TYPES",
    "INVOICE_STATUSES",
    "LINE_AMOUNT_TYPES",
    "Downloaded",
    "NotDownloaded",
]
