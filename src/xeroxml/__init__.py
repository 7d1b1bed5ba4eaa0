"""Mapping between Xero invoices and their XML representation."""

from .contact import Contact
from .gateway import Gateway, Response
from .invoice import (
    INVOICE_STATUSES,
    INVOICE_TYPES,
    LINE_AMOUNT_TYPES,
    InvalidLineItemError,
    Invoice,
    InvoiceError,
    InvoiceNotFoundError,
    InvoiceStatus,
    InvoiceType,
    LineAmountType,
    NoGatewayError,
)
from .line_item import LineItem
from .payment import Payment

__all__ = [
    "cli",
    "commands",
    "contact",
    "document",
    "gateway",
    "invoice",
    "invoices",
    "line_item",
    "logging",
    "payment",
    "utils",
    "validator",
    "Contact",
    "Gateway",
    "Response",
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
    "LineItem",
    "Payment",
]
