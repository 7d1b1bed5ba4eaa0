"""Batch validation of invoices."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from .gateway import Gateway
from .invoice import Invoice, InvoiceNotFoundError, NoGatewayError
from .invoices import load_invoices

LOGGER = logging.getLogger("xeroxml.validator")

_FIELD_CODES = {
    "invoice_id": "INVOICE_ID_INVALID",
    "invoice_status": "INVOICE_STATUS_INVALID",
    "invoice_number": "INVOICE_NUMBER_BLANK",
    "invoice_date": "INVOICE_DATE_BLANK",
    "contact": "INVOICE_CONTACT_INVALID",
    "line_items": "INVOICE_LINE_ITEMS_INVALID",
}


class ValidationIssue:
    """Representation of a problem detected during validation."""

    columns = ("code", "invoice", "message")

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: dict[str, str] | None = None,
    ) -> None:
        self.message = message
        self.code = code or "GENERIC"
        self.details = details or {}

    def as_cells(self) -> list[str]:
        """Serialise the issue for tabular export."""

        return [self.code, self.details.get("invoice", ""), self.message]

    def __repr__(self) -> str:
        return f"ValidationIssue(code={self.code!r}, message={self.message!r})"


def validate_invoices(invoices: Iterable[Invoice]) -> list[ValidationIssue]:
    """Validate every invoice and return the detected issues."""

    issues: list[ValidationIssue] = []
    for invoice in invoices:
        label = invoice.invoice_number or invoice.invoice_id or "(no number)"
        try:
            valid = invoice.valid()
        except (NoGatewayError, InvoiceNotFoundError) as exc:
            LOGGER.warning("Invoice %s line items unavailable: %s", label, exc)
            issues.append(
                ValidationIssue(
                    f"Invoice '{label}': line items could not be downloaded ({exc}).",
                    code="INVOICE_LINE_ITEMS_UNAVAILABLE",
                    details={"invoice": label},
                )
            )
            continue
        if not valid:
            for field_name, message in invoice.errors:
                issues.append(
                    ValidationIssue(
                        f"Invoice '{label}': {field_name} {message}.",
                        code=_FIELD_CODES.get(field_name),
                        details={"invoice": label, "field": field_name},
                    )
                )
        issues.extend(_check_reported_totals(invoice, label))
    return issues


def validate_file(path: Path, gateway: Gateway | None = None) -> list[ValidationIssue]:
    """Load the invoices in ``path`` and validate them."""

    return validate_invoices(load_invoices(path, gateway))


def export_report(issues: Iterable[ValidationIssue], *, destination: Path) -> Path:
    """Export validation issues to an Excel report."""

    from .logging import ExcelLogger

    return ExcelLogger.for_rows(ValidationIssue, destination).write_rows(issues)


def _check_reported_totals(invoice: Invoice, label: str) -> list[ValidationIssue]:
    # Summary invoices report totals for line items that are not loaded yet.
    if not invoice.line_items_downloaded:
        return []

    issues: list[ValidationIssue] = []
    for name, reported in invoice.reported_totals.items():
        computed = getattr(invoice, name)
        if reported == computed:
            continue
        LOGGER.warning(
            "Invoice %s reports %s=%s but line items add up to %s",
            label,
            name,
            reported,
            computed,
        )
        issues.append(
            ValidationIssue(
                f"Invoice '{label}': reported {name} {reported} differs from computed {computed}.",
                code="INVOICE_TOTALS_MISMATCH",
                details={
                    "invoice": label,
                    "field": name,
                    "reported": str(reported),
                    "computed": str(computed),
                },
            )
        )
    return issues


__all__ = ["ValidationIssue", "validate_invoices", "validate_file", "export_report"]
