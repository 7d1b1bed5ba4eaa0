"""Invoice loading helpers."""

from __future__ import annotations

from pathlib import Path

from .document import load_document, parse_response
from .gateway import Gateway
from .invoice import Invoice


def load_invoices(path: Path, gateway: Gateway | None = None) -> list[Invoice]:
    """Load the invoices contained in a Xero response file."""

    response = parse_response(load_document(path), gateway)
    return response.invoices


__all__ = ["load_invoices"]
