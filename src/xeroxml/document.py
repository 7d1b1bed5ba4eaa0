"""Parsing of XML documents returned by the Xero API."""

from __future__ import annotations

from pathlib import Path

from lxml import etree

from .gateway import Gateway, Response
from .invoice import Invoice
from .utils import element_text, iter_children, local_name, parse_date_time


def load_document(path: Path) -> etree._Element:
    """Parse ``path`` and return its root element."""

    tree = etree.parse(str(path))
    return tree.getroot()


def parse_document(source: str | bytes) -> etree._Element:
    """Parse an in-memory XML document and return its root element."""

    if isinstance(source, str):
        source = source.encode("utf-8")
    return etree.fromstring(source)


def parse_response(
    source: str | bytes | etree._Element, gateway: Gateway | None = None
) -> Response:
    """Build a :class:`Response` from a ``<Response>`` envelope.

    Invoices found under ``Invoices`` (or a bare ``Invoice`` child) become
    the response item, bound to ``gateway``. A bare ``Invoice`` root is
    accepted as a successful single-item response.
    """

    root = source if isinstance(source, etree._Element) else parse_document(source)

    if local_name(root) == "Invoice":
        return Response(status="OK", response_item=[Invoice.from_xml(root, gateway)])

    response = Response(response_xml=etree.tostring(root, encoding="unicode"))
    invoices: list[Invoice] = []
    for name, child in iter_children(root):
        if name == "ID":
            response.response_id = element_text(child)
        elif name == "Status":
            response.status = element_text(child)
        elif name == "ProviderName":
            response.provider = element_text(child)
        elif name == "DateTimeUTC":
            response.date_time = parse_date_time(element_text(child))
        elif name == "Errors":
            response.errors.extend(_parse_errors(child))
        elif name == "Invoices":
            invoices.extend(
                Invoice.from_xml(invoice, gateway)
                for tag, invoice in iter_children(child)
                if tag == "Invoice"
            )
        elif name == "Invoice":
            invoices.append(Invoice.from_xml(child, gateway))

    response.response_item = invoices
    return response


def _parse_errors(element: etree._Element) -> list[str]:
    messages: list[str] = []
    for name, error in iter_children(element):
        if name != "Error":
            continue
        description = next(
            (element_text(node) for tag, node in iter_children(error) if tag == "Description"),
            element_text(error),
        )
        messages.append(description)
    return messages


__all__ = ["load_document", "parse_document", "parse_response"]
