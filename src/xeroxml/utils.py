"""Text conversion and XML helpers shared across xeroxml modules."""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Iterator

from lxml import etree

GUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$"
)

_MONEY_PLACES = Decimal("0.01")
_DATE_TIME_FORMAT = "%Y-%m-%dT%H:%M:%S"


def is_guid(value: object) -> bool:
    """Return ``True`` when ``value`` is a lowercase Xero GUID string."""

    return isinstance(value, str) and GUID_PATTERN.match(value) is not None


def parse_decimal(value: str | Decimal | None, *, default: Decimal = Decimal("0")) -> Decimal:
    """Convert the provided value to :class:`~decimal.Decimal`.

    Empty strings or unparsable values return ``default``; the service never
    sends those for amounts, so a lenient read keeps summary payloads usable.
    """

    if value is None:
        return default
    if isinstance(value, Decimal):
        return value

    text = str(value).strip()
    if not text:
        return default

    try:
        return Decimal(text)
    except (InvalidOperation, ValueError):
        return default


def format_money(amount: Decimal | int | str) -> str:
    """Render ``amount`` as fixed-point text with at least two decimals."""

    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    exponent = value.as_tuple().exponent
    if isinstance(exponent, int) and exponent > -2:
        value = value.quantize(_MONEY_PLACES)
    return format(value, "f")


def format_date(value: date) -> str:
    """Render ``value`` as ``YYYY-MM-DD``."""

    return value.strftime("%Y-%m-%d")


def format_date_time(value: date) -> str:
    """Render ``value`` using the ``YYYY-MM-DDTHH:MM:SS`` wire format.

    Plain dates are rendered at midnight.
    """

    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    return value.strftime(_DATE_TIME_FORMAT)


def parse_date_time(text: str) -> datetime:
    """Parse a wire timestamp, ignoring fractional seconds and offsets."""

    stripped = text.strip()
    if len(stripped) == 10:
        return datetime.strptime(stripped, "%Y-%m-%d")
    return datetime.strptime(stripped[:19], _DATE_TIME_FORMAT)


def parse_date(text: str) -> date:
    """Parse either ``YYYY-MM-DD`` or a full wire timestamp into a date."""

    return parse_date_time(text).date()


def date_text(value: object) -> str:
    """Return the textual rendering used to compare dates loosely."""

    if value is None:
        return ""
    if isinstance(value, datetime):
        if value.time() == datetime.min.time():
            return value.date().isoformat()
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value).strip()


def local_name(element: etree._Element) -> str | None:
    """Return the tag of ``element`` without namespace, ``None`` for comments."""

    if not isinstance(element.tag, str):
        return None
    return etree.QName(element).localname


def iter_children(element: etree._Element) -> Iterator[tuple[str, etree._Element]]:
    """Yield ``(localname, child)`` for every element child of ``element``."""

    for child in element:
        name = local_name(child)
        if name is not None:
            yield name, child


def element_text(element: etree._Element) -> str:
    """Return the stripped text of ``element`` (empty when missing)."""

    return (element.text or "").strip()


def optional_text(element: etree._Element) -> str | None:
    """Return the stripped text of ``element``, ``None`` when it is blank."""

    return element_text(element) or None


def add_text(parent: etree._Element, tag: str, value: object) -> etree._Element:
    """Append ``<tag>value</tag>`` to ``parent``."""

    child = etree.SubElement(parent, tag)
    child.text = str(value)
    return child


__all__ = [
    "GUID_PATTERN",
    "is_guid",
    "parse_decimal",
    "format_money",
    "format_date",
    "format_date_time",
    "parse_date_time",
    "parse_date",
    "date_text",
    "local_name",
    "iter_children",
    "element_text",
    "optional_text",
    "add_text",
]
