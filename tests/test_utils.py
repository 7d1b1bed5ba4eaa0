from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest
from lxml import etree

from xeroxml.utils import (
    date_text,
    format_date,
    format_date_time,
    format_money,
    is_guid,
    iter_children,
    parse_date,
    parse_date_time,
    parse_decimal,
)


@pytest.mark.parametrize(
    ("amount", "expected"),
    [
        (Decimal("120"), "120.00"),
        (Decimal("10.5"), "10.50"),
        (Decimal("0.30"), "0.30"),
        (Decimal("0.125"), "0.125"),
        (Decimal("-3.2"), "-3.20"),
        (3, "3.00"),
    ],
)
def test_format_money_is_fixed_point(amount, expected):
    assert format_money(amount) == expected


def test_parse_decimal_is_lenient():
    assert parse_decimal("12.34") == Decimal("12.34")
    assert parse_decimal(" 7 ") == Decimal("7")
    assert parse_decimal("") == Decimal("0")
    assert parse_decimal("abc") == Decimal("0")
    assert parse_decimal(None, default=Decimal("1")) == Decimal("1")


def test_dates_use_wire_format():
    assert format_date(date(2024, 1, 5)) == "2024-01-05"
    assert format_date_time(date(2024, 1, 5)) == "2024-01-05T00:00:00"
    assert format_date_time(datetime(2024, 1, 5, 9, 30, 1)) == "2024-01-05T09:30:01"


def test_parse_date_accepts_dates_and_timestamps():
    assert parse_date("2024-01-05") == date(2024, 1, 5)
    assert parse_date("2024-01-05T00:00:00") == date(2024, 1, 5)
    assert parse_date_time("2024-01-05T10:11:12.1234567") == datetime(2024, 1, 5, 10, 11, 12)


def test_parse_date_rejects_garbage():
    with pytest.raises(ValueError):
        parse_date("yesterday")


def test_is_guid():
    assert is_guid("a1b2c3d4-e5f6-4a7b-8c9d-0e1f2a3b4c5d")
    assert not is_guid("A1B2C3D4-E5F6-4A7B-8C9D-0E1F2A3B4C5D")
    assert not is_guid("INV-001")
    assert not is_guid(None)


def test_date_text_ignores_midnight_time():
    assert date_text(date(2024, 1, 5)) == "2024-01-05"
    assert date_text(datetime(2024, 1, 5)) == "2024-01-05"
    assert date_text("2024-01-05") == "2024-01-05"
    assert date_text(None) == ""


def test_iter_children_skips_comments_and_strips_namespaces():
    element = etree.fromstring(
        '<Invoice xmlns="urn:test"><!-- note --><Type>ACCREC</Type></Invoice>'
    )

    assert [name for name, _ in iter_children(element)] == ["Type"]
