from __future__ import annotations

from datetime import date
from decimal import Decimal

from lxml import etree
from openpyxl import load_workbook

from xeroxml import Contact, Invoice, LineItem
from xeroxml.validator import ValidationIssue, export_report, validate_file, validate_invoices

SUMMARY = """
<Invoice>
  <InvoiceID>a1b2c3d4-e5f6-4a7b-8c9d-0e1f2a3b4c5d</InvoiceID>
  <InvoiceNumber>INV-010</InvoiceNumber>
  <Date>2024-01-05T00:00:00</Date>
  <Contact><Name>ABC Limited</Name></Contact>
</Invoice>
"""

MISMATCH = """
<Invoice>
  <InvoiceNumber>INV-011</InvoiceNumber>
  <Date>2024-01-05T00:00:00</Date>
  <Contact><Name>ABC Limited</Name></Contact>
  <LineItems>
    <LineItem>
      <Description>Widgets</Description>
      <UnitAmount>10.00</UnitAmount>
    </LineItem>
  </LineItems>
  <SubTotal>10.00</SubTotal>
  <Total>12.00</Total>
</Invoice>
"""


def _valid_invoice(**overrides) -> Invoice:
    fields = dict(
        invoice_number="INV-001",
        date=date(2024, 1, 5),
        contact=Contact(name="ABC Limited"),
        line_items=[LineItem(description="Widgets", unit_amount=Decimal("10"))],
    )
    fields.update(overrides)
    return Invoice(**fields)


def test_valid_invoices_produce_no_issues():
    assert validate_invoices([_valid_invoice(), _valid_invoice(invoice_number="INV-002")]) == []


def test_invoice_errors_become_issues():
    invoice = _valid_invoice(invoice_number="", invoice_status="PENDING")
    invoice.invoice_id = "INV-001"

    issues = validate_invoices([invoice])

    assert [issue.code for issue in issues] == [
        "INVOICE_ID_INVALID",
        "INVOICE_STATUS_INVALID",
        "INVOICE_NUMBER_BLANK",
    ]
    assert issues[0].details == {"invoice": "INV-001", "field": "invoice_id"}
    assert "can't be blank" in issues[2].message


def test_reported_totals_are_checked_once_downloaded():
    invoice = Invoice.from_xml(etree.fromstring(MISMATCH))

    issues = validate_invoices([invoice])

    assert [issue.code for issue in issues] == ["INVOICE_TOTALS_MISMATCH"]
    assert issues[0].details["field"] == "total"
    assert issues[0].details["reported"] == "12.00"
    assert issues[0].details["computed"] == "10.00"


def test_summary_without_gateway_is_reported():
    invoice = Invoice.from_xml(etree.fromstring(SUMMARY))

    issues = validate_invoices([invoice])

    assert [issue.code for issue in issues] == ["INVOICE_LINE_ITEMS_UNAVAILABLE"]


def test_validate_file(tmp_path):
    path = tmp_path / "response.xml"
    path.write_text(f"<Response><Status>OK</Status><Invoices>{MISMATCH}</Invoices></Response>")

    issues = validate_file(path)

    assert [issue.code for issue in issues] == ["INVOICE_TOTALS_MISMATCH"]


def test_export_report_writes_one_row_per_issue(tmp_path):
    invoice = _valid_invoice(date=None)
    issues = validate_invoices([invoice])
    destination = tmp_path / "reports" / "issues.xlsx"

    written = export_report(issues, destination=destination)

    assert written == destination
    workbook = load_workbook(destination)
    try:
        rows = list(workbook.active.iter_rows(values_only=True))
    finally:
        workbook.close()
    assert rows[0] == ("code", "invoice", "message")
    assert rows[1][:2] == ("INVOICE_DATE_BLANK", "INV-001")
    assert len(rows) == 2


def test_export_report_header_follows_issue_columns(tmp_path):
    destination = tmp_path / "issues.xlsx"

    export_report([], destination=destination)

    workbook = load_workbook(destination)
    try:
        worksheet = workbook.active
        header = [cell.value for cell in worksheet[1]]
        bold = [cell.font.bold for cell in worksheet[1]]
        frozen = worksheet.freeze_panes
    finally:
        workbook.close()
    assert header == list(ValidationIssue.columns)
    assert all(bold)
    assert frozen == "A2"
