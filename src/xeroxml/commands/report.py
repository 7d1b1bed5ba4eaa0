"""Print the totals of the invoices in a Xero response file."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from ..invoices import load_invoices
from ..utils import format_money


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xeroxml totals",
        description="Print number, sub-total, tax and total of every downloaded invoice.",
    )
    parser.add_argument("xml", type=Path, help="Path to the Xero response XML")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    for invoice in load_invoices(args.xml):
        if not invoice.line_items_downloaded:
            print(f"{invoice.invoice_number}\t(line items not downloaded)")
            continue
        print(
            "\t".join(
                [
                    invoice.invoice_number or "",
                    format_money(invoice.sub_total),
                    format_money(invoice.total_tax),
                    format_money(invoice.total),
                ]
            )
        )
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
