"""Validate the invoices of a Xero response file."""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Sequence

from ..validator import export_report, validate_file

REPORT_ENV_VARIABLE = "XEROXML_REPORT_FILE"


def default_report_destination(source: Path) -> Path:
    """Return the report path, honouring :data:`REPORT_ENV_VARIABLE`."""

    configured = os.environ.get(REPORT_ENV_VARIABLE)
    if configured:
        return Path(configured)
    return source.with_name(f"{source.stem}_issues.xlsx")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xeroxml validate",
        description="Validate the invoices of a Xero response file.",
    )
    parser.add_argument("xml", type=Path, help="Path to the Xero response XML")
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help=f"Excel report destination (default: ${REPORT_ENV_VARIABLE} or <xml>_issues.xlsx)",
    )
    parser.add_argument(
        "--no-report", action="store_true", help="Only print the issues"
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    issues = validate_file(args.xml)
    for issue in issues:
        print(f"[{issue.code}] {issue.message}")

    if not args.no_report:
        destination = args.report or default_report_destination(args.xml)
        export_report(issues, destination=destination)
        print(f"Report written to: {destination}")

    return 1 if issues else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
