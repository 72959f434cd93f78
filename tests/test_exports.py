"""Tests for the spreadsheet and PDF report builders."""

from datetime import date

import pandas as pd

from exports import build_pdf, build_xlsx, report_filename
from tests.fakes import make_txn
from views import FilterState


def test_default_filters_fill_month_and_date_sheets() -> None:
    today = date.today().isoformat()
    rows = [
        make_txn(2, today, description="Infaq Hari Ini"),
        make_txn(1, "2000-01-15", type="expense", category="Operasional"),
    ]

    sheets = pd.read_excel(build_xlsx(rows, FilterState()), sheet_name=None)

    assert list(sheets) == ["All Periods", "By Month", "By Date", "By Description", "Donors", "Expenses"]
    assert list(sheets["By Month"]["Description"]) == ["Infaq Hari Ini"]
    assert list(sheets["By Date"]["Description"]) == ["Infaq Hari Ini"]
    assert len(sheets["Expenses"]) == 1
    assert "Month" in sheets["All Periods"].columns


def test_pdf_summary_is_a_pdf() -> None:
    buffer = build_pdf([make_txn(1, "2024-01-05", type="expense", category="Operasional")], "All Periods")

    assert buffer.getvalue().startswith(b"%PDF")


def test_report_filename_uses_date() -> None:
    assert report_filename("xlsx", today=date(2024, 2, 5)) == "Ledger_Report_2024-02-05.xlsx"
