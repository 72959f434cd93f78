from datetime import date as date_cls
from io import BytesIO

import pandas as pd
from fpdf import FPDF

from views import (
    by_description,
    compute_stats,
    expense_by_category,
    format_currency,
    in_month,
    of_type,
    on_date,
    parse_date,
)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def report_filename(extension, today=None):
    today = today or date_cls.today()
    return f"Ledger_Report_{today.isoformat()}.{extension}"


def _rows(transactions, include_month=False):
    rows = []
    for t in transactions:
        parsed = parse_date(t["date"])
        row = {
            "Date": parsed.strftime("%A, %d/%m/%Y") if parsed else t["date"],
            "Description": t["description"],
            "Category": t["category"],
        }
        if include_month:
            row["Month"] = parsed.strftime("%B %Y") if parsed else ""
        row["Type"] = "Income" if t["type"] == "income" else "Expense"
        row["Amount"] = t["amount"]
        rows.append(row)
    return rows


def _frame(transactions, include_month=False):
    columns = ["Date", "Description", "Category"]
    if include_month:
        columns.append("Month")
    columns += ["Type", "Amount"]
    return pd.DataFrame(_rows(transactions, include_month), columns=columns)


def build_xlsx(transactions, filters):
    """Workbook with the whole ledger plus one sheet per report slice.

    The month/date/description sheets use the values of ``filters``
    regardless of which filter mode is active.
    """
    sheets = [
        ("All Periods", _frame(transactions, include_month=True)),
        ("By Month", _frame(in_month(transactions, filters.month), include_month=True)),
        ("By Date", _frame(on_date(transactions, filters.date))),
        ("By Description", _frame(by_description(transactions, filters.description, filters.category))),
        ("Donors", _frame(of_type(transactions, "income"))),
        ("Expenses", _frame(of_type(transactions, "expense"))),
    ]

    xlsx_buffer = BytesIO()
    with pd.ExcelWriter(xlsx_buffer, engine="openpyxl") as writer:
        for name, df in sheets:
            df.to_excel(writer, index=False, sheet_name=name)
    xlsx_buffer.seek(0)
    return xlsx_buffer


def _latin1(text):
    # core PDF fonts only cover latin-1
    return str(text).encode("latin-1", "replace").decode("latin-1")


def build_pdf(filtered, label):
    stats = compute_stats(filtered)

    pdf = FPDF()
    pdf.add_page()
    pdf.set_font("Helvetica", size=14)
    pdf.cell(0, 10, "Ledger Summary Report", new_x="LMARGIN", new_y="NEXT", align="C")
    pdf.set_font("Helvetica", size=10)
    pdf.cell(0, 8, _latin1(label), new_x="LMARGIN", new_y="NEXT", align="C")
    pdf.ln(6)

    pdf.set_font("Helvetica", size=12)
    pdf.cell(0, 8, f"Transactions: {len(filtered)}", new_x="LMARGIN", new_y="NEXT")
    pdf.cell(0, 8, f"Income: {format_currency(stats['income'])}", new_x="LMARGIN", new_y="NEXT")
    pdf.cell(0, 8, f"Expense: {format_currency(stats['expense'])}", new_x="LMARGIN", new_y="NEXT")
    pdf.cell(0, 8, f"Balance: {format_currency(stats['balance'])}", new_x="LMARGIN", new_y="NEXT")

    categories = expense_by_category(filtered)
    if categories:
        pdf.ln(6)
        pdf.set_font("Helvetica", style="B", size=12)
        pdf.cell(0, 8, "Expenses by category", new_x="LMARGIN", new_y="NEXT")
        pdf.set_font("Helvetica", size=12)
        for item in categories:
            pdf.cell(0, 8, _latin1(f"{item['name']}: {format_currency(item['value'])}"), new_x="LMARGIN", new_y="NEXT")

    return BytesIO(bytes(pdf.output()))
