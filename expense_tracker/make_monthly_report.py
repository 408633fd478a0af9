"""
Build the monthly expense report workbook.

Sheets:
  1. Overview – Capital, Total Spent, Remaining, then totals per category
  2. Details  – Every expense by date (oldest first) with a SUM formula total,
                so the file still adds up after someone edits an amount in Excel

Every used cell gets a thin border and columns are sized to their longest value.
"""

from openpyxl import Workbook
from openpyxl.styles import Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

CURRENCY_FORMAT = "#,##0.00"
HEADER_FILL = "EEF2FF"
MIN_COLUMN_WIDTH = 10
COLUMN_PADDING = 2

DETAIL_HEADERS = ["Date", "Category", "Amount", "Note"]
AMOUNT_COLUMN = 3

_thin = Side(style="thin")
THIN_BORDER = Border(left=_thin, right=_thin, top=_thin, bottom=_thin)


def style_header(cell):
    cell.font = Font(bold=True)
    cell.fill = PatternFill(start_color=HEADER_FILL, end_color=HEADER_FILL, fill_type="solid")


def style_label(cell):
    cell.font = Font(bold=True)


def style_currency(cell, bold=False):
    cell.number_format = CURRENCY_FORMAT
    if bold:
        cell.font = Font(bold=True)


def text_cell(ws, row: int, column: int, value):
    """Write user text as a plain string; openpyxl would otherwise read a leading '=' as a formula."""
    cell = ws.cell(row=row, column=column)
    cell.value = value
    if isinstance(value, str):
        cell.data_type = "s"
    return cell


def _display_width(value) -> int:
    return len(str(value)) if value is not None else 0


def finish_sheet(ws) -> None:
    """Border every used cell and widen each column to fit its longest value."""
    widths: dict[int, int] = {}
    for row in ws.iter_rows(min_row=1, max_row=ws.max_row, max_col=ws.max_column):
        for cell in row:
            cell.border = THIN_BORDER
            widths[cell.column] = max(widths.get(cell.column, MIN_COLUMN_WIDTH), _display_width(cell.value))
    for col, width in widths.items():
        ws.column_dimensions[get_column_letter(col)].width = width + COLUMN_PADDING


def _build_overview(ws, month: str, summary: dict) -> None:
    text_cell(ws, 1, 1, f"Monthly Report: {month}")
    ws["A1"].font = Font(size=16, bold=True)
    row = 3
    for label, key in (("Capital", "capital"), ("Total Spent", "totalSpent"), ("Remaining", "remaining")):
        style_label(ws.cell(row=row, column=1, value=label))
        style_currency(ws.cell(row=row, column=2, value=summary[key]), bold=True)
        row += 1
    row += 1
    style_label(ws.cell(row=row, column=1, value="Category"))
    style_label(ws.cell(row=row, column=2, value="Total"))
    for category, total in summary["byCategory"].items():
        row += 1
        text_cell(ws, row, 1, category)
        style_currency(ws.cell(row=row, column=2, value=total))


def _build_details(ws, expenses: list[dict]) -> None:
    for c, h in enumerate(DETAIL_HEADERS, 1):
        style_header(ws.cell(row=1, column=c, value=h))
    rows = sorted(expenses, key=lambda e: str(e.get("date") or ""))
    for i, e in enumerate(rows, 2):
        text_cell(ws, i, 1, e.get("date"))
        text_cell(ws, i, 2, e.get("category"))
        style_currency(text_cell(ws, i, AMOUNT_COLUMN, e.get("amount")))
        text_cell(ws, i, 4, e.get("note") or "")
    last_detail_row = max(len(rows) + 1, 2)
    total_row = len(rows) + 3
    col = get_column_letter(AMOUNT_COLUMN)
    style_label(ws.cell(row=total_row, column=1, value="Total"))
    style_currency(
        ws.cell(row=total_row, column=AMOUNT_COLUMN, value=f"=SUM({col}2:{col}{last_detail_row})"),
        bold=True,
    )


def render_report(month: str, summary: dict, expenses: list[dict]) -> Workbook:
    """Two-sheet workbook for one month: Overview from the summary, Details from the raw expenses."""
    wb = Workbook()
    ws_overview = wb.active
    ws_overview.title = "Overview"
    _build_overview(ws_overview, month, summary)
    ws_details = wb.create_sheet("Details")
    _build_details(ws_details, expenses)
    for ws in (ws_overview, ws_details):
        finish_sheet(ws)
    return wb
