"""Plain CSV export of a month's expenses (date, category, amount, note)."""

import csv
import io

CSV_HEADERS = ["date", "category", "amount", "note"]
# Excel only detects UTF-8 when the file starts with a BOM
BOM = "\ufeff"


def csv_filename(month: str) -> str:
    return f"expenses-{month}.csv"


def expenses_to_csv(expenses: list[dict]) -> str:
    """Text fields are quoted, amounts are written bare. Rows keep insertion order."""
    buf = io.StringIO()
    buf.write(BOM)
    w = csv.writer(buf, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    buf.write(",".join(CSV_HEADERS) + "\n")
    for e in expenses:
        w.writerow([str(e.get("date") or ""), str(e.get("category") or ""), e.get("amount") or 0, str(e.get("note") or "")])
    return buf.getvalue()
