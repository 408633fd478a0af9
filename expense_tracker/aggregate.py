"""Month summary: capital, total spent, remaining, and per-date / per-category sums."""

from collections import defaultdict

from .ledger_store import parse_amount


def _amount(expense: dict) -> float:
    value = parse_amount(expense.get("amount"))
    return value if value is not None else 0.0


def compute_summary(month: str, record: dict) -> dict:
    """
    Build the summary for one month record. Remaining is floored at zero, so an
    overspent month reports 0 rather than a negative balance.
    """
    expenses = record.get("expenses") or []
    capital = parse_amount(record.get("capital")) or 0.0
    by_date: dict[str, float] = defaultdict(float)
    by_category: dict[str, float] = defaultdict(float)
    total_spent = 0.0
    for e in expenses:
        amt = _amount(e)
        total_spent += amt
        by_date[str(e.get("date") or "")] += amt
        by_category[str(e.get("category") or "")] += amt
    total_spent = round(total_spent, 2)
    return {
        "month": month,
        "capital": capital,
        "totalSpent": total_spent,
        "remaining": round(max(0.0, capital - total_spent), 2),
        "byDate": {k: round(v, 2) for k, v in by_date.items()},
        "byCategory": {k: round(v, 2) for k, v in by_category.items()},
        "count": len(expenses),
    }
