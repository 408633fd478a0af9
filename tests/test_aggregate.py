from expense_tracker.aggregate import compute_summary


def test_totals_and_remaining():
    s = compute_summary("2025-10", {"capital": 200, "expenses": [{"amount": 100}, {"amount": 50}]})
    assert s["totalSpent"] == 150
    assert s["remaining"] == 50
    assert s["count"] == 2
    assert s["month"] == "2025-10"


def test_remaining_is_floored_at_zero():
    s = compute_summary("2025-10", {"capital": 100, "expenses": [{"amount": 100}, {"amount": 50}]})
    assert s["totalSpent"] == 150
    assert s["remaining"] == 0


def test_by_date_merges_and_by_category_separates():
    expenses = [
        {"date": "2025-10-03", "category": "Food", "amount": 12.5},
        {"date": "2025-10-03", "category": "Transport", "amount": 7.5},
    ]
    s = compute_summary("2025-10", {"capital": 0, "expenses": expenses})
    assert s["byDate"] == {"2025-10-03": 20.0}
    assert s["byCategory"] == {"Food": 12.5, "Transport": 7.5}


def test_bad_amounts_count_as_zero():
    expenses = [{"date": "2025-10-01", "category": "Food", "amount": "x"}, {"date": "2025-10-01", "category": "Food"}]
    s = compute_summary("2025-10", {"capital": 10, "expenses": expenses})
    assert s["totalSpent"] == 0
    assert s["remaining"] == 10
    assert s["count"] == 2


def test_empty_month():
    s = compute_summary("2025-11", {"capital": 0.0, "expenses": []})
    assert s == {
        "month": "2025-11",
        "capital": 0.0,
        "totalSpent": 0.0,
        "remaining": 0.0,
        "byDate": {},
        "byCategory": {},
        "count": 0,
    }


def test_float_totals_round_to_cents():
    s = compute_summary("2025-10", {"capital": 1, "expenses": [{"amount": 0.1}, {"amount": 0.2}]})
    assert s["totalSpent"] == 0.3
    assert s["remaining"] == 0.7
