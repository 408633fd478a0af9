"""
JSON-backed ledger: one document holding every month's capital and expenses.

Layout on disk:
  {"months": {"2025-10": {"capital": 1500.0, "expenses": [{...}, ...]}}}

The whole document is read and rewritten on every change. Reads and mutations
share one re-entrant store lock: mutations hold it from load to save, and the
first-time creation of the file happens under it too.
"""

import json
import logging
import math
import os
import random
import string
import tempfile
import threading
import time
from pathlib import Path

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.digits + string.ascii_lowercase


class ValidationError(ValueError):
    """A required field is missing or cannot be used."""


def empty_document() -> dict:
    return {"months": {}}


def empty_month() -> dict:
    return {"capital": 0.0, "expenses": []}


def parse_amount(value) -> float | None:
    """Coerce a request value to a finite float, or None if it is not a number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return None
    try:
        v = float(value)
    except (TypeError, ValueError):
        return None
    return v if math.isfinite(v) else None


def _base36(n: int) -> str:
    if n == 0:
        return "0"
    out = []
    while n:
        n, r = divmod(n, 36)
        out.append(_ID_ALPHABET[r])
    return "".join(reversed(out))


def new_expense_id() -> str:
    """Millisecond timestamp in base36 plus a six character random suffix."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=6))
    return _base36(int(time.time() * 1000)) + suffix


def _normalize_month(record) -> dict:
    if not isinstance(record, dict):
        return empty_month()
    capital = parse_amount(record.get("capital"))
    expenses = record.get("expenses")
    return {
        "capital": capital if capital is not None else 0.0,
        "expenses": [e for e in expenses if isinstance(e, dict)] if isinstance(expenses, list) else [],
    }


def _normalize_document(data) -> dict:
    if not isinstance(data, dict) or not isinstance(data.get("months"), dict):
        return empty_document()
    return {"months": {str(k): _normalize_month(v) for k, v in data["months"].items()}}


def _required(value) -> bool:
    return isinstance(value, str) and bool(value.strip())


class LedgerStore:
    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.RLock()

    def _ensure(self) -> None:
        if not self.path.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.save(empty_document())

    def load(self) -> dict:
        """Return the ledger document; never raises for a missing or corrupt file."""
        try:
            with self._lock:
                self._ensure()
                with open(self.path, encoding="utf-8") as f:
                    data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not read %s, using an empty ledger: %s", self.path.name, e)
            return empty_document()
        return _normalize_document(data)

    def save(self, doc: dict) -> None:
        """Write the whole document to a temp file next to the ledger, then swap it in."""
        fd, tmp = tempfile.mkstemp(prefix=".ledger-", suffix=".json", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(doc, f, indent=2, ensure_ascii=False)
            os.replace(tmp, self.path)
        except OSError:
            try:
                os.unlink(tmp)
            except OSError:
                pass
            raise

    def month(self, month: str) -> dict:
        """Month record for reading; a default record if the month was never written."""
        return self.load()["months"].get(month) or empty_month()

    def set_capital(self, month: str, amount) -> float:
        if not _required(month) or amount is None:
            raise ValidationError("month (text) and amount required")
        value = parse_amount(amount)
        capital = max(value, 0.0) if value is not None else 0.0
        with self._lock:
            doc = self.load()
            record = doc["months"].setdefault(month, empty_month())
            record["capital"] = capital
            self.save(doc)
        logger.info("Capital for %s set to %.2f", month, capital)
        return capital

    def add_expense(self, month: str, date: str, category: str, amount, note: str | None = "") -> dict:
        if not (_required(month) and _required(date) and _required(category)) or amount is None:
            raise ValidationError("month, date, category (text) and amount required")
        value = parse_amount(amount)
        if value is None:
            raise ValidationError(f"amount must be a number, got {amount!r}")
        if value < 0:
            raise ValidationError("amount must not be negative")
        with self._lock:
            doc = self.load()
            record = doc["months"].setdefault(month, empty_month())
            taken = {e.get("id") for e in record["expenses"]}
            expense_id = new_expense_id()
            while expense_id in taken:
                expense_id = new_expense_id()
            expense = {
                "id": expense_id,
                "date": str(date).strip(),
                "category": str(category).strip(),
                "amount": value,
                "note": str(note) if note is not None else "",
            }
            record["expenses"].append(expense)
            self.save(doc)
        logger.info("Added %s expense of %.2f on %s", expense["category"], value, expense["date"])
        return expense

    def remove_expense(self, month: str, expense_id: str) -> int:
        with self._lock:
            doc = self.load()
            record = doc["months"].get(month)
            if record is None:
                return 0
            before = len(record["expenses"])
            record["expenses"] = [e for e in record["expenses"] if e.get("id") != expense_id]
            removed = before - len(record["expenses"])
            self.save(doc)
        return removed

    def list_expenses(self, month: str) -> list[dict]:
        """Expenses for the month, newest date first."""
        expenses = self.month(month)["expenses"]
        return sorted(expenses, key=lambda e: str(e.get("date") or ""), reverse=True)
