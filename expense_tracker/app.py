"""
JSON API for the expense tracker (Flask).

  POST   /api/capital                {month, amount}
  POST   /api/expenses               {month, date, category, amount, note?}
  GET    /api/expenses/<month>
  DELETE /api/expenses/<id>?month=...
  GET    /api/summary/<month>
  GET    /api/export/<month>         .xlsx download (uploaded to Drive when configured)
  GET    /api/export/<month>/csv
  GET    /api/dashboard/<month>
"""

import logging

from flask import Flask, Response, jsonify, request, send_file

from .aggregate import compute_summary
from .config import Settings
from .csv_export import csv_filename, expenses_to_csv
from .dashboard import dashboard_html
from .drive import XLSX_MIME, DriveUploader
from .ledger_store import LedgerStore, ValidationError
from .make_monthly_report import render_report
from .publisher import ReportPublisher

logger = logging.getLogger(__name__)


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _missing(data: dict, *fields) -> bool:
    for name in fields:
        value = data.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            return True
    return False


def _not_text(data: dict, *fields) -> bool:
    return any(not isinstance(data.get(name), str) for name in fields)


def create_app(settings: Settings | None = None, store: LedgerStore | None = None,
               publisher: ReportPublisher | None = None) -> Flask:
    settings = settings or Settings.from_env()
    store = store or LedgerStore(settings.data_path)
    if publisher is None:
        uploader = DriveUploader(settings.credentials_path, settings.drive_folder_id)
        publisher = ReportPublisher(settings.work_dir, uploader=uploader, cleanup_delay=settings.cleanup_delay)

    app = Flask(__name__)
    app.config["SETTINGS"] = settings

    @app.errorhandler(ValidationError)
    def validation_failed(e):
        return jsonify({"error": str(e)}), 400

    @app.post("/api/capital")
    def set_capital():
        data = _json_body()
        if _missing(data, "month", "amount"):
            return jsonify({"error": "month and amount required"}), 400
        if _not_text(data, "month"):
            return jsonify({"error": "month must be text"}), 400
        capital = store.set_capital(data["month"], data["amount"])
        return jsonify({"ok": True, "capital": capital})

    @app.post("/api/expenses")
    def add_expense():
        data = _json_body()
        if _missing(data, "month", "date", "category", "amount"):
            return jsonify({"error": "month, date, category, amount required"}), 400
        if _not_text(data, "month", "date", "category"):
            return jsonify({"error": "month, date and category must be text"}), 400
        expense = store.add_expense(data["month"], data["date"], data["category"], data["amount"], data.get("note"))
        return jsonify(expense), 201

    @app.get("/api/expenses/<month>")
    def list_expenses(month):
        return jsonify(store.list_expenses(month))

    @app.delete("/api/expenses/<expense_id>")
    def remove_expense(expense_id):
        month = (request.args.get("month") or "").strip()
        if not month:
            return jsonify({"error": "month query is required"}), 400
        removed = store.remove_expense(month, expense_id)
        return jsonify({"ok": True, "removed": removed})

    @app.get("/api/summary/<month>")
    def summary(month):
        return jsonify(compute_summary(month, store.month(month)))

    @app.get("/api/export/<month>")
    def export_report(month):
        record = store.month(month)
        wb = render_report(month, compute_summary(month, record), record["expenses"])
        result = publisher.publish(wb, month)
        logger.info("Exporting %s (%d expenses)", result.filename, len(record["expenses"]))
        response = send_file(result.local_path, mimetype=XLSX_MIME, as_attachment=True, download_name=result.filename)
        if result.upload:
            response.headers["X-Drive-File-Id"] = str(result.upload.get("id", ""))
        # send_file keeps its own handle open; the unlink only drops the directory entry
        publisher.schedule_cleanup(result.local_path)
        return response

    @app.get("/api/export/<month>/csv")
    def export_csv(month):
        body = expenses_to_csv(store.month(month)["expenses"])
        return Response(
            body,
            mimetype="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{csv_filename(month)}"'},
        )

    @app.get("/api/dashboard/<month>")
    def dashboard(month):
        return Response(dashboard_html(compute_summary(month, store.month(month))), mimetype="text/html")

    return app
