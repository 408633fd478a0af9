"""
Command line entry point.

Usage:
  expense-tracker serve                 # run the JSON API
  expense-tracker report 2025-10        # write report-2025-10.xlsx (uploads when Drive is configured)
  expense-tracker summary 2025-10       # print the month summary as JSON
"""

import json
import logging
import sys

from .aggregate import compute_summary
from .app import create_app
from .config import Settings
from .drive import DriveUploader
from .ledger_store import LedgerStore
from .make_monthly_report import render_report
from .publisher import ReportPublisher

logger = logging.getLogger(__name__)

USAGE = "Usage: expense-tracker serve | report <YYYY-MM> | summary <YYYY-MM>"


def _month_arg(args: list[str]) -> str:
    month = args[0].strip() if args else ""
    if not month:
        print("Error: month (YYYY-MM) is required.", file=sys.stderr)
        sys.exit(1)
    return month


def serve(settings: Settings) -> None:
    uploader = DriveUploader(settings.credentials_path, settings.drive_folder_id)
    publisher = ReportPublisher(settings.work_dir, uploader=uploader, cleanup_delay=settings.cleanup_delay)
    if uploader.client() is not None:
        logger.info("Google Drive client initialized (reports upload when DRIVE_FOLDER_ID is set).")
    app = create_app(settings, publisher=publisher)
    logger.info("Server running on http://%s:%d", settings.host, settings.port)
    app.run(host=settings.host, port=settings.port)


def write_report(settings: Settings, month: str) -> None:
    store = LedgerStore(settings.data_path)
    uploader = DriveUploader(settings.credentials_path, settings.drive_folder_id)
    publisher = ReportPublisher(settings.work_dir, uploader=uploader)
    record = store.month(month)
    result = publisher.publish(render_report(month, compute_summary(month, record), record["expenses"]), month)
    print(f"Done. Saved: {result.local_path}")
    if result.upload:
        print(f"  – Drive: {result.upload.get('webViewLink') or result.upload.get('id')}")


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print(USAGE, file=sys.stderr)
        sys.exit(1)
    command, rest = args[0], args[1:]
    settings = Settings.from_env()
    if command == "serve":
        serve(settings)
    elif command == "report":
        write_report(settings, _month_arg(rest))
    elif command == "summary":
        month = _month_arg(rest)
        store = LedgerStore(settings.data_path)
        print(json.dumps(compute_summary(month, store.month(month)), indent=2, ensure_ascii=False))
    else:
        print(f"Unknown command: {command}\n{USAGE}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
