"""
Runtime settings for the expense tracker.

Values come from the environment (a .env file in the working directory is
loaded first, so DRIVE_FOLDER_ID can live there):

  EXPENSE_TRACKER_DATA_DIR   folder holding data.json (default: current dir)
  EXPENSE_TRACKER_DATA_FILE  explicit path to the ledger JSON document
  EXPENSE_TRACKER_WORK_DIR   where transient report files are written
  DRIVE_CREDENTIALS_PATH     service account JSON (default: credentials/drive-sa.json)
  DRIVE_FOLDER_ID            target Google Drive folder; empty disables upload
  REPORT_CLEANUP_DELAY       seconds before an exported report is deleted
  HOST / PORT                bind address for `expense-tracker serve`
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

DEFAULT_CLEANUP_DELAY = 8.0
DEFAULT_PORT = 3000


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name, "")
    try:
        v = float(raw)
        return v if v >= 0 else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass
class Settings:
    data_path: Path
    work_dir: Path
    credentials_path: Path
    drive_folder_id: str = ""
    cleanup_delay: float = DEFAULT_CLEANUP_DELAY
    host: str = "127.0.0.1"
    port: int = DEFAULT_PORT

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv(find_dotenv(usecwd=True))
        _raw = os.environ.get("EXPENSE_TRACKER_DATA_DIR")
        data_dir = Path(_raw).resolve() if _raw else Path.cwd()
        _raw = os.environ.get("EXPENSE_TRACKER_DATA_FILE")
        data_path = Path(_raw).resolve() if _raw else data_dir / "data.json"
        _raw = os.environ.get("EXPENSE_TRACKER_WORK_DIR")
        work_dir = Path(_raw).resolve() if _raw else data_dir
        _raw = os.environ.get("DRIVE_CREDENTIALS_PATH")
        credentials_path = Path(_raw).resolve() if _raw else data_dir / "credentials" / "drive-sa.json"
        return cls(
            data_path=data_path,
            work_dir=work_dir,
            credentials_path=credentials_path,
            drive_folder_id=os.environ.get("DRIVE_FOLDER_ID", "").strip(),
            cleanup_delay=_float_env("REPORT_CLEANUP_DELAY", DEFAULT_CLEANUP_DELAY),
            host=os.environ.get("HOST", "127.0.0.1").strip() or "127.0.0.1",
            port=_int_env("PORT", DEFAULT_PORT),
        )
