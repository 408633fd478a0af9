"""Write rendered reports to disk, hand them to Drive, and reap them afterwards."""

import logging
import threading
from dataclasses import dataclass
from pathlib import Path

from openpyxl import Workbook
from werkzeug.utils import secure_filename

from .drive import DriveUploader

logger = logging.getLogger(__name__)


@dataclass
class PublishResult:
    local_path: Path
    filename: str
    upload: dict | None = None


def report_filename(month: str) -> str:
    return secure_filename(f"report-{month}.xlsx") or "report.xlsx"


def _remove_quietly(path: Path) -> None:
    try:
        path.unlink()
    except OSError:
        pass


class ReportPublisher:
    def __init__(self, work_dir: Path, uploader: DriveUploader | None = None, cleanup_delay: float = 8.0):
        self.work_dir = Path(work_dir)
        self.uploader = uploader
        self.cleanup_delay = cleanup_delay

    def publish(self, workbook: Workbook, month: str) -> PublishResult:
        filename = report_filename(month)
        self.work_dir.mkdir(parents=True, exist_ok=True)
        out_path = self.work_dir / filename
        workbook.save(out_path)
        logger.info("Saved report %s", out_path)
        uploaded = None
        if self.uploader is not None and self.uploader.configured:
            uploaded = self.uploader.upload(out_path, filename)
        return PublishResult(local_path=out_path, filename=filename, upload=uploaded)

    def schedule_cleanup(self, path: Path) -> threading.Timer:
        """Delete the transient report after the grace delay; failures are ignored."""
        timer = threading.Timer(self.cleanup_delay, _remove_quietly, args=(Path(path),))
        timer.daemon = True
        timer.start()
        return timer
