import time

from openpyxl import Workbook, load_workbook

from expense_tracker.drive import DriveUploader
from expense_tracker.publisher import ReportPublisher, report_filename

from .conftest import FakeUploader


def _workbook():
    wb = Workbook()
    wb.active.title = "Overview"
    wb.active["A1"] = "hello"
    return wb


def test_report_filename_is_derived_from_month():
    assert report_filename("2025-10") == "report-2025-10.xlsx"
    assert "/" not in report_filename("../../etc/2025-10")


def test_publish_writes_file_and_uploads(tmp_path):
    uploader = FakeUploader()
    result = ReportPublisher(tmp_path / "work", uploader=uploader).publish(_workbook(), "2025-10")
    assert result.local_path == tmp_path / "work" / "report-2025-10.xlsx"
    assert load_workbook(result.local_path)["Overview"]["A1"].value == "hello"
    assert uploader.calls == [(result.local_path, "report-2025-10.xlsx")]
    assert result.upload["id"] == "drive-123"


def test_publish_skips_unconfigured_uploader(tmp_path):
    uploader = FakeUploader(configured=False)
    result = ReportPublisher(tmp_path, uploader=uploader).publish(_workbook(), "2025-10")
    assert result.local_path.exists()
    assert result.upload is None
    assert uploader.calls == []


def test_publish_without_credentials_file_attempts_no_upload(tmp_path, monkeypatch):
    uploader = DriveUploader(tmp_path / "missing.json", "folder-1")
    def build():
        raise AssertionError("client should not be built")

    monkeypatch.setattr(uploader, "_build_client", build)
    result = ReportPublisher(tmp_path, uploader=uploader).publish(_workbook(), "2025-10")
    assert result.local_path.exists()
    assert result.upload is None


def test_failed_upload_still_returns_file(tmp_path):
    uploader = FakeUploader(result={})
    uploader.upload = lambda path, name: None
    result = ReportPublisher(tmp_path, uploader=uploader).publish(_workbook(), "2025-10")
    assert result.local_path.exists()
    assert result.upload is None


def test_schedule_cleanup_removes_file(tmp_path):
    path = tmp_path / "report-2025-10.xlsx"
    path.write_bytes(b"x")
    timer = ReportPublisher(tmp_path, cleanup_delay=0.01).schedule_cleanup(path)
    timer.join(timeout=5)
    assert not path.exists()


def test_schedule_cleanup_ignores_missing_file(tmp_path):
    timer = ReportPublisher(tmp_path, cleanup_delay=0).schedule_cleanup(tmp_path / "gone.xlsx")
    timer.join(timeout=5)
    assert not timer.is_alive()


def test_cleanup_waits_for_grace_delay(tmp_path):
    path = tmp_path / "report.xlsx"
    path.write_bytes(b"x")
    timer = ReportPublisher(tmp_path, cleanup_delay=30).schedule_cleanup(path)
    time.sleep(0.05)
    assert path.exists()
    timer.cancel()
