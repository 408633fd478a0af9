import pytest

from expense_tracker.app import create_app
from expense_tracker.config import Settings
from expense_tracker.ledger_store import LedgerStore
from expense_tracker.publisher import ReportPublisher


class FakeUploader:
    """Stands in for DriveUploader; records every upload call."""

    def __init__(self, configured=True, result=None):
        self.configured = configured
        self.result = result if result is not None else {"id": "drive-123", "webViewLink": "https://drive.example/123"}
        self.calls = []

    def upload(self, path, name):
        self.calls.append((path, name))
        return self.result


@pytest.fixture
def settings(tmp_path):
    return Settings(
        data_path=tmp_path / "data.json",
        work_dir=tmp_path / "work",
        credentials_path=tmp_path / "credentials" / "drive-sa.json",
        cleanup_delay=0.0,
    )


@pytest.fixture
def store(settings):
    return LedgerStore(settings.data_path)


@pytest.fixture
def uploader():
    return FakeUploader()


@pytest.fixture
def publisher(settings, uploader):
    return ReportPublisher(settings.work_dir, uploader=uploader, cleanup_delay=60.0)


@pytest.fixture
def client(settings, store, publisher):
    app = create_app(settings, store=store, publisher=publisher)
    app.config["TESTING"] = True
    return app.test_client()
