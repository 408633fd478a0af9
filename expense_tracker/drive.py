"""
Optional Google Drive upload for exported reports.

Needs a service account JSON file and a target folder id. When either is
missing, uploads are simply skipped. The Drive client is built on first use and
kept for the life of the process; a failed build is retried on the next call.
"""

import logging
import threading
from pathlib import Path

from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.http import MediaFileUpload

logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/drive.file",
    "https://www.googleapis.com/auth/drive",
]
XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class DriveUploader:
    def __init__(self, credentials_path: Path | None, folder_id: str = ""):
        self.credentials_path = Path(credentials_path) if credentials_path else None
        self.folder_id = (folder_id or "").strip()
        self._client = None
        self._lock = threading.Lock()
        # httplib2 under the shared client is not thread-safe
        self._request_lock = threading.Lock()

    @property
    def configured(self) -> bool:
        """True when both a credentials file and a folder id are available."""
        return bool(self.folder_id) and self.credentials_path is not None and self.credentials_path.exists()

    def _build_client(self):
        creds = service_account.Credentials.from_service_account_file(str(self.credentials_path), scopes=SCOPES)
        return build("drive", "v3", credentials=creds, cache_discovery=False)

    def client(self):
        """Shared Drive client, or None if credentials are absent or the client cannot be built."""
        if self._client is not None:
            return self._client
        if self.credentials_path is None or not self.credentials_path.exists():
            return None
        with self._lock:
            if self._client is None:
                try:
                    self._client = self._build_client()
                except Exception as e:
                    logger.warning("Failed to init Drive client: %s", e)
                    return None
        return self._client

    def upload(self, path: Path, name: str, mimetype: str = XLSX_MIME) -> dict | None:
        """Upload one file to the configured folder. Returns {id, webViewLink} or None on failure."""
        if not self.configured:
            return None
        client = self.client()
        if client is None:
            return None
        try:
            media = MediaFileUpload(str(path), mimetype=mimetype)
            metadata = {"name": name, "parents": [self.folder_id]}
            with self._request_lock:
                uploaded = client.files().create(body=metadata, media_body=media, fields="id,webViewLink").execute()
        except Exception as e:
            logger.warning("Drive upload failed: %s", e)
            return None
        logger.info("Uploaded %s to Drive (id %s)", name, uploaded.get("id"))
        return uploaded
