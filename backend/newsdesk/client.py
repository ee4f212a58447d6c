"""HTTP client for the transcription endpoints."""

import logging
import os
from typing import Any, Dict, Optional

import requests

from newsdesk.config import DEFAULT_MAX_UPLOAD_BYTES
from newsdesk.encoding import encode_file
from newsdesk.errors import NetworkUnreachable, PayloadTooLarge, ReadError, TranscriptionError
from newsdesk.utils import format_size

logger = logging.getLogger(__name__)

DEFAULT_ERROR = "An error occurred while fetching the transcript from the server."


class TranscriberClient:
    """
    Calls the transcription API. One call per request, no retries.

    ``timeout`` defaults to None: a hung server keeps the call pending.
    """

    def __init__(
        self,
        base_url: str,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.max_upload_bytes = max_upload_bytes
        self.session = session or requests.Session()
        self.timeout = timeout

    def transcribe_url(self, url: str) -> str:
        return self._post("/api/transcribe-youtube", {"url": url})

    def transcribe_file(self, path: str) -> str:
        try:
            size = os.path.getsize(path)
        except OSError as exc:
            raise ReadError(f"Unable to read {path}: {exc}") from exc
        # Checked from file metadata, before reading or uploading anything
        if size > self.max_upload_bytes:
            raise PayloadTooLarge(
                f"File exceeds the {format_size(self.max_upload_bytes)} limit and cannot be uploaded."
            )
        media = encode_file(path)
        return self._post("/api/transcribe-file", media.to_payload())

    def _post(self, path: str, payload: Dict[str, Any]) -> str:
        try:
            resp = self.session.post(f"{self.base_url}{path}", json=payload, timeout=self.timeout)
        except requests.ConnectionError as exc:
            raise NetworkUnreachable(str(exc)) from exc

        try:
            data = resp.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if not resp.ok:
            logger.warning("Transcription request failed (%s): %s", resp.status_code, data)
            raise TranscriptionError(
                data.get("error") or DEFAULT_ERROR,
                details=data.get("details"),
                status_code=resp.status_code,
            )
        return data.get("transcript", "")
