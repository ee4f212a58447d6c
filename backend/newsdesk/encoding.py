import base64
import binascii
import mimetypes
import os
from dataclasses import dataclass
from typing import Dict
from newsdesk.errors import InvalidInput, ReadError

DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class EncodedMedia:
    media_bytes: bytes
    mime_type: str
    filename: str = ''

    @property
    def size(self) -> int:
        return len(self.media_bytes)

    def to_payload(self) -> Dict[str, str]:
        """Request body for the file transcription endpoint."""
        return {"fileData": to_base64(self.media_bytes), "mimeType": self.mime_type}


def guess_mime_type(path: str) -> str:
    # Declared by the file's name, never sniffed from its content
    mime_type, _ = mimetypes.guess_type(path)
    return mime_type or DEFAULT_MIME_TYPE


def encode_file(path: str) -> EncodedMedia:
    """
    Read a local media file.

    Raises:
        ReadError: the file is missing or unreadable.
    """
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise ReadError(f"Unable to read {path}: {e}") from e
    return EncodedMedia(media_bytes=data, mime_type=guess_mime_type(path), filename=os.path.basename(path))


def to_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def from_base64(text: str) -> bytes:
    # Accept data URLs as produced by browsers ("data:audio/mp4;base64,....")
    if text.startswith("data:") and "," in text:
        text = text.split(",", 1)[1]
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidInput("File data is not valid base64.") from e
