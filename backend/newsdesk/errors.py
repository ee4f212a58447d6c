from typing import Iterable, List, Optional, Tuple
from newsdesk.models import ErrorKind, TranscriptionFailure


class TranscriptionError(Exception):
    """Base class for every failure reported by the transcription flow."""
    kind = ErrorKind.PROCESSING_FAILED
    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_failure(self) -> TranscriptionFailure:
        return TranscriptionFailure(
            kind=self.kind,
            message=self.message,
            status_code=self.status_code,
            details=self.details,
        )


class InvalidInput(TranscriptionError):
    kind = ErrorKind.INVALID_INPUT
    status_code = 400

class DurationExceeded(TranscriptionError):
    kind = ErrorKind.DURATION_EXCEEDED
    status_code = 400

class PayloadTooLarge(TranscriptionError):
    kind = ErrorKind.PAYLOAD_TOO_LARGE
    status_code = 413

class CredentialMisconfigured(TranscriptionError):
    kind = ErrorKind.CREDENTIAL_MISCONFIGURED
    status_code = 500

class UpstreamResourceExhausted(TranscriptionError):
    kind = ErrorKind.UPSTREAM_RESOURCE_EXHAUSTED
    status_code = 413

class ProcessingFailed(TranscriptionError):
    kind = ErrorKind.PROCESSING_FAILED
    status_code = 500

class NetworkUnreachable(TranscriptionError):
    """Raised client-side when the transcription service cannot be reached at all."""
    kind = ErrorKind.NETWORK_UNREACHABLE
    status_code = 503


class ReadError(Exception):
    """Raised when a local media file cannot be read."""


CREDENTIAL_MESSAGE = "The server's API key is misconfigured."

# Upstream errors carry no structured codes, so they are classified by message
# text. Rules are evaluated top to bottom; the first match wins.
# (matchers, case_sensitive, kind)
ERROR_RULES: List[Tuple[Tuple[str, ...], bool, ErrorKind]] = [
    (("api key",), False, ErrorKind.CREDENTIAL_MISCONFIGURED),
    (("API_KEY",), True, ErrorKind.CREDENTIAL_MISCONFIGURED),
    (("resource has been exhausted", "resource exhausted", "request entity too large"), False, ErrorKind.UPSTREAM_RESOURCE_EXHAUSTED),
]


def classify_message(message: str, rules: Iterable[Tuple[Tuple[str, ...], bool, ErrorKind]] = ERROR_RULES) -> ErrorKind:
    """
    Map an upstream error message to an error kind.

    Falls back to ProcessingFailed when no rule matches.
    """
    lowered = message.lower()
    for matchers, case_sensitive, kind in rules:
        haystack = message if case_sensitive else lowered
        if any((m if case_sensitive else m.lower()) in haystack for m in matchers):
            return kind
    return ErrorKind.PROCESSING_FAILED


def normalize_exception(exc: Exception, too_large_message: str, failed_message: str) -> TranscriptionError:
    """
    Convert any exception raised while talking to upstream services into a
    TranscriptionError. Errors that are already normalized pass through.
    """
    if isinstance(exc, TranscriptionError):
        return exc
    raw = str(exc) or exc.__class__.__name__
    kind = classify_message(raw)
    if kind == ErrorKind.CREDENTIAL_MISCONFIGURED:
        return CredentialMisconfigured(CREDENTIAL_MESSAGE)
    if kind == ErrorKind.UPSTREAM_RESOURCE_EXHAUSTED:
        return UpstreamResourceExhausted(too_large_message)
    return ProcessingFailed(failed_message, details=raw)
