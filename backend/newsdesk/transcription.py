"""
Transcription request handling.

Each request walks ``validating -> (rejected | submitting) -> (succeeded | failed)``.
Validation runs before any outbound call; every failure, local or upstream, is
normalized into a TranscriptionOutcome so callers never see raw exceptions.
"""

import logging
from typing import Callable, Optional
from newsdesk.config import Settings
from newsdesk.encoding import from_base64
from newsdesk.errors import (
    CREDENTIAL_MESSAGE,
    CredentialMisconfigured,
    DurationExceeded,
    InvalidInput,
    PayloadTooLarge,
    TranscriptionError,
    normalize_exception,
)
from newsdesk.gemini import GeminiTranscriber
from newsdesk.models import RequestState, TranscriptionOutcome
from newsdesk.utils import format_duration, format_size
from newsdesk.youtube import YouTubeSource

logger = logging.getLogger(__name__)

FILE_PROMPT = (
    "這是一段影音檔案，請將其內容完整地轉錄為繁體中文的逐字稿。"
    "請盡可能區分不同的說話者，例如使用 \"發言者1\"、\"發言者2\" 等標籤。"
)
AUDIO_PROMPT = (
    "這是一段音訊，請將其內容完整地轉錄為繁體中文的逐字稿。"
    "請盡可能區分不同的說話者，例如使用 \"發言者1\"、\"發言者2\" 等標籤。"
)


class TranscriptionHandler:
    """
    Validates a transcription request, forwards the media to the transcription
    service exactly once and normalizes the result.
    """

    def __init__(
        self,
        settings: Settings,
        transcriber_factory: Callable[..., GeminiTranscriber] = GeminiTranscriber,
        media_source: Optional[YouTubeSource] = None,
    ):
        self.settings = settings
        self.transcriber_factory = transcriber_factory
        self.media_source = media_source or YouTubeSource()

    def _transcriber(self) -> GeminiTranscriber:
        if not self.settings.api_key:
            logger.error("API_KEY environment variable is not set.")
            raise CredentialMisconfigured(CREDENTIAL_MESSAGE)
        return self.transcriber_factory(api_key=self.settings.api_key, model=self.settings.gemini_model)

    def transcribe_url(self, url: Optional[str]) -> TranscriptionOutcome:
        state = RequestState.VALIDATING
        try:
            if not url or not url.strip() or not self.media_source.validate_url(url.strip()):
                raise InvalidInput("Missing or invalid YouTube URL.")
            url = url.strip()
            transcriber = self._transcriber()

            info = self.media_source.get_info(url)
            limit = self.settings.max_video_duration_seconds
            if info.duration_seconds > limit:
                raise DurationExceeded(
                    f"Video length ({format_duration(info.duration_seconds)}) exceeds the {format_duration(limit)} limit."
                )
            audio_format = self.media_source.choose_audio_format(info.formats)
            if not audio_format:
                raise InvalidInput("No audio format found for this video.")

            state = RequestState.SUBMITTING
            logger.info("[transcribe-url] %s (%ss), format %s", info.video_id, info.duration_seconds, audio_format.get('format_id'))
            audio = self.media_source.download(url, audio_format)
            transcript = transcriber.transcribe(audio, self.media_source.mime_type_for(audio_format), AUDIO_PROMPT)
        except Exception as e:
            return self._failure(
                "transcribe-url", state, e,
                too_large_message="The video is too large to process.",
                failed_message="An error occurred while processing the YouTube video.",
            )
        return self._success("transcribe-url", transcript)

    def transcribe_file(self, file_data: Optional[str], mime_type: Optional[str]) -> TranscriptionOutcome:
        state = RequestState.VALIDATING
        too_large_message = (
            f"File is too large to process. Please upload a file smaller than "
            f"{format_size(self.settings.max_upload_bytes)}."
        )
        try:
            if not file_data or not mime_type:
                raise InvalidInput("Missing file data or MIME type.")
            media_bytes = from_base64(file_data)
            if len(media_bytes) > self.settings.max_upload_bytes:
                raise PayloadTooLarge(too_large_message)
            transcriber = self._transcriber()

            state = RequestState.SUBMITTING
            logger.info("[transcribe-file] %d bytes (%s)", len(media_bytes), mime_type)
            transcript = transcriber.transcribe(media_bytes, mime_type, FILE_PROMPT)
        except Exception as e:
            return self._failure(
                "transcribe-file", state, e,
                too_large_message=too_large_message,
                failed_message="An error occurred while processing the file.",
            )
        return self._success("transcribe-file", transcript)

    def _success(self, name: str, transcript: str) -> TranscriptionOutcome:
        logger.info("[%s] Transcript ready (%d chars)", name, len(transcript))
        return TranscriptionOutcome(state=RequestState.SUCCEEDED, transcript=transcript)

    def _failure(self, name: str, state: RequestState, exc: Exception,
                 too_large_message: str, failed_message: str) -> TranscriptionOutcome:
        if isinstance(exc, TranscriptionError) and state == RequestState.VALIDATING:
            logger.info("[%s] Rejected: %s", name, exc.message)
            return TranscriptionOutcome(state=RequestState.REJECTED, error=exc.to_failure())

        logger.error("[%s] Error: %s", name, exc, exc_info=not isinstance(exc, TranscriptionError))
        error = normalize_exception(exc, too_large_message=too_large_message, failed_message=failed_message)
        return TranscriptionOutcome(state=RequestState.FAILED, error=error.to_failure())
