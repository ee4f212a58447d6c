"""
UI session state: which feature is shown, the news filters and the
transcriber form.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional
from newsdesk.client import TranscriberClient
from newsdesk.errors import NetworkUnreachable, ReadError, TranscriptionError
from newsdesk.models import ArticlePublic, InputMode, View
from newsdesk.news import ALL_CHANNELS, ArticleStore, query

logger = logging.getLogger(__name__)

MISSING_INPUT_MESSAGE = "Please provide a video URL or upload a file."
UNREACHABLE_MESSAGE = "Unable to reach the transcription service. Check your network connection or try again later."


@dataclass
class NewsViewState:
    active_channel: str = ALL_CHANNELS
    search_query: str = ''
    # None until the first refresh; [] means nothing matched
    results: Optional[List[ArticlePublic]] = None

    def refresh(self, store: ArticleStore) -> List[ArticlePublic]:
        self.results = query(store, self.active_channel, self.search_query)
        return self.results


@dataclass
class TranscriberState:
    """
    Form state of the transcriber. Switching input mode resets every field
    that depends on the previous mode.
    """
    input_mode: InputMode = InputMode.URL
    url_value: str = ''
    file_path: Optional[str] = None
    file_name: str = ''
    is_loading: bool = False
    transcript: str = ''
    error: str = ''
    is_copied: bool = False

    def reset(self) -> None:
        self.url_value = ''
        self.file_path = None
        self.file_name = ''
        self.transcript = ''
        self.error = ''
        self.is_copied = False

    def switch_mode(self, mode: InputMode) -> None:
        self.input_mode = InputMode(mode)
        self.reset()

    def set_url(self, value: str) -> None:
        self.url_value = value
        self.error = ''

    def select_file(self, path: str) -> None:
        self.file_path = path
        self.file_name = os.path.basename(path)
        self.transcript = ''
        self.error = ''

    def has_input(self) -> bool:
        if self.input_mode == InputMode.URL:
            return bool(self.url_value.strip())
        return self.file_path is not None

    def submit(self, client: TranscriberClient) -> bool:
        """
        Send the current input for transcription. Returns True when a
        transcript was received.
        """
        if self.is_loading:
            return False
        if not self.has_input():
            self.error = MISSING_INPUT_MESSAGE
            return False

        self.is_loading = True
        self.transcript = ''
        self.error = ''
        self.is_copied = False
        try:
            if self.input_mode == InputMode.URL:
                self.transcript = client.transcribe_url(self.url_value)
            else:
                self.transcript = client.transcribe_file(self.file_path)
        except NetworkUnreachable as e:
            logger.warning("Transcription service unreachable: %s", e)
            self.error = UNREACHABLE_MESSAGE
        except (TranscriptionError, ReadError) as e:
            self.error = f"Transcription failed: {getattr(e, 'message', e)}"
        finally:
            self.is_loading = False
        return bool(self.transcript) and not self.error

    def copy_transcript(self) -> bool:
        if self.transcript:
            self.is_copied = True
        return self.is_copied


@dataclass
class AppState:
    current_view: View = View.NEWS
    news: NewsViewState = field(default_factory=NewsViewState)
    transcriber: TranscriberState = field(default_factory=TranscriberState)

    def switch_view(self, view: View) -> None:
        self.current_view = View(view)
