from functools import lru_cache
from newsdesk.config import Settings
from newsdesk.news import ArticleStore, load_store
from newsdesk.transcription import TranscriptionHandler


def get_settings() -> Settings:
    # Read per request so a rotated API key is picked up without a restart
    return Settings.from_env()


@lru_cache
def get_store() -> ArticleStore:
    """The article store is loaded once per process and never mutated."""
    return load_store(Settings.from_env().news_data_path)


def get_transcription_handler() -> TranscriptionHandler:
    return TranscriptionHandler(get_settings())
