import datetime
from typing import List, Optional
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# ---
# Enums
# ---

class View(str, Enum):
    """
    Represents the feature currently shown to the user.
    """
    NEWS = "news"
    TRANSCRIBER = "transcriber"

class InputMode(str, Enum):
    """
    Represents how media is handed to the transcriber.
    """
    URL = "url"
    FILE = "file"

class RequestState(str, Enum):
    """
    Represents the lifecycle of a single transcription request.
    """
    IDLE = "idle"
    VALIDATING = "validating"
    REJECTED = "rejected"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

class ErrorKind(str, Enum):
    """
    Represents the normalized failure categories reported to callers.
    """
    INVALID_INPUT = "invalid_input"
    DURATION_EXCEEDED = "duration_exceeded"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    CREDENTIAL_MISCONFIGURED = "credential_misconfigured"
    UPSTREAM_RESOURCE_EXHAUSTED = "upstream_resource_exhausted"
    PROCESSING_FAILED = "processing_failed"
    NETWORK_UNREACHABLE = "network_unreachable"


# ---
# Generic Models
# ---

class CamelModel(BaseModel):
    """Base model serialized with camelCase field names."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

class ErrorPublic(BaseModel):
    """Model for an error response body."""
    error: str
    details: Optional[str] = None


# ---
# News Models
# ---

class Channel(CamelModel):
    """A named news source used to group articles."""
    id: str = Field(min_length=1)
    name: str

class Article(CamelModel):
    """A single news article from the pre-loaded dataset."""
    id: int
    channel_id: str
    title: str
    content: str
    date: datetime.date
    image_url: str = ''

class Segment(BaseModel):
    """A run of text, highlighted when it matches the search query."""
    text: str
    highlighted: bool = False

class ArticlePublic(CamelModel):
    """
    Public representation of an article as shown in the news grid,
    including its resolved channel name and highlighted title and snippet.
    """
    article: Article
    channel_name: str
    title_segments: List[Segment]
    snippet_segments: List[Segment]


# ---
# Transcription Models
# ---

class TranscribeUrlRequest(BaseModel):
    """Request body for transcribing a YouTube video."""
    url: Optional[str] = None

class TranscribeFileRequest(CamelModel):
    """Request body for transcribing an uploaded file (base64 encoded)."""
    file_data: Optional[str] = None
    mime_type: Optional[str] = None

class TranscriptPublic(BaseModel):
    """
    Public representation of a transcript.
    """
    transcript: str

class TranscriptionFailure(BaseModel):
    """A normalized transcription failure."""
    kind: ErrorKind
    message: str
    status_code: int
    details: Optional[str] = None

    def to_public(self) -> ErrorPublic:
        return ErrorPublic(error=self.message, details=self.details)

class TranscriptionOutcome(BaseModel):
    """
    Terminal result of a transcription request: a transcript when the request
    succeeded, a failure when it was rejected or failed.
    """
    state: RequestState
    transcript: Optional[str] = None
    error: Optional[TranscriptionFailure] = None

    @property
    def ok(self) -> bool:
        return self.state == RequestState.SUCCEEDED
