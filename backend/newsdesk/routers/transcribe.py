from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from newsdesk.dependencies import get_transcription_handler
from newsdesk.models import ErrorPublic, TranscribeFileRequest, TranscribeUrlRequest, TranscriptionOutcome, TranscriptPublic
from newsdesk.transcription import TranscriptionHandler

router = APIRouter(prefix="/api", tags=["Transcription"])

ERROR_RESPONSES = {
    400: {"model": ErrorPublic},
    413: {"model": ErrorPublic},
    500: {"model": ErrorPublic},
}

def to_response(outcome: TranscriptionOutcome) -> JSONResponse:
    if outcome.ok:
        return JSONResponse(status_code=200, content=TranscriptPublic(transcript=outcome.transcript or '').model_dump())
    return JSONResponse(
        status_code=outcome.error.status_code,
        content=outcome.error.to_public().model_dump(exclude_none=True),
    )

# Plain def: the handler blocks on network I/O, so FastAPI runs it in the threadpool
@router.post("/transcribe-youtube", response_model=TranscriptPublic, responses=ERROR_RESPONSES)
def transcribe_youtube(body: TranscribeUrlRequest, handler: TranscriptionHandler = Depends(get_transcription_handler)):
    """
    Transcribe the audio track of a YouTube video.
    """
    return to_response(handler.transcribe_url(body.url))

@router.post("/transcribe-file", response_model=TranscriptPublic, responses=ERROR_RESPONSES)
def transcribe_file(body: TranscribeFileRequest, handler: TranscriptionHandler = Depends(get_transcription_handler)):
    """
    Transcribe an uploaded audio or video file sent as base64.
    """
    return to_response(handler.transcribe_file(body.file_data, body.mime_type))
