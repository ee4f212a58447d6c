"""
Gemini transcription client.

Sends a prompt plus inline media bytes to the Google Gemini API and returns the
generated transcript text.
"""

import logging
from google import genai
from google.genai import types
from newsdesk.config import DEFAULT_MODEL

logger = logging.getLogger(__name__)


class GeminiTranscriber:
    """
    Service for transcribing media with the Google Gemini API.

    One instance wraps one ``genai.Client``; each call to ``transcribe`` is a
    single ``generate_content`` request with no retries.
    """

    def __init__(self, api_key: str, model: str = DEFAULT_MODEL):
        self.model = model
        self.client = genai.Client(api_key=api_key)

    def transcribe(self, media_bytes: bytes, mime_type: str, prompt: str) -> str:
        logger.info("Sending %d bytes (%s) to %s", len(media_bytes), mime_type, self.model)
        response = self.client.models.generate_content(
            model=self.model,
            contents=[
                prompt,
                types.Part.from_bytes(data=media_bytes, mime_type=mime_type),
            ],
        )
        return response.text or ""
