from typing import Any, Dict, List, Optional
import glob
import logging
import os
import tempfile
from dataclasses import dataclass, field
from newsdesk.utils import get_youtube_id
from yt_dlp import YoutubeDL

logger = logging.getLogger(__name__)

AUDIO_MIME_TYPES = {
    'm4a': 'audio/mp4',
    'mp4': 'audio/mp4',
    'webm': 'audio/webm',
    'mp3': 'audio/mpeg',
    'ogg': 'audio/ogg',
    'opus': 'audio/ogg',
}
# YouTube audio is usually served in an mp4 container
DEFAULT_AUDIO_MIME_TYPE = 'audio/mp4'


@dataclass
class VideoInfo:
    video_id: str
    title: str
    duration_seconds: int
    formats: List[Dict[str, Any]] = field(default_factory=list)


def is_audio_only(fmt: Dict[str, Any]) -> bool:
    return fmt.get('vcodec') == 'none' and fmt.get('acodec') not in (None, 'none')


class YouTubeSource:
    """
    Thin wrapper around yt-dlp: resolves metadata and fetches an audio-only stream.
    """

    def __init__(self, ydl_opts: Optional[Dict[str, Any]] = None):
        self.ydl_opts = {
            'quiet': True,
            'no_warnings': True,
            'noplaylist': True,
            **(ydl_opts or {}),
        }

    def validate_url(self, url: str) -> bool:
        return get_youtube_id(url) is not None

    def get_info(self, url: str) -> VideoInfo:
        with YoutubeDL(self.ydl_opts) as ydl:
            info = ydl.extract_info(url, download=False)
        return VideoInfo(
            video_id=info.get('id', ''),
            title=info.get('title', 'Unknown Title'),
            duration_seconds=int(info.get('duration') or 0),
            formats=info.get('formats') or [],
        )

    def choose_audio_format(self, formats: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        """Pick the lowest quality audio-only format, or None when there is none."""
        candidates = [f for f in formats if is_audio_only(f)]
        if not candidates:
            return None
        # Formats without a known bitrate or size rank after every known one
        return min(candidates, key=lambda f: (
            f.get('abr') or f.get('tbr') or float('inf'),
            f.get('filesize') or float('inf'),
        ))

    def mime_type_for(self, fmt: Dict[str, Any]) -> str:
        return AUDIO_MIME_TYPES.get(fmt.get('ext', ''), DEFAULT_AUDIO_MIME_TYPE)

    def download(self, url: str, fmt: Dict[str, Any]) -> bytes:
        """Download a single format into memory. Nothing is kept on disk."""
        with tempfile.TemporaryDirectory() as folder:
            ydl_opts = {
                **self.ydl_opts,
                'format': fmt['format_id'],
                'outtmpl': os.path.join(folder, '%(id)s.%(ext)s'),
            }
            with YoutubeDL(ydl_opts) as ydl:
                ydl.download([url])

            files = glob.glob(os.path.join(folder, '*'))
            if not files:
                raise FileNotFoundError(f"Failed to download audio stream {fmt['format_id']} for {url}")
            with open(files[0], 'rb') as f:
                data = f.read()
        logger.info("Downloaded %d bytes of audio (format %s)", len(data), fmt['format_id'])
        return data
