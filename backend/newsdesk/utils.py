import re
from typing import Optional
from urllib.parse import urlparse, parse_qs

VIDEO_ID_RE = re.compile(r'^[\w-]{11}$')
YOUTUBE_HOSTS = {'www.youtube.com', 'youtube.com', 'm.youtube.com', 'music.youtube.com'}

def get_youtube_id(url: str) -> Optional[str]:
    # Examples:
    # - http://youtu.be/SA2iWivDJiE
    # - http://www.youtube.com/watch?v=_oPAwA_Udwc&feature=feedu
    # - http://www.youtube.com/embed/SA2iWivDJiE
    # - http://www.youtube.com/v/SA2iWivDJiE?version=3&amp;hl=en_US
    # - https://www.youtube.com/shorts/SA2iWivDJiE
    query = urlparse(url.strip())
    if query.scheme not in ('http', 'https'):
        return None
    video_id = None
    if query.hostname == 'youtu.be':
        video_id = query.path[1:]
    elif query.hostname in YOUTUBE_HOSTS:
        if query.path == '/watch':
            video_id = parse_qs(query.query).get('v', [None])[0]
        elif query.path.startswith(('/watch/', '/embed/', '/v/', '/shorts/', '/live/')):
            parts = query.path.split('/')
            video_id = parts[2] if len(parts) > 2 else None
    if video_id and VIDEO_ID_RE.match(video_id):
        return video_id
    # returns None for invalid YouTube url
    return None

def format_duration(seconds: int) -> str:
    """Format seconds as e.g. "42s", "2m 35s" or "1h 15m 23s"."""
    seconds = int(seconds)
    if seconds < 60:
        return f"{seconds}s"
    minutes, secs = divmod(seconds, 60)
    if minutes < 60:
        return f"{minutes}m {secs}s"
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins}m {secs}s"

def format_size(num_bytes: int) -> str:
    """Format a byte count in megabytes, e.g. "4.5MB"."""
    return f"{num_bytes / (1024 * 1024):g}MB"
