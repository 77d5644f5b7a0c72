"""
YouTube helpers for the video library.

Admins paste either a bare video id or any common YouTube URL;
we always store the 11-character id.
"""

import re

VIDEO_ID_RE = re.compile(r"^[a-zA-Z0-9_-]{11}$")
URL_PATTERNS = [
    re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([a-zA-Z0-9_-]{11})"),
    re.compile(r"youtube\.com/watch\?.*v=([a-zA-Z0-9_-]{11})"),
]


def extract_youtube_id(value: str) -> str:
    """Return the video id from a URL, or the trimmed input if nothing matches."""
    value = value.strip()
    if VIDEO_ID_RE.match(value):
        return value
    for pattern in URL_PATTERNS:
        match = pattern.search(value)
        if match:
            return match.group(1)
    return value


def youtube_thumbnail(video_id: str) -> str:
    """Max-resolution thumbnail URL, or "" for anything that isn't a video id."""
    if not video_id or not VIDEO_ID_RE.match(video_id):
        return ""
    return f"https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"
