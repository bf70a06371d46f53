import re
from typing import Optional

THUMBNAIL_BASE_URL = 'https://img.youtube.com/vi'

VIDEO_ID_PATTERNS = [
    re.compile(
        r'(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([^&\n?#]+)', re.I),
    re.compile(r'youtube\.com/v/([^&\n?#]+)', re.I),
    re.compile(r'youtube\.com/watch\?.*v=([^&\n?#]+)', re.I),
]


def extract_video_id(url: Optional[str]) -> Optional[str]:
    """
    Extract the video id from the common YouTube URL forms
    (watch?v=, youtu.be/, embed/, v/).

    :param url: Any URL or None.
    :return: The video id, or None when the URL is not a recognised YouTube link.
    """
    if not url or not isinstance(url, str):
        return None
    for pattern in VIDEO_ID_PATTERNS:
        match = pattern.search(url)
        if match and match.group(1):
            return match.group(1)
    return None


def is_youtube_url(url: Optional[str]) -> bool:
    if not url or not isinstance(url, str):
        return False
    lowered = url.lower()
    return 'youtube.com' in lowered or 'youtu.be' in lowered


def thumbnail_url(video_id: str, quality: str = 'hqdefault') -> Optional[str]:
    if not video_id:
        return None
    return f"{THUMBNAIL_BASE_URL}/{video_id}/{quality}.jpg"
