import re
from typing import Optional

# Checked in order; youtu.be first because its path is the id itself.
_YOUTUBE_PATTERNS = [
    re.compile(r"youtu\.be/([\w-]+)", re.IGNORECASE),
    re.compile(r"youtube\.com/watch\?(?:.*&)?v=([\w-]+)", re.IGNORECASE),
    re.compile(r"youtube\.com/embed/([\w-]+)", re.IGNORECASE),
    re.compile(r"youtube\.com/v/([\w-]+)", re.IGNORECASE),
    re.compile(r"youtube\.com/shorts/([\w-]+)", re.IGNORECASE),
]

_VIMEO_PATTERN = re.compile(r"vimeo\.com/(?:.*/)?(\d+)")

_DRIVE_PATTERNS = [
    re.compile(r"/file/d/([\w-]+)"),
    re.compile(r"[?&]id=([\w-]+)"),
]


def _strip_fragment(url: str) -> str:
    return url.split("#", 1)[0]


def youtube_video_id(url: str) -> Optional[str]:
    """
    Extracts the bare video id from any of the YouTube URL forms:
    watch?v=, youtu.be/, /embed/, /v/ (and /shorts/).
    Trailing query parameters and fragments are never part of the id.
    """
    if not url or not isinstance(url, str):
        return None

    candidate = _strip_fragment(url.strip())
    for pattern in _YOUTUBE_PATTERNS:
        match = pattern.search(candidate)
        if match:
            return match.group(1).split("&")[0].split("?")[0]
    return None


def vimeo_video_id(url: str) -> Optional[str]:
    """Numeric id from vimeo.com/<id>, player.vimeo.com/video/<id>, channel URLs."""
    if not url or not isinstance(url, str):
        return None

    path_only = _strip_fragment(url.strip()).split("?", 1)[0]
    match = _VIMEO_PATTERN.search(path_only)
    return match.group(1) if match else None


def google_drive_file_id(url: str) -> Optional[str]:
    if not url or not isinstance(url, str):
        return None

    for pattern in _DRIVE_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None
