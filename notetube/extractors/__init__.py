"""Video references — turns the URL shapes YouTube hands out into one canonical id."""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..errors import InvalidReference

_VIDEO_ID_PATTERNS = (
    re.compile(r"(?:youtube\.com/watch\?v=)([a-zA-Z0-9_-]{11})"),
    re.compile(r"(?:youtu\.be/)([a-zA-Z0-9_-]{11})"),
    re.compile(r"(?:youtube\.com/embed/)([a-zA-Z0-9_-]{11})"),
)


@dataclass(frozen=True, slots=True)
class VideoReference:
    video_id: str

    @classmethod
    def from_url(cls, url: str) -> "VideoReference":
        """Parse a watch, youtu.be or embed URL. Raises InvalidReference on no match."""
        for pattern in _VIDEO_ID_PATTERNS:
            match = pattern.search(url or "")
            if match:
                return cls(video_id=match.group(1))
        raise InvalidReference()

    @property
    def watch_url(self) -> str:
        return f"https://www.youtube.com/watch?v={self.video_id}"


def parse_video_id(url: str) -> str:
    return VideoReference.from_url(url).video_id


__all__ = ["VideoReference", "parse_video_id"]
