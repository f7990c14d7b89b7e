"""Contract for the collaborator that acquires media bytes for a song."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


class MediaSourceError(Exception):
    """Raised when a reference cannot be resolved to media metadata."""


@dataclass(frozen=True)
class MediaInfo:
    title: str
    author: str
    description: str = ""
    thumbnail_url: str = ""


class MediaSource(Protocol):
    """
    Resolves external media references and transfers their bytes.

    `fetch` starts the transfer of audio to `media_path` and of the thumbnail
    to `thumbnail_path`; it may return before the bytes are on disk.
    """

    def is_valid(self, reference: str) -> bool: ...

    def resolve(self, reference: str) -> MediaInfo: ...

    def fetch(self, reference: str, info: MediaInfo, media_path: Path, thumbnail_path: Path) -> object: ...
