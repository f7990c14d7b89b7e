from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the audiocity package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from audiocity.core.security import CredentialHasher  # noqa: E402
from audiocity.domain.media import MediaInfo, MediaSourceError  # noqa: E402
from audiocity.services.library import MediaLibrary  # noqa: E402


class FakeMediaSource:
    """Resolves `fake://<title>|<author>` references and writes files immediately."""

    def __init__(self) -> None:
        self.fetched: list[tuple[str, Path, Path]] = []
        self.write_files = True

    def is_valid(self, reference: str) -> bool:
        return reference.startswith("fake://") and "|" in reference

    def resolve(self, reference: str) -> MediaInfo:
        body = reference[len("fake://"):]
        if body.startswith("missing|"):
            raise MediaSourceError("video unavailable")
        title, author = body.split("|", 1)
        return MediaInfo(title=title, author=author, description=f"{title} description", thumbnail_url="http://img")

    def fetch(self, reference: str, info: MediaInfo, media_path: Path, thumbnail_path: Path):
        self.fetched.append((reference, media_path, thumbnail_path))
        if self.write_files:
            media_path.write_bytes(b"ID3audio")
            thumbnail_path.write_bytes(b"\x89PNG")
        return None


@pytest.fixture()
def media_source() -> FakeMediaSource:
    return FakeMediaSource()


@pytest.fixture()
def hasher() -> CredentialHasher:
    return CredentialHasher("argon2id")


@pytest.fixture()
def library(tmp_path, media_source, hasher) -> MediaLibrary:
    return MediaLibrary(tmp_path / "db", media_source=media_source, hasher=hasher)
