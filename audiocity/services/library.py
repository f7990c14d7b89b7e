"""Composition root for the three repositories sharing one store root."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from loguru import logger

from audiocity.core.config import Settings, get_settings
from audiocity.core.security import CredentialHasher
from audiocity.domain.media import MediaSource
from audiocity.repositories.json_storage import ensure_dir
from audiocity.repositories.playlist_repository import PlaylistRepository
from audiocity.repositories.song_repository import SongRepository
from audiocity.repositories.user_repository import UserCredentialStore


class MediaLibrary:
    """
    Owns the store root and the repositories built on it.

    Construction is synchronous: both cached collections are loaded from disk
    before the constructor returns, so every operation is safe to call on a
    new instance. One process may write to a store root at a time.
    """

    def __init__(
        self,
        root: Path | str,
        *,
        media_source: Optional[MediaSource] = None,
        hasher: Optional[CredentialHasher] = None,
    ) -> None:
        if not root or not isinstance(root, (str, Path)):
            raise ValueError("Missing database directory.")
        self.root = ensure_dir(Path(root))
        self.playlists = PlaylistRepository(self.root)
        self.songs = SongRepository(self.root, media_source=media_source)
        self.users = UserCredentialStore(self.root, hasher=hasher)
        logger.info(
            f"Media library ready at {self.root} "
            f"({len(self.playlists.playlists)} playlists, {len(self.songs.songs)} songs)"
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None, media_source: Optional[MediaSource] = None) -> "MediaLibrary":
        settings = settings or get_settings()
        return cls(
            settings.data_dir,
            media_source=media_source,
            hasher=CredentialHasher(settings.password_scheme),
        )

    def reload(self) -> None:
        """Drop the cached collections and read them again from disk."""
        self.playlists.load()
        self.songs.load()
