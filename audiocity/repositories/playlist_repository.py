"""Playlist documents: one `<name>.json` per playlist under `<root>/playlists/`."""
from __future__ import annotations

import threading
from pathlib import Path
from typing import Iterable, Optional

from loguru import logger

from audiocity.domain.models import Playlist, Song
from audiocity.domain.names import is_safe_key, playlist_key

from .errors import ConflictError, NotFoundError, StorageError, UnauthorizedError, ValidationError
from .json_storage import ensure_dir, read_document, remove_file, write_document


class PlaylistRepository:
    """In-memory playlist collection mirrored to one document per playlist."""

    def __init__(self, root: Path) -> None:
        self.directory = ensure_dir(Path(root) / "playlists")
        self.playlists: list[Playlist] = []
        self._lock = threading.RLock()
        self.load()

    # -------------------------------------- helpers --------------------------------------
    def _path(self, name: str) -> Path:
        return self.directory / f"{name}.json"

    def _write(self, playlist: Playlist) -> None:
        write_document(self._path(playlist.name), playlist.to_document())

    def _lookup(self, name: str) -> Optional[Playlist]:
        for playlist in self.playlists:
            if playlist.name == name:
                return playlist
        return None

    def _validated_name(self, name) -> str:
        if not name or not isinstance(name, str):
            logger.warning("Playlist rejected: name must be a non-empty string")
            raise ValidationError("Playlist name must be a non-empty string")
        normalized = playlist_key(name)
        if not is_safe_key(normalized):
            logger.warning(f"Playlist rejected: unusable name {name!r}")
            raise ValidationError("Playlist name cannot be used as a file name")
        return normalized

    # -------------------------------------- operations --------------------------------------
    def load(self) -> None:
        """Replace the in-memory collection with the documents on disk."""
        loaded: list[Playlist] = []
        for path in sorted(self.directory.glob("*.json")):
            doc = read_document(path)
            if not isinstance(doc, dict):
                raise StorageError(f"Playlist document {path} is not an object", path)
            loaded.append(Playlist.from_document(doc))
        with self._lock:
            self.playlists = loaded
        logger.debug(f"Loaded {len(loaded)} playlists from {self.directory}")

    def create(
        self,
        name: str,
        owner: str,
        *,
        songs: Iterable[Song] | None = None,
        description: str = "",
        public: bool = False,
    ) -> Playlist:
        key = self._validated_name(name)
        if not owner or not isinstance(owner, str):
            logger.warning("Playlist rejected: owner must be a non-empty string")
            raise ValidationError("Playlist owner must be a non-empty string")
        playlist = Playlist(
            name=key,
            owner=owner,
            description=description or "",
            songs=[song.snapshot() for song in (songs or [])],
            public=bool(public),
        )
        with self._lock:
            if self._lookup(key) is not None or self._path(key).exists():
                raise ConflictError(f"Playlist {key!r} already exists")
            self._write(playlist)
            self.playlists.append(playlist)
        logger.info(f"Playlist {key!r} created by {owner}")
        return playlist

    def find(self, name: str, requester: str | None) -> Playlist:
        """Return the playlist when the requester owns it or it is public."""
        key = playlist_key(name or "")
        with self._lock:
            for playlist in self.playlists:
                if playlist.name == key and playlist.visible_to(requester):
                    return playlist
        raise NotFoundError(f"Playlist {key!r} not found")

    def list_visible(self, requester: str | None) -> list[Playlist]:
        with self._lock:
            return [playlist for playlist in self.playlists if playlist.visible_to(requester)]

    def add_songs(self, name: str, requester: str | None, songs: Iterable[Song]) -> Playlist:
        """Append a batch of song snapshots; the document is rewritten once for the whole batch."""
        batch = list(songs)
        for song in batch:
            if not isinstance(song, Song):
                raise ValidationError("Only songs can be added to a playlist")
        with self._lock:
            playlist = self.find(name, requester)
            if requester != playlist.owner:
                raise UnauthorizedError(f"Only {playlist.owner} can modify playlist {playlist.name!r}")
            updated = Playlist(
                name=playlist.name,
                owner=playlist.owner,
                description=playlist.description,
                songs=playlist.songs + [song.snapshot() for song in batch],
                public=playlist.public,
            )
            self._write(updated)
            playlist.songs = updated.songs
        logger.info(f"Added {len(batch)} songs to playlist {playlist.name!r}")
        return playlist

    def delete(self, name: str, requester: str | None) -> None:
        with self._lock:
            playlist = self.find(name, requester)
            if requester != playlist.owner:
                raise UnauthorizedError(f"Only {playlist.owner} can delete playlist {playlist.name!r}")
            remove_file(self._path(playlist.name))
            self.playlists.remove(playlist)
        logger.info(f"Playlist {playlist.name!r} deleted")
