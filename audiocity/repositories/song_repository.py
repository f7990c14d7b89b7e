"""
Song metadata and media files.

All songs live in one aggregate document, `<root>/songData.json`, shaped as
`{"songs": [...]}`. Media and thumbnails are stored as
`<root>/songs/<title>/<author>.mp3` and `<root>/thumbnails/<title>/<author>.png`.
"""
from __future__ import annotations

import threading
from pathlib import Path
from typing import Optional

from loguru import logger

from audiocity.domain.media import MediaSource, MediaSourceError
from audiocity.domain.models import Song
from audiocity.domain.names import normalize_name, path_component

from .errors import ConflictError, NotFoundError, StorageError, ValidationError
from .json_storage import ensure_dir, read_document, remove_file, write_document

SONG_DATA_FILE = "songData.json"


class SongRepository:
    """In-memory song collection mirrored to the aggregate song document."""

    def __init__(self, root: Path, media_source: Optional[MediaSource] = None) -> None:
        self.root = ensure_dir(Path(root))
        self.data_file = self.root / SONG_DATA_FILE
        self.media_dir = self.root / "songs"
        self.thumbnail_dir = self.root / "thumbnails"
        self.media_source = media_source
        self.songs: list[Song] = []
        self._lock = threading.RLock()
        self.load()

    # -------------------------------------- helpers --------------------------------------
    def _persist(self) -> None:
        write_document(self.data_file, {"songs": [song.to_document() for song in self.songs]}, indent=2)

    def _lookup(self, name: str, author: str) -> Optional[Song]:
        key = normalize_name(name)
        for song in self.songs:
            if song.name == key and song.author == author:
                return song
        return None

    # -------------------------------------- operations --------------------------------------
    def load(self) -> None:
        """Replace the in-memory collection with the aggregate document, creating it when absent."""
        with self._lock:
            if not self.data_file.exists():
                self.songs = []
                self._persist()
                logger.info(f"Created empty song document at {self.data_file}")
                return
            doc = read_document(self.data_file)
            if not isinstance(doc, dict) or not isinstance(doc.get("songs", []), list):
                raise StorageError(f"Song document {self.data_file} has no song list", self.data_file)
            self.songs = [Song.from_document(item) for item in doc.get("songs", []) if isinstance(item, dict)]
        logger.debug(f"Loaded {len(self.songs)} songs from {self.data_file}")

    def all(self) -> list[Song]:
        with self._lock:
            return list(self.songs)

    def find(self, name: str, author: str) -> Song:
        with self._lock:
            song = self._lookup(name or "", author)
        if song is None:
            raise NotFoundError(f"Song {name!r} by {author!r} not found")
        return song

    def search(self, text: str) -> list[Song]:
        """Case-sensitive substring match on the song name, in insertion order."""
        with self._lock:
            return [song for song in self.songs if text in song.name]

    def save(self, reference: str) -> Song:
        """
        Register the song behind an external media reference.

        The metadata is committed before the media source has necessarily
        written the audio and thumbnail bytes, so a failed transfer leaves a
        record whose files are missing.
        """
        if self.media_source is None:
            raise ValidationError("No media source configured")
        if not reference or not isinstance(reference, str) or not self.media_source.is_valid(reference):
            logger.warning(f"Rejected media reference {reference!r}")
            raise ValidationError("Not a supported media reference")

        try:
            info = self.media_source.resolve(reference)
        except MediaSourceError as exc:
            logger.warning(f"Could not resolve media reference {reference!r}: {exc}")
            raise NotFoundError(f"Media reference {reference!r} could not be resolved") from exc
        title = normalize_name(info.title)
        author = normalize_name(info.author)
        if not title or not author:
            raise ValidationError("Media reference has no title or author")

        with self._lock:
            if self._lookup(title, author) is not None:
                raise ConflictError(f"Song {title!r} by {author!r} already exists")
            media_folder = self.media_dir / path_component(title)
            thumbnail_folder = self.thumbnail_dir / path_component(title)
            song = Song(
                name=title,
                author=author,
                description=info.description or "",
                media_location=str(media_folder / f"{path_component(author)}.mp3"),
                thumbnail_location=str(thumbnail_folder / f"{path_component(author)}.png"),
            )
            for other in self.songs:
                if other.media_location == song.media_location or other.thumbnail_location == song.thumbnail_location:
                    raise ConflictError(
                        f"Song {title!r} by {author!r} would share media files with {other.name!r} by {other.author!r}"
                    )
            ensure_dir(media_folder)
            ensure_dir(thumbnail_folder)
            self.songs.append(song)
            try:
                self._persist()
            except StorageError:
                self.songs.remove(song)
                raise
        logger.info(f"Saved song {title!r} by {author!r}")

        self.media_source.fetch(reference, info, Path(song.media_location), Path(song.thumbnail_location))
        return song

    def delete(self, name: str, author: str) -> None:
        """
        Remove every matching song together with its media and thumbnail files.

        All files are checked first; if one is missing nothing is removed.
        """
        key = normalize_name(name or "")
        with self._lock:
            matches = [song for song in self.songs if song.name == key and song.author == author]
            if not matches:
                raise NotFoundError(f"Song {key!r} by {author!r} not found")
            files = [Path(location) for song in matches for location in (song.media_location, song.thumbnail_location)]
            missing = [path for path in files if not path.is_file()]
            if missing:
                raise StorageError(f"Cannot delete {key!r} by {author!r}: missing {missing[0]}", missing[0])
            for path in files:
                remove_file(path)
            for song in matches:
                self.songs.remove(song)
            self._persist()
        logger.info(f"Deleted song {key!r} by {author!r}")
