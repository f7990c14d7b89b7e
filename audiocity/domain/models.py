"""
Entities persisted by the repositories.

Field names in the `to_document` output are the on-disk JSON field names and
must not change.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping


@dataclass
class Song:
    name: str
    author: str
    description: str = ""
    media_location: str = ""
    thumbnail_location: str = ""

    @property
    def key(self) -> tuple[str, str]:
        return (self.name, self.author)

    def to_document(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "author": self.author,
            "mediaLocation": self.media_location,
            "thumbnailLocation": self.thumbnail_location,
        }

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "Song":
        return cls(
            name=str(doc.get("name") or ""),
            author=str(doc.get("author") or ""),
            description=str(doc.get("description") or ""),
            media_location=str(doc.get("mediaLocation") or ""),
            thumbnail_location=str(doc.get("thumbnailLocation") or ""),
        )

    def snapshot(self) -> "Song":
        return replace(self)


@dataclass
class Playlist:
    name: str
    owner: str
    description: str = ""
    songs: list[Song] = field(default_factory=list)
    public: bool = False

    def visible_to(self, username: str | None) -> bool:
        return self.public or (bool(username) and username == self.owner)

    def to_document(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "songs": [song.to_document() for song in self.songs],
            "owner": self.owner,
            "public": self.public,
        }

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "Playlist":
        # Older documents stored the owner under "user".
        owner = doc.get("owner")
        if owner is None:
            owner = doc.get("user")
        return cls(
            name=str(doc.get("name") or ""),
            owner=str(owner or ""),
            description=str(doc.get("description") or ""),
            songs=[Song.from_document(item) for item in (doc.get("songs") or []) if isinstance(item, Mapping)],
            public=bool(doc.get("public", False)),
        )


@dataclass
class UserCredential:
    username: str
    salt: str
    password_hash: str

    def to_document(self) -> dict:
        return {
            "username": self.username,
            "salt": self.salt,
            "passwordHash": self.password_hash,
        }

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "UserCredential":
        password_hash = doc.get("passwordHash")
        if password_hash is None:
            password_hash = doc.get("pass")
        return cls(
            username=str(doc.get("username") or ""),
            salt=str(doc.get("salt") or ""),
            password_hash=str(password_hash or ""),
        )
