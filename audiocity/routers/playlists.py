from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from audiocity.services.library import MediaLibrary

from .deps import current_user, get_library, optional_user

router = APIRouter(prefix="/playlists", tags=["playlists"])


class SongKey(BaseModel):
    name: str
    author: str


class CreatePlaylistRequest(BaseModel):
    name: str
    description: str = ""
    public: bool = False
    songs: list[SongKey] = Field(default_factory=list)


class AddSongsRequest(BaseModel):
    songs: list[SongKey]


def _resolve_songs(library: MediaLibrary, keys: list[SongKey]):
    return [library.songs.find(key.name, key.author) for key in keys]


@router.get("")
def list_playlists(user: Optional[str] = Depends(optional_user), library: MediaLibrary = Depends(get_library)):
    return {"playlists": [playlist.to_document() for playlist in library.playlists.list_visible(user)]}


@router.post("", status_code=201)
def create_playlist(body: CreatePlaylistRequest, user: str = Depends(current_user), library: MediaLibrary = Depends(get_library)):
    playlist = library.playlists.create(
        body.name,
        user,
        songs=_resolve_songs(library, body.songs),
        description=body.description,
        public=body.public,
    )
    return playlist.to_document()


@router.get("/{name}")
def get_playlist(name: str, user: Optional[str] = Depends(optional_user), library: MediaLibrary = Depends(get_library)):
    return library.playlists.find(name, user).to_document()


@router.post("/{name}/songs")
def add_songs(name: str, body: AddSongsRequest, user: str = Depends(current_user), library: MediaLibrary = Depends(get_library)):
    return library.playlists.add_songs(name, user, _resolve_songs(library, body.songs)).to_document()


@router.delete("/{name}", status_code=204)
def delete_playlist(name: str, user: str = Depends(current_user), library: MediaLibrary = Depends(get_library)):
    library.playlists.delete(name, user)
