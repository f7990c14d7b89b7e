from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse
from pydantic import BaseModel

from audiocity.services.library import MediaLibrary

from .deps import current_user, get_library

router = APIRouter(prefix="/songs", tags=["songs"])


class SaveSongRequest(BaseModel):
    url: str


def _file_response(location: str, media_type: str) -> FileResponse:
    path = Path(location)
    if not path.is_file():
        # Metadata is committed before the transfer finishes.
        raise HTTPException(404, "File not available yet")
    return FileResponse(path, media_type=media_type)


@router.get("")
def list_songs(library: MediaLibrary = Depends(get_library)):
    return {"songs": [song.to_document() for song in library.songs.all()]}


@router.get("/search")
def search_songs(q: str = "", library: MediaLibrary = Depends(get_library)):
    return {"songs": [song.to_document() for song in library.songs.search(q)]}


@router.post("", status_code=201)
def save_song(body: SaveSongRequest, _user: str = Depends(current_user), library: MediaLibrary = Depends(get_library)):
    return library.songs.save(body.url).to_document()


@router.get("/{author}/{name}")
def get_song(author: str, name: str, library: MediaLibrary = Depends(get_library)):
    return library.songs.find(name, author).to_document()


@router.get("/{author}/{name}/media")
def get_song_media(author: str, name: str, library: MediaLibrary = Depends(get_library)):
    return _file_response(library.songs.find(name, author).media_location, "audio/mpeg")


@router.get("/{author}/{name}/thumbnail")
def get_song_thumbnail(author: str, name: str, library: MediaLibrary = Depends(get_library)):
    return _file_response(library.songs.find(name, author).thumbnail_location, "image/png")


@router.delete("/{author}/{name}", status_code=204)
def delete_song(author: str, name: str, _user: str = Depends(current_user), library: MediaLibrary = Depends(get_library)):
    library.songs.delete(name, author)
