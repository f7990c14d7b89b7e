from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from audiocity.repositories.errors import UnauthorizedError
from audiocity.services.library import MediaLibrary

from .deps import get_library

router = APIRouter(prefix="/users", tags=["users"])


class Credentials(BaseModel):
    username: str
    password: str


class RenameRequest(Credentials):
    new_username: str


@router.post("", status_code=201)
def create_user(body: Credentials, library: MediaLibrary = Depends(get_library)):
    credential = library.users.create(body.username, body.password)
    return {"username": credential.username}


@router.post("/login")
def login(body: Credentials, library: MediaLibrary = Depends(get_library)):
    if not library.users.verify(body.username, body.password):
        raise UnauthorizedError("Invalid password")
    return {"username": body.username}


@router.post("/rename")
def rename_user(body: RenameRequest, library: MediaLibrary = Depends(get_library)):
    credential = library.users.rename(body.username, body.password, body.new_username)
    return {"username": credential.username}
