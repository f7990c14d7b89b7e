"""Request-scoped helpers shared by the routers."""
from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from audiocity.repositories.errors import NotFoundError
from audiocity.services.library import MediaLibrary

_basic = HTTPBasic(auto_error=False)


def get_library(request: Request) -> MediaLibrary:
    library = getattr(getattr(request.app, "state", None), "library", None)
    if not library:
        raise RuntimeError("MediaLibrary not configured")
    return library


def optional_user(
    credentials: Optional[HTTPBasicCredentials] = Depends(_basic),
    library: MediaLibrary = Depends(get_library),
) -> Optional[str]:
    """Username of the caller, or None for anonymous requests."""
    if credentials is None:
        return None
    try:
        valid = library.users.verify(credentials.username, credentials.password)
    except NotFoundError:
        valid = False
    if not valid:
        raise HTTPException(401, "Invalid credentials", headers={"WWW-Authenticate": "Basic"})
    return credentials.username


def current_user(username: Optional[str] = Depends(optional_user)) -> str:
    if not username:
        raise HTTPException(401, "Authentication required", headers={"WWW-Authenticate": "Basic"})
    return username
