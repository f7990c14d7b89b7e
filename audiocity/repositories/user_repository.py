"""
User credential documents at `<root>/usr/<username>.json`.

Unlike playlists and songs there is no in-memory cache: every call reads the
document it needs from disk.
"""
from __future__ import annotations

import threading
from pathlib import Path

from loguru import logger

from audiocity.core.security import CredentialHasher
from audiocity.domain.models import UserCredential
from audiocity.domain.names import is_safe_key

from .errors import ConflictError, NotFoundError, StorageError, UnauthorizedError, ValidationError
from .json_storage import ensure_dir, move_file, read_document, write_document


class UserCredentialStore:
    """Create, read, verify and rename user credentials."""

    def __init__(self, root: Path, hasher: CredentialHasher | None = None) -> None:
        self.directory = ensure_dir(Path(root) / "usr")
        self.hasher = hasher or CredentialHasher()
        self._lock = threading.RLock()

    def _path(self, username: str) -> Path:
        return self.directory / f"{username}.json"

    def _check_username(self, username) -> str:
        if not username or not isinstance(username, str):
            logger.warning("Credential rejected: username must be a non-empty string")
            raise ValidationError("Username must be a non-empty string")
        if not is_safe_key(username):
            logger.warning(f"Credential rejected: unusable username {username!r}")
            raise ValidationError("Username cannot be used as a file name")
        return username

    def _write(self, credential: UserCredential) -> None:
        write_document(self._path(credential.username), credential.to_document(), indent=2)

    def create(self, username: str, password: str) -> UserCredential:
        username = self._check_username(username)
        if not password or not isinstance(password, str):
            logger.warning("Credential rejected: password must be a non-empty string")
            raise ValidationError("Password must be a non-empty string")
        with self._lock:
            if self._path(username).exists():
                raise ConflictError(f"User {username!r} already exists")
            salt = self.hasher.new_salt()
            credential = UserCredential(username=username, salt=salt, password_hash=self.hasher.hash(password, salt))
            self._write(credential)
        logger.info(f"User {username!r} created")
        return credential

    def get(self, username: str) -> UserCredential:
        if not username or not isinstance(username, str) or not is_safe_key(username):
            raise NotFoundError(f"User {username!r} not found")
        path = self._path(username)
        if not path.exists():
            raise NotFoundError(f"User {username!r} not found")
        doc = read_document(path)
        if not isinstance(doc, dict):
            raise StorageError(f"User document {path} is not an object", path)
        return UserCredential.from_document(doc)

    def verify(self, username: str, password: str) -> bool:
        credential = self.get(username)
        return self.hasher.verify(password or "", credential.salt, credential.password_hash)

    def rename(self, username: str, password: str, new_username: str) -> UserCredential:
        """
        Move a credential to a new username after checking the password.

        An existing document for `new_username` is overwritten.
        """
        with self._lock:
            credential = self.get(username)
            if not self.hasher.verify(password or "", credential.salt, credential.password_hash):
                raise UnauthorizedError("Invalid password")
            new_username = self._check_username(new_username)
            if new_username != username and self._path(new_username).exists():
                logger.warning(f"Renaming {username!r} overwrites existing user {new_username!r}")
            move_file(self._path(username), self._path(new_username))
            credential.username = new_username
            self._write(credential)
        logger.info(f"User {username!r} renamed to {new_username!r}")
        return credential
