from __future__ import annotations

import json

import pytest

from audiocity.core.security import CredentialHasher
from audiocity.repositories.errors import ConflictError, NotFoundError, UnauthorizedError, ValidationError
from audiocity.repositories.user_repository import UserCredentialStore


@pytest.fixture()
def store(tmp_path):
    return UserCredentialStore(tmp_path, hasher=CredentialHasher("argon2id"))


def test_create_writes_pretty_printed_document(store, tmp_path):
    credential = store.create("u", "p")

    path = tmp_path / "usr" / "u.json"
    raw = path.read_text(encoding="utf-8")
    doc = json.loads(raw)
    assert raw.startswith("{\n  ")
    assert doc == {"username": "u", "salt": credential.salt, "passwordHash": credential.password_hash}
    assert len(doc["salt"]) == 32


def test_second_create_for_same_username_conflicts(store):
    store.create("u", "p")
    with pytest.raises(ConflictError):
        store.create("u", "other")


def test_create_rejects_invalid_input(store, tmp_path):
    for username, password in [("", "p"), ("u", ""), (None, "p"), (42, "p"), ("../evil", "p"), ("..", "p")]:
        with pytest.raises(ValidationError):
            store.create(username, password)
    assert list((tmp_path / "usr").iterdir()) == []


def test_get_round_trips_and_reports_missing(store):
    created = store.create("u", "p")
    assert store.get("u") == created
    with pytest.raises(NotFoundError):
        store.get("nobody")


def test_verify(store):
    store.create("u", "p")
    assert store.verify("u", "p") is True
    assert store.verify("u", "wrong") is False
    with pytest.raises(NotFoundError):
        store.verify("nobody", "p")


def test_rename_moves_document_and_keeps_password(store, tmp_path):
    store.create("u", "p")

    renamed = store.rename("u", "p", "u2")

    assert renamed.username == "u2"
    assert store.verify("u2", "p") is True
    with pytest.raises(NotFoundError):
        store.verify("u", "p")
    assert not (tmp_path / "usr" / "u.json").exists()
    assert json.loads((tmp_path / "usr" / "u2.json").read_text(encoding="utf-8"))["username"] == "u2"


def test_rename_requires_password(store):
    store.create("u", "p")
    with pytest.raises(UnauthorizedError):
        store.rename("u", "wrong", "u2")
    with pytest.raises(NotFoundError):
        store.rename("ghost", "p", "u2")
    assert store.verify("u", "p") is True


def test_rename_overwrites_existing_target(store):
    store.create("u", "p")
    store.create("taken", "other")

    store.rename("u", "p", "taken")

    assert store.verify("taken", "p") is True
    assert store.verify("taken", "other") is False


def test_reads_documents_written_with_legacy_field_names(store, tmp_path):
    salt = "a" * 32
    legacy_hash = CredentialHasher("pbkdf2").hash("p", salt)
    (tmp_path / "usr" / "old.json").write_text(
        json.dumps({"username": "old", "salt": salt, "pass": legacy_hash}), encoding="utf-8"
    )

    assert store.get("old").password_hash == legacy_hash
    assert store.verify("old", "p") is True
