from __future__ import annotations

import json

import pytest

from audiocity.domain.models import Playlist, Song
from audiocity.repositories.errors import (
    ConflictError,
    NotFoundError,
    StorageError,
    UnauthorizedError,
    ValidationError,
)
from audiocity.repositories.playlist_repository import PlaylistRepository


def _song(name: str = "Track", author: str = "Band") -> Song:
    return Song(name=name, author=author, description="", media_location=f"/m/{name}.mp3", thumbnail_location=f"/t/{name}.png")


@pytest.fixture()
def repo(tmp_path):
    return PlaylistRepository(tmp_path)


def test_create_applies_defaults_and_writes_document(repo, tmp_path):
    playlist = repo.create("mix", "alice")

    assert playlist == Playlist(name="mix", owner="alice", description="", songs=[], public=False)
    assert repo.playlists == [playlist]
    doc = json.loads((tmp_path / "playlists" / "mix.json").read_text(encoding="utf-8"))
    assert doc == {"name": "mix", "description": "", "songs": [], "owner": "alice", "public": False}


def test_create_validates_name_and_owner(repo, tmp_path):
    for name, owner in [("", "alice"), ("mix", ""), (None, "alice"), ("mix", 3), (["mix"], "alice"), ("a/b", "alice")]:
        with pytest.raises(ValidationError):
            repo.create(name, owner)
    assert repo.playlists == []
    assert list((tmp_path / "playlists").iterdir()) == []


def test_create_rejects_duplicate_name(repo):
    repo.create("mix", "alice")
    with pytest.raises(ConflictError):
        repo.create("mix", "bob")
    with pytest.raises(ConflictError):
        repo.create("m:ix", "bob")
    assert len(repo.playlists) == 1


def test_reload_reproduces_entities(repo, tmp_path):
    created = repo.create("mix", "alice", songs=[_song()], description="road trip", public=True)

    reloaded = PlaylistRepository(tmp_path)

    assert reloaded.playlists == [created]


def test_load_replaces_instead_of_appending(repo):
    repo.create("mix", "alice")
    repo.load()
    repo.load()
    assert len(repo.playlists) == 1


def test_private_playlist_visible_only_to_owner(repo):
    repo.create("mix", "alice")

    assert repo.find("mix", "alice").owner == "alice"
    with pytest.raises(NotFoundError):
        repo.find("mix", "bob")
    with pytest.raises(NotFoundError):
        repo.find("mix", None)
    assert repo.list_visible("bob") == []


def test_public_playlist_visible_to_everyone(repo):
    repo.create("mix", "alice", public=True)
    assert repo.find("mix", "bob").name == "mix"
    assert repo.find("mix", None).name == "mix"
    assert [p.name for p in repo.list_visible("bob")] == ["mix"]


def test_add_songs_by_owner_rewrites_document_once(repo, tmp_path):
    repo.create("mix", "alice")

    repo.add_songs("mix", "alice", [_song("One"), _song("Two")])

    assert [s.name for s in repo.find("mix", "alice").songs] == ["One", "Two"]
    doc = json.loads((tmp_path / "playlists" / "mix.json").read_text(encoding="utf-8"))
    assert [s["name"] for s in doc["songs"]] == ["One", "Two"]


def test_add_songs_to_public_playlist_by_non_owner_is_unauthorized(repo):
    repo.create("mix", "alice", public=True)

    with pytest.raises(UnauthorizedError):
        repo.add_songs("mix", "bob", [_song()])
    assert repo.find("mix", "alice").songs == []


def test_add_songs_to_invisible_playlist_is_not_found(repo):
    repo.create("mix", "alice")
    with pytest.raises(NotFoundError):
        repo.add_songs("mix", "bob", [_song()])
    with pytest.raises(NotFoundError):
        repo.add_songs("nothing", "alice", [_song()])


def test_add_songs_is_all_or_nothing(repo):
    repo.create("mix", "alice")
    with pytest.raises(ValidationError):
        repo.add_songs("mix", "alice", [_song(), "not a song"])
    assert repo.find("mix", "alice").songs == []


def test_playlists_hold_song_snapshots(repo):
    song = _song()
    repo.create("mix", "alice", songs=[song])
    song.description = "edited later"
    assert repo.find("mix", "alice").songs[0].description == ""


def test_delete_by_owner_only(repo, tmp_path):
    repo.create("mix", "alice", public=True)
    with pytest.raises(UnauthorizedError):
        repo.delete("mix", "bob")

    repo.delete("mix", "alice")

    assert repo.playlists == []
    assert not (tmp_path / "playlists" / "mix.json").exists()


def test_load_accepts_documents_with_user_field(tmp_path):
    folder = tmp_path / "playlists"
    folder.mkdir()
    (folder / "old.json").write_text(
        json.dumps({"name": "old", "description": "", "songs": [], "user": "alice", "public": False}),
        encoding="utf-8",
    )

    repo = PlaylistRepository(tmp_path)

    assert repo.find("old", "alice").owner == "alice"


def test_malformed_document_raises_storage_error(tmp_path):
    folder = tmp_path / "playlists"
    folder.mkdir()
    (folder / "broken.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageError):
        PlaylistRepository(tmp_path)


def test_name_with_colon_next_to_space_uses_one_key_everywhere(repo, tmp_path):
    repo.create("Road Trip :", "alice")

    assert repo.find("Road Trip :", "alice").name == "Road Trip"
    assert repo.find("Road Trip", "alice").name == "Road Trip"
    assert (tmp_path / "playlists" / "Road Trip.json").is_file()

    repo.add_songs("Road Trip :", "alice", [_song()])
    assert len(repo.find("Road Trip", "alice").songs) == 1

    repo.delete(" Road Trip: ", "alice")
    assert repo.playlists == []
