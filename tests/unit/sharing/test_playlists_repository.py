import pytest

from spotie.exceptions import DocumentConflict, DocumentNotFound


@pytest.mark.unit
def test_create_and_get_playlist(playlist_repository):
    created = playlist_repository.create_playlist("alice@example.com", "Road trip")
    fetched = playlist_repository.get_playlist(created.id)
    assert fetched.name == "Road trip"
    assert fetched.owner == "alice@example.com"
    assert fetched.tracks == []
    assert fetched.rev == created.rev


@pytest.mark.unit
def test_playlists_of_user_only_returns_owned(playlist_repository, couch_server):
    playlist_repository.create_playlist("alice@example.com", "One")
    playlist_repository.create_playlist("alice@example.com", "Two")
    playlist_repository.create_playlist("bob@example.com", "Three")

    names = sorted(p.name for p in playlist_repository.get_playlists_of_user("alice@example.com"))
    assert names == ["One", "Two"]
    assert couch_server.last_request()["json"]["selector"] == {"owner": "alice@example.com", "type": "playlist"}


@pytest.mark.unit
def test_update_playlist_tracks(playlist_repository):
    playlist = playlist_repository.create_playlist("alice@example.com", "Mix")
    playlist.add_track("t1")
    updated = playlist_repository.update_playlist(playlist)
    assert updated.rev != playlist.rev
    assert playlist_repository.get_playlist(playlist.id).tracks == ["t1"]

    with pytest.raises(DocumentConflict):
        playlist_repository.update_playlist(playlist)


@pytest.mark.unit
def test_get_playlists_by_ids_skips_deleted(playlist_repository):
    keep = playlist_repository.create_playlist("alice@example.com", "Keep")
    gone = playlist_repository.create_playlist("alice@example.com", "Gone")
    playlist_repository.delete_playlist(gone.id, gone.rev)

    result = playlist_repository.get_playlists_by_ids([gone.id, keep.id])
    assert [p.id for p in result] == [keep.id]
    with pytest.raises(DocumentNotFound):
        playlist_repository.get_playlist(gone.id)
