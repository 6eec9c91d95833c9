from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List

from spotie.database.couchdb import CouchDBClient
from spotie.exceptions import DocumentNotFound
from spotie.models.documents import Playlist

from .invites_repository import LIST_LIMIT


logger = logging.getLogger(__name__)


class PlaylistRepository:
    """Playlists stored in CouchDB, owned by a user email."""

    def __init__(self, client: CouchDBClient, db_name: str = "playlists") -> None:
        self.client = client
        self.db_name = db_name

    def create_playlist(self, owner_email: str, name: str) -> Playlist:
        playlist = Playlist(name=name, owner=owner_email)
        reply = self.client.create(self.db_name, playlist.to_document())
        playlist.id = reply["id"]
        playlist.rev = reply["rev"]
        logger.info("Playlist %s created by %s", playlist.id, owner_email)
        return playlist

    def get_playlist(self, playlist_id: str) -> Playlist:
        return Playlist.from_document(self.client.get(self.db_name, playlist_id))

    def get_playlists_of_user(self, owner_email: str) -> List[Playlist]:
        docs = self.client.find(self.db_name, {"owner": owner_email, "type": "playlist"}, limit=LIST_LIMIT)
        return [Playlist.from_document(doc) for doc in docs]

    def get_playlists_by_ids(self, playlist_ids: Iterable[str]) -> List[Playlist]:
        """Fetch several playlists, skipping ones deleted in the meantime."""
        playlists = []
        for playlist_id in playlist_ids:
            try:
                playlists.append(self.get_playlist(playlist_id))
            except DocumentNotFound:
                logger.debug("Shared playlist %s no longer exists", playlist_id)
        return playlists

    def update_playlist(self, playlist: Playlist) -> Playlist:
        """Write back ``playlist``; it must carry the current revision."""
        reply = self.client.put(self.db_name, playlist.id, playlist.to_document())
        return playlist.model_copy(update={"rev": reply["rev"]})

    def delete_playlist(self, playlist_id: str, rev: str) -> Dict[str, Any]:
        reply = self.client.delete(self.db_name, playlist_id, rev)
        logger.info("Playlist %s deleted", playlist_id)
        return reply


__all__ = ["PlaylistRepository"]
