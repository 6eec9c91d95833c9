from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from spotie.database.couchdb import CouchDBClient
from spotie.models.documents import Invitation
from spotie.observability.metrics import record_invitation_sent


logger = logging.getLogger(__name__)

# Result cap for the list queries
LIST_LIMIT = 100


class InviteRepository:
    """Playlist invitations stored in CouchDB.

    The repository keeps no state of its own: every method issues one request
    and returns the store's answer or raises the store's error. Invitations
    are identified by the (recipient, sender, playlist) triple; uniqueness of
    that triple is the caller's concern.
    """

    def __init__(self, client: CouchDBClient, db_name: str = "invites") -> None:
        self.client = client
        self.db_name = db_name

    def _find_one(self, selector: Dict[str, Any]) -> Optional[Invitation]:
        docs = self.client.find(self.db_name, selector, limit=1)
        return Invitation.from_document(docs[0]) if docs else None

    def _find_many(self, selector: Dict[str, Any]) -> List[Invitation]:
        docs = self.client.find(self.db_name, selector, limit=LIST_LIMIT)
        return [Invitation.from_document(doc) for doc in docs]

    def send_invitation(self, to_email: str, from_email: str, playlist_id: str, writable: bool) -> Invitation:
        """Create a new, not yet accepted, invitation."""
        invitation = Invitation(
            to_email=to_email,
            from_email=from_email,
            playlist_id=playlist_id,
            accepted=False,
            writable=bool(writable),
        )
        reply = self.client.create(self.db_name, invitation.to_document())
        invitation.id = reply["id"]
        invitation.rev = reply["rev"]
        record_invitation_sent()
        logger.info("Invitation %s sent by %s to %s for playlist %s", invitation.id, from_email, to_email, playlist_id)
        return invitation

    def get_invitation(self, to_email: str, from_email: str, playlist_id: str) -> Optional[Invitation]:
        """Exact triple lookup, used to detect duplicates."""
        return self._find_one({
            "toUser": to_email,
            "fromUser": from_email,
            "playlistId": playlist_id,
        })

    def get_invitation_by_id(self, invite_id: str) -> Invitation:
        return Invitation.from_document(self.client.get(self.db_name, invite_id))

    def get_invitation_by_playlist_and_user(self, to_email: str, playlist_id: str) -> Optional[Invitation]:
        return self._find_one({
            "toUser": to_email,
            "playlistId": playlist_id,
        })

    def get_invitations_of_user(self, to_email: str) -> List[Invitation]:
        return self._find_many({"toUser": to_email})

    def get_pending_invitations_of_user(self, to_email: str) -> List[Invitation]:
        return self._find_many({"toUser": to_email, "accepted": False})

    def get_invites_of_playlist(self, from_email: str, playlist_id: str) -> List[Invitation]:
        return self._find_many({"fromUser": from_email, "playlistId": playlist_id})

    def delete_invite(self, invite_id: str, rev: str) -> Dict[str, Any]:
        """Delete an invitation; a stale ``rev`` raises ``DocumentConflict``."""
        reply = self.client.delete(self.db_name, invite_id, rev)
        logger.info("Invitation %s deleted", invite_id)
        return reply

    def update_invite(self, invite: Invitation) -> Invitation:
        """Write back ``invite``; it must carry the current revision."""
        reply = self.client.put(self.db_name, invite.id, invite.to_document())
        return invite.model_copy(update={"rev": reply["rev"]})


__all__ = ["InviteRepository", "LIST_LIMIT"]
