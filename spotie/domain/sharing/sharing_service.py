#!/usr/bin/env python
"""
Playlist sharing rules on top of the invite and playlist repositories.

Roles: the owner may do everything, an accepted invitation grants read
access, and an accepted invitation with ``writable`` set additionally lets
the recipient add and remove tracks. Only the owner manages invitations.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from spotie.exceptions import InvitationError, PlaylistAccessDenied
from spotie.models.documents import Invitation, Playlist

from .invites_repository import InviteRepository
from .playlists_repository import PlaylistRepository

logger = logging.getLogger(__name__)

OWNER = "owner"
EDITOR = "editor"
VIEWER = "viewer"


class SharingService:
    def __init__(self, invites: InviteRepository, playlists: PlaylistRepository) -> None:
        self.invites = invites
        self.playlists = playlists

    def role_for(self, playlist: Playlist, email: str) -> Optional[str]:
        if playlist.owner == email:
            return OWNER
        invite = self.invites.get_invitation_by_playlist_and_user(email, playlist.id)
        if invite is None or not invite.accepted:
            return None
        return EDITOR if invite.writable else VIEWER

    def require_role(self, playlist: Playlist, email: str, *, write: bool = False, owner: bool = False) -> str:
        role = self.role_for(playlist, email)
        if role is None:
            raise PlaylistAccessDenied(f"{email} cannot access playlist {playlist.id}")
        if owner and role != OWNER:
            raise PlaylistAccessDenied(f"Only the owner can manage playlist {playlist.id}")
        if write and role == VIEWER:
            raise PlaylistAccessDenied(f"{email} has read-only access to playlist {playlist.id}")
        return role

    def invite(self, playlist: Playlist, from_email: str, to_email: str, writable: bool) -> Invitation:
        self.require_role(playlist, from_email, owner=True)
        to_email = to_email.strip().lower()
        if not to_email:
            raise InvitationError("An email address is required.")
        if to_email == playlist.owner:
            raise InvitationError("You cannot invite yourself to your own playlist.")
        if self.invites.get_invitation(to_email, from_email, playlist.id) is not None:
            raise InvitationError(f"{to_email} has already been invited to this playlist.")
        return self.invites.send_invitation(to_email, from_email, playlist.id, writable)

    def accept(self, invite_id: str, email: str) -> Invitation:
        invite = self._recipient_invite(invite_id, email)
        if invite.accepted:
            return invite
        invite.accepted = True
        updated = self.invites.update_invite(invite)
        logger.info("Invitation %s accepted by %s", invite_id, email)
        return updated

    def decline(self, invite_id: str, email: str) -> Dict:
        invite = self._recipient_invite(invite_id, email)
        return self.invites.delete_invite(invite.id, invite.rev)

    def revoke(self, invite_id: str, owner_email: str, playlist_id: Optional[str] = None) -> Dict:
        """Delete an invitation sent by ``owner_email``, optionally scoped to ``playlist_id``."""
        invite = self.invites.get_invitation_by_id(invite_id)
        if invite.from_email != owner_email:
            raise PlaylistAccessDenied(f"Invitation {invite_id} was not sent by {owner_email}")
        if playlist_id is not None and invite.playlist_id != playlist_id:
            raise PlaylistAccessDenied(f"Invitation {invite_id} does not belong to playlist {playlist_id}")
        return self.invites.delete_invite(invite.id, invite.rev)

    def shared_with(self, email: str) -> List[Playlist]:
        """Playlists other users shared with ``email`` through accepted invitations."""
        accepted = [invite for invite in self.invites.get_invitations_of_user(email) if invite.accepted]
        return self.playlists.get_playlists_by_ids(invite.playlist_id for invite in accepted)

    def delete_playlist(self, playlist: Playlist, email: str) -> None:
        """Delete a playlist and the invitations sent for it."""
        self.require_role(playlist, email, owner=True)
        for invite in self.invites.get_invites_of_playlist(email, playlist.id):
            self.invites.delete_invite(invite.id, invite.rev)
        self.playlists.delete_playlist(playlist.id, playlist.rev)

    def _recipient_invite(self, invite_id: str, email: str) -> Invitation:
        invite = self.invites.get_invitation_by_id(invite_id)
        if invite.to_email != email:
            raise PlaylistAccessDenied(f"Invitation {invite_id} is not addressed to {email}")
        return invite


__all__ = ["SharingService", "OWNER", "EDITOR", "VIEWER"]
