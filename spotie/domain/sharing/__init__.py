"""Sharing domain (invitations and collaborative playlists)."""

from .invites_repository import InviteRepository
from .playlists_repository import PlaylistRepository
from .sharing_service import EDITOR, OWNER, VIEWER, SharingService

__all__ = [
    "InviteRepository",
    "PlaylistRepository",
    "SharingService",
    "OWNER",
    "EDITOR",
    "VIEWER",
]
