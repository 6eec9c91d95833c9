#!/usr/bin/env python
"""
Pydantic models for the CouchDB documents owned by the sharing layer.

Field aliases follow the wire format stored in CouchDB (``toUser``,
``playlistId``, ``_rev``...) while the Python attributes use snake case.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _Document(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = Field(default=None, alias="_id")
    rev: Optional[str] = Field(default=None, alias="_rev")

    @classmethod
    def from_document(cls, doc: Dict[str, Any]):
        return cls.model_validate(doc)

    def to_document(self) -> Dict[str, Any]:
        """Body sent to the store; ``_id`` travels in the URL, ``_rev`` in the body."""
        body = self.model_dump(by_alias=True, exclude={"id", "rev"})
        if self.rev:
            body["_rev"] = self.rev
        return body


class Invitation(_Document):
    """Invitation for ``to_email`` to collaborate on a playlist."""

    to_email: str = Field(alias="toUser")
    from_email: str = Field(alias="fromUser")
    playlist_id: str = Field(alias="playlistId")
    accepted: bool = False
    writable: bool = Field(default=False, alias="write")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class Playlist(_Document):
    name: str
    owner: str
    tracks: List[str] = Field(default_factory=list)
    created_at: str = Field(default_factory=_now_iso, alias="createdAt")
    type: str = "playlist"

    def add_track(self, track_id: str) -> bool:
        """Append a track id; returns False when it is already present."""
        if track_id in self.tracks:
            return False
        self.tracks.append(track_id)
        return True

    def remove_track(self, track_id: str) -> bool:
        if track_id not in self.tracks:
            return False
        self.tracks.remove(track_id)
        return True


__all__ = ["Invitation", "Playlist"]
