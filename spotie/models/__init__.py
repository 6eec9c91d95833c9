"""Catalog entities and document models."""

from .entities import Album, Artist, Collection, Track, page_offset
from .documents import Invitation, Playlist

__all__ = [
    "Album",
    "Artist",
    "Collection",
    "Track",
    "page_offset",
    "Invitation",
    "Playlist",
]
