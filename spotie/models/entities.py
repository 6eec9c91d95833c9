#!/usr/bin/env python
"""
Catalog entities consumed by the views and the JSON API.

Entities are produced by :mod:`spotie.domain.catalog.mapper` from provider
JSON. ``Collection`` carries one page of a larger, offset-addressed result
set together with the navigation facts the templates need.
"""

from __future__ import annotations

import math
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class Collection(BaseModel, Generic[T]):
    """One page of a larger result set.

    The constructor does not check the arithmetic: a zero ``limit`` makes
    the page computations raise ``ZeroDivisionError`` and the offset helpers
    are not clamped to the valid range.
    """

    model_config = ConfigDict(frozen=True)

    offset: int
    limit: int
    total: int
    items: List[T]

    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit)

    def current_page(self) -> int:
        # 1-indexed; offset 0 is page 1
        return self.offset // self.limit + 1

    def has_next(self) -> bool:
        return self.current_page() < self.total_pages()

    def has_previous(self) -> bool:
        return self.current_page() > 1

    def is_first(self) -> bool:
        return self.offset == 0

    def is_last(self) -> bool:
        return self.offset + len(self.items) == self.total

    def previous_page_offset(self) -> int:
        return self.offset - self.limit

    def next_page_offset(self) -> int:
        return self.offset + self.limit

    def first_page_offset(self) -> int:
        return 0

    def last_page_offset(self) -> int:
        return self.total - self.limit


def page_offset(page: int, limit: int) -> int:
    """Translate a 1-indexed page number into a provider offset."""
    return (max(1, page) - 1) * limit


class Track(BaseModel):
    id: str
    name: str
    disc_number: Optional[int] = None
    duration_ms: int
    preview_url: Optional[str] = None
    track_number: int
    uri: str
    # Only set when the track was fetched with its album context
    album: Optional[Album] = None

    @property
    def duration_label(self) -> str:
        seconds = self.duration_ms // 1000
        return f"{seconds // 60}:{seconds % 60:02d}"


class Album(BaseModel):
    id: str
    name: str
    uri: str
    image: Optional[str] = None
    type: str
    label: Optional[str] = None
    release_date: Optional[str] = None
    # None means the tracks were not fetched, an empty page means no tracks
    tracks: Optional[Collection[Track]] = None


class Artist(BaseModel):
    id: str
    name: str
    image: Optional[str] = None
    genres: List[str]
    popularity: int
    type: str
    uri: str
    followers: int
    albums: Optional[Collection[Album]] = None


Track.model_rebuild()
Album.model_rebuild()
Artist.model_rebuild()


__all__ = ["Collection", "Artist", "Album", "Track", "page_offset"]
