#!/usr/bin/env python
"""
Spotify Web API JSON -> catalog entity conversion utilities.

Every function is a pure projection of a provider payload. Required fields
are read with ``[]`` so that a malformed payload surfaces as ``KeyError``
at the caller; only images, tracks and an embedded album are optional.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from spotie.models.entities import Album, Artist, Collection, Track

# Spotify image sizes: 64px, 200px, 300px, 640px, 1000px
DEFAULT_IMAGE_PREFERENCE = (200, 300, 640, 64, 1000)

DEFAULT_ARTIST_IMAGE = "/img/defaultAvatar.svg"
DEFAULT_ALBUM_IMAGE = "/img/music_default.svg"


def select_image(
    images: Sequence[Dict[str, Any]],
    default: Optional[str] = None,
    preference: Sequence[int] = DEFAULT_IMAGE_PREFERENCE,
) -> Optional[str]:
    """Pick the URL of the image whose width comes first in ``preference``.

    Falls back to the first image when no preferred width is available and
    to ``default`` when there are no images at all.
    """
    if not images:
        return default

    for width in preference:
        for image in images:
            if image.get("width") == width:
                return image["url"]

    return images[0]["url"]


def map_artist(artist_json: Dict[str, Any]) -> Artist:
    """Map an artist object (without albums).

    The provider always sends ``images``, ``genres`` and ``followers`` for
    full and search artist objects; their absence raises here.
    """
    return Artist(
        id=artist_json["id"],
        name=artist_json["name"],
        image=select_image(artist_json["images"], DEFAULT_ARTIST_IMAGE),
        # copy so the entity never aliases the payload
        genres=list(artist_json["genres"]),
        popularity=artist_json["popularity"],
        type=artist_json["type"],
        uri=artist_json["uri"],
        followers=artist_json["followers"]["total"],
    )


def map_album(album_json: Dict[str, Any]) -> Album:
    """Map a full or simplified album object, with or without tracks."""
    return Album(
        id=album_json["id"],
        name=album_json["name"],
        uri=album_json["uri"],
        image=select_image(album_json.get("images") or [], DEFAULT_ALBUM_IMAGE),
        type=album_json["type"],
        label=album_json.get("label"),
        release_date=album_json.get("release_date"),
        tracks=map_tracks_to_collection(album_json.get("tracks")),
    )


def map_track(track_json: Dict[str, Any]) -> Track:
    album = None
    if track_json.get("album"):
        album = map_album(track_json["album"])

    disc_number = track_json.get("disc_number", track_json.get("disk_number"))
    return Track(
        id=track_json["id"],
        name=track_json["name"],
        disc_number=disc_number,
        duration_ms=track_json["duration_ms"],
        preview_url=track_json.get("preview_url"),
        track_number=track_json["track_number"],
        uri=track_json["uri"],
        album=album,
    )


def map_tracks_to_collection(tracks_json: Optional[Dict[str, Any]]) -> Optional[Collection[Track]]:
    """Map a paging object of tracks; ``None`` when the payload has no tracks."""
    if not tracks_json:
        return None

    return Collection[Track](
        offset=tracks_json["offset"],
        limit=tracks_json["limit"],
        total=tracks_json["total"],
        items=[map_track(item) for item in tracks_json["items"]],
    )


def map_tracks(tracks_json: Dict[str, Any]) -> List[Track]:
    """Map a several-tracks response, skipping ids the provider did not resolve."""
    return [map_track(item) for item in tracks_json["tracks"] if item]


def map_artists_to_collection(search_json: Dict[str, Any]) -> Collection[Artist]:
    """Map an artist search response (``{"artists": {paging}}``)."""
    page = search_json["artists"]
    return Collection[Artist](
        offset=page["offset"],
        limit=page["limit"],
        total=page["total"],
        items=[map_artist(item) for item in page["items"]],
    )


def map_albums_to_collection(albums_json: Dict[str, Any]) -> Collection[Album]:
    """Map a top-level album paging object (e.g. an artist's albums)."""
    return Collection[Album](
        offset=albums_json["offset"],
        limit=albums_json["limit"],
        total=albums_json["total"],
        items=[map_album(item) for item in albums_json["items"]],
    )


def map_artist_and_albums(artist_json: Dict[str, Any], albums_json: Dict[str, Any]) -> Artist:
    """Map an artist profile and its album page fetched by two separate calls."""
    artist = map_artist(artist_json)
    artist.albums = map_albums_to_collection(albums_json)
    return artist


__all__ = [
    "DEFAULT_IMAGE_PREFERENCE",
    "DEFAULT_ARTIST_IMAGE",
    "DEFAULT_ALBUM_IMAGE",
    "select_image",
    "map_artist",
    "map_album",
    "map_track",
    "map_tracks",
    "map_tracks_to_collection",
    "map_artists_to_collection",
    "map_albums_to_collection",
    "map_artist_and_albums",
]
