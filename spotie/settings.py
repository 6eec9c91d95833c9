#!/usr/bin/env python
"""
Centralized configuration schema for the catalog and document-store layers.

Merges defaults from config.Config with runtime overrides and normalizes
values that the rest of the application relies on (page sizes, URLs).
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from config import Config

# Spotify API caps page sizes at 50
MAX_PAGE_SIZE = 50


def _coerce_page_size(value: object, default: int) -> int:
    try:
        size = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return max(1, min(size, MAX_PAGE_SIZE))


class AppSettings(BaseModel):
    """Application-wide settings for catalog browsing and sharing."""

    model_config = ConfigDict(extra="ignore")

    # Spotify credentials
    spotify_client_id: Optional[str] = None
    spotify_client_secret: Optional[str] = None
    spotify_timeout: int = 10

    # CouchDB
    couchdb_url: str = "http://localhost:5984"
    invites_db: str = "invites"
    playlists_db: str = "playlists"
    couchdb_timeout: int = 10

    # Catalog browsing
    cache_ttl: int = 300
    cache_maxsize: int = 256
    search_page_size: int = 10
    artist_albums_page_size: int = 5

    @field_validator("couchdb_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("search_page_size", mode="before")
    @classmethod
    def _coerce_search_page_size(cls, value: object) -> int:
        return _coerce_page_size(value, 10)

    @field_validator("artist_albums_page_size", mode="before")
    @classmethod
    def _coerce_albums_page_size(cls, value: object) -> int:
        return _coerce_page_size(value, 5)

    @field_validator("cache_maxsize", mode="before")
    @classmethod
    def _positive_maxsize(cls, value: object) -> int:
        try:
            return max(1, int(value))  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 256

    @field_validator("cache_ttl", "spotify_timeout", "couchdb_timeout", mode="before")
    @classmethod
    def _non_negative(cls, value: object) -> int:
        try:
            return max(0, int(value))  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 0

    @property
    def has_spotify_credentials(self) -> bool:
        return bool(self.spotify_client_id and self.spotify_client_secret)


def load_app_settings(overrides: Optional[Dict[str, Any]] = None) -> AppSettings:
    """Load settings merging config defaults with optional runtime overrides."""
    data: Dict[str, Any] = {
        "spotify_client_id": Config.SPOTIPY_CLIENT_ID,
        "spotify_client_secret": Config.SPOTIPY_CLIENT_SECRET,
        "spotify_timeout": Config.SPOTIFY_REQUEST_TIMEOUT_SECONDS,
        "couchdb_url": Config.COUCHDB_URL,
        "invites_db": Config.COUCHDB_INVITES_DB,
        "playlists_db": Config.COUCHDB_PLAYLISTS_DB,
        "couchdb_timeout": Config.COUCHDB_TIMEOUT_SECONDS,
        "cache_ttl": Config.CATALOG_CACHE_TTL_SECONDS,
        "cache_maxsize": Config.CATALOG_CACHE_MAXSIZE,
        "search_page_size": Config.SEARCH_PAGE_SIZE,
        "artist_albums_page_size": Config.ARTIST_ALBUMS_PAGE_SIZE,
    }
    if overrides:
        data.update(overrides)
    return AppSettings.model_validate(data)


__all__ = [
    "AppSettings",
    "MAX_PAGE_SIZE",
    "load_app_settings",
]
