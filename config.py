#!/usr/bin/env python
# config.py
import os
from datetime import timedelta
from typing import List

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# This assumes config.py is at the root of your project
basedir = os.path.abspath(os.path.dirname(__file__))


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _get_csv_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name)
    source = raw if raw is not None else default
    return [token.strip() for token in source.split(",") if token and token.strip()]


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'spotie app secret'

    # Sessions: cookie named after the app, valid for 24 hours
    SESSION_COOKIE_NAME = os.getenv('SESSION_COOKIE_NAME', 'spotie')
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = timedelta(hours=_get_int('SESSION_LIFETIME_HOURS', 24))
    REMEMBER_COOKIE_DURATION = PERMANENT_SESSION_LIFETIME

    # Accounts database (users only; invitations and playlists live in CouchDB)
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'storage', 'spotie.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Spotify API
    SPOTIPY_CLIENT_ID = os.environ.get('SPOTIPY_CLIENT_ID')
    SPOTIPY_CLIENT_SECRET = os.environ.get('SPOTIPY_CLIENT_SECRET')
    SPOTIFY_REQUEST_TIMEOUT_SECONDS = _get_int('SPOTIFY_REQUEST_TIMEOUT_SECONDS', 10)

    # CouchDB document store
    COUCHDB_URL = os.getenv('COUCHDB_URL', 'http://localhost:5984')
    COUCHDB_INVITES_DB = os.getenv('COUCHDB_INVITES_DB', 'invites')
    COUCHDB_PLAYLISTS_DB = os.getenv('COUCHDB_PLAYLISTS_DB', 'playlists')
    COUCHDB_TIMEOUT_SECONDS = _get_int('COUCHDB_TIMEOUT_SECONDS', 10)

    # Catalog browsing
    # Memoization window for the artist page (artist + albums); 0 disables it
    CATALOG_CACHE_TTL_SECONDS = _get_int('CATALOG_CACHE_TTL_SECONDS', 300)
    # Most artist pages kept at once; least recently viewed pages are dropped first
    CATALOG_CACHE_MAXSIZE = max(1, _get_int('CATALOG_CACHE_MAXSIZE', 256))
    SEARCH_PAGE_SIZE = _get_int('SEARCH_PAGE_SIZE', 10)
    ARTIST_ALBUMS_PAGE_SIZE = _get_int('ARTIST_ALBUMS_PAGE_SIZE', 5)

    # HTTP surface
    CORS_ALLOWED_ORIGINS = _get_csv_list('CORS_ALLOWED_ORIGINS', 'http://localhost:3000')
    CONTENT_SECURITY_POLICY = os.getenv(
        'CONTENT_SECURITY_POLICY',
        "default-src 'self'; img-src 'self' https://i.scdn.co data:; media-src https://p.scdn.co",
    )

    # Runtime behavior
    # Turn Flask debug on/off from env; default off to avoid noisy console
    DEBUG = _get_bool('DEBUG', False)
    # Control console logging; when disabled, logs go only to file
    ENABLE_CONSOLE_LOGS = _get_bool('ENABLE_CONSOLE_LOGS', False)
