# spotie/domain/catalog/catalog_service.py
import logging
from typing import Any, Callable, List, Optional, Sequence

import requests
import spotipy
from spotipy.exceptions import SpotifyException
from spotipy.oauth2 import SpotifyClientCredentials

from spotie.domain.catalog import mapper
from spotie.exceptions import CatalogError
from spotie.models.entities import Album, Artist, Collection, Track, page_offset
from spotie.observability.metrics import record_catalog_call
from spotie.utils.cache import MemoCache

logger = logging.getLogger(__name__)

# Maximum ids accepted by the several-tracks endpoint
TRACKS_BATCH_SIZE = 50


class CatalogService:
    """Data-access layer between the controllers and the Spotify Web API."""

    def __init__(self, spotify_client_id=None,
                 spotify_client_secret=None,
                 spotify_client=None,
                 cache_ttl: float = 300,
                 cache_maxsize: int = 256,
                 requests_timeout: int = 10):
        self._spotify_client_id = spotify_client_id
        self._spotify_client_secret = spotify_client_secret
        self._requests_timeout = requests_timeout

        self.sp = spotify_client
        if not self.sp:
            self._initialize_spotify_client()
        else:
            logger.info("Spotipy client injected into CatalogService.")

        self._cache = MemoCache(ttl=cache_ttl, maxsize=cache_maxsize)

    def _initialize_spotify_client(self) -> bool:
        if not self._spotify_client_id or not self._spotify_client_secret:
            logger.warning("Spotify client ID and secret not configured. Catalog browsing is unavailable.")
            self.sp = None
            return False
        self.sp = spotipy.Spotify(
            auth_manager=SpotifyClientCredentials(
                client_id=self._spotify_client_id,
                client_secret=self._spotify_client_secret,
            ),
            requests_timeout=self._requests_timeout,
        )
        logger.info("Spotipy client initialized successfully in CatalogService.")
        return True

    @property
    def ready(self) -> bool:
        return self.sp is not None

    def _call_spotify(self, action: str, call: Callable[[], Any]) -> Any:
        if not self.sp:
            record_catalog_call(action, "unconfigured")
            raise CatalogError(f"Spotify client not configured; cannot {action}.")
        try:
            result = call()
        except SpotifyException as exc:
            record_catalog_call(action, "error")
            logger.error("Spotify API call failed during %s: %s", action, exc)
            raise CatalogError(f"Spotify API call failed during {action}: {exc.msg}", status=exc.http_status) from exc
        except requests.RequestException as exc:
            record_catalog_call(action, "error")
            logger.error("Spotify API unreachable during %s: %s", action, exc)
            raise CatalogError(f"Spotify API unreachable during {action}") from exc
        record_catalog_call(action, "ok")
        return result

    def search_artists(self, query: str, page: int = 1, limit: int = 10) -> Collection[Artist]:
        offset = page_offset(page, limit)
        payload = self._call_spotify(
            "search_artists",
            lambda: self.sp.search(q=query, type="artist", limit=limit, offset=offset),
        )
        collection = mapper.map_artists_to_collection(payload)
        logger.info("Artist search %r returned %s of %s results", query, len(collection.items), collection.total)
        return collection

    def artist_with_albums(self, artist_id: str, page: int = 1, limit: int = 5) -> Artist:
        """Artist profile with one page of albums, memoized per page.

        Each call returns its own copy; the memoized artist is never handed out.
        """
        def _load() -> Artist:
            offset = page_offset(page, limit)
            artist_json = self._call_spotify("artist", lambda: self.sp.artist(artist_id))
            albums_json = self._call_spotify(
                "artist_albums",
                lambda: self.sp.artist_albums(artist_id, limit=limit, offset=offset),
            )
            return mapper.map_artist_and_albums(artist_json, albums_json)

        artist = self._cache.get_or_compute(("artist_with_albums", artist_id, page, limit), _load)
        return artist.model_copy(deep=True)

    def album(self, album_id: str) -> Album:
        """Album with the first page of its tracks."""
        payload = self._call_spotify("album", lambda: self.sp.album(album_id))
        return mapper.map_album(payload)

    def track(self, track_id: str) -> Track:
        payload = self._call_spotify("track", lambda: self.sp.track(track_id))
        return mapper.map_track(payload)

    def tracks(self, track_ids: Sequence[str]) -> List[Track]:
        """Resolve several track ids, preserving their order."""
        resolved: List[Track] = []
        ids = list(track_ids)
        for start in range(0, len(ids), TRACKS_BATCH_SIZE):
            batch = ids[start:start + TRACKS_BATCH_SIZE]
            payload = self._call_spotify("tracks", lambda batch=batch: self.sp.tracks(batch))
            resolved.extend(mapper.map_tracks(payload))
        return resolved

    def clear_cache(self) -> None:
        self._cache.clear()


def build_catalog_service(settings, spotify_client: Optional[Any] = None) -> CatalogService:
    """Create the service from :class:`spotie.settings.AppSettings`."""
    return CatalogService(
        spotify_client_id=settings.spotify_client_id,
        spotify_client_secret=settings.spotify_client_secret,
        spotify_client=spotify_client,
        cache_ttl=settings.cache_ttl,
        cache_maxsize=settings.cache_maxsize,
        requests_timeout=settings.spotify_timeout,
    )


__all__ = ["CatalogService", "build_catalog_service", "TRACKS_BATCH_SIZE"]
