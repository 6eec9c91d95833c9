import importlib
from datetime import timedelta

import pytest
from hypothesis import given, strategies as st


@pytest.mark.unit
def test_page_size_validators_clamp_and_default():
    from spotie.settings import AppSettings, MAX_PAGE_SIZE

    assert AppSettings(search_page_size=25).search_page_size == 25
    assert AppSettings(search_page_size=500).search_page_size == MAX_PAGE_SIZE
    assert AppSettings(search_page_size=0).search_page_size == 1
    assert AppSettings(search_page_size="junk").search_page_size == 10
    assert AppSettings(artist_albums_page_size=None).artist_albums_page_size == 5


@pytest.mark.unit
def test_couchdb_url_and_credentials():
    from spotie.settings import AppSettings

    settings = AppSettings(couchdb_url="http://couch:5984/", spotify_client_id="id")
    assert settings.couchdb_url == "http://couch:5984"
    assert settings.has_spotify_credentials is False
    assert AppSettings(spotify_client_id="id", spotify_client_secret="s").has_spotify_credentials is True


@pytest.mark.unit
@given(st.one_of(st.integers(min_value=-1000, max_value=1000), st.text(max_size=5), st.none()))
def test_cache_ttl_never_negative(value):
    from spotie.settings import AppSettings

    assert AppSettings(cache_ttl=value).cache_ttl >= 0


@pytest.mark.unit
def test_cache_maxsize_is_at_least_one():
    from spotie.settings import AppSettings

    assert AppSettings().cache_maxsize == 256
    assert AppSettings(cache_maxsize=64).cache_maxsize == 64
    assert AppSettings(cache_maxsize=0).cache_maxsize == 1
    assert AppSettings(cache_maxsize="junk").cache_maxsize == 256


@pytest.mark.unit
def test_overrides_win_over_config():
    from spotie.settings import load_app_settings

    settings = load_app_settings({"invites_db": "invites_test", "cache_ttl": 0})
    assert settings.invites_db == "invites_test"
    assert settings.cache_ttl == 0


@pytest.mark.unit
def test_env_precedence_for_core_fields(monkeypatch):
    monkeypatch.setenv("SPOTIPY_CLIENT_ID", "cid")
    monkeypatch.setenv("SPOTIPY_CLIENT_SECRET", "csec")
    monkeypatch.setenv("COUCHDB_URL", "http://db.internal:5984/")
    monkeypatch.setenv("COUCHDB_INVITES_DB", "inv")
    monkeypatch.setenv("SEARCH_PAGE_SIZE", "20")
    monkeypatch.setenv("CATALOG_CACHE_TTL_SECONDS", "not-a-number")
    monkeypatch.setenv("SESSION_LIFETIME_HOURS", "12")

    import config as _config
    importlib.reload(_config)
    import spotie.settings as settings
    importlib.reload(settings)
    try:
        s = settings.load_app_settings()
        assert s.spotify_client_id == _config.Config.SPOTIPY_CLIENT_ID == "cid"
        assert s.spotify_client_secret == "csec"
        assert s.couchdb_url == "http://db.internal:5984"
        assert s.invites_db == "inv"
        assert s.playlists_db == "playlists"
        assert s.search_page_size == 20
        assert s.cache_ttl == 300
        assert _config.Config.PERMANENT_SESSION_LIFETIME == timedelta(hours=12)
    finally:
        monkeypatch.undo()
        importlib.reload(_config)
        importlib.reload(settings)


@pytest.mark.unit
def test_session_cookie_defaults():
    from config import Config

    assert Config.SESSION_COOKIE_NAME == "spotie"
    assert Config.SESSION_COOKIE_HTTPONLY is True
    assert Config.REMEMBER_COOKIE_DURATION == Config.PERMANENT_SESSION_LIFETIME
