import os
import sys

import pytest

# Ensure project root is on sys.path so 'app', 'config', and 'spotie' import correctly
_TESTS_DIR = os.path.dirname(__file__)
_ROOT_DIR = os.path.abspath(os.path.join(_TESTS_DIR, os.pardir))
if _ROOT_DIR not in sys.path:
    sys.path.insert(0, _ROOT_DIR)

from spotie.database.couchdb import CouchDBClient
from spotie.domain.catalog import CatalogService
from spotie.domain.sharing import InviteRepository, PlaylistRepository, SharingService
from tests.support import factories as test_factories
from tests.support import stubs as test_stubs


@pytest.fixture
def spotify_stub():
    """Expose the spotipy stub so tests can customise payloads and failures."""
    return test_stubs.SpotipyStub()


@pytest.fixture
def couch_server():
    return test_stubs.FakeCouchServer()


@pytest.fixture
def couchdb(couch_server):
    client = CouchDBClient(couch_server.base_url, session=couch_server, timeout=5)
    client.ensure_database("invites")
    client.ensure_database("playlists")
    return client


@pytest.fixture
def invite_repository(couchdb):
    return InviteRepository(couchdb, "invites")


@pytest.fixture
def playlist_repository(couchdb):
    return PlaylistRepository(couchdb, "playlists")


@pytest.fixture
def sharing_service(invite_repository, playlist_repository):
    return SharingService(invites=invite_repository, playlists=playlist_repository)


@pytest.fixture
def catalog_service(spotify_stub):
    return CatalogService(spotify_client=spotify_stub, cache_ttl=300)


@pytest.fixture
def app(tmp_path, couchdb, catalog_service, sharing_service):
    import app as app_module

    application = app_module.create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{(tmp_path / 'test.sqlite').as_posix()}",
    })
    # Swap the real provider and document store for the in-memory doubles
    application.extensions['couchdb'] = couchdb
    application.extensions['catalog_service'] = catalog_service
    application.extensions['sharing_service'] = sharing_service
    application.extensions['settings'] = application.extensions['settings'].model_copy(
        update={"search_page_size": 10, "artist_albums_page_size": 5}
    )
    yield application


@pytest.fixture
def app_context(app):
    with app.app_context():
        yield app


@pytest.fixture
def db_session(app_context):
    from spotie.database.db_manager import db

    test_factories.set_session(db.session)
    try:
        yield db.session
    finally:
        db.session.rollback()
        db.session.remove()
        test_factories.reset_session()


@pytest.fixture
def factories(db_session):
    yield test_factories


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    """Create a committed user outside any request and return its email.

    The app context is popped again so that test client requests get a
    fresh ``g`` (Flask-Login caches the user there).
    """
    from spotie.database.db_manager import db

    def _make(**kwargs):
        with app.app_context():
            test_factories.set_session(db.session)
            try:
                return test_factories.UserFactory(**kwargs).email
            finally:
                test_factories.reset_session()
                db.session.remove()

    return _make


@pytest.fixture
def login(make_user):
    """Sign ``http_client`` in as a new user; returns the user's email."""

    def _login(http_client, email=None):
        email = make_user(email=email) if email else make_user()
        response = http_client.post(
            '/user/login',
            data={"email": email, "password": test_factories.DEFAULT_PASSWORD},
        )
        assert response.status_code == 302
        return email

    return _login
