import pytest

from tests.support.factories import DEFAULT_PASSWORD


@pytest.mark.unit
def test_register_creates_account_and_signs_in(app, client):
    r = client.post('/user/register', data={"email": "New@Example.com", "password": "longenough"})
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/")

    r = client.get('/')
    assert b'new@example.com' in r.data

    from spotie.database.db_manager import User
    with app.app_context():
        assert User.query.filter_by(email="new@example.com").count() == 1


@pytest.mark.unit
@pytest.mark.parametrize("data", [
    {"email": "not-an-email", "password": "longenough"},
    {"email": "ok@example.com", "password": "short"},
    {},
])
def test_register_validation_errors(client, data):
    r = client.post('/user/register', data=data)
    assert r.status_code == 400


@pytest.mark.unit
def test_register_duplicate_email(client, make_user):
    make_user(email="taken@example.com")
    r = client.post('/user/register', data={"email": "taken@example.com", "password": "longenough"})
    assert r.status_code == 409
    assert b'already exists' in r.data


@pytest.mark.unit
def test_login_and_logout(client, make_user):
    email = make_user()
    r = client.post('/user/login', data={"email": email, "password": DEFAULT_PASSWORD})
    assert r.status_code == 302
    assert email.encode() in client.get('/').data

    r = client.post('/user/logout')
    assert r.status_code == 302
    assert email.encode() not in client.get('/').data


@pytest.mark.unit
def test_login_sets_named_session_cookie(client, make_user):
    email = make_user()
    r = client.post('/user/login', data={"email": email, "password": DEFAULT_PASSWORD})
    cookies = r.headers.getlist("Set-Cookie")
    assert any(cookie.startswith("spotie=") for cookie in cookies)


@pytest.mark.unit
def test_login_rejects_bad_credentials(client, make_user):
    email = make_user()
    assert client.post('/user/login', data={"email": email, "password": "wrong"}).status_code == 401
    assert client.post('/user/login', data={"email": "", "password": ""}).status_code == 400


@pytest.mark.unit
def test_login_rejects_disabled_account(client, make_user):
    email = make_user(is_active=False)
    r = client.post('/user/login', data={"email": email, "password": DEFAULT_PASSWORD})
    assert r.status_code == 403


@pytest.mark.unit
def test_login_follows_only_local_next(client, make_user):
    email = make_user()
    r = client.post('/user/login', data={"email": email, "password": DEFAULT_PASSWORD, "next": "/playlists"})
    assert r.headers["Location"].endswith("/playlists")

    client.post('/user/logout')
    r = client.post(
        '/user/login',
        data={"email": email, "password": DEFAULT_PASSWORD, "next": "https://evil.example.com/"},
    )
    assert "evil" not in r.headers["Location"]


@pytest.mark.unit
def test_protected_pages_redirect_to_login(client):
    r = client.get('/playlists')
    assert r.status_code == 302
    assert '/user/login' in r.headers["Location"]
    assert 'next=' in r.headers["Location"]
