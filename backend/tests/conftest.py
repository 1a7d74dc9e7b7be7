import os
import sys
import httpx
import pytest

# Ensure the backend root (containing the `leaderboard` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from leaderboard import create_app, db, socketio

GOOD_TOKEN = 'asdf'
BAD_TOKEN = 'asdf1'
GOOD_SCORE = 1337
GOOD_COLOR = '#123456'
REGISTRATION_URL = 'https://registration.test/gewinnspiel/'

TOKEN_PAGE = """<html><body><form method="post">
<input type="hidden" name="zz_id" value="a1b2c3d4">
<input type="text" name="persons[0][first_name]">
</form></body></html>"""


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SCORE_SUBMIT_TOKEN = GOOD_TOKEN
    REGISTRATION_URL = REGISTRATION_URL
    REGISTRATION_EVENT_ID = 4062
    REGISTRATION_TIMEOUT_SEC = 1.0
    REGISTRATION_TRANSPORT = None
    EXPOSE_ERROR_DETAILS = False
    ALLOWED_ORIGINS = ['http://localhost:3000']


def _make_app(config_class):
    application = create_app(config_class)
    with application.app_context():
        # Ensure models are imported so tables are created
        import leaderboard.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def flask_app():
    yield from _make_app(TestConfig)


@pytest.fixture()
def file_app(tmp_path):
    """App on a file-backed SQLite database, for tests that use threads."""
    config_class = type('FileTestConfig', (TestConfig,), {
        'SQLALCHEMY_DATABASE_URI': f"sqlite:///{tmp_path / 'race.db'}",
    })
    yield from _make_app(config_class)


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app, client):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=client,
        namespace='/ws'
    )
    yield test_client
    if test_client.is_connected('/ws'):
        test_client.disconnect(namespace='/ws')


def post_score(client, score=GOOD_SCORE, color=GOOD_COLOR, token=GOOD_TOKEN):
    headers = {'Authorization': token} if token is not None else {}
    return client.post('/backend/submit_score', json={'score': score, 'color': color}, headers=headers)


@pytest.fixture()
def submit_score(client):
    def _submit(score=GOOD_SCORE, color=GOOD_COLOR):
        res = post_score(client, score=score, color=color)
        assert res.status_code == 200
        return res.get_json()['id']
    return _submit


class FakeRegistrationSite:
    """Stands in for the third-party registration form."""

    def __init__(self, page=TOKEN_PAGE, post_status=200, post_body='<p>Danke!</p>'):
        self.page = page
        self.post_status = post_status
        self.post_body = post_body
        self.get_error = None
        self.post_error = None
        self.requests = []

    @property
    def posts(self):
        return [r for r in self.requests if r.method == 'POST']

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == 'GET':
            if self.get_error is not None:
                raise self.get_error(f"GET {request.url} failed", request=request)
            return httpx.Response(200, text=self.page)
        if self.post_error is not None:
            raise self.post_error(f"POST {request.url} failed", request=request)
        return httpx.Response(self.post_status, text=self.post_body)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture()
def registration_site(flask_app):
    site = FakeRegistrationSite()
    flask_app.config['REGISTRATION_TRANSPORT'] = site.transport()
    return site
