import os
import sys
import pytest

# Ensure the project root (containing config.py and memory_casino) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from memory_casino import create_app, db, socketio
from helpers import FakeClock, ordered_deck


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    STARTING_COINS = 1000
    DEFAULT_DIFFICULTY = 'medium'
    SESSION_SWEEP_SEC = 0
    LOCK_STRIPES = 8


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def flask_app(clock):
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import memory_casino.models  # noqa: F401
        db.create_all()
        service = application.extensions['memory_casino']
        service.clock = clock
        service.deck_factory = ordered_deck
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def service(flask_app):
    return flask_app.extensions['memory_casino']


@pytest.fixture()
def make_player(service):
    def _make(name='Alice', coins=1000, **fields):
        player = service.store.create(name, coins=coins)
        for key, value in fields.items():
            setattr(player, key, value)
        if fields:
            service.store.save(player)
        return player
    return _make


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
