"""Shared fixtures: application, client and a controllable clock"""
import pytest

from rotation_guard.app import create_app
from rotation_guard.extensions import db, guard
from rotation_guard.models.user import User
from rotation_guard.services.rotation_clock import RotationClock
from rotation_guard.services.timestamp_store import MemoryTimestampStore
from rotation_guard.utils.security import hash_password

STRONG_PASSWORD = 'Correct-Horse-Battery-9'
OTHER_STRONG_PASSWORD = 'Another-Strong-Passw0rd!'
INSTALL_TIME = 1000


class FakeTime:
    """Time source returning a settable unix timestamp"""

    def __init__(self, now=INSTALL_TIME):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def fake_time():
    return FakeTime()


@pytest.fixture
def memory_store():
    return MemoryTimestampStore()


@pytest.fixture
def clock(memory_store, fake_time):
    return RotationClock(memory_store, fake_time)


@pytest.fixture
def app(fake_time):
    app = create_app('testing', ROTATION_TIME_SOURCE=fake_time)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    """Create a user; changed_at stamps the rotation record directly"""
    def factory(username, password=STRONG_PASSWORD, admin=False, changed_at=None):
        with app.app_context():
            user = User(username=username, password_hash=hash_password(password), is_admin=admin)
            db.session.add(user)
            db.session.commit()
            if changed_at is not None:
                guard.clock.store.write_changed(user.id, changed_at)
            return user.id
    return factory


@pytest.fixture
def login(client):
    def do_login(username, password=STRONG_PASSWORD):
        return client.post('/auth/login', data={'username': username, 'password': password})
    return do_login
