from datetime import datetime, timedelta

import pytest

from app import create_app
from config import TestConfig
from models import db
from models.user import User


@pytest.fixture
def app():
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    """Insert a user directly and return its id."""
    def _make(username='alice', email='alice@x.com', password='pw123',
              is_verified=False, otp=None, otp_expires=None):
        with app.app_context():
            user = User(username=username, email=email, is_verified=is_verified)
            user.set_password(password)
            if otp is not None:
                user.set_otp(otp, otp_expires or datetime.utcnow() + timedelta(hours=1))
            user.save()
            return user.id
    return _make


def flashes(client):
    with client.session_transaction() as sess:
        return list(sess.get('_flashes', []))


def login(client, username='alice', password='pw123'):
    return client.post('/login', data={'username': username, 'password': password})
