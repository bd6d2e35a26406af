import os

# Must be set before the laundry package reads its configuration
os.environ["ENVIRONMENT"] = "test"
os.environ["JWT_SECRET"] = "test-secret-key"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["STATIC_OTP"] = ""
os.environ["DB_LOG_SLOW_QUERIES"] = "false"
os.environ["TWILIO_ACCOUNT_SID"] = ""

import pytest
from fastapi.testclient import TestClient

from laundry.main import create_app
from laundry.models import Admin, User
from laundry.security_utils import create_access_token, hash_password

ADMIN_PASSWORD = "admin-password"


@pytest.fixture
def app():
    return create_app("sqlite://", rate_limit_enabled=False)


@pytest.fixture
def client(app):
    # Entering the context runs the lifespan, which creates the tables
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(app, client):
    session = app.state.session_factory()
    yield session
    session.close()


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_user(db):
    def _make_user(phone_number="9876543210", **fields):
        user = User(phone_number=phone_number, is_verified=True, **fields)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def user(make_user):
    return make_user(name="Asha", address="12 MG Road")


@pytest.fixture
def user_headers(user):
    return auth_header(create_access_token(user.id))


@pytest.fixture
def admin(db):
    admin = Admin(email="admin@laundry.com", password_hash=hash_password(ADMIN_PASSWORD), name="Admin User")
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin


@pytest.fixture
def admin_headers(admin):
    return auth_header(create_access_token(admin.id))
